from typing import Dict, List, Optional
from .db import set_timeout
from .settings import Settings

# Cosine distance operator `<=>` in pgvector; the query is embedded in the same
# statement so no vector ever travels to the client.
SEARCH_SQL = """
    WITH query_vec AS (
        SELECT ai.ollama_embed(%(model)s, %(query)s, host => %(host)s) AS embedding
    )
    SELECT title, content, documents.embedding <=> query_vec.embedding AS distance
    FROM documents, query_vec
    ORDER BY distance
    LIMIT %(limit)s;
"""


def search(conn, query: str, settings: Settings, k: Optional[int] = None) -> List[Dict]:
    k = settings.top_k if k is None else k
    set_timeout(conn, settings.embed_timeout)
    try:
        rows = conn.execute(SEARCH_SQL, {
            "model": settings.embed_model,
            "query": query,
            "host": settings.ollama_host,
            "limit": k,
        }).fetchall()
    finally:
        set_timeout(conn, 0)
    return [{"title": r[0], "content": r[1], "distance": float(r[2])} for r in rows]


# hits = [{"title": "Gwanghwamun Gate", "content": "Gwanghwamun is ...", "distance": 0.21}, ...]
# -> "Title: Gwanghwamun Gate\nContent: Gwanghwamun is ...\n\nTitle: ..."
def build_context(hits: List[Dict]) -> str:
    return "\n\n".join(f"Title: {h['title']}\nContent: {h['content']}" for h in hits)
