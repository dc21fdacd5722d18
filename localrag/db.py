# main.py: bootstrap the extension & schema, then ingest -> retrieve -> generate.

# ingest.py: insert documents with embeddings computed by ai.ollama_embed.

# retrieval.py: cosine distance search (pgvector `<=>`).


import logging
from contextlib import contextmanager
import psycopg
from psycopg import errors
from .settings import settings


logger = logging.getLogger(__name__)

DSN = f"host={settings.pg_host} port={settings.pg_port} dbname={settings.pg_db} user={settings.pg_user} password={settings.pg_password}"

EXTENSION = "ai"


@contextmanager
def get_conn(dsn: str = DSN):
    # autocommit: every step is its own statement, nothing to roll back
    with psycopg.connect(dsn, autocommit=True) as conn:
        yield conn


def set_timeout(conn, seconds: int):
    # 0 disables the timeout
    conn.execute("SELECT set_config('statement_timeout', %s, false)",
                 (str(int(seconds) * 1000),))


def install_extension(conn, timeout: int):
    set_timeout(conn, timeout)
    try:
        conn.execute(f'CREATE EXTENSION IF NOT EXISTS "{EXTENSION}" CASCADE;')
    except errors.QueryCanceled as e:
        logger.error(f"CREATE EXTENSION {EXTENSION} exceeded {timeout}s")
        raise RuntimeError(
            f"Timed out installing extension '{EXTENSION}'") from e
    finally:
        set_timeout(conn, 0)


def function_exists(conn, name: str) -> bool:
    row = conn.execute(
        "SELECT count(*) FROM pg_proc WHERE proname = %s;", (name,)).fetchone()
    return bool(row and row[0])


def ensure_documents_table(conn, dim: int):
    # dim comes from settings, not user input
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS documents (
            id SERIAL PRIMARY KEY,
            title TEXT,
            content TEXT,
            embedding VECTOR({int(dim)})
        );
        """
    )


def truncate_documents(conn):
    conn.execute("TRUNCATE TABLE documents;")


def count_documents(conn) -> int:
    row = conn.execute("SELECT count(*) FROM documents;").fetchone()
    return int(row[0]) if row else 0
