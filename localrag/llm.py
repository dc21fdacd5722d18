import logging
from dataclasses import dataclass
from typing import Optional
import orjson
from .db import set_timeout
from .settings import Settings

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = (
    "Summarize the following text extracted by OCR from an image in 2-3 "
    "factual sentences. Keep names, places and numbers. Answer with the "
    "summary only."
)


@dataclass
class GenerationResult:
    text: str
    raw: str
    parsed: bool
    reason: Optional[str] = None  # "no-response-field" | "not-json"


def build_prompt(query: str, context: str) -> str:
    return f"Query: {query}\nContext: {context}"


def generate(conn, prompt: str, settings: Settings) -> Optional[str]:
    """Run ai.ollama_generate inside Postgres and return the JSON envelope as text.

    The result is cast to text so the envelope is parsed here, not by the
    driver's jsonb loader.
    """
    set_timeout(conn, settings.generate_timeout)
    try:
        row = conn.execute(
            "SELECT ai.ollama_generate(%s, %s, host => %s)::text;",
            (settings.generate_model, prompt, settings.ollama_host)
        ).fetchone()
    finally:
        set_timeout(conn, 0)
    if not row or row[0] is None:
        return None
    return row[0]


# raw = '{"model": "llama3.2", "response": "Gwanghwamun is ...", "done": true}'
def parse_generation(raw: str) -> GenerationResult:
    try:
        envelope = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return GenerationResult(text=raw, raw=raw, parsed=False, reason="not-json")
    # null or non-string "response" counts as missing
    if isinstance(envelope, dict) and isinstance(envelope.get("response"), str):
        return GenerationResult(text=envelope["response"], raw=raw, parsed=True)
    return GenerationResult(text=raw, raw=raw, parsed=False, reason="no-response-field")


def summarize(conn, text: str, settings: Settings) -> str:
    """Condense OCR output before it is embedded. Falls back to the OCR text."""
    raw = generate(conn, f"{SUMMARY_INSTRUCTION}\n\n{text}", settings)
    if raw is None:
        logger.warning("Empty summary payload, keeping OCR text")
        return text
    result = parse_generation(raw)
    if not result.parsed or not result.text.strip():
        logger.warning(f"Unusable summary ({result.reason or 'empty'}), keeping OCR text")
        return text
    return result.text.strip()
