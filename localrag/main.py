import argparse
import dataclasses
import logging
import sys
import traceback
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from .db import (count_documents, ensure_documents_table, function_exists,
                 get_conn, install_extension)
from .documents import SAMPLE_DOCUMENTS
from .ingest import documents_from_images, ingest_documents
from .llm import GenerationResult, build_prompt, generate, parse_generation
from .ocr_processor import OCRProcessor
from .retrieval import build_context, search
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

RULE = "-" * 50

SOURCES = ("sample", "images")


@dataclass
class PipelineResult:
    completed: bool = False
    inserted: int = 0
    hits: List[Dict] = field(default_factory=list)
    generation: Optional[GenerationResult] = None


def run_pipeline(conn, settings: Settings, processor: Optional[OCRProcessor] = None) -> PipelineResult:
    if settings.source not in SOURCES:
        raise ValueError(f"Unknown document source '{settings.source}', expected one of {SOURCES}")
    result = PipelineResult()

    # 1. Install extension
    print("\n[1/6] Installing pgai extension...")
    install_extension(conn, settings.extension_timeout)

    # 2. Capability check
    print("\n[2/6] Checking ollama_embed function...")
    if not function_exists(conn, "ollama_embed"):
        print("   ❌ Function 'ollama_embed' does NOT exist.")
        logger.error("ollama_embed missing, stopping")
        return result
    print("   ✅ Function 'ollama_embed' exists.")

    # 3. Table
    print("\n[3/6] Creating table 'documents'...")
    ensure_documents_table(conn, settings.embedding_dim)

    # 4. Ingest
    if settings.source == "images":
        print(f"\n[4/6] Reading images from '{settings.images_dir}' (OCR + summary via Ollama)...")
        docs = documents_from_images(conn, settings.images_dir, settings, processor)
        print(f"   ✅ {len(docs)} images with text")
    elif settings.source == "sample":
        docs = SAMPLE_DOCUMENTS
        print("\n[4/6] Inserting dummy data (Generating Embeddings via Ollama)...")
    result.inserted = ingest_documents(conn, docs, settings)
    logger.debug(f"documents table holds {count_documents(conn)} rows")

    # 5. Retrieval
    print("\n[5/6] RAG Retrieval...")
    print(f"   Query: \"{settings.query}\"")
    result.hits = search(conn, settings.query, settings)
    context = build_context(result.hits)
    print(f"   ✅ Context Retrieved ({len(result.hits)} docs)")

    # 6. Generation
    print("\n[6/6] Generating LLM Response...")
    raw = generate(conn, build_prompt(settings.query, context), settings)
    if raw is None:
        print("\n⚠ Empty response from ai.ollama_generate")
    else:
        result.generation = parse_generation(raw)
        if result.generation.parsed:
            print("\n🤖 LLM Response:")
            print(RULE)
            print(result.generation.text)
            print(RULE)
        elif result.generation.reason == "not-json":
            print(f"\nRaw Response (Not JSON): {raw}")
        else:
            print(f"\nRaw Response (No 'response' field): {raw}")

    result.completed = True
    return result


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Local RAG demo on Postgres (pgai) + Ollama")
    parser.add_argument("--source", choices=SOURCES,
                        default=default_settings.source,
                        help="Ingest the built-in sample documents or OCR the images folder")
    parser.add_argument("--images", default=default_settings.images_dir,
                        help="Folder with .jpg/.png/.bmp files")
    args = parser.parse_args(argv)
    # defaults from RAG_SOURCE skip the choices check
    if args.source not in SOURCES:
        parser.error(f"invalid RAG_SOURCE '{args.source}' (choose from {', '.join(SOURCES)})")

    cfg = dataclasses.replace(default_settings, source=args.source, images_dir=args.images)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("🚀 Starting Local RAG Console App (Python)...")
    try:
        with get_conn() as conn:
            run_pipeline(conn, cfg)
    except Exception as e:
        logger.error(f"Run failed: {e}")
        print(f"\n❌ Error: {e}")
        print("Stack Trace: " + traceback.format_exc())
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
