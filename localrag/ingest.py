import logging
import pathlib
from typing import List, Optional, Union
from .db import set_timeout, truncate_documents
from .documents import Document
from .llm import summarize
from .ocr_processor import OCRProcessor
from .settings import Settings

logger = logging.getLogger(__name__)


def insert_document(conn, doc: Document, settings: Settings):
    conn.execute(
        """
            INSERT INTO documents (title, content, embedding)
            VALUES (%s, %s, ai.ollama_embed(%s, %s, host => %s))
            """,
        (doc.title, doc.content, settings.embed_model,
         doc.embed_text, settings.ollama_host)
    )


def ingest_documents(conn, docs: List[Document], settings: Settings) -> int:
    # fresh table on every run
    truncate_documents(conn)
    # first call may wait for Ollama to pull/load the model
    set_timeout(conn, settings.embed_timeout)
    try:
        for doc in docs:
            insert_document(conn, doc, settings)
            print(f"   Inserted: {doc.title}")
    finally:
        set_timeout(conn, 0)
    logger.info(f"Ingested {len(docs)} documents")
    return len(docs)


# images/gate.png -> Document(title="gate", content="<summary of the OCR text>")
def documents_from_images(conn, folder: Union[str, pathlib.Path], settings: Settings,
                          processor: Optional[OCRProcessor] = None) -> List[Document]:
    processor = processor or OCRProcessor(
        settings.ocr_languages, settings.inference_dir)
    docs = []
    for path, text in processor.extract_folder(folder):
        print(f"   OCR: {path.name} ({len(text)} chars), summarizing...")
        docs.append(Document(title=path.stem,
                             content=summarize(conn, text, settings)))
    return docs
