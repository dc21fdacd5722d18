"""Local RAG console: pgai + Ollama + Tesseract OCR."""

__version__ = "0.1.0"
