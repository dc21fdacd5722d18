import os
from dataclasses import dataclass


@dataclass
class Settings:
	pg_host: str = os.getenv("PGHOST", "localhost")
	pg_port: int = int(os.getenv("PGPORT", "5432"))
	pg_db: str = os.getenv("PGDATABASE", "postgres")
	pg_user: str = os.getenv("PGUSER", "postgres")
	pg_password: str = os.getenv("PGPASSWORD", "1234")


	# Ollama as seen by the Postgres server, not by this process.
	# Both in docker on the same network: http://ollama:11434, local: http://localhost:11434
	ollama_host: str = os.getenv("OLLAMA_HOST", "http://ollama:11434")
	embed_model: str = os.getenv("OLLAMA_EMBED_MODEL", "nomic-embed-text")
	generate_model: str = os.getenv("OLLAMA_GENERATE_MODEL", "llama3.2")
	embedding_dim: int = int(os.getenv("EMBEDDING_DIM", "768"))


	top_k: int = int(os.getenv("RAG_TOP_K", "3"))
	query: str = os.getenv("RAG_QUERY", "Tell me about gates in South Korea.")
	source: str = os.getenv("RAG_SOURCE", "sample")


	images_dir: str = os.getenv("RAG_IMAGES_DIR", "images")
	inference_dir: str = os.getenv("RAG_INFERENCE_DIR", "inference")
	ocr_languages: str = os.getenv("OCR_LANGUAGES", "eng")


	# seconds
	extension_timeout: int = int(os.getenv("EXTENSION_TIMEOUT", "300"))
	embed_timeout: int = int(os.getenv("EMBED_TIMEOUT", "300"))
	generate_timeout: int = int(os.getenv("GENERATE_TIMEOUT", "600"))


	log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
