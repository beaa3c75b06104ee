from pydantic_settings import BaseSettings

REQUIRED_CREDENTIALS = (
    "HUGGINGFACE_API_KEY",
    "GEMINI_API_KEY",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
)


class Settings(BaseSettings):
    APP_NAME: str = "rag-chat"
    ENV: str = "dev"

    # upstream credentials; checked per request, not at import
    HUGGINGFACE_API_KEY: str | None = None
    GEMINI_API_KEY: str | None = None
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    HF_INFERENCE_URL: str = "https://api-inference.huggingface.co/models"
    EMBEDDING_MODEL: str = "BAAI/bge-small-en-v1.5"

    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.0-flash-exp"
    TEMPERATURE: float = 0.2

    SUPABASE_TABLE: str = "documents"
    SUPABASE_MATCH_FUNCTION: str = "match_documents"
    SOURCE_FILTER: str = "../dataset/human-nutrition-text.pdf"
    MATCH_COUNT: int = 12
    SIMILARITY_THRESHOLD: float = 0.3

    UPSTREAM_TIMEOUT_SECONDS: float = 30.0
    API_BEARER_TOKEN: str | None = None

    # ingestion
    CHUNK_TOKENS: int = 450
    CHUNK_OVERLAP: int = 80
    EMBED_BATCH_SIZE: int = 32

    # chat UI -> backend
    CHAT_API_URL: str = "http://localhost:8000"
    CHAT_API_KEY: str | None = None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def missing_credentials(self) -> list[str]:
        return [name for name in REQUIRED_CREDENTIALS if not getattr(self, name)]


settings = Settings()
