# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=20, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # OpenAI
    OPENAI_API_KEY: str = Field(..., validation_alias="OPENAI_API_KEY")
    OPENAI_API_URL: str = Field(
        default="https://api.openai.com/v1", validation_alias="OPENAI_API_URL"
    )
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-ada-002", validation_alias="EMBEDDING_MODEL"
    )
    COMPLETION_MODEL: str = Field(
        default="gpt-3.5-turbo", validation_alias="COMPLETION_MODEL"
    )
    OPENAI_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="OPENAI_TIMEOUT_SECONDS"
    )

    # Book files written by ingest.py
    BOOK_PAGES_PATH: str = Field(
        default="tmp/book_pages.csv", validation_alias="BOOK_PAGES_PATH"
    )
    BOOK_EMBEDDINGS_PATH: str = Field(
        default="tmp/book_embeddings.csv", validation_alias="BOOK_EMBEDDINGS_PATH"
    )

    # Context packing
    MAX_SECTION_TOKENS: int = Field(default=1000, validation_alias="MAX_SECTION_TOKENS")
    SEPARATOR: str = "\n* "
    SEPARATOR_TOKENS: int = 4
    PACK_STOP_ON_OVERFLOW: bool = Field(
        default=False, validation_alias="PACK_STOP_ON_OVERFLOW"
    )

    # Ingestion
    INGEST_MAX_PAGE_TOKENS: int = Field(
        default=8191, validation_alias="INGEST_MAX_PAGE_TOKENS"
    )

    # Logging knobs
    LOGGER_NAME: str = "askbook"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("MAX_SECTION_TOKENS", "OPENAI_TIMEOUT_SECONDS")
    @classmethod
    def _positive(cls, v):
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
