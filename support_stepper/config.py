from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Retrieval
    # "mock" always returns the first article; useful while building the side panel
    RETRIEVAL_PROVIDER: Literal["keyword", "mock"] = "keyword"
    DEFAULT_TOP_N: int = 3
    LOW_CONFIDENCE_THRESHOLD: int = 9

    # Knowledge base export; the bundled articles are used when unset
    KNOWLEDGE_BASE_PATH: Optional[str] = None

    # Feature toggles
    PAGE_SCAN_ENABLED: bool = False
    PAGE_SCANNER: Literal["disabled", "static"] = "disabled"
    PAGE_SCAN_TEXT: str = ""  # content served by the static scanner
    CROSS_ARTICLE_FALLBACK: bool = True

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
