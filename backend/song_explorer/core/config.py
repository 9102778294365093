from typing import List
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Try to load .env file if it exists
env_path = Path(__file__).parent.parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(str(env_path))

# Base directory is the package directory
BASE_DIR: Path = Path(__file__).parent.parent

class Settings(BaseSettings):
    PROJECT_NAME: str = "Song Explorer"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS Settings
    CORS_ORIGINS_RAW: str = "*"
    CORS_METHODS_RAW: str = "GET,POST,OPTIONS"
    CORS_HEADERS_RAW: str = "Content-Type"

    # Dataset Settings
    BASE_DIR: Path = BASE_DIR
    DATA_DIR: Path = BASE_DIR / "data"
    DATASET_PATH: Path = DATA_DIR / "songs_dataset.csv"

    # Embedding Settings
    EMBEDDINGS_ENABLED: bool = True
    EMBEDDING_MODEL_NAME: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Fuzzy search: a match needs similarity >= 1 - threshold
    FUZZY_THRESHOLD: float = 0.4

    # Ranking Settings
    METADATA_CANDIDATES: int = 8
    SEMANTIC_CANDIDATES: int = 5
    MAX_RECOMMENDATIONS: int = 5
    SEARCH_RESULT_LIMIT: int = 10
    SUGGESTION_COUNT: int = 5

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_comma_separated_list(self.CORS_ORIGINS_RAW)

    @property
    def CORS_METHODS(self) -> List[str]:
        return parse_comma_separated_list(self.CORS_METHODS_RAW)

    @property
    def CORS_HEADERS(self) -> List[str]:
        return parse_comma_separated_list(self.CORS_HEADERS_RAW)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

def parse_comma_separated_list(value: str | List[str] | None) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if value == "*":
        return ["*"]
    return [item.strip() for item in value.split(",") if item.strip()]

# Create global settings object
settings = Settings()

# Export constants
PROJECT_NAME = settings.PROJECT_NAME
API_PREFIX = settings.API_PREFIX
DEBUG = settings.DEBUG
ENVIRONMENT = settings.ENVIRONMENT
