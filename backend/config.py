"""
Diccionario Culinario - Configuration Module
"""
import os
from pathlib import Path
from pydantic_settings import BaseSettings

# Compute paths at module level for consistency
_BASE_DIR = Path(__file__).parent

# Data directory: use DICCIONARIO_DATA_DIR env var, or default to ~/.diccionario
_DATA_DIR = Path(os.environ.get("DICCIONARIO_DATA_DIR", Path.home() / ".diccionario"))
_DATABASE_PATH = _DATA_DIR / "diccionario.db"


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Diccionario Culinario"
    DEBUG: bool = False

    # Paths
    BASE_DIR: Path = _BASE_DIR
    DATA_DIR: Path = _DATA_DIR
    SPEECH_DIR: Path = _DATA_DIR / "speech"

    # Database - use absolute path for consistent resolution
    DATABASE_URL: str = f"sqlite+aiosqlite:///{_DATABASE_PATH}"

    # Bundled seed dataset, imported once into an empty database
    SEED_CSV_PATH: Path = _BASE_DIR / "glossary" / "data" / "diccionario.csv"

    # Search Settings
    SEARCH_LIMIT: int = 200
    SEARCH_MAX_LIMIT: int = 250  # Largest page the UI may request

    # History Settings
    HISTORY_KEEP: int = 100  # Entries kept after each insert
    HISTORY_READ_LIMIT: int = 50  # Entries returned by get_history()

    # TTS Settings
    TTS_RATE: str = "-10%"  # Slightly slower than normal for single words
    TTS_PITCH: str = "+0Hz"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
