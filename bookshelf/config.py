"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Data
    CATALOG_DATA_PATH = os.getenv("CATALOG_DATA_PATH")

    # Output
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    DEFAULT_FORMAT = os.getenv("DEFAULT_FORMAT", "table")
