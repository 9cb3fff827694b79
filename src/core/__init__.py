"""Core configuration and shared utilities."""

from dotenv import load_dotenv

from .config import DEFAULT_MODEL_MAPPING, ServiceConfig, Settings, get_settings

load_dotenv()

__all__ = ["DEFAULT_MODEL_MAPPING", "ServiceConfig", "Settings", "get_settings"]
