"""MemeStack client: API access, paginated collections and page view models."""
from .clients import ApiClient, UploadFile
from .config import Settings, get_settings
from .session import Session, SessionStore

__version__ = "0.1.0"

__all__ = ["ApiClient", "Session", "SessionStore", "Settings", "UploadFile", "__version__", "get_settings"]
