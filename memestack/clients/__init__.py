"""HTTP access to the MemeStack API."""
from .http import ApiClient, UploadFile, build_upload

__all__ = ["ApiClient", "UploadFile", "build_upload"]
