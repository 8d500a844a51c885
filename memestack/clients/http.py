from __future__ import annotations

import json
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import httpx

from ..config import Settings, get_settings
from ..constants import ALLOWED_IMAGE_TYPES
from ..errors import FormValidationError, NetworkError, RequestTimeoutError, error_for_status
from ..session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadFile:
    """An image selected for upload."""

    filename: str
    content: bytes
    content_type: str

    @classmethod
    def from_path(cls, path: Path | str) -> "UploadFile":
        file_path = Path(path)
        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        return cls(filename=file_path.name, content=file_path.read_bytes(), content_type=content_type)

    def validate(self, *, max_bytes: int) -> None:
        if self.content_type not in ALLOWED_IMAGE_TYPES:
            raise FormValidationError(
                {"image": "Invalid file type. Only JPEG, PNG, GIF, and WebP images are allowed."}
            )
        if len(self.content) > max_bytes:
            limit_mb = max_bytes / (1024 * 1024)
            raise FormValidationError({"image": f"File is too large. Maximum size is {limit_mb:g}MB."})
        if not self.content:
            raise FormValidationError({"image": "File is empty."})


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def build_upload(image: UploadFile, fields: Mapping[str, Any]) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Build a multipart body: binary ``image`` part plus string metadata fields.

    Lists and dicts (``textAreas``) are JSON-encoded and booleans become
    ``"true"``/``"false"``, which is what the upload endpoints parse.
    """

    data = {key: _form_value(value) for key, value in fields.items() if value is not None}
    files = {"image": (image.filename, image.content, image.content_type)}
    return data, files


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip(), body
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict):
                text = first.get("msg") or first.get("message")
                if text:
                    return str(text), body
    text = (response.text or "").strip()
    if text and body is None:
        return text[:200], body
    return response.reason_phrase or f"HTTP {response.status_code}", body


class ApiClient:
    """Single HTTP client for the MemeStack REST API.

    Requests are bounded by ``settings.request_timeout``; on timeout or any
    other transport failure the call raises like any API error.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: Session | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session or Session()
        self._client = httpx.AsyncClient(
            base_url=self.settings.api_url.rstrip("/"),
            timeout=self.settings.request_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self.session.token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        clean_params = {key: value for key, value in (params or {}).items() if value is not None and value != ""}
        try:
            response = await self._client.request(
                method,
                path,
                params=clean_params or None,
                json=json,
                data=data,
                files=files,
                headers=self._auth_headers(),
            )
        except httpx.TimeoutException as exc:
            logger.warning(
                "API request timed out | method=%s path=%s timeout=%s",
                method,
                path,
                self.settings.request_timeout,
            )
            raise RequestTimeoutError(f"{method} {path} timed out") from exc
        except httpx.TransportError as exc:
            logger.warning(
                "API transport error | method=%s path=%s error=%s",
                method,
                path,
                type(exc).__name__,
            )
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            message, body = _error_message(response)
            logger.warning(
                "API request failed | method=%s path=%s status=%s message=%s",
                method,
                path,
                response.status_code,
                message,
            )
            if response.status_code == 401:
                self.session.expire()
            raise error_for_status(response.status_code, message, body)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        return await self.request("POST", path, json=json, data=data, files=files)

    async def put(
        self,
        path: str,
        *,
        json: Any = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        return await self.request("PUT", path, json=json, data=data, files=files)

    async def delete(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)


__all__ = ["ApiClient", "UploadFile", "build_upload"]
