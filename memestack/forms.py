"""Client-side form models validated before any network call."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .clients.http import UploadFile
from .constants import (
    CHALLENGE_CATEGORIES,
    CHALLENGE_RULE_MAX_LENGTH,
    CHALLENGE_TYPES,
    COMMENT_MAX_LENGTH,
    CREATABLE_COLLABORATION_TYPES,
    DEFAULT_FOLDER_COLOR,
    FOLDER_ICONS,
    GROUP_CATEGORIES,
    GROUP_PRIVACY,
    REPORT_REASONS,
    TEMPLATE_CATEGORIES,
)
from .errors import FormValidationError
from .schemas.templates import TextArea

F = TypeVar("F", bound=BaseModel)


class _Form(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore", validate_default=True)


def _required(value: Any, label: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{label} is required")
    return value


def _one_of(value: str, options: tuple[str, ...], label: str) -> str:
    if value not in options:
        raise ValueError(f"Invalid {label}")
    return value


class FolderForm(_Form):
    name: str = Field(default="", max_length=50)
    description: str = Field(default="", max_length=200)
    color: str = Field(default=DEFAULT_FOLDER_COLOR, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: str = "folder"
    is_private: bool = True

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value: Any) -> Any:
        return _required(value, "Folder name")

    @field_validator("icon")
    @classmethod
    def _known_icon(cls, value: str) -> str:
        return _one_of(value, FOLDER_ICONS, "icon")


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class ChallengeForm(_Form):
    title: str = Field(default="", min_length=3, max_length=200)
    description: str = Field(default="", max_length=1000)
    category: str = "freestyle"
    type: str = "challenge"
    rules: list[str] = Field(default_factory=list)
    max_participants: int = Field(default=100, ge=2, le=1000)
    start_date: datetime | None = None
    end_date: datetime = Field(default=None)

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: Any) -> Any:
        return _required(value, "Title")

    @field_validator("description", mode="before")
    @classmethod
    def _description_required(cls, value: Any) -> Any:
        return _required(value, "Description")

    @field_validator("rules", mode="before")
    @classmethod
    def _rules_from_text(cls, value: Any) -> Any:
        # A textarea gives one rule per line.
        if isinstance(value, str):
            return value.splitlines()
        return [] if value is None else value

    @field_validator("rules")
    @classmethod
    def _short_rules(cls, value: list[str]) -> list[str]:
        rules = [rule.strip() for rule in value if rule.strip()]
        if any(len(rule) > CHALLENGE_RULE_MAX_LENGTH for rule in rules):
            raise ValueError(f"Each rule must be at most {CHALLENGE_RULE_MAX_LENGTH} characters")
        return rules

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return _one_of(value, CHALLENGE_CATEGORIES, "category")

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        return _one_of(value, CHALLENGE_TYPES, "challenge type")

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_date_required(cls, value: Any) -> Any:
        return _required(value, "End date")

    @field_validator("end_date")
    @classmethod
    def _end_date_in_future(cls, value: datetime, info: ValidationInfo) -> datetime:
        context = info.context or {}
        now = _utc(context.get("now") or datetime.now(timezone.utc))
        end = _utc(value)
        if end <= now:
            raise ValueError("End date must be in the future")
        start = info.data.get("start_date")
        if start is not None and _utc(start) >= end:
            raise ValueError("End date must be after the start date")
        return end


class CollaborationForm(_Form):
    title: str = Field(default="", min_length=3, max_length=200)
    description: str = Field(default="", max_length=1000)
    type: str = "collaboration"
    original_meme: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value: Any) -> Any:
        return _required(value, "Title")

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        return _one_of(value, CREATABLE_COLLABORATION_TYPES, "collaboration type")


class TemplateForm(_Form):
    model_config = ConfigDict(
        str_strip_whitespace=True, extra="ignore", validate_default=True, arbitrary_types_allowed=True
    )

    name: str = Field(default="", max_length=100)
    category: str = "popular"
    description: str = Field(default="", max_length=500)
    image: UploadFile = Field(default=None)
    text_areas: list[TextArea] | None = None
    is_public: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value: Any) -> Any:
        return _required(value, "Template name")

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return _one_of(value, TEMPLATE_CATEGORIES, "category")

    @field_validator("image", mode="before")
    @classmethod
    def _image_required(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Template image is required")
        return value

    @field_validator("image")
    @classmethod
    def _valid_image(cls, value: UploadFile, info: ValidationInfo) -> UploadFile:
        max_bytes = int((info.context or {}).get("max_upload_bytes") or 10 * 1024 * 1024)
        try:
            value.validate(max_bytes=max_bytes)
        except FormValidationError as exc:
            raise ValueError(exc.field_errors.get("image", str(exc))) from exc
        return value


class CommentForm(_Form):
    content: str = Field(default="", max_length=COMMENT_MAX_LENGTH)

    @field_validator("content", mode="before")
    @classmethod
    def _content_required(cls, value: Any) -> Any:
        return _required(value, "Comment")


class ReportForm(_Form):
    reason: str = ""
    description: str = Field(default="", max_length=500)

    @field_validator("reason")
    @classmethod
    def _known_reason(cls, value: str) -> str:
        if not value:
            raise ValueError("Please choose a reason")
        return _one_of(value, REPORT_REASONS, "reason")


class GroupForm(_Form):
    name: str = Field(default="", min_length=3, max_length=100)
    description: str = Field(default="", max_length=500)
    category: str = "general"
    privacy: str = "public"

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value: Any) -> Any:
        return _required(value, "Group name")

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return _one_of(value, GROUP_CATEGORIES, "category")

    @field_validator("privacy")
    @classmethod
    def _known_privacy(cls, value: str) -> str:
        return _one_of(value, GROUP_PRIVACY, "privacy")


def _message(error: Mapping[str, Any]) -> str:
    if error.get("type") == "missing":
        return "This field is required"
    message = str(error.get("msg") or "Invalid value")
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


def validate_form(model: type[F], data: Mapping[str, Any] | F, *, context: Mapping[str, Any] | None = None) -> F:
    """Validate ``data`` against ``model``; failures become inline field errors."""

    try:
        return model.model_validate(data if not isinstance(data, BaseModel) else data.model_dump(), context=context)
    except ValidationError as exc:
        field_errors: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "form"
            field_errors.setdefault(field, _message(error))
        raise FormValidationError(field_errors) from exc


__all__ = [
    "ChallengeForm",
    "CollaborationForm",
    "CommentForm",
    "FolderForm",
    "GroupForm",
    "ReportForm",
    "TemplateForm",
    "validate_form",
]
