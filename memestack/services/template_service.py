"""Template endpoints, including the multipart upload and engagement tracking."""
from __future__ import annotations

import logging
from typing import Any, Sequence

from ..clients.http import ApiClient, UploadFile, build_upload
from ..constants import TEMPLATE_SORTS
from ..schemas import Page, Template, TextArea, default_text_areas, parse_model, parse_page, unwrap
from .common import list_params, require_sort

logger = logging.getLogger(__name__)

_MAX_PAGES = 20


async def list_templates(
    client: ApiClient,
    *,
    page: int = 1,
    limit: int | None = None,
    sort: str | None = "createdAt",
    sort_order: str = "desc",
    search: str | None = None,
    category: str | None = None,
) -> Page[Template]:
    params = list_params(
        client,
        page=page,
        limit=limit,
        sortBy=require_sort(sort, TEMPLATE_SORTS),
        sortOrder=sort_order,
        search=search,
        category=category,
    )
    data = await client.get("/templates", params=params)
    return parse_page(data, "templates", Template, fallback_page=page)


async def list_my_templates(client: ApiClient, *, page: int = 1, limit: int | None = None) -> Page[Template]:
    data = await client.get("/templates/my-templates", params=list_params(client, page=page, limit=limit))
    return parse_page(data, "templates", Template, fallback_page=page)


async def list_favorite_templates(client: ApiClient, *, page: int = 1, limit: int | None = None) -> Page[Template]:
    data = await client.get("/templates/favorites", params=list_params(client, page=page, limit=limit))
    return parse_page(data, "templates", Template, fallback_page=page)


async def favorite_template_ids(client: ApiClient, *, limit: int = 50) -> set[str]:
    """Ids of every template the signed-in user has favorited."""

    ids: set[str] = set()
    page = 1
    while page <= _MAX_PAGES:
        result = await list_favorite_templates(client, page=page, limit=limit)
        ids.update(template.id for template in result.items)
        if page >= result.pagination.total_pages or not result.items:
            break
        page += 1
    else:
        logger.warning("Stopped walking favorite templates after %d pages", _MAX_PAGES)
    return ids


async def list_categories(client: ApiClient) -> list[str]:
    data = await client.get("/templates/categories")
    categories = unwrap(data, "categories")
    return [str(item) for item in categories] if isinstance(categories, list) else []


async def get_template(client: ApiClient, template_id: str) -> Template:
    data = await client.get(f"/templates/{template_id}")
    return parse_model(Template, unwrap(data, "template"))


def _template_fields(
    *,
    name: str | None,
    category: str | None,
    description: str | None,
    text_areas: Sequence[TextArea] | None,
    is_public: bool | None,
) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "name": name,
        "category": category,
        "description": description,
        "isPublic": is_public,
    }
    if text_areas is not None:
        fields["textAreas"] = [area.model_dump(by_alias=True) for area in text_areas]
    return fields


async def create_template(
    client: ApiClient,
    *,
    image: UploadFile,
    name: str,
    category: str,
    description: str = "",
    text_areas: Sequence[TextArea] | None = None,
    is_public: bool = False,
) -> Template:
    image.validate(max_bytes=client.settings.max_upload_bytes)
    fields = _template_fields(
        name=name,
        category=category,
        description=description,
        text_areas=list(text_areas) if text_areas else default_text_areas(),
        is_public=is_public,
    )
    data, files = build_upload(image, fields)
    payload = await client.post("/templates", data=data, files=files)
    template = parse_model(Template, unwrap(payload, "template"))
    logger.info("Template created | id=%s name=%s", template.id, template.name)
    return template


async def update_template(
    client: ApiClient,
    template_id: str,
    *,
    image: UploadFile | None = None,
    name: str | None = None,
    category: str | None = None,
    description: str | None = None,
    text_areas: Sequence[TextArea] | None = None,
    is_public: bool | None = None,
) -> Template:
    fields = _template_fields(
        name=name,
        category=category,
        description=description,
        text_areas=text_areas,
        is_public=is_public,
    )
    if image is not None:
        image.validate(max_bytes=client.settings.max_upload_bytes)
        data, files = build_upload(image, fields)
        payload = await client.put(f"/templates/{template_id}", data=data, files=files)
    else:
        payload = await client.put(
            f"/templates/{template_id}",
            json={key: value for key, value in fields.items() if value is not None},
        )
    return parse_model(Template, unwrap(payload, "template"))


async def delete_template(client: ApiClient, template_id: str) -> None:
    await client.delete(f"/templates/{template_id}")


async def favorite_template(client: ApiClient, template_id: str) -> None:
    await client.post(f"/templates/{template_id}/favorite")


async def unfavorite_template(client: ApiClient, template_id: str) -> None:
    await client.delete(f"/templates/{template_id}/favorite")


async def track_download(client: ApiClient, template_id: str) -> None:
    await client.post(f"/templates/{template_id}/download")


async def track_usage(client: ApiClient, template_id: str) -> None:
    await client.post(f"/templates/{template_id}/use")


async def rate_template(client: ApiClient, template_id: str, rating: int) -> None:
    if not 1 <= int(rating) <= 5:
        raise ValueError("rating must be between 1 and 5")
    await client.post(f"/templates/{template_id}/rate", json={"rating": int(rating)})


__all__ = [
    "create_template",
    "delete_template",
    "favorite_template",
    "favorite_template_ids",
    "get_template",
    "list_categories",
    "list_favorite_templates",
    "list_my_templates",
    "list_templates",
    "rate_template",
    "track_download",
    "track_usage",
    "unfavorite_template",
    "update_template",
]
