"""In-memory MemeStack API used by the client tests.

The fake speaks the same envelopes as the real server (including its
inconsistencies) and is mounted through ``httpx.ASGITransport`` so no
socket is opened.
"""
from __future__ import annotations

import asyncio
import json
from copy import deepcopy
from typing import Any, Callable, Iterator

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from memestack.clients.http import ApiClient
from memestack.config import Settings
from memestack.session import Session

TOKEN = "good-token"
USER = {"_id": "u1", "username": "dankmaster", "email": "dank@memestack.io", "profile": {"displayName": "Dank"}}


def _paginate(items: list[dict[str, Any]], request: Request) -> tuple[list[dict[str, Any]], int, int, int]:
    page = int(request.query_params.get("page", 1))
    limit = int(request.query_params.get("limit", 12))
    total = len(items)
    total_pages = (total + limit - 1) // limit
    start = (page - 1) * limit
    return items[start : start + limit], page, total_pages, total


def _pagination(page: int, total_pages: int, total: int, counter: str) -> dict[str, Any]:
    return {
        "currentPage": page,
        "totalPages": total_pages,
        counter: total,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def _not_found(what: str) -> JSONResponse:
    return JSONResponse({"message": f"{what} not found"}, status_code=404)


class FakeMemeStack:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, str]]] = []
        self.bodies: list[tuple[str, str, Any]] = []
        self.failures: dict[tuple[str, str], tuple[int, str]] = {}
        self.delay: Callable[[Request], float] | None = None
        self.templates = [
            {
                "_id": f"t{i}",
                "name": f"Template {i}",
                "category": "reaction" if i % 2 else "popular",
                "description": "",
                "imageUrl": f"/uploads/t{i}.png",
                "stats": {"usageCount": i, "downloadCount": 0, "favorites": 1 if i == 2 else 0},
                "isPublic": True,
            }
            for i in range(1, 16)
        ]
        self.memes = [
            {
                "_id": f"m{i}",
                "title": f"Meme {i}",
                "imageUrl": f"/uploads/m{i}.png",
                "category": "funny",
                "stats": {"likes": i, "views": 10 * i},
                "creator": "u1",
            }
            for i in range(1, 6)
        ]
        self.folders = [
            {"_id": "f1", "name": "Favourites", "color": "#6366f1", "icon": "star", "isPrivate": True, "memes": ["m1"]},
            {"_id": "f2", "name": "Work", "color": "#10b981", "icon": "work", "isPrivate": False, "memes": []},
        ]
        self.collaborations = [
            {"_id": "c1", "title": "Draft remix", "type": "remix", "status": "draft", "owner": USER,
             "settings": {"isPublic": False}},
            {"_id": "c2", "title": "Open jam", "type": "collaboration", "status": "active", "owner": "u2",
             "settings": {"isPublic": True}},
        ]
        self.invites = [
            {"_id": "c3", "title": "Invited jam", "type": "collaboration", "status": "active", "owner": "u3"},
        ]
        self.comments = [
            {
                "_id": "k1",
                "content": "first!",
                "meme": "m1",
                "author": USER,
                "parentComment": None,
                "stats": {"likesCount": 0, "repliesCount": 1},
                "isLiked": False,
            },
            {
                "_id": "k1r1",
                "content": "second",
                "meme": "m1",
                "author": "u2",
                "parentComment": "k1",
                "stats": {"likesCount": 2, "repliesCount": 0},
                "isLiked": False,
            },
        ]
        self.challenges = [
            {"_id": "ch1", "title": "Caption this", "category": "freestyle", "type": "challenge",
             "status": "active", "rules": ["One caption per entry", "Keep it SFW"], "stats": {"participantCount": 3}},
        ]
        self.groups = [
            {"_id": "g1", "name": "Dank Memes", "slug": "dank-memes", "category": "dank",
             "stats": {"memberCount": 10}, "isMember": False},
        ]
        self.reports: list[dict[str, Any]] = []
        self.favorites: set[str] = {"t2"}
        self._counter = 100

    def next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def count(self, method: str, path: str) -> int:
        return sum(1 for call in self.calls if call[0] == method and call[1] == path)

    def fail(self, method: str, path: str, status: int = 500, message: str = "Internal server error") -> None:
        self.failures[(method, path)] = (status, message)


def build_app(api: FakeMemeStack) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def _intercept(request: Request, call_next):  # type: ignore[no-untyped-def]
        path = request.url.path
        api.calls.append((request.method, path, dict(request.query_params)))
        if api.delay is not None:
            seconds = api.delay(request)
            if seconds:
                await asyncio.sleep(seconds)
        auth = request.headers.get("authorization")
        if auth is not None and auth != f"Bearer {TOKEN}":
            return JSONResponse({"message": "Token is not valid"}, status_code=401)
        failure = api.failures.get((request.method, path))
        if failure is not None:
            return JSONResponse({"message": failure[1]}, status_code=failure[0])
        return await call_next(request)

    async def _json(request: Request) -> dict[str, Any]:
        raw = await request.body()
        body = json.loads(raw) if raw else {}
        api.bodies.append((request.method, request.url.path, body))
        return body

    # -- auth -----------------------------------------------------------
    @app.post("/api/auth/login")
    async def login(request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        if body.get("password") != "hunter22":
            return JSONResponse({"success": False, "message": "Invalid credentials"}, status_code=400)
        return {"success": True, "token": TOKEN, "user": USER}

    @app.get("/api/auth/me")
    async def me(request: Request):  # type: ignore[no-untyped-def]
        if request.headers.get("authorization") is None:
            return JSONResponse({"message": "No token, authorization denied"}, status_code=401)
        return {"success": True, "user": USER}

    @app.post("/api/auth/logout")
    async def logout():  # type: ignore[no-untyped-def]
        return {"success": True}

    # -- memes ----------------------------------------------------------
    @app.get("/api/memes/my-memes")
    async def my_memes(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.memes, request)
        return {"data": {"memes": items, "pagination": _pagination(page, total_pages, total, "totalMemes")}}

    @app.get("/api/memes")
    async def list_memes(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.memes, request)
        return {"data": {"memes": items, "pagination": _pagination(page, total_pages, total, "totalMemes")}}

    @app.post("/api/memes/{meme_id}/like")
    async def like_meme(meme_id: str):  # type: ignore[no-untyped-def]
        for meme in api.memes:
            if meme["_id"] == meme_id:
                meme["isLiked"] = not meme.get("isLiked", False)
                meme["stats"]["likes"] += 1 if meme["isLiked"] else -1
                return {"success": True, "data": {"isLiked": meme["isLiked"], "likesCount": meme["stats"]["likes"]}}
        return _not_found("Meme")

    @app.delete("/api/memes/{meme_id}")
    async def delete_meme(meme_id: str):  # type: ignore[no-untyped-def]
        api.memes = [meme for meme in api.memes if meme["_id"] != meme_id]
        return {"success": True}

    # -- templates ------------------------------------------------------
    @app.get("/api/templates/my-templates")
    async def my_templates(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.templates, request)
        return {"templates": items, "pagination": _pagination(page, total_pages, total, "totalTemplates")}

    @app.get("/api/templates/favorites")
    async def favorite_templates(request: Request):  # type: ignore[no-untyped-def]
        favorites = [t for t in api.templates if t["_id"] in api.favorites]
        items, page, total_pages, total = _paginate(favorites, request)
        return {"templates": items, "pagination": _pagination(page, total_pages, total, "totalTemplates")}

    @app.get("/api/templates")
    async def list_templates(request: Request):  # type: ignore[no-untyped-def]
        params = request.query_params
        matches = [
            t
            for t in api.templates
            if (not params.get("category") or t["category"] == params["category"])
            and (not params.get("search") or params["search"].lower() in t["name"].lower())
        ]
        items, page, total_pages, total = _paginate(matches, request)
        return {"templates": items, "pagination": _pagination(page, total_pages, total, "totalTemplates")}

    @app.post("/api/templates")
    async def create_template(request: Request):  # type: ignore[no-untyped-def]
        form = await request.form()
        image = form.get("image")
        fields = {key: value for key, value in form.items() if key != "image"}
        api.bodies.append(("POST", "/api/templates", {"fields": fields, "filename": getattr(image, "filename", None)}))
        template = {
            "_id": api.next_id("t"),
            "name": fields.get("name"),
            "category": fields.get("category"),
            "description": fields.get("description", ""),
            "textAreas": json.loads(str(fields.get("textAreas") or "[]")),
            "isPublic": fields.get("isPublic") == "true",
            "imageUrl": f"/uploads/{getattr(image, 'filename', 'x')}",
        }
        api.templates.insert(0, template)
        return JSONResponse({"message": "Template created successfully", "template": template}, status_code=201)

    @app.delete("/api/templates/{template_id}")
    async def delete_template(template_id: str):  # type: ignore[no-untyped-def]
        before = len(api.templates)
        api.templates = [t for t in api.templates if t["_id"] != template_id]
        if len(api.templates) == before:
            return _not_found("Template")
        return {"message": "Template deleted successfully"}

    @app.post("/api/templates/{template_id}/favorite")
    async def favorite(template_id: str):  # type: ignore[no-untyped-def]
        api.favorites.add(template_id)
        return {"message": "Template added to favorites"}

    @app.delete("/api/templates/{template_id}/favorite")
    async def unfavorite(template_id: str):  # type: ignore[no-untyped-def]
        api.favorites.discard(template_id)
        return {"message": "Template removed from favorites"}

    @app.post("/api/templates/{template_id}/download")
    async def download(template_id: str):  # type: ignore[no-untyped-def]
        return {"message": "Download tracked"}

    @app.post("/api/templates/{template_id}/use")
    async def use(template_id: str):  # type: ignore[no-untyped-def]
        return {"message": "Usage tracked"}

    @app.post("/api/templates/{template_id}/rate")
    async def rate(template_id: str, request: Request):  # type: ignore[no-untyped-def]
        await _json(request)
        return {"message": "Rating saved"}

    # -- folders --------------------------------------------------------
    def _folder(folder_id: str) -> dict[str, Any] | None:
        return next((f for f in api.folders if f["_id"] == folder_id), None)

    @app.get("/api/folders")
    async def list_folders(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.folders, request)
        return {"folders": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.post("/api/folders")
    async def create_folder(request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        folder = {"_id": api.next_id("f"), "memes": [], **body}
        api.folders.insert(0, folder)
        return JSONResponse({"message": "Folder created successfully", "folder": folder}, status_code=201)

    @app.get("/api/folders/{folder_id}")
    async def get_folder(folder_id: str):  # type: ignore[no-untyped-def]
        folder = _folder(folder_id)
        if folder is None:
            return _not_found("Folder")
        populated = [m for m in api.memes if m["_id"] in folder["memes"]]
        return {"folder": dict(folder, memes=populated)}

    @app.put("/api/folders/{folder_id}")
    async def update_folder(folder_id: str, request: Request):  # type: ignore[no-untyped-def]
        folder = _folder(folder_id)
        if folder is None:
            return _not_found("Folder")
        folder.update(await _json(request))
        return {"message": "Folder updated successfully", "folder": folder}

    @app.delete("/api/folders/{folder_id}")
    async def delete_folder(folder_id: str):  # type: ignore[no-untyped-def]
        api.folders = [f for f in api.folders if f["_id"] != folder_id]
        return {"message": "Folder deleted successfully"}

    @app.post("/api/folders/{folder_id}/memes/bulk")
    async def bulk_add(folder_id: str, request: Request):  # type: ignore[no-untyped-def]
        folder = _folder(folder_id)
        if folder is None:
            return _not_found("Folder")
        body = await _json(request)
        added = [mid for mid in body.get("memeIds", []) if mid not in folder["memes"]]
        folder["memes"].extend(added)
        return {"message": f"{len(added)} memes added", "addedCount": len(added), "totalInFolder": len(folder["memes"])}

    @app.post("/api/folders/{folder_id}/memes/{meme_id}")
    async def add_meme(folder_id: str, meme_id: str):  # type: ignore[no-untyped-def]
        folder = _folder(folder_id)
        if folder is None:
            return _not_found("Folder")
        if meme_id in folder["memes"]:
            return JSONResponse({"message": "Meme already in folder"}, status_code=400)
        folder["memes"].append(meme_id)
        return {"message": "Meme added to folder successfully"}

    @app.delete("/api/folders/{folder_id}/memes/{meme_id}")
    async def remove_meme(folder_id: str, meme_id: str):  # type: ignore[no-untyped-def]
        folder = _folder(folder_id)
        if folder is None:
            return _not_found("Folder")
        folder["memes"] = [mid for mid in folder["memes"] if mid != meme_id]
        return {"message": "Meme removed from folder successfully"}

    @app.post("/api/folders/{folder_id}/share")
    async def share_folder(folder_id: str):  # type: ignore[no-untyped-def]
        return {"shareUrl": f"http://localhost:3000/shared/folder/tok-{folder_id}", "shareToken": f"tok-{folder_id}"}

    # -- collaborations -------------------------------------------------
    def _collab(collab_id: str) -> dict[str, Any] | None:
        return next((c for c in api.collaborations if c["_id"] == collab_id), None)

    @app.get("/api/collaborations/user/collaborations")
    async def my_collabs(request: Request):  # type: ignore[no-untyped-def]
        mine = [c for c in api.collaborations if c.get("owner") == USER]
        items, page, total_pages, total = _paginate(mine, request)
        return {"collaborations": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.get("/api/collaborations/user/invites")
    async def my_invites(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.invites, request)
        return {"collaborations": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.get("/api/collaborations")
    async def list_collabs(request: Request):  # type: ignore[no-untyped-def]
        public = [c for c in api.collaborations if c.get("settings", {}).get("isPublic", True)]
        items, page, total_pages, total = _paginate(public, request)
        return {"collaborations": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.post("/api/collaborations")
    async def create_collab(request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        collab = {"_id": api.next_id("c"), "status": "draft", "owner": USER, **body}
        api.collaborations.insert(0, collab)
        return JSONResponse(collab, status_code=201)

    @app.put("/api/collaborations/{collab_id}")
    async def update_collab(collab_id: str, request: Request):  # type: ignore[no-untyped-def]
        collab = _collab(collab_id)
        if collab is None:
            return _not_found("Collaboration")
        collab.update(await _json(request))
        return collab

    @app.delete("/api/collaborations/{collab_id}")
    async def delete_collab(collab_id: str):  # type: ignore[no-untyped-def]
        api.collaborations = [c for c in api.collaborations if c["_id"] != collab_id]
        return {"message": "Collaboration deleted successfully"}

    @app.post("/api/collaborations/{collab_id}/invites/accept")
    async def accept(collab_id: str):  # type: ignore[no-untyped-def]
        invite = next((c for c in api.invites if c["_id"] == collab_id), None)
        if invite is None:
            return _not_found("Invitation")
        api.invites.remove(invite)
        api.collaborations.append(dict(invite, owner=USER))
        return {"message": "Invitation accepted"}

    @app.post("/api/collaborations/{collab_id}/invites/decline")
    async def decline(collab_id: str):  # type: ignore[no-untyped-def]
        api.invites = [c for c in api.invites if c["_id"] != collab_id]
        return {"message": "Invitation declined"}

    @app.post("/api/collaborations/{collab_id}/fork")
    async def fork(collab_id: str):  # type: ignore[no-untyped-def]
        source = _collab(collab_id)
        if source is None:
            return _not_found("Collaboration")
        forked = dict(deepcopy(source), _id=api.next_id("c"), owner=USER, status="draft")
        api.collaborations.insert(0, forked)
        return JSONResponse(forked, status_code=201)

    # -- comments -------------------------------------------------------
    def _shape(comment: dict[str, Any]) -> dict[str, Any]:
        replies = [c for c in api.comments if c["parentComment"] == comment["_id"]]
        return dict(comment, replies=replies[:3], hasMoreReplies=len(replies) > 3, totalReplies=len(replies))

    @app.get("/api/comments/memes/{meme_id}/comments")
    async def list_comments(meme_id: str, request: Request):  # type: ignore[no-untyped-def]
        top = [_shape(c) for c in api.comments if c["meme"] == meme_id and c["parentComment"] is None]
        items, page, total_pages, total = _paginate(top, request)
        return {
            "success": True,
            "data": {"comments": items, "pagination": _pagination(page, total_pages, total, "totalComments")},
        }

    @app.post("/api/comments/memes/{meme_id}/comments")
    async def add_comment(meme_id: str, request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        parent_id = body.get("parentComment")
        comment = {
            "_id": api.next_id("k"),
            "content": body["content"],
            "meme": meme_id,
            "author": USER,
            "parentComment": parent_id,
            "stats": {"likesCount": 0, "repliesCount": 0},
            "isLiked": False,
        }
        api.comments.insert(0, comment)
        for parent in api.comments:
            if parent["_id"] == parent_id:
                parent["stats"]["repliesCount"] += 1
        return JSONResponse({"success": True, "data": {"comment": comment}}, status_code=201)

    @app.get("/api/comments/{comment_id}/replies")
    async def replies(comment_id: str, request: Request):  # type: ignore[no-untyped-def]
        found = [c for c in api.comments if c["parentComment"] == comment_id]
        items, page, total_pages, total = _paginate(found, request)
        return {
            "success": True,
            "data": {"replies": items, "pagination": _pagination(page, total_pages, total, "totalReplies")},
        }

    @app.post("/api/comments/{comment_id}/like")
    async def like_comment(comment_id: str):  # type: ignore[no-untyped-def]
        for comment in api.comments:
            if comment["_id"] == comment_id:
                comment["isLiked"] = not comment["isLiked"]
                comment["stats"]["likesCount"] += 1 if comment["isLiked"] else -1
                return {
                    "success": True,
                    "data": {"isLiked": comment["isLiked"], "likesCount": comment["stats"]["likesCount"]},
                }
        return _not_found("Comment")

    @app.delete("/api/comments/{comment_id}")
    async def delete_comment(comment_id: str):  # type: ignore[no-untyped-def]
        api.comments = [c for c in api.comments if comment_id not in (c["_id"], c["parentComment"])]
        return {"success": True, "message": "Comment deleted successfully"}

    @app.post("/api/comments/{comment_id}/report")
    async def report(comment_id: str, request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        api.reports.append({"comment": comment_id, **body})
        return {"success": True, "message": "Comment reported successfully"}

    # -- challenges -----------------------------------------------------
    @app.get("/api/challenges")
    async def list_challenges(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.challenges, request)
        return {"challenges": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.post("/api/challenges")
    async def create_challenge(request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        rules = body.get("rules")
        challenge = {"_id": api.next_id("ch"), "status": "draft", **body, "rules": rules if isinstance(rules, list) else []}
        api.challenges.insert(0, challenge)
        return JSONResponse(challenge, status_code=201)

    @app.post("/api/challenges/{challenge_id}/join")
    async def join_challenge(challenge_id: str):  # type: ignore[no-untyped-def]
        for challenge in api.challenges:
            if challenge["_id"] == challenge_id:
                challenge["stats"]["participantCount"] += 1
                return {"message": "Successfully joined the challenge"}
        return _not_found("Challenge")

    # -- groups ---------------------------------------------------------
    def _group(slug: str) -> dict[str, Any] | None:
        return next((g for g in api.groups if g["slug"] == slug), None)

    @app.get("/api/groups")
    async def list_groups(request: Request):  # type: ignore[no-untyped-def]
        items, page, total_pages, total = _paginate(api.groups, request)
        return {"groups": items, "totalPages": total_pages, "currentPage": page, "total": total}

    @app.post("/api/groups")
    async def create_group(request: Request):  # type: ignore[no-untyped-def]
        body = await _json(request)
        slug = str(body["name"]).lower().replace(" ", "-")
        group = {"_id": api.next_id("g"), "slug": slug, "stats": {"memberCount": 1}, "isMember": True, **body}
        api.groups.insert(0, group)
        return JSONResponse(group, status_code=201)

    @app.post("/api/groups/{slug}/join")
    async def join_group(slug: str):  # type: ignore[no-untyped-def]
        group = _group(slug)
        if group is None:
            return _not_found("Group")
        group["stats"]["memberCount"] += 1
        return {"message": "Successfully joined the group"}

    @app.post("/api/groups/{slug}/leave")
    async def leave_group(slug: str):  # type: ignore[no-untyped-def]
        group = _group(slug)
        if group is None:
            return _not_found("Group")
        group["stats"]["memberCount"] -= 1
        return {"message": "Successfully left the group"}

    return app


@pytest.fixture
def fake_api() -> FakeMemeStack:
    return FakeMemeStack()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url="http://memestack.test/api",
        page_size=12,
        request_timeout=5,
        success_close_delay=0.01,
        max_upload_bytes=1024,
    )


@pytest.fixture
def make_client(fake_api: FakeMemeStack, settings: Settings) -> Iterator[Callable[..., ApiClient]]:
    """Build ApiClients wired to the fake API; pass ``token=None`` for an anonymous client."""

    def _make(*, token: str | None = TOKEN, session: Session | None = None) -> ApiClient:
        session = session or Session()
        if token is not None:
            session.login(token)
        transport = httpx.ASGITransport(app=build_app(fake_api))
        return ApiClient(settings, session, transport=transport)

    yield _make
