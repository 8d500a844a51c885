"""Collaborations tabs, invites and status workflow."""
from __future__ import annotations

import asyncio

from memestack.schemas import CollaborationStatus
from memestack.views import CollaborationsView


def test_tabs_load_their_own_endpoints(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.load()
            await view.switch_tab("mine")
            await view.switch_tab("invites")
            return view

    view = asyncio.run(scenario())

    assert [c.id for c in view.browse.items] == ["c2"]
    assert [c.id for c in view.mine.items] == ["c1"]
    assert [c.id for c in view.invites.items] == ["c3"]
    assert view.current is view.invites


def test_accept_invite_moves_it_to_mine(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.switch_tab("invites")
            assert await view.accept_invite("c3") is True
            return view

    view = asyncio.run(scenario())

    assert view.invites.items == []
    assert "c3" in [c.id for c in view.mine.items]


def test_decline_invite_only_removes_it(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.switch_tab("invites")
            await view.decline_invite("c3")
            return view

    view = asyncio.run(scenario())

    assert view.invites.items == []
    assert fake_api.count("GET", "/api/collaborations/user/collaborations") == 0


def test_publish_is_a_single_update(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.switch_tab("mine")
            assert await view.publish("c1") is True
            return view

    view = asyncio.run(scenario())

    assert fake_api.count("PUT", "/api/collaborations/c1") == 1
    _, _, body = fake_api.bodies[-1]
    assert body == {"status": "active", "settings": {"isPublic": True}}
    updated = view.mine.find("c1")
    assert updated.status is CollaborationStatus.ACTIVE
    assert updated.settings.is_public is True


def test_strict_workflow_blocks_reviewing_to_active(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    fake_api.collaborations[0]["status"] = "reviewing"

    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client, strict_workflow=True)
            await view.switch_tab("mine")
            assert await view.transition("c1", "active") is False
            return view

    view = asyncio.run(scenario())

    assert fake_api.count("PUT", "/api/collaborations/c1") == 0
    assert view.error == "Cannot move a collaboration from reviewing to active"


def test_lenient_workflow_defers_to_server(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    fake_api.collaborations[0]["status"] = "reviewing"

    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.switch_tab("mine")
            assert await view.transition("c1", CollaborationStatus.ACTIVE) is True
            return view

    view = asyncio.run(scenario())

    assert view.mine.find("c1").status is CollaborationStatus.ACTIVE


def test_create_and_fork_land_in_mine(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.switch_tab("mine")
            await view.create_form.submit({"title": "New remix", "type": "remix"})
            await view.fork("c2")
            return view

    view = asyncio.run(scenario())

    titles = [c.title for c in view.mine.items]
    assert titles[:2] == ["Open jam", "New remix"]
    assert view.create_form.success is True


def test_create_rejects_challenge_response_type(make_client, fake_api) -> None:  # type: ignore[no-untyped-def]
    async def scenario() -> CollaborationsView:
        async with make_client() as client:
            view = CollaborationsView(client)
            await view.create_form.submit({"title": "New remix", "type": "challenge_response"})
            return view

    view = asyncio.run(scenario())

    assert view.create_form.field_errors == {"type": "Invalid collaboration type"}
    assert fake_api.count("POST", "/api/collaborations") == 0
