"""Tests for the remote update check against a local aiohttp server."""

from __future__ import annotations

import asyncio

import pytest
from aiohttp import test_utils, web

from demos_manager.core.update_checker import UpdateChecker, UpdateStatus, build_update_url
from demos_manager.models.version import AppVersion


async def _serve(handler) -> test_utils.TestServer:
    app = web.Application()
    app.router.add_get("/update", handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    return server


def _text(body: str, status: int = 200):
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text=body, status=status)

    return handler


def test_build_update_url_appends_endpoint() -> None:
    assert build_update_url("https://example.org/") == "https://example.org/update"
    assert build_update_url("https://example.org") == "https://example.org/update"


@pytest.mark.asyncio
async def test_same_version_is_up_to_date() -> None:
    server = await _serve(_text("1.2.0"))
    try:
        result = await UpdateChecker().check_for_update("1.2.0", str(server.make_url("/update")))
    finally:
        await server.close()
    assert result.status is UpdateStatus.UP_TO_DATE
    assert not result.update_available


@pytest.mark.asyncio
async def test_newer_remote_version_is_available() -> None:
    server = await _serve(_text("1.3.0\r\n"))
    try:
        result = await UpdateChecker().check_for_update("1.2.0", str(server.make_url("/update")))
    finally:
        await server.close()
    assert result.status is UpdateStatus.UPDATE_AVAILABLE
    assert result.latest_version == AppVersion.parse("1.3.0")


@pytest.mark.asyncio
async def test_older_remote_version_is_not_an_update() -> None:
    server = await _serve(_text("1.1.9"))
    try:
        result = await UpdateChecker().check_for_update("1.2.0", str(server.make_url("/update")))
    finally:
        await server.close()
    assert result.status is UpdateStatus.UP_TO_DATE


@pytest.mark.asyncio
async def test_non_200_response_fails() -> None:
    server = await _serve(_text("1.3.0", status=503))
    try:
        result = await UpdateChecker().check_for_update("1.2.0", str(server.make_url("/update")))
    finally:
        await server.close()
    assert result.status is UpdateStatus.CHECK_FAILED
    assert result.latest_version is None
    assert result.error


@pytest.mark.asyncio
async def test_malformed_body_fails() -> None:
    server = await _serve(_text("<html>maintenance</html>"))
    try:
        result = await UpdateChecker().check_for_update("1.2.0", str(server.make_url("/update")))
    finally:
        await server.close()
    assert result.status is UpdateStatus.CHECK_FAILED


@pytest.mark.asyncio
async def test_timeout_fails_within_bound() -> None:
    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(1)
        return web.Response(text="9.9.9")

    server = await _serve(slow)
    try:
        result = await asyncio.wait_for(
            UpdateChecker(timeout_seconds=0.2).check_for_update(
                "1.2.0", str(server.make_url("/update"))
            ),
            timeout=3,
        )
    finally:
        await server.close()
    assert result.status is UpdateStatus.CHECK_FAILED


@pytest.mark.asyncio
async def test_unreachable_host_fails() -> None:
    server = await _serve(_text("1.3.0"))
    url = str(server.make_url("/update"))
    await server.close()

    result = await UpdateChecker(timeout_seconds=2).check_for_update("1.2.0", url)
    assert result.status is UpdateStatus.CHECK_FAILED
