"""Pytest configuration and fixtures."""
import asyncio
from collections import Counter

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from jackbox_replay.fishery import FisheryEndpoints


class FakeFishery:
    """In-process stand-in for the gallery, GIF and storage services."""

    def __init__(self):
        self.sessions = {}        # (game, session) -> JSON payload or raw text
        self.legacy_sessions = {}  # (game, session) -> JSON payload
        self.gallery_delay = {}   # (game, session) -> seconds
        self.ready_after = {}     # object id -> probe number that returns 200
        self.gifs = {}            # object id -> GIF bytes
        self.storage_status = {}  # object id -> HTTP status override
        self.probes = Counter()
        self.requests = []
        self.endpoints = None

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/artifact/gallery/{game}/{session}", self.gallery)
        app.router.add_get("/artifact/gif/{game}/{session}/{object_id}", self.gif)
        app.router.add_get("/artifact/{game}/{session}", self.legacy_session)
        app.router.add_get("/storage/{game}/{session}/{filename}", self.storage)
        return app

    async def gallery(self, request):
        self.requests.append(request.path)
        key = (request.match_info["game"], request.match_info["session"])

        delay = self.gallery_delay.get(key)
        if delay:
            await asyncio.sleep(delay)

        payload = self.sessions.get(key)
        if payload is None:
            return web.json_response({"error": "not found"}, status=404)
        if isinstance(payload, str):
            return web.Response(text=payload)
        return web.json_response(payload)

    async def legacy_session(self, request):
        self.requests.append(request.path)
        key = (request.match_info["game"], request.match_info["session"])
        payload = self.legacy_sessions.get(key)
        if payload is None:
            return web.json_response({"error": "not found"}, status=404)
        return web.json_response(payload)

    async def gif(self, request):
        self.requests.append(request.path)
        object_id = request.match_info["object_id"]
        self.probes[object_id] += 1

        needed = self.ready_after.get(object_id)
        if needed is not None and self.probes[object_id] >= needed:
            return web.Response(text="OK")
        return web.Response(status=404)

    async def storage(self, request):
        self.requests.append(request.path)
        filename = request.match_info["filename"]
        object_id = filename.removeprefix("anim_").removesuffix(".gif")

        status = self.storage_status.get(object_id)
        if status is not None:
            return web.Response(status=status)
        if object_id not in self.gifs:
            return web.Response(status=404)
        return web.Response(body=self.gifs[object_id], content_type="image/gif")


class RecordingSleep:
    """Sleep replacement that records delays instead of waiting."""

    def __init__(self):
        self.calls = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


@pytest_asyncio.fixture
async def fishery():
    """Running fake artifact service."""
    fake = FakeFishery()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.endpoints = FisheryEndpoints.from_base(
        str(server.make_url("/artifact")),
        str(server.make_url("/storage"))
    )
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def client_session():
    """Plain aiohttp session."""
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def unreachable_endpoints():
    """Endpoints on a port nothing listens on; connections are refused."""
    return FisheryEndpoints.from_base("http://127.0.0.1:1/artifact", "http://127.0.0.1:1/storage")
