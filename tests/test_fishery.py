"""Tests for the artifact id resolver and GIF poller."""
import logging

import pytest

from jackbox_replay.domain import SessionRef
from jackbox_replay.fishery import FisheryEndpoints, GifPoller, IdentifierResolver


REF = SessionRef("gameX", "session1")


class TestFisheryEndpoints:
    """Tests for URL construction."""

    def test_defaults(self):
        """Test default service URLs."""
        endpoints = FisheryEndpoints()
        assert endpoints.gallery(REF) == "https://fishery.jackboxgames.com/artifact/gallery/gameX/session1"
        assert endpoints.gif_probe(REF, "7") == "https://fishery.jackboxgames.com/artifact/gif/gameX/session1/7"
        assert endpoints.gif_file(REF, "7") == (
            "https://s3.amazonaws.com/jbg-blobcast-artifacts/gameX/session1/anim_7.gif"
        )
        assert endpoints.legacy_session(REF) == "https://fishery.jackboxgames.com/artifact/gameX/session1"

    def test_from_base_strips_trailing_slash(self):
        """Test derived URLs from a base with a trailing slash."""
        endpoints = FisheryEndpoints.from_base("http://host/artifact/", "http://store/")
        assert endpoints.gallery_url == "http://host/artifact/gallery"
        assert endpoints.gif_url == "http://host/artifact/gif"
        assert endpoints.gif_file(REF, "a_b") == "http://store/gameX/session1/anim_a_b.gif"


class TestIdentifierResolver:
    """Tests for IdentifierResolver."""

    async def test_resolves_game_data(self, fishery, client_session):
        """Test ids are extracted from the gallery response."""
        fishery.sessions[("gameX", "session1")] = {
            "gameData": [
                {"type": "shareable", "gameObjectId": "1"},
                {"type": "container", "children": [{"type": "shareable", "gameObjectId": "2"}]},
            ]
        }
        resolver = IdentifierResolver(fishery.endpoints)

        assert await resolver.resolve(client_session, REF) == ["1", "2"]
        assert fishery.requests == ["/artifact/gallery/gameX/session1"]

    async def test_quiplash3_rounds(self, fishery, client_session):
        """Test quiplash3Game ids are round indices."""
        ref = SessionRef("quiplash3Game", "abc")
        fishery.sessions[("quiplash3Game", "abc")] = {"gameData": [{"blob": {"matchups": [{}, {}, {}]}}]}
        resolver = IdentifierResolver(fishery.endpoints)

        assert await resolver.resolve(client_session, ref) == ["0", "1", "2"]

    async def test_quiplash2_uses_legacy_endpoint(self, fishery, client_session):
        """Test Quiplash2Game is resolved from the legacy session endpoint."""
        ref = SessionRef("Quiplash2Game", "old")
        fishery.legacy_sessions[("Quiplash2Game", "old")] = {"matchups": [{}, {}]}
        resolver = IdentifierResolver(fishery.endpoints)

        assert await resolver.resolve(client_session, ref) == ["0", "1"]
        assert fishery.requests == ["/artifact/Quiplash2Game/old"]

    async def test_not_found(self, fishery, client_session):
        """Test an unknown session yields no ids."""
        resolver = IdentifierResolver(fishery.endpoints)
        assert await resolver.resolve(client_session, REF) == []

    async def test_unparseable_body(self, fishery, client_session, caplog):
        """Test a non-JSON body yields no ids and logs a warning."""
        fishery.sessions[("gameX", "session1")] = "<html>maintenance</html>"
        resolver = IdentifierResolver(fishery.endpoints)

        with caplog.at_level(logging.WARNING, logger="replay"):
            assert await resolver.resolve(client_session, REF) == []
        assert "gallery/gameX/session1" in caplog.text

    async def test_transport_error(self, unreachable_endpoints, client_session):
        """Test connection failures yield no ids."""
        resolver = IdentifierResolver(unreachable_endpoints)
        assert await resolver.resolve(client_session, REF) == []


class TestGifPoller:
    """Tests for GifPoller."""

    async def test_ready_immediately(self, fishery, client_session, sleep):
        """Test a ready GIF needs one probe and no delay."""
        fishery.ready_after["1"] = 1
        poller = GifPoller(fishery.endpoints, sleep=sleep)

        url = await poller.resolve_gif_url(client_session, REF, "1")

        assert url == fishery.endpoints.gif_file(REF, "1")
        assert fishery.probes["1"] == 1
        assert sleep.calls == []

    async def test_ready_on_last_attempt(self, fishery, client_session, sleep):
        """Test four failures then success uses five probes and four delays."""
        fishery.ready_after["1"] = 5
        poller = GifPoller(fishery.endpoints, max_attempts=5, retry_delay=5.0, sleep=sleep)

        url = await poller.resolve_gif_url(client_session, REF, "1")

        assert url == fishery.endpoints.gif_file(REF, "1")
        assert fishery.probes["1"] == 5
        assert sleep.calls == [5.0, 5.0, 5.0, 5.0]

    async def test_never_ready(self, fishery, client_session, sleep):
        """Test a GIF that never renders is given up after five probes."""
        poller = GifPoller(fishery.endpoints, max_attempts=5, retry_delay=5.0, sleep=sleep)

        assert await poller.resolve_gif_url(client_session, REF, "1") is None
        assert fishery.probes["1"] == 5
        assert len(sleep.calls) == 4

    async def test_ready_after_budget(self, fishery, client_session, sleep):
        """Test a GIF ready on the sixth probe is never seen."""
        fishery.ready_after["1"] = 6
        poller = GifPoller(fishery.endpoints, max_attempts=5, sleep=sleep)

        assert await poller.resolve_gif_url(client_session, REF, "1") is None
        assert fishery.probes["1"] == 5

    async def test_custom_budget(self, fishery, client_session, sleep):
        """Test attempts and delay are configurable."""
        poller = GifPoller(fishery.endpoints, max_attempts=2, retry_delay=0.5, sleep=sleep)

        assert await poller.resolve_gif_url(client_session, REF, "1") is None
        assert fishery.probes["1"] == 2
        assert sleep.calls == [0.5]

    async def test_transport_errors_consume_attempts(self, unreachable_endpoints, client_session, sleep):
        """Test connection failures are retried like non-200 responses."""
        poller = GifPoller(unreachable_endpoints, max_attempts=5, sleep=sleep)

        assert await poller.resolve_gif_url(client_session, REF, "1") is None
        assert len(sleep.calls) == 4

    def test_rejects_zero_attempts(self):
        """Test at least one probe is required."""
        with pytest.raises(ValueError):
            GifPoller(max_attempts=0)
