"""
Tests for the LiveOSC session facade
"""

import asyncio

import pytest

from liveosc import addresses as addr
from liveosc.config import LiveOSCConfig
from liveosc.session import LiveOSC

from fakes import FakeTransport


class TestLiveOSC:

    def setup_method(self):
        self.transport = FakeTransport()
        self.live = LiveOSC(LiveOSCConfig(wait_time=0.25), transport=self.transport)

    def test_start_builds_song(self):
        song = asyncio.run(self.live.start())
        assert song is self.live.song
        assert song.wait_time == 0.25
        assert addr.TRACKS in self.transport.addresses()

    def test_start_twice_keeps_song(self):
        async def scenario():
            first = await self.live.start()
            second = await self.live.start()
            return first, second

        first, second = asyncio.run(scenario())
        assert first is second

    def test_wait_ready(self):
        async def scenario():
            await self.live.start()
            asyncio.get_running_loop().call_soon(self.transport.deliver, addr.TIME, 1.0)
            return await self.live.wait_ready(timeout=1.0)

        song = asyncio.run(scenario())
        assert song is self.live.song
        assert song.events.listener_count('ready') == 0

    def test_wait_ready_timeout(self):
        async def scenario():
            await self.live.wait_ready(timeout=0.01)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(scenario())
        assert self.live.song.events.listener_count('ready') == 0

    def test_context_manager_closes(self):
        async def scenario():
            async with self.live as live:
                return live.song

        song = asyncio.run(scenario())
        assert song.destroyed
        assert self.live.song is None
        assert self.transport.subscriber_count() == 0
