"""
LiveOSC session - one transport plus the Song mirror built on it.

Usage:
    async with LiveOSC() as live:
        await live.wait_ready(timeout=5.0)
        print(live.song.tempo)
"""

import asyncio
from typing import Optional

from .config import LiveOSCConfig
from .song import Song
from .transport import OscTransport, Transport


class LiveOSC:
    """Owns the transport and the Song for the lifetime of a connection"""

    def __init__(self, config: Optional[LiveOSCConfig] = None, transport: Optional[Transport] = None):
        self.config = config or LiveOSCConfig.from_env()
        self.transport = transport if transport is not None else OscTransport(self.config)
        self.song: Optional[Song] = None

    async def start(self) -> Song:
        """Start the transport and build the Song (which refreshes immediately)"""
        if self.song is not None:
            return self.song
        start = getattr(self.transport, 'start', None)
        if start is not None:
            await start()
        self.song = Song(self.transport, wait_time=self.config.wait_time)
        return self.song

    async def wait_ready(self, timeout: Optional[float] = None) -> Song:
        """
        Wait for the next 'ready' event.

        Raises:
            asyncio.TimeoutError: if no 'ready' arrives within timeout seconds
        """
        song = await self.start()
        future = asyncio.get_running_loop().create_future()

        def on_ready():
            if not future.done():
                future.set_result(song)

        song.events.on('ready', on_ready)
        try:
            return await asyncio.wait_for(future, timeout)
        finally:
            song.events.off('ready', on_ready)

    def close(self) -> None:
        if self.song is not None:
            self.song.teardown()
            self.song = None
        close = getattr(self.transport, 'close', None)
        if close is not None:
            close()

    async def __aenter__(self) -> "LiveOSC":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
