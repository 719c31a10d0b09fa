"""
Transport between liveosc and the LiveOSC remote script.

Transport holds the address -> handler table and the inbound path:
decode the datagram once, then hand the typed record to every handler
subscribed to that address. It does no demultiplexing beyond the
address; each entity filters by its own ids.

OscTransport binds that to python-osc on an asyncio loop:
- AsyncIOOSCUDPServer receives from Live (default port 9006)
- SimpleUDPClient sends to Live (default port 9005)
"""

import asyncio
import traceback
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

from pythonosc import dispatcher
from pythonosc import udp_client
from pythonosc.osc_server import AsyncIOOSCUDPServer

from .config import LiveOSCConfig
from .errors import MessageDecodeError, TransportNotStartedError
from .messages import Arg, Message, build_message, decode


Handler = Callable[[Message], None]


class Transport(ABC):
    """
    Subscription table and inbound fan-out shared by all transports.

    Subclasses provide send() and call_later(). Each address keeps its
    handlers in an insertion-ordered dict (constant-time membership and
    removal).
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._subscribers: Dict[str, Dict[Handler, None]] = {}

    # ============= SUBSCRIPTIONS =============

    def subscribe(self, address: str, handler: Handler) -> None:
        self._subscribers.setdefault(address, {})[handler] = None

    def unsubscribe(self, address: str, handler: Handler) -> None:
        handlers = self._subscribers.get(address)
        if not handlers or handler not in handlers:
            return
        del handlers[handler]
        if not handlers:
            del self._subscribers[address]

    def subscriber_count(self, address: Optional[str] = None) -> int:
        """Handlers on one address, or on all addresses if none given"""
        if address is not None:
            return len(self._subscribers.get(address, ()))
        return sum(len(handlers) for handlers in self._subscribers.values())

    # ============= INBOUND =============

    def deliver(self, address: str, *args) -> int:
        """
        Decode one inbound message and fan it out to its subscribers.

        A handler unsubscribed by an earlier handler of the same message
        is skipped. Handler exceptions are reported and do not stop the
        remaining handlers.

        Returns:
            Number of handlers called
        """
        if self.verbose:
            print(f"[OSC] From Live: {address} {list(args)}")

        handlers = self._subscribers.get(address)
        if not handlers:
            return 0

        try:
            message = decode(address, args)
        except MessageDecodeError as e:
            print(f"[OSC] Dropped malformed message: {e}")
            return 0

        called = 0
        for handler in list(handlers):
            if handler not in self._subscribers.get(address, ()):
                continue
            called += 1
            try:
                handler(message)
            except Exception as e:
                print(f"[OSC] Handler error on {address}: {e!r}")
                if self.verbose:
                    traceback.print_exc()
        return called

    # ============= OUTBOUND =============

    @abstractmethod
    def send(self, address: str, *args: Arg) -> None:
        pass

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]):
        """Schedule callback after delay seconds; returns a handle with cancel()"""


class OscTransport(Transport):
    """python-osc transport running on the current asyncio loop"""

    def __init__(self, config: Optional[LiveOSCConfig] = None):
        config = config or LiveOSCConfig.from_env()
        super().__init__(verbose=config.verbose)
        self.config = config

        self.dispatcher = dispatcher.Dispatcher()
        self.dispatcher.set_default_handler(self.deliver)
        self.client = udp_client.SimpleUDPClient(config.live_host, config.live_port)

        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self._endpoint = None

    async def start(self) -> None:
        """Bind the receiving socket on the running loop"""
        if self._endpoint is not None:
            return
        self.loop = asyncio.get_running_loop()
        server = AsyncIOOSCUDPServer((self.config.host, self.config.port), self.dispatcher, self.loop)
        self._endpoint, _ = await server.create_serve_endpoint()

        host, port = self.bound_address
        print(f"[OSC] Listening on {host}:{port}, Live at {self.config.live_host}:{self.config.live_port}")

    @property
    def running(self) -> bool:
        return self._endpoint is not None

    @property
    def bound_address(self) -> Tuple[str, int]:
        if self._endpoint is None:
            raise TransportNotStartedError("transport is not started")
        sockname = self._endpoint.get_extra_info('sockname')
        return sockname[0], sockname[1]

    def close(self) -> None:
        """Release the receiving endpoint and the sending socket"""
        self.client._sock.close()
        if self._endpoint is None:
            return
        self._endpoint.close()
        self._endpoint = None
        if self.verbose:
            print("[OSC] Closed")

    def send(self, address: str, *args: Arg) -> None:
        if self.verbose:
            print(f"[OSC] To Live: {address} {[arg.value for arg in args]}")
        self.client.send(build_message(address, *args))

    def call_later(self, delay: float, callback: Callable[[], None]):
        if self.loop is None:
            raise TransportNotStartedError("transport must be started before scheduling")
        return self.loop.call_later(delay, callback)
