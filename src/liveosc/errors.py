"""
Exception types raised by liveosc.

Only the synchronous command path raises to callers (unresolved parameter
names). Decode errors are raised and caught inside the transport.
"""


class LiveOSCError(Exception):
    """Base class for all liveosc errors"""


class ParameterNotFoundError(LiveOSCError, KeyError):
    """A parameter name did not match any known parameter of a device"""

    def __init__(self, name: str, device_name: str = None):
        self.name = name
        self.device_name = device_name
        where = f" on device '{device_name}'" if device_name else ""
        super().__init__(f"No parameter with name '{name}'{where}")

    def __str__(self):
        # KeyError quotes its argument otherwise
        return self.args[0]


class MessageDecodeError(LiveOSCError, ValueError):
    """An inbound datagram did not match its address's argument layout"""

    def __init__(self, address: str, args: tuple, reason: str):
        self.address = address
        self.args_received = args
        self.reason = reason
        super().__init__(f"{address} {list(args)}: {reason}")


class TransportNotStartedError(LiveOSCError, RuntimeError):
    """The transport was used before start() bound it to an event loop"""
