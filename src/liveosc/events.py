"""
Event channels for mirrored entities.

Every entity owns one EventChannel for consumers holding a reference to
it. The Song owns the song-wide channel that re-publishes every change
as '<kind>:<field>' with the entity's identity filled in.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


@dataclass(frozen=True)
class Change:
    """
    Payload of a field change.

    value/prev are always present. name and num identify the parameter or
    send a change belongs to. id, track_id and scope are filled in when a
    change is re-published on the song-wide channel.
    """
    value: Any
    prev: Any = None
    name: Optional[str] = None
    num: Optional[int] = None
    id: Optional[int] = None
    track_id: Optional[int] = None
    scope: Optional[str] = None


Callback = Callable[..., Any]


class EventChannel:
    """Named callbacks, called in registration order"""

    def __init__(self):
        self._listeners: Dict[str, List[Callback]] = {}

    def on(self, event: str, callback: Callback) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def once(self, event: str, callback: Callback) -> None:
        """Register a callback that is removed after its first call"""
        def wrapper(*args):
            self.off(event, wrapper)
            return callback(*args)
        self.on(event, wrapper)

    def off(self, event: str, callback: Callback) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, *args) -> int:
        """
        Call every listener of event with args.

        Returns:
            Number of listeners called
        """
        listeners = list(self._listeners.get(event, ()))
        for callback in listeners:
            callback(*args)
        return len(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def clear(self) -> None:
        self._listeners.clear()
