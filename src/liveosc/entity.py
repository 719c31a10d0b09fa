"""
Base class for mirrored Live objects (Song, Track, Return, Clip, Device).

An entity:
- registers its own transport handlers and removes exactly those on destroy()
- publishes each change twice: first on its own channel under the field
  name, then on the song-wide channel as '<kind>:<field>' with its ids
- stores mirrored values only from inbound handlers; command methods
  only send
"""

from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .events import Change, EventChannel
from .messages import Arg
from .transport import Handler, Transport


class Entity:

    kind = "entity"

    def __init__(self, transport: Transport, sink: EventChannel, id: Optional[int]):
        self.transport = transport
        self.sink = sink
        self.id = id
        self.events = EventChannel()
        self.destroyed = False
        self._subscriptions: List[Tuple[str, Handler]] = []

    # ============= CONSUMER API =============

    def on(self, event: str, callback: Callable) -> None:
        """Listen for an entity event (field name, or 'destroy')"""
        self.events.on(event, callback)

    def off(self, event: str, callback: Callable) -> None:
        self.events.off(event, callback)

    # ============= LIFECYCLE =============

    def subscribe(self, address: str, handler: Handler) -> None:
        self.transport.subscribe(address, handler)
        self._subscriptions.append((address, handler))

    @property
    def subscriptions(self) -> Sequence[Tuple[str, Handler]]:
        return tuple(self._subscriptions)

    def destroy(self) -> None:
        """Drop every handler this entity registered and destroy its children"""
        if self.destroyed:
            return
        self.destroyed = True
        self.events.emit('destroy')
        self.events.clear()
        for address, handler in self._subscriptions:
            self.transport.unsubscribe(address, handler)
        self._subscriptions.clear()
        self.destroy_children()

    def destroy_children(self) -> None:
        pass

    # ============= PUBLISHING =============

    def identity(self) -> Dict[str, object]:
        """Fields added to payloads on the song-wide channel"""
        return {'id': self.id}

    def publish(self, changes: Iterable[Tuple[str, Change]], commit: Optional[Callable[[], None]] = None) -> None:
        """
        Two-stage publish: local channel, store, song-wide channel.

        commit() runs between the stages so local listeners can still read
        the previous value from the entity.
        """
        changes = list(changes)
        for event, change in changes:
            self.events.emit(event, change)
        if commit is not None:
            commit()
        scope = self.identity()
        for event, change in changes:
            self.sink.emit(f"{self.kind}:{event}", replace(change, **scope))

    def track_field(self, field: str, value, event: Optional[str] = None) -> None:
        """Publish and store a new value for a scalar attribute"""
        change = Change(value=value, prev=getattr(self, field))
        self.publish([(event or field, change)], lambda: setattr(self, field, value))

    def send(self, address: str, *args: Arg) -> None:
        self.transport.send(address, *args)


def destroy_all(entities: Iterable[Entity]) -> None:
    for entity in list(entities):
        entity.destroy()
