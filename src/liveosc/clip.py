"""
Clip - one clip slot of a track.

A slot exists for every scene whether or not it holds a clip; an empty
slot has state 0. Clip state codes:

    0 = empty, 1 = stopped, 2 = playing, 3 = triggered

Warping modes:

    0 = Beats, 1 = Tones, 2 = Texture, 3 = Repitch, 4 = Complex, 5 = Complex Pro
"""

from typing import Optional

from . import addresses as addr
from .entity import Entity
from .events import EventChannel
from .messages import ClipInfo, ClipPitch, ClipValue, float_arg, int_arg, str_arg
from .transport import Transport

EMPTY = 0
STOPPED = 1
PLAYING = 2
TRIGGERED = 3


class Clip(Entity):
    """
    Mirror of a clip slot.

    Events: state, length, name, loopstart, loopend, loopstate, warping,
    coarse, fine, destroy. Song-wide as 'clip:<field>' with id and track_id.
    """

    kind = "clip"

    def __init__(self, transport: Transport, sink: EventChannel, track_id: int, id: int, audio: int = 0):
        super().__init__(transport, sink, id)
        self.track_id = track_id
        self.audio = audio  # copied from the owning track when the slot is built

        self.name: Optional[str] = None  # None until Live reports it
        self.state = EMPTY
        self.length = 0
        self.loopstart = 0
        self.loopend = 0
        self.loopstate = 0
        self.warping = 0
        self.coarse = 0
        self.fine = 0

        self.subscribe(addr.CLIP_LOOPSTART, self._on_loopstart)
        self.subscribe(addr.CLIP_LOOPEND, self._on_loopend)
        self.subscribe(addr.CLIP_LOOPSTATE, self._on_loopstate)
        self.subscribe(addr.CLIP_WARPING, self._on_warping)
        self.subscribe(addr.CLIP_PITCH, self._on_pitch)
        self.subscribe(addr.CLIP_INFO, self._on_info)
        self.subscribe(addr.CLIP_NAME, self._on_name)

        self.request_info()

    def __repr__(self):
        return f"<Clip {self.track_id}:{self.id} state={self.state} name={self.name!r}>"

    def identity(self):
        return {'id': self.id, 'track_id': self.track_id}

    @property
    def has_clip(self) -> bool:
        return self.state != EMPTY

    @property
    def is_playing(self) -> bool:
        return self.state == PLAYING

    def _mine(self, message) -> bool:
        return message.track_id == self.track_id and message.clip_id == self.id

    # ============= INBOUND =============

    def _on_loopstart(self, message: ClipValue):
        if self._mine(message):
            self.track_field('loopstart', message.value)

    def _on_loopend(self, message: ClipValue):
        if self._mine(message):
            self.track_field('loopend', message.value)

    def _on_loopstate(self, message: ClipValue):
        if self._mine(message):
            self.track_field('loopstate', message.value)

    def _on_warping(self, message: ClipValue):
        if self._mine(message):
            self.track_field('warping', message.value)

    def _on_pitch(self, message: ClipPitch):
        if not self._mine(message):
            return
        self.track_field('coarse', message.coarse)
        self.track_field('fine', message.fine)

    def _on_info(self, message: ClipInfo):
        if not self._mine(message):
            return
        self.track_field('state', message.state)
        self.track_field('length', message.length)

        if message.state > EMPTY:
            self.refresh()
        else:
            self.name = ''

    def _on_name(self, message: ClipValue):
        if not self._mine(message):
            return
        self.track_field('name', message.value)
        # Fires when clips are added or deleted; ask what the slot holds now
        self.request_info()

    # ============= REQUESTS =============

    def _ids(self):
        return int_arg(self.track_id), int_arg(self.id)

    def request_info(self):
        self.send(addr.CLIP_INFO, *self._ids())

    def refresh(self):
        """Request loop settings, audio-only fields, and the name if unknown"""
        ids = self._ids()
        self.send(addr.CLIP_LOOPSTART, *ids)
        self.send(addr.CLIP_LOOPEND, *ids)
        self.send(addr.CLIP_LOOPSTATE, *ids)
        if self.audio:
            self.send(addr.CLIP_WARPING, *ids)
            self.send(addr.CLIP_PITCH, *ids)
        if self.name is None:
            self.send(addr.CLIP_NAME, *ids)

    # ============= COMMANDS =============

    def play(self):
        self.send(addr.CLIP_PLAY, *self._ids())

    def stop(self):
        self.send(addr.CLIP_STOP, *self._ids())

    def set_name(self, name: str):
        self.send(addr.CLIP_NAME, *self._ids(), str_arg(name))

    def set_pitch(self, coarse: int, fine: int = 0):
        """Audio clips only; does nothing on MIDI tracks"""
        if not self.audio:
            return
        self.send(addr.CLIP_PITCH, *self._ids(), int_arg(coarse), int_arg(fine or 0))

    def set_loopstart(self, loopstart: float):
        self.send(addr.CLIP_LOOPSTART, *self._ids(), float_arg(loopstart))

    def set_loopend(self, loopend: float):
        self.send(addr.CLIP_LOOPEND, *self._ids(), float_arg(loopend))

    def set_loopstate(self, loopstate: int):
        self.send(addr.CLIP_LOOPSTATE, *self._ids(), int_arg(loopstate))

    def set_warping(self, warping: int):
        self.send(addr.CLIP_WARPING, *self._ids(), int_arg(warping))

    def view(self):
        self.send(addr.CLIP_VIEW, *self._ids())
