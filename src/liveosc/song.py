"""
Song - root of the mirrored Live set.

Owns every track, return and master device, the transport state and the
song-wide event channel. Construction issues a refresh; count replies
from Live then build the child entities, each of which requests its own
state.

Refresh protocol:
1. Destroy all tracks, returns and master devices
2. Request track/return counts, master volume/pan, tempo, master devices
3. After wait_time, probe /live/time; its reply is announced as 'ready'

'ready' only means the first wave of replies has probably arrived.
Replies are unordered and may be lost, so later updates can still come in.
"""

from typing import List, Optional

from . import addresses as addr
from .addresses import DeviceScope
from .config import DEFAULT_WAIT_TIME
from .device import Device
from .entity import Entity, destroy_all
from .events import EventChannel
from .messages import Count, DeviceList, Signal, Value, float_arg, int_arg
from .returns import Return
from .track import Track
from .transport import Transport

STOPPED = 1
PLAYING = 2


class Song(Entity):
    """
    Mirror of the Live set.

    Song events: ready, refresh, play, beat, tempo, scene, volume, pan,
    each field also as 'song:<field>'. The same channel carries every
    child event as '<kind>:<field>' (track:, return:, clip:, device:).
    """

    kind = "song"

    def __init__(self, transport: Transport, wait_time: float = DEFAULT_WAIT_TIME):
        sink = EventChannel()
        super().__init__(transport, sink, None)
        # The song's own channel is the song-wide channel
        self.events = sink
        self.wait_time = wait_time
        self.verbose = transport.verbose

        self.tempo = 120.0
        self.volume = 0
        self.pan = 0
        self.scene = 0
        self.beat = 0
        self.playing = STOPPED
        self.num_scenes = 0

        self.tracks: List[Track] = []
        self.returns: List[Return] = []
        self.devices: List[Device] = []

        self._ready_probe = None

        self.subscribe(addr.PLAY, self._on_play)
        self.subscribe(addr.BEAT, self._on_beat)
        self.subscribe(addr.TEMPO, self._on_tempo)
        self.subscribe(addr.SCENE, self._on_scene)
        self.subscribe(addr.MASTER_VOLUME, self._on_volume)
        self.subscribe(addr.MASTER_PAN, self._on_pan)
        self.subscribe(addr.TRACKS, self._on_tracks)
        self.subscribe(addr.RETURNS, self._on_returns)
        self.subscribe(addr.SCENES, self._on_scenes)
        self.subscribe(addr.MASTER_DEVICELIST, self._on_devicelist)
        self.subscribe(addr.STARTUP, self._on_refresh)
        self.subscribe(addr.SHUTDOWN, self._on_refresh)
        self.subscribe(addr.REFRESH, self._on_refresh)
        self.subscribe(addr.TIME, self._on_time)

        self.refresh()

    def __repr__(self):
        return (f"<Song tempo={self.tempo} tracks={len(self.tracks)} "
                f"returns={len(self.returns)} scenes={self.num_scenes}>")

    def identity(self):
        return {}

    @property
    def is_playing(self) -> bool:
        return self.playing == PLAYING

    # ============= LIFECYCLE =============

    def refresh(self):
        """Throw away the mirrored set and request everything again"""
        if self.destroyed:
            return
        if self.verbose:
            print(f"[SONG] Refresh: dropping {len(self.tracks)} tracks, "
                  f"{len(self.returns)} returns, {len(self.devices)} master devices")

        self.events.emit('refresh')
        self.destroy_children()

        self.send(addr.TRACKS)
        self.send(addr.RETURNS)
        self.send(addr.MASTER_VOLUME)
        self.send(addr.MASTER_PAN)
        self.send(addr.TEMPO)
        self.send(addr.MASTER_DEVICELIST)

        self._cancel_probe()
        self._ready_probe = self.transport.call_later(self.wait_time, self._probe_ready)

    def teardown(self):
        """Destroy the whole graph and stop listening"""
        self.destroy()

    def destroy(self):
        self._cancel_probe()
        super().destroy()

    def destroy_children(self):
        destroy_all(self.tracks)
        self.tracks = []
        destroy_all(self.returns)
        self.returns = []
        destroy_all(self.devices)
        self.devices = []

    def _cancel_probe(self):
        if self._ready_probe is not None:
            self._ready_probe.cancel()
            self._ready_probe = None

    def _probe_ready(self):
        self._ready_probe = None
        if not self.destroyed:
            self.send(addr.TIME)

    # ============= INBOUND =============

    def _on_play(self, message: Value):
        self.track_field('playing', message.value, event='play')

    def _on_beat(self, message: Value):
        self.track_field('beat', message.value)

    def _on_tempo(self, message: Value):
        self.track_field('tempo', message.value)

    def _on_scene(self, message: Value):
        self.track_field('scene', message.value)

    def _on_volume(self, message: Value):
        self.track_field('volume', message.value)

    def _on_pan(self, message: Value):
        self.track_field('pan', message.value)

    def _on_tracks(self, message: Count):
        # A second reply (overlapping refreshes) replaces the first set
        destroy_all(self.tracks)
        self.tracks = [
            Track(self.transport, self.sink, track_id, num_scenes=self.num_scenes)
            for track_id in range(message.count)
        ]
        if self.verbose:
            print(f"[SONG] Built {len(self.tracks)} tracks")
        self.send(addr.SCENES)

    def _on_returns(self, message: Count):
        destroy_all(self.returns)
        self.returns = [Return(self.transport, self.sink, return_id) for return_id in range(message.count)]
        if self.verbose:
            print(f"[SONG] Built {len(self.returns)} returns")

    def _on_scenes(self, message: Count):
        self.num_scenes = message.count
        for track in self.tracks:
            track.set_num_scenes(message.count)
            track.refresh_clips()

    def _on_devicelist(self, message: DeviceList):
        destroy_all(self.devices)
        self.devices = [
            Device(self.transport, self.sink, device_id, DeviceScope.MASTER, name=name)
            for device_id, name in message.devices
        ]

    def _on_refresh(self, message: Signal):
        self.refresh()

    def _on_time(self, message: Signal):
        self.events.emit('ready')

    # ============= COMMANDS =============

    def play(self):
        self.send(addr.PLAY)

    def stop(self):
        self.send(addr.STOP)

    def continue_playing(self):
        self.send(addr.PLAY_CONTINUE)

    def next_cue(self):
        self.send(addr.NEXT_CUE)

    def prev_cue(self):
        self.send(addr.PREV_CUE)

    def undo(self):
        self.send(addr.UNDO)

    def redo(self):
        self.send(addr.REDO)

    def view(self):
        """Focus the master track"""
        self.send(addr.MASTER_VIEW)

    def play_scene(self, scene: int):
        self.send(addr.SCENE, int_arg(scene))

    def set_volume(self, volume: float):
        self.send(addr.MASTER_VOLUME, float_arg(volume))

    def set_pan(self, pan: float):
        self.send(addr.MASTER_PAN, float_arg(pan))

    def set_tempo(self, tempo: float):
        self.send(addr.TEMPO, float_arg(tempo))

    # ============= LOOKUP =============

    def track(self, name: str) -> Optional[Track]:
        """First track with the given name"""
        for track in self.tracks:
            if track.name == name:
                return track
        return None

    def return_track(self, name: str) -> Optional[Return]:
        for ret in self.returns:
            if ret.name == name:
                return ret
        return None
