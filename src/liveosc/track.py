"""
Track - an audio or MIDI track with one clip slot per scene and a device chain.

Live re-sends a track's name whenever clips or devices are added to or
removed from it, so a name notification is treated as "structure may
have changed": devices are destroyed, the clip slots are rebuilt, and
the scene count, track info and device list are requested again.
"""

from typing import Dict, List

from . import addresses as addr
from .addresses import DeviceScope
from .clip import Clip
from .device import Device
from .entity import Entity, destroy_all
from .events import Change, EventChannel
from .messages import DeviceList, SendLevels, TrackInfo, TrackValue, float_arg, int_arg, str_arg
from .transport import Transport


class Track(Entity):
    """
    Mirror of a track.

    Events: name, arm, solo, mute, audio, volume, pan, send (Change.num is
    the send index), destroy. Song-wide as 'track:<field>' with id.
    """

    kind = "track"

    def __init__(self, transport: Transport, sink: EventChannel, id: int, num_scenes: int = 0):
        super().__init__(transport, sink, id)
        self.name = ''
        self.audio = 0  # 0 = MIDI, 1 = audio
        self.arm = 0
        self.solo = 0
        self.mute = 0
        self.volume = 0
        self.pan = 0
        self.sends: Dict[int, float] = {}
        self.num_scenes = num_scenes
        self.clips: List[Clip] = []
        self.devices: List[Device] = []

        self.subscribe(addr.TRACK_SEND, self._on_send)
        self.subscribe(addr.TRACK_SOLO, self._on_solo)
        self.subscribe(addr.TRACK_ARM, self._on_arm)
        self.subscribe(addr.TRACK_MUTE, self._on_mute)
        self.subscribe(addr.TRACK_VOLUME, self._on_volume)
        self.subscribe(addr.TRACK_PAN, self._on_pan)
        self.subscribe(addr.TRACK_INFO, self._on_info)
        self.subscribe(addr.TRACK_DEVICELIST, self._on_devicelist)
        self.subscribe(addr.TRACK_NAME, self._on_name)

        self.send(addr.TRACK_NAME, int_arg(id))
        self.send(addr.TRACK_SEND, int_arg(id))

    def __repr__(self):
        return f"<Track {self.id} {self.name!r} clips={len(self.clips)} devices={len(self.devices)}>"

    def destroy_children(self):
        destroy_all(self.clips)
        self.clips = []
        destroy_all(self.devices)
        self.devices = []

    # ============= INBOUND =============

    def _on_send(self, message: SendLevels):
        if message.track_id != self.id:
            return
        for num, level in message.levels:
            change = Change(value=level, prev=self.sends.get(num), num=num)
            self.publish([('send', change)], lambda: self.sends.__setitem__(num, level))

    def _on_solo(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('solo', message.value)

    def _on_arm(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('arm', message.value)

    def _on_mute(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('mute', message.value)

    def _on_volume(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('volume', message.value)

    def _on_pan(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('pan', message.value)

    def _on_info(self, message: TrackInfo):
        if message.track_id != self.id:
            return
        self.track_field('arm', message.arm)
        self.track_field('solo', message.solo)
        self.track_field('mute', message.mute)
        self.track_field('audio', message.audio)
        self.track_field('volume', message.volume)
        self.track_field('pan', message.pan)
        # Clip refresh depends on the audio flag
        self.refresh_clips()

    def _on_devicelist(self, message: DeviceList):
        if message.track_id != self.id:
            return
        destroy_all(self.devices)
        self.devices = [
            Device(self.transport, self.sink, device_id, DeviceScope.TRACK, track_id=self.id, name=name)
            for device_id, name in message.devices
        ]

    def _on_name(self, message: TrackValue):
        if message.track_id != self.id:
            return
        self.track_field('name', message.value)

        destroy_all(self.devices)
        self.devices = []
        self.refresh_clips()

        self.send(addr.SCENES)
        self.send(addr.TRACK_INFO, int_arg(self.id))
        self.send(addr.TRACK_DEVICELIST, int_arg(self.id))

    # ============= STRUCTURE =============

    def set_num_scenes(self, num_scenes: int):
        """Called by Song, the only authority on the scene count"""
        self.num_scenes = num_scenes

    def refresh_clips(self):
        """Destroy all clip slots and build num_scenes fresh ones"""
        destroy_all(self.clips)
        self.clips = []
        for scene in range(self.num_scenes):
            self.clips.append(Clip(self.transport, self.sink, self.id, scene, audio=self.audio))

    # ============= COMMANDS =============

    def set_name(self, name: str):
        self.send(addr.TRACK_NAME, int_arg(self.id), str_arg(name))

    def set_arm(self, arm: int):
        self.send(addr.TRACK_ARM, int_arg(self.id), int_arg(arm))

    def set_solo(self, solo: int):
        self.send(addr.TRACK_SOLO, int_arg(self.id), int_arg(solo))

    def set_mute(self, mute: int):
        self.send(addr.TRACK_MUTE, int_arg(self.id), int_arg(mute))

    def set_volume(self, volume: float):
        """Set the track volume (0.0 - 1.0)"""
        self.send(addr.TRACK_VOLUME, int_arg(self.id), float_arg(volume))

    def set_pan(self, pan: float):
        """Set the track panning (-1.0 - 1.0)"""
        self.send(addr.TRACK_PAN, int_arg(self.id), float_arg(pan))

    def set_send(self, send: int, level: float):
        self.send(addr.TRACK_SEND, int_arg(self.id), int_arg(send), float_arg(level))

    def view(self):
        self.send(addr.TRACK_VIEW, int_arg(self.id))
