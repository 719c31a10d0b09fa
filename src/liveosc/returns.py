"""
Return - a return track. Like Track but without clips, arm or audio flag.
"""

from typing import Dict, List

from . import addresses as addr
from .addresses import DeviceScope
from .device import Device
from .entity import Entity, destroy_all
from .events import Change, EventChannel
from .messages import DeviceList, ReturnInfo, SendLevels, TrackValue, float_arg, int_arg, str_arg
from .transport import Transport


class Return(Entity):
    """
    Mirror of a return track.

    Events: name, solo, mute, volume, pan, send, destroy.
    Song-wide as 'return:<field>' with id.
    """

    kind = "return"

    def __init__(self, transport: Transport, sink: EventChannel, id: int):
        super().__init__(transport, sink, id)
        self.name = ''
        self.solo = 0
        self.mute = 0
        self.volume = 0
        self.pan = 0
        self.sends: Dict[int, float] = {}
        self.devices: List[Device] = []

        self.subscribe(addr.RETURN_SEND, self._on_send)
        self.subscribe(addr.RETURN_SOLO, self._on_solo)
        self.subscribe(addr.RETURN_MUTE, self._on_mute)
        self.subscribe(addr.RETURN_VOLUME, self._on_volume)
        self.subscribe(addr.RETURN_PAN, self._on_pan)
        self.subscribe(addr.RETURN_INFO, self._on_info)
        self.subscribe(addr.RETURN_DEVICELIST, self._on_devicelist)
        self.subscribe(addr.RETURN_NAME, self._on_name)

        self.send(addr.RETURN_SEND, int_arg(id))
        self.send(addr.RETURN_NAME, int_arg(id))

    def __repr__(self):
        return f"<Return {self.id} {self.name!r} devices={len(self.devices)}>"

    def destroy_children(self):
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

    def _on_mute(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('mute', message.value)

    def _on_volume(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('volume', message.value)

    def _on_pan(self, message: TrackValue):
        if message.track_id == self.id:
            self.track_field('pan', message.value)

    def _on_info(self, message: ReturnInfo):
        if message.track_id != self.id:
            return
        self.track_field('solo', message.solo)
        self.track_field('mute', message.mute)
        self.track_field('volume', message.volume)
        self.track_field('pan', message.pan)

    def _on_devicelist(self, message: DeviceList):
        if message.track_id != self.id:
            return
        destroy_all(self.devices)
        self.devices = [
            Device(self.transport, self.sink, device_id, DeviceScope.RETURN, track_id=self.id, name=name)
            for device_id, name in message.devices
        ]

    def _on_name(self, message: TrackValue):
        """Also fires when devices are added or removed"""
        if message.track_id != self.id:
            return
        self.track_field('name', message.value)

        destroy_all(self.devices)
        self.devices = []

        self.send(addr.RETURN_INFO, int_arg(self.id))
        self.send(addr.RETURN_DEVICELIST, int_arg(self.id))

    # ============= COMMANDS =============

    def set_name(self, name: str):
        self.send(addr.RETURN_NAME, int_arg(self.id), str_arg(name))

    def set_solo(self, solo: int):
        self.send(addr.RETURN_SOLO, int_arg(self.id), int_arg(solo))

    def set_mute(self, mute: int):
        self.send(addr.RETURN_MUTE, int_arg(self.id), int_arg(mute))

    def set_volume(self, volume: float):
        self.send(addr.RETURN_VOLUME, int_arg(self.id), float_arg(volume))

    def set_pan(self, pan: float):
        self.send(addr.RETURN_PAN, int_arg(self.id), float_arg(pan))

    def set_send(self, send: int, level: float):
        self.send(addr.RETURN_SEND, int_arg(self.id), int_arg(send), float_arg(level))

    def view(self):
        self.send(addr.RETURN_VIEW, int_arg(self.id))
