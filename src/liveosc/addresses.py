"""
LiveOSC address namespace.

Addresses and argument layouts are fixed by the LiveOSC remote script
running inside Ableton Live. Device addressing differs per owner kind:
track and return devices are scoped by a leading track id, master devices
are not, and the master "allparam" reply arrives on the info address
itself. That asymmetry is kept as an explicit table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


# Session signals
STARTUP = '/remix/oscserver/startup'
SHUTDOWN = '/remix/oscserver/shutdown'
REFRESH = '/live/refresh'

# Song / transport
TRACKS = '/live/tracks'
RETURNS = '/live/returns'
SCENES = '/live/scenes'
TIME = '/live/time'
TEMPO = '/live/tempo'
BEAT = '/live/beat'
SCENE = '/live/scene'
PLAY = '/live/play'
STOP = '/live/stop'
PLAY_CONTINUE = '/live/play/continue'
NEXT_CUE = '/live/next/cue'
PREV_CUE = '/live/prev/cue'
UNDO = '/live/undo'
REDO = '/live/redo'

# Master channel
MASTER_VOLUME = '/live/master/volume'
MASTER_PAN = '/live/master/pan'
MASTER_VIEW = '/live/master/view'
MASTER_DEVICELIST = '/live/master/devicelist'

# Tracks
TRACK_NAME = '/live/name/track'
TRACK_INFO = '/live/track/info'
TRACK_VIEW = '/live/track/view'
TRACK_SEND = '/live/send'
TRACK_SOLO = '/live/solo'
TRACK_ARM = '/live/arm'
TRACK_MUTE = '/live/mute'
TRACK_VOLUME = '/live/volume'
TRACK_PAN = '/live/pan'
TRACK_DEVICELIST = '/live/devicelist'

# Returns
RETURN_NAME = '/live/name/return'
RETURN_INFO = '/live/return/info'
RETURN_VIEW = '/live/return/view'
RETURN_SEND = '/live/return/send'
RETURN_SOLO = '/live/return/solo'
RETURN_MUTE = '/live/return/mute'
RETURN_VOLUME = '/live/return/volume'
RETURN_PAN = '/live/return/pan'
RETURN_DEVICELIST = '/live/return/devicelist'

# Clips
CLIP_NAME = '/live/name/clip'
CLIP_INFO = '/live/clip/info'
CLIP_VIEW = '/live/clip/view'
CLIP_LOOPSTART = '/live/clip/loopstart'
CLIP_LOOPEND = '/live/clip/loopend'
CLIP_LOOPSTATE = '/live/clip/loopstate'
CLIP_WARPING = '/live/clip/warping'
CLIP_PITCH = '/live/pitch'
CLIP_PLAY = '/live/play/clipslot'
CLIP_STOP = '/live/stop/clip'


class DeviceScope(Enum):
    """Kind of channel a device lives on"""
    TRACK = "track"
    RETURN = "return"
    MASTER = "master"


@dataclass(frozen=True)
class DeviceAddresses:
    """Address set used by devices of one scope"""
    info: str
    range: str
    param: str
    allparam: str
    view: str
    devicelist: str
    scoped: bool  # leading track/return id before the device id


DEVICE_ADDRESSES: Dict[DeviceScope, DeviceAddresses] = {
    DeviceScope.TRACK: DeviceAddresses(
        info='/live/device',
        range='/live/device/range',
        param='/live/device/param',
        allparam='/live/device/allparam',
        view='/live/track/device/view',
        devicelist=TRACK_DEVICELIST,
        scoped=True,
    ),
    DeviceScope.RETURN: DeviceAddresses(
        info='/live/return/device',
        range='/live/return/device/range',
        param='/live/return/device/param',
        allparam='/live/return/device/allparam',
        view='/live/return/device/view',
        devicelist=RETURN_DEVICELIST,
        scoped=True,
    ),
    DeviceScope.MASTER: DeviceAddresses(
        info='/live/master/device',
        range='/live/master/device/range',
        param='/live/master/device/param',
        allparam='/live/master/device',
        view='/live/master/device/view',
        devicelist=MASTER_DEVICELIST,
        scoped=False,
    ),
}
