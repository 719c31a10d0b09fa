"""
liveosc - live mirror of an Ableton Live set over OSC

Talks to the LiveOSC remote script: requests the set's structure on
connect, keeps tracks, returns, clips and devices in sync from Live's
notifications, and sends commands back.
"""

__version__ = "0.1.0"

from .clip import Clip
from .config import LiveOSCConfig, apply_env_file, load_env_file
from .device import Device, Parameter
from .errors import LiveOSCError, MessageDecodeError, ParameterNotFoundError, TransportNotStartedError
from .events import Change, EventChannel
from .returns import Return
from .session import LiveOSC
from .song import Song
from .track import Track
from .transport import OscTransport, Transport

__all__ = [
    "Change",
    "Clip",
    "Device",
    "EventChannel",
    "LiveOSC",
    "LiveOSCConfig",
    "LiveOSCError",
    "MessageDecodeError",
    "OscTransport",
    "Parameter",
    "ParameterNotFoundError",
    "Return",
    "Song",
    "Track",
    "Transport",
    "TransportNotStartedError",
    "apply_env_file",
    "load_env_file",
]
