"""
Typed LiveOSC messages.

Inbound datagrams arrive as an address plus a flat list of positional
arguments. decode() turns them into one record per message shape before
any entity sees them, so handlers read named fields instead of slicing
argument lists. Variable-length tails are grouped into fixed strides:

    /live/send 0 0 0.5 1 0.2      -> SendLevels(track_id=0, levels=((0, 0.5), (1, 0.2)))
    /live/device/param 1 0 3 0.7 Freq
                                  -> DeviceParams(track_id=1, device_id=0,
                                                  params=((3, 0.7, 'Freq'),))

Outbound arguments carry an explicit OSC type tag (Arg) so the wire type
is decided by the protocol, not by whatever Python type the caller had.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from pythonosc.osc_message_builder import OscMessageBuilder

from . import addresses as addr
from .addresses import DEVICE_ADDRESSES
from .errors import MessageDecodeError


# ============= OUTBOUND ARGUMENTS =============

ARG_INT = OscMessageBuilder.ARG_TYPE_INT
ARG_FLOAT = OscMessageBuilder.ARG_TYPE_FLOAT
ARG_STRING = OscMessageBuilder.ARG_TYPE_STRING


@dataclass(frozen=True)
class Arg:
    """One outbound argument with its OSC type tag"""
    type_tag: str
    value: Any


def int_arg(value) -> Arg:
    return Arg(ARG_INT, int(value))


def float_arg(value) -> Arg:
    return Arg(ARG_FLOAT, float(value))


def str_arg(value) -> Arg:
    return Arg(ARG_STRING, str(value))


def build_message(address: str, *args: Arg):
    """Assemble an OscMessage honouring each argument's declared tag"""
    builder = OscMessageBuilder(address=address)
    for arg in args:
        builder.add_arg(arg.value, arg.type_tag)
    return builder.build()


# ============= INBOUND RECORDS =============

@dataclass(frozen=True)
class Message:
    address: str


@dataclass(frozen=True)
class RawMessage(Message):
    """Address without a registered decoder; arguments passed through"""
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Signal(Message):
    """Argument-less notification (startup, shutdown, refresh, time)"""
    value: Optional[float] = None


@dataclass(frozen=True)
class Value(Message):
    value: Any


@dataclass(frozen=True)
class Count(Message):
    count: int


@dataclass(frozen=True)
class TrackValue(Message):
    """Single field of a track or return"""
    track_id: int
    value: Any


@dataclass(frozen=True)
class SendLevels(Message):
    track_id: int
    levels: Tuple[Tuple[int, float], ...]


@dataclass(frozen=True)
class DeviceList(Message):
    track_id: Optional[int]  # None for the master channel
    devices: Tuple[Tuple[int, str], ...]


@dataclass(frozen=True)
class TrackInfo(Message):
    track_id: int
    arm: int
    solo: int
    mute: int
    audio: int
    volume: float
    pan: float


@dataclass(frozen=True)
class ReturnInfo(Message):
    track_id: int
    solo: int
    mute: int
    volume: float
    pan: float


@dataclass(frozen=True)
class ClipValue(Message):
    track_id: int
    clip_id: int
    value: Any


@dataclass(frozen=True)
class ClipPitch(Message):
    track_id: int
    clip_id: int
    coarse: int
    fine: int


@dataclass(frozen=True)
class ClipInfo(Message):
    track_id: int
    clip_id: int
    state: int
    length: float


@dataclass(frozen=True)
class DeviceParams(Message):
    track_id: Optional[int]
    device_id: int
    params: Tuple[Tuple[int, float, str], ...]


@dataclass(frozen=True)
class DeviceRanges(Message):
    track_id: Optional[int]
    device_id: int
    ranges: Tuple[Tuple[int, float, float], ...]


# ============= DECODING =============

def _as_int(address, args, value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MessageDecodeError(address, args, f"not an id or index: {value!r}")


def _ident(address, args, position):
    return _as_int(address, args, args[position])


def _require(address, args, count):
    if len(args) < count:
        raise MessageDecodeError(address, args, f"expected at least {count} arguments, got {len(args)}")


def strides(address: str, args: Sequence, size: int) -> Tuple[tuple, ...]:
    """Group a variable-length tail into fixed-size tuples"""
    if len(args) % size:
        raise MessageDecodeError(address, tuple(args), f"tail of {len(args)} is not a multiple of {size}")
    return tuple(tuple(args[i:i + size]) for i in range(0, len(args), size))


def _signal(address, args):
    return Signal(address, args[0] if args else None)


def _value(address, args):
    _require(address, args, 1)
    return Value(address, args[0])


def _count(address, args):
    _require(address, args, 1)
    return Count(address, _ident(address, args, 0))


def _track_value(address, args):
    _require(address, args, 2)
    return TrackValue(address, _ident(address, args, 0), args[1])


def _send_levels(address, args):
    _require(address, args, 1)
    pairs = strides(address, args[1:], 2)
    return SendLevels(address, _ident(address, args, 0),
                      tuple((_as_int(address, args, num), level) for num, level in pairs))


def _device_list(scoped):
    def decode(address, args):
        track_id = None
        tail = args
        if scoped:
            _require(address, args, 1)
            track_id = _ident(address, args, 0)
            tail = args[1:]
        pairs = strides(address, tail, 2)
        return DeviceList(address, track_id, tuple((_as_int(address, args, did), name) for did, name in pairs))
    return decode


def _track_info(address, args):
    _require(address, args, 7)
    return TrackInfo(address, _ident(address, args, 0), *args[1:7])


def _return_info(address, args):
    _require(address, args, 5)
    return ReturnInfo(address, _ident(address, args, 0), *args[1:5])


def _clip_value(address, args):
    _require(address, args, 3)
    return ClipValue(address, _ident(address, args, 0), _ident(address, args, 1), args[2])


def _clip_pitch(address, args):
    _require(address, args, 3)
    fine = args[3] if len(args) > 3 else 0
    return ClipPitch(address, _ident(address, args, 0), _ident(address, args, 1),
                     args[2] or 0, fine or 0)


def _clip_info(address, args):
    _require(address, args, 3)
    length = args[3] if len(args) > 3 else 0
    return ClipInfo(address, _ident(address, args, 0), _ident(address, args, 1), args[2], length)


def _device_scope(address, args, scoped):
    """Split '[track] device tail...' into (track_id, device_id, tail)"""
    if scoped:
        _require(address, args, 2)
        return _ident(address, args, 0), _ident(address, args, 1), args[2:]
    _require(address, args, 1)
    return None, _ident(address, args, 0), args[1:]


def _device_params(scoped):
    def decode(address, args):
        track_id, device_id, tail = _device_scope(address, args, scoped)
        triples = strides(address, tail, 3)
        return DeviceParams(address, track_id, device_id,
                            tuple((_as_int(address, args, idx), value, name) for idx, value, name in triples))
    return decode


def _device_ranges(scoped):
    def decode(address, args):
        track_id, device_id, tail = _device_scope(address, args, scoped)
        triples = strides(address, tail, 3)
        return DeviceRanges(address, track_id, device_id,
                            tuple((_as_int(address, args, idx), lo, hi) for idx, lo, hi in triples))
    return decode


Decoder = Callable[[str, tuple], Message]

DECODERS: Dict[str, Decoder] = {
    addr.STARTUP: _signal,
    addr.SHUTDOWN: _signal,
    addr.REFRESH: _signal,
    addr.TIME: _signal,

    addr.TRACKS: _count,
    addr.RETURNS: _count,
    addr.SCENES: _count,

    addr.TEMPO: _value,
    addr.BEAT: _value,
    addr.SCENE: _value,
    addr.PLAY: _value,
    addr.MASTER_VOLUME: _value,
    addr.MASTER_PAN: _value,

    addr.TRACK_NAME: _track_value,
    addr.TRACK_SOLO: _track_value,
    addr.TRACK_ARM: _track_value,
    addr.TRACK_MUTE: _track_value,
    addr.TRACK_VOLUME: _track_value,
    addr.TRACK_PAN: _track_value,
    addr.TRACK_SEND: _send_levels,
    addr.TRACK_INFO: _track_info,

    addr.RETURN_NAME: _track_value,
    addr.RETURN_SOLO: _track_value,
    addr.RETURN_MUTE: _track_value,
    addr.RETURN_VOLUME: _track_value,
    addr.RETURN_PAN: _track_value,
    addr.RETURN_SEND: _send_levels,
    addr.RETURN_INFO: _return_info,

    addr.CLIP_INFO: _clip_info,
    addr.CLIP_NAME: _clip_value,
    addr.CLIP_LOOPSTART: _clip_value,
    addr.CLIP_LOOPEND: _clip_value,
    addr.CLIP_LOOPSTATE: _clip_value,
    addr.CLIP_WARPING: _clip_value,
    addr.CLIP_PITCH: _clip_pitch,
}

# Device addresses come from the per-scope table
for _addresses in DEVICE_ADDRESSES.values():
    DECODERS[_addresses.devicelist] = _device_list(_addresses.scoped)
    DECODERS[_addresses.param] = _device_params(_addresses.scoped)
    DECODERS[_addresses.allparam] = _device_params(_addresses.scoped)
    DECODERS[_addresses.range] = _device_ranges(_addresses.scoped)


def decode(address: str, args: Sequence) -> Message:
    """
    Convert one inbound datagram into a typed record.

    Raises:
        MessageDecodeError: if the arguments do not fit the address's layout
    """
    args = tuple(args)
    decoder = DECODERS.get(address)
    if decoder is None:
        return RawMessage(address, args)
    return decoder(address, args)
