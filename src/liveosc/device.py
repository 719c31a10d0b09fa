"""
Device - an instrument or effect on a track, return, or the master channel.

Parameters are kept in a sparse table keyed by parameter index and are
created the first time any message mentions that index. Setting a
parameter by name resolves it through a name -> index lookup that is
rebuilt whenever a parameter name changes.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .addresses import DEVICE_ADDRESSES, DeviceScope
from .entity import Entity
from .errors import ParameterNotFoundError
from .events import Change, EventChannel
from .messages import DeviceParams, DeviceRanges, float_arg, int_arg
from .transport import Transport


@dataclass
class Parameter:
    id: int
    value: Optional[float] = None
    name: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None


class Device(Entity):
    """
    Mirror of one device.

    Events:
        param               any parameter change (Change.name / Change.num identify it)
        <parameter name>    change of that parameter
        destroy

    Song-wide as 'device:<event>' with id, scope and, except on the
    master channel, track_id.

    Parameter-named events share the namespace of param and destroy: a
    parameter called "param" or "destroy" also fires those listeners.
    """

    kind = "device"

    def __init__(self, transport: Transport, sink: EventChannel, id: int,
                 scope: DeviceScope, track_id: Optional[int] = None, name: str = ''):
        super().__init__(transport, sink, id)
        self.scope = DeviceScope(scope)
        self.addresses = DEVICE_ADDRESSES[self.scope]
        self.track_id = track_id if self.addresses.scoped else None
        self.name = name
        self.params: Dict[int, Parameter] = {}
        self._param_index: Dict[str, int] = {}

        self.subscribe(self.addresses.range, self._on_range)
        self.subscribe(self.addresses.allparam, self._on_allparam)
        self.subscribe(self.addresses.param, self._on_param)

        self.send(self.addresses.info, *self._ids())
        self.send(self.addresses.range, *self._ids())

    def __repr__(self):
        owner = self.scope.value if self.track_id is None else f"{self.scope.value} {self.track_id}"
        return f"<Device {self.id} {self.name!r} on {owner}>"

    def identity(self):
        scope = {'id': self.id, 'scope': self.scope.value}
        if self.addresses.scoped:
            scope['track_id'] = self.track_id
        return scope

    def _ids(self):
        if self.addresses.scoped:
            return int_arg(self.track_id), int_arg(self.id)
        return (int_arg(self.id),)

    def _mine(self, message) -> bool:
        if self.addresses.scoped and message.track_id != self.track_id:
            return False
        return message.device_id == self.id

    def _param(self, index: int) -> Parameter:
        param = self.params.get(index)
        if param is None:
            param = self.params[index] = Parameter(id=index)
        return param

    # ============= PARAMETER LOOKUP =============

    def _reindex(self):
        self._param_index = {}
        for index in sorted(self.params):
            name = self.params[index].name
            if name is not None and name not in self._param_index:
                self._param_index[name] = index

    def find_param(self, name: str) -> Optional[Parameter]:
        index = self._param_index.get(name)
        return None if index is None else self.params[index]

    def resolve_param(self, param: Union[int, str]) -> int:
        """
        Turn a parameter index or name into an index.

        Raises:
            ParameterNotFoundError: if a name matches no known parameter
        """
        if isinstance(param, str):
            found = self.find_param(param)
            if found is None:
                raise ParameterNotFoundError(param, self.name)
            return found.id
        return int(param)

    # ============= INBOUND =============

    def _on_range(self, message: DeviceRanges):
        if not self._mine(message):
            return
        for index, lo, hi in message.ranges:
            param = self._param(index)
            param.min = lo
            param.max = hi

    def _on_param(self, message: DeviceParams):
        if not self._mine(message):
            return
        for index, value, name in message.params:
            self._update_param(index, value, name)

    def _on_allparam(self, message: DeviceParams):
        """Full parameter dump; only changed values are published"""
        if not self._mine(message):
            return
        for index, value, name in message.params:
            param = self._param(index)
            if param.value != value:
                self._update_param(index, value, name)
            elif param.name != name:
                param.name = name
                self._reindex()

    def _update_param(self, index: int, value, name: str):
        param = self._param(index)
        prev = param.value

        def commit():
            renamed = param.name != name
            param.value = value
            param.name = name
            if renamed:
                self._reindex()

        self.publish([
            ('param', Change(value=value, prev=prev, name=name, num=index)),
            (name, Change(value=value, prev=prev)),
        ], commit)

    # ============= COMMANDS =============

    def set(self, param: Union[int, str], value: float):
        """
        Set a parameter by index or by name.

        Raises:
            ParameterNotFoundError: if param is a name with no match; nothing is sent
        """
        index = self.resolve_param(param)
        self.send(self.addresses.info, *self._ids(), int_arg(index), float_arg(value))

    def view(self):
        self.send(self.addresses.view, *self._ids())
