"""
Grouping of data layers by equivalent Parameter

A ParameterReconciler keeps track of which layers show which parameter so
that shared controls (one legend per parameter, common palette extents,
axis selectors) can be driven from a single ParameterGroup instead of from
every layer individually.

Example
-------
    reconciler = ParameterReconciler(sync_properties={
        'palette_extent': merge_extents,
    })
    reconciler.on('parameter_add', lambda e: make_legend(e.group))
    reconciler.add_layer(layer)

The reconciler is not thread-safe. Drive it from a single event loop or
serialize calls to ``add_layer`` and ``remove_layer``.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable
from functools import reduce
import logging

from ..core.config import SyncConfig
from ..core.datatypes import Parameter
from ..core.events import EventEmitter, Listener
from .matching import default_match

logger = logging.getLogger(__name__)

@runtime_checkable
class ParameterSource(Protocol):
    """Anything with an optional ``parameter`` attribute"""
    parameter: Optional[Parameter]

@runtime_checkable
class EventSource(Protocol):
    """Anything that can register and unregister named listeners"""
    def on(self, type: str, fn: Listener) -> Any: ...
    def off(self, type: str, fn: Optional[Listener] = None) -> Any: ...

class ParameterGroup(EventEmitter):
    """
    Public view of the layers sharing one parameter

    Fires 'remove' once its last layer is gone and '<prop>_change' when a
    synchronized property changes. Synchronized properties can be read and
    written as attributes: reading returns the value of the first layer,
    writing sets the value on every layer.

    The layer set is only changed through the owning reconciler.
    """

    def __init__(self, parameter: Parameter, reconciler: 'ParameterReconciler'):
        object.__setattr__(self, '_parameter', parameter)
        object.__setattr__(self, '_reconciler', reconciler)
        object.__setattr__(self, '_layers', {})
        object.__setattr__(self, '_active', True)

    @property
    def parameter(self) -> Parameter:
        """The canonical parameter of the group"""
        return self._parameter

    @property
    def layers(self) -> Tuple[Any, ...]:
        """Layers currently attached, in attach order"""
        return tuple(self._layers.values())

    @property
    def active(self) -> bool:
        """False once the last layer has been removed"""
        return self._active

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, layer: Any) -> bool:
        return id(layer) in self._layers

    def get_property(self, name: str) -> Any:
        if not self._layers:
            raise AttributeError(f"Group has no layers to read '{name}' from")
        first = next(iter(self._layers.values()))
        return getattr(first, name, None)

    def set_property(self, name: str, value: Any) -> None:
        self._reconciler._set_group_property(self, name, value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_') or name not in self._reconciler.sync_properties:
            raise AttributeError(name)
        return self.get_property(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._reconciler.sync_properties:
            self.set_property(name, value)
        else:
            object.__setattr__(self, name, value)

    def __repr__(self):
        obs = getattr(self._parameter, 'observed_property', None)
        label = getattr(obs, 'id', None) or getattr(self._parameter, 'key', None)
        return f"ParameterGroup({label!r}, layers={len(self._layers)})"

class _Attachment:
    """Bookkeeping for one attached layer"""
    __slots__ = ('layer', 'group', 'listeners')

    def __init__(self, layer: Any, group: ParameterGroup):
        self.layer = layer
        self.group = group
        self.listeners: List[Tuple[str, Listener]] = []

class ParameterReconciler(EventEmitter):
    """
    Groups layers by equivalent Parameter and keeps selected layer
    properties in sync within each group

    Parameters
    ----------
    config : SyncConfig, optional
        Synchronized properties and match function
    sync_properties : dict, optional
        Property name -> binary merge function. Overrides ``config``.
    match : callable, optional
        ``(Parameter, Parameter) -> bool``. Overrides ``config``.

    Events
    ------
    parameter_add
        A layer with a new parameter was added. ``event.group`` is the
        ParameterGroup.
    parameter_remove
        The last layer of a group was removed. ``event.group`` is the group,
        which has already fired its own 'remove' event.
    """

    def __init__(self,
                 config: Optional[SyncConfig] = None,
                 sync_properties: Optional[Dict[str, Callable[[Any, Any], Any]]] = None,
                 match: Optional[Callable[[Any, Any], bool]] = None):
        config = config or SyncConfig()
        self._sync_props = dict(sync_properties if sync_properties is not None
                                else config.sync_properties)
        self._match = match or config.match or default_match
        self._groups: List[ParameterGroup] = []
        self._attachments: Dict[int, _Attachment] = {}
        self._prop_syncing = set()
        self.paused = False

    @property
    def sync_properties(self) -> Tuple[str, ...]:
        return tuple(self._sync_props)

    @property
    def groups(self) -> Tuple[ParameterGroup, ...]:
        return tuple(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def group_for(self, layer: Any) -> Optional[ParameterGroup]:
        """The group a layer is attached to, or None"""
        attachment = self._attachments.get(id(layer))
        return attachment.group if attachment else None

    def add_layer(self, layer: Any) -> Optional[ParameterGroup]:
        """
        Attach a layer to the group of its parameter

        Layers without a parameter are ignored. If no tracked parameter
        matches, a new group is created and 'parameter_add' is fired.
        Layers with an ``on`` method are detached automatically when they
        fire 'remove'.

        Parameters
        ----------
        layer : ParameterSource
            Layer to attach

        Returns
        -------
        ParameterGroup or None
            The group the layer was attached to
        """
        param = getattr(layer, 'parameter', None)
        if param is None:
            logger.debug("Layer %r has no parameter, skipping parameter sync", layer)
            return None

        existing = self.group_for(layer)
        if existing is not None:
            return existing

        group = next((g for g in self._groups if self._matches(g.parameter, param)), None)
        created = group is None
        if created:
            group = ParameterGroup(param, self)
            self._groups.append(group)
            logger.debug("New parameter group for %r", group)

        group._layers[id(layer)] = layer
        attachment = _Attachment(layer, group)
        self._attachments[id(layer)] = attachment
        self._register_listeners(attachment)

        if created:
            self.fire('parameter_add', group=group)
        else:
            self._sync_properties(group)
        return group

    def remove_layer(self, layer: Any) -> None:
        """
        Detach a layer

        Removing the last layer of a group discards the group: the group
        fires 'remove' and the reconciler fires 'parameter_remove'. Unknown
        layers are ignored.
        """
        attachment = self._attachments.pop(id(layer), None)
        if attachment is None:
            return

        off = getattr(layer, 'off', None)
        if off is not None:
            for type, fn in attachment.listeners:
                off(type, fn)

        group = attachment.group
        del group._layers[id(layer)]
        if group._layers:
            return

        self._groups.remove(group)
        object.__setattr__(group, '_active', False)
        logger.debug("Parameter group %r removed", group)
        # the group's own 'remove' event is the one meant for outside use
        self.fire('_parameter_remove', group=group)
        group.fire('remove')
        self.fire('parameter_remove', group=group)

    def pause(self) -> None:
        """
        Pause synchronization, e.g. while setting a property on many layers
        by hand
        """
        self.paused = True

    def resume(self, sync: bool = False) -> None:
        """
        Resume synchronization

        Parameters
        ----------
        sync : bool
            If True, synchronize all groups immediately
        """
        self.paused = False
        if sync:
            for group in self._groups:
                self._sync_properties(group)

    def _matches(self, canonical: Parameter, param: Parameter) -> bool:
        try:
            return bool(self._match(canonical, param))
        except Exception as e:
            logger.warning("Parameter match function failed, treating as no match: %s", e)
            return False

    def _register_listeners(self, attachment: _Attachment) -> None:
        layer = attachment.layer
        on = getattr(layer, 'on', None)
        if on is None:
            return

        group = attachment.group
        listeners = [('remove', lambda e: self.remove_layer(layer))]
        for prop in self._sync_props:
            listeners.append((prop + '_change',
                              lambda e, prop=prop: self._sync_property(group, prop)))
        for type, fn in listeners:
            on(type, fn)
        attachment.listeners = listeners

    def _sync_properties(self, group: ParameterGroup) -> None:
        for prop in self._sync_props:
            self._sync_property(group, prop)

    def _sync_property(self, group: ParameterGroup, prop: str) -> None:
        if self.paused or prop in self._prop_syncing or not group._layers:
            return
        merge = self._sync_props[prop]
        unified = reduce(merge, (getattr(layer, prop, None) for layer in group.layers))
        self._write_property(group, prop, unified)

    def _set_group_property(self, group: ParameterGroup, prop: str, value: Any) -> None:
        if prop not in self._sync_props:
            raise AttributeError(f"'{prop}' is not a synchronized property")
        self._write_property(group, prop, value)

    def _write_property(self, group: ParameterGroup, prop: str, value: Any) -> None:
        # while writing, ignore change events from the layers to prevent cycles
        self._prop_syncing.add(prop)
        try:
            for layer in group.layers:
                setattr(layer, prop, value)
        finally:
            self._prop_syncing.discard(prop)
        group.fire(prop + '_change')
