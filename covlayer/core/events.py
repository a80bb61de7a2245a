"""
Minimal publish/subscribe support for layers and group views
"""

from typing import Any, Callable, Dict, List, Optional

Listener = Callable[['Event'], Any]

class Event:
    """
    Payload passed to listeners

    ``type`` is the event name, ``target`` the emitting object. Extra keyword
    data given to ``fire`` is available as attributes.
    """

    def __init__(self, type: str, target: Any, **data: Any):
        self.type = type
        self.target = target
        self.__dict__.update(data)

    def __repr__(self):
        extra = {k: v for k, v in self.__dict__.items() if k not in ('type', 'target')}
        return f"Event(type={self.type!r}, {extra})"

class EventEmitter:
    """
    Mixin providing on/off/once/fire

    Listeners run synchronously in registration order. Exceptions raised by
    a listener propagate out of ``fire``.
    """

    def _listeners(self) -> Dict[str, List[Listener]]:
        listeners = self.__dict__.get('_event_listeners')
        if listeners is None:
            listeners = {}
            self.__dict__['_event_listeners'] = listeners
        return listeners

    def on(self, type: str, fn: Listener) -> 'EventEmitter':
        """Register ``fn`` for events named ``type``"""
        self._listeners().setdefault(type, []).append(fn)
        return self

    def off(self, type: str, fn: Optional[Listener] = None) -> 'EventEmitter':
        """Unregister ``fn``, or every listener of ``type`` if ``fn`` is None"""
        listeners = self._listeners()
        if fn is None:
            listeners.pop(type, None)
        elif type in listeners:
            # == so that bound methods read twice still compare equal
            listeners[type] = [l for l in listeners[type] if l != fn]
            if not listeners[type]:
                del listeners[type]
        return self

    def once(self, type: str, fn: Listener) -> 'EventEmitter':
        """Register ``fn`` for the next event named ``type`` only"""
        def wrapper(event):
            self.off(type, wrapper)
            return fn(event)
        return self.on(type, wrapper)

    def fire(self, type: str, **data: Any) -> 'EventEmitter':
        """Call every listener of ``type`` with an Event carrying ``data``"""
        listeners = self._listeners().get(type)
        if not listeners:
            return self
        event = Event(type, self, **data)
        # copy so listeners may unregister themselves
        for fn in list(listeners):
            fn(event)
        return self

    def has_listeners(self, type: str) -> bool:
        return bool(self._listeners().get(type))
