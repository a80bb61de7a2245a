"""
Tests for the event emitter mixin
"""

import pytest

from covlayer.core.events import EventEmitter


class Emitter(EventEmitter):
    pass


class TestEventEmitter:

    @pytest.fixture
    def emitter(self):
        return Emitter()

    def test_fire_passes_data(self, emitter):
        received = []
        emitter.on('change', received.append)
        emitter.fire('change', value=3)

        assert len(received) == 1
        assert received[0].type == 'change'
        assert received[0].target is emitter
        assert received[0].value == 3

    def test_off(self, emitter):
        calls = []
        fn = lambda e: calls.append(1)
        emitter.on('change', fn)
        emitter.off('change', fn)
        emitter.fire('change')
        assert calls == []
        assert not emitter.has_listeners('change')

    def test_off_all(self, emitter):
        emitter.on('change', lambda e: None)
        emitter.on('change', lambda e: None)
        emitter.off('change')
        assert not emitter.has_listeners('change')

    def test_once(self, emitter):
        calls = []
        emitter.once('remove', lambda e: calls.append(e))
        emitter.fire('remove')
        emitter.fire('remove')
        assert len(calls) == 1

    def test_listener_errors_propagate(self, emitter):
        def fail(e):
            raise RuntimeError("listener failed")

        emitter.on('change', fail)
        with pytest.raises(RuntimeError):
            emitter.fire('change')

    def test_off_bound_method(self, emitter):
        """Bound methods are fresh objects on every access but still unregister"""

        class Listener:
            def __init__(self):
                self.calls = 0

            def handle(self, event):
                self.calls += 1

        listener = Listener()
        emitter.on('change', listener.handle)
        emitter.off('change', listener.handle)
        emitter.fire('change')
        assert listener.calls == 0
        assert not emitter.has_listeners('change')
