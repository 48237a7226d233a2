"""
Idempotent handler bundles on top of Qt signals.

A subscriber registers a mapping of signal name -> handler under its own
identity. Registering the same identity again does nothing, and
disconnecting releases exactly the connections that identity made.
"""
from typing import Callable, Dict, List

from PyQt5.QtCore import pyqtSignal

from .events import SubscriptionRegistry


class _Slot:
    """Unique callable per connection so disconnecting never hits a twin."""

    def __init__(self, handler: Callable):
        self.handler = handler

    def __call__(self, *args):
        self.handler(*args)


class SignalConnection:
    """One connection between a bound signal and a handler."""

    def __init__(self, signal, handler: Callable):
        self._signal = signal
        self._slot = _Slot(handler)
        self.active = True
        signal.connect(self._slot)

    def disconnect(self) -> None:
        if self.active:
            self.active = False
            self._signal.disconnect(self._slot)


class SignalBundleMixin:
    """Adds connect_bundle()/disconnect_bundle() to a QObject subclass."""

    def _bundle_registry(self) -> SubscriptionRegistry:
        registry = getattr(self, '_bundles', None)
        if registry is None:
            registry = SubscriptionRegistry()
            self._bundles = registry
        return registry

    def connect_bundle(self, subscriber, handlers: Dict[str, Callable]) -> bool:
        """
        Connect several signals for one subscriber.

        Args:
            subscriber: Object owning the connections
            handlers: Signal name -> handler

        Returns:
            True if connections were made, False if already connected

        Raises:
            ValueError: A name does not refer to a signal of this object
        """
        for name in handlers:
            if not isinstance(getattr(type(self), name, None), pyqtSignal):
                raise ValueError(f"{type(self).__name__} has no signal '{name}'")

        def connect() -> List[SignalConnection]:
            return [SignalConnection(getattr(self, name), handler)
                    for name, handler in handlers.items()]

        return self._bundle_registry().subscribe(subscriber, connect)

    def disconnect_bundle(self, subscriber) -> bool:
        """Release the connections made by connect_bundle(subscriber)."""
        return self._bundle_registry().unsubscribe(subscriber)

    def is_bundle_connected(self, subscriber) -> bool:
        return self._bundle_registry().is_subscribed(subscriber)
