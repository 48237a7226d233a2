"""
Change notification primitives.

Records carry a FieldEvents dispatch list for per-field changes.
SubscriptionRegistry keeps track of which handles a subscriber installed
so that subscribing twice is harmless and unsubscribing releases exactly
those handles.
"""
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

ALL_FIELDS = "*"

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class Subscription:
    """Handle returned by a connect call; pass it back to disconnect."""
    source: Any
    topic: str
    handler: Callable
    handle_id: int = field(default_factory=lambda: next(_handle_ids))
    active: bool = True

    def disconnect(self) -> None:
        """Release this handle. Safe to call more than once."""
        if self.active:
            self.source.disconnect(self)


class FieldEvents:
    """Explicit per-record list of field-change handlers."""

    def __init__(self):
        self._handlers: List[Subscription] = []

    def connect(self, field_name: str, handler: Callable) -> Subscription:
        """
        Register a handler for one field.

        Args:
            field_name: Field to watch, or ALL_FIELDS for every field
            handler: Called as handler(record, field_name, value)

        Returns:
            Subscription handle
        """
        subscription = Subscription(self, field_name, handler)
        self._handlers.append(subscription)
        return subscription

    def connect_all(self, handler: Callable) -> List[Subscription]:
        return [self.connect(ALL_FIELDS, handler)]

    def disconnect(self, subscription: Subscription) -> None:
        subscription.active = False
        self._handlers = [s for s in self._handlers if s is not subscription]

    def disconnect_all(self) -> None:
        for subscription in self._handlers:
            subscription.active = False
        self._handlers = []

    def emit(self, field_name: str, record: Any, value: Any) -> None:
        # Snapshot so handlers can connect or disconnect while we deliver.
        for subscription in list(self._handlers):
            if not subscription.active:
                continue
            if subscription.topic in (field_name, ALL_FIELDS):
                subscription.handler(record, field_name, value)

    def handler_count(self) -> int:
        return len(self._handlers)


class SubscriptionRegistry:
    """
    Maps subscriber identity to the handles it installed.

    The subscriber object itself is held so its id() cannot be reused by
    another object while it is registered.
    """

    def __init__(self):
        self._entries: Dict[int, Tuple[Any, List[Any]]] = {}

    def subscribe(self, subscriber: Any,
                  connect: Callable[[], List[Any]]) -> bool:
        """
        Install handles for a subscriber unless it is already registered.

        Args:
            subscriber: Identity owning the handles
            connect: Called once to install handlers; returns the handles

        Returns:
            True if handles were installed, False if already subscribed
        """
        key = id(subscriber)
        if key in self._entries:
            return False
        self._entries[key] = (subscriber, list(connect()))
        return True

    def unsubscribe(self, subscriber: Any,
                    release: Optional[Callable[[Any], None]] = None) -> bool:
        """
        Release every handle the subscriber installed.

        Args:
            subscriber: Identity passed to subscribe()
            release: Called for each handle; defaults to handle.disconnect()

        Returns:
            True if the subscriber was registered
        """
        entry = self._entries.pop(id(subscriber), None)
        if entry is None:
            return False
        for handle in entry[1]:
            if release is not None:
                release(handle)
            else:
                handle.disconnect()
        return True

    def is_subscribed(self, subscriber: Any) -> bool:
        return id(subscriber) in self._entries

    def subscribers(self) -> List[Any]:
        return [subscriber for subscriber, _ in self._entries.values()]

    def clear(self, release: Optional[Callable[[Any], None]] = None) -> None:
        for subscriber in self.subscribers():
            self.unsubscribe(subscriber, release)
