# event_store.py
from cart_events import CartAbandonmentEvent


class EventStore:
    """Cart abandonment events collected during one batch window.

    Events are kept in a set, so adding a field-equal event twice is a no-op.
    A new store is created for every invocation and dropped once analyzed.
    """

    def __init__(self):
        self._events = set()

    def add(self, event: CartAbandonmentEvent) -> None:
        self._events.add(event)

    def __len__(self):
        return len(self._events)

    def __iter__(self):
        return iter(self._events)

    def __contains__(self, event):
        return event in self._events
