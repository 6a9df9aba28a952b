# analyzer.py
"""
Abandonment analysis over the events collected in one batch window.

A cart counts as abandoned when its event is strictly older than
``now - threshold``. Each abandoned cart triggers one reminder; the
reminder is best-effort and a failed send never affects the result.
"""
import logging
from dataclasses import dataclass

from notifications import LogNotifier, NotificationError

logger = logging.getLogger(__name__)

MILLIS_PER_MINUTE = 60_000


@dataclass(frozen=True)
class AbandonmentReport:
    total_carts: int
    abandoned_carts: int
    total_potential_sales: float
    avg_potential_order_size: float
    abandoned_percentage: float


def reminder_message(event) -> str:
    return (f'Reminder: User {event.customer_id} abandoned their cart '
            f'with {event.total_quantity} items')


def find_abandoned(store, cutoff_millis: int, notifier=None) -> set:
    """Return events older than cutoff_millis and send a reminder for each."""
    if notifier is None:
        notifier = LogNotifier()
    abandoned = set()
    for event in store:
        if event.event_time_millis < cutoff_millis:
            abandoned.add(event)
            try:
                notifier.send(event.customer_id, reminder_message(event))
            except NotificationError as e:
                logger.error('Reminder for customer %s not delivered: %s', event.customer_id, e)
    return abandoned


def analyze(store, now_millis: int, threshold_minutes: int, notifier=None) -> AbandonmentReport:
    if threshold_minutes < 0:
        raise ValueError(f'threshold_minutes must be >= 0, got {threshold_minutes}')
    cutoff_millis = now_millis - threshold_minutes * MILLIS_PER_MINUTE
    abandoned = find_abandoned(store, cutoff_millis, notifier)

    total_carts = len(store)
    if not abandoned:
        return AbandonmentReport(total_carts, 0, 0.0, 0.0, 0.0)

    total_potential_sales = sum(e.potential_order_size for e in abandoned)
    return AbandonmentReport(
        total_carts=total_carts,
        abandoned_carts=len(abandoned),
        total_potential_sales=total_potential_sales,
        avg_potential_order_size=total_potential_sales / len(abandoned),
        abandoned_percentage=len(abandoned) / total_carts * 100,
    )


def calculate_avg_potential_order_size(store, now_millis: int, threshold_minutes: int,
                                       notifier=None) -> float:
    """Mean potential value per abandoned cart; 0.0 when none are abandoned."""
    return analyze(store, now_millis, threshold_minutes, notifier).avg_potential_order_size
