# cart_events.py
import base64
import binascii
import json
import math
from dataclasses import dataclass
from typing import Any


class DeserializationError(ValueError):
    """Raised when a stream record cannot be turned into a CartAbandonmentEvent."""

    def __init__(self, payload: bytes, cause: Any):
        self.payload = payload
        self.cause = cause
        super().__init__(f'Failed to de-serialize record: {cause}')


@dataclass(frozen=True)
class CartItem:
    product_name: str
    product_code: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartAbandonmentEvent:
    items: tuple
    customer_id: str
    seller_id: str
    event_time_millis: int

    @property
    def total_quantity(self) -> int:
        return sum(i.quantity for i in self.items)

    @property
    def potential_order_size(self) -> float:
        return sum(i.line_total for i in self.items)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name):
    raise ValueError(f'non-finite number not allowed: {name}')


def _decode_item(raw) -> CartItem:
    if not isinstance(raw, dict):
        raise ValueError(f'cart item must be an object, got {type(raw).__name__}')
    qty = raw.get('product_quantity', 0)
    price = raw.get('product_price', 0.0)
    if not _is_int(qty) or qty < 0:
        raise ValueError(f'invalid product_quantity: {qty!r}')
    if not _is_number(price) or not math.isfinite(price) or price < 0:
        raise ValueError(f'invalid product_price: {price!r}')
    return CartItem(
        product_name=str(raw.get('product_name', '')),
        product_code=str(raw.get('product_code', '')),
        quantity=qty,
        unit_price=float(price),
    )


def decode_event(payload: bytes) -> CartAbandonmentEvent:
    """Parse a JSON payload into a CartAbandonmentEvent.

    Raises DeserializationError carrying the raw payload on any malformed input.
    """
    try:
        doc = json.loads(payload.decode('utf-8'), parse_constant=_reject_constant)
        if not isinstance(doc, dict):
            raise ValueError('event payload must be a JSON object')
        raw_items = doc.get('cart_items', [])
        if not isinstance(raw_items, list):
            raise ValueError('cart_items must be a list')
        if 'customer_id' not in doc:
            raise ValueError('missing customer_id')
        event_time = doc.get('event_time')
        if not _is_int(event_time):
            raise ValueError(f'invalid event_time: {event_time!r}')
        return CartAbandonmentEvent(
            items=tuple(_decode_item(i) for i in raw_items),
            customer_id=str(doc['customer_id']),
            seller_id=str(doc.get('seller_id', '')),
            event_time_millis=event_time,
        )
    except (UnicodeDecodeError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        raise DeserializationError(payload, e) from e


def record_payload(rec: dict) -> bytes:
    """Return the raw bytes of a Kinesis event record."""
    try:
        data = rec['kinesis']['data']
        return base64.b64decode(data, validate=True)
    except (KeyError, TypeError, binascii.Error) as e:
        raise DeserializationError(repr(rec).encode('utf-8'), e) from e


def decode_record(rec: dict) -> CartAbandonmentEvent:
    return decode_event(record_payload(rec))
