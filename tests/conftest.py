import base64
import json

import pytest

from cart_events import CartAbandonmentEvent, CartItem


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send(self, customer_id, message):
        self.sent.append((customer_id, message))


def make_event(customer_id='cust-1', event_time=0, items=((1, 10.0),), seller_id='seller-1'):
    return CartAbandonmentEvent(
        items=tuple(CartItem(f'product-{n}', f'P{n}', qty, price)
                    for n, (qty, price) in enumerate(items)),
        customer_id=customer_id,
        seller_id=seller_id,
        event_time_millis=event_time,
    )


def kinesis_record(payload):
    if isinstance(payload, dict):
        payload = json.dumps(payload)
    if isinstance(payload, str):
        payload = payload.encode('utf-8')
    return {'kinesis': {'data': base64.b64encode(payload).decode('ascii'),
                        'sequenceNumber': '1'}}


@pytest.fixture()
def notifier():
    return RecordingNotifier()
