# lambda_function.py
import json
import logging
import os
from datetime import datetime, timezone

import boto3

from analyzer import analyze
from cart_events import DeserializationError, decode_record
from config import HandlerConfig, resolve_log_level
from event_store import EventStore
from notifications import build_notifier

logger = logging.getLogger()
logger.setLevel(resolve_log_level(os.environ.get('LOG_LEVEL')))

_s3 = None


def get_s3_client():
    global _s3
    if _s3 is None:
        _s3 = boto3.client('s3')
    return _s3


def now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def load_events(records) -> tuple:
    """Decode every Kinesis record into a fresh EventStore.

    Malformed records are logged and skipped. Returns (store, failed_count).
    """
    store = EventStore()
    failed = 0
    for rec in records:
        try:
            event = decode_record(rec)
        except DeserializationError as e:
            failed += 1
            logger.error('Failed to de-serialize record. Record Data: %s',
                         e.payload.decode('utf-8', errors='replace'))
            logger.error('Error: %s', e.cause)
            continue
        store.add(event)
        logger.debug('Processed cart event: %s', event)
    return store, failed


def write_summary(bucket: str, prefix: str, summary: dict) -> str:
    key = f"{prefix}summary-{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%S%f')}.json"
    get_s3_client().put_object(Bucket=bucket, Key=key, Body=json.dumps(summary).encode('utf-8'))
    return key


def lambda_handler(event, context):
    config = HandlerConfig.from_env()
    logger.setLevel(config.log_level)

    records = event.get('Records', [])
    logger.info('Kinesis Lambda consumer invoked: records = %d', len(records))
    store, failed = load_events(records)
    report = analyze(store, now_millis(), config.abandonment_threshold_minutes,
                     build_notifier(config.notification_topic_arn))
    logger.info('Average Potential Order $%.2f', report.avg_potential_order_size)
    logger.info('Percentage of abandoned carts: %.2f', report.abandoned_percentage)

    if not records:
        return {'status': 'no_records'}

    summary = {
        'status': 'ok',
        'records': len(records),
        'failed_records': failed,
        'total_carts': report.total_carts,
        'abandoned_carts': report.abandoned_carts,
        'avg_potential_order_size': report.avg_potential_order_size,
        'abandoned_percentage': report.abandoned_percentage,
        'wrote': None,
    }
    if config.output_bucket:
        summary['wrote'] = write_summary(config.output_bucket, config.output_prefix, summary)
    return summary
