# config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional


def resolve_log_level(name) -> str:
    """Return the upper-cased level name, or INFO when logging does not know it."""
    level = (name or 'INFO').upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return 'INFO'


@dataclass
class HandlerConfig:
    abandonment_threshold_minutes: int
    output_bucket: Optional[str]
    output_prefix: str
    notification_topic_arn: Optional[str]
    log_level: str

    @classmethod
    def from_env(cls) -> 'HandlerConfig':
        raw_threshold = os.getenv('CART_ABANDONMENT_TIME_MINS', '30')
        try:
            threshold = int(raw_threshold)
        except ValueError:
            raise ValueError(f'CART_ABANDONMENT_TIME_MINS must be an integer, got {raw_threshold!r}')
        if threshold < 0:
            raise ValueError(f'CART_ABANDONMENT_TIME_MINS must be >= 0, got {threshold}')

        return cls(
            abandonment_threshold_minutes=threshold,
            output_bucket=os.getenv('OUTPUT_BUCKET', '') or None,
            output_prefix=os.getenv('OUTPUT_PREFIX', 'processed/'),
            notification_topic_arn=os.getenv('NOTIFICATION_TOPIC_ARN', '') or None,
            log_level=resolve_log_level(os.getenv('LOG_LEVEL')),
        )
