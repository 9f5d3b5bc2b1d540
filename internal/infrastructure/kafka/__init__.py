"""
Kafka infrastructure package.
"""

from .producer import KafkaEventNotifier

__all__ = [
    "KafkaEventNotifier",
]
