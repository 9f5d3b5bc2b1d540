"""
Kafka Event Notifier.

Publishes catalog item events to a Kafka topic.
"""
import json
from typing import Optional

from aiokafka import AIOKafkaProducer

from internal.domain.catalog_item import CatalogItem
from internal.domain.errors import EventPublishError
from internal.domain.events import ItemEvent, ItemEventType
from pkg.logger.logger import get_logger


logger = get_logger(__name__)


class KafkaEventNotifier:
    """
    Kafka notifier for item events.

    Each event is keyed by item code so that all changes of one item land in
    the same partition. Any failure is raised as ``EventPublishError``.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        topic: str = "catalog-item-events",
        client_id: str = "catalog-service",
    ) -> None:
        """
        Initialize the notifier.

        Args:
            bootstrap_servers: Comma-separated list of Kafka brokers.
            topic: Topic receiving item events.
            client_id: Client identifier for the producer.
        """
        self._bootstrap_servers = bootstrap_servers
        self._topic = topic
        self._client_id = client_id
        self._producer: Optional[AIOKafkaProducer] = None

    async def start(self) -> None:
        """Start the Kafka producer."""
        self._producer = AIOKafkaProducer(
            bootstrap_servers=self._bootstrap_servers,
            client_id=self._client_id,
            value_serializer=lambda v: json.dumps(v).encode("utf-8"),
            key_serializer=lambda k: k.encode("utf-8") if k else None,
            acks="all",
        )
        await self._producer.start()
        logger.info(
            "Kafka producer started",
            bootstrap_servers=self._bootstrap_servers,
            topic=self._topic,
        )

    async def stop(self) -> None:
        """Stop the Kafka producer."""
        if self._producer:
            await self._producer.stop()
            self._producer = None
            logger.info("Kafka producer stopped")

    async def publish(self, event_type: ItemEventType, item: CatalogItem) -> None:
        """
        Publish an item event.

        Args:
            event_type: Type of change.
            item: The saved item.

        Raises:
            EventPublishError: If the producer is not started or the send fails.
        """
        event_type = ItemEventType(event_type)
        if not self._producer:
            raise EventPublishError(event_type.value, "producer not started")

        event = ItemEvent.from_item(event_type, item)

        try:
            await self._producer.send_and_wait(
                topic=self._topic,
                key=event.key,
                value=event.to_dict(),
            )
        except Exception as e:
            raise EventPublishError(event_type.value, str(e)) from e

        logger.info(
            "Event published to Kafka",
            topic=self._topic,
            event_type=event_type.value,
            item_id=item.id,
        )
