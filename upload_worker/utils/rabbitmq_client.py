from typing import Any, Callable, Dict

import pika

from upload_worker.core.config import settings
from upload_worker.core.constants import (
    JSON_CONTENT_TYPE,
    PERSISTENT_DELIVERY_MODE,
    TRANSIENT_DELIVERY_MODE,
)
from upload_worker.domain.interfaces.infrastructure_interfaces import IResponseSender
from upload_worker.utils.logger import get_logger

logger = get_logger("upload_worker.rabbitmq_client")


class RabbitMQResponseSender(IResponseSender):
    """Sends upload responses to a queue through the default exchange."""

    def __init__(self, channel, queue_name: str):
        self._chan = channel
        self._queue = queue_name

    @property
    def destination(self) -> str:
        return self._queue

    def send(
        self, body: bytes, headers: Dict[str, Any], persistent: bool = False
    ) -> None:
        self._chan.basic_publish(
            exchange="",
            routing_key=self._queue,
            body=body,
            properties=pika.BasicProperties(
                content_type=JSON_CONTENT_TYPE,
                delivery_mode=PERSISTENT_DELIVERY_MODE
                if persistent
                else TRANSIENT_DELIVERY_MODE,
                headers=headers,
            ),
        )


class RabbitMQWorker:
    """Simple blocking consumer.

    Every delivery is acknowledged once the callback returns, whatever the
    callback did with it: failed uploads are reported on the response queue
    and must not come back through redelivery.
    """

    def __init__(
        self,
        queue: str,
        callback: Callable[[bytes], Any] | None = None,
        url: str | None = None,
        prefetch_count: int | None = None,
        declare_queues: bool | None = None,
    ):
        params = pika.URLParameters(url or settings.messaging.rabbitmq_url)
        self._conn = pika.BlockingConnection(params)
        self._chan = self._conn.channel()
        self._queue = queue
        if (
            settings.messaging.declare_queues
            if declare_queues is None
            else declare_queues
        ):
            self._chan.queue_declare(queue=queue, durable=True)
        self._chan.basic_qos(
            prefetch_count=prefetch_count or settings.messaging.prefetch_count
        )
        if callback is not None:
            self.consume(callback)

    @property
    def channel(self):
        return self._chan

    def consume(self, callback: Callable[[bytes], Any]) -> None:
        """Register the handler for deliveries from this worker's queue."""
        self._chan.basic_consume(self._queue, self._wrap(callback), auto_ack=False)

    def response_sender(
        self, queue_name: str, declare: bool | None = None
    ) -> RabbitMQResponseSender:
        """Sender for responses, sharing this worker's channel."""
        if settings.messaging.declare_queues if declare is None else declare:
            self._chan.queue_declare(queue=queue_name, durable=True)
        return RabbitMQResponseSender(self._chan, queue_name)

    def _wrap(self, fn):
        def inner(ch, method, properties, body):
            try:
                fn(body)
            except Exception as e:
                logger.error(
                    f"Unhandled error processing message from {self._queue}: {e}",
                    exc_info=e,
                )
            finally:
                ch.basic_ack(method.delivery_tag)

        return inner

    def start(self):
        logger.info(f"Consuming upload requests from {self._queue}")
        self._chan.start_consuming()

    def stop(self):
        if self._chan.is_open:
            self._chan.stop_consuming()
        if self._conn.is_open:
            self._conn.close()
