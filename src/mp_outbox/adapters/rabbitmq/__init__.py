"""RabbitMQ adapter – aio-pika publisher and consumer."""
from mp_outbox.adapters.rabbitmq.consumer import RabbitMQConsumer, RabbitMQDelivery
from mp_outbox.adapters.rabbitmq.publisher import RabbitMQPublisher

__all__ = ["RabbitMQConsumer", "RabbitMQDelivery", "RabbitMQPublisher"]
