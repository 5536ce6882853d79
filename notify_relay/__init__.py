"""PostgreSQL LISTEN/NOTIFY to RabbitMQ relay."""

__version__ = "0.1.0"
