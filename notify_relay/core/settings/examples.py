"""Settings for the point-to-point send/receive example commands."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExampleSettings(BaseSettings):
    """Environment variables use EXAMPLE_ prefix."""

    amqp_uri: str = Field(
        default="amqp://localhost:5672/%2f",
        description="Broker for the hello-queue examples.",
    )
    queue: str = Field(
        default="hello-queue",
        min_length=1,
        max_length=255,
        description="Queue the example pair sends to and consumes from.",
    )
    consumer_tag: str = Field(default="my_consumer", min_length=1)

    model_config = SettingsConfigDict(
        env_prefix="EXAMPLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
