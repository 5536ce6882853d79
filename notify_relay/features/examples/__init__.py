"""hello-queue send/receive example pair."""

from notify_relay.features.examples.hello import (
    HELLO_MESSAGE,
    on_hello,
    receive_hello,
    send_hello,
)

__all__ = ["HELLO_MESSAGE", "on_hello", "receive_hello", "send_hello"]
