"""Unit tests for exchange provisioning and confirmed publishing."""

from __future__ import annotations

from aiormq.exceptions import ChannelAccessRefused, ChannelNotFoundEntity, ChannelPreconditionFailed
from faststream.rabbit import ExchangeType
from pamqp.commands import Basic
import pytest

from notify_relay.core.exceptions import (
    ExchangeAccessError,
    ExchangeConflictError,
    ExchangeProvisioningError,
    PublishNotConfirmedError,
)
from notify_relay.infra.messaging import direct_exchange, ensure_exchange, ensure_exchanges, publish


@pytest.mark.unit
class TestEnsureExchange:
    """Exchange declaration and error mapping."""

    @pytest.mark.asyncio
    async def test_declares_durable_direct_exchange(self, broker):
        """Test the declared exchange is durable, direct and not auto-deleted."""
        await ensure_exchange(broker, "positions")

        broker.declare_exchange.assert_awaited_once()
        exchange = broker.declare_exchange.await_args.args[0]
        assert exchange.name == "positions"
        assert exchange.type == ExchangeType.DIRECT
        assert exchange.durable is True
        assert exchange.auto_delete is False

    @pytest.mark.asyncio
    async def test_redeclare_is_idempotent(self, broker):
        """Test declaring the same exchange twice succeeds both times."""
        await ensure_exchange(broker, "positions")
        await ensure_exchange(broker, "positions")

        assert broker.declare_exchange.await_count == 2

    @pytest.mark.asyncio
    async def test_precondition_failed_maps_to_conflict(self, broker):
        """Test a 406 from the broker becomes ExchangeConflictError."""
        broker.declare_exchange.side_effect = ChannelPreconditionFailed(
            "PRECONDITION_FAILED - inequivalent arg 'type' for exchange 'positions'"
        )

        with pytest.raises(ExchangeConflictError) as exc_info:
            await ensure_exchange(broker, "positions")

        assert exc_info.value.exchange == "positions"
        assert exc_info.value.reply_code == 406
        assert isinstance(exc_info.value, ExchangeProvisioningError)

    @pytest.mark.asyncio
    async def test_access_refused_maps_to_access_error(self, broker):
        """Test a 403 from the broker becomes ExchangeAccessError."""
        broker.declare_exchange.side_effect = ChannelAccessRefused("ACCESS_REFUSED")

        with pytest.raises(ExchangeAccessError) as exc_info:
            await ensure_exchange(broker, "open-orders")

        assert exc_info.value.reply_code == 403

    @pytest.mark.asyncio
    async def test_other_errors_map_to_base_error(self, broker):
        """Test any other declaration failure is a plain ExchangeProvisioningError."""
        broker.declare_exchange.side_effect = ChannelNotFoundEntity("NOT_FOUND")

        with pytest.raises(ExchangeProvisioningError) as exc_info:
            await ensure_exchange(broker, "positions")

        assert type(exc_info.value) is ExchangeProvisioningError
        assert exc_info.value.reply_code is None

    @pytest.mark.asyncio
    async def test_ensure_exchanges_stops_at_first_failure(self, broker):
        """Test a failing declaration aborts the remaining ones."""
        broker.declare_exchange.side_effect = [None, ChannelAccessRefused("no"), None]

        with pytest.raises(ExchangeAccessError):
            await ensure_exchanges(broker, ["a", "b", "c"])

        assert broker.declare_exchange.await_count == 2


@pytest.mark.unit
class TestPublish:
    """Persistent publish with publisher confirms."""

    @pytest.mark.asyncio
    async def test_publishes_persistent_message(self, broker):
        """Test body, exchange, routing key and persistence are passed through."""
        await publish(broker, "positions", "0xabc", b'{"topic":"full_position"}')

        broker.publish.assert_awaited_once()
        call = broker.publish.await_args
        assert call.args[0] == b'{"topic":"full_position"}'
        assert call.kwargs["exchange"] == direct_exchange("positions")
        assert call.kwargs["routing_key"] == "0xabc"
        assert call.kwargs["persist"] is True
        assert call.kwargs["mandatory"] is False

    @pytest.mark.asyncio
    async def test_ack_is_success(self, broker):
        """Test a Basic.Ack confirm completes without error."""
        broker.publish.return_value = Basic.Ack(delivery_tag=7)

        await publish(broker, "positions", "0xabc", b"{}")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("frame", [Basic.Nack(), Basic.Reject()])
    async def test_negative_confirm_raises(self, broker, frame):
        """Test a nack or reject confirm is reported as not confirmed."""
        broker.publish.return_value = frame

        with pytest.raises(PublishNotConfirmedError) as exc_info:
            await publish(broker, "open-orders", "0xdef", b"{}")

        assert exc_info.value.exchange == "open-orders"
        assert exc_info.value.routing_key == "0xdef"

    @pytest.mark.asyncio
    async def test_channel_errors_propagate(self, broker):
        """Test errors from the publish call are not swallowed or retried."""
        broker.publish.side_effect = ConnectionResetError("channel closed")

        with pytest.raises(ConnectionResetError):
            await publish(broker, "positions", "0xabc", b"{}")

        broker.publish.assert_awaited_once()
