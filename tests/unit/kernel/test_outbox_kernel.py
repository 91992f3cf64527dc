"""Unit tests for the messaging kernel – envelope, stamps, registry, ids, clock, errors."""
from __future__ import annotations

import dataclasses
import json
import uuid
from datetime import UTC, datetime

import pytest

from mp_outbox.kernel.errors import (
    BaseError,
    BrokerConnectionError,
    ConfigurationError,
    InfrastructureError,
    InvalidMessageIdError,
    MessageDecodingFailedError,
    MissingStampError,
    PublisherNotFoundError,
    SerializationError,
    UnknownMessageNameError,
    UnregisteredMessageError,
)
from mp_outbox.kernel.messaging import (
    DelayStamp,
    Envelope,
    MessageIdStamp,
    MessageNameStamp,
    MessageRegistry,
    PartitionKeyStamp,
    ReceivedStamp,
    TransportMessageIdStamp,
    type_identity,
)
from mp_outbox.kernel.time import FrozenClock, SystemClock
from mp_outbox.kernel.types import canonical_message_id, is_valid_message_id, new_message_id


@dataclasses.dataclass(frozen=True)
class OrderPlaced:
    order_id: str


@dataclasses.dataclass(frozen=True)
class OrderShipped:
    order_id: str


class TestEnvelope:
    def test_with_stamps_returns_new_envelope(self) -> None:
        env = Envelope(OrderPlaced("o-1"))
        stamped = env.with_stamps(PartitionKeyStamp("order-1"))
        assert env.stamps == ()
        assert stamped.last(PartitionKeyStamp) == PartitionKeyStamp("order-1")

    def test_last_returns_most_recent(self) -> None:
        env = Envelope(OrderPlaced("o-1")).with_stamps(ReceivedStamp("a"), ReceivedStamp("b"))
        assert env.last(ReceivedStamp).transport_name == "b"
        assert [s.transport_name for s in env.all(ReceivedStamp)] == ["a", "b"]

    def test_last_missing_is_none(self) -> None:
        assert Envelope(OrderPlaced("o-1")).last(MessageIdStamp) is None

    def test_without_removes_every_stamp_of_type(self) -> None:
        env = Envelope(OrderPlaced("o-1")).with_stamps(
            TransportMessageIdStamp(1), MessageNameStamp("order.placed"), TransportMessageIdStamp(2)
        )
        cleaned = env.without(TransportMessageIdStamp)
        assert cleaned.stamps == (MessageNameStamp("order.placed"),)

    def test_message_type(self) -> None:
        assert Envelope(OrderPlaced("o-1")).message_type is OrderPlaced

    def test_envelope_is_immutable(self) -> None:
        env = Envelope(OrderPlaced("o-1"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            env.stamps = (MessageIdStamp("x"),)  # type: ignore[misc]


class TestStamps:
    def test_sendable_flags(self) -> None:
        assert MessageIdStamp("x").sendable
        assert MessageNameStamp("n").sendable
        assert PartitionKeyStamp().sendable
        assert not DelayStamp(10).sendable
        assert not ReceivedStamp("outbox").sendable
        assert not TransportMessageIdStamp(1).sendable

    def test_partition_key_defaults_to_empty(self) -> None:
        assert PartitionKeyStamp().partition_key == ""


class TestMessageRegistry:
    def test_name_of_type_and_instance(self) -> None:
        registry = MessageRegistry({OrderPlaced: "order.placed"})
        assert registry.name_of(OrderPlaced) == "order.placed"
        assert registry.name_of(OrderPlaced("o-1")) == "order.placed"

    def test_reverse_lookups(self) -> None:
        registry = MessageRegistry({OrderPlaced: "order.placed"})
        assert registry.type_for_name("order.placed") is OrderPlaced
        assert registry.type_for_identity(type_identity(OrderPlaced)) is OrderPlaced
        assert registry.type_for_name("order.unknown") is None

    def test_from_names(self) -> None:
        registry = MessageRegistry.from_names({"order.placed": OrderPlaced, "order.shipped": OrderShipped})
        assert len(registry) == 2
        assert OrderShipped in registry

    def test_unregistered_type_raises(self) -> None:
        with pytest.raises(UnregisteredMessageError):
            MessageRegistry().name_of(OrderPlaced)

    def test_name_taken_by_other_type_raises(self) -> None:
        registry = MessageRegistry({OrderPlaced: "order.placed"})
        with pytest.raises(ConfigurationError):
            registry.register(OrderShipped, "order.placed")

    def test_type_registered_twice_raises(self) -> None:
        registry = MessageRegistry({OrderPlaced: "order.placed"})
        with pytest.raises(ConfigurationError):
            registry.register(OrderPlaced, "order.created")

    def test_same_registration_is_idempotent(self) -> None:
        registry = MessageRegistry({OrderPlaced: "order.placed"})
        registry.register(OrderPlaced, "order.placed")
        assert len(registry) == 1

    @pytest.mark.parametrize("name", ["", "order..placed", ".order", "order placed", "order.*"])
    def test_invalid_names_rejected(self, name: str) -> None:
        with pytest.raises(ConfigurationError):
            MessageRegistry({OrderPlaced: name})

    def test_type_identity_is_module_qualname(self) -> None:
        assert type_identity(OrderPlaced) == f"{__name__}.OrderPlaced"


class TestMessageIds:
    def test_new_message_id_is_uuid7(self) -> None:
        value = new_message_id()
        assert uuid.UUID(value).version == 7

    def test_new_message_ids_are_unique(self) -> None:
        assert len({new_message_id() for _ in range(100)}) == 100

    def test_validation(self) -> None:
        assert is_valid_message_id(str(uuid.uuid4()))
        assert not is_valid_message_id("id-1")
        assert not is_valid_message_id("")

    def test_canonical_form_is_lower_case_hyphenated(self) -> None:
        value = "0190f5c2-7b3e-7d4a-9f1e-2b6c8d0a1e3f"
        for spelling in (value.upper(), "{" + value + "}", value.replace("-", ""), "urn:uuid:" + value):
            assert canonical_message_id(spelling) == value
        with pytest.raises(ValueError):
            canonical_message_id("id-1")


class TestClocks:
    def test_system_clock_is_aware(self) -> None:
        assert SystemClock().now().tzinfo is not None

    def test_frozen_clock_advance(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.advance(seconds=90)
        assert clock.now() == datetime(2026, 1, 1, 0, 1, 30, tzinfo=UTC)


class TestErrors:
    def test_str_is_json(self) -> None:
        err = MissingStampError("MessageIdStamp", "app.OrderPlaced")
        data = json.loads(str(err))
        assert data["code"] == "missing_stamp"
        assert data["detail"]["stamp"] == "MessageIdStamp"
        assert data["retryable"] is False

    def test_configuration_errors_are_not_retryable(self) -> None:
        for err in (
            MissingStampError("S", "T"),
            UnregisteredMessageError("T"),
            PublisherNotFoundError("orders", known=["billing"]),
        ):
            assert isinstance(err, ConfigurationError)
            assert err.retryable is False

    def test_decoding_error_hierarchy(self) -> None:
        assert issubclass(UnknownMessageNameError, MessageDecodingFailedError)
        assert issubclass(InvalidMessageIdError, MessageDecodingFailedError)
        assert issubclass(MessageDecodingFailedError, SerializationError)
        assert UnknownMessageNameError("order.unknown").message_name == "order.unknown"

    def test_infrastructure_errors_are_retryable(self) -> None:
        err = BrokerConnectionError("amqp://localhost/")
        assert isinstance(err, InfrastructureError)
        assert err.retryable is True
        assert "amqp://localhost/" in err.message

    def test_cause_is_chained(self) -> None:
        cause = ValueError("boom")
        err = BaseError("wrapped", cause=cause)
        assert err.__cause__ is cause
        assert "cause" in err.to_dict()

    def test_publisher_not_found_lists_known_channels(self) -> None:
        err = PublisherNotFoundError("orders", known=["billing", "audit"])
        assert err.detail["known_channels"] == ["audit", "billing"]
