import json
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from imperator.commands import (
    Attribute,
    Command,
    AttributeRuleValidator,
    CommandSerializationError,
    RecordingBackgroundProcessor,
    use_background_processor,
)


# --- Fake commands for testing ---
class ShipOrderCommand(Command):
    order_id = Attribute(int)
    carrier = Attribute(str, default="post")
    tags = Attribute(list, default=list)

    def action(self):
        return f"shipping {self.order_id} via {self.carrier}"


class DatedCommand(Command):
    on = Attribute(date)


class OpaqueCommand(Command):
    payload = Attribute()


class RefundCommand(Command):
    validator = AttributeRuleValidator(check_types=True)

    payment_id = Attribute(uuid.UUID, required=True)
    amount = Attribute(Decimal)
    issued_at = Attribute(datetime)
    on = Attribute(date)
    lines = Attribute(tuple[int, ...])
    labels = Attribute(set[str], default=set)

    def action(self):
        return (self.payment_id, self.amount)


# --- Tests ---
def test_dump_writes_every_declared_attribute():
    command = ShipOrderCommand(id="c-1", order_id=42, tags=["fragile"])
    assert json.loads(command.dump()) == {
        "id": "c-1",
        "order_id": 42,
        "carrier": "post",
        "tags": ["fragile"],
    }


def test_load_rebuilds_an_equivalent_command():
    original = ShipOrderCommand(order_id=42, carrier="courier")
    loaded = ShipOrderCommand.load(original.dump())
    assert loaded is not original
    assert loaded.attributes == original.attributes
    assert loaded.perform() == "shipping 42 via courier"


def test_load_accepts_bytes_and_mappings():
    assert ShipOrderCommand.load(b'{"order_id": 1}').order_id == 1
    assert ShipOrderCommand.load({"order_id": 2}).order_id == 2


def test_load_discards_undeclared_keys():
    command = ShipOrderCommand.load('{"order_id": 1, "admin": true}')
    assert not hasattr(command, "admin")


def test_dump_serializes_dates_as_iso_strings():
    assert json.loads(DatedCommand(id="d", on=date(2024, 1, 2)).dump()) == {
        "id": "d",
        "on": "2024-01-02",
    }


def test_load_rejects_malformed_json():
    with pytest.raises(CommandSerializationError):
        ShipOrderCommand.load("{not json")


def test_load_rejects_non_objects():
    with pytest.raises(CommandSerializationError):
        ShipOrderCommand.load("[1, 2]")


def test_dump_rejects_unserializable_values():
    with pytest.raises(CommandSerializationError):
        OpaqueCommand(payload=object()).dump()


def test_worker_can_rehydrate_recorded_commits():
    recorder = RecordingBackgroundProcessor()
    with use_background_processor(recorder):
        ShipOrderCommand(order_id=7).commit()

    queued = [command.dump() for command in recorder.commits]
    assert [ShipOrderCommand.load(p).perform() for p in queued] == [
        "shipping 7 via post"
    ]


def test_load_restores_declared_types():
    loaded = DatedCommand.load(DatedCommand(on=date(2024, 1, 2)).dump())
    assert loaded.on == date(2024, 1, 2)
    assert isinstance(loaded.on, date)


def test_round_trip_keeps_typed_command_valid():
    payment_id = uuid.uuid4()
    original = RefundCommand(
        payment_id=payment_id,
        amount=Decimal("9.99"),
        issued_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        on=date(2024, 1, 2),
        lines=(1, 2),
        labels={"partial"},
    )
    assert original.is_valid()

    loaded = RefundCommand.load(original.dump())
    assert loaded.attributes == original.attributes
    assert loaded.is_valid()
    assert loaded.perform_strict() == (payment_id, Decimal("9.99"))


def test_load_keeps_unset_values_unset():
    loaded = RefundCommand.load(RefundCommand().dump())
    assert loaded.on is None
    assert loaded.payment_id is None


def test_load_rejects_values_that_cannot_be_converted():
    with pytest.raises(CommandSerializationError) as excinfo:
        DatedCommand.load('{"on": "not a date"}')
    assert "on: " in excinfo.value.message
