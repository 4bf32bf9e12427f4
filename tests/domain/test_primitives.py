from decimal import Decimal

import pytest

from forescore.domain import (
    DomainValidationError,
    InvariantViolation,
    NetPosition,
    Player,
    Transaction,
    split_evenly,
)
from forescore.domain.primitives import ensure_hole, tally_holes, to_minor_units


def test_split_evenly_gives_leftover_cents_to_first_ids() -> None:
    shares = split_evenly(100, ["b", "a", "c"])

    assert shares == {"a": 34, "b": 33, "c": 33}
    assert sum(shares.values()) == 100


def test_split_evenly_without_recipients_is_empty() -> None:
    assert split_evenly(500, []) == {}


def test_net_position_rejects_float_amounts() -> None:
    with pytest.raises(DomainValidationError):
        NetPosition({"a": 1.5, "b": -1.5})


def test_net_position_is_read_only() -> None:
    position = NetPosition({"a": 10, "b": -10})

    with pytest.raises(TypeError):
        position.amounts["a"] = 0  # type: ignore[index]


def test_unbalanced_position_fails_fast() -> None:
    position = NetPosition({"a": 10, "b": -9})

    with pytest.raises(InvariantViolation) as excinfo:
        position.ensure_balanced(game="points")

    assert excinfo.value.game == "points"
    assert set(excinfo.value.player_ids) == {"a", "b"}


@pytest.mark.parametrize(
    "amount, payer, payee",
    [(0, "a", "b"), (-5, "a", "b"), (5, "a", "a")],
    ids=["zero", "negative", "self_payment"],
)
def test_transaction_validation(amount: int, payer: str, payee: str) -> None:
    with pytest.raises(DomainValidationError):
        Transaction(payer=payer, payee=payee, amount=amount)


def test_transaction_serializes_with_from_and_to() -> None:
    assert Transaction(payer="a", payee="b", amount=250).to_dict() == {"from": "a", "to": "b", "amount": 250}


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), (Decimal("2.5"), 2), (Decimal("3.5"), 4), (Decimal("-1.5"), -2)],
)
def test_points_are_rounded_half_even(value, expected) -> None:
    assert to_minor_units(value) == expected


@pytest.mark.parametrize("hole", [0, 19, True])
def test_hole_numbers_must_be_on_the_course(hole) -> None:
    with pytest.raises(DomainValidationError):
        ensure_hole(hole)


def test_tally_skips_players_missing_from_a_hole() -> None:
    holes = {1: {"a": 2, "b": 0}, 2: {"a": 1}, 10: {"b": 5}}

    assert tally_holes(holes) == {"a": 3, "b": 5}
    assert tally_holes(holes, holes=range(1, 10)) == {"a": 3, "b": 0}
    assert tally_holes({}, participants=["a", "b"]) == {"a": 0, "b": 0}


def test_player_requires_id_and_name() -> None:
    assert Player(id=" p1 ", name="Daniel").id == "p1"

    with pytest.raises(DomainValidationError):
        Player(id="", name="Daniel")
    with pytest.raises(DomainValidationError):
        Player(id="p1", name=" ")
