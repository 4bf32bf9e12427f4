from decimal import Decimal

import pytest

from forescore.domain import (
    CardAssignment,
    CardGameData,
    CardRole,
    DomainValidationError,
    UnknownPlayerReference,
    card_game_net,
    pay_up,
)


def test_worked_example_to_the_cent() -> None:
    """Daniel $2, Rory $4, Oscar $4, Kate $14."""
    breakdown = pay_up({"daniel": 200, "rory": 400, "oscar": 400, "kate": 1400})

    assert breakdown.total_pot == 2400
    assert breakdown.min_debt == 200
    assert breakdown.net_pot == 2200
    assert breakdown.pay_up_threshold == Decimal("1080")

    roles = {entry.player_id: entry.role for entry in breakdown.players}
    assert roles == {
        "daniel": CardRole.MINIMUM,
        "rory": CardRole.PAY_UP,
        "oscar": CardRole.PAY_UP,
        "kate": CardRole.LARGE_DEBTOR,
    }

    daniel = next(entry for entry in breakdown.players if entry.player_id == "daniel")
    assert daniel.received == 800
    assert daniel.share == 467

    net = breakdown.net_position()
    assert net.as_dict() == {"daniel": 1267, "rory": 66, "oscar": 67, "kate": -1400}
    assert net.total == 0


def test_tied_minimum_holders_split_pay_ups() -> None:
    net = card_game_net({"a": 200, "b": 200, "c": 400, "d": 2000})

    assert net.as_dict() == {"a": 867, "b": 867, "c": 266, "d": -2000}


def test_equal_debts_cancel_out() -> None:
    assert card_game_net({"a": 400, "b": 400, "c": 400}).as_dict() == {"a": 0, "b": 0, "c": 0}


def test_two_players_large_debtor_pays_full_debt() -> None:
    assert card_game_net({"a": 200, "b": 400}).as_dict() == {"a": 400, "b": -400}


def test_no_large_debtor_means_no_pooled_share() -> None:
    breakdown = pay_up({"a": 100, "b": 200, "c": 200})

    assert breakdown.pay_up_threshold == Decimal("260")
    assert all(entry.share == 0 for entry in breakdown.players)
    assert breakdown.net_position().as_dict() == {"a": 400, "b": -200, "c": -200}


def test_empty_debts() -> None:
    breakdown = pay_up({})

    assert breakdown.players == ()
    assert breakdown.net_position().as_dict() == {}


def test_debts_use_current_card_values_and_latest_holder() -> None:
    game = CardGameData(
        assignments={
            "c1": CardAssignment(card_id="c1", card_type="camel", value=200, player_id="a"),
            "c2": CardAssignment(card_id="c2", card_type="snake", value=200, player_id="b"),
            "c3": CardAssignment(card_id="c3", card_type="custom", value=300, player_id="b", card_name="Sandy"),
        },
        card_values={"camel": 500, "sandy": 150},
    )

    assert game.debts(roster=["a", "b", "c"]) == {"a": 500, "b": 350, "c": 0}


def test_player_without_cards_collects() -> None:
    game = CardGameData(
        assignments={"c1": CardAssignment(card_id="c1", card_type="yeti", value=200, player_id="b")}
    )

    assert card_game_net(game.debts(roster=["a", "b"])).as_dict() == {"a": 200, "b": -200}


def test_card_held_by_unknown_player() -> None:
    game = CardGameData(
        assignments={"c1": CardAssignment(card_id="c1", card_type="fish", value=200, player_id="stranger")}
    )

    with pytest.raises(UnknownPlayerReference) as excinfo:
        game.debts(roster=["a", "b"])

    assert excinfo.value.game == "cards"


def test_assignment_key_must_match_card() -> None:
    with pytest.raises(DomainValidationError):
        CardGameData(assignments={"c9": CardAssignment(card_id="c1", card_type="fish", value=200, player_id="a")})


def test_card_value_must_be_positive() -> None:
    with pytest.raises(DomainValidationError):
        CardAssignment(card_id="c1", card_type="fish", value=0, player_id="a")


def test_breakdown_serializes_for_display() -> None:
    payload = pay_up({"a": 0, "b": 500}).to_dict()

    assert payload["pay_up_threshold"] == "200.0"
    assert payload["players"][1] == {
        "player_id": "b",
        "debt": 500,
        "role": "large_debtor",
        "paid": 500,
        "received": 0,
        "share": 0,
        "net": -500,
    }
