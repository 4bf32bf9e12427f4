import pytest

from forescore.domain import (
    InvariantViolation,
    NetPosition,
    Transaction,
    build_transfers,
    replay_transfers,
)


def test_largest_debtor_pays_largest_creditor_first() -> None:
    transfers = build_transfers({"a": 700, "b": 300, "c": -600, "d": -400})

    assert transfers == [
        Transaction(payer="c", payee="a", amount=600),
        Transaction(payer="d", payee="b", amount=300),
        Transaction(payer="d", payee="a", amount=100),
    ]


def test_ties_are_broken_by_player_id() -> None:
    transfers = build_transfers({"zed": 100, "amy": 100, "bob": -200})

    assert [transfer.to_dict() for transfer in transfers] == [
        {"from": "bob", "to": "amy", "amount": 100},
        {"from": "bob", "to": "zed", "amount": 100},
    ]


def test_transfers_replay_to_the_net_position() -> None:
    net = NetPosition({"a": 1267, "b": 66, "c": 67, "d": -1400, "e": 0})

    transfers = build_transfers(net)

    assert replay_transfers(transfers).as_dict() == net.nonzero()
    assert len(transfers) <= len(net.nonzero()) - 1
    assert all(transfer.amount > 0 for transfer in transfers)
    assert all("e" not in (transfer.payer, transfer.payee) for transfer in transfers)


def test_all_square_needs_no_transfers() -> None:
    assert build_transfers(NetPosition.zero(["a", "b"])) == []


def test_unbalanced_position_is_refused() -> None:
    with pytest.raises(InvariantViolation) as excinfo:
        build_transfers({"a": 100, "b": -99})

    assert excinfo.value.game == "settlement"
