import pytest

from forescore.domain import Segment, segment_pot_net, single_segment_net
from forescore.domain.segments import segment_scores


def test_full_tie_voids_the_segment() -> None:
    assert single_segment_net({"a": 5, "b": 5, "c": 5}, pot=1000).as_dict() == {"a": 0, "b": 0, "c": 0}


@pytest.mark.parametrize(
    "scores, expected",
    [
        ({"a": 9, "b": 5, "c": 5}, {"a": 1000, "b": -500, "c": -500}),
        ({"a": 9, "b": 9, "c": 1}, {"a": 500, "b": 500, "c": -1000}),
        ({"a": 9, "b": 1, "c": 1, "d": 1}, {"a": 1000, "b": -334, "c": -333, "d": -333}),
        ({"a": 2, "b": 7, "c": 7, "d": 7}, {"a": -1000, "b": 334, "c": 333, "d": 333}),
    ],
    ids=["single_winner", "shared_win", "uneven_losers", "uneven_winners"],
)
def test_pot_is_split_among_winners_and_funded_by_losers(scores, expected) -> None:
    net = single_segment_net(scores, pot=1000)

    assert net.as_dict() == expected
    assert net.total == 0


def test_zero_pot_pays_nothing() -> None:
    assert single_segment_net({"a": 9, "b": 1}, pot=0).as_dict() == {"a": 0, "b": 0}


def test_segments_are_settled_independently() -> None:
    holes = {1: {"a": 1, "b": 0}, 10: {"a": 0, "b": 1}}
    scores = segment_scores(holes)

    assert scores[Segment.FRONT] == {"a": 1, "b": 0}
    assert scores[Segment.BACK] == {"a": 0, "b": 1}
    assert scores[Segment.TOTAL] == {"a": 1, "b": 1}

    net = segment_pot_net(scores, pot=1000)
    assert net.as_dict() == {"a": 0, "b": 0}


def test_one_player_can_win_every_segment() -> None:
    holes = {3: {"a": 2, "b": 1, "c": 0}, 12: {"a": 1, "b": 0, "c": 0}}

    net = segment_pot_net(segment_scores(holes), pot=900)

    assert net.as_dict() == {"a": 2700, "b": -1350, "c": -1350}


def test_players_without_entries_in_a_segment_do_not_take_part() -> None:
    holes = {2: {"a": 1, "b": 0}, 11: {"a": 1, "b": 0, "c": 0}}

    scores = segment_scores(holes)

    assert "c" not in scores[Segment.FRONT]
    assert scores[Segment.BACK] == {"a": 1, "b": 0, "c": 0}
    assert segment_pot_net(scores, pot=100).total == 0
