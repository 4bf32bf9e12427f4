import pytest

from forescore.domain import BBBGameData, BBBHole, UnknownPlayerReference, bbb_points_net, bbb_segment_net


def _game() -> BBBGameData:
    return BBBGameData(
        holes={
            1: BBBHole(first_on="a", closest_to="a", first_in="b"),
            2: BBBHole(first_on="none", first_in="c"),
        }
    )


def test_each_category_won_is_one_point() -> None:
    assert _game().hole_points() == {1: {"a": 2, "b": 1}, 2: {"c": 1}}


def test_none_and_blank_winners_are_ignored() -> None:
    hole = BBBHole(first_on="none", closest_to="  ", first_in=None)

    assert hole.winners() == []


def test_points_mode_settles_pairwise() -> None:
    net = bbb_points_net(_game(), unit_value=100, roster=["a", "b", "c"])

    assert net.as_dict() == {"a": 200, "b": -100, "c": -100}


def test_roster_players_without_wins_still_play() -> None:
    net = bbb_points_net(_game(), unit_value=100, roster=["a", "b", "c", "d"])

    assert net.as_dict() == {"a": 400, "b": 0, "c": 0, "d": -400}
    assert net.total == 0


def test_segment_mode_uses_front_back_total() -> None:
    game = BBBGameData(
        holes={
            1: BBBHole(first_on="a", closest_to="a", first_in="a"),
            10: BBBHole(first_on="b", closest_to="b"),
        }
    )

    net = bbb_segment_net(game, pot=1000, roster=["a", "b"])

    # a wins front and total, b wins back
    assert net.as_dict() == {"a": 1000, "b": -1000}


def test_no_recorded_holes_is_an_empty_game() -> None:
    assert bbb_points_net(BBBGameData(), unit_value=100, roster=["a", "b"]).as_dict() == {}


def test_unknown_winner_is_rejected() -> None:
    game = BBBGameData(holes={4: BBBHole(closest_to="ghost")})

    with pytest.raises(UnknownPlayerReference):
        bbb_points_net(game, unit_value=100, roster=["a", "b"])
