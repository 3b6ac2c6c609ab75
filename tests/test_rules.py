import pytest

from tron.game import (Board, CellState, InvalidMove, DeadActor, PowerUp, random_board,
                       EMPTY, WALL, OWNED, OCCUPIED, POWER_UP, SPEED, ARMOR, BOMB)
from tron.game import double_speed, armor, bomb
from tron.utils import Position, Action, ACTIONS


def pos(r, c):
    return Position(r, c)


def test_default_board_layout():
    b = Board(3, 4)
    assert b.encode() == "0***\n****\n***1\n"
    assert b.cell(pos(0, 0)).state == CellState.occupied(0)
    assert b.cell(pos(2, 3)).state == CellState.occupied(1)
    assert b.players[0].position == pos(0, 0)
    assert b.players[1].position == pos(2, 3)
    assert b.kinds.shape == (3, 4)


def test_degenerate_board_rejected():
    with pytest.raises(ValueError):
        Board(0, 5)
    with pytest.raises(ValueError):
        Board(4, 0)
    with pytest.raises(ValueError):
        Board(1, 1)


def test_two_by_two_move_right():
    b = Board(2, 2)
    nb = b.apply_action(0, Action.RIGHT)
    assert nb.state_at(pos(0, 0)) == CellState.owned(0)
    assert nb.state_at(pos(0, 1)) == CellState.occupied(0)
    assert nb.players[0].position == pos(0, 1)
    assert nb.encode() == "#0\n*1\n"


def test_transition_does_not_mutate_input():
    b = Board(5, 5).place(pos(2, 2), CellState.wall())
    before = b.encode()
    snapshot = b.clone()
    nb = b.apply_action(0, Action.DOWN)
    assert nb is not b
    assert b.encode() == before
    assert b == snapshot
    assert nb != b
    nb2 = b.move_player(1, pos(3, 4))
    assert b == snapshot
    assert nb2.players[1].position == pos(3, 4)


def test_dead_player_cannot_act():
    b = Board(3, 3).place(pos(0, 1), CellState.wall())
    b = b.apply_action(0, Action.RIGHT)
    assert not b.players[0].is_alive
    for a in ACTIONS:
        with pytest.raises(DeadActor):
            b.apply_action(0, a)
    with pytest.raises(InvalidMove):
        b.move_player(0, pos(1, 0))


def test_negative_and_far_edge_moves_are_invalid():
    b = Board(3, 3)
    with pytest.raises(InvalidMove):
        b.apply_action(0, Action.UP)
    with pytest.raises(InvalidMove):
        b.apply_action(0, Action.LEFT)
    with pytest.raises(InvalidMove):
        b.apply_action(1, Action.DOWN)
    with pytest.raises(InvalidMove):
        b.move_player(0, pos(0, 3))
    # the offset itself only knows about the near edges
    assert pos(2, 2).offset(1, 0) == pos(3, 2)
    with pytest.raises(InvalidMove):
        pos(0, 2).offset(-1, 0)


def test_occupied_kills_regardless_of_armor():
    b = Board(1, 4).place(pos(0, 1), CellState.power(armor()))
    b = b.apply_action(0, Action.RIGHT)
    assert b.players[0].armor == 1
    b = b.apply_action(1, Action.LEFT)  # player 1 now at (0, 2)
    b = b.apply_action(0, Action.RIGHT)
    assert not b.players[0].is_alive
    assert b.state_at(pos(0, 2)) == CellState.occupied(1)
    assert b.state_at(pos(0, 1)) == CellState.owned(0)
    assert int((b.kinds == OCCUPIED).sum()) == 1
    assert b.players[1].is_alive


def test_wall_and_trail_kill_without_armor():
    b = Board(3, 3).place(pos(1, 0), CellState.wall())
    dead = b.apply_action(0, Action.DOWN)
    assert not dead.players[0].is_alive
    # destination keeps its state, origin became trail
    assert dead.state_at(pos(1, 0)) == CellState.wall()
    assert dead.state_at(pos(0, 0)) == CellState.owned(0)

    b = Board(3, 3)
    b = b.apply_action(0, Action.RIGHT)
    b = b.apply_action(0, Action.DOWN)
    b = b.apply_action(0, Action.LEFT)
    b = b.apply_action(0, Action.UP)  # back onto its own trail at (0, 0)
    assert not b.players[0].is_alive


def test_armor_absorbs_one_collision():
    b = Board(3, 3)
    b = b.place(pos(0, 1), CellState.power(armor()))
    b = b.place(pos(0, 2), CellState.wall())
    b = b.apply_action(0, Action.RIGHT)
    assert b.players[0].armor == 1
    b = b.apply_action(0, Action.RIGHT)
    p = b.players[0]
    assert p.is_alive
    assert p.armor == 0
    assert p.position == pos(0, 2)
    assert b.state_at(pos(0, 2)) == CellState.occupied(0)
    # second collision, onto the trail, is fatal
    b = b.apply_action(0, Action.LEFT)
    assert not b.players[0].is_alive


def test_speed_boost_accumulates_and_is_never_consumed():
    b = Board(1, 6)
    b = b.place(pos(0, 1), CellState.power(double_speed(3)))
    b = b.place(pos(0, 2), CellState.power(PowerUp(SPEED, 2)))
    b = b.apply_action(0, Action.RIGHT)
    assert b.players[0].boost == 3
    b = b.apply_action(0, Action.RIGHT)
    assert b.players[0].boost == 5
    b = b.apply_action(0, Action.RIGHT)
    assert b.players[0].boost == 5
    assert b.encode() == "###0*1\n"


def test_bomb_clears_blockers_around_destination():
    b = Board(4, 4)
    b = b.place(pos(1, 1), CellState.power(bomb()))
    b = b.place(pos(0, 2), CellState.wall())
    b = b.place(pos(1, 0), CellState.power(double_speed()))
    b = b.place(pos(1, 2), CellState.owned(1))
    b = b.place(pos(2, 0), CellState.power(armor()))
    b = b.place(pos(2, 2), CellState.wall())
    b = b.place(pos(0, 3), CellState.wall())  # outside the blast
    b = b.apply_action(0, Action.RIGHT)
    b = b.apply_action(0, Action.DOWN)
    p = b.players[0]
    assert p.is_alive and p.position == pos(1, 1)
    assert p.boost == 0 and p.armor == 0
    assert b.encode() == "***#\n*0**\n****\n***1\n"


def test_bomb_spares_occupied_neighbours_and_edges():
    b = Board(2, 3)
    b = b.place(pos(0, 1), CellState.power(bomb()))
    b = b.place(pos(0, 2), CellState.wall())
    b = b.place(pos(1, 0), CellState.power(armor()))
    b = b.place(pos(1, 1), CellState.owned(1))
    b = b.apply_action(0, Action.RIGHT)
    assert b.encode() == "*0*\n**1\n"
    assert b.state_at(pos(1, 2)) == CellState.occupied(1)
    assert b.players[1].is_alive


def test_place_rejects_players_and_out_of_grid():
    b = Board(3, 3)
    with pytest.raises(ValueError):
        b.place(pos(1, 1), CellState.occupied(0))
    with pytest.raises(ValueError):
        b.place(pos(0, 0), CellState.wall())
    with pytest.raises(InvalidMove):
        b.place(pos(3, 0), CellState.wall())


def test_encoding_symbols():
    b = Board(2, 3)
    b = b.place(pos(0, 1), CellState.power(double_speed()))
    b = b.place(pos(0, 2), CellState.power(armor()))
    b = b.place(pos(1, 0), CellState.power(bomb()))
    b = b.place(pos(1, 1), CellState.wall())
    assert str(b) == "0SA\nB#1\n"
    assert CellState.occupied(12).symbol == "2"
    assert CellState.owned(0).symbol == "#"
    assert CellState.empty().symbol == "*"


def test_random_board_is_seeded_and_keeps_players():
    a = random_board(6, 6, n_items=10, seed=7)
    b = random_board(6, 6, n_items=10, seed=7)
    assert a == b
    kinds = a.kinds
    assert int(((kinds == WALL) | (kinds == POWER_UP)).sum()) == 10
    assert a.state_at(pos(0, 0)) == CellState.occupied(0)
    assert a.state_at(pos(5, 5)) == CellState.occupied(1)
    assert int((kinds == OWNED).sum()) == 0
    assert int((kinds == EMPTY).sum()) == 36 - 12


def test_player_counters():
    b = Board(2, 2)
    p = b.players[0]
    p = p.grant_armor().grant_armor().grant_boost(4)
    assert (p.armor, p.boost) == (2, 4)
    p = p.take_damage()
    assert p.is_alive and p.armor == 1
    p = p.take_damage().take_damage()
    assert not p.is_alive
    assert str(p) == "Player(0: DEAD)"
    with pytest.raises(DeadActor):
        p.grant_armor()
    with pytest.raises(DeadActor):
        p.grant_boost(1)
    with pytest.raises(DeadActor):
        p.take_damage()
    assert str(b.players[1]) == "Player(1: 0-0 @(1, 1))"


def test_power_up_types():
    assert double_speed(5) == PowerUp(SPEED, 5)
    assert armor().ptype == ARMOR
    assert bomb().symbol == "B" and bomb().ptype == BOMB
