"""Tests for the Board mechanics."""

import random

import pytest
from seabattle.engine.board import FLEET_SIZE, Board, GamePhase
from seabattle.engine.errors import InvalidCoordinate, PlacementExhausted
from seabattle.engine.ship import Coordinate, Orientation, Ship, ShipType


def _all_coordinates(board: Board) -> list[Coordinate]:
    return [Coordinate(row, col) for row in range(board.size) for col in range(board.size)]


def test_fresh_board_is_empty_sea() -> None:
    board = Board()
    occupants = [board.occupant_at(coord) for coord in _all_coordinates(board)]
    assert all(occupant.is_empty_sea for occupant in occupants)
    assert len({id(occupant) for occupant in occupants}) == 100
    assert board.shots_fired == board.hit_count == board.ships_sunk == 0
    assert board.phase is GamePhase.SETUP
    assert not board.is_complete()


def test_random_placement_lays_out_separated_fleet() -> None:
    board = Board()
    board.place_fleet_randomly(random.Random(123))

    assert board.phase is GamePhase.IN_PROGRESS
    assert len(board.fleet) == FLEET_SIZE
    assert len(board.occupied_coordinates()) == 20

    for ship in board.fleet:
        coords = ship.coordinates()
        assert len(coords) == ship.ship_type.length
        rows = {c.row for c in coords}
        cols = {c.col for c in coords}
        assert len(rows) == 1 or len(cols) == 1
        for coord in coords:
            assert board.occupant_at(coord) is ship

    for index, ship in enumerate(board.fleet):
        for other in board.fleet[index + 1 :]:
            for a in ship.coordinates():
                for b in other.coordinates():
                    assert max(abs(a.row - b.row), abs(a.col - b.col)) > 1


def test_random_placement_is_deterministic_for_seed() -> None:
    first, second = Board(), Board()
    first.place_fleet_randomly(random.Random(7))
    second.place_fleet_randomly(random.Random(7))
    assert [s.coordinates() for s in first.fleet] == [s.coordinates() for s in second.fleet]


def test_random_placement_can_give_up() -> None:
    board = Board()
    with pytest.raises(PlacementExhausted):
        board.place_fleet_randomly(random.Random(1), max_attempts=0)


def test_is_occupied() -> None:
    board = Board()
    Ship(ShipType.DESTROYER).place(Coordinate(0, 0), Orientation.HORIZONTAL, board)
    assert board.is_occupied(Coordinate(0, 1))
    assert not board.is_occupied(Coordinate(1, 1))


def test_repeated_miss_counts_shots_only() -> None:
    board = Board()
    coord = Coordinate(0, 0)
    assert board.fire_at(coord) is False
    assert board.occupant_at(coord).is_fired_upon()
    assert board.fire_at(coord) is False
    assert board.occupant_at(coord).is_fired_upon()
    assert board.shots_fired == 2
    assert board.hit_count == 0


def test_hit_then_sink_destroyer() -> None:
    board = Board()
    ship = Ship(ShipType.DESTROYER)
    ship.place(Coordinate(4, 4), Orientation.HORIZONTAL, board)

    assert board.fire_at(Coordinate(4, 4)) is True
    assert not ship.is_sunk()
    assert board.ships_sunk == 0

    assert board.fire_at(Coordinate(4, 5)) is True
    assert ship.is_sunk()
    assert board.ships_sunk == 1
    assert board.hit_count == 2


def test_rehit_counts_every_time() -> None:
    board = Board()
    Ship(ShipType.CRUISER).place(Coordinate(2, 2), Orientation.VERTICAL, board)
    assert board.fire_at(Coordinate(3, 2)) is True
    assert board.fire_at(Coordinate(3, 2)) is True
    assert board.hit_count == 2
    assert board.shots_fired == 2
    assert board.ships_sunk == 0


def test_shots_at_sunk_ship_do_nothing() -> None:
    board = Board()
    Ship(ShipType.SUBMARINE).place(Coordinate(7, 7), Orientation.VERTICAL, board)
    assert board.fire_at(Coordinate(7, 7)) is True
    assert board.ships_sunk == 1

    assert board.fire_at(Coordinate(7, 7)) is False
    assert board.hit_count == 1
    assert board.ships_sunk == 1
    assert board.shots_fired == 2


def test_out_of_bounds_shot_rejected_without_counting() -> None:
    board = Board()
    for coord in (Coordinate(10, 0), Coordinate(0, -1), Coordinate(11, 11)):
        with pytest.raises(InvalidCoordinate):
            board.fire_at(coord)
    assert board.shots_fired == 0


def test_sinking_whole_fleet_completes_board() -> None:
    board = Board()
    board.place_fleet_randomly(random.Random(99))
    for coord in board.occupied_coordinates():
        assert board.fire_at(coord) is True

    assert board.is_complete()
    assert board.phase is GamePhase.COMPLETE
    assert board.ships_sunk == 10
    assert board.hit_count == board.shots_fired == 20

    assert board.fire_at(board.occupied_coordinates()[0]) is False
    assert board.hit_count == 20
    assert board.is_complete()


def test_render_fresh_board() -> None:
    expected_header = "  0 1 2 3 4 5 6 7 8 9 "
    lines = Board().render().split("\n")
    assert lines[0] == expected_header
    assert lines[1] == "0 " + ". " * 10
    assert lines[10] == "9 " + ". " * 10
    assert lines[11] == ""
    assert len(lines) == 12


def test_render_symbols() -> None:
    board = Board()
    Ship(ShipType.DESTROYER).place(Coordinate(0, 0), Orientation.HORIZONTAL, board)
    Ship(ShipType.CRUISER).place(Coordinate(5, 5), Orientation.VERTICAL, board)

    board.fire_at(Coordinate(9, 9))
    board.fire_at(Coordinate(5, 5))
    board.fire_at(Coordinate(0, 0))
    board.fire_at(Coordinate(0, 1))

    rows = board.render().split("\n")[1:]
    assert rows[0] == "0 x x . . . . . . . . "
    assert rows[5] == "5 . . . . . S . . . . "
    assert rows[6] == "6 . . . . . . . . . . "
    assert rows[9] == "9 . . . . . . . . . - "


def test_occupant_accessors_bounds_checked() -> None:
    board = Board()
    with pytest.raises(InvalidCoordinate):
        board.occupant_at(Coordinate(-1, 0))
    with pytest.raises(ValueError):
        board.is_occupied(Coordinate(0, 10))
