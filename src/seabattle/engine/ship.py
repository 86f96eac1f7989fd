"""Ship domain model for the sea battle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .board import Board


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ShipType(Enum):
    """Every kind of cell occupant, open water included."""

    BATTLESHIP = "Battleship"
    CRUISER = "Cruiser"
    DESTROYER = "Destroyer"
    SUBMARINE = "Submarine"
    EMPTY_SEA = "EmptySea"

    @property
    def length(self) -> int:
        """Return the number of contiguous cells the occupant covers."""
        return _LENGTHS[self]

    @property
    def type_name(self) -> str:
        return self.value


_LENGTHS = {
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.DESTROYER: 2,
    ShipType.SUBMARINE: 1,
    ShipType.EMPTY_SEA: 1,
}

# Largest first so the crowded end of placement only has to fit submarines.
STANDARD_FLEET: tuple[ShipType, ...] = (
    ShipType.BATTLESHIP,
    ShipType.CRUISER,
    ShipType.CRUISER,
    ShipType.DESTROYER,
    ShipType.DESTROYER,
    ShipType.DESTROYER,
    ShipType.SUBMARINE,
    ShipType.SUBMARINE,
    ShipType.SUBMARINE,
    ShipType.SUBMARINE,
)


def footprint(bow: Coordinate, orientation: Orientation, length: int) -> list[Coordinate]:
    """Return the cells covered by a ship of ``length`` anchored at ``bow``."""
    if orientation is Orientation.HORIZONTAL:
        return [Coordinate(bow.row, bow.col + offset) for offset in range(length)]
    return [Coordinate(bow.row + offset, bow.col) for offset in range(length)]


@dataclass(eq=False)
class Ship:
    """A single cell occupant: one of the four vessel classes or empty sea.

    Vessels track one hit flag per segment, ordered from the bow. Empty sea
    keeps a single flag recording whether the cell has been fired upon; it is
    never hit and never sunk.
    """

    ship_type: ShipType
    bow: Coordinate | None = field(default=None, init=False)
    orientation: Orientation | None = field(default=None, init=False)
    hits: list[bool] = field(init=False)

    def __post_init__(self) -> None:
        self.hits = [False] * self.ship_type.length

    @property
    def is_empty_sea(self) -> bool:
        return self.ship_type is ShipType.EMPTY_SEA

    @property
    def is_placed(self) -> bool:
        return self.bow is not None

    def coordinates(self) -> list[Coordinate]:
        """Return the ordered footprint, or an empty list before placement."""
        if self.bow is None or self.orientation is None:
            return []
        return footprint(self.bow, self.orientation, self.ship_type.length)

    def is_placeable(self, bow: Coordinate, orientation: Orientation, board: Board) -> bool:
        """Check bounds and the one-cell separation from every other vessel."""
        cells = footprint(bow, orientation, self.ship_type.length)
        if not all(board.is_valid_coordinate(cell) for cell in cells):
            return False

        end = cells[-1]
        for row in range(bow.row - 1, end.row + 2):
            for col in range(bow.col - 1, end.col + 2):
                neighbour = Coordinate(row, col)
                if board.is_valid_coordinate(neighbour) and board.is_occupied(neighbour):
                    return False
        return True

    def place(self, bow: Coordinate, orientation: Orientation, board: Board) -> None:
        """Anchor the ship and write it into every footprint cell.

        Callers are expected to have checked :meth:`is_placeable` first.
        """
        if self.is_placed:
            raise RuntimeError("Ship has already been placed.")
        self.bow = bow
        self.orientation = orientation
        for cell in self.coordinates():
            board.set_occupant(cell, self)

    def _segment_index(self, coord: Coordinate) -> int | None:
        if self.bow is None:
            return None
        if self.orientation is Orientation.HORIZONTAL:
            offset, aligned = coord.col - self.bow.col, coord.row == self.bow.row
        else:
            offset, aligned = coord.row - self.bow.row, coord.col == self.bow.col
        if aligned and 0 <= offset < self.ship_type.length:
            return offset
        return None

    def resolve_shot(self, coord: Coordinate) -> bool:
        """Apply a shot and report whether it struck a live vessel.

        Repeat hits on an already damaged segment still count as hits; shots
        at a sunk vessel do nothing.
        """
        if self.is_empty_sea:
            self.hits[0] = True
            return False
        if self.is_sunk():
            return False
        index = self._segment_index(coord)
        if index is None:
            return False
        self.hits[index] = True
        return True

    def is_sunk(self) -> bool:
        if self.is_empty_sea:
            return False
        return all(self.hits)

    def is_hit_at(self, coord: Coordinate) -> bool:
        if self.is_empty_sea:
            return False
        index = self._segment_index(coord)
        return index is not None and self.hits[index]

    def is_fired_upon(self) -> bool:
        """Return True once any shot has landed on this occupant."""
        return any(self.hits)


def empty_sea() -> Ship:
    """Return a fresh open-water occupant."""
    return Ship(ShipType.EMPTY_SEA)
