"""Single-player ocean grid for the sea battle engine."""

from __future__ import annotations

import logging
import random
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .errors import InvalidCoordinate, PlacementExhausted
from .ship import STANDARD_FLEET, Coordinate, Orientation, Ship, empty_sea

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

BOARD_SIZE = 10
FLEET_SIZE = len(STANDARD_FLEET)

SUNK_SYMBOL = "x"
HIT_SYMBOL = "S"
MISS_SYMBOL = "-"
UNKNOWN_SYMBOL = "."

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_placement_attempts",
    unit="1",
    description="Candidate positions sampled during random fleet placement",
)

SHOT_COUNTER = meter.create_counter(
    "seabattle_engine_shots",
    unit="1",
    description="Shots resolved by a board",
)


class GamePhase(Enum):
    """Lifecycle of a single board."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class Board:
    """A 10x10 ocean holding one fleet and the running shot statistics.

    Every cell always holds an occupant: a vessel that covers it or its own
    empty-sea cell. The grid and counters change only through
    :meth:`place_fleet_randomly`, :meth:`fire_at` and the occupant accessor
    used by :meth:`Ship.place`.
    """

    size = BOARD_SIZE

    def __init__(self, owner: str = "player") -> None:
        self.owner = owner
        self.phase = GamePhase.SETUP
        self.fleet: list[Ship] = []
        self._grid: list[list[Ship]] = [
            [empty_sea() for _ in range(self.size)] for _ in range(self.size)
        ]
        self._shots_fired = 0
        self._hit_count = 0
        self._ships_sunk = 0

    @property
    def shots_fired(self) -> int:
        return self._shots_fired

    @property
    def hit_count(self) -> int:
        """Successful shots, repeat hits on a damaged segment included."""
        return self._hit_count

    @property
    def ships_sunk(self) -> int:
        return self._ships_sunk

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def _require_valid(self, coord: Coordinate) -> None:
        if not self.is_valid_coordinate(coord):
            logger.error(
                "coordinate_out_of_bounds",
                extra={"row": coord.row, "col": coord.col, "owner": self.owner},
            )
            raise InvalidCoordinate(
                f"({coord.row}, {coord.col}) is outside the {self.size}x{self.size} board."
            )

    def occupant_at(self, coord: Coordinate) -> Ship:
        self._require_valid(coord)
        return self._grid[coord.row][coord.col]

    def set_occupant(self, coord: Coordinate, ship: Ship) -> None:
        self._require_valid(coord)
        self._grid[coord.row][coord.col] = ship

    def is_occupied(self, coord: Coordinate) -> bool:
        """Return True if a vessel, rather than open water, covers the cell."""
        return not self.occupant_at(coord).is_empty_sea

    def occupied_coordinates(self) -> list[Coordinate]:
        return [
            Coordinate(row, col)
            for row in range(self.size)
            for col in range(self.size)
            if not self._grid[row][col].is_empty_sea
        ]

    def place_fleet_randomly(
        self, rng: random.Random | None = None, max_attempts: int | None = None
    ) -> None:
        """Place the standard ten-ship fleet at random, largest ships first.

        Each ship is retried until a legal position turns up. With
        ``max_attempts`` set, a ship that needs more samples than that raises
        :class:`PlacementExhausted` and leaves the board partly populated.
        """
        rng = rng or random.Random()
        with tracer.start_as_current_span("board.place_fleet_randomly") as span:
            span.set_attribute("board.owner", self.owner)
            for ship_type in STANDARD_FLEET:
                ship = Ship(ship_type)
                attempts = 0
                while True:
                    if max_attempts is not None and attempts >= max_attempts:
                        PLACEMENT_COUNTER.add(
                            attempts, attributes={"result": "exhausted", "owner": self.owner}
                        )
                        logger.error(
                            "fleet_placement_exhausted",
                            extra={
                                "owner": self.owner,
                                "ship_type": ship_type.type_name,
                                "attempts": attempts,
                            },
                        )
                        raise PlacementExhausted(
                            f"Could not place {ship_type.type_name} after {attempts} attempts."
                        )
                    attempts += 1
                    bow = Coordinate(rng.randrange(self.size), rng.randrange(self.size))
                    orientation = rng.choice(list(Orientation))
                    if ship.is_placeable(bow, orientation, self):
                        ship.place(bow, orientation, self)
                        break
                self.fleet.append(ship)
                PLACEMENT_COUNTER.add(attempts, attributes={"result": "success", "owner": self.owner})
                logger.debug(
                    "ship_placed",
                    extra={
                        "owner": self.owner,
                        "ship_type": ship_type.type_name,
                        "orientation": orientation.value,
                        "row": bow.row,
                        "col": bow.col,
                        "attempts": attempts,
                    },
                )
            self.phase = GamePhase.IN_PROGRESS
            span.set_attribute("fleet.size", len(self.fleet))
            logger.info("fleet_placed", extra={"owner": self.owner, "ships": len(self.fleet)})

    def fire_at(self, coord: Coordinate) -> bool:
        """Resolve one shot and update the statistics.

        Returns True when the shot struck a vessel that was still afloat.
        Coordinates off the board raise :class:`InvalidCoordinate` before
        anything is counted.
        """
        with tracer.start_as_current_span("board.fire_at") as span:
            span.set_attribute("shot.row", coord.row)
            span.set_attribute("shot.col", coord.col)
            span.set_attribute("board.owner", self.owner)
            self._require_valid(coord)

            self._shots_fired += 1
            target = self._grid[coord.row][coord.col]
            if not target.resolve_shot(coord):
                span.set_attribute("shot.outcome", "miss")
                SHOT_COUNTER.add(1, attributes={"outcome": "miss", "owner": self.owner})
                logger.info(
                    "shot_miss",
                    extra={"row": coord.row, "col": coord.col, "owner": self.owner},
                )
                return False

            self._hit_count += 1
            outcome = "hit"
            if target.is_sunk():
                self._ships_sunk += 1
                outcome = "sunk"
                if self._ships_sunk == FLEET_SIZE:
                    self.phase = GamePhase.COMPLETE
            span.set_attribute("shot.outcome", outcome)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome, "owner": self.owner})
            logger.info(
                f"shot_{outcome}",
                extra={
                    "row": coord.row,
                    "col": coord.col,
                    "ship_type": target.ship_type.type_name,
                    "owner": self.owner,
                },
            )
            return True

    def is_complete(self) -> bool:
        """Check whether every ship in the fleet has been sunk."""
        return self._ships_sunk == FLEET_SIZE

    def cell_symbol(self, coord: Coordinate) -> str:
        occupant = self.occupant_at(coord)
        if occupant.is_sunk():
            return SUNK_SYMBOL
        if occupant.is_hit_at(coord):
            return HIT_SYMBOL
        if occupant.is_empty_sea and occupant.is_fired_upon():
            return MISS_SYMBOL
        return UNKNOWN_SYMBOL

    def render(self) -> str:
        """Return the player's view of the board with row and column headers."""
        lines = ["  " + "".join(f"{col} " for col in range(self.size))]
        for row in range(self.size):
            symbols = "".join(f"{self.cell_symbol(Coordinate(row, col))} " for col in range(self.size))
            lines.append(f"{row} {symbols}")
        return "\n".join(lines) + "\n"
