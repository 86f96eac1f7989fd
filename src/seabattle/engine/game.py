"""Single-player game session with telemetry hooks."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass

from seabattle.telemetry import get_logger, get_tracer, record_game_metric

from .board import Board, GamePhase
from .errors import InvalidCoordinate
from .ship import Coordinate, ShipType


@dataclass(frozen=True)
class ShotReport:
    """Outcome of a single shot as seen by the player."""

    coord: Coordinate
    hit: bool
    sunk_type: ShipType | None
    complete: bool


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the session statistics."""

    phase: GamePhase
    shots_fired: int
    hit_count: int
    ships_sunk: int


class SoloGame:
    """Owns one board and the random source used to lay out its fleet."""

    def __init__(
        self, rng_seed: int | None = None, max_placement_attempts: int | None = None
    ) -> None:
        self.board = Board()
        self.max_placement_attempts = max_placement_attempts
        self._rng = random.Random(rng_seed)
        self._logger = get_logger("seabattle.engine")
        self._tracer = get_tracer("seabattle.engine")
        self._game_span_cm = None
        self._game_span = None
        self._game_start_time: float | None = None

    @property
    def phase(self) -> GamePhase:
        return self.board.phase

    def setup_random(self) -> None:
        """Lay out the fleet and open the span covering the whole game."""
        self._start_game_span()
        with self._tracer.start_as_current_span("seabattle.engine.setup_random") as span:
            self.board.place_fleet_randomly(self._rng, max_attempts=self.max_placement_attempts)
            span.set_attribute("fleet.size", len(self.board.fleet))
            record_game_metric("seabattle_game_setup_total", 1, {"ships": len(self.board.fleet)})
            self._logger.info("Fleet of %d ships placed", len(self.board.fleet))

    def fire(self, coord: Coordinate) -> ShotReport:
        """Fire at ``coord`` and describe what happened."""
        with self._tracer.start_as_current_span("seabattle.engine.fire") as span:
            span.set_attribute("coord.row", coord.row)
            span.set_attribute("coord.col", coord.col)
            if self.phase is GamePhase.SETUP:
                raise RuntimeError("Fleet has not been placed yet.")

            was_complete = self.board.is_complete()
            sunk_before = self.board.ships_sunk
            try:
                hit = self.board.fire_at(coord)
            except InvalidCoordinate as exc:
                record_game_metric("seabattle_game_invalid_shots_total", 1, {"reason": "out_of_bounds"})
                span.record_exception(exc)
                span.set_attribute("error", True)
                raise

            sunk_type = None
            if self.board.ships_sunk > sunk_before:
                sunk_type = self.board.occupant_at(coord).ship_type
            complete = self.board.is_complete()

            span.set_attribute("hit", hit)
            span.set_attribute("sunk", sunk_type is not None)
            record_game_metric("seabattle_shots_total", 1)
            record_game_metric(
                "seabattle_shots_by_result_total", 1, {"result": "hit" if hit else "miss"}
            )
            self._logger.info(
                "fire coord=(%d,%d) hit=%s sunk=%s",
                coord.row,
                coord.col,
                hit,
                sunk_type.type_name if sunk_type else "-",
            )

            if complete and not was_complete:
                self._finish_game()

            return ShotReport(coord=coord, hit=hit, sunk_type=sunk_type, complete=complete)

    def get_state(self) -> GameState:
        return GameState(
            phase=self.phase,
            shots_fired=self.board.shots_fired,
            hit_count=self.board.hit_count,
            ships_sunk=self.board.ships_sunk,
        )

    def render(self) -> str:
        return self.board.render()

    def _start_game_span(self) -> None:
        self._close_game_span()
        self._game_start_time = time.perf_counter()
        self._game_span_cm = self._tracer.start_as_current_span("seabattle.engine.game")
        self._game_span = self._game_span_cm.__enter__()

    def _finish_game(self) -> None:
        duration = (time.perf_counter() - self._game_start_time) if self._game_start_time else 0.0
        shots = self.board.shots_fired
        accuracy = self.board.hit_count / shots if shots else 0.0

        record_game_metric("seabattle_game_completed_total", 1)
        record_game_metric("seabattle_game_duration_seconds", duration)

        with self._tracer.start_as_current_span("seabattle.engine.game_complete") as span:
            span.set_attribute("shots", shots)
            span.set_attribute("accuracy", accuracy)
            span.set_attribute("duration_ms", duration * 1000)

        if self._game_span is not None:
            self._game_span.set_attribute("shots", shots)
            self._game_span.set_attribute("duration_ms", duration * 1000)

        self._logger.info(
            "Game finished. shots=%d accuracy=%.2f duration_s=%.3f", shots, accuracy, duration
        )
        self._close_game_span()

    def _close_game_span(self) -> None:
        if self._game_span_cm is not None:
            self._game_span_cm.__exit__(None, None, None)
            self._game_span_cm = None
            self._game_span = None
