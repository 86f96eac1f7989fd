"""Exceptions raised by the sea battle engine."""


class SeaBattleError(Exception):
    """Base class for every error the engine raises."""


class InvalidCoordinate(SeaBattleError, ValueError):
    """A coordinate outside the 10x10 board was supplied."""


class PlacementExhausted(SeaBattleError, RuntimeError):
    """Random placement gave up after its configured number of attempts."""
