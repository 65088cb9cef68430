"""Structured errors raised by the battle engine.

Everything here signals a contract violation by the caller: the engine is
total over valid input, so these are never expected during normal play.
"""


class BattleError(Exception):
    """Base for all engine errors."""


class IllegalActionError(BattleError, ValueError):
    """An action that the acting combatant cannot legally take."""

    def __init__(self, side: int, move_name: str, detail: str):
        super().__init__(f"Side {side} cannot use '{move_name}': {detail}")
        self.side = side
        self.move_name = move_name
        self.detail = detail


class BattleFinishedError(BattleError):
    """A turn was requested on a battle that is already over."""

    def __init__(self, turn: int):
        super().__init__(f"Battle already finished on turn {turn}")
        self.turn = turn


class CatalogRecordError(BattleError, ValueError):
    """A catalog record is missing data the normalizer requires."""

    def __init__(self, field: str, detail: str):
        super().__init__(f"Malformed catalog record at '{field}': {detail}")
        self.field = field
        self.detail = detail
