class GameError(Exception):
    pass


class LogicError(GameError):
    pass


class NoLegalMovesError(LogicError):
    pass


class IllegalMoveError(GameError):
    pass


class OutOfRangeError(GameError):
    pass


class ModeError(GameError):
    pass
