# tetrabot - A heuristic Tetris placement bot
# exceptions.py - Custom exceptions for the game substrate and the bot

class InvalidMoveException(Exception):
    """Raised when a command the dispatcher does not know is executed."""
    pass

class GameOverException(Exception):
    """Raised by the board when a piece cannot be spawned."""
    pass

class InvalidWeightsException(Exception):
    """Raised for a malformed weight configuration."""
    pass
