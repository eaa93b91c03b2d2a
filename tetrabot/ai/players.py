"""
Driving loop shared by every player: ask for a command list, replay it on the
live game, repeat until the game ends.
"""

from abc import ABC, abstractmethod

from ..core.commands import CommandList, execute_all
from ..core.game import Game


class Player(ABC):
    """Anything that can pick the next command list for a game it owns."""

    @abstractmethod
    def get_game(self) -> Game:
        ...

    def get_game_mut(self) -> Game:
        """The game the chosen commands are replayed on."""
        return self.get_game()

    @abstractmethod
    def get_next_move(self) -> CommandList:
        ...

    def make_move(self) -> bool:
        if self.get_game().game_over:
            return False
        action = self.get_next_move()
        execute_all(self.get_game_mut(), action)
        return True

    def make_n_moves(self, n: int) -> int:
        """Plays up to n moves; returns how many were made."""
        made = 0
        for _ in range(n):
            if not self.make_move():
                break
            made += 1
        return made
