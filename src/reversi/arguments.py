from __future__ import annotations

from typing import Optional

from reversi.config import get_difficulty, get_search_depth, get_think_delay
from reversi.othello.board import BLACK, Board


class Arguments:
    def __init__(
        self,
        difficulty: str,
        search_depth: int,
        human: Optional[int],
        hints: bool,
        think_delay: float,
        position: Optional[Board] = None,
        turn: int = BLACK,
    ) -> None:
        self.difficulty = difficulty
        self.search_depth = search_depth

        # None means the human side is decided by a coin flip every game.
        self.human = human

        self.hints = hints
        self.think_delay = think_delay

        # Position to play the first game from instead of the start position.
        self.position = position
        self.turn = turn

    @classmethod
    def empty(cls) -> Arguments:
        return Arguments(
            difficulty=get_difficulty(),
            search_depth=get_search_depth(),
            human=None,
            hints=True,
            think_delay=get_think_delay(),
        )
