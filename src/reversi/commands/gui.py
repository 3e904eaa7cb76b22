# Don't complain about setting env var in the middle of imports.
# ruff: noqa: E402

import os
import typer
from pathlib import Path
from typing import Annotated, Optional

# Disable pygame start-up text.
# This needs to be before first pygame import.
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "hide"

from reversi.arguments import Arguments
from reversi.mode.game import GameMode
from reversi.othello.board import BLACK, WHITE, Board
from reversi.window import Window

app = typer.Typer(pretty_exceptions_enable=False)

HUMAN_SIDES: dict[str, Optional[int]] = {
    "black": BLACK,
    "white": WHITE,
    "random": None,
}

TURNS: dict[str, Optional[int]] = {
    "black": BLACK,
    "white": WHITE,
}


def read_position(file: Path) -> Board:
    """Load a board written as 8 lines of `.`, `x` (black) and `o` (white)."""
    return Board.from_string(file.read_text())


def lookup_option(
    name: str, value: str, options: dict[str, Optional[int]]
) -> Optional[int]:
    try:
        return options[value.lower()]
    except KeyError:
        print(f"Unknown {name}: {value}")
        print(f"Available {name}s: ")
        for option in options:
            print(f"- {option}")
        exit(1)


@app.command()
def main(
    difficulty: Annotated[Optional[str], typer.Option("-d")] = None,
    search_depth: Annotated[Optional[int], typer.Option("-n")] = None,
    human: Annotated[str, typer.Option("--human")] = "random",
    no_hints: Annotated[bool, typer.Option("--no-hints")] = False,
    position_file: Annotated[Optional[Path], typer.Option("-p")] = None,
    turn: Annotated[str, typer.Option("--turn")] = "black",
) -> None:
    args = Arguments.empty()

    if difficulty is not None:
        args.difficulty = difficulty

    if search_depth is not None:
        args.search_depth = search_depth

    args.human = lookup_option("side", human, HUMAN_SIDES)
    args.hints = not no_hints

    if position_file is not None:
        try:
            args.position = read_position(position_file)
        except (OSError, ValueError) as e:
            print(f"Could not load position from {position_file}: {e}")
            exit(1)

        side = lookup_option("turn", turn, TURNS)
        assert side is not None
        args.turn = side

    Window(GameMode, args).run()


if __name__ == "__main__":
    app()
