import pygame
from pygame.event import Event
from typing import Any, Optional

from reversi.arguments import Arguments
from reversi.ai.policy import EASY, HARD, MEDIUM
from reversi.mode.base import BaseMode
from reversi.othello.board import Board
from reversi.session import GameSession, SessionListener, Snapshot, color_name

DIFFICULTY_KEYS = {
    pygame.K_1: EASY,
    pygame.K_2: MEDIUM,
    pygame.K_3: HARD,
}


class StatusListener(SessionListener):
    def __init__(self) -> None:
        self.status = ""

        # Side that passed most recently, shown until the next move is played.
        self.passed: Optional[int] = None
        self.pass_pending = False

    def on_pass(self, side: int) -> None:
        self.passed = side
        self.pass_pending = True

    def on_turn_change(self, side: int) -> None:
        if self.pass_pending:
            self.pass_pending = False
        else:
            self.passed = None

    def on_update(self, snapshot: Snapshot) -> None:
        self.status = get_status_text(snapshot, self.passed)


def get_status_text(snapshot: Snapshot, passed: Optional[int]) -> str:
    score = f"black {snapshot.black_count} - white {snapshot.white_count}"
    side = f"you play {color_name(snapshot.human)}"

    if snapshot.is_game_over():
        if snapshot.is_draw():
            return f"Draw ({score}, {side})"
        winner = color_name(snapshot.winner).capitalize()
        return f"{winner} wins ({score}, {side})"

    if snapshot.turn == snapshot.human:
        status = "Your move"
    else:
        status = "Computer is thinking"

    if passed is not None:
        status = f"{color_name(passed).capitalize()} passed. {status}"

    settings = f"{snapshot.difficulty}, depth {snapshot.search_depth}"
    return f"{status} ({score}, {side}) [{settings}]"


class GameMode(BaseMode):
    def __init__(self, args: Arguments) -> None:
        self.args = args
        self.listener = StatusListener()
        self.session = GameSession(
            self.listener,
            difficulty=args.difficulty,
            search_depth=args.search_depth,
            threaded=True,
            think_delay=args.think_delay,
            human=args.human,
        )

        if not args.hints:
            self.session.toggle_hint_mode()

        if args.position is not None:
            self.session.set_position(args.position, args.turn)

    def on_event(self, event: Event) -> None:
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_r:
            self.session.restart(self.args.human)
        elif event.key == pygame.K_h:
            self.session.toggle_hint_mode()
        elif event.key in DIFFICULTY_KEYS:
            self.session.set_difficulty(DIFFICULTY_KEYS[event.key])
        elif event.key == pygame.K_UP:
            self.session.set_search_depth(self.session.search_depth + 1)
        elif event.key == pygame.K_DOWN:
            self.session.set_search_depth(self.session.search_depth - 1)

    def on_frame(self, event: Event) -> None:
        self.session.poll()

    def on_move(self, row: int, col: int) -> None:
        if self.session.is_game_over():
            self.session.restart(self.args.human)
            return

        self.session.select_move(row, col)

    def get_board(self) -> Board:
        return self.session.board

    def get_ui_details(self) -> dict[str, Any]:
        snapshot = self.session.snapshot()

        details: dict[str, Any] = {
            "turn": snapshot.turn,
            "status": self.listener.status,
        }

        if snapshot.hints and snapshot.turn == snapshot.human:
            details["hints"] = {move.coordinates() for move in snapshot.moves}

        if snapshot.last_move is not None:
            details["played_move"] = snapshot.last_move.coordinates()
            details["flipped"] = set(snapshot.last_move.flips)

        return details
