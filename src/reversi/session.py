from __future__ import annotations

import queue
import random
import threading
import time
from typing import Optional

from reversi.ai import DEFAULT_SEARCH_DEPTH, clamp_depth
from reversi.ai.policy import DEFAULT_DIFFICULTY, choose_move, parse_difficulty
from reversi.log import log
from reversi.othello.board import BLACK, WHITE, Board, index_to_field, opponent
from reversi.othello.moves import (
    Move,
    do_move,
    find_move,
    get_moves,
    get_winner,
    has_moves,
)

AWAITING_HUMAN_MOVE = "awaiting_human_move"
COMPUTER_THINKING = "computer_thinking"
TURN_RESOLVED = "turn_resolved"
GAME_OVER = "game_over"


def color_name(color: Optional[int]) -> str:
    if color == BLACK:
        return "black"
    if color == WHITE:
        return "white"
    return "nobody"


class Snapshot:
    """Everything a presentation layer needs to draw the current game."""

    def __init__(
        self,
        *,
        board: Board,
        turn: int,
        state: str,
        moves: list[Move],
        last_move: Optional[Move],
        winner: Optional[int],
        human: int,
        computer: int,
        hints: bool,
        difficulty: str,
        search_depth: int,
    ) -> None:
        self.board = board
        self.turn = turn
        self.state = state
        self.moves = moves
        self.last_move = last_move
        self.winner = winner
        self.human = human
        self.computer = computer
        self.hints = hints
        self.difficulty = difficulty
        self.search_depth = search_depth

        self.black_count, self.white_count = board.count()

    def is_game_over(self) -> bool:
        return self.state == GAME_OVER

    def is_draw(self) -> bool:
        return self.is_game_over() and self.winner is None


class SessionListener:
    def on_update(self, snapshot: Snapshot) -> None:
        pass

    def on_pass(self, side: int) -> None:
        pass

    def on_turn_change(self, side: int) -> None:
        pass

    def on_game_over(self, winner: Optional[int]) -> None:
        pass


class ComputerDecision:
    def __init__(self, generation: int, move: Optional[Move]) -> None:
        # Restart count of the session the decision was made for.
        self.generation = generation
        self.move = move


class GameSession:
    def __init__(
        self,
        listener: Optional[SessionListener] = None,
        *,
        difficulty: str = DEFAULT_DIFFICULTY,
        search_depth: int = DEFAULT_SEARCH_DEPTH,
        threaded: bool = False,
        think_delay: float = 0.0,
        rng: Optional[random.Random] = None,
        human: Optional[int] = None,
    ) -> None:
        self.listener = listener or SessionListener()
        self.difficulty = parse_difficulty(difficulty)
        self.search_depth = clamp_depth(search_depth)
        self.threaded = threaded
        self.think_delay = think_delay
        self.rng = rng or random.Random()
        self.hints = True

        self.recv_queue: queue.Queue[ComputerDecision] = queue.Queue()
        self.generation = 0

        self.board = Board.start()
        self.turn = BLACK
        self.human = BLACK
        self.computer = WHITE
        self.state = TURN_RESOLVED
        self.last_move: Optional[Move] = None
        self.winner: Optional[int] = None

        self.restart(human)

    def restart(self, human: Optional[int] = None) -> None:
        if human is None:
            human = self.rng.choice([BLACK, WHITE])

        assert human in [BLACK, WHITE]

        # Decisions still being computed for the previous game are dropped.
        self.generation += 1

        self.human = human
        self.computer = opponent(human)
        self.board = Board.start()
        self.turn = BLACK
        self.state = TURN_RESOLVED
        self.last_move = None
        self.winner = None

        log(
            f"New game: human plays {color_name(self.human)}, "
            f"computer plays {color_name(self.computer)}"
        )

        self.listener.on_turn_change(self.turn)
        self._resolve_turn()

    def set_position(self, board: Board, turn: int) -> None:
        """Continue the current game from an arbitrary position."""

        assert turn in [BLACK, WHITE]

        self.generation += 1
        self.board = board.clone()
        self.turn = turn
        self.last_move = None
        self.winner = None

        self.listener.on_turn_change(self.turn)
        self._resolve_turn()

    def select_move(self, row: int, col: int) -> bool:
        """Play a move for the human. Returns False and changes nothing if illegal."""

        if self.state != AWAITING_HUMAN_MOVE or self.turn != self.human:
            return False

        move = find_move(get_moves(self.board, self.turn), row, col)

        if move is None:
            return False

        self._play(move)
        self._resolve_turn()
        return True

    def set_difficulty(self, difficulty: str) -> None:
        self.difficulty = parse_difficulty(difficulty)
        self._notify()

    def set_search_depth(self, depth: int) -> None:
        self.search_depth = clamp_depth(depth)
        self._notify()

    def toggle_hint_mode(self) -> None:
        self.hints = not self.hints
        self._notify()

    def get_moves(self) -> list[Move]:
        if self.state == GAME_OVER:
            return []
        return get_moves(self.board, self.turn)

    def is_thinking(self) -> bool:
        return self.state == COMPUTER_THINKING

    def is_game_over(self) -> bool:
        return self.state == GAME_OVER

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.clone(),
            turn=self.turn,
            state=self.state,
            moves=self.get_moves(),
            last_move=self.last_move,
            winner=self.winner,
            human=self.human,
            computer=self.computer,
            hints=self.hints,
            difficulty=self.difficulty,
            search_depth=self.search_depth,
        )

    def poll(self) -> bool:
        """
        Apply computer decisions that finished in the background.
        Meant to be called from the host loop, every frame.
        """

        changed = False

        while True:
            try:
                decision = self.recv_queue.get_nowait()
            except queue.Empty:
                break

            if self._apply_decision(decision):
                changed = True

        return changed

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the computer has played. Raises queue.Empty on timeout."""

        while self.state == COMPUTER_THINKING:
            decision = self.recv_queue.get(timeout=timeout)
            self._apply_decision(decision)

    def _resolve_turn(self) -> None:
        while True:
            self.state = TURN_RESOLVED
            moves = get_moves(self.board, self.turn)

            if not moves:
                if not has_moves(self.board, opponent(self.turn)):
                    self._game_over()
                    return

                self._pass()
                continue

            if self.turn == self.human:
                self.state = AWAITING_HUMAN_MOVE
                self._notify()
                return

            if self.threaded:
                self._start_thinking(moves)
                return

            move = self._decide(
                self.board.clone(), moves, self.turn, self.difficulty, self.search_depth
            )

            if move is None:
                self._pass()
            else:
                self._play(move)

    def _start_thinking(self, moves: list[Move]) -> None:
        self.state = COMPUTER_THINKING
        self._notify()

        generation = self.generation
        board = self.board.clone()
        side = self.turn
        difficulty = self.difficulty
        depth = self.search_depth

        def think() -> None:
            if self.think_delay > 0:
                time.sleep(self.think_delay)

            move = self._decide(board, moves, side, difficulty, depth)
            self.recv_queue.put(ComputerDecision(generation, move))

        threading.Thread(target=think, daemon=True).start()

    def _decide(
        self,
        board: Board,
        moves: list[Move],
        side: int,
        difficulty: str,
        depth: int,
    ) -> Optional[Move]:
        start = time.monotonic()
        move = choose_move(board, moves, side, difficulty, depth, self.rng)
        elapsed = time.monotonic() - start

        if move is not None:
            log(
                f"Computer ({difficulty}, depth {depth}) plays "
                f"{index_to_field(move.row, move.col)} in {elapsed:.3f}s"
            )

        return move

    def _apply_decision(self, decision: ComputerDecision) -> bool:
        if decision.generation != self.generation or self.state != COMPUTER_THINKING:
            log("Discarding computer move from a previous game")
            return False

        if decision.move is None:
            self._pass()
        else:
            self._play(decision.move)

        self._resolve_turn()
        return True

    def _play(self, move: Move) -> None:
        do_move(self.board, move, self.turn)
        self.last_move = move
        self.turn = opponent(self.turn)
        self.listener.on_turn_change(self.turn)
        self._notify()

    def _pass(self) -> None:
        passed = self.turn
        self.turn = opponent(self.turn)

        log(f"{color_name(passed)} has no moves and passes")

        self.listener.on_pass(passed)
        self.listener.on_turn_change(self.turn)
        self._notify()

    def _game_over(self) -> None:
        self.state = GAME_OVER
        self.winner = get_winner(self.board)

        black, white = self.board.count()
        log(f"Game over, {black}-{white}, winner: {color_name(self.winner)}")

        self.listener.on_game_over(self.winner)
        self._notify()

    def _notify(self) -> None:
        self.listener.on_update(self.snapshot())
