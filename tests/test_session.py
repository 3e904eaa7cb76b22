import pytest
import random
from typing import Optional

from reversi.ai.policy import EASY, HARD, MEDIUM
from reversi.othello.board import BLACK, EMPTY, WHITE, Board
from reversi.othello.moves import Move
from reversi.session import (
    AWAITING_HUMAN_MOVE,
    COMPUTER_THINKING,
    GAME_OVER,
    ComputerDecision,
    GameSession,
    SessionListener,
    Snapshot,
)

# Black's only disc run is closed off by the edge, white can play d1.
BOARD_BLACK_MUST_PASS = Board.from_string(
    """
    oxx.....
    ........
    ........
    ........
    ........
    ........
    ........
    ........
    """
)


class RecordingListener(SessionListener):
    def __init__(self) -> None:
        self.snapshots: list[Snapshot] = []
        self.passes: list[int] = []
        self.turns: list[int] = []
        self.game_overs: list[Optional[int]] = []

    def on_update(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    def on_pass(self, side: int) -> None:
        self.passes.append(side)

    def on_turn_change(self, side: int) -> None:
        self.turns.append(side)

    def on_game_over(self, winner: Optional[int]) -> None:
        self.game_overs.append(winner)

    def event_count(self) -> int:
        return (
            len(self.snapshots)
            + len(self.passes)
            + len(self.turns)
            + len(self.game_overs)
        )


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


def make_session(
    listener: SessionListener, human: int, difficulty: str = MEDIUM
) -> GameSession:
    return GameSession(
        listener, difficulty=difficulty, rng=random.Random(0), human=human
    )


def test_human_moves_first_as_black(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)

    assert session.state == AWAITING_HUMAN_MOVE
    assert session.turn == BLACK
    assert session.board == Board.start()
    assert [move.coordinates() for move in session.get_moves()] == [
        (2, 3),
        (3, 2),
        (4, 5),
        (5, 4),
    ]

    snapshot = listener.snapshots[-1]
    assert snapshot.black_count == 2
    assert snapshot.white_count == 2
    assert snapshot.last_move is None
    assert not snapshot.is_game_over()


def test_computer_moves_first_as_black(listener: RecordingListener) -> None:
    session = make_session(listener, WHITE)

    assert session.computer == BLACK
    assert session.state == AWAITING_HUMAN_MOVE
    assert session.turn == WHITE
    assert session.board.count_discs() == 5
    assert session.last_move is not None
    assert listener.turns == [BLACK, WHITE]


def test_random_side_assignment() -> None:
    humans = set()
    rng = random.Random(99)

    for _ in range(20):
        session = GameSession(difficulty=EASY, rng=rng)
        assert session.computer != session.human
        humans.add(session.human)

    assert humans == {BLACK, WHITE}


@pytest.mark.parametrize(
    ["row", "col"],
    [
        pytest.param(0, 0, id="no-flips"),
        pytest.param(3, 3, id="occupied"),
        pytest.param(8, 8, id="off-board"),
        pytest.param(2, 4, id="legal-for-other-side"),
    ],
)
def test_illegal_human_move_is_ignored(
    listener: RecordingListener, row: int, col: int
) -> None:
    session = make_session(listener, BLACK)
    before = session.board.clone()
    events = listener.event_count()

    assert not session.select_move(row, col)

    assert session.board == before
    assert session.turn == BLACK
    assert session.state == AWAITING_HUMAN_MOVE
    assert listener.event_count() == events


def test_human_move_and_computer_reply(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)

    assert session.select_move(2, 3)

    # Human's move and the computer's answer.
    assert session.board.count_discs() == 6
    assert session.turn == BLACK
    assert session.state == AWAITING_HUMAN_MOVE
    assert session.last_move is not None
    row, col = session.last_move.coordinates()
    assert session.board.get_square(row, col) == WHITE
    assert listener.turns[-2:] == [WHITE, BLACK]


def test_last_move_carries_flips(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)
    session.select_move(2, 3)

    played = listener.snapshots[1]
    assert played.last_move is not None
    assert played.last_move.coordinates() == (2, 3)
    assert played.last_move.flips == [(3, 3)]


def test_forced_pass(listener: RecordingListener) -> None:
    session = make_session(listener, WHITE)
    turns = len(listener.turns)

    # Computer plays black and has no moves.
    session.set_position(BOARD_BLACK_MUST_PASS, BLACK)

    assert listener.passes == [BLACK]
    assert listener.turns[turns:] == [BLACK, WHITE]
    assert session.board == BOARD_BLACK_MUST_PASS
    assert session.turn == WHITE
    assert session.state == AWAITING_HUMAN_MOVE
    assert [move.coordinates() for move in session.get_moves()] == [(0, 3)]


def test_human_pass_lets_computer_play(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)
    session.set_position(BOARD_BLACK_MUST_PASS, BLACK)

    # Black passes, white captures the top row, then neither side can move.
    assert listener.passes == [BLACK]
    assert session.board.get_square(0, 3) == WHITE
    assert session.state == GAME_OVER
    assert session.winner == WHITE


@pytest.mark.parametrize(
    ["board", "expected_winner"],
    [
        pytest.param(
            Board.from_rows([[BLACK] * 8] * 5 + [[WHITE] * 8] * 3),
            BLACK,
            id="full-black-wins",
        ),
        pytest.param(
            Board.from_rows([[WHITE] * 8] * 5 + [[BLACK] * 8] * 3),
            WHITE,
            id="full-white-wins",
        ),
        pytest.param(
            Board.from_rows([[BLACK] * 8] * 4 + [[WHITE] * 8] * 4),
            None,
            id="full-draw",
        ),
        pytest.param(
            Board.from_rows([[BLACK, EMPTY] * 4 for _ in range(8)]),
            BLACK,
            id="no-moves-black-wins",
        ),
        pytest.param(Board.empty(), None, id="empty-draw"),
    ],
)
def test_game_over(
    listener: RecordingListener, board: Board, expected_winner: Optional[int]
) -> None:
    session = make_session(listener, BLACK)
    session.set_position(board, BLACK)

    assert session.state == GAME_OVER
    assert session.is_game_over()
    assert session.winner == expected_winner
    assert listener.game_overs == [expected_winner]
    assert session.get_moves() == []

    snapshot = listener.snapshots[-1]
    assert snapshot.is_game_over()
    assert snapshot.winner == expected_winner
    assert snapshot.is_draw() == (expected_winner is None)


def test_no_moves_after_game_over(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)
    session.set_position(Board.empty(), BLACK)

    assert not session.select_move(3, 3)
    assert session.board == Board.empty()


def test_restart(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)
    session.select_move(2, 3)

    session.restart(BLACK)

    assert session.board == Board.start()
    assert session.turn == BLACK
    assert session.last_move is None
    assert session.winner is None
    assert session.state == AWAITING_HUMAN_MOVE


def test_settings(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)

    session.set_difficulty(EASY)
    assert session.difficulty == EASY

    session.set_difficulty("nonsense")
    assert session.difficulty == HARD

    session.set_search_depth(9)
    assert session.search_depth == 5

    session.set_search_depth(0)
    assert session.search_depth == 2

    session.set_search_depth(4)
    assert session.search_depth == 4
    assert listener.snapshots[-1].search_depth == 4


def test_hint_mode_does_not_change_engine(listener: RecordingListener) -> None:
    session = make_session(listener, BLACK)
    moves = session.get_moves()

    session.toggle_hint_mode()

    assert not session.hints
    assert not listener.snapshots[-1].hints
    assert session.get_moves() == moves

    session.toggle_hint_mode()
    assert session.hints


@pytest.mark.parametrize("difficulty", [EASY, MEDIUM, HARD])
def test_full_game(difficulty: str) -> None:
    session = GameSession(
        difficulty=difficulty, search_depth=2, rng=random.Random(5), human=BLACK
    )

    while not session.is_game_over():
        assert session.state == AWAITING_HUMAN_MOVE
        discs = session.board.count_discs()

        move = session.get_moves()[-1]
        assert session.select_move(move.row, move.col)
        assert session.board.count_discs() > discs

    black, white = session.board.count()
    if black == white:
        assert session.winner is None
    else:
        assert session.winner == (BLACK if black > white else WHITE)


def test_threaded_computer_move(listener: RecordingListener) -> None:
    session = GameSession(
        listener, difficulty=MEDIUM, threaded=True, rng=random.Random(0), human=WHITE
    )

    assert session.state == COMPUTER_THINKING
    assert session.is_thinking()

    # Human input is locked out while the computer is thinking.
    assert not session.select_move(2, 4)
    assert session.board == Board.start()

    session.wait(timeout=10)

    assert session.state == AWAITING_HUMAN_MOVE
    assert session.board.count_discs() == 5
    assert session.turn == WHITE


def test_threaded_poll() -> None:
    session = GameSession(
        difficulty=EASY, threaded=True, rng=random.Random(0), human=BLACK
    )

    assert not session.poll()
    assert session.select_move(2, 3)
    assert session.state == COMPUTER_THINKING

    session.wait(timeout=10)
    assert not session.poll()
    assert session.turn == BLACK
    assert session.board.count_discs() == 6


def test_threaded_restart_discards_stale_decision() -> None:
    session = GameSession(
        difficulty=MEDIUM, threaded=True, rng=random.Random(0), human=WHITE
    )
    assert session.state == COMPUTER_THINKING

    session.restart(WHITE)
    assert session.state == COMPUTER_THINKING

    session.wait(timeout=10)

    # Only the decision made for the new game was applied.
    assert session.board.count_discs() == 5
    assert session.state == AWAITING_HUMAN_MOVE
    assert session.recv_queue.empty() or not session.poll()


def test_threaded_decision_from_previous_game_is_not_applied() -> None:
    session = GameSession(
        difficulty=MEDIUM,
        threaded=True,
        think_delay=0.2,
        rng=random.Random(0),
        human=WHITE,
    )
    assert session.state == COMPUTER_THINKING

    # Queued ahead of the real decision, which is still sleeping.
    stale = ComputerDecision(session.generation - 1, Move(0, 0, [(3, 3)]))
    session.recv_queue.put(stale)

    session.wait(timeout=10)

    assert session.board.get_square(0, 0) == EMPTY
    assert session.board.count_discs() == 5
    assert session.last_move is not None
    assert session.last_move.coordinates() != (0, 0)
    assert session.state == AWAITING_HUMAN_MOVE


def test_threaded_decision_dropped_after_set_position() -> None:
    session = GameSession(
        difficulty=EASY, threaded=True, rng=random.Random(0), human=BLACK
    )
    assert session.select_move(2, 3)
    assert session.state == COMPUTER_THINKING

    session.set_position(Board.start(), BLACK)
    assert session.state == AWAITING_HUMAN_MOVE

    # Let the worker finish, then hand its result back to the session.
    decision = session.recv_queue.get(timeout=10)
    session.recv_queue.put(decision)

    assert not session.poll()
    assert session.board == Board.start()
    assert session.state == AWAITING_HUMAN_MOVE
