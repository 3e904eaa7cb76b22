from reversi.othello.board import SIZE, Board, opponent
from reversi.othello.moves import get_moves

# Corners are stable, squares next to them give corners away.
POSITIONAL_WEIGHTS = [
    [120, -20, 20, 5, 5, 20, -20, 120],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [120, -20, 20, 5, 5, 20, -20, 120],
]

MOBILITY_WEIGHT = 4
DISC_WEIGHT = 2


def positional_score(board: Board, side: int) -> int:
    other = opponent(side)
    score = 0

    for row in range(SIZE):
        for col in range(SIZE):
            square = board.rows[row][col]
            if square == side:
                score += POSITIONAL_WEIGHTS[row][col]
            elif square == other:
                score -= POSITIONAL_WEIGHTS[row][col]

    return score


def mobility_score(board: Board, side: int) -> int:
    return len(get_moves(board, side)) - len(get_moves(board, opponent(side)))


def disc_difference(board: Board, side: int) -> int:
    return board.count_color(side) - board.count_color(opponent(side))


def evaluate(board: Board, side: int) -> int:
    """Static score of `board`, higher is better for `side`."""
    return (
        positional_score(board, side)
        + MOBILITY_WEIGHT * mobility_score(board, side)
        + DISC_WEIGHT * disc_difference(board, side)
    )
