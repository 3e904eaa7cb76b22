from __future__ import annotations

from reversi.ai.evaluation import evaluate
from reversi.othello.board import Board, opponent
from reversi.othello.moves import do_move, get_moves, has_moves


def search(
    board: Board,
    depth: int,
    side: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    ai_side: int,
) -> float:
    """
    Minimax with alpha-beta pruning.

    `side` is the player to move at this ply. Leaves are always scored from the
    point of view of `ai_side`, so the maximizing plies are the ones where
    `ai_side` moves. The board passed in is never modified.
    """

    if depth == 0:
        return evaluate(board, ai_side)

    moves = get_moves(board, side)

    if not moves:
        if not has_moves(board, opponent(side)):
            return evaluate(board, ai_side)

        # Forced pass, costs a ply but places no disc.
        return search(
            board, depth - 1, opponent(side), not maximizing, alpha, beta, ai_side
        )

    if maximizing:
        best = float("-inf")
        for move in moves:
            child = board.clone()
            do_move(child, move, side)
            score = search(
                child, depth - 1, opponent(side), False, alpha, beta, ai_side
            )
            best = max(best, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break
        return best

    best = float("inf")
    for move in moves:
        child = board.clone()
        do_move(child, move, side)
        score = search(child, depth - 1, opponent(side), True, alpha, beta, ai_side)
        best = min(best, score)
        beta = min(beta, score)
        if alpha >= beta:
            break
    return best


def full_minimax(
    board: Board, depth: int, side: int, maximizing: bool, ai_side: int
) -> float:
    """Same tree as `search()`, without pruning."""

    if depth == 0:
        return evaluate(board, ai_side)

    moves = get_moves(board, side)

    if not moves:
        if not has_moves(board, opponent(side)):
            return evaluate(board, ai_side)
        return full_minimax(board, depth - 1, opponent(side), not maximizing, ai_side)

    scores: list[float] = []
    for move in moves:
        child = board.clone()
        do_move(child, move, side)
        scores.append(
            full_minimax(child, depth - 1, opponent(side), not maximizing, ai_side)
        )

    if maximizing:
        return max(scores)
    return min(scores)
