from __future__ import annotations

import random
from typing import Optional

from reversi.ai import clamp_depth
from reversi.ai.search import search
from reversi.log import log
from reversi.othello.board import Board, opponent
from reversi.othello.moves import Move, do_move, get_moves

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"

DIFFICULTIES = [EASY, MEDIUM, HARD]

# Unknown difficulty values play as strong as possible.
DEFAULT_DIFFICULTY = HARD


def parse_difficulty(value: str) -> str:
    difficulty = value.strip().lower()

    if difficulty not in DIFFICULTIES:
        log(f'Unknown difficulty "{value}", using "{DEFAULT_DIFFICULTY}"')
        return DEFAULT_DIFFICULTY

    return difficulty


def greedy_score(board: Board, move: Move, side: int) -> int:
    child = board.clone()
    do_move(child, move, side)
    opponent_moves = len(get_moves(child, opponent(side)))

    score = len(move.flips) * 2 - opponent_moves * 3

    if move.is_edge():
        score += 6

    if move.is_corner():
        score += 80

    return score


def minimax_score(board: Board, move: Move, side: int, depth: int) -> float:
    child = board.clone()
    do_move(child, move, side)

    # Depth counts from the opponent's reply, the candidate move itself is free.
    return search(
        child,
        clamp_depth(depth),
        opponent(side),
        False,
        float("-inf"),
        float("inf"),
        side,
    )


def choose_move(
    board: Board,
    moves: list[Move],
    side: int,
    difficulty: str,
    depth: int,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """
    Pick a move for the computer player `side` among `moves`.

    Returns None only if `moves` is empty. Neither `board` nor `moves` is modified.
    """

    if not moves:
        return None

    if difficulty == EASY:
        if rng is None:
            rng = random.Random()
        return rng.choice(moves)

    best_move = moves[0]
    best_score = float("-inf")

    for move in moves:
        if difficulty == MEDIUM:
            score: float = greedy_score(board, move, side)
        else:
            score = minimax_score(board, move, side, depth)

        # Strictly better only, so the first of equal moves wins.
        if score > best_score:
            best_score = score
            best_move = move

    return best_move
