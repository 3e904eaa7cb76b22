from __future__ import annotations

from typing import Optional

from reversi.othello.board import (
    BLACK,
    EMPTY,
    SIZE,
    WHITE,
    Board,
    index_to_field,
    indexes_to_fields,
    is_on_board,
    opponent,
)

DIRECTIONS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]

CORNERS = {(0, 0), (0, SIZE - 1), (SIZE - 1, 0), (SIZE - 1, SIZE - 1)}


class InvalidMove(Exception):
    pass


class Move:
    def __init__(self, row: int, col: int, flips: list[tuple[int, int]]) -> None:
        self.row = row
        self.col = col

        # Opponent discs that change color when this move is played.
        self.flips = flips

    def __repr__(self) -> str:
        field = index_to_field(self.row, self.col)
        return f"Move({field}, flips={indexes_to_fields(self.flips)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Move):
            raise TypeError(f"Cannot compare Move with {type(other)}")

        return (self.row, self.col, self.flips) == (other.row, other.col, other.flips)

    def __hash__(self) -> int:
        return hash((self.row, self.col, tuple(self.flips)))

    def coordinates(self) -> tuple[int, int]:
        return (self.row, self.col)

    def is_corner(self) -> bool:
        return self.coordinates() in CORNERS

    def is_edge(self) -> bool:
        return self.row in [0, SIZE - 1] or self.col in [0, SIZE - 1]


def get_flips(board: Board, row: int, col: int, side: int) -> list[tuple[int, int]]:
    assert side in [BLACK, WHITE]

    if board.get_square(row, col) != EMPTY:
        return []

    other = opponent(side)
    flips: list[tuple[int, int]] = []

    for dr, dc in DIRECTIONS:
        r = row + dr
        c = col + dc
        line: list[tuple[int, int]] = []

        while is_on_board(r, c) and board.rows[r][c] == other:
            line.append((r, c))
            r += dr
            c += dc

        # Only a run closed off by one of our own discs is captured.
        if line and is_on_board(r, c) and board.rows[r][c] == side:
            flips.extend(line)

    return flips


def get_moves(board: Board, side: int) -> list[Move]:
    moves: list[Move] = []

    for row in range(SIZE):
        for col in range(SIZE):
            if board.rows[row][col] != EMPTY:
                continue

            flips = get_flips(board, row, col, side)
            if flips:
                moves.append(Move(row, col, flips))

    return moves


def has_moves(board: Board, side: int) -> bool:
    for row in range(SIZE):
        for col in range(SIZE):
            if board.rows[row][col] == EMPTY and get_flips(board, row, col, side):
                return True
    return False


def find_move(moves: list[Move], row: int, col: int) -> Optional[Move]:
    for move in moves:
        if move.row == row and move.col == col:
            return move
    return None


def do_move(board: Board, move: Move, side: int) -> None:
    assert side in [BLACK, WHITE]

    if board.get_square(move.row, move.col) != EMPTY:
        raise InvalidMove(f"Square {index_to_field(move.row, move.col)} is occupied")

    if not move.flips:
        raise InvalidMove(f"Move {index_to_field(move.row, move.col)} flips nothing")

    board.rows[move.row][move.col] = side
    for row, col in move.flips:
        board.rows[row][col] = side


def is_game_end(board: Board) -> bool:
    return not (has_moves(board, BLACK) or has_moves(board, WHITE))


def get_winner(board: Board) -> Optional[int]:
    black, white = board.count()

    if black > white:
        return BLACK
    if white > black:
        return WHITE
    return None
