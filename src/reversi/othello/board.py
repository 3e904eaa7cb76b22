from __future__ import annotations

from typing import Iterable

BLACK = -1
WHITE = 1
EMPTY = 0

SIZE = 8

SQUARE_CHARS = {".": EMPTY, "x": BLACK, "o": WHITE}


def opponent(color: int) -> int:
    assert color in [BLACK, WHITE]
    return -color


class Board:
    """
    Board stores the contents of all 64 squares, but not the color of the player
    to move. Whose turn it is lives in the GameSession.
    """

    def __init__(self, rows: list[list[int]]) -> None:
        self.rows = rows

    @classmethod
    def start(cls) -> Board:
        board = cls.empty()
        mid = SIZE // 2
        board.rows[mid - 1][mid - 1] = WHITE
        board.rows[mid][mid] = WHITE
        board.rows[mid - 1][mid] = BLACK
        board.rows[mid][mid - 1] = BLACK
        return board

    @classmethod
    def empty(cls) -> Board:
        return Board([[EMPTY] * SIZE for _ in range(SIZE)])

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Board:
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError(f"Board must be {SIZE}x{SIZE}")

        for row in rows:
            for square in row:
                if square not in [EMPTY, BLACK, WHITE]:
                    raise ValueError(f'Unknown square value "{square}"')

        return Board([list(row) for row in rows])

    @classmethod
    def from_string(cls, string: str) -> Board:
        lines = [line.strip() for line in string.strip().split("\n")]

        rows: list[list[int]] = []
        for line in lines:
            try:
                rows.append([SQUARE_CHARS[char] for char in line.lower()])
            except KeyError as e:
                raise ValueError(f"Unknown square character {e}") from e

        return cls.from_rows(rows)

    def __repr__(self) -> str:
        return f"Board({self.rows})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            raise TypeError(f"Cannot compare Board with {type(other)}")

        return self.rows == other.rows

    def clone(self) -> Board:
        return Board([row[:] for row in self.rows])

    def get_square(self, row: int, col: int) -> int:
        if not is_on_board(row, col):
            raise ValueError(f"Square ({row}, {col}) is not on the board")
        return self.rows[row][col]

    def set_square(self, row: int, col: int, value: int) -> None:
        if not is_on_board(row, col):
            raise ValueError(f"Square ({row}, {col}) is not on the board")
        assert value in [EMPTY, BLACK, WHITE]
        self.rows[row][col] = value

    def count(self) -> tuple[int, int]:
        black = 0
        white = 0
        for row in self.rows:
            for square in row:
                if square == BLACK:
                    black += 1
                elif square == WHITE:
                    white += 1
        return black, white

    def count_color(self, color: int) -> int:
        assert color in [WHITE, BLACK]

        black, white = self.count()
        if color == WHITE:
            return white
        return black

    def count_discs(self) -> int:
        return sum(self.count())

    def count_empties(self) -> int:
        return SIZE * SIZE - self.count_discs()

    def is_full(self) -> bool:
        return self.count_empties() == 0


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def index_to_field(row: int, col: int) -> str:
    if not is_on_board(row, col):
        raise ValueError
    return "abcdefgh"[col] + "12345678"[row]


def indexes_to_fields(coordinates: Iterable[tuple[int, int]]) -> str:
    return " ".join(index_to_field(row, col) for row, col in coordinates)

