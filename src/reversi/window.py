import pygame
from pygame.event import Event
from typing import Optional, Type

from reversi.arguments import Arguments
from reversi.mode.base import BaseMode
from reversi.othello.board import BLACK, SIZE, WHITE

BOARD_WIDTH_PX = 600
BOARD_HEIGHT_PX = 600

SQUARE_SIZE = BOARD_WIDTH_PX // SIZE
DISC_RADIUS = SQUARE_SIZE // 2 - 5
MOVE_INDICATOR_RADIUS = SQUARE_SIZE // 8

COLOR_WHITE_DISC = (255, 255, 255)
COLOR_BLACK_DISC = (0, 0, 0)
COLOR_BACKGROUND = (0, 128, 0)
COLOR_GRID_LINE = (0, 96, 0)
COLOR_PLAYED_MOVE = (255, 0, 0)
COLOR_FLIPPED = (128, 128, 128)

FRAME_RATE = 60


class NonMoveEvent(Exception):
    pass


class Window:
    def __init__(self, mode_type: Type[BaseMode], args: Arguments) -> None:
        pygame.init()
        self.args = args
        self.mode = mode_type(args)

        self.screen = pygame.display.set_mode((BOARD_WIDTH_PX, BOARD_HEIGHT_PX))
        self.clock = pygame.time.Clock()
        self.caption = ""

    def run(self) -> None:
        running = True

        while running:
            event: Optional[Event] = None

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                try:
                    row, col = self.get_move_from_event(event)
                except NonMoveEvent:
                    self.mode.on_event(event)
                else:
                    self.mode.on_move(row, col)

            if event is not None:
                self.mode.on_frame(event)
            else:
                self.mode.on_frame(Event(pygame.NOEVENT))

            self.draw()
            self.clock.tick(FRAME_RATE)

        pygame.quit()

    def get_square_center(self, row: int, col: int) -> tuple[int, int]:
        x = col * SQUARE_SIZE + SQUARE_SIZE // 2
        y = row * SQUARE_SIZE + SQUARE_SIZE // 2
        return (x, y)

    def draw_disc(self, row: int, col: int, color: tuple[int, int, int]) -> None:
        center = self.get_square_center(row, col)
        pygame.draw.circle(self.screen, color, center, DISC_RADIUS)

    def draw_move_indicator(
        self, row: int, col: int, color: tuple[int, int, int]
    ) -> None:
        center = self.get_square_center(row, col)
        pygame.draw.circle(self.screen, color, center, MOVE_INDICATOR_RADIUS)

    def draw_marker(self, row: int, col: int, color: tuple[int, int, int]) -> None:
        center = self.get_square_center(row, col)
        radius = (SQUARE_SIZE / 2) - 8
        pygame.draw.circle(self.screen, color, center, radius, 2)

    def draw(self) -> None:
        board = self.mode.get_board()

        ui_details = self.mode.get_ui_details()
        turn: int = ui_details.pop("turn", BLACK)
        status: str = ui_details.pop("status", "")
        hints: set[tuple[int, int]] = ui_details.pop("hints", set())
        played_move: Optional[tuple[int, int]] = ui_details.pop("played_move", None)
        flipped: set[tuple[int, int]] = ui_details.pop("flipped", set())

        if ui_details:
            print(
                "WARNING: found unused ui details key(s): "
                + ", ".join(sorted(ui_details))
            )

        if turn == WHITE:
            turn_color = COLOR_WHITE_DISC
        else:
            turn_color = COLOR_BLACK_DISC

        self.screen.fill(COLOR_BACKGROUND)

        for i in range(1, SIZE):
            offset = i * SQUARE_SIZE
            pygame.draw.line(
                self.screen, COLOR_GRID_LINE, (offset, 0), (offset, BOARD_HEIGHT_PX)
            )
            pygame.draw.line(
                self.screen, COLOR_GRID_LINE, (0, offset), (BOARD_WIDTH_PX, offset)
            )

        for row in range(SIZE):
            for col in range(SIZE):
                square = board.get_square(row, col)

                if square == WHITE:
                    self.draw_disc(row, col, COLOR_WHITE_DISC)
                elif square == BLACK:
                    self.draw_disc(row, col, COLOR_BLACK_DISC)
                elif (row, col) in hints:
                    self.draw_move_indicator(row, col, turn_color)

                if (row, col) == played_move:
                    self.draw_marker(row, col, COLOR_PLAYED_MOVE)
                elif (row, col) in flipped:
                    self.draw_marker(row, col, COLOR_FLIPPED)

        caption = f"Reversi: {status}"
        if caption != self.caption:
            pygame.display.set_caption(caption)
            self.caption = caption

        pygame.display.flip()

    def get_move_from_event(self, event: Event) -> tuple[int, int]:
        if event.type != pygame.MOUSEBUTTONDOWN:
            raise NonMoveEvent

        if event.button != pygame.BUTTON_LEFT:
            raise NonMoveEvent

        x, y = event.pos
        col: int = x // SQUARE_SIZE
        row: int = y // SQUARE_SIZE

        if not (row in range(SIZE) and col in range(SIZE)):
            raise NonMoveEvent

        return row, col
