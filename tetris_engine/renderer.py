"""
Renderers for game snapshots.

A renderer receives a Snapshot after every processed command and draws it
somewhere. Three are provided:
  - TextRenderer: plain letters framed like the classic terminal game.
  - EmojiRenderer: one colored square emoji per cell.
  - PygameRenderer: a window with the board and a score sidebar.

Renderers never touch the game itself, only the snapshot they are given.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_engine.game.pieces import PIECE_DEFS, PieceType
from tetris_engine.game.tetris import GameState, Snapshot


class Renderer(Protocol):
    def render(self, snapshot: Snapshot) -> None:
        ...

    def close(self) -> None:
        ...


# ── Piece ID -> character mappings ────────────────────────────────────────
PIECE_LETTERS: dict[int, str] = {
    PieceType.I: "L",  # light blue
    PieceType.O: "Y",
    PieceType.S: "G",
    PieceType.Z: "R",
    PieceType.J: "B",
    PieceType.L: "O",
    PieceType.T: "P",
}

# There is no light blue square emoji; the I-piece is drawn brown.
PIECE_EMOJI: dict[int, str] = {
    PieceType.I: "\U0001F7EB",
    PieceType.O: "\U0001F7E8",
    PieceType.S: "\U0001F7E9",
    PieceType.Z: "\U0001F7E5",
    PieceType.J: "\U0001F7E6",
    PieceType.L: "\U0001F7E7",
    PieceType.T: "\U0001F7EA",
}
EMPTY_EMOJI = "⬛"


class TextRenderer:
    """Prints the board with one letter per block, framed by ``<!`` and ``!>``."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def format(self, snapshot: Snapshot) -> str:
        lines = []
        for row in range(snapshot.height):
            cells = "".join(
                PIECE_LETTERS.get(snapshot.cell_id(col, row), " ")
                for col in range(snapshot.width)
            )
            lines.append(f"<!{cells}!>")
        lines.append("  " + "=" * snapshot.width + "  ")
        return "\n".join(lines)

    def render(self, snapshot: Snapshot) -> None:
        print(self.format(snapshot), file=self._stream, flush=True)

    def close(self) -> None:
        pass


class EmojiRenderer:
    """Prints the board as colored square emoji."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout

    def format(self, snapshot: Snapshot) -> str:
        lines = [
            "".join(
                PIECE_EMOJI.get(snapshot.cell_id(col, row), EMPTY_EMOJI)
                for col in range(snapshot.width)
            )
            for row in range(snapshot.height)
        ]
        return "\n".join(lines) + "\n"

    def render(self, snapshot: Snapshot) -> None:
        print(self.format(snapshot), file=self._stream, flush=True)

    def close(self) -> None:
        pass


# ── Pygame color constants ────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)

PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    int(piece_type): piece["color"] for piece_type, piece in PIECE_DEFS.items()
}


class PygameRenderer:
    """Pygame window showing the board and a score sidebar.

    The window is created lazily on the first render() so that constructing
    the renderer in a headless environment does not open anything.

    Attributes:
        cell_size: Pixel size of each grid cell.
        screen: Pygame display surface (created on first render).
    """

    # Sidebar width in cell units
    SIDEBAR_WIDTH_CELLS: int = 6

    def __init__(self, cell_size: int = 30) -> None:
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.cell_size = cell_size
        self.screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, snapshot: Snapshot) -> None:
        """Draw a snapshot to the window, opening it on the first call."""
        if not self._initialized:
            self._init_pygame(snapshot.width, snapshot.height)

        # Keep the window responsive; input comes from the command source.
        pygame.event.pump()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(snapshot)
        self._draw_sidebar(snapshot)
        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, snapshot.width * self.cell_size, snapshot.height * self.cell_size),
            2,
        )
        pygame.display.flip()

    def _init_pygame(self, width: int, height: int) -> None:
        pygame.init()
        window_width = (width + self.SIDEBAR_WIDTH_CELLS) * self.cell_size
        window_height = height * self.cell_size
        self.screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Tetris")
        self._font = pygame.font.SysFont("monospace", 20)
        self._initialized = True

    def _draw_board(self, snapshot: Snapshot) -> None:
        """Draw locked blocks and the active piece, colored by piece id."""
        size = self.cell_size
        for row in range(snapshot.height):
            for col in range(snapshot.width):
                cell_id = snapshot.cell_id(col, row)
                rect = (col * size, row * size, size, size)
                if cell_id != 0:
                    color = PIECE_COLORS.get(cell_id, (128, 128, 128))
                    pygame.draw.rect(self.screen, color, rect)
                    # Slightly darker border for a 3D effect
                    darker = tuple(max(0, c - 40) for c in color)
                    pygame.draw.rect(self.screen, darker, rect, 1)
                else:
                    pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, rect)
                    pygame.draw.rect(self.screen, GRID_LINE_COLOR, rect, 1)

    def _draw_sidebar(self, snapshot: Snapshot) -> None:
        sidebar_x = snapshot.width * self.cell_size
        window_height = snapshot.height * self.cell_size
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.SIDEBAR_WIDTH_CELLS * self.cell_size, window_height),
        )
        text_x = sidebar_x + 15
        self._draw_text("SCORE", text_x, 20)
        self._draw_text(str(snapshot.score), text_x, 45)
        if snapshot.state is GameState.OVER:
            self._draw_text("GAME OVER", text_x, 95)

    def _draw_text(self, text: str, x: int, y: int) -> None:
        surface = self._font.render(text, True, TEXT_COLOR)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False


RENDERERS = {
    "text": TextRenderer,
    "emoji": EmojiRenderer,
    "pygame": PygameRenderer,
}


def create_renderer(name: str, cell_size: int = 30) -> Renderer:
    """Build a renderer by its config name.

    Raises:
        ValueError: If the name is unknown.
    """
    if name not in RENDERERS:
        raise ValueError(f"Unknown renderer {name!r}, expected one of {sorted(RENDERERS)}")
    if name == "pygame":
        return PygameRenderer(cell_size=cell_size)
    return RENDERERS[name]()
