"""Small terminal games: 2048, maze, snake, gomoku, minesweeper and two tetris variants."""

__version__ = "1.0.0"