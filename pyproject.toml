[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinygames"
version = "1.0.0"
description = "Small terminal games: 2048, maze, snake, gomoku, minesweeper and tetris"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "games",
    "terminal",
    "console",
    "2048",
    "snake",
    "tetris",
    "minesweeper",
    "gomoku",
    "maze",
]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Games/Entertainment :: Puzzle Games",
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinygames-2048 = "tinygames.game2048:main"
tinygames-maze = "tinygames.maze:main"
tinygames-snake = "tinygames.snake:main"
tinygames-gomoku = "tinygames.gomoku:main"
tinygames-minesweeper = "tinygames.minesweeper:main"
tinygames-tetris = "tinygames.tetris:main"
tinygames-tetris-rows = "tinygames.tetris_rows:main"

[tool.hatch.build.targets.wheel]
packages = ["tinygames"]

[tool.pytest.ini_options]
addopts = "-ra"
