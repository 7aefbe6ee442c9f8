# ABOUTME: Terminal interface exports for the movie chain game.
# ABOUTME: Provides the command parser, output formatter, and Textual app.

from movie_chain.interface.commands import (
    CommandParser,
    CommandType,
    InvalidCommandError,
    ParsedCommand,
)
from movie_chain.interface.formatter import GameFormatter
from movie_chain.interface.game_textual import MovieChainApp

__all__ = [
    "CommandParser",
    "CommandType",
    "InvalidCommandError",
    "ParsedCommand",
    "GameFormatter",
    "MovieChainApp",
]
