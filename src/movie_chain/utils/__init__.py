# ABOUTME: Utility module exports for structured logging.
# ABOUTME: Provides logging.py (loguru config and event helpers).

from movie_chain.utils.logging import (
    log_game_event,
    log_remote_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "log_game_event",
    "log_remote_call",
]
