# ABOUTME: Game layer exports for chain state, step proposals, sessions, and shareable links.
# ABOUTME: Provides the state machine, workflow, debounced chooser, session, and bootstrap.

from movie_chain.game.bootstrap import ShareableLinkBootstrap
from movie_chain.game.chain_state import ChainStateMachine
from movie_chain.game.chooser import DebouncedChooser
from movie_chain.game.exceptions import (
    BootstrapFailure,
    DuplicateFilm,
    DuplicatePerformer,
    GameAlreadyWon,
    InvalidStep,
    NoActiveGame,
    ValidationUnavailable,
)
from movie_chain.game.session import GameSession, StepFeedback
from movie_chain.game.share import (
    EntryParameters,
    build_share_link,
    format_chain_summary,
    strip_entry_parameters,
)
from movie_chain.game.step_workflow import StepProposalWorkflow, check_duplicates

__all__ = [
    "ChainStateMachine",
    "StepProposalWorkflow",
    "check_duplicates",
    "DebouncedChooser",
    "GameSession",
    "StepFeedback",
    "ShareableLinkBootstrap",
    "EntryParameters",
    "build_share_link",
    "format_chain_summary",
    "strip_entry_parameters",
    # Exceptions
    "NoActiveGame",
    "DuplicatePerformer",
    "GameAlreadyWon",
    "DuplicateFilm",
    "InvalidStep",
    "ValidationUnavailable",
    "BootstrapFailure",
]
