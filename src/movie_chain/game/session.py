# ABOUTME: Game session tying the chain state machine, step workflow, and step choosers together.
# ABOUTME: Owns pending-request locks, player-facing feedback, and discarding of stale async outcomes.

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from loguru import logger

from movie_chain.client.authority_client import AuthorityClient
from movie_chain.client.exceptions import NotFound, TransportError
from movie_chain.client.search_client import SearchClient
from movie_chain.game.chain_state import ChainStateMachine
from movie_chain.game.chooser import DebouncedChooser
from movie_chain.game.exceptions import (
    DuplicateFilm,
    DuplicatePerformer,
    InvalidStep,
    NoActiveGame,
    ValidationUnavailable,
)
from movie_chain.game.step_workflow import StepProposalWorkflow
from movie_chain.models.entities import Film, Performer
from movie_chain.models.game_state import GamePhase, GameState

FeedbackKind = Literal[
    "duplicate_performer",
    "duplicate_film",
    "invalid_step",
    "validation_unavailable",
    "start_failed",
]


@dataclass(frozen=True)
class StepFeedback:
    """Player-facing outcome of the last failed action"""

    kind: FeedbackKind
    message: str
    suggested_films: tuple[Film, ...] = field(default_factory=tuple)


class GameSession:
    """
    One player's game session on a single event loop.

    Submitting a step while a validation is outstanding, or starting a game
    while a start is outstanding, is ignored rather than queued.
    """

    def __init__(
        self,
        authority: AuthorityClient,
        search: SearchClient,
        debounce_seconds: float = 0.3,
        on_change: Callable[[], None] | None = None,
    ):
        """
        Initialize game session.

        Args:
            authority: Client for start-game and validate-step
            search: Client backing the performer and film choosers
            debounce_seconds: Quiet period for both choosers
            on_change: Called whenever session-visible state changes
        """
        self.authority = authority
        self.search = search
        self.chain = ChainStateMachine()
        self.workflow = StepProposalWorkflow(self.chain, authority)
        self.on_change = on_change

        self.performer_chooser: DebouncedChooser[Performer] = DebouncedChooser(
            search.search_performers,
            debounce_seconds=debounce_seconds,
            on_change=self._notify,
            name="performer",
        )
        self.film_chooser: DebouncedChooser[Film] = DebouncedChooser(
            search.search_films,
            debounce_seconds=debounce_seconds,
            on_change=self._notify,
            name="film",
        )

        self.feedback: StepFeedback | None = None
        self.is_starting = False
        self._pending_state: GameState | None = None

    @property
    def is_validating(self) -> bool:
        """True while a validation for the live game state is outstanding"""
        return self._pending_state is not None and self._pending_state is self.chain.state

    @property
    def state(self) -> GameState | None:
        return self.chain.state

    @property
    def phase(self) -> GamePhase:
        return self.chain.phase

    async def start_game(self, start_performer_id: int, target_performer_id: int) -> GameState | None:
        """
        Confirm both performers with the authority and start a game.

        Returns:
            The new GameState, or None if a start was already pending or the
            game was abandoned while this start was in flight

        Raises:
            NotFound: Either id did not resolve
            TransportError: The authority could not be reached
        """
        if self.is_starting:
            logger.debug("Ignoring start request: another start is pending")
            return None

        generation = self.chain.generation
        self.is_starting = True
        self.feedback = None
        self._notify()
        try:
            result = await self.authority.start_game(start_performer_id, target_performer_id)
        except (NotFound, TransportError) as e:
            if self.chain.generation == generation:
                self.feedback = StepFeedback(kind="start_failed", message=str(e))
            raise
        finally:
            self.is_starting = False
            self._notify()

        if self.chain.generation != generation:
            logger.info(
                f"Discarding start {start_performer_id} -> {target_performer_id}: "
                "game was abandoned while pending"
            )
            return None

        self._clear_step_inputs()
        state = self.chain.start_game(result.start_performer, result.target_performer)
        self._notify()
        return state

    async def submit_step(self, performer: Performer, film: Film) -> GameState | None:
        """
        Propose performer/film as the next step.

        Failures are recorded on self.feedback rather than raised, since they
        are all recoverable player-facing outcomes.

        Returns:
            The new GameState when accepted, otherwise None (rejected,
            ignored because the game is already won or a validation is
            pending, or discarded because the game changed while the
            request was in flight)

        Raises:
            NoActiveGame: If no game is in progress
        """
        state = self.chain.state
        if state is None:
            raise NoActiveGame("Cannot submit a step: no game in progress")
        if self.chain.is_won():
            logger.debug("Ignoring step submission: the target was already reached")
            return None
        if self.is_validating:
            logger.debug("Ignoring step submission: a validation is pending")
            return None

        self._pending_state = state
        self._notify()
        try:
            new_state = await self.workflow.propose_step(performer, film, state)
        except DuplicatePerformer as e:
            self.feedback = StepFeedback(kind="duplicate_performer", message=str(e))
            return None
        except DuplicateFilm as e:
            self.feedback = StepFeedback(kind="duplicate_film", message=str(e))
            return None
        except InvalidStep as e:
            if self.chain.state is state:
                self.feedback = StepFeedback(
                    kind="invalid_step",
                    message="That step is not valid.",
                    suggested_films=tuple(e.connecting_films),
                )
            return None
        except ValidationUnavailable as e:
            if self.chain.state is state:
                self.feedback = StepFeedback(kind="validation_unavailable", message=str(e))
            return None
        finally:
            if self._pending_state is state:
                self._pending_state = None
            self._notify()

        if new_state is not None:
            self.feedback = None
            self._clear_step_inputs()
            self._notify()
        return new_state

    async def submit_selected_step(self) -> GameState | None:
        """Submit whatever the two choosers currently have selected"""
        performer = self.performer_chooser.selection
        film = self.film_chooser.selection
        if performer is None or film is None:
            return None
        return await self.submit_step(performer, film)

    def reset_chain(self) -> GameState:
        """Retry the same challenge from the start performer"""
        state = self.chain.reset_chain_to_start()
        self.feedback = None
        self._clear_step_inputs()
        self._notify()
        return state

    def reset_game(self) -> None:
        """Abandon the game; any in-flight validation outcome will be discarded"""
        self.chain.end_game()
        self.feedback = None
        self._clear_step_inputs()
        self._notify()

    def select_performer(self, performer: Performer) -> None:
        self.performer_chooser.select(performer)
        self.feedback = None
        self._notify()

    def select_film(self, film: Film) -> None:
        self.film_chooser.select(film)
        self.feedback = None
        self._notify()

    @property
    def can_submit(self) -> bool:
        return (
            self.chain.phase is GamePhase.IN_PROGRESS
            and not self.is_validating
            and self.performer_chooser.selection is not None
            and self.film_chooser.selection is not None
        )

    def _clear_step_inputs(self) -> None:
        self.performer_chooser.reset()
        self.film_chooser.reset()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
