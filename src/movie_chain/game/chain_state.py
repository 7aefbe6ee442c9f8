# ABOUTME: Chain state machine owning game progress: start, append step, reset chain, end game.
# ABOUTME: Holds one immutable GameState snapshot at a time and replaces it wholesale on every transition.

from loguru import logger

from movie_chain.game.exceptions import GameAlreadyWon, NoActiveGame
from movie_chain.models.entities import Film, Performer
from movie_chain.models.game_state import GamePhase, GameState, game_phase, is_won
from movie_chain.utils.logging import log_game_event


class ChainStateMachine:
    """
    Owner of game progress.

    States: NO_GAME -> IN_PROGRESS -> WON. WON is IN_PROGRESS with the win
    predicate true; there is no separate terminal representation.

    The generation counter changes whenever a game is started or ended, so
    async callers can tell whether the game they captured is still the one
    being played.
    """

    def __init__(self) -> None:
        self._state: GameState | None = None
        self._generation = 0

    @property
    def state(self) -> GameState | None:
        """Current snapshot, or None when no game is active"""
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def phase(self) -> GamePhase:
        return game_phase(self._state)

    def start_game(self, start_performer: Performer, target_performer: Performer) -> GameState:
        """
        Start (or restart) a game between two confirmed performers.

        Args:
            start_performer: Performer the chain starts from
            target_performer: Performer the chain must reach

        Returns:
            Fresh GameState with an empty chain
        """
        self._generation += 1
        self._state = GameState.initial(start_performer, target_performer)
        self._log_transition(
            f"Game started: {start_performer.name} -> {target_performer.name}",
            start_id=start_performer.id,
            target_id=target_performer.id,
        )
        return self._state

    def append_step(self, next_performer: Performer, connecting_film: Film) -> GameState:
        """
        Append an accepted step from the current performer to next_performer.

        Args:
            next_performer: Performer the step arrives at
            connecting_film: Film crediting both the current and the next performer

        Returns:
            New GameState with the step appended

        Raises:
            NoActiveGame: If no game is in progress
            GameAlreadyWon: If the target was already reached
        """
        state = self._require_state("append a step")
        if is_won(state):
            raise GameAlreadyWon("Cannot append a step: the target was already reached")
        self._state = state.with_step(next_performer, connecting_film)
        self._log_transition(
            f"Step accepted: {connecting_film.label()} -> {next_performer.name}",
            film_id=connecting_film.id,
            performer_id=next_performer.id,
        )
        if is_won(self._state):
            logger.info(f"Target reached in {self._state.step_count} steps")
        return self._state

    def reset_chain_to_start(self) -> GameState:
        """
        Clear the chain but keep the same start and target performers.

        Idempotent: resetting an already-empty chain yields an equal state.

        Raises:
            NoActiveGame: If no game is in progress
        """
        state = self._require_state("reset the chain")
        self._state = state.restarted()
        self._log_transition("Chain reset to start performer")
        return self._state

    def end_game(self) -> None:
        """Discard the game entirely and return to NO_GAME; starts still in flight become stale"""
        self._generation += 1
        self._state = None
        self._log_transition("Game ended")

    def is_won(self) -> bool:
        return is_won(self._state)

    def _require_state(self, action: str) -> GameState:
        if self._state is None:
            raise NoActiveGame(f"Cannot {action}: no game in progress")
        return self._state

    def _log_transition(self, message: str, **extra) -> None:
        chain_length = self._state.step_count if self._state is not None else 0
        log_game_event(
            message,
            phase=self.phase.value,
            chain_length=chain_length,
            generation=self._generation,
            **extra,
        )
