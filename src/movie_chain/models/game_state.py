# ABOUTME: Immutable game state snapshot and derived game phase for the chain game.
# ABOUTME: Win detection is a pure function over the snapshot and is never stored.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from movie_chain.models.entities import ChainStep, Film, Performer


class GamePhase(str, Enum):
    """Screens the front end switches between"""
    NO_GAME = "no_game"
    IN_PROGRESS = "in_progress"
    WON = "won"


class GameState(BaseModel):
    """
    Full progress of one game.

    A GameState is never mutated. Every transition builds a new snapshot, so
    anything holding an older reference still sees a consistent chain.

    Invariants (checked on construction):
    - start_performer.id and current_performer.id are in visited_performer_ids
    - visited_film_ids is exactly the set of films used in chain
    - current_performer is start_performer for an empty chain, otherwise the
      last step's to_performer
    """

    start_performer: Performer
    target_performer: Performer
    current_performer: Performer
    chain: tuple[ChainStep, ...] = Field(default_factory=tuple)
    visited_performer_ids: frozenset[int]
    visited_film_ids: frozenset[int] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_chain_consistency(self) -> "GameState":
        """Reject snapshots whose visited sets disagree with the chain"""
        film_ids = [step.connecting_film.id for step in self.chain]
        if len(set(film_ids)) != len(film_ids):
            raise ValueError("A film can only be used once per chain")
        if set(film_ids) != self.visited_film_ids:
            raise ValueError("visited_film_ids must match the films used in chain")

        expected_current = self.chain[-1].to_performer if self.chain else self.start_performer
        if expected_current.id != self.current_performer.id:
            raise ValueError(
                f"current_performer {self.current_performer.id} does not end the chain "
                f"(expected {expected_current.id})"
            )

        if self.start_performer.id not in self.visited_performer_ids:
            raise ValueError("visited_performer_ids must contain the start performer")
        if self.current_performer.id not in self.visited_performer_ids:
            raise ValueError("visited_performer_ids must contain the current performer")
        return self

    @classmethod
    def initial(cls, start_performer: Performer, target_performer: Performer) -> "GameState":
        """Fresh state with an empty chain positioned on the start performer"""
        return cls(
            start_performer=start_performer,
            target_performer=target_performer,
            current_performer=start_performer,
            chain=(),
            visited_performer_ids=frozenset({start_performer.id}),
            visited_film_ids=frozenset(),
        )

    def with_step(self, next_performer: Performer, connecting_film: Film) -> "GameState":
        """New snapshot with one more step appended from the current performer"""
        step = ChainStep(
            from_performer=self.current_performer,
            connecting_film=connecting_film,
            to_performer=next_performer,
        )
        return GameState(
            start_performer=self.start_performer,
            target_performer=self.target_performer,
            current_performer=next_performer,
            chain=(*self.chain, step),
            visited_performer_ids=self.visited_performer_ids | {next_performer.id},
            visited_film_ids=self.visited_film_ids | {connecting_film.id},
        )

    def restarted(self) -> "GameState":
        """Same challenge, chain cleared back to the start performer"""
        return GameState.initial(self.start_performer, self.target_performer)

    @property
    def step_count(self) -> int:
        return len(self.chain)


def is_won(state: GameState | None) -> bool:
    """True when the chain has reached the target performer"""
    if state is None:
        return False
    return state.current_performer.id == state.target_performer.id


def game_phase(state: GameState | None) -> GamePhase:
    """Derive the screen-level phase from a (possibly absent) game state"""
    if state is None:
        return GamePhase.NO_GAME
    if is_won(state):
        return GamePhase.WON
    return GamePhase.IN_PROGRESS
