# ABOUTME: Step proposal workflow taking one candidate step from selection to acceptance or rejection.
# ABOUTME: Applies local duplicate checks before asking the authority, then folds accepted steps into the chain.

from loguru import logger

from movie_chain.client.authority_client import AuthorityClient
from movie_chain.client.exceptions import TransportError
from movie_chain.game.chain_state import ChainStateMachine
from movie_chain.game.exceptions import (
    DuplicateFilm,
    DuplicatePerformer,
    GameAlreadyWon,
    InvalidStep,
    ValidationUnavailable,
)
from movie_chain.models.entities import Film, Performer
from movie_chain.models.game_state import GameState, is_won


class StepProposalWorkflow:
    """
    Mediates one candidate step.

    Stateless between calls: whether a request is outstanding is tracked by
    the session layer, not here.
    """

    def __init__(self, chain: ChainStateMachine, authority: AuthorityClient):
        self.chain = chain
        self.authority = authority

    async def propose_step(
        self,
        candidate_performer: Performer,
        candidate_film: Film,
        game_state: GameState,
    ) -> GameState | None:
        """
        Validate a candidate step against game_state and append it when accepted.

        Duplicate checks run first and never touch the network. The authority
        sees the full visited sets of game_state.

        Args:
            candidate_performer: Proposed next performer
            candidate_film: Proposed connecting film
            game_state: Snapshot the proposal is made against

        Returns:
            The new GameState when accepted, or None when the game was ended
            or replaced while the request was in flight (the outcome is dropped)

        Raises:
            GameAlreadyWon: game_state has already reached the target
            DuplicatePerformer: candidate_performer is already in the chain
            DuplicateFilm: candidate_film is already in the chain
            InvalidStep: The authority rejected the connection
            ValidationUnavailable: The authority could not be reached
        """
        if is_won(game_state):
            raise GameAlreadyWon("The target was already reached; start a new game")
        check_duplicates(candidate_performer, candidate_film, game_state)

        try:
            validation = await self.authority.validate_step(
                current_performer_id=game_state.current_performer.id,
                next_performer_id=candidate_performer.id,
                film_id=candidate_film.id,
                visited_performer_ids=game_state.visited_performer_ids,
                visited_film_ids=game_state.visited_film_ids,
            )
        except TransportError as e:
            raise ValidationUnavailable(str(e)) from e

        if self.chain.state is not game_state:
            logger.info(
                f"Discarding validation for {candidate_performer.name}: game changed while pending"
            )
            return None

        if not validation.valid:
            logger.info(
                f"Step rejected: {candidate_film.label()} -> {candidate_performer.name} "
                f"({len(validation.connecting_films)} alternatives)"
            )
            raise InvalidStep(candidate_performer, candidate_film, validation.connecting_films)

        return self.chain.append_step(candidate_performer, candidate_film)


def check_duplicates(performer: Performer, film: Film, game_state: GameState) -> None:
    """
    Enforce the no-repeat rule locally.

    Raises:
        DuplicatePerformer: performer.id is already visited
        DuplicateFilm: film.id is already visited
    """
    if performer.id in game_state.visited_performer_ids:
        raise DuplicatePerformer(performer)
    if film.id in game_state.visited_film_ids:
        raise DuplicateFilm(film)
