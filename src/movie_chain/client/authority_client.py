# ABOUTME: Client for the game authority that owns the performer/film credit graph.
# ABOUTME: Starts games and validates proposed chain steps over the JSON wire contract.

from collections.abc import Iterable

from loguru import logger
from pydantic import ValidationError

from movie_chain.client.exceptions import NotFound, TransportError
from movie_chain.client.http import JsonHttpClient
from movie_chain.models.entities import NewGameResult, StepValidation

START_GAME_PATH = "/game"
VALIDATE_STEP_PATH = "/game/validate-step"


class AuthorityClient:
    """
    Stateless request/response client for the remote game authority.

    An invalid step is a normal answer (valid=False), never an exception.
    Only transport problems and unresolvable start ids raise.
    """

    def __init__(self, http: JsonHttpClient):
        """
        Initialize authority client.

        Args:
            http: JSON HTTP helper pointed at the authority's base URL
        """
        self.http = http

    async def start_game(self, start_performer_id: int, target_performer_id: int) -> NewGameResult:
        """
        Confirm both performers exist and fetch their full details.

        Args:
            start_performer_id: Performer the chain starts from
            target_performer_id: Performer the chain must reach

        Returns:
            NewGameResult with both performers

        Raises:
            NotFound: When either id does not resolve (HTTP 404)
            TransportError: On any other transport failure or malformed body
        """
        payload = {
            "startActorId": start_performer_id,
            "targetActorId": target_performer_id,
        }
        try:
            data = await self.http.post_json(START_GAME_PATH, payload, operation="start_game")
        except TransportError as e:
            if e.status_code == 404:
                raise NotFound(
                    f"Performer {start_performer_id} or {target_performer_id} was not found",
                    performer_ids=(start_performer_id, target_performer_id),
                ) from e
            raise

        try:
            result = NewGameResult.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"start_game returned an unexpected body: {e}") from e

        logger.info(
            f"Game confirmed: {result.start_performer.name} -> {result.target_performer.name}"
        )
        return result

    async def validate_step(
        self,
        current_performer_id: int,
        next_performer_id: int,
        film_id: int,
        visited_performer_ids: Iterable[int],
        visited_film_ids: Iterable[int],
    ) -> StepValidation:
        """
        Ask the authority whether film_id connects the current and next performer.

        Visited ids are sent sorted so identical game states produce identical
        request bodies.

        Returns:
            StepValidation with valid flag and the films that do connect the pair

        Raises:
            TransportError: On transport failure or malformed body
        """
        payload = {
            "currentActorId": current_performer_id,
            "nextActorId": next_performer_id,
            "movieId": film_id,
            "visitedActorIds": sorted(visited_performer_ids),
            "visitedMovieIds": sorted(visited_film_ids),
        }
        data = await self.http.post_json(VALIDATE_STEP_PATH, payload, operation="validate_step")

        try:
            validation = StepValidation.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"validate_step returned an unexpected body: {e}") from e

        logger.debug(
            f"Step {current_performer_id} -[{film_id}]-> {next_performer_id}: "
            f"valid={validation.valid}, alternatives={len(validation.connecting_films)}"
        )
        return validation
