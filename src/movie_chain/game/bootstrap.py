# ABOUTME: Shareable-link bootstrap that starts a game from ids found on the entry address.
# ABOUTME: Runs at most once, strips the parameters afterwards, and never leaves the session half-started.

from loguru import logger

from movie_chain.client.exceptions import NotFound, TransportError
from movie_chain.game.exceptions import BootstrapFailure
from movie_chain.game.session import GameSession
from movie_chain.game.share import EntryParameters, strip_entry_parameters
from movie_chain.models.game_state import GameState


class ShareableLinkBootstrap:
    """
    Turns startActorId/targetActorId on the entry address into a started game.

    Failures fall back to manual setup: the session stays in NO_GAME and the
    failure is logged. Nothing is raised to the caller.
    """

    def __init__(self, entry_address: str | None):
        """
        Args:
            entry_address: URL or query string the application was launched with
        """
        self.entry_address = entry_address
        self.parameters = EntryParameters.from_address(entry_address)
        self.attempted = False
        self.failure: BootstrapFailure | None = None

    @property
    def stripped_address(self) -> str | None:
        """
        Entry address as it should be shown after the bootstrap ran.

        The share parameters are removed once an attempt was made, so a later
        reload does not start the same game again.
        """
        if self.entry_address is None or not self.attempted:
            return self.entry_address
        return strip_entry_parameters(self.entry_address)

    async def run(self, session: GameSession) -> GameState | None:
        """
        Start the linked game once.

        Args:
            session: Session to start the game in

        Returns:
            The started GameState, or None when there was nothing to do, the
            bootstrap already ran, or the start failed
        """
        if self.attempted or self.parameters is None:
            return None
        self.attempted = True

        start_id = self.parameters.start_performer_id
        target_id = self.parameters.target_performer_id
        logger.info(f"Starting shared game {start_id} -> {target_id}")

        try:
            state = await session.start_game(start_id, target_id)
        except (NotFound, TransportError) as e:
            self.failure = BootstrapFailure(
                f"Could not start shared game {start_id} -> {target_id}: {e}"
            )
            logger.bind(start_id=start_id, target_id=target_id).error(str(self.failure))
            return None

        return state
