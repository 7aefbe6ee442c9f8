# ABOUTME: Exception definitions for chain game errors.
# ABOUTME: Defines error types raised by ChainStateMachine, StepProposalWorkflow, and the bootstrap.

from movie_chain.models.entities import Film, Performer


class NoActiveGame(Exception):
    """Raised when a chain mutation is attempted with no game in progress"""
    pass


class DuplicatePerformer(Exception):
    """Raised when a proposed performer is already part of the chain"""

    def __init__(self, performer: Performer):
        super().__init__(f"{performer.name} has already been used in this chain.")
        self.performer = performer


class DuplicateFilm(Exception):
    """Raised when a proposed film is already part of the chain"""

    def __init__(self, film: Film):
        super().__init__(f"{film.title} has already been used in this chain.")
        self.film = film


class InvalidStep(Exception):
    """Raised when the authority rejects a proposed connection"""

    def __init__(
        self,
        performer: Performer,
        film: Film,
        connecting_films: list[Film] | None = None,
    ):
        super().__init__(
            f"{film.title} does not connect to {performer.name}."
        )
        self.performer = performer
        self.film = film
        self.connecting_films = list(connecting_films or [])


class GameAlreadyWon(Exception):
    """Raised when a step is proposed after the target performer was reached"""
    pass


class ValidationUnavailable(Exception):
    """Raised when the authority could not be reached to validate a step"""
    pass


class BootstrapFailure(Exception):
    """Raised when a shareable link could not start a game"""
    pass
