# ABOUTME: Pydantic models for performers, films, chain steps, and authority responses.
# ABOUTME: Entities are frozen once fetched; wire aliases follow the authority's camelCase JSON.

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Performer(BaseModel):
    """
    An actor entity identified by a stable integer id.

    Example:
        performer = Performer.model_validate(
            {"id": 1, "name": "Kevin Bacon", "profilePath": "/kb.jpg"}
        )
    """

    id: int = Field(description="Stable performer identifier")
    name: str = Field(description="Display name", min_length=1)
    profile_path: str | None = Field(
        default=None,
        alias="profilePath",
        description="Partial image path; the image host base is prefixed for display"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def profile_image_url(self, image_base_url: str) -> str | None:
        """Full profile image URL, or None when the authority has no image"""
        if not self.profile_path:
            return None
        return f"{image_base_url.rstrip('/')}{self.profile_path}"


class Film(BaseModel):
    """A movie credited to one or more performers"""

    id: int = Field(description="Stable film identifier")
    title: str = Field(description="Film title", min_length=1)
    year: int = Field(description="Release year")
    poster_path: str | None = Field(
        default=None,
        alias="posterPath",
        description="Partial poster path; the image host base is prefixed for display"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def poster_image_url(self, image_base_url: str) -> str | None:
        """Full poster URL, or None when the film has no poster"""
        if not self.poster_path:
            return None
        return f"{image_base_url.rstrip('/')}{self.poster_path}"

    def label(self) -> str:
        return f"{self.title} ({self.year})"


class ChainStep(BaseModel):
    """
    One traversed edge of the chain: from_performer --connecting_film--> to_performer.

    Both endpoints are stored, so the last step of a chain always knows the
    performer it arrives at without looking at its neighbours. The authority
    guarantees that connecting_film credits both endpoints.
    """

    from_performer: Performer
    connecting_film: Film
    to_performer: Performer

    model_config = ConfigDict(frozen=True)


class NewGameResult(BaseModel):
    """Response from the authority's start-game endpoint"""

    start_performer: Performer = Field(alias="startActor")
    target_performer: Performer = Field(alias="targetActor")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class StepValidation(BaseModel):
    """
    Response from the authority's validate-step endpoint.

    connecting_films lists every film the authority knows to connect the two
    performers. It may be filled even when valid is True; it is only shown to
    the player on rejection.
    """

    valid: bool
    connecting_films: list[Film] = Field(
        default_factory=list,
        alias="connectingMovies"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("connecting_films", mode="before")
    @classmethod
    def none_means_no_films(cls, v):
        """Treat an explicit null list as empty"""
        return [] if v is None else v
