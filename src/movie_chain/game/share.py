# ABOUTME: Shareable game links and entry-parameter parsing for starting a game from a URL.
# ABOUTME: Also renders a finished chain as text for the win screen and for sharing.

from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from movie_chain.models.game_state import GameState, is_won

START_PARAM = "startActorId"
TARGET_PARAM = "targetActorId"


@dataclass(frozen=True)
class EntryParameters:
    """Start and target performer ids found on the entry address"""

    start_performer_id: int
    target_performer_id: int

    @classmethod
    def from_address(cls, address: str | None) -> "EntryParameters | None":
        """
        Parse both ids from a URL or bare query string.

        Returns None unless both parameters are present and are integers.

        Example:
            >>> EntryParameters.from_address("https://game.example/?startActorId=7&targetActorId=9")
            EntryParameters(start_performer_id=7, target_performer_id=9)
        """
        if not address:
            return None

        params = parse_qs(_query_of(address))
        start = _single_int(params.get(START_PARAM))
        target = _single_int(params.get(TARGET_PARAM))
        if start is None or target is None:
            return None
        return cls(start_performer_id=start, target_performer_id=target)


def strip_entry_parameters(address: str) -> str:
    """Remove the share parameters from an address, keeping anything else"""
    query = _query_of(address)
    kept = [
        (key, value)
        for key, values in parse_qs(query, keep_blank_values=True).items()
        if key not in (START_PARAM, TARGET_PARAM)
        for value in values
    ]
    if not _is_url(address):
        return urlencode(kept)
    return urlunsplit(urlsplit(address)._replace(query=urlencode(kept)))


def build_share_link(state: GameState, base_url: str) -> str:
    """Address that starts the same challenge for someone else"""
    parts = urlsplit(base_url)
    query = urlencode({
        START_PARAM: state.start_performer.id,
        TARGET_PARAM: state.target_performer.id,
    })
    return urlunsplit(parts._replace(query=query))


def format_chain_summary(state: GameState) -> str:
    """
    Render the chain as one line per edge plus a headline.

    Example output:
        Connected Kevin Bacon to Tom Hanks in 2 steps:
        Kevin Bacon → Apollo 13 (1995) → Tom Hanks
    """
    steps = state.step_count
    noun = "step" if steps == 1 else "steps"
    if is_won(state):
        headline = (
            f"Connected {state.start_performer.name} to "
            f"{state.target_performer.name} in {steps} {noun}:"
        )
    else:
        headline = (
            f"{state.start_performer.name} → … → {state.target_performer.name} "
            f"({steps} {noun} so far)"
        )

    lines = [headline]
    for step in state.chain:
        lines.append(
            f"{step.from_performer.name} → {step.connecting_film.label()} → "
            f"{step.to_performer.name}"
        )
    return "\n".join(lines)


def _is_url(address: str) -> bool:
    return "?" in address or "://" in address


def _query_of(address: str) -> str:
    """Query part of a URL, or the address itself when it is a bare query string"""
    return urlsplit(address).query if _is_url(address) else address


def _single_int(values: list[str] | None) -> int | None:
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None
