# ABOUTME: Entry point for launching the movie chain Textual TUI.
# ABOUTME: Run with: python -m movie_chain.interface [--link URL | --start-actor-id N --target-actor-id N]

import argparse
import sys
from urllib.parse import urlencode

from movie_chain.client.authority_client import AuthorityClient
from movie_chain.client.http import JsonHttpClient
from movie_chain.client.query_cache import QueryCache
from movie_chain.client.search_client import SearchClient
from movie_chain.config.settings import Settings, get_settings
from movie_chain.game.bootstrap import ShareableLinkBootstrap
from movie_chain.game.session import GameSession
from movie_chain.game.share import START_PARAM, TARGET_PARAM
from movie_chain.interface.game_textual import MovieChainApp
from movie_chain.utils.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Connect two actors through a chain of shared movies"
    )

    parser.add_argument(
        "--link",
        type=str,
        default=None,
        help="Shareable game link containing startActorId and targetActorId"
    )
    parser.add_argument(
        "--start-actor-id",
        type=int,
        default=None,
        help="Start performer id (use together with --target-actor-id)"
    )
    parser.add_argument(
        "--target-actor-id",
        type=int,
        default=None,
        help="Target performer id (use together with --start-actor-id)"
    )
    parser.add_argument(
        "--api-base-url",
        type=str,
        default=None,
        help="Override the authority base URL"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the log level (DEBUG, INFO, WARNING, ERROR)"
    )

    args = parser.parse_args(argv)
    if (args.start_actor_id is None) != (args.target_actor_id is None):
        parser.error("--start-actor-id and --target-actor-id must be given together")
    return args


def entry_address(args: argparse.Namespace) -> str | None:
    """Entry address for the bootstrap, from --link or the explicit id pair"""
    if args.link:
        return args.link
    if args.start_actor_id is not None:
        return urlencode({START_PARAM: args.start_actor_id, TARGET_PARAM: args.target_actor_id})
    return None


def build_session(settings: Settings, api_base_url: str | None = None) -> GameSession:
    """Wire HTTP, authority, search and session from settings"""
    http = JsonHttpClient(
        api_base_url or settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )
    search = SearchClient(
        http,
        min_query_length=settings.search_min_length,
        cache=QueryCache(ttl_seconds=settings.search_cache_ttl_seconds),
    )
    return GameSession(
        AuthorityClient(http),
        search,
        debounce_seconds=settings.search_debounce_seconds,
    )


def main(argv: list[str] | None = None) -> None:
    """Run the Textual game interface"""
    args = parse_args(argv)
    settings = get_settings()

    try:
        setup_logging(
            log_level=args.log_level or settings.log_level,
            log_dir=settings.log_dir,
            console_output=False,
            file_output=True,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    session = build_session(settings, args.api_base_url)
    app = MovieChainApp(
        session,
        bootstrap=ShareableLinkBootstrap(entry_address(args)),
        share_base_url=settings.share_base_url,
        image_base_url=settings.image_base_url,
    )
    app.run()


if __name__ == "__main__":
    main()
