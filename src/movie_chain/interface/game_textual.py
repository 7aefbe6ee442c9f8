# ABOUTME: Textual TUI for playing the movie chain game against the authority.
# ABOUTME: Dual-panel layout with the chain log and command input on the left, step pickers on the right.

from loguru import logger
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import Footer, Header, Input, RichLog, Static

from movie_chain.client.exceptions import NotFound, TransportError
from movie_chain.game.bootstrap import ShareableLinkBootstrap
from movie_chain.game.chooser import DebouncedChooser
from movie_chain.game.exceptions import NoActiveGame
from movie_chain.game.session import GameSession
from movie_chain.game.share import build_share_link, format_chain_summary
from movie_chain.interface.commands import (
    CommandParser,
    CommandType,
    InvalidCommandError,
    ParsedCommand,
)
from movie_chain.interface.formatter import HELP_TEXT, GameFormatter
from movie_chain.models.entities import Performer
from movie_chain.models.game_state import GamePhase


class MovieChainApp(App):
    """Textual TUI for the movie chain game"""

    CSS = """
    #main {
        layout: horizontal;
        height: 1fr;
    }

    .panel {
        border: solid green;
        height: 1fr;
        width: 1fr;
    }

    .panel-title {
        background: green;
        color: white;
        padding: 0 1;
    }

    #game-panel {
        width: 2fr;
    }

    #side-panel {
        width: 1fr;
    }

    #game-log {
        height: 1fr;
        scrollbar-gutter: stable;
    }

    #performer-results, #film-results {
        height: auto;
        max-height: 12;
        padding: 0 1;
    }

    #command-input {
        dock: bottom;
        height: 3;
    }

    #game-status {
        height: 9;
        border: solid blue;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "submit_step", "Submit Step"),
        ("ctrl+r", "reset_chain", "Reset Chain"),
        ("ctrl+n", "new_game", "New Game"),
    ]

    def __init__(
        self,
        session: GameSession,
        bootstrap: ShareableLinkBootstrap | None = None,
        share_base_url: str = "http://localhost:5173/",
        image_base_url: str | None = None,
    ):
        super().__init__()
        self.session = session
        self.bootstrap = bootstrap
        self.share_base_url = share_base_url
        self.parser = CommandParser()
        self.formatter = GameFormatter(image_base_url=image_base_url)
        self._setup_start: Performer | None = None
        self._setup_target: Performer | None = None
        self._panels_ready = False
        self._last_feedback = None
        self._announced_win = False

        session.on_change = self.refresh_panels

    def compose(self) -> ComposeResult:
        """Create layout with chain log and step pickers"""
        yield Header(show_clock=False, name="Movie Chain")

        with Container(id="main"):
            with Vertical(id="game-panel", classes="panel"):
                yield Static("Chain", classes="panel-title")
                yield RichLog(id="game-log", markup=True, highlight=False, wrap=True)
                yield Input(placeholder="/help for commands", id="command-input")

            with Vertical(id="side-panel", classes="panel"):
                yield Static("Next actor", classes="panel-title")
                yield Input(placeholder="Search for an actor…", id="performer-input")
                yield Static(id="performer-results")
                yield Static("Connecting movie", classes="panel-title")
                yield Input(placeholder="Search for a movie…", id="film-input")
                yield Static(id="film-results")
                yield Static(id="game-status")

        yield Footer()

    async def on_mount(self) -> None:
        self._panels_ready = True
        self.write_game_log("[bold]Movie Chain[/bold]")
        self.write_game_log("Connect two actors through a chain of shared movies.")
        self.write_game_log("[dim]Type /help for commands.[/dim]")
        self.refresh_panels()

        if self.bootstrap is not None and self.bootstrap.parameters is not None:
            self.run_worker(self._run_bootstrap(), exclusive=True, group="start")

    def write_game_log(self, content: str) -> None:
        log = self.query_one("#game-log", RichLog)
        log.write(content)

    def refresh_panels(self) -> None:
        """Redraw pickers and status from the session; safe to call before mount"""
        if not self._panels_ready:
            return

        session = self.session
        self.query_one("#performer-results", Static).update(
            self._chooser_text(session.performer_chooser)
        )
        self.query_one("#film-results", Static).update(
            self._chooser_text(session.film_chooser)
        )
        self.query_one("#game-status", Static).update(
            self.formatter.format_status(
                session.state,
                session.performer_chooser.selection,
                session.film_chooser.selection,
                session.is_validating,
            )
        )

        if session.feedback is not None and session.feedback is not self._last_feedback:
            self.write_game_log(self.formatter.format_feedback(session.feedback))
        self._last_feedback = session.feedback

        if session.phase is GamePhase.WON and not self._announced_win:
            self._announced_win = True
            self.write_game_log(self.formatter.format_win(session.state))
            self.write_game_log("[dim]/share for a link, /new to play again[/dim]")
        elif session.phase is not GamePhase.WON:
            self._announced_win = False

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "performer-input":
            self.session.performer_chooser.update_query(event.value)
        elif event.input.id == "film-input":
            self.session.film_chooser.update_query(event.value)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "command-input":
            return

        user_input = event.value
        event.input.value = ""

        try:
            parsed = self.parser.parse(user_input)
        except InvalidCommandError as e:
            self.write_game_log(f"[red]✗ {escape(str(e))}[/red]")
            return

        self.run_worker(self.handle_command(parsed), group="commands")

    async def handle_command(self, parsed: ParsedCommand) -> None:
        handlers = {
            CommandType.START: self._handle_start,
            CommandType.PICK: self._handle_pick,
            CommandType.SUBMIT: self._handle_submit,
            CommandType.RESET: self._handle_reset,
            CommandType.NEW: self._handle_new,
            CommandType.SHARE: self._handle_share,
            CommandType.HELP: self._handle_help,
            CommandType.QUIT: self._handle_quit,
        }
        await handlers[parsed.command_type](parsed)

    def action_submit_step(self) -> None:
        """Submit step action (Ctrl+S)"""
        self.run_worker(self._handle_submit(ParsedCommand(CommandType.SUBMIT)), group="step")

    def action_reset_chain(self) -> None:
        """Reset chain action (Ctrl+R)"""
        self.run_worker(self._handle_reset(ParsedCommand(CommandType.RESET)))

    def action_new_game(self) -> None:
        """New game action (Ctrl+N)"""
        self.run_worker(self._handle_new(ParsedCommand(CommandType.NEW)))

    async def _run_bootstrap(self) -> None:
        state = await self.bootstrap.run(self.session)
        if state is None:
            self.write_game_log(
                "[yellow]Could not open the shared game. Set one up manually.[/yellow]"
            )
            return
        self._announce_game()
        logger.info(f"Entry address after bootstrap: {self.bootstrap.stripped_address}")

    async def _handle_start(self, parsed: ParsedCommand) -> None:
        if "start_id" in parsed.args:
            start_id, target_id = parsed.args["start_id"], parsed.args["target_id"]
        elif self._setup_start is not None and self._setup_target is not None:
            start_id, target_id = self._setup_start.id, self._setup_target.id
        else:
            self.write_game_log("[yellow]Pick a start and a target performer first.[/yellow]")
            return

        try:
            state = await self.session.start_game(start_id, target_id)
        except (NotFound, TransportError) as e:
            self.write_game_log(f"[red]✗ Failed to start game: {escape(str(e))}[/red]")
            return
        if state is None:
            return

        self._setup_start = None
        self._setup_target = None
        self._clear_picker_inputs()
        self._announce_game()

    async def _handle_pick(self, parsed: ParsedCommand) -> None:
        target = parsed.args["target"]
        index = parsed.args["index"] - 1
        chooser = self.session.film_chooser if target == "film" else self.session.performer_chooser

        if index >= len(chooser.results):
            self.write_game_log(f"[yellow]No result #{index + 1} for {target}.[/yellow]")
            return
        item = chooser.results[index]

        if target == "actor":
            self.session.select_performer(item)
        elif target == "film":
            self.session.select_film(item)
        elif target == "start":
            self._setup_start = item
            self.write_game_log(f"Start: {self.formatter.format_performer(item)}")
        else:
            self._setup_target = item
            self.write_game_log(f"Target: {self.formatter.format_performer(item)}")

    async def _handle_submit(self, parsed: ParsedCommand) -> None:
        if self.session.phase is not GamePhase.IN_PROGRESS:
            self.write_game_log("[yellow]No game in progress.[/yellow]")
            return
        if not self.session.can_submit:
            if not self.session.is_validating:
                self.write_game_log("[yellow]Pick an actor and a movie first.[/yellow]")
            return

        state = await self.session.submit_selected_step()
        if state is not None:
            self._clear_picker_inputs()
            self.write_game_log(self.formatter.format_step_accepted(state))

    async def _handle_reset(self, parsed: ParsedCommand) -> None:
        try:
            state = self.session.reset_chain()
        except NoActiveGame:
            self.write_game_log("[yellow]No game in progress.[/yellow]")
            return
        self._clear_picker_inputs()
        self.write_game_log("[dim]Chain reset.[/dim]")
        self.write_game_log(self.formatter.format_chain(state))

    async def _handle_new(self, parsed: ParsedCommand) -> None:
        self.session.reset_game()
        self._clear_picker_inputs()
        self.write_game_log("[dim]Game abandoned. Set up a new one with /start.[/dim]")

    async def _handle_share(self, parsed: ParsedCommand) -> None:
        state = self.session.state
        if state is None:
            self.write_game_log("[yellow]No game to share.[/yellow]")
            return
        self.write_game_log(format_chain_summary(state))
        self.write_game_log(build_share_link(state, self.share_base_url))

    async def _handle_help(self, parsed: ParsedCommand) -> None:
        self.write_game_log(HELP_TEXT)

    async def _handle_quit(self, parsed: ParsedCommand) -> None:
        self.exit()

    def _announce_game(self) -> None:
        state = self.session.state
        if state is None:
            return
        self.write_game_log(self.formatter.format_game_header(state))
        self.write_game_log(self.formatter.format_chain(state))

    def _chooser_text(self, chooser: DebouncedChooser) -> str:
        if chooser.error is not None:
            return f"[red]{escape(str(chooser.error))}[/red]"
        if chooser.is_loading:
            return "[dim]Searching…[/dim]"
        if not chooser.query.strip():
            return ""
        return self.formatter.format_results(chooser.results)

    def _clear_picker_inputs(self) -> None:
        for input_id in ("#performer-input", "#film-input"):
            self.query_one(input_id, Input).value = ""
