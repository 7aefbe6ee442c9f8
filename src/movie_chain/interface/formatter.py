# ABOUTME: Rich-markup formatting of game state, search results, and feedback for the terminal UI.
# ABOUTME: Pure string builders so the Textual app only decides where text goes.

from rich.markup import escape

from movie_chain.game.session import StepFeedback
from movie_chain.models.entities import Film, Performer
from movie_chain.models.game_state import GamePhase, GameState, game_phase

HELP_TEXT = """[bold]Commands[/bold]
  /start <start_id> <target_id>  start a game between two performer ids
  /pick start <n> | /pick target <n>  choose setup performers from search results, then /start
  /pick actor <n> | /pick film <n>    choose the next step from search results
  /submit   submit the selected step
  /reset    clear the chain, same challenge
  /new      abandon this game
  /share    show a link to this challenge
  /quit     leave"""


class GameFormatter:
    """
    Formats output for display in the game log and side panel.

    Handles:
    - Chain rendering
    - Search result lists
    - Step feedback (duplicates, rejections, transport errors)
    - Status panel
    """

    SUCCESS_MARKER = "✓"
    FAILURE_MARKER = "✗"
    ARROW = "→"

    def __init__(self, image_base_url: str | None = None):
        self.image_base_url = image_base_url

    def format_performer(self, performer: Performer, with_image: bool = False) -> str:
        text = f"[bold]{escape(performer.name)}[/bold]"
        if with_image and self.image_base_url:
            url = performer.profile_image_url(self.image_base_url)
            if url:
                text += f" [dim]{escape(url)}[/dim]"
        return text

    def format_film(self, film: Film, with_image: bool = False) -> str:
        text = f"[italic]{escape(film.label())}[/italic]"
        if with_image and self.image_base_url:
            url = film.poster_image_url(self.image_base_url)
            if url:
                text += f" [dim]{escape(url)}[/dim]"
        return text

    def format_chain(self, state: GameState) -> str:
        """Start performer, then one line per accepted step"""
        lines = [f"  {self.format_performer(state.start_performer)}"]
        for step in state.chain:
            lines.append(
                f"  {self.ARROW} {self.format_film(step.connecting_film)} "
                f"{self.ARROW} {self.format_performer(step.to_performer)}"
            )
        return "\n".join(lines)

    def format_game_header(self, state: GameState) -> str:
        return (
            f"[bold cyan]Connect[/bold cyan] {self.format_performer(state.start_performer, True)} "
            f"[bold cyan]to[/bold cyan] {self.format_performer(state.target_performer, True)}"
        )

    def format_results(self, results: list[Performer] | list[Film], empty: str = "No results") -> str:
        if not results:
            return f"[dim]{escape(empty)}[/dim]"
        lines = []
        for number, item in enumerate(results, start=1):
            if isinstance(item, Film):
                lines.append(f"{number}. {escape(item.label())}")
            else:
                lines.append(f"{number}. {escape(item.name)}")
        return "\n".join(lines)

    def format_feedback(self, feedback: StepFeedback) -> str:
        lines = [f"[red]{self.FAILURE_MARKER} {escape(feedback.message)}[/red]"]
        if feedback.suggested_films:
            lines.append("[yellow]These movies would have been valid:[/yellow]")
            for film in feedback.suggested_films:
                lines.append(f"  - {self.format_film(film, with_image=True)}")
        return "\n".join(lines)

    def format_step_accepted(self, state: GameState) -> str:
        step = state.chain[-1]
        return (
            f"[green]{self.SUCCESS_MARKER}[/green] {self.format_film(step.connecting_film, True)} "
            f"{self.ARROW} {self.format_performer(step.to_performer)}"
        )

    def format_win(self, state: GameState) -> str:
        steps = state.step_count
        noun = "step" if steps == 1 else "steps"
        return (
            f"\n[bold green]You connected them![/bold green] "
            f"Chain completed in [bold]{steps} {noun}[/bold].\n"
            f"{self.format_chain(state)}"
        )

    def format_status(
        self,
        state: GameState | None,
        selected_performer: Performer | None,
        selected_film: Film | None,
        is_validating: bool,
    ) -> str:
        phase = game_phase(state)
        if phase is GamePhase.NO_GAME or state is None:
            return "Phase: Setup\nUse /start <id> <id> or pick performers."

        lines = [
            f"Phase: {self._humanize_phase(phase)}",
            f"Current: {escape(state.current_performer.name)}",
            f"Target: {escape(state.target_performer.name)}",
            f"Steps: {state.step_count}",
            f"Next actor: {escape(selected_performer.name) if selected_performer else '-'}",
            f"Movie: {escape(selected_film.label()) if selected_film else '-'}",
        ]
        if is_validating:
            lines.append("[yellow]Checking…[/yellow]")
        return "\n".join(lines)

    def _humanize_phase(self, phase: GamePhase) -> str:
        return {
            GamePhase.NO_GAME: "Setup",
            GamePhase.IN_PROGRESS: "In progress",
            GamePhase.WON: "Won",
        }[phase]
