# ABOUTME: Unit tests for GameFormatter rich-markup output.
# ABOUTME: Checks chain rendering, result lists, feedback with suggestions, and the status panel.

import pytest

from movie_chain.game.session import StepFeedback
from movie_chain.interface.formatter import GameFormatter
from movie_chain.models.entities import Performer
from movie_chain.models.game_state import GameState


@pytest.fixture
def formatter():
    return GameFormatter(image_base_url="https://img.example/w185")


class TestEntities:
    """Tests for performer and film formatting"""

    def test_performer_with_image(self, formatter, kevin_bacon):
        """Test the profile image URL is appended when requested"""
        text = formatter.format_performer(kevin_bacon, with_image=True)
        assert "Kevin Bacon" in text
        assert "https://img.example/w185/bacon.jpg" in text

    def test_performer_without_image_path(self, formatter, meg_ryan):
        """Test performers without a profile path show only the name"""
        assert formatter.format_performer(meg_ryan, with_image=True) == "[bold]Meg Ryan[/bold]"

    def test_markup_in_names_is_escaped(self, formatter):
        """Test names cannot inject rich markup"""
        text = formatter.format_performer(Performer(id=9, name="[red]Evil[/red]"))
        assert "\\[red]" in text

    def test_film_label(self, formatter, apollo_13):
        """Test films show title and year"""
        assert formatter.format_film(apollo_13) == "[italic]Apollo 13 (1995)[/italic]"

    def test_film_with_poster(self, formatter, apollo_13):
        """Test the poster URL is appended when requested"""
        text = formatter.format_film(apollo_13, with_image=True)
        assert "Apollo 13 (1995)" in text
        assert "https://img.example/w185/apollo.jpg" in text

    def test_film_without_poster_path(self, formatter, in_the_cut):
        """Test films without a poster show only the label"""
        assert formatter.format_film(in_the_cut, with_image=True) == "[italic]In the Cut (2003)[/italic]"

    def test_no_image_base_url_hides_poster(self, apollo_13):
        """Test posters are omitted when no image host is configured"""
        assert "apollo.jpg" not in GameFormatter().format_film(apollo_13, with_image=True)

    def test_step_accepted_shows_poster(self, formatter, kevin_bacon, tom_hanks, apollo_13):
        """Test the accepted-step line links the connecting film's poster"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(tom_hanks, apollo_13)
        assert "https://img.example/w185/apollo.jpg" in formatter.format_step_accepted(state)


class TestChainAndResults:
    """Tests for chain and search result rendering"""

    def test_format_chain(self, formatter, kevin_bacon, tom_hanks, meg_ryan, in_the_cut):
        """Test one line for the start plus one per step"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(meg_ryan, in_the_cut)

        lines = formatter.format_chain(state).splitlines()

        assert len(lines) == 2
        assert "Kevin Bacon" in lines[0]
        assert "In the Cut (2003)" in lines[1]
        assert "Meg Ryan" in lines[1]

    def test_format_results_numbers_items(self, formatter, kevin_bacon, apollo_13):
        """Test results are numbered from 1"""
        assert formatter.format_results([kevin_bacon]) == "1. Kevin Bacon"
        assert formatter.format_results([apollo_13]) == "1. Apollo 13 (1995)"

    def test_format_results_empty(self, formatter):
        """Test the empty placeholder"""
        assert formatter.format_results([]) == "[dim]No results[/dim]"

    def test_format_win(self, formatter, kevin_bacon, tom_hanks, apollo_13):
        """Test the win message reports the step count"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(tom_hanks, apollo_13)
        text = formatter.format_win(state)
        assert "You connected them!" in text
        assert "1 step" in text


class TestFeedback:
    """Tests for feedback rendering"""

    def test_invalid_step_lists_suggestions(self, formatter, in_the_cut):
        """Test connecting films are offered"""
        feedback = StepFeedback(
            kind="invalid_step",
            message="That step is not valid.",
            suggested_films=(in_the_cut,),
        )

        text = formatter.format_feedback(feedback)

        assert "That step is not valid." in text
        assert "These movies would have been valid:" in text
        assert "In the Cut (2003)" in text

    def test_feedback_without_suggestions(self, formatter):
        """Test duplicate feedback is a single line"""
        feedback = StepFeedback(kind="duplicate_film", message="Footloose has already been used in this chain.")
        assert len(formatter.format_feedback(feedback).splitlines()) == 1


class TestStatus:
    """Tests for the status panel"""

    def test_setup_status(self, formatter):
        """Test status without a game"""
        assert formatter.format_status(None, None, None, False).startswith("Phase: Setup")

    def test_in_progress_status(self, formatter, kevin_bacon, tom_hanks, meg_ryan, apollo_13):
        """Test status shows current, target, and selections"""
        state = GameState.initial(kevin_bacon, tom_hanks)

        text = formatter.format_status(state, meg_ryan, apollo_13, True)

        assert "Phase: In progress" in text
        assert "Current: Kevin Bacon" in text
        assert "Target: Tom Hanks" in text
        assert "Next actor: Meg Ryan" in text
        assert "Movie: Apollo 13 (1995)" in text
        assert "Checking" in text

    def test_won_status(self, formatter, kevin_bacon, tom_hanks, apollo_13):
        """Test the won phase label"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(tom_hanks, apollo_13)
        assert "Phase: Won" in formatter.format_status(state, None, None, False)
