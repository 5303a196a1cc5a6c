"""GameController tests - driving a whole game the way a UI does"""

import pytest

from impostor.engine.controller import GameController
from impostor.engine.errors import GameError, IllegalPhaseTransition, InsufficientPlayers
from impostor.engine.game import Outcome
from impostor.engine.phases import GamePhase
from tests.helpers import ScriptedRandom


def _controller(*values, roster=()):
    return GameController(rng=ScriptedRandom(*values), roster=roster)


class TestSetup:

    def test_initial_state(self):
        gc = _controller(roster=["Ana", "Ben"])
        assert gc.current_phase() == GamePhase.SETUP
        assert gc.roster == ("Ana", "Ben")
        assert gc.category_selection == "Random"
        assert gc.categories() == ["Random", "Animals", "Places", "Food", "Objects"]

    def test_blank_slots_skipped(self):
        gc = _controller(0, 1)
        gc.create_session(["Ana", "", "Ben", "   ", "Cy"], "Animals")
        assert gc.current_phase() == GamePhase.ASSIGNING
        assert gc.session.player_names == ["Ana", "Ben", "Cy"]

    def test_too_few_after_skipping_blanks(self):
        gc = _controller()
        with pytest.raises(InsufficientPlayers):
            gc.create_session(["Ana", "", "Ben"], "Animals")
        assert gc.current_phase() == GamePhase.SETUP

    def test_too_many(self):
        gc = _controller()
        with pytest.raises(GameError):
            gc.create_session([f"P{i}" for i in range(8)], "Animals")


class TestFullGame:

    def setup_method(self):
        self.gc = _controller(0, 1)
        self.gc.create_session(["Ana", "Ben", "Cy"], "Animals")

    def _reveal_all(self):
        while self.gc.current_phase() == GamePhase.ASSIGNING:
            self.gc.advance_reveal()

    def test_reveal_walk(self):
        seen = []
        while self.gc.current_phase() == GamePhase.ASSIGNING:
            player = self.gc.current_revealee()
            seen.append((player.name, self.gc.role_for_current_revealee().is_impostor))
            self.gc.advance_reveal()
        assert seen == [("Ana", False), ("Ben", True), ("Cy", False)]
        assert self.gc.current_phase() == GamePhase.PLAYING

    def test_timer_controls(self):
        self._reveal_all()
        assert self.gc.timer_state().can_start
        assert self.gc.start_timer()
        assert self.gc.tick()
        state = self.gc.timer_state()
        assert state.running
        assert state.remaining_seconds == 19
        assert not state.can_start

    def test_play_and_win(self):
        self._reveal_all()
        while self.gc.current_phase() == GamePhase.PLAYING:
            self.gc.finish_turn()
        assert [p.name for p in self.gc.vote_candidates()] == ["Ana", "Ben", "Cy"]
        result = self.gc.cast_vote(1)
        assert result.crew_won
        assert self.gc.outcome() == Outcome.CREW_WINS
        assert self.gc.result() is result
        assert self.gc.games_played == 1

    def test_emergency_vote(self):
        self._reveal_all()
        self.gc.finish_turn()
        assert self.gc.current_turn_player().name == "Ben"
        assert self.gc.current_round() == 1
        assert self.gc.request_emergency_vote() == GamePhase.VOTING
        result = self.gc.cast_vote(0)
        assert result.outcome == Outcome.IMPOSTOR_WINS

    def test_illegal_operation_keeps_session(self):
        session = self.gc.session
        with pytest.raises(IllegalPhaseTransition):
            self.gc.cast_vote(0)
        assert self.gc.session is session
        assert self.gc.current_phase() == GamePhase.ASSIGNING


class TestResets:

    def setup_method(self):
        self.gc = _controller(0, 1)
        self.gc.create_session(["Ana", "Ben", "Cy"], "Food")
        while self.gc.current_phase() == GamePhase.ASSIGNING:
            self.gc.advance_reveal()
        self.gc.request_emergency_vote()
        self.gc.cast_vote(2)

    def test_play_again(self):
        old = self.gc.session
        assert self.gc.reset_keeping_roster() == GamePhase.SETUP
        assert self.gc.session is not old
        assert self.gc.roster == ("Ana", "Ben", "Cy")
        assert self.gc.category_selection == "Food"
        assert self.gc.result() is None

    def test_change_players(self):
        assert self.gc.reset_full() == GamePhase.SETUP
        assert self.gc.roster == ("Ana", "Ben", "Cy")
        assert self.gc.category_selection == "Random"

    def test_second_game(self):
        self.gc.reset_keeping_roster()
        self.gc.create_session(["Ana", "Ben", "Cy", "Dee"])
        assert self.gc.session.selected_category == "Food"
        assert len(self.gc.session.players) == 4

    def test_reset_outside_results(self):
        self.gc.reset_full()
        with pytest.raises(IllegalPhaseTransition):
            self.gc.reset_full()
