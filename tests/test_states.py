"""Tests for the pure preview state machine."""

import pytest

from bringtolife.engine.states import (
    Active,
    Failed,
    GenerationInProgress,
    Generating,
    Idle,
    Imported,
    InvalidTransition,
    Reset,
    Select,
    Submit,
    Succeeded,
    ToggleCompare,
    transition,
)
from bringtolife.models import GenerationSession
from conftest import make_creation


@pytest.fixture
def session():
    return GenerationSession(prompt="a chess clock", locale="en")


@pytest.fixture
def creation():
    return make_creation(source_image="data:image/png;base64,AAAA")


class TestTransitions:
    def test_submit_from_idle(self, session):
        assert transition(Idle(), Submit(session)) == Generating(session)

    def test_submit_from_active_drops_creation(self, session, creation):
        state = transition(Active(creation), Submit(session))

        assert state == Generating(session)

    def test_submit_while_generating_rejected(self, session):
        other = GenerationSession(prompt="other", locale="en")

        with pytest.raises(GenerationInProgress):
            transition(Generating(session), Submit(other))

    def test_success(self, session, creation):
        assert transition(Generating(session), Succeeded(creation)) == Active(creation)

    def test_failure(self, session):
        assert transition(Generating(session), Failed("boom")) == Idle()

    @pytest.mark.parametrize("event_state", [Idle(), Active(make_creation())])
    def test_outcome_outside_generating_rejected(self, event_state, creation):
        with pytest.raises(InvalidTransition):
            transition(event_state, Succeeded(creation))
        with pytest.raises(InvalidTransition):
            transition(event_state, Failed("late"))

    def test_reset(self, creation):
        assert transition(Active(creation, compare=True), Reset()) == Idle()
        assert transition(Idle(), Reset()) == Idle()

    def test_reset_cannot_cancel_generation(self, session):
        with pytest.raises(InvalidTransition):
            transition(Generating(session), Reset())

    def test_select(self, creation):
        other = make_creation("other")

        assert transition(Idle(), Select(creation)) == Active(creation)
        assert transition(Active(creation), Select(other)) == Active(other)

    def test_import(self, creation):
        assert transition(Idle(), Imported(creation)) == Active(creation)
        assert transition(Active(make_creation()), Imported(creation)) == Active(creation)

    @pytest.mark.parametrize("event_cls", [Select, Imported])
    def test_browsing_rejected_while_generating(self, session, creation, event_cls):
        with pytest.raises(InvalidTransition):
            transition(Generating(session), event_cls(creation))

    def test_toggle_compare(self, creation):
        state = transition(Active(creation), ToggleCompare())
        assert state == Active(creation, compare=True)
        assert transition(state, ToggleCompare()) == Active(creation, compare=False)

    def test_toggle_compare_without_source_image(self):
        plain = Active(make_creation())

        assert transition(plain, ToggleCompare()) == plain

    def test_toggle_compare_outside_active_rejected(self):
        with pytest.raises(InvalidTransition):
            transition(Idle(), ToggleCompare())

    def test_states_are_immutable(self, creation):
        state = Active(creation)

        with pytest.raises(AttributeError):
            state.compare = True
