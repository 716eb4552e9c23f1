"""Preview states, events and the pure transition function."""

from dataclasses import dataclass, replace
from typing import Union

from ..models.creation import Creation
from ..models.session import GenerationSession


class InvalidTransition(Exception):
    """Event is not allowed in the current state."""

    def __init__(self, state: "State", event: "Event"):
        self.state = state
        self.event = event
        super().__init__(f"{type(event).__name__} not allowed in {type(state).__name__}")


class GenerationInProgress(InvalidTransition):
    """A generation is already in flight."""

    pass


# ===== States =====

@dataclass(frozen=True)
class Idle:
    """Nothing displayed, nothing in flight."""


@dataclass(frozen=True)
class Generating:
    """One generation in flight. No creation is displayed."""
    session: GenerationSession


@dataclass(frozen=True)
class Active:
    """A creation is displayed, optionally side by side with its source image."""
    creation: Creation
    compare: bool = False


State = Union[Idle, Generating, Active]


# ===== Events =====

@dataclass(frozen=True)
class Submit:
    session: GenerationSession


@dataclass(frozen=True)
class Succeeded:
    creation: Creation


@dataclass(frozen=True)
class Failed:
    reason: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Select:
    creation: Creation


@dataclass(frozen=True)
class Imported:
    creation: Creation


@dataclass(frozen=True)
class ToggleCompare:
    pass


Event = Union[Submit, Succeeded, Failed, Reset, Select, Imported, ToggleCompare]


def transition(state: State, event: Event) -> State:
    """
    Next state for an event. Pure: no I/O, no store access.

    Raises:
        GenerationInProgress: On Submit while Generating
        InvalidTransition: On any other event the state does not accept
            (Succeeded/Failed outside Generating, Reset/Select/Imported
            while Generating, ToggleCompare outside Active)
    """
    if isinstance(event, Submit):
        if isinstance(state, Generating):
            raise GenerationInProgress(state, event)
        # Any displayed creation is dropped right away
        return Generating(session=event.session)

    if isinstance(event, (Succeeded, Failed)):
        if not isinstance(state, Generating):
            raise InvalidTransition(state, event)
        if isinstance(event, Succeeded):
            return Active(creation=event.creation)
        return Idle()

    if isinstance(event, Reset):
        # An in-flight generation cannot be cancelled
        if isinstance(state, Generating):
            raise InvalidTransition(state, event)
        return Idle()

    if isinstance(event, (Select, Imported)):
        if isinstance(state, Generating):
            raise InvalidTransition(state, event)
        return Active(creation=event.creation)

    if isinstance(event, ToggleCompare):
        if not isinstance(state, Active):
            raise InvalidTransition(state, event)
        if not state.creation.has_source_image:
            return state
        return replace(state, compare=not state.compare)

    raise InvalidTransition(state, event)
