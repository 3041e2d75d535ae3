"""One-second countdown step shared by the server tick and the widget's offline simulation."""
from typing import NamedTuple


class CountdownStep(NamedTuple):
    remaining_seconds: int
    finished: bool


def countdown_step(remaining_seconds: int) -> CountdownStep:
    """
    Advance a countdown by one second.

    Remaining time never drops below zero. ``finished`` is true once the
    countdown sits at zero after the step.
    """
    remaining = max(remaining_seconds - 1, 0)
    return CountdownStep(remaining_seconds=remaining, finished=remaining == 0)
