"""Rich Console construction for report and diagnostic output."""

from typing import Literal

from rich.console import Console

ColorMode = Literal["auto", "always", "never"]


def make_console(color: ColorMode = "auto", stderr: bool = False) -> Console:
    """Create a console for the given color mode.

    ``auto`` colors only when writing to a terminal, ``always`` forces escape
    codes even into pipes and files, ``never`` emits none at all.
    """
    if color == "never":
        return Console(stderr=stderr, highlight=False, color_system=None, no_color=True)
    if color == "always":
        return Console(stderr=stderr, highlight=False, force_terminal=True)
    return Console(stderr=stderr, highlight=False)
