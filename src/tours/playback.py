"""
Playback Cursor
===============

Bounded position over a tour's steps, shared by the editor preview and the
standalone player.

Navigation never wraps: prev() at the first step does nothing, and next()
at the last step stays put and marks the tour complete. The advance
action's label changes at the last step; only the standalone player
offers an explicit "End Tour".
"""

import logging
from typing import Iterable, Optional, Tuple

from src.tours.errors import OutOfRangeError
from src.tours.models import Step

logger = logging.getLogger(__name__)

NEXT_LABEL = 'Next'
END_TOUR_LABEL = 'End Tour'


class PlaybackCursor:
    """
    Forward/back navigation over a snapshot of steps.

    Args:
        steps: Steps to play. Copied into a tuple so later edits to the
            source list do not move under the cursor.
        standalone: True for the standalone player, False for the
            in-editor preview.
    """

    def __init__(self, steps: Iterable[Step], standalone: bool = False):
        self._steps: Tuple[Step, ...] = tuple(steps)
        self.standalone = standalone
        self.step_index = 0
        self.completed = False

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def is_first(self) -> bool:
        return self.step_index == 0

    @property
    def is_last(self) -> bool:
        return self.step_count > 0 and self.step_index == self.step_count - 1

    @property
    def can_go_back(self) -> bool:
        return self.step_index > 0

    @property
    def advance_label(self) -> Optional[str]:
        """Label for the forward action, or None when there is nothing left to do."""
        if not self.is_last:
            return NEXT_LABEL
        return END_TOUR_LABEL if self.standalone else None

    @property
    def position_label(self) -> str:
        if self.step_count == 0:
            return 'No steps'
        return f'Step {self.step_index + 1} of {self.step_count}'

    def current(self) -> Step:
        if self.step_count == 0:
            raise OutOfRangeError("Tour has no steps to play")
        return self._steps[self.step_index]

    def next(self) -> bool:
        """
        Advance one step.

        Returns True if the cursor moved. At the last step the cursor stays
        where it is, `completed` becomes True, and False is returned.
        """
        if self.step_index < self.step_count - 1:
            self.step_index += 1
            return True
        if self.step_count > 0 and not self.completed:
            self.completed = True
            logger.debug("Playback reached the end of the tour (%d steps)", self.step_count)
        return False

    def prev(self) -> bool:
        """Go back one step. Returns True if the cursor moved."""
        if self.step_index > 0:
            self.step_index -= 1
            return True
        return False

    def restart(self) -> None:
        self.step_index = 0
        self.completed = False
