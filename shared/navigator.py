# FILE: shared/navigator.py

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class StepPosition:
    index: int
    is_first: bool
    is_last: bool
    previous: Optional[int]
    next: Optional[int]
    total_count: int

    @property
    def ordinal(self) -> int:
        """1-based position, for display."""
        return self.index + 1


def locate_step(step_numbers: Sequence[int], current_step: int) -> Optional[StepPosition]:
    """
    Finds current_step in the group's step numbers and its neighbours.

    Neighbours come from the sorted sequence, not from current_step +/- 1,
    because step numbers can have gaps. Returns None when current_step is
    not part of the group (e.g. it was deleted after the button was drawn).
    """
    ordered = sorted(set(step_numbers))
    try:
        index = ordered.index(current_step)
    except ValueError:
        return None

    is_first = index == 0
    is_last = index == len(ordered) - 1
    return StepPosition(
        index=index,
        is_first=is_first,
        is_last=is_last,
        previous=None if is_first else ordered[index - 1],
        next=None if is_last else ordered[index + 1],
        total_count=len(ordered),
    )
