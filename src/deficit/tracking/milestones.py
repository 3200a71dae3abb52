"""Weight-loss achievement milestones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Milestone:
    """A named achievement for a cumulative loss threshold."""

    kg: float
    name: str


@dataclass(frozen=True)
class MilestoneResult:
    """Milestone reached (or the next one to aim for)."""

    milestone: float
    name: str
    reached: bool


# Ascending by threshold
MILESTONES: tuple[Milestone, ...] = (
    Milestone(1, "First Kilo!"),
    Milestone(5, "5kg Club"),
    Milestone(10, "Double Digits"),
    Milestone(15, "Halfway Hero"),
    Milestone(20, "20kg Legend"),
    Milestone(25, "Quarter Century"),
    Milestone(50, "Half Century"),
)


def get_weight_loss_milestone(
    total_lost_kg: float,
    milestones: tuple[Milestone, ...] = MILESTONES,
) -> Optional[MilestoneResult]:
    """Find the highest milestone reached for a cumulative loss.

    If none has been reached yet, the first milestone is returned with
    ``reached=False`` as the next target.
    """
    for milestone in reversed(milestones):
        if total_lost_kg >= milestone.kg:
            return MilestoneResult(milestone=milestone.kg, name=milestone.name, reached=True)

    if milestones and total_lost_kg < milestones[0].kg:
        first = milestones[0]
        return MilestoneResult(milestone=first.kg, name=first.name, reached=False)

    return None
