"""
Shared context and interface for tension checks.

Every check is an independent, pure function of a TensionContext. New
checks are added by implementing TensionCheck and appending them to the
detector's check list.
"""

from dataclasses import dataclass, field
from typing import Protocol

from ...config import EngineSettings, get_settings
from ...models import LearnerSkillMap, LessonConstraints, SkillGraph, Tension
from ..graph_index import PrerequisiteIndex


def percentage(part: float, whole: float) -> int:
    """Whole-number percentage, rounded half up; 0 for an empty whole."""
    if whole <= 0:
        return 0
    return int(part / whole * 100 + 0.5)


@dataclass(frozen=True)
class TensionContext:
    """Immutable inputs for one tension analysis."""
    graph: SkillGraph
    target_skills: tuple[str, ...]
    learners: tuple[LearnerSkillMap, ...] = ()
    duration_minutes: float | None = None
    constraints: LessonConstraints | None = None
    settings: EngineSettings = field(default_factory=get_settings)
    index: PrerequisiteIndex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", PrerequisiteIndex(self.graph))

    @property
    def has_learners(self) -> bool:
        return len(self.learners) > 0


class TensionCheck(Protocol):
    """Protocol for tension checks."""

    name: str

    def check(self, context: TensionContext) -> list[Tension]: ...
