"""
Curriculum models.

A curriculum plan sequences the skills a group still needs across a fixed
number of sessions. The structure is complete enough for any renderer to
reproduce an equivalent document deterministically.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import BloomLevel


class Readiness(str, Enum):
    """Whether a scheduled skill's prerequisites are in place."""
    READY = "ready"
    PARTIAL = "partial"
    BLOCKED = "blocked"


class ScheduledSkill(BaseModel):
    id: str
    label: str
    bloom_level: Optional[BloomLevel] = Field(None, description="None for skills missing from the graph")
    readiness: Readiness


class ReviewSkill(BaseModel):
    id: str
    label: str


class CurriculumSession(BaseModel):
    """One teaching session in a curriculum."""

    index: int = Field(..., ge=1, description="1-based session number")
    bloom_focus: BloomLevel
    skills: List[ScheduledSkill] = Field(default_factory=list)
    review_skills: List[ReviewSkill] = Field(default_factory=list)
    milestone: str = ""

    @property
    def skill_ids(self) -> List[str]:
        return [s.id for s in self.skills]

    @property
    def is_review_only(self) -> bool:
        return not self.skills


class CurriculumPlan(BaseModel):
    """Result of a curriculum composition request."""

    domain: str
    group: str
    number_of_sessions: int
    session_duration_minutes: float
    target_skills: List[str]
    needed_skills: List[str] = Field(default_factory=list, description="Topological order")
    critical_path_length: int = 0
    skills_per_session: int = 1
    min_sessions_recommended: int = 0
    sessions: List[CurriculumSession] = Field(default_factory=list)
    learners_analyzed: int = 0

    @property
    def has_enough_sessions(self) -> bool:
        return self.number_of_sessions >= self.min_sessions_recommended

    @property
    def spare_sessions(self) -> int:
        """Allocated sessions beyond the recommended minimum (never negative)."""
        return max(0, self.number_of_sessions - self.min_sessions_recommended)

    def compressible_sessions(self) -> List[int]:
        """Sessions whose skills are all ready and number at most two."""
        return [
            session.index for session in self.sessions
            if len(session.skills) <= 2
            and all(s.readiness == Readiness.READY for s in session.skills)
        ]
