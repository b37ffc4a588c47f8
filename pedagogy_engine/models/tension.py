"""
Tension models.

A tension is a detected conflict between an educator's stated intent and
evidence from the skill graph, learner records, or lesson constraints.
Each category carries its own typed evidence payload; the ``type`` tag on
the payload discriminates between them.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field

from .base import BloomLevel


class TensionType(str, Enum):
    """Categories of pedagogical tension."""
    DEPENDENCY_ORDERING = "dependency_ordering"
    SCOPE_TIME_MISMATCH = "scope_time_mismatch"
    PREREQUISITE_GAP = "prerequisite_gap"
    BLOOM_LEVEL_MISMATCH = "bloom_level_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"


class Severity(str, Enum):
    """Tension severity, most urgent first."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class ConstraintKind(str, Enum):
    """Lesson constraint a violation was raised against."""
    CONNECTIVITY = "connectivity"
    TOOLS = "tools"
    SUBSCRIPTIONS = "subscriptions"
    SETTING = "setting"


class LessonConstraints(BaseModel):
    """Free-form constraints gathered from the educator."""

    connectivity: Optional[str] = Field(None, description="e.g. 'reliable wifi', 'no internet'")
    setting: Optional[str] = Field(None, description="e.g. 'computer lab', 'outdoor park'")
    tools: Optional[List[str]] = Field(None, description="Available tools/software")


# =========================================================
# EVIDENCE PAYLOADS
# =========================================================

class DependencyOrderingEvidence(BaseModel):
    type: Literal["dependency_ordering"] = "dependency_ordering"
    skill: str
    skill_label: str
    prerequisite: str
    prerequisite_label: str
    skill_position: int = Field(..., description="1-based position in the sequence")
    prerequisite_position: int = Field(..., description="1-based position in the sequence")


class SkillTimeEstimate(BaseModel):
    skill: str
    label: str
    bloom_level: BloomLevel
    minutes: float


class ScopeTimeEvidence(BaseModel):
    type: Literal["scope_time_mismatch"] = "scope_time_mismatch"
    estimated_minutes: float
    available_minutes: float
    over_by_minutes: float
    over_percentage: int
    overhead_minutes: float
    skill_breakdown: List[SkillTimeEstimate] = Field(default_factory=list)
    suggested_cuts: List[str] = Field(default_factory=list, description="Skill IDs, highest Bloom level first")


class WeakLearner(BaseModel):
    name: str
    confidence: float


class PrerequisiteGapEvidence(BaseModel):
    type: Literal["prerequisite_gap"] = "prerequisite_gap"
    prerequisite: str
    prerequisite_label: str
    missing: List[str] = Field(default_factory=list, description="Learners with no recorded confidence")
    weak: List[WeakLearner] = Field(default_factory=list)
    at_risk: int
    at_risk_percentage: int
    affected_targets: List[str] = Field(default_factory=list)


class BloomMismatchEvidence(BaseModel):
    type: Literal["bloom_level_mismatch"] = "bloom_level_mismatch"
    skill: str
    skill_bloom: BloomLevel
    group_avg_bloom: BloomLevel
    bloom_gap: float
    learners_below: int
    below_percentage: int


class ConstraintViolationEvidence(BaseModel):
    type: Literal["constraint_violation"] = "constraint_violation"
    constraint: ConstraintKind
    skills: List[str] = Field(default_factory=list)
    constraint_value: Optional[str] = None
    available_tools: List[str] = Field(default_factory=list)


TensionEvidence = Annotated[
    Union[
        DependencyOrderingEvidence,
        ScopeTimeEvidence,
        PrerequisiteGapEvidence,
        BloomMismatchEvidence,
        ConstraintViolationEvidence,
    ],
    Field(discriminator="type"),
]


class Tension(BaseModel):
    """A single detected tension with its evidence and a suggestion."""

    severity: Severity
    title: str
    detail: str
    evidence: TensionEvidence
    suggestion: str

    @computed_field
    @property
    def type(self) -> TensionType:
        return TensionType(self.evidence.type)


class SeverityCounts(BaseModel):
    critical: int = 0
    warning: int = 0
    info: int = 0

    @classmethod
    def of(cls, tensions: List[Tension]) -> "SeverityCounts":
        return cls(
            critical=sum(1 for t in tensions if t.severity == Severity.CRITICAL),
            warning=sum(1 for t in tensions if t.severity == Severity.WARNING),
            info=sum(1 for t in tensions if t.severity == Severity.INFO),
        )


class TensionReport(BaseModel):
    """Result of a tension analysis request."""

    domain: str
    group: str
    target_skills: List[str]
    duration_minutes: Optional[float] = None
    tensions: List[Tension] = Field(default_factory=list)
    counts: SeverityCounts = Field(default_factory=SeverityCounts)
    summary: str = ""
    recommendation: str = ""
    learners_analyzed: int = 0
    skipped_checks: List[str] = Field(default_factory=list, description="Checks that failed and were excluded")

    def of_type(self, tension_type: TensionType) -> List[Tension]:
        return [t for t in self.tensions if t.type == tension_type]
