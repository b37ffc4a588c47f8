"""
Pedagogy Engine domain models.

These are storage-agnostic Pydantic models representing
skill graphs, learner records, tensions and curricula.
"""

from .base import (
    BloomLevel,
    EdgeType,
    Skill,
    SkillEdge,
    SkillGraph,
    LearnerSkillMap,
    LearnerGroup,
)

from .profile import (
    SkillCoverage,
    GroupSkillProfile,
)

from .tension import (
    TensionType,
    Severity,
    ConstraintKind,
    LessonConstraints,
    DependencyOrderingEvidence,
    SkillTimeEstimate,
    ScopeTimeEvidence,
    WeakLearner,
    PrerequisiteGapEvidence,
    BloomMismatchEvidence,
    ConstraintViolationEvidence,
    Tension,
    SeverityCounts,
    TensionReport,
)

from .curriculum import (
    Readiness,
    ScheduledSkill,
    ReviewSkill,
    CurriculumSession,
    CurriculumPlan,
)

__all__ = [
    # Graph and learners
    "BloomLevel",
    "EdgeType",
    "Skill",
    "SkillEdge",
    "SkillGraph",
    "LearnerSkillMap",
    "LearnerGroup",
    # Group profile
    "SkillCoverage",
    "GroupSkillProfile",
    # Tensions
    "TensionType",
    "Severity",
    "ConstraintKind",
    "LessonConstraints",
    "DependencyOrderingEvidence",
    "SkillTimeEstimate",
    "ScopeTimeEvidence",
    "WeakLearner",
    "PrerequisiteGapEvidence",
    "BloomMismatchEvidence",
    "ConstraintViolationEvidence",
    "Tension",
    "SeverityCounts",
    "TensionReport",
    # Curriculum
    "Readiness",
    "ScheduledSkill",
    "ReviewSkill",
    "CurriculumSession",
    "CurriculumPlan",
]
