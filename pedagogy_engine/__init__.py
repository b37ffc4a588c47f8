"""
Pedagogy Engine.

Skill-dependency reasoning for lesson planning: detects tensions between
an educator's teaching intent and the evidence in a skill graph and
learner records, and composes multi-session curricula that respect
prerequisite order and group readiness.

Graph and learner loading live behind storage interfaces; the core is a
pure computation over the loaded snapshot.
"""

from .models import (
    BloomLevel,
    Skill,
    SkillEdge,
    SkillGraph,
    LearnerSkillMap,
    LearnerGroup,
    LessonConstraints,
    Tension,
    TensionReport,
    CurriculumPlan,
)

from .config import EngineSettings, get_settings

from .errors import (
    PedagogyEngineError,
    NotFoundError,
    DomainNotFoundError,
    GroupNotFoundError,
    InvalidSkillReferenceError,
    LearnerRecordError,
)

from .storage import (
    SkillGraphStorage,
    LearnerStorage,
    InMemorySkillGraphStorage,
    InMemoryLearnerStorage,
)

from .services import (
    TensionService,
    CurriculumService,
    DomainService,
)

__all__ = [
    # Models
    "BloomLevel",
    "Skill",
    "SkillEdge",
    "SkillGraph",
    "LearnerSkillMap",
    "LearnerGroup",
    "LessonConstraints",
    "Tension",
    "TensionReport",
    "CurriculumPlan",
    # Config
    "EngineSettings",
    "get_settings",
    # Errors
    "PedagogyEngineError",
    "NotFoundError",
    "DomainNotFoundError",
    "GroupNotFoundError",
    "InvalidSkillReferenceError",
    "LearnerRecordError",
    # Storage
    "SkillGraphStorage",
    "LearnerStorage",
    "InMemorySkillGraphStorage",
    "InMemoryLearnerStorage",
    # Services
    "TensionService",
    "CurriculumService",
    "DomainService",
]
