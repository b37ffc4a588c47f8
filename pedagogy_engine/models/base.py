"""
Base domain models for the skill graph and learner records.

These models are storage-agnostic. Graphs and learner records are
loaded by collaborators and handed to the engine already parsed.
"""

from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr


Confidence = Annotated[float, Field(ge=0.0, le=1.0)]


class BloomLevel(str, Enum):
    """Bloom's taxonomy levels, in ascending cognitive complexity."""
    KNOWLEDGE = "knowledge"
    COMPREHENSION = "comprehension"
    APPLICATION = "application"
    ANALYSIS = "analysis"
    SYNTHESIS = "synthesis"
    EVALUATION = "evaluation"

    @property
    def ordinal(self) -> int:
        """0-based position on the six-level scale."""
        return list(BloomLevel).index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "BloomLevel":
        """Level at a position, clamped to the scale."""
        levels = list(cls)
        return levels[max(0, min(ordinal, len(levels) - 1))]


class EdgeType(str, Enum):
    """Relationship types between skills."""
    PREREQUISITE = "prerequisite"
    COREQUISITE = "corequisite"
    RECOMMENDED = "recommended"


class Skill(BaseModel):
    """A teachable skill in a subject domain."""

    id: str = Field(..., description="Stable kebab-case identifier")
    label: str
    bloom_level: BloomLevel
    assessable: bool = True

    model_config = {"frozen": True}


class SkillEdge(BaseModel):
    """
    A directed relationship between two skills.

    For prerequisite edges, ``source`` should be mastered before ``target``.
    """

    source: str = Field(..., description="Source skill ID")
    target: str = Field(..., description="Target skill ID")
    type: EdgeType = EdgeType.PREREQUISITE
    confidence: float = Field(default=0.85, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    @property
    def is_prerequisite(self) -> bool:
        return self.type == EdgeType.PREREQUISITE


class SkillGraph(BaseModel):
    """
    Skills and edges for one subject domain.

    Read-only for the lifetime of a request. Edges may reference unknown
    skills or form cycles in malformed input.
    """

    domain: str
    skills: List[Skill] = Field(default_factory=list)
    edges: List[SkillEdge] = Field(default_factory=list)

    model_config = {"frozen": True}

    _skills_by_id: Dict[str, Skill] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        # First definition wins for duplicate ids
        for skill in self.skills:
            self._skills_by_id.setdefault(skill.id, skill)

    @property
    def skill_ids(self) -> List[str]:
        return list(self._skills_by_id)

    def get_skill(self, skill_id: str) -> Optional[Skill]:
        return self._skills_by_id.get(skill_id)

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self._skills_by_id


class LearnerSkillMap(BaseModel):
    """
    Per-learner skill confidences.

    Assessed and inferred confidences are merged by taking the maximum
    per skill (see ``from_sources``).
    """

    learner_id: str
    name: str
    skills: Dict[str, Confidence] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def from_sources(
        cls,
        learner_id: str,
        name: str,
        assessed: Optional[Dict[str, float]] = None,
        inferred: Optional[Dict[str, float]] = None,
    ) -> "LearnerSkillMap":
        """Build a map from assessed and inferred confidences."""
        merged: Dict[str, float] = {}
        for source in (assessed or {}, inferred or {}):
            for skill_id, confidence in source.items():
                merged[skill_id] = max(merged.get(skill_id, 0.0), confidence)
        return cls(learner_id=learner_id, name=name, skills=merged)

    def confidence(self, skill_id: str) -> Optional[float]:
        """Recorded confidence, or None if the skill was never recorded."""
        return self.skills.get(skill_id)


class LearnerGroup(BaseModel):
    """A named group of learners studying one domain."""

    name: str
    domain: Optional[str] = None
    member_ids: List[str] = Field(default_factory=list)
