"""
Group-level skill coverage derived from learner records.

Profiles are ephemeral: recomputed for each request and never persisted.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class SkillCoverage(BaseModel):
    """Coverage of one skill across a learner group."""

    have_it: int = Field(default=0, ge=0, description="Learners at or above the individual threshold")
    fraction: float = Field(default=0.0, ge=0.0, le=1.0)
    avg_confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Mean over qualifying learners only")


class GroupSkillProfile(BaseModel):
    """Per-skill coverage statistics for a learner group."""

    total_learners: int = 0
    coverage: Dict[str, SkillCoverage] = Field(default_factory=dict)

    def fraction(self, skill_id: str) -> float:
        """Coverage fraction for a skill; 0 when no learner has it."""
        entry = self.coverage.get(skill_id)
        return entry.fraction if entry else 0.0

    def is_group_mastered(self, skill_id: str, threshold: float) -> bool:
        return self.fraction(skill_id) >= threshold

    def mastered_skills(self, threshold: float) -> List[str]:
        """Skills the group collectively has, in first-seen order."""
        return [
            skill_id for skill_id, entry in self.coverage.items()
            if entry.fraction >= threshold
        ]
