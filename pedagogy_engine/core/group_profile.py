"""
Group profile aggregation.

Turns per-learner skill confidences into group-level coverage: how many
learners have each skill, what fraction of the group that is, and how
confident the qualifying learners are.
"""

import logging
from typing import Sequence

from ..config import EngineSettings, get_settings
from ..models import GroupSkillProfile, LearnerSkillMap, SkillCoverage


logger = logging.getLogger(__name__)


class GroupProfileAggregator:
    """
    Aggregates learner skill maps into a GroupSkillProfile.

    Pure and recomputed on every call.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings or get_settings()

    def aggregate(self, learners: Sequence[LearnerSkillMap]) -> GroupSkillProfile:
        """
        Compute coverage for every skill seen across any learner.

        A learner "has" a skill at or above the individual mastery
        threshold. The average confidence is taken over qualifying learners
        only. With no learners every fraction is 0.
        """
        threshold = self._settings.individual_mastery_threshold
        total = len(learners)
        have_it: dict[str, int] = {}
        confidence_sum: dict[str, float] = {}

        for learner in learners:
            for skill_id, confidence in learner.skills.items():
                have_it.setdefault(skill_id, 0)
                confidence_sum.setdefault(skill_id, 0.0)
                if confidence >= threshold:
                    have_it[skill_id] += 1
                    confidence_sum[skill_id] += confidence

        coverage: dict[str, SkillCoverage] = {}
        for skill_id, count in have_it.items():
            coverage[skill_id] = SkillCoverage(
                have_it=count,
                fraction=count / total if total > 0 else 0.0,
                avg_confidence=confidence_sum[skill_id] / count if count > 0 else 0.0,
            )

        logger.debug(f"Aggregated {len(coverage)} skills across {total} learners")
        return GroupSkillProfile(total_learners=total, coverage=coverage)
