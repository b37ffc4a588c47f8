"""
Scope/time mismatch check.

Estimates teaching minutes per target skill from its Bloom level and the
group's readiness for it, adds fixed session overhead, and compares the
total with the time available.
"""

from ...config import EngineSettings
from ...models import (
    BloomLevel,
    ScopeTimeEvidence,
    Severity,
    SkillTimeEstimate,
    Tension,
)
from .base import TensionContext, percentage


def estimate_minutes(level: BloomLevel, readiness: float, settings: EngineSettings) -> float:
    """base[level] x (1 + (1 - readiness) x factor)"""
    multiplier = 1 + (1 - readiness) * settings.readiness_time_factor
    return settings.base_minutes(level) * multiplier


class ScopeTimeCheck:
    """Too many skills for the session length."""

    name = "scope_time_mismatch"

    def check(self, context: TensionContext) -> list[Tension]:
        available = context.duration_minutes
        if not available:
            return []

        settings = context.settings
        estimates: list[SkillTimeEstimate] = []

        for skill_id in context.target_skills:
            skill = context.index.skill(skill_id)
            if skill is None:
                continue
            readiness = self._average_readiness(context, skill_id)
            estimates.append(SkillTimeEstimate(
                skill=skill_id,
                label=skill.label,
                bloom_level=skill.bloom_level,
                minutes=estimate_minutes(skill.bloom_level, readiness, settings),
            ))

        overhead = settings.session_overhead_minutes
        total = sum(e.minutes for e in estimates) + overhead
        if total <= available:
            return []

        over_by = total - available
        over_pct = percentage(over_by, available)
        severity = (
            Severity.CRITICAL if over_by > available * settings.critical_overage_ratio
            else Severity.WARNING
        )
        cuts = self._suggest_cuts(estimates, over_by)
        cut_text = ", ".join(
            f"\"{e.label}\" (~{e.minutes:.0f} min, {e.bloom_level.value} level)" for e in cuts
        )

        return [Tension(
            severity=severity,
            title=(
                f"{len(context.target_skills)} skills in {available:g} minutes "
                f"is {over_pct}% over capacity"
            ),
            detail=(
                f"Estimated time needed: ~{total:.0f} minutes (including {overhead:g} min overhead). "
                f"You have {available:g} minutes. This estimate accounts for Bloom's level "
                f"complexity and the group's current readiness."
            ),
            evidence=ScopeTimeEvidence(
                estimated_minutes=total,
                available_minutes=available,
                over_by_minutes=over_by,
                over_percentage=over_pct,
                overhead_minutes=overhead,
                skill_breakdown=estimates,
                suggested_cuts=[e.skill for e in cuts],
            ),
            suggestion=(
                f"Consider deferring: {cut_text}. This would bring the session within your time "
                f"budget. Alternatively, convert some skills to \"quick reference\" handouts rather "
                f"than teaching them live."
            ),
        )]

    @staticmethod
    def _average_readiness(context: TensionContext, skill_id: str) -> float:
        """Mean learner confidence for a skill, counting unrecorded as 0."""
        if not context.has_learners:
            return 0.0
        total = sum(learner.confidence(skill_id) or 0.0 for learner in context.learners)
        return total / len(context.learners)

    @staticmethod
    def _suggest_cuts(estimates: list[SkillTimeEstimate], over_by: float) -> list[SkillTimeEstimate]:
        """Most advanced skills first until the overage is covered."""
        by_level = sorted(estimates, key=lambda e: e.bloom_level.ordinal, reverse=True)
        cuts: list[SkillTimeEstimate] = []
        remaining = over_by
        for estimate in by_level:
            if remaining <= 0:
                break
            cuts.append(estimate)
            remaining -= estimate.minutes
        return cuts
