"""
Bloom level mismatch check.

Gates synthesis- and evaluation-level targets on the cognitive level the
group has actually demonstrated.
"""

from ...models import BloomLevel, BloomMismatchEvidence, LearnerSkillMap, Severity, Tension
from .base import TensionContext, percentage


class BloomLevelCheck:
    """Targets far above the group's demonstrated Bloom level."""

    name = "bloom_level_mismatch"

    def check(self, context: TensionContext) -> list[Tension]:
        if not context.has_learners:
            return []

        settings = context.settings
        learner_levels = [self._demonstrated_ordinal(context, learner) for learner in context.learners]
        avg_level = sum(learner_levels) / len(learner_levels)
        tensions: list[Tension] = []

        for skill_id in context.target_skills:
            skill = context.index.skill(skill_id)
            if skill is None:
                continue
            target = skill.bloom_level.ordinal
            if target < settings.bloom_gate_ordinal:
                continue

            gap = target - avg_level
            if gap < settings.bloom_gap_warning:
                continue

            group_level = BloomLevel.from_ordinal(int(avg_level + 0.5))
            scaffold_level = BloomLevel.from_ordinal(target - 1)
            below = sum(1 for level in learner_levels if level < target - 1)
            below_pct = percentage(below, len(learner_levels))

            tensions.append(Tension(
                severity=Severity.CRITICAL if gap >= settings.bloom_gap_critical else Severity.WARNING,
                title=(
                    f"\"{skill.label}\" requires {skill.bloom_level.value} level "
                    f"- group is mostly at {group_level.value}"
                ),
                detail=(
                    f"This skill is at Bloom's {skill.bloom_level.value} level ({target + 1}/6), but "
                    f"{below_pct}% of the group has only demonstrated skills up to {group_level.value} "
                    f"level. That's a {round(gap, 1):g}-level gap. Students need to build through intermediate "
                    f"levels before they can meaningfully engage with "
                    f"{skill.bloom_level.value}-level activities."
                ),
                evidence=BloomMismatchEvidence(
                    skill=skill_id,
                    skill_bloom=skill.bloom_level,
                    group_avg_bloom=group_level,
                    bloom_gap=gap,
                    learners_below=below,
                    below_percentage=below_pct,
                ),
                suggestion=(
                    f"Add scaffolding activities at the {scaffold_level.value} level before attempting "
                    f"{skill.bloom_level.value}-level work. For example, have students practice "
                    f"{scaffold_level.value} tasks first, then build to {skill.bloom_level.value} in "
                    f"the second half of the session."
                ),
            ))

        return tensions

    @staticmethod
    def _demonstrated_ordinal(context: TensionContext, learner: LearnerSkillMap) -> int:
        """Highest Bloom ordinal among the learner's confidently held graph skills."""
        threshold = context.settings.demonstrated_bloom_threshold
        highest = 0
        for skill_id, confidence in learner.skills.items():
            if confidence < threshold:
                continue
            skill = context.index.skill(skill_id)
            if skill is not None:
                highest = max(highest, skill.bloom_level.ordinal)
        return highest
