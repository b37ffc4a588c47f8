"""
Dependency ordering check.

Flags skills sequenced before one of their own prerequisites by comparing
positions in the intended sequence; no traversal needed.
"""

from ...models import DependencyOrderingEvidence, Severity, Tension
from .base import TensionContext


class DependencyOrderingCheck:
    """Skills taught before their prerequisites."""

    name = "dependency_ordering"

    def check(self, context: TensionContext) -> list[Tension]:
        sequence = context.target_skills
        positions: dict[str, int] = {}
        for position, skill_id in enumerate(sequence):
            positions.setdefault(skill_id, position)

        index = context.index
        tensions: list[Tension] = []

        for position, skill_id in enumerate(sequence):
            for prereq in index.prerequisites_of(skill_id):
                prereq_position = positions.get(prereq, -1)
                if prereq_position <= position:
                    continue

                skill_label = index.label(skill_id)
                prereq_label = index.label(prereq)
                tensions.append(Tension(
                    severity=Severity.CRITICAL,
                    title=f"\"{skill_label}\" taught before its prerequisite",
                    detail=(
                        f"You plan to cover \"{skill_label}\" before \"{prereq_label}\", but the "
                        f"dependency graph shows that {prereq} is a prerequisite for {skill_id}. "
                        f"Students will encounter {skill_id} without the foundation that {prereq} provides."
                    ),
                    evidence=DependencyOrderingEvidence(
                        skill=skill_id,
                        skill_label=skill_label,
                        prerequisite=prereq,
                        prerequisite_label=prereq_label,
                        skill_position=position + 1,
                        prerequisite_position=prereq_position + 1,
                    ),
                    suggestion=(
                        f"Move \"{prereq_label}\" before \"{skill_label}\" in your sequence, or add a "
                        f"brief review of {prereq} concepts before introducing {skill_id}."
                    ),
                ))

        return tensions
