"""
Prerequisite gap check.

Walks the full prerequisite closure of the targets and flags upstream
skills that a large share of the group has not recorded or holds only
weakly.
"""

from ...models import PrerequisiteGapEvidence, Severity, Tension, WeakLearner
from .base import TensionContext, percentage


class PrerequisiteGapCheck:
    """Prerequisites the group is missing."""

    name = "prerequisite_gap"

    def check(self, context: TensionContext) -> list[Tension]:
        if not context.has_learners:
            return []

        index = context.index
        settings = context.settings
        targets = list(dict.fromkeys(context.target_skills))
        target_set = set(targets)
        group_size = len(context.learners)
        tensions: list[Tension] = []

        for prereq in index.ancestors(targets):
            if prereq in target_set:
                continue

            missing: list[str] = []
            weak: list[WeakLearner] = []
            for learner in context.learners:
                confidence = learner.confidence(prereq)
                if confidence is None:
                    missing.append(learner.name)
                elif confidence < settings.individual_mastery_threshold:
                    weak.append(WeakLearner(name=learner.name, confidence=confidence))

            at_risk = len(missing) + len(weak)
            if at_risk == 0:
                continue

            ratio = at_risk / group_size
            if ratio < settings.gap_warning_ratio:
                continue

            downstream = set(index.descendants(prereq))
            affected = [t for t in targets if t in downstream]
            tensions.append(self._build(
                context, prereq, missing, weak, at_risk, percentage(at_risk, group_size),
                affected, critical=ratio >= settings.gap_critical_ratio,
            ))

        return tensions

    @staticmethod
    def _build(
        context: TensionContext,
        prereq: str,
        missing: list[str],
        weak: list[WeakLearner],
        at_risk: int,
        at_risk_pct: int,
        affected: list[str],
        critical: bool,
    ) -> Tension:
        index = context.index
        label = index.label(prereq)

        detail = ""
        if missing:
            detail += f"Not assessed: {', '.join(missing)}. "
        if weak:
            detail += f"Low confidence: {', '.join(f'{w.name} ({w.confidence:g})' for w in weak)}. "
        detail += f"This prerequisite feeds into: {', '.join(index.label(t) for t in affected)}."

        if critical:
            suggestion = (
                f"Assess \"{label}\" before the session, or add a 10-15 minute prerequisite review "
                f"at the start. Without this foundation, {len(affected)} of your planned topics "
                f"will be built on shaky ground."
            )
        else:
            suggestion = (
                f"Consider a quick (5 min) check-in on \"{label}\" at session start. Pair at-risk "
                f"learners with someone strong in this area."
            )

        return Tension(
            severity=Severity.CRITICAL if critical else Severity.WARNING,
            title=f"{at_risk} of {len(context.learners)} learners lack \"{label}\"",
            detail=detail,
            evidence=PrerequisiteGapEvidence(
                prerequisite=prereq,
                prerequisite_label=label,
                missing=missing,
                weak=weak,
                at_risk=at_risk,
                at_risk_percentage=at_risk_pct,
                affected_targets=affected,
            ),
            suggestion=suggestion,
        )
