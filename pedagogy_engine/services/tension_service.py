"""
Tension Service - analyzes teaching intent against evidence.

Checks an educator's planned sequence, duration and constraints against
the skill graph and the group's learner records, and returns ranked
tensions with a narrative summary.
"""

import logging
from typing import List, Optional

from ..config import EngineSettings, get_settings
from ..core import TensionContext, TensionDetector
from ..models import LessonConstraints, SeverityCounts, Tension, TensionReport
from ..storage import LearnerStorage, SkillGraphStorage
from .inputs import load_graph, load_group_learners, validate_targets


logger = logging.getLogger(__name__)

NO_TENSIONS_SUMMARY = (
    "No pedagogical tensions detected. The plan aligns well with the skill graph, "
    "learner profiles, and constraints."
)


class TensionService:
    """
    Entry point for tension detection.

    Stateless between calls: every request loads its own snapshot and
    retains nothing.
    """

    def __init__(
        self,
        graph_storage: SkillGraphStorage,
        learner_storage: LearnerStorage,
        settings: Optional[EngineSettings] = None,
        detector: Optional[TensionDetector] = None,
    ):
        self._graphs = graph_storage
        self._learners = learner_storage
        self._settings = settings or get_settings()
        self._detector = detector or TensionDetector()

    def detect_tensions(
        self,
        domain: str,
        group: str,
        target_skills: List[str],
        duration_minutes: Optional[float] = None,
        constraints: Optional[LessonConstraints] = None,
    ) -> TensionReport:
        """
        Detect tensions for a planned lesson.

        Args:
            domain: Skill domain slug
            group: Learner group name
            target_skills: Skills to cover, in intended teaching order
            duration_minutes: Session length; enables the scope/time check
            constraints: Connectivity, setting and tools; enables constraint checks

        Raises:
            ValueError: Non-positive duration
            DomainNotFoundError: Unknown domain
            GroupNotFoundError: Unknown group
            InvalidSkillReferenceError: Target ids missing from the graph
        """
        if duration_minutes is not None and duration_minutes <= 0:
            raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")

        graph = load_graph(self._graphs, domain)
        _, learners = load_group_learners(self._learners, group)
        targets = validate_targets(graph, target_skills)

        context = TensionContext(
            graph=graph,
            target_skills=tuple(targets),
            learners=tuple(learners),
            duration_minutes=duration_minutes,
            constraints=constraints,
            settings=self._settings,
        )
        result = self._detector.detect(context)
        counts = SeverityCounts.of(result.tensions)

        report = TensionReport(
            domain=domain,
            group=group,
            target_skills=targets,
            duration_minutes=duration_minutes,
            tensions=result.tensions,
            counts=counts,
            summary=build_summary(result.tensions, counts),
            recommendation=build_recommendation(counts),
            learners_analyzed=len(learners),
            skipped_checks=result.failed_checks,
        )
        logger.info(
            f"Tension analysis for {domain}/{group}: {len(result.tensions)} tension(s), "
            f"{counts.critical} critical"
        )
        return report


def build_summary(tensions: List[Tension], counts: SeverityCounts) -> str:
    """One-paragraph narrative of the tension counts."""
    if not tensions:
        return NO_TENSIONS_SUMMARY

    plural = "" if len(tensions) == 1 else "s"
    warning_plural = "" if counts.warning == 1 else "s"
    follow_up = (
        "Critical issues should be addressed before proceeding." if counts.critical > 0
        else "Review the warnings and consider the suggestions."
    )
    return (
        f"Found {len(tensions)} tension{plural}: {counts.critical} critical, "
        f"{counts.warning} warning{warning_plural}, {counts.info} info. {follow_up}"
    )


def build_recommendation(counts: SeverityCounts) -> str:
    if counts.critical > 0:
        return (
            "I'd recommend addressing the critical tensions before building this lesson plan. "
            "I can do what you're asking, but the data suggests these issues will significantly "
            "impact the session's success."
        )
    if counts.warning > 0:
        return (
            "The plan is workable, but I want to flag some concerns. Here's what I'm seeing in "
            "the data - you decide what to adjust."
        )
    return (
        "The plan looks solid. The skill graph, learner profiles, and constraints all align "
        "well with your intent."
    )
