"""
Curriculum Service - composes multi-session curricula.

Pipeline per request:
1. Aggregate the group's learner records into a coverage profile
2. Resolve the teaching frontier for the targets
3. Order, measure and distribute the frontier across sessions
"""

import logging
from typing import List, Optional

from ..config import EngineSettings, get_settings
from ..core import (
    DependencyScheduler,
    GroupProfileAggregator,
    PrerequisiteIndex,
    TeachingFrontierResolver,
)
from ..models import CurriculumPlan, SkillGraph
from ..storage import LearnerStorage, SkillGraphStorage
from .inputs import load_graph, load_group_learners, validate_targets


logger = logging.getLogger(__name__)


class CurriculumService:
    """Entry point for curriculum composition."""

    def __init__(
        self,
        graph_storage: SkillGraphStorage,
        learner_storage: LearnerStorage,
        settings: Optional[EngineSettings] = None,
    ):
        self._graphs = graph_storage
        self._learners = learner_storage
        self._settings = settings or get_settings()

    def compose_curriculum(
        self,
        domain: str,
        group: str,
        number_of_sessions: int,
        session_duration_minutes: float,
        target_skills: Optional[List[str]] = None,
    ) -> CurriculumPlan:
        """
        Compose a curriculum for a group.

        Args:
            domain: Skill domain slug
            group: Learner group name
            number_of_sessions: Sessions to fill (at least 1)
            session_duration_minutes: Length of each session
            target_skills: Skills to reach; defaults to every skill at
                analysis level or above

        Raises:
            ValueError: Non-positive session count or duration
            DomainNotFoundError: Unknown domain
            GroupNotFoundError: Unknown group
            InvalidSkillReferenceError: Target ids missing from the graph
        """
        if number_of_sessions < 1:
            raise ValueError(f"number_of_sessions must be at least 1, got {number_of_sessions}")
        if session_duration_minutes <= 0:
            raise ValueError(f"session_duration_minutes must be positive, got {session_duration_minutes}")

        graph = load_graph(self._graphs, domain)
        _, learners = load_group_learners(self._learners, group)
        if target_skills:
            targets = validate_targets(graph, target_skills)
        else:
            targets = self.default_targets(graph)

        index = PrerequisiteIndex(graph)
        profile = GroupProfileAggregator(self._settings).aggregate(learners)
        needed = TeachingFrontierResolver(index, self._settings).resolve(targets, profile)
        schedule = DependencyScheduler(index, self._settings).schedule(
            needed, profile, number_of_sessions, session_duration_minutes
        )

        plan = CurriculumPlan(
            domain=domain,
            group=group,
            number_of_sessions=number_of_sessions,
            session_duration_minutes=session_duration_minutes,
            target_skills=targets,
            needed_skills=schedule.order,
            critical_path_length=schedule.critical_path_length,
            skills_per_session=schedule.skills_per_session,
            min_sessions_recommended=schedule.min_sessions_recommended,
            sessions=schedule.sessions,
            learners_analyzed=len(learners),
        )

        if not plan.has_enough_sessions:
            logger.warning(
                f"{domain}/{group}: {number_of_sessions} session(s) allocated, "
                f"{plan.min_sessions_recommended} recommended by the critical path"
            )
        logger.info(
            f"Composed curriculum for {domain}/{group}: {len(needed)} skills over "
            f"{number_of_sessions} session(s)"
        )
        return plan

    def default_targets(self, graph: SkillGraph) -> List[str]:
        """Graph skills at or above the configured Bloom ordinal, in graph order."""
        minimum = self._settings.default_target_min_ordinal
        return list(dict.fromkeys(
            skill.id for skill in graph.skills if skill.bloom_level.ordinal >= minimum
        ))
