"""
Dependency-aware session scheduling.

Implements:
- Topological ordering (Kahn's algorithm, Bloom-ordered ready queue)
- Critical path length (memoized DFS with an on-stack cycle guard)
- Greedy distribution of ordered skills across sessions
- Readiness tagging against group mastery and skills taught so far

State of a skill across one pass: needed and unscheduled, placed in a
session by topological order, then taught, which feeds readiness checks
in every later session.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..config import EngineSettings, get_settings
from ..models import (
    BloomLevel,
    CurriculumSession,
    GroupSkillProfile,
    Readiness,
    ReviewSkill,
    ScheduledSkill,
)
from .graph_index import PrerequisiteIndex


logger = logging.getLogger(__name__)

REVIEW_MILESTONE = "Review and consolidate skills from previous sessions"


@dataclass
class SessionDraft:
    """Skills assigned to a session before readiness tagging."""
    skills: list[str]
    bloom_focus: BloomLevel
    review_skills: list[str] = field(default_factory=list)


@dataclass
class Schedule:
    """Full output of one scheduling pass."""
    order: list[str]
    critical_path_length: int
    skills_per_session: int
    min_sessions_recommended: int
    sessions: list[CurriculumSession]


class DependencyScheduler:
    """
    Orders needed skills and distributes them across sessions.

    All methods are pure with respect to the index and profile they are
    given; the taught-so-far set is threaded through explicitly.
    """

    def __init__(
        self,
        index: PrerequisiteIndex,
        settings: EngineSettings | None = None
    ) -> None:
        self._index = index
        self._settings = settings or get_settings()

    # ─────────────────────────────────────────────────────────────────────────
    # Ordering
    # ─────────────────────────────────────────────────────────────────────────

    def topological_sort(self, skill_ids: Iterable[str]) -> list[str]:
        """
        Kahn's algorithm restricted to the given subset.

        The ready queue is seeded with zero in-degree skills sorted by
        Bloom ordinal and fully re-sorted (stable) whenever a skill becomes
        ready, so lower-level skills are always taken first. Skills caught
        in a cycle never become ready and are left out.
        """
        ids = list(dict.fromkeys(skill_ids))
        subset = set(ids)
        in_degree = {skill_id: 0 for skill_id in ids}
        adjacency: dict[str, list[str]] = {skill_id: [] for skill_id in ids}

        for skill_id in ids:
            for dependent in self._index.dependents_of(skill_id):
                if dependent in subset:
                    adjacency[skill_id].append(dependent)
                    in_degree[dependent] += 1

        ordinal = self._index.bloom_ordinal
        ready = sorted((s for s in ids if in_degree[s] == 0), key=ordinal)
        order: list[str] = []

        while ready:
            current = ready.pop(0)
            order.append(current)
            for nxt in adjacency[current]:
                in_degree[nxt] -= 1
                if in_degree[nxt] == 0:
                    ready.append(nxt)
                    ready.sort(key=ordinal)

        if len(order) < len(ids):
            placed = set(order)
            stuck = [s for s in ids if s not in placed]
            logger.warning(f"Topological sort left out {len(stuck)} skill(s) in a cycle: {stuck}")

        return order

    def critical_path_length(self, skill_ids: Iterable[str]) -> int:
        """
        Longest downstream chain (in skills) within the subset.

        Depth-first with an explicit stack and memoized results. A skill met
        again while still on the current DFS stack counts as length 1
        instead of being descended into. This stops infinite loops on
        cyclic input; it does not make the result meaningful there.
        """
        ids = list(dict.fromkeys(skill_ids))
        subset = set(ids)
        memo: dict[str, int] = {}

        def dependents(skill_id: str):
            return iter([d for d in self._index.dependents_of(skill_id) if d in subset])

        def longest(root: str) -> int:
            if root in memo:
                return memo[root]

            visiting = {root}
            best = {root: 0}
            stack = [(root, dependents(root))]

            while stack:
                node, children = stack[-1]
                child = next(children, None)

                if child is None:
                    stack.pop()
                    visiting.discard(node)
                    memo[node] = 1 + best.pop(node)
                    if stack:
                        parent = stack[-1][0]
                        best[parent] = max(best[parent], memo[node])
                    continue

                if child in memo:
                    length = memo[child]
                elif child in visiting:
                    logger.debug(f"Cycle guard hit at {child}")
                    length = 1
                else:
                    visiting.add(child)
                    best[child] = 0
                    stack.append((child, dependents(child)))
                    continue
                best[node] = max(best[node], length)

            return memo[root]

        return max((longest(skill_id) for skill_id in ids), default=0)

    # ─────────────────────────────────────────────────────────────────────────
    # Pacing
    # ─────────────────────────────────────────────────────────────────────────

    def skills_per_session(self, session_duration_minutes: float) -> int:
        """Average skills per session: effective minutes over minutes per skill, at least 1."""
        effective = session_duration_minutes * self._settings.effective_session_ratio
        return max(1, math.floor(effective / self._settings.minutes_per_skill))

    def min_sessions(self, critical_path_length: int, session_duration_minutes: float) -> int:
        return math.ceil(critical_path_length / self.skills_per_session(session_duration_minutes))

    # ─────────────────────────────────────────────────────────────────────────
    # Distribution
    # ─────────────────────────────────────────────────────────────────────────

    def distribute(
        self,
        ordered_skills: Sequence[str],
        number_of_sessions: int,
        session_duration_minutes: float
    ) -> list[SessionDraft]:
        """
        Fill sessions greedily in order.

        The last session absorbs every remaining skill. Each later session
        reviews the first skills of the one before it. Sessions left over
        once all skills are placed become review-only sessions.
        """
        per_session = self.skills_per_session(session_duration_minutes)
        max_review = self._settings.max_review_skills
        drafts: list[SessionDraft] = []
        position = 0

        for number in range(number_of_sessions):
            if position >= len(ordered_skills):
                break
            is_last = number == number_of_sessions - 1
            take = len(ordered_skills) - position if is_last else per_session
            skills = list(ordered_skills[position:position + take])
            position += len(skills)

            review = list(drafts[-1].skills[:max_review]) if drafts else []
            drafts.append(SessionDraft(
                skills=skills,
                bloom_focus=self._bloom_focus(skills),
                review_skills=review,
            ))

        while len(drafts) < number_of_sessions:
            previous = drafts[-1].skills if drafts else []
            drafts.append(SessionDraft(
                skills=[],
                bloom_focus=BloomLevel.APPLICATION,
                review_skills=list(previous[:self._settings.padding_review_skills]),
            ))

        return drafts

    def _bloom_focus(self, skill_ids: Sequence[str]) -> BloomLevel:
        """Most frequent Bloom level; ties go to the level seen first."""
        if not skill_ids:
            return BloomLevel.APPLICATION
        counts = Counter(
            self._index.bloom_level(skill_id) or BloomLevel.KNOWLEDGE
            for skill_id in skill_ids
        )
        return counts.most_common(1)[0][0]

    # ─────────────────────────────────────────────────────────────────────────
    # Readiness
    # ─────────────────────────────────────────────────────────────────────────

    def classify_readiness(
        self,
        skill_id: str,
        profile: GroupSkillProfile,
        taught_so_far: frozenset[str]
    ) -> Readiness:
        """
        Tag a skill by how many of its prerequisites are satisfied.

        A prerequisite is satisfied when the group has mastered it or it
        has already been taught in an earlier session.
        """
        prerequisites = self._index.prerequisites_of(skill_id)
        if not prerequisites:
            return Readiness.READY

        threshold = self._settings.group_mastery_threshold
        met = sum(
            1 for prereq in prerequisites
            if profile.is_group_mastered(prereq, threshold) or prereq in taught_so_far
        )

        if met == len(prerequisites):
            return Readiness.READY
        if met > 0:
            return Readiness.PARTIAL
        return Readiness.BLOCKED

    def build_sessions(
        self,
        drafts: Sequence[SessionDraft],
        profile: GroupSkillProfile
    ) -> list[CurriculumSession]:
        """Tag drafts with readiness, growing the taught set session by session."""
        taught = frozenset(profile.mastered_skills(self._settings.group_mastery_threshold))
        sessions: list[CurriculumSession] = []

        for number, draft in enumerate(drafts, start=1):
            sessions.append(self._build_session(number, draft, profile, taught))
            taught = taught | frozenset(draft.skills)

        return sessions

    def _build_session(
        self,
        number: int,
        draft: SessionDraft,
        profile: GroupSkillProfile,
        taught_so_far: frozenset[str]
    ) -> CurriculumSession:
        skills = [
            ScheduledSkill(
                id=skill_id,
                label=self._index.label(skill_id),
                bloom_level=self._index.bloom_level(skill_id),
                readiness=self.classify_readiness(skill_id, profile, taught_so_far),
            )
            for skill_id in draft.skills
        ]
        review = [
            ReviewSkill(id=skill_id, label=self._index.label(skill_id))
            for skill_id in draft.review_skills
        ]
        milestone = f"Students can {skills[-1].label.lower()}" if skills else REVIEW_MILESTONE

        return CurriculumSession(
            index=number,
            bloom_focus=draft.bloom_focus,
            skills=skills,
            review_skills=review,
            milestone=milestone,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Full pass
    # ─────────────────────────────────────────────────────────────────────────

    def schedule(
        self,
        needed_skills: Sequence[str],
        profile: GroupSkillProfile,
        number_of_sessions: int,
        session_duration_minutes: float
    ) -> Schedule:
        """Order, measure and distribute the needed skills."""
        order = self.topological_sort(needed_skills)
        critical_path = self.critical_path_length(needed_skills)
        drafts = self.distribute(order, number_of_sessions, session_duration_minutes)

        return Schedule(
            order=order,
            critical_path_length=critical_path,
            skills_per_session=self.skills_per_session(session_duration_minutes),
            min_sessions_recommended=self.min_sessions(critical_path, session_duration_minutes),
            sessions=self.build_sessions(drafts, profile),
        )
