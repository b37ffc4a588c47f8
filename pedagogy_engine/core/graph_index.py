"""
Prerequisite index over a skill graph.

Implements:
- Direct prerequisite/dependent lookup (prerequisite edges only)
- Backward and forward breadth-first traversal
- Cycle detection for graph validation

Every traversal returns ids in discovery order so results are
deterministic for identical input.
"""

import logging
from collections import deque
from typing import Iterable

from ..models import BloomLevel, Skill, SkillGraph


logger = logging.getLogger(__name__)


class PrerequisiteIndex:
    """
    Adjacency lists built once from a SkillGraph.

    Only prerequisite edges participate. Edges may name skills that are
    not in the graph; they are indexed anyway so traversals degrade
    instead of failing.
    """

    def __init__(self, graph: SkillGraph) -> None:
        self._graph = graph
        self._prerequisites: dict[str, list[str]] = {}
        self._dependents: dict[str, list[str]] = {}

        for edge in graph.edges:
            if not edge.is_prerequisite:
                continue
            prereqs = self._prerequisites.setdefault(edge.target, [])
            if edge.source not in prereqs:
                prereqs.append(edge.source)
            dependents = self._dependents.setdefault(edge.source, [])
            if edge.target not in dependents:
                dependents.append(edge.target)

    @property
    def graph(self) -> SkillGraph:
        return self._graph

    # ─────────────────────────────────────────────────────────────────────────
    # Skill lookup
    # ─────────────────────────────────────────────────────────────────────────

    def skill(self, skill_id: str) -> Skill | None:
        return self._graph.get_skill(skill_id)

    def label(self, skill_id: str) -> str:
        """Skill label, falling back to the id for unknown skills."""
        skill = self._graph.get_skill(skill_id)
        return skill.label if skill else skill_id

    def bloom_level(self, skill_id: str) -> BloomLevel | None:
        skill = self._graph.get_skill(skill_id)
        return skill.bloom_level if skill else None

    def bloom_ordinal(self, skill_id: str) -> int:
        """Bloom ordinal of a skill; -1 for skills missing from the graph."""
        level = self.bloom_level(skill_id)
        return level.ordinal if level else -1

    # ─────────────────────────────────────────────────────────────────────────
    # Adjacency
    # ─────────────────────────────────────────────────────────────────────────

    def prerequisites_of(self, skill_id: str) -> list[str]:
        """Direct prerequisites (sources of edges into this skill)."""
        return list(self._prerequisites.get(skill_id, ()))

    def dependents_of(self, skill_id: str) -> list[str]:
        """Skills that list this skill as a direct prerequisite."""
        return list(self._dependents.get(skill_id, ()))

    def has_prerequisites(self, skill_id: str) -> bool:
        return bool(self._prerequisites.get(skill_id))

    # ─────────────────────────────────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────────────────────────────────

    def ancestors(self, start_ids: Iterable[str]) -> list[str]:
        """
        Transitive prerequisites reachable backward from the start skills.

        Start skills are only included when another start skill
        (transitively) requires them.
        """
        starts = list(dict.fromkeys(start_ids))
        visited = set(starts)
        found: dict[str, None] = {}
        queue = deque(starts)

        while queue:
            current = queue.popleft()
            for prereq in self._prerequisites.get(current, ()):
                found.setdefault(prereq, None)
                if prereq not in visited:
                    visited.add(prereq)
                    queue.append(prereq)

        return list(found)

    def descendants(self, skill_id: str) -> list[str]:
        """Skills reachable forward (downstream) from a skill."""
        visited = {skill_id}
        found: list[str] = []
        queue = deque([skill_id])

        while queue:
            current = queue.popleft()
            for dependent in self._dependents.get(current, ()):
                if dependent not in visited:
                    visited.add(dependent)
                    found.append(dependent)
                    queue.append(dependent)

        return found

    def find_cycles(self) -> list[list[str]]:
        """
        Detect prerequisite cycles with a colored depth-first search.

        Each cycle is returned as a closed path, e.g. ``[a, b, a]``.
        The search keeps an explicit stack, so chain depth is unbounded.
        """
        white, gray, black = 0, 1, 2
        nodes = list(dict.fromkeys(
            self._graph.skill_ids + list(self._prerequisites) + list(self._dependents)
        ))
        color = {node: white for node in nodes}
        cycles: list[list[str]] = []

        for root in nodes:
            if color[root] != white:
                continue

            color[root] = gray
            path = [root]
            stack = [iter(self._dependents.get(root, ()))]

            while stack:
                nxt = next(stack[-1], None)
                if nxt is None:
                    stack.pop()
                    color[path.pop()] = black
                    continue

                state = color.get(nxt, white)
                if state == gray:
                    start = path.index(nxt)
                    cycles.append(path[start:] + [nxt])
                elif state == white:
                    color[nxt] = gray
                    path.append(nxt)
                    stack.append(iter(self._dependents.get(nxt, ())))

        if cycles:
            logger.debug(f"Found {len(cycles)} prerequisite cycle(s) in domain {self._graph.domain}")
        return cycles
