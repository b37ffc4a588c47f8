"""
Teaching frontier resolution.

The teaching frontier is the minimal set of skills a group still needs
before it can responsibly reach a set of targets: everything upstream of
the targets that the group has not collectively mastered, stopping at
mastered skills.
"""

import logging
from collections import deque
from typing import Iterable

from ..config import EngineSettings, get_settings
from ..models import GroupSkillProfile
from .graph_index import PrerequisiteIndex


logger = logging.getLogger(__name__)


class TeachingFrontierResolver:
    """Computes the skills still needing instruction for a set of targets."""

    def __init__(
        self,
        index: PrerequisiteIndex,
        settings: EngineSettings | None = None
    ) -> None:
        self._index = index
        self._settings = settings or get_settings()

    def resolve(
        self,
        target_ids: Iterable[str],
        profile: GroupSkillProfile
    ) -> list[str]:
        """
        Backward BFS from each target over prerequisite edges.

        A skill that is not group-mastered is needed and its prerequisites
        are expanded; a group-mastered skill is a satisfied boundary and
        is not expanded past. Returns the union in discovery order.
        """
        threshold = self._settings.group_mastery_threshold
        needed: dict[str, None] = {}

        for target_id in dict.fromkeys(target_ids):
            queue = deque([target_id])
            visited = {target_id}

            while queue:
                current = queue.popleft()
                if profile.is_group_mastered(current, threshold):
                    continue

                needed.setdefault(current, None)
                for prereq in self._index.prerequisites_of(current):
                    if prereq not in visited:
                        visited.add(prereq)
                        queue.append(prereq)

        logger.debug(f"Teaching frontier: {len(needed)} skills needed")
        return list(needed)
