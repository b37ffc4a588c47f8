"""
Request input resolution shared by the services.

Resolves a domain graph and a learner group before any computation, so
NotFound and InvalidReference errors surface first and nothing partial
is ever returned.
"""

import logging
from typing import Iterable, List, Tuple

from ..errors import (
    DomainNotFoundError,
    GroupNotFoundError,
    InvalidSkillReferenceError,
    LearnerRecordError,
)
from ..models import LearnerGroup, LearnerSkillMap, SkillGraph
from ..storage import LearnerStorage, SkillGraphStorage


logger = logging.getLogger(__name__)


def load_graph(storage: SkillGraphStorage, domain: str) -> SkillGraph:
    """
    Raises:
        DomainNotFoundError: If the domain has no graph
    """
    graph = storage.get_graph(domain)
    if graph is None:
        raise DomainNotFoundError(domain)
    return graph


def load_group_learners(
    storage: LearnerStorage,
    group_name: str,
) -> Tuple[LearnerGroup, List[LearnerSkillMap]]:
    """
    Load a group and every member record that can be read.

    A member whose record fails to load is logged and left out of the
    group statistics.

    Raises:
        GroupNotFoundError: If the group does not exist
    """
    group = storage.get_group(group_name)
    if group is None:
        raise GroupNotFoundError(group_name)

    learners: List[LearnerSkillMap] = []
    for member_id in group.member_ids:
        try:
            learners.append(storage.get_learner(member_id))
        except LearnerRecordError as e:
            logger.warning(f"Skipping learner in group {group_name}: {e}")

    if len(learners) < len(group.member_ids):
        logger.info(
            f"Loaded {len(learners)} of {len(group.member_ids)} learners for group {group_name}"
        )
    return group, learners


def validate_targets(graph: SkillGraph, target_skills: Iterable[str]) -> List[str]:
    """
    Return the targets unchanged if every id exists in the graph.

    Raises:
        InvalidSkillReferenceError: Listing the unknown ids and every valid id
    """
    targets = list(target_skills)
    unknown = [sid for sid in dict.fromkeys(targets) if not graph.has_skill(sid)]
    if unknown:
        raise InvalidSkillReferenceError(graph.domain, unknown, graph.skill_ids)
    return targets
