"""
In-memory storage backends.

Used by tests and by callers that load data themselves. Learner records
are kept raw and validated on read, so a malformed record surfaces as a
LearnerRecordError for that learner only.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..errors import LearnerRecordError
from ..models import LearnerGroup, LearnerSkillMap, SkillGraph
from .base import LearnerStorage, SkillGraphStorage


logger = logging.getLogger(__name__)


class InMemorySkillGraphStorage(SkillGraphStorage):
    """Skill graphs keyed by domain."""

    def __init__(self, graphs: Optional[List[SkillGraph]] = None) -> None:
        self._graphs: Dict[str, SkillGraph] = {}
        for graph in graphs or []:
            self.add_graph(graph)

    def add_graph(self, graph: SkillGraph) -> SkillGraph:
        self._graphs[graph.domain] = graph
        logger.info(f"Registered domain: {graph.domain} ({len(graph.skills)} skills, {len(graph.edges)} edges)")
        return graph

    def get_graph(self, domain: str) -> Optional[SkillGraph]:
        return self._graphs.get(domain)

    def list_domains(self) -> List[str]:
        return sorted(self._graphs)


class InMemoryLearnerStorage(LearnerStorage):
    """Learner groups and raw learner records keyed by id."""

    def __init__(self) -> None:
        self._groups: Dict[str, LearnerGroup] = {}
        self._records: Dict[str, Union[LearnerSkillMap, Dict[str, Any]]] = {}

    def add_group(self, group: LearnerGroup) -> LearnerGroup:
        self._groups[group.name] = group
        return group

    def add_learner(
        self,
        learner: Union[LearnerSkillMap, Dict[str, Any]],
        group: Optional[str] = None,
    ) -> None:
        """
        Store a learner record, optionally enrolling it in a group.

        Raw dict records are validated lazily in ``get_learner``.
        """
        learner_id = learner.learner_id if isinstance(learner, LearnerSkillMap) else learner.get("learner_id")
        if not learner_id:
            raise ValueError("Learner record needs a learner_id")
        self._records[learner_id] = learner

        if group is not None:
            existing = self._groups.get(group) or LearnerGroup(name=group)
            if learner_id not in existing.member_ids:
                existing = existing.model_copy(update={"member_ids": existing.member_ids + [learner_id]})
            self._groups[group] = existing

    def get_group(self, name: str) -> Optional[LearnerGroup]:
        return self._groups.get(name)

    def get_learner(self, learner_id: str) -> LearnerSkillMap:
        record = self._records.get(learner_id)
        if record is None:
            raise LearnerRecordError(learner_id, "no record found")
        if isinstance(record, LearnerSkillMap):
            return record
        try:
            return LearnerSkillMap.model_validate(record)
        except ValidationError as e:
            raise LearnerRecordError(learner_id, f"{e.error_count()} validation error(s)") from e
