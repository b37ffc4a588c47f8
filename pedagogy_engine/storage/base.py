"""
Storage interfaces for skill graphs and learner records.

Loading and parsing live behind these interfaces; the engine only ever
sees already-parsed models.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import LearnerGroup, LearnerSkillMap, SkillGraph


class SkillGraphStorage(ABC):
    """
    Abstract source of skill graphs, one per domain.

    Implementations may read JSON files, a graph database, etc.
    """

    @abstractmethod
    def get_graph(self, domain: str) -> Optional[SkillGraph]:
        """Get the skill graph for a domain, or None if it does not exist."""
        pass

    @abstractmethod
    def list_domains(self) -> List[str]:
        """List available domain slugs."""
        pass


class LearnerStorage(ABC):
    """Abstract source of learner groups and per-learner skill records."""

    @abstractmethod
    def get_group(self, name: str) -> Optional[LearnerGroup]:
        """Get a learner group by name, or None if it does not exist."""
        pass

    @abstractmethod
    def get_learner(self, learner_id: str) -> LearnerSkillMap:
        """
        Load one learner's skill map.

        Raises:
            LearnerRecordError: If the record is missing or malformed
        """
        pass
