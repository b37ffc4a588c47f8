"""
Domain Service - graph validation and statistics per domain.
"""

import logging
from typing import List, Optional

from ..core import DomainStats, GraphValidationResult, compute_domain_stats, validate_graph
from ..storage import SkillGraphStorage
from .inputs import load_graph


logger = logging.getLogger(__name__)


class DomainService:
    """Inspects the skill graphs behind a storage backend."""

    def __init__(self, graph_storage: SkillGraphStorage):
        self._graphs = graph_storage

    def list_domains(self) -> List[str]:
        return self._graphs.list_domains()

    def validate_domain(self, domain: str) -> GraphValidationResult:
        """
        Run structural checks over a domain's graph.

        Raises:
            DomainNotFoundError: Unknown domain
        """
        result = validate_graph(load_graph(self._graphs, domain))
        if result.valid:
            logger.info(f"Domain {domain} is valid ({len(result.warnings)} warning(s))")
        else:
            logger.warning(f"Domain {domain} has {len(result.errors)} error(s)")
        return result

    def domain_stats(self, domain: str) -> DomainStats:
        return compute_domain_stats(load_graph(self._graphs, domain))

    def validate_all(self, domains: Optional[List[str]] = None) -> List[GraphValidationResult]:
        """Validate every listed domain, or all known domains."""
        return [self.validate_domain(d) for d in (domains or self.list_domains())]
