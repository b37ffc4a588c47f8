"""
Structural validation and statistics for skill graphs.

The engine tolerates malformed graphs during traversal; these checks let
callers reject them at ingestion instead.

Errors:
- Duplicate skill IDs
- Edges referencing unknown skills
- Self-loops and prerequisite cycles

Warnings:
- Duplicate edges
- Orphan skills (no edges at all)
- Bloom regressions (prerequisite above its dependent)
- Flat graphs (too few Bloom levels)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

from ..models import SkillGraph
from .graph_index import PrerequisiteIndex


logger = logging.getLogger(__name__)


@dataclass
class GraphValidationResult:
    """Outcome of validating a skill graph."""
    domain: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class DomainStats:
    """Summary statistics for a skill graph."""
    domain: str
    total_skills: int
    total_edges: int
    bloom_distribution: dict[str, int]
    root_skills: list[str]
    leaf_skills: list[str]


def validate_graph(graph: SkillGraph) -> GraphValidationResult:
    """Run every structural check over a graph."""
    result = GraphValidationResult(domain=graph.domain)
    known = set(graph.skill_ids)

    dupes = [sid for sid, count in Counter(s.id for s in graph.skills).items() if count > 1]
    if dupes:
        result.errors.append(f"Duplicate skill IDs: {', '.join(dupes)}")

    for edge in graph.edges:
        if edge.source not in known:
            result.errors.append(f"Edge references unknown source skill: \"{edge.source}\"")
        if edge.target not in known:
            result.errors.append(f"Edge references unknown target skill: \"{edge.target}\"")

    for edge in graph.edges:
        if edge.source == edge.target:
            result.errors.append(f"Self-loop: \"{edge.source}\" depends on itself")

    index = PrerequisiteIndex(graph)
    result.cycles = index.find_cycles()
    for cycle in result.cycles:
        result.errors.append(f"Circular dependency: {' -> '.join(cycle)}")

    seen_edges: set[tuple[str, str]] = set()
    for edge in graph.edges:
        key = (edge.source, edge.target)
        if key in seen_edges:
            result.warnings.append(f"Duplicate edge: {edge.source} -> {edge.target}")
        seen_edges.add(key)

    connected = {e.source for e in graph.edges} | {e.target for e in graph.edges}
    orphans = [sid for sid in graph.skill_ids if sid not in connected]
    if orphans:
        result.warnings.append(
            f"Orphan skills (no connections): {', '.join(orphans)}. Consider adding dependencies."
        )

    for edge in graph.edges:
        if not edge.is_prerequisite:
            continue
        source, target = graph.get_skill(edge.source), graph.get_skill(edge.target)
        if source and target and source.bloom_level.ordinal > target.bloom_level.ordinal:
            result.warnings.append(
                f"Bloom's regression: \"{source.id}\" ({source.bloom_level.value}) is a prerequisite "
                f"for \"{target.id}\" ({target.bloom_level.value}) at a lower level"
            )

    levels = list(dict.fromkeys(s.bloom_level.value for s in graph.skills))
    if len(levels) == 1:
        result.warnings.append(
            f"Graph is flat: all {len(graph.skills)} skills are at \"{levels[0]}\" level."
        )
    elif len(levels) == 2 and len(graph.skills) > 10:
        result.warnings.append(
            f"Graph uses only 2 Bloom's levels ({', '.join(levels)}) across {len(graph.skills)} skills."
        )

    if result.errors:
        logger.warning(f"Domain {graph.domain} failed validation with {len(result.errors)} error(s)")
    return result


def compute_domain_stats(graph: SkillGraph) -> DomainStats:
    """Bloom distribution plus root and leaf skills over prerequisite edges."""
    bloom_distribution: dict[str, int] = {}
    for skill in graph.skills:
        bloom_distribution[skill.bloom_level.value] = bloom_distribution.get(skill.bloom_level.value, 0) + 1

    has_incoming = {e.target for e in graph.edges if e.is_prerequisite}
    has_outgoing = {e.source for e in graph.edges if e.is_prerequisite}

    return DomainStats(
        domain=graph.domain,
        total_skills=len(graph.skills),
        total_edges=len(graph.edges),
        bloom_distribution=bloom_distribution,
        root_skills=[sid for sid in graph.skill_ids if sid not in has_incoming],
        leaf_skills=[sid for sid in graph.skill_ids if sid not in has_outgoing],
    )
