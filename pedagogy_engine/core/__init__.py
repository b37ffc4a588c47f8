"""
Pedagogy Engine Core Module.

The pure, synchronous skill-dependency reasoning engine:
- Prerequisite index and traversal
- Group profile aggregation
- Teaching frontier resolution
- Dependency scheduling
- Tension detection
- Graph validation

Quick Start:
    from pedagogy_engine.core import (
        PrerequisiteIndex, GroupProfileAggregator,
        TeachingFrontierResolver, DependencyScheduler,
    )

    index = PrerequisiteIndex(graph)
    profile = GroupProfileAggregator().aggregate(learners)
    needed = TeachingFrontierResolver(index).resolve(["pandas-groupby"], profile)
    schedule = DependencyScheduler(index).schedule(needed, profile, 3, 90)
"""

from .graph_index import PrerequisiteIndex
from .group_profile import GroupProfileAggregator
from .frontier import TeachingFrontierResolver
from .scheduler import DependencyScheduler, Schedule, SessionDraft
from .validation import DomainStats, GraphValidationResult, compute_domain_stats, validate_graph
from .tensions import (
    TensionCheck,
    TensionContext,
    DependencyOrderingCheck,
    ScopeTimeCheck,
    PrerequisiteGapCheck,
    BloomLevelCheck,
    ConstraintCheck,
    DetectionResult,
    TensionDetector,
    default_checks,
)


__all__ = [
    # Graph
    "PrerequisiteIndex",
    "GraphValidationResult",
    "DomainStats",
    "validate_graph",
    "compute_domain_stats",
    # Aggregation and frontier
    "GroupProfileAggregator",
    "TeachingFrontierResolver",
    # Scheduling
    "DependencyScheduler",
    "Schedule",
    "SessionDraft",
    # Tensions
    "TensionCheck",
    "TensionContext",
    "DependencyOrderingCheck",
    "ScopeTimeCheck",
    "PrerequisiteGapCheck",
    "BloomLevelCheck",
    "ConstraintCheck",
    "DetectionResult",
    "TensionDetector",
    "default_checks",
]
