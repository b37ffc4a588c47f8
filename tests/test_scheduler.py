"""
Unit tests for dependency scheduling.

Covers topological ordering, critical path length, session pacing,
greedy distribution and readiness tagging.
"""

import itertools
import logging

import pytest

from conftest import make_chain, make_graph
from pedagogy_engine import BloomLevel, EngineSettings
from pedagogy_engine.core import (
    DependencyScheduler,
    GroupProfileAggregator,
    PrerequisiteIndex,
    TeachingFrontierResolver,
)
from pedagogy_engine.core.scheduler import REVIEW_MILESTONE
from pedagogy_engine.models import Readiness


@pytest.fixture
def scheduler(index):
    return DependencyScheduler(index)


@pytest.fixture
def cohort_profile(cohort_a):
    return GroupProfileAggregator().aggregate(cohort_a)


def cyclic_index():
    graph = make_graph(
        "loops",
        [(sid, sid.upper(), BloomLevel.APPLICATION) for sid in ("a", "b", "c", "d")],
        [("a", "b"), ("b", "c"), ("c", "a")],
    )
    return PrerequisiteIndex(graph)


class TestTopologicalSort:
    """Test Kahn ordering with the Bloom-ordered ready queue."""

    def test_every_edge_respected_on_closed_subgraph(self, index, scheduler):
        subset = index.ancestors(["evaluate-model"]) + ["evaluate-model"]
        order = scheduler.topological_sort(subset)
        position = {sid: i for i, sid in enumerate(order)}

        assert sorted(order) == sorted(subset)
        for source, target in itertools.product(subset, subset):
            if source in index.prerequisites_of(target):
                assert position[source] < position[target]

    def test_ready_queue_prefers_lower_bloom(self, scheduler):
        order = scheduler.topological_sort([
            "exploratory-analysis", "pandas-groupby", "plotting-basics",
            "data-cleaning", "select-filter-data",
        ])
        assert order == [
            "select-filter-data", "plotting-basics", "data-cleaning",
            "pandas-groupby", "exploratory-analysis",
        ]

    def test_unknown_skill_sorts_first(self, scheduler):
        assert scheduler.topological_sort(["pandas-groupby", "ghost"]) == ["ghost", "pandas-groupby"]

    def test_cycle_members_left_out(self, caplog):
        scheduler = DependencyScheduler(cyclic_index())
        with caplog.at_level(logging.WARNING):
            order = scheduler.topological_sort(["a", "b", "c", "d"])

        assert order == ["d"]
        assert "cycle" in caplog.text


class TestCriticalPath:
    """Test longest prerequisite chain length."""

    def test_chain_length(self, scheduler):
        assert scheduler.critical_path_length([
            "select-filter-data", "plotting-basics", "data-cleaning",
            "pandas-groupby", "exploratory-analysis",
        ]) == 3

    def test_empty_subset(self, scheduler):
        assert scheduler.critical_path_length([]) == 0

    def test_independent_skills(self, scheduler):
        assert scheduler.critical_path_length(["jupyter-notebooks", "call-weather-api"]) == 1

    def test_monotonic_as_skills_added(self, index, scheduler):
        skills = [s.id for s in index.graph.skills]
        lengths = [scheduler.critical_path_length(skills[:n]) for n in range(len(skills) + 1)]
        assert lengths == sorted(lengths)

    def test_long_chain_listed_root_first(self):
        """A 1500-skill chain is measured without exhausting the call stack."""
        chain = make_chain("deep", 1500)
        scheduler = DependencyScheduler(PrerequisiteIndex(chain))
        assert scheduler.critical_path_length(chain.skill_ids) == 1500

    def test_cycle_guard_counts_revisit_as_one(self):
        scheduler = DependencyScheduler(cyclic_index())
        assert scheduler.critical_path_length(["a", "b", "c"]) == 4

    def test_cycle_guard_terminates(self):
        scheduler = DependencyScheduler(cyclic_index())
        assert scheduler.critical_path_length(["a", "b", "c"]) >= 1


class TestPacing:
    """Test skills-per-session heuristics."""

    @pytest.mark.parametrize("duration,expected", [(90, 3), (60, 2), (45, 1), (10, 1), (120, 4)])
    def test_skills_per_session(self, scheduler, duration, expected):
        assert scheduler.skills_per_session(duration) == expected

    def test_min_sessions(self, scheduler):
        assert scheduler.min_sessions(3, 60) == 2
        assert scheduler.min_sessions(1, 90) == 1

    def test_pacing_is_configurable(self, index):
        scheduler = DependencyScheduler(index, EngineSettings(minutes_per_skill=30))
        assert scheduler.skills_per_session(90) == 1


class TestDistribution:
    """Test greedy session filling."""

    def test_nine_independent_skills_over_three_sessions(self, workshop_graph):
        scheduler = DependencyScheduler(PrerequisiteIndex(workshop_graph))
        order = scheduler.topological_sort([s.id for s in workshop_graph.skills])
        drafts = scheduler.distribute(order, 3, 90)

        assert [len(d.skills) for d in drafts] == [3, 3, 3]
        assert drafts[0].review_skills == []
        assert drafts[1].review_skills == ["task-1", "task-2"]
        assert drafts[2].review_skills == ["task-4", "task-5"]

    def test_last_session_absorbs_remainder(self, scheduler):
        drafts = scheduler.distribute(["a", "b", "c", "d", "e"], 2, 60)
        assert [d.skills for d in drafts] == [["a", "b"], ["c", "d", "e"]]

    def test_leftover_sessions_become_review(self, scheduler):
        drafts = scheduler.distribute(["select-filter-data", "pandas-groupby"], 3, 60)

        assert [len(d.skills) for d in drafts] == [2, 0, 0]
        assert drafts[1].review_skills == ["select-filter-data", "pandas-groupby"]
        assert drafts[1].bloom_focus == BloomLevel.APPLICATION

    def test_bloom_focus_is_most_frequent_level(self, scheduler):
        drafts = scheduler.distribute(["data-cleaning", "pandas-groupby", "exploratory-analysis"], 1, 60)
        assert drafts[0].bloom_focus == BloomLevel.ANALYSIS


class TestReadiness:
    """Test readiness tagging against mastery and the taught-so-far set."""

    def test_no_prerequisites_is_ready(self, scheduler, cohort_profile):
        assert scheduler.classify_readiness("python-basics", cohort_profile, frozenset()) == Readiness.READY

    def test_unmet_prerequisite_is_blocked(self, scheduler, cohort_profile):
        assert scheduler.classify_readiness("pandas-groupby", cohort_profile, frozenset()) == Readiness.BLOCKED

    def test_taught_prerequisite_is_ready(self, scheduler, cohort_profile):
        taught = frozenset({"select-filter-data"})
        assert scheduler.classify_readiness("pandas-groupby", cohort_profile, taught) == Readiness.READY

    def test_some_prerequisites_met_is_partial(self, scheduler, cohort_profile):
        taught = frozenset({"plotting-basics"})
        assert scheduler.classify_readiness("exploratory-analysis", cohort_profile, taught) == Readiness.PARTIAL

    def test_group_mastered_prerequisite_is_ready(self, scheduler, cohort_profile):
        assert scheduler.classify_readiness("data-cleaning", cohort_profile, frozenset()) == Readiness.READY


class TestSchedule:
    """Test a full scheduling pass."""

    def test_sessions_tagged_in_order(self, index, scheduler, cohort_profile):
        needed = TeachingFrontierResolver(index).resolve(["exploratory-analysis"], cohort_profile)
        schedule = scheduler.schedule(needed, cohort_profile, 2, 60)
        first, second = schedule.sessions

        assert schedule.critical_path_length == 3
        assert schedule.min_sessions_recommended == 2
        assert [(s.id, s.readiness) for s in first.skills] == [
            ("select-filter-data", Readiness.READY),
            ("plotting-basics", Readiness.BLOCKED),
        ]
        assert [(s.id, s.readiness) for s in second.skills] == [
            ("data-cleaning", Readiness.READY),
            ("pandas-groupby", Readiness.READY),
            ("exploratory-analysis", Readiness.PARTIAL),
        ]
        assert [r.id for r in second.review_skills] == ["select-filter-data", "plotting-basics"]

    def test_milestones(self, index, scheduler, cohort_profile):
        schedule = scheduler.schedule(["pandas-groupby", "select-filter-data"], cohort_profile, 2, 60)

        assert schedule.sessions[0].milestone == "Students can group and aggregate with pandas"
        assert schedule.sessions[1].milestone == REVIEW_MILESTONE
        assert schedule.sessions[1].is_review_only

    def test_unknown_skill_has_no_bloom_level(self, scheduler, cohort_profile):
        schedule = scheduler.schedule(["ghost"], cohort_profile, 1, 60)
        skill = schedule.sessions[0].skills[0]

        assert skill.label == "ghost"
        assert skill.bloom_level is None
        assert schedule.sessions[0].bloom_focus == BloomLevel.KNOWLEDGE
