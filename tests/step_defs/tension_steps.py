"""
Step definitions for Tension Detection.

Feature: tension_detection.feature

Implements BDD steps for:
- Dependency ordering
- Scope/time mismatch
- Prerequisite gaps
- Bloom level mismatch
- Constraint violations
- Invalid skill references
"""

from pytest_bdd import when, then, parsers

from pedagogy_engine import InvalidSkillReferenceError, LessonConstraints
from pedagogy_engine.models import Severity, TensionType
from pedagogy_engine.services.tension_service import NO_TENSIONS_SUMMARY

from step_defs.common_steps import split_ids


def _detect(ctx, skills, duration=None, constraints=None):
    try:
        ctx.report = ctx.tension_service.detect_tensions(
            ctx.domain, ctx.group, split_ids(skills),
            duration_minutes=duration, constraints=constraints,
        )
    except Exception as e:
        ctx.error = e


def _only(ctx, tension_type):
    found = ctx.report.of_type(TensionType(tension_type))
    assert len(found) == 1, f"expected one {tension_type} tension, got {len(found)}"
    return found[0]


# ─────────────────────────────────────────────────────────────────────────────
# When
# ─────────────────────────────────────────────────────────────────────────────

@when(parsers.parse('I check the sequence "{skills}"'))
def check_sequence(ctx, skills):
    _detect(ctx, skills)


@when(parsers.parse('I check the sequence "{skills}" in {minutes:d} minutes'))
def check_sequence_with_duration(ctx, skills, minutes):
    _detect(ctx, skills, duration=minutes)


@when(parsers.parse('I check the sequence "{skills}" for a room with connectivity: {connectivity}'))
def check_sequence_with_connectivity(ctx, skills, connectivity):
    _detect(ctx, skills, constraints=LessonConstraints(connectivity=connectivity))


# ─────────────────────────────────────────────────────────────────────────────
# Then: report
# ─────────────────────────────────────────────────────────────────────────────

@then(parsers.parse("exactly {count:d} tension is reported"))
def exact_tension_count(ctx, count):
    assert ctx.error is None
    assert len(ctx.report.tensions) == count


@then("no tensions are reported")
def no_tensions(ctx):
    assert ctx.error is None
    assert ctx.report.tensions == []


@then(parsers.parse('a critical "{tension_type}" tension is reported'))
def critical_tension_reported(ctx, tension_type):
    assert ctx.error is None
    assert any(
        t.type == TensionType(tension_type) and t.severity == Severity.CRITICAL
        for t in ctx.report.tensions
    )


@then("the summary says no pedagogical tensions were detected")
def summary_no_tensions(ctx):
    assert ctx.report.summary == NO_TENSIONS_SUMMARY


# ─────────────────────────────────────────────────────────────────────────────
# Then: evidence
# ─────────────────────────────────────────────────────────────────────────────

@then(parsers.parse(
    'the ordering tension places "{skill}" at position {skill_pos:d} '
    'and "{prereq}" at position {prereq_pos:d}'
))
def ordering_positions(ctx, skill, skill_pos, prereq, prereq_pos):
    evidence = _only(ctx, "dependency_ordering").evidence
    assert (evidence.skill, evidence.skill_position) == (skill, skill_pos)
    assert (evidence.prerequisite, evidence.prerequisite_position) == (prereq, prereq_pos)


@then(parsers.parse("the estimate exceeds the available time by more than {pct:d} percent"))
def estimate_over_by(ctx, pct):
    evidence = _only(ctx, "scope_time_mismatch").evidence
    assert evidence.over_by_minutes > evidence.available_minutes * pct / 100
    assert evidence.over_percentage > pct


@then(parsers.parse('the suggested cuts start with "{skill}"'))
def cuts_start_with(ctx, skill):
    assert _only(ctx, "scope_time_mismatch").evidence.suggested_cuts[0] == skill


@then("the suggested cuts are ordered highest Bloom level first")
def cuts_ordered_by_bloom(ctx):
    cuts = _only(ctx, "scope_time_mismatch").evidence.suggested_cuts
    ordinals = [ctx.graph.get_skill(s).bloom_level.ordinal for s in cuts]
    assert ordinals == sorted(ordinals, reverse=True)


@then(parsers.parse('the gap on "{prereq}" puts {pct:d} percent of the group at risk'))
def gap_percentage(ctx, prereq, pct):
    evidence = _only(ctx, "prerequisite_gap").evidence
    assert evidence.prerequisite == prereq
    assert evidence.at_risk_percentage == pct


@then(parsers.parse("the gap lists {count:d} learners with no recorded confidence"))
def gap_missing_learners(ctx, count):
    assert len(_only(ctx, "prerequisite_gap").evidence.missing) == count


# ─────────────────────────────────────────────────────────────────────────────
# Then: errors
# ─────────────────────────────────────────────────────────────────────────────

@then(parsers.parse('the request fails with an invalid reference to "{skill}"'))
def invalid_reference(ctx, skill):
    assert isinstance(ctx.error, InvalidSkillReferenceError)
    assert ctx.error.invalid_ids == [skill]


@then("the error lists every valid skill id")
def error_lists_valid_ids(ctx):
    assert ctx.error.valid_ids == ctx.graph.skill_ids
