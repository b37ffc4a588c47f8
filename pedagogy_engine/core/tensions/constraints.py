"""
Constraint violation check.

Pattern rules over free-text lesson constraints (connectivity, setting,
available tools) and skill ids/labels.
"""

import re

from ...models import (
    ConstraintKind,
    ConstraintViolationEvidence,
    Severity,
    Skill,
    Tension,
)
from .base import TensionContext


OFFLINE_PATTERNS = ("no internet", "offline")
OUTDOOR_PATTERNS = ("outdoor", "park")
TECH_KEYWORDS = ("jupyter", "pandas", "plotting", "python")
PAID_SERVICE_RE = re.compile(r"\b(apis?|cloud)\b", re.IGNORECASE)


def _needs_install(skill: Skill) -> bool:
    tokens = skill.id.lower().split("-")
    return "install" in tokens or "import" in tokens or "install" in skill.label.lower()


class ConstraintCheck:
    """Skills that clash with connectivity, tools, accounts or setting."""

    name = "constraint_violation"

    def check(self, context: TensionContext) -> list[Tension]:
        constraints = context.constraints
        if constraints is None:
            return []

        connectivity = constraints.connectivity or ""
        setting = constraints.setting or ""
        tools = constraints.tools or []
        offline = any(p in connectivity.lower() for p in OFFLINE_PATTERNS)
        has_jupyter = any("jupyter" in t.lower() for t in tools)
        tensions: list[Tension] = []

        for skill_id in context.target_skills:
            skill = context.index.skill(skill_id)
            if skill is None:
                continue

            if offline and _needs_install(skill):
                tensions.append(self._offline(skill, connectivity))

            if "jupyter" in skill_id.lower() and tools and not has_jupyter:
                tensions.append(self._missing_jupyter(skill, tools))

            if PAID_SERVICE_RE.search(skill.label):
                tensions.append(self._paid_service(skill))

        if any(p in setting.lower() for p in OUTDOOR_PATTERNS):
            tech_skills = [
                s for s in dict.fromkeys(context.target_skills)
                if any(k in s.lower() for k in TECH_KEYWORDS)
            ]
            if tech_skills:
                tensions.append(self._outdoor(setting, tech_skills))

        return tensions

    @staticmethod
    def _offline(skill: Skill, connectivity: str) -> Tension:
        return Tension(
            severity=Severity.CRITICAL,
            title=f"\"{skill.label}\" may require internet - but connectivity is \"{connectivity}\"",
            detail=(
                "Installing packages typically requires an internet connection. If packages aren't "
                "pre-installed, this activity will fail in an offline environment."
            ),
            evidence=ConstraintViolationEvidence(
                constraint=ConstraintKind.CONNECTIVITY,
                skills=[skill.id],
                constraint_value=connectivity,
            ),
            suggestion=(
                "Ensure all required packages (pandas, matplotlib, etc.) are pre-installed on student "
                "machines before the session. Include this in the prerequisites checklist."
            ),
        )

    @staticmethod
    def _missing_jupyter(skill: Skill, tools: list[str]) -> Tension:
        return Tension(
            severity=Severity.WARNING,
            title=f"\"{skill.label}\" requires Jupyter - not listed in available tools",
            detail=(
                f"The available tools are: {', '.join(tools)}. Jupyter is not explicitly listed. "
                f"If students don't have Jupyter installed, this skill can't be practiced."
            ),
            evidence=ConstraintViolationEvidence(
                constraint=ConstraintKind.TOOLS,
                skills=[skill.id],
                constraint_value="Jupyter",
                available_tools=list(tools),
            ),
            suggestion=(
                "Add Jupyter to the prerequisites checklist, or plan a Python-script-based "
                "alternative for students without Jupyter."
            ),
        )

    @staticmethod
    def _paid_service(skill: Skill) -> Tension:
        return Tension(
            severity=Severity.INFO,
            title=f"\"{skill.label}\" may require paid accounts or API keys",
            detail=(
                "This skill involves APIs or cloud services. Verify that all students have the "
                "necessary accounts and that no hidden costs (API keys requiring credit cards, etc.) "
                "will block participation."
            ),
            evidence=ConstraintViolationEvidence(
                constraint=ConstraintKind.SUBSCRIPTIONS,
                skills=[skill.id],
            ),
            suggestion=(
                "List all required accounts/subscriptions in the prerequisites. Provide free-tier "
                "alternatives if possible."
            ),
        )

    @staticmethod
    def _outdoor(setting: str, tech_skills: list[str]) -> Tension:
        return Tension(
            severity=Severity.WARNING,
            title="Computer-based skills planned for an outdoor setting",
            detail=(
                f"{len(tech_skills)} skills require a computer, but the setting is \"{setting}\". "
                f"Consider whether students will have laptops, power, and visibility in an outdoor "
                f"environment."
            ),
            evidence=ConstraintViolationEvidence(
                constraint=ConstraintKind.SETTING,
                skills=tech_skills,
                constraint_value=setting,
            ),
            suggestion=(
                "Either bring laptops with sufficient battery, or redesign activities as "
                "conceptual/paper-based exercises for the outdoor portion and save hands-on coding "
                "for an indoor follow-up."
            ),
        )
