"""
Tension detector.

Runs an ordered list of independent checks, isolates failures, and ranks
the combined result by severity.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ...models import Tension
from .base import TensionCheck, TensionContext
from .bloom import BloomLevelCheck
from .constraints import ConstraintCheck
from .gaps import PrerequisiteGapCheck
from .ordering import DependencyOrderingCheck
from .scope import ScopeTimeCheck


logger = logging.getLogger(__name__)


def default_checks() -> list[TensionCheck]:
    """The five standard checks, in reporting order."""
    return [
        DependencyOrderingCheck(),
        ScopeTimeCheck(),
        PrerequisiteGapCheck(),
        BloomLevelCheck(),
        ConstraintCheck(),
    ]


@dataclass
class DetectionResult:
    """Ranked tensions plus the names of checks that failed."""
    tensions: list[Tension] = field(default_factory=list)
    failed_checks: list[str] = field(default_factory=list)


class TensionDetector:
    """
    Composes tension checks.

    A check that raises is logged and skipped; the others still run.
    Output is sorted critical, warning, info, keeping check order within
    a severity.
    """

    def __init__(self, checks: Sequence[TensionCheck] | None = None) -> None:
        self._checks = list(checks) if checks is not None else default_checks()

    @property
    def checks(self) -> list[TensionCheck]:
        return list(self._checks)

    def detect(self, context: TensionContext) -> DetectionResult:
        result = DetectionResult()

        for check in self._checks:
            try:
                found = check.check(context)
            except Exception:
                logger.exception(f"Tension check '{check.name}' failed; excluding it from the result")
                result.failed_checks.append(check.name)
                continue
            logger.debug(f"Check '{check.name}' produced {len(found)} tension(s)")
            result.tensions.extend(found)

        result.tensions.sort(key=lambda t: t.severity.rank)
        return result
