"""
Tension detection.

Five independent checks behind a uniform interface, composed by
TensionDetector.
"""

from .base import TensionCheck, TensionContext, percentage
from .ordering import DependencyOrderingCheck
from .scope import ScopeTimeCheck, estimate_minutes
from .gaps import PrerequisiteGapCheck
from .bloom import BloomLevelCheck
from .constraints import ConstraintCheck
from .detector import DetectionResult, TensionDetector, default_checks

__all__ = [
    "TensionCheck",
    "TensionContext",
    "percentage",
    "DependencyOrderingCheck",
    "ScopeTimeCheck",
    "estimate_minutes",
    "PrerequisiteGapCheck",
    "BloomLevelCheck",
    "ConstraintCheck",
    "DetectionResult",
    "TensionDetector",
    "default_checks",
]
