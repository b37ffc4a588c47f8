"""
Request-boundary services for the pedagogy engine.

Each service resolves its inputs through the storage interfaces, raises
NotFound and InvalidReference errors before computing, and hands the
loaded snapshot to the pure core.
"""

from .tension_service import TensionService
from .curriculum_service import CurriculumService
from .domain_service import DomainService

__all__ = [
    "TensionService",
    "CurriculumService",
    "DomainService",
]
