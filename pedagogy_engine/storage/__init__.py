"""
Storage backends for the pedagogy engine.

Provides abstract interfaces for skill graphs and learner records
plus in-memory implementations.
"""

from .base import SkillGraphStorage, LearnerStorage
from .memory import InMemorySkillGraphStorage, InMemoryLearnerStorage

__all__ = [
    "SkillGraphStorage",
    "LearnerStorage",
    "InMemorySkillGraphStorage",
    "InMemoryLearnerStorage",
]
