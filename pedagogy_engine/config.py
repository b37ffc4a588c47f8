"""
Configuration settings for the pedagogy engine.

Uses Pydantic Settings so pacing heuristics and mastery thresholds can be
tuned through environment variables (prefix ``PEDAGOGY_ENGINE_``) or a
``.env`` file without a rebuild.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import BloomLevel


DEFAULT_BLOOM_MINUTES: dict[BloomLevel, float] = {
    BloomLevel.KNOWLEDGE: 5,
    BloomLevel.COMPREHENSION: 10,
    BloomLevel.APPLICATION: 15,
    BloomLevel.ANALYSIS: 20,
    BloomLevel.SYNTHESIS: 30,
    BloomLevel.EVALUATION: 25,
}


class EngineSettings(BaseSettings):
    """Engine tunables loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PEDAGOGY_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Mastery thresholds
    # ========================================
    individual_mastery_threshold: float = Field(
        default=0.5, ge=0.0, le=1.0,
        description="Confidence at which a single learner 'has' a skill",
    )
    group_mastery_threshold: float = Field(
        default=0.7, ge=0.0, le=1.0,
        description="Coverage fraction at which the group can skip re-teaching",
    )
    demonstrated_bloom_threshold: float = Field(
        default=0.6, ge=0.0, le=1.0,
        description="Confidence at which a skill counts toward a learner's demonstrated Bloom level",
    )

    # ========================================
    # Time estimation
    # ========================================
    bloom_base_minutes: dict[BloomLevel, float] = Field(
        default_factory=lambda: dict(DEFAULT_BLOOM_MINUTES),
        description="Base teaching minutes per Bloom level",
    )
    default_skill_minutes: float = Field(default=15, gt=0)
    readiness_time_factor: float = Field(
        default=0.5, ge=0.0,
        description="Extra time fraction for a group with zero readiness",
    )
    session_overhead_minutes: float = Field(default=15, ge=0, description="Setup plus wrap-up")
    critical_overage_ratio: float = Field(default=0.3, ge=0.0)

    # ========================================
    # Prerequisite gaps and Bloom gating
    # ========================================
    gap_warning_ratio: float = Field(default=0.4, ge=0.0, le=1.0)
    gap_critical_ratio: float = Field(default=0.6, ge=0.0, le=1.0)
    bloom_gate_ordinal: int = Field(default=4, ge=0, le=5, description="Only targets at or above this level are gated")
    bloom_gap_warning: float = Field(default=2, ge=0)
    bloom_gap_critical: float = Field(default=3, ge=0)

    # ========================================
    # Session pacing
    # ========================================
    effective_session_ratio: float = Field(
        default=0.65, gt=0.0, le=1.0,
        description="Share of a session left after opening, closing and transitions",
    )
    minutes_per_skill: float = Field(default=18, gt=0)
    max_review_skills: int = Field(default=2, ge=0)
    padding_review_skills: int = Field(default=3, ge=0)
    default_target_min_ordinal: int = Field(
        default=3, ge=0, le=5,
        description="Curriculum targets default to skills at or above this Bloom level",
    )

    def base_minutes(self, level: BloomLevel | None) -> float:
        if level is None:
            return self.default_skill_minutes
        return self.bloom_base_minutes.get(level, self.default_skill_minutes)


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
