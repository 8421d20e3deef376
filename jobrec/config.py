"""
Configuration for the Job Recommendation Engine
All weights and thresholds are tunable parameters
"""

from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Dict, Union

import yaml

from .exceptions import ConfigError


@dataclass
class ProfileConfig:
    """User profile construction weights"""
    recent_window: int = 10            # Most recent interactions used for the profile

    search_query_weight: float = 1.1   # Per query token
    applied_base_weight: float = 0.5
    applied_boost: float = 1.0
    like_weight: float = 1.0
    dislike_weight: float = -1.0
    comment_weight: float = 0.8
    comment_text_bonus: float = 0.5    # Added per comment-text token

    # Per-field token weights (title > skills > description)
    title_weight: float = 1.0
    skills_weight: float = 0.5
    description_weight: float = 0.4


@dataclass
class InteractionWeightConfig:
    """Weights stamped on interactions at creation time"""
    like: float = 1.0
    dislike: float = -1.0
    comment: float = 0.8
    application: float = 1.5
    search: float = 0.5    # Never enters an item vector (no job)


@dataclass
class IndexConfig:
    """Ephemeral relevance index settings"""
    # Field boosts relative to the profile weight
    content_boost: float = 1.0
    company_boost: float = 1.5
    location_boost: float = 1.2
    category_boost: float = 1.0

    fuzzy_boost: float = 0.3           # Fraction of the exact-match boost
    fuzzy_max_edits: int = 2
    fuzzy_min_length: int = 3          # Shorter tokens only match exactly

    # BM25
    k1: float = 1.2
    b: float = 0.75

    min_score: float = 0.3             # Scores at or below are dropped


@dataclass
class BoosterConfig:
    """Extra-candidate keyword booster"""
    title_weight: float = 1.0
    company_weight: float = 0.9
    location_weight: float = 0.8
    skill_weight: float = 0.8
    category_weight: float = 0.7
    description_weight: float = 0.6

    case_insensitive_factor: float = 0.9
    overall_boost: float = 1.2
    max_score: float = 1.2


@dataclass
class ContentConfig:
    """Content-based recommendation path"""
    # Dynamic threshold: low when the user has little history
    threshold_low: float = 0.3
    threshold_high: float = 0.5
    min_interactions_for_high: int = 2
    top_n: int = 10


@dataclass
class CollaborativeConfig:
    """User-user collaborative filtering"""
    similarity_threshold: float = 0.7
    score_threshold: float = 0.5
    top_n: int = 10


@dataclass
class HybridConfig:
    """Hybrid (Jaccard content + shared-item neighbors) model"""
    # Fusion weights: not derived from data, kept for behavioral parity
    content_weight: float = 0.6
    collaborative_weight: float = 0.4
    top_n: int = 10


@dataclass
class TrainingConfig:
    """Background training settings"""
    max_interactions: int = 0          # 0 = unbounded full-corpus pass
    show_progress: bool = False
    max_workers: int = 1


@dataclass
class EvalConfig:
    """Offline evaluation configuration"""
    strong_match_fraction: float = 0.9
    strong_strength: float = 1.0
    weak_strength: float = 0.9
    sample_users: int = 0              # 0 = all users


@dataclass
class DataConfig:
    """Data paths"""
    jobs_path: str = "data/jobs.jsonl"
    interactions_path: str = "data/interactions.jsonl"


@dataclass
class Config:
    """Main configuration combining all configs"""
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    weights: InteractionWeightConfig = field(default_factory=InteractionWeightConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    booster: BoosterConfig = field(default_factory=BoosterConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    collaborative: CollaborativeConfig = field(default_factory=CollaborativeConfig)
    hybrid: HybridConfig = field(default_factory=HybridConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    data: DataConfig = field(default_factory=DataConfig)


# Default configuration instance
default_config = Config()


def get_config(**kwargs) -> Config:
    """Get configuration with optional section overrides"""
    config = Config()

    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise ConfigError(f"Unknown config section: {key}")
        setattr(config, key, value)

    return config


def _apply_overrides(config: Config, overrides: Dict[str, dict]) -> Config:
    section_names = {f.name for f in fields(config)}

    for section, values in overrides.items():
        if section not in section_names:
            raise ConfigError(f"Unknown config section: {section}")
        target = getattr(config, section)
        if not isinstance(values, dict):
            raise ConfigError(f"Section '{section}' must be a mapping")

        allowed = {f.name for f in fields(target)} if is_dataclass(target) else set()
        for name, value in values.items():
            if name not in allowed:
                raise ConfigError(f"Unknown field '{name}' in section '{section}'")
            setattr(target, name, value)

    return config


def load_config(config_path: Union[str, Path]) -> Config:
    """
    Load configuration overrides from a YAML file

    Args:
        config_path: YAML file whose top-level keys name config sections

    Returns:
        Config with defaults replaced by the file's values
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")

    return _apply_overrides(Config(), data)
