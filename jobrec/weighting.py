"""
Interaction Weighting Table
Static policy mapping interaction kind -> weights and contributing fields
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .config import InteractionWeightConfig, ProfileConfig, default_config
from .models import InteractionKind


@dataclass(frozen=True)
class InteractionPolicy:
    """
    How one interaction kind contributes to a profile

    Attributes:
        kind: Interaction kind this policy applies to
        scale: Multiplier applied to every contributed token weight
        uses_job: Job fields (title, skills, description) contribute tokens
        uses_query: Query text contributes tokens
        comment_bonus: Flat weight added per comment-text token (0 = none)
    """
    kind: InteractionKind
    scale: float
    uses_job: bool = True
    uses_query: bool = False
    comment_bonus: float = 0.0


def build_policy_table(config: Optional[ProfileConfig] = None) -> Dict[InteractionKind, InteractionPolicy]:
    """Build the kind -> policy lookup from profile weights"""
    cfg = config or default_config.profile

    return {
        InteractionKind.SEARCH: InteractionPolicy(
            InteractionKind.SEARCH, cfg.search_query_weight, uses_job=False, uses_query=True,
        ),
        InteractionKind.APPLICATION: InteractionPolicy(
            InteractionKind.APPLICATION, cfg.applied_base_weight * cfg.applied_boost,
        ),
        InteractionKind.LIKE: InteractionPolicy(InteractionKind.LIKE, cfg.like_weight),
        InteractionKind.DISLIKE: InteractionPolicy(InteractionKind.DISLIKE, cfg.dislike_weight),
        InteractionKind.COMMENT: InteractionPolicy(
            InteractionKind.COMMENT, cfg.comment_weight, comment_bonus=cfg.comment_text_bonus,
        ),
    }


def field_weights(config: Optional[ProfileConfig] = None) -> Dict[str, float]:
    """Per-field token weights (title > skills > description)"""
    cfg = config or default_config.profile
    return {
        'title': cfg.title_weight,
        'skills': cfg.skills_weight,
        'description': cfg.description_weight,
    }


def creation_weight(kind: InteractionKind, config: Optional[InteractionWeightConfig] = None) -> float:
    """Weight stamped on an interaction when it is recorded"""
    cfg = config or default_config.weights
    return {
        InteractionKind.LIKE: cfg.like,
        InteractionKind.DISLIKE: cfg.dislike,
        InteractionKind.COMMENT: cfg.comment,
        InteractionKind.APPLICATION: cfg.application,
        InteractionKind.SEARCH: cfg.search,
    }[InteractionKind(kind)]
