"""
User Profile Builder
Folds a user's recent interactions into a weighted token vector
"""

from collections import defaultdict
from typing import Dict, Iterable, Optional

from ..config import ProfileConfig, default_config
from ..log import get_logger
from ..models import Interaction, Job, UserProfile
from ..text import tokenize, tokenize_all
from ..weighting import build_policy_table, field_weights

log = get_logger(__name__)


class ProfileBuilder:
    """
    Build a UserProfile from interactions (newest first, bounded window)

    Contribution per interaction:
        SEARCH       query tokens           × search weight
        APPLICATION  title/skills/desc      × field weight × base × boost
        LIKE         title/skills/desc      × field weight × like weight
        DISLIKE      title/skills/desc      × field weight × dislike weight
        COMMENT      title/skills/desc      × field weight × comment weight
                     + comment-text tokens  + fixed bonus

    The profile is never normalized: raw accumulated weight keeps
    recency/frequency emphasis.
    """

    def __init__(self, config: Optional[ProfileConfig] = None):
        self.config = config or default_config.profile
        self.policies = build_policy_table(self.config)
        self.field_weights = field_weights(self.config)

    def build(self, interactions: Iterable[Interaction]) -> UserProfile:
        profile: Dict[str, float] = defaultdict(float)

        for interaction in interactions:
            if not interaction.is_well_formed():
                log.debug("Skipping malformed %s interaction", interaction.kind.value)
                continue

            policy = self.policies.get(interaction.kind)
            if policy is None:
                continue

            if policy.uses_query:
                for token in tokenize(interaction.query):
                    profile[token] += policy.scale
                continue

            self._add_job_tokens(profile, interaction.job, policy.scale)

            if policy.comment_bonus and interaction.comment_text:
                for token in tokenize(interaction.comment_text):
                    profile[token] += policy.comment_bonus

        return dict(profile)

    def _add_job_tokens(self, profile: Dict[str, float], job: Job, scale: float) -> None:
        for token in tokenize(job.title):
            profile[token] += self.field_weights['title'] * scale

        for token in tokenize_all(job.required_skills):
            profile[token] += self.field_weights['skills'] * scale

        for token in tokenize(job.description):
            profile[token] += self.field_weights['description'] * scale


def build_user_profile(
    interactions: Iterable[Interaction],
    config: Optional[ProfileConfig] = None
) -> UserProfile:
    """Convenience wrapper around ProfileBuilder"""
    return ProfileBuilder(config).build(interactions)
