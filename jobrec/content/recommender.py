"""
Content-Based Job Recommender
Recent interactions -> profile -> relevance index + keyword booster -> top-N
"""

from typing import Dict, List, Optional, Sequence, Set

from ..config import Config, default_config
from ..data_processor import InteractionRepository, JobRepository
from ..exceptions import IndexScoringError
from ..log import get_logger
from ..models import Interaction, InteractionKind, Job, RecommendationResult
from ..similarity import top_k
from .booster import ExtraCandidateBooster
from .index import score_jobs
from .profile import ProfileBuilder

log = get_logger(__name__)


def applied_job_ids(interactions: Sequence[Interaction]) -> Set[int]:
    return {
        i.job.id for i in interactions
        if i.kind is InteractionKind.APPLICATION and i.job is not None
    }


def combined_search_query(interactions: Sequence[Interaction]) -> str:
    return " ".join(
        i.query for i in interactions
        if i.kind is InteractionKind.SEARCH and i.query
    )


class ContentBasedRecommender:
    """
    Index-based content strategy

    The threshold is dynamic: users with fewer than
    `min_interactions_for_high` recent interactions get the lower one.
    """

    def __init__(
        self,
        jobs: JobRepository,
        interactions: InteractionRepository,
        config: Optional[Config] = None
    ):
        self.jobs = jobs
        self.interactions = interactions
        self.config = config or default_config
        self.profile_builder = ProfileBuilder(self.config.profile)
        self.booster = ExtraCandidateBooster(self.config.booster)

    def threshold_for(self, interaction_count: int) -> float:
        cfg = self.config.content
        if interaction_count < cfg.min_interactions_for_high:
            return cfg.threshold_low
        return cfg.threshold_high

    def score_candidates(
        self,
        recent: Sequence[Interaction],
        candidates: Sequence[Job]
    ) -> Dict[Job, float]:
        """
        Score candidates for one user's recent interactions

        Index failures are logged and the booster alone is used.
        """
        applied = applied_job_ids(recent)
        profile = self.profile_builder.build(recent)

        try:
            scores = score_jobs(profile, candidates, self.config.index)
        except IndexScoringError as e:
            log.error("Relevance index failed, degrading to keyword booster: %s", e)
            scores = {}

        query = combined_search_query(recent)
        if query:
            extra_jobs = self.jobs.search_all_fields(query)
            extra = self.booster.score(query, extra_jobs, exclude_ids=applied, already_scored=scores)
            scores.update(extra)

        return scores

    def recommend(self, user_id: int, top_n: Optional[int] = None) -> List[RecommendationResult]:
        """
        Recommend jobs for a user

        Returns:
            RecommendationResult list sorted by score, empty when the
            user has no recent interactions or no candidates remain
        """
        top_n = top_n or self.config.content.top_n
        recent = self.interactions.recent_for_user(user_id, self.config.profile.recent_window)
        if not recent:
            log.warning("No recent interactions found for user %s", user_id)
            return []

        threshold = self.threshold_for(len(recent))
        applied = applied_job_ids(recent)

        candidates = [job for job in self.jobs.all() if job.id not in applied]
        if not candidates:
            log.warning("No candidate jobs available for recommendation")
            return []

        scores = self.score_candidates(recent, candidates)
        kept = {job: score for job, score in scores.items() if score > threshold}

        return [RecommendationResult.from_job(job, score) for job, score in top_k(kept, top_n)]
