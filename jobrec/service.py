"""
Recommendation Service
Entry point for a serving layer: content, collaborative and hybrid paths
"""

from typing import List, Optional

from .collaborative import CollaborativeRecommender
from .config import Config, default_config
from .content import ContentBasedRecommender
from .data_processor import InteractionRepository, JobRepository
from .exceptions import RecommenderError
from .hybrid import HybridRecommender, ModelStore, ModelTrainer, TrainingTask
from .log import get_logger
from .models import RecommendationResult

log = get_logger(__name__)


class RecommendationService:
    """
    Wires the repositories to the three recommendation strategies

    Scoring calls build their own ephemeral structures per request;
    only the hybrid snapshot is shared, and it is replaced by swap.
    """

    def __init__(
        self,
        jobs: JobRepository,
        interactions: InteractionRepository,
        config: Optional[Config] = None,
        store: Optional[ModelStore] = None
    ):
        self.jobs = jobs
        self.interactions = interactions
        self.config = config or default_config

        self.content = ContentBasedRecommender(jobs, interactions, self.config)
        self.collaborative_recommender = CollaborativeRecommender(
            self.config.collaborative,
            self.config.weights,
            show_progress=self.config.training.show_progress,
        )
        self.hybrid_recommender = HybridRecommender(self.config.hybrid)
        self.store = store or ModelStore()
        self.trainer = ModelTrainer(self.store, self.config.training)

    def content_based(self, user_id: int) -> List[RecommendationResult]:
        return self.content.recommend(user_id)

    def collaborative(self, user_id: int) -> List[RecommendationResult]:
        jobs_by_id = {job.id: job for job in self.jobs.all()}
        return self.collaborative_recommender.recommend(user_id, self.interactions.by_user(), jobs_by_id)

    def hybrid(self, user_id: int, top_n: Optional[int] = None) -> List[RecommendationResult]:
        """Answer from the current snapshot; empty until a model is trained"""
        snapshot = self.store.current()
        if snapshot is None:
            log.warning("Hybrid model not trained yet")
            return []

        top_n = top_n or self.config.hybrid.top_n
        results = []
        for job_id, score in self.hybrid_recommender.predict(snapshot, user_id, top_n):
            job = self.jobs.get(job_id)
            if job is not None:
                results.append(RecommendationResult.from_job(job, score))
        return results

    def train_model(self):
        """Train synchronously and publish the snapshot"""
        return self.trainer.train_now(self.interactions.all(), self.jobs.all())

    def refresh_model(self) -> TrainingTask:
        """Start a background refresh of the hybrid snapshot"""
        return self.trainer.submit(self.interactions.all, self.jobs.all)

    def recommend(self, user_id: int) -> List[RecommendationResult]:
        """
        Content-based recommendations, falling back to the hybrid
        snapshot when the content path fails or finds nothing
        """
        try:
            results = self.content_based(user_id)
        except RecommenderError as e:
            log.error("Content-based path failed for user %s: %s", user_id, e)
            results = []

        if results:
            return results
        return self.hybrid(user_id)

    def close(self) -> None:
        self.trainer.shutdown()
