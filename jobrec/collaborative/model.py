"""
Collaborative Filtering Recommender
User-user cosine neighbors over interaction-score vectors

Algorithm:
    v_u[j]      = Σ weight(kind) over u's interactions with job j   (SEARCH excluded)
    neighbors   = { v : cos(v_u, v_v) > threshold }
    score[j]    = Σ_{v ∈ neighbors} v_v[j]                        for j ∉ v_u
    recommend   = top-N of { j : score[j] > min score }
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from tqdm import tqdm

from ..config import CollaborativeConfig, InteractionWeightConfig, default_config
from ..log import get_logger
from ..models import Interaction, InteractionKind, InteractionMatrix, Job, RecommendationResult
from ..similarity import cosine_to_many, top_k
from ..weighting import creation_weight

log = get_logger(__name__)

# Identical vectors are always neighbors, even at threshold 1.0
_IDENTICAL = 1.0 - 1e-9


def user_item_vector(
    interactions: Iterable[Interaction],
    weights: Optional[InteractionWeightConfig] = None
) -> Dict[int, float]:
    """job_id -> summed weighting-table score for one user's interactions"""
    vector: Dict[int, float] = defaultdict(float)
    for interaction in interactions:
        if not interaction.is_well_formed():
            log.debug("Skipping malformed %s interaction", interaction.kind.value)
            continue
        if interaction.kind is InteractionKind.SEARCH:
            continue
        vector[interaction.job.id] += creation_weight(interaction.kind, weights)
    return dict(vector)


def build_interaction_matrix(
    interactions_by_user: Mapping[int, Sequence[Interaction]],
    weights: Optional[InteractionWeightConfig] = None
) -> InteractionMatrix:
    return {
        user_id: user_item_vector(items, weights)
        for user_id, items in interactions_by_user.items()
    }


class CollaborativeRecommender:
    """
    Neighbor-aggregation strategy (cosine-threshold neighbor policy)

    Ties in the final ranking keep the order in which jobs were first
    encountered while aggregating neighbors.
    """

    def __init__(
        self,
        config: Optional[CollaborativeConfig] = None,
        weights: Optional[InteractionWeightConfig] = None,
        show_progress: bool = False
    ):
        self.config = config or default_config.collaborative
        self.weights = weights or default_config.weights
        self.show_progress = show_progress

    def find_neighbors(self, user_id: int, matrix: InteractionMatrix) -> Dict[int, float]:
        """
        Users whose cosine similarity with user_id exceeds the threshold

        Returns:
            neighbor user_id -> similarity
        """
        target = matrix.get(user_id, {})
        if not target:
            return {}

        others = [uid for uid in matrix if uid != user_id]
        if not others:
            return {}

        sims = cosine_to_many(target, [matrix[uid] for uid in others])

        neighbors = {}
        for uid, sim in zip(others, sims):
            if sim > self.config.similarity_threshold or sim >= _IDENTICAL:
                neighbors[uid] = float(sim)
        return neighbors

    def aggregate(
        self,
        user_id: int,
        neighbors: Iterable[int],
        matrix: InteractionMatrix
    ) -> Dict[int, float]:
        """Sum neighbor scores for jobs the target user has not scored"""
        seen = matrix.get(user_id, {})
        candidates: Dict[int, float] = {}

        for neighbor in tqdm(list(neighbors), desc="Aggregating neighbors", disable=not self.show_progress):
            for job_id, score in matrix.get(neighbor, {}).items():
                if job_id in seen:
                    continue
                candidates[job_id] = candidates.get(job_id, 0.0) + score

        return candidates

    def recommend_ids(self, user_id: int, matrix: InteractionMatrix) -> List[tuple]:
        """Ranked (job_id, score) pairs for one user"""
        neighbors = self.find_neighbors(user_id, matrix)
        if not neighbors:
            log.warning("No similar users found for user %s", user_id)
            return []

        candidates = self.aggregate(user_id, neighbors, matrix)
        kept = {job_id: s for job_id, s in candidates.items() if s > self.config.score_threshold}
        return top_k(kept, self.config.top_n)

    def recommend(
        self,
        user_id: int,
        interactions_by_user: Mapping[int, Sequence[Interaction]],
        jobs: Mapping[int, Job]
    ) -> List[RecommendationResult]:
        """
        Recommend jobs for a user from everyone's interaction histories

        Args:
            user_id: Target user
            interactions_by_user: user_id -> all of that user's interactions
            jobs: job_id -> Job, used to fill result titles and companies

        Returns:
            Up to top_n results; empty when no neighbor passes the threshold
        """
        matrix = build_interaction_matrix(interactions_by_user, self.weights)

        results = []
        for job_id, score in self.recommend_ids(user_id, matrix):
            job = jobs.get(job_id)
            if job is None:
                continue
            results.append(RecommendationResult.from_job(job, score))
        return results
