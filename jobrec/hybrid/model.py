"""
Hybrid Jaccard + Shared-Item Recommender
Offline-trained snapshot reused to answer single-user predictions

Score fusion:
    hybrid_score = content_weight × [j in content list] + collaborative_weight × [j in neighbor list]

Where:
    - content list: un-interacted jobs ranked by max Jaccard similarity of
      feature sets with the user's interacted jobs
    - neighbor list: jobs interacted with by users sharing any job
    - content_weight / collaborative_weight: fixed 0.6 / 0.4
"""

import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from tqdm import tqdm

from ..config import HybridConfig, TrainingConfig, default_config
from ..exceptions import TrainingCancelled
from ..log import get_logger
from ..models import Interaction, Job
from ..similarity import jaccard

log = get_logger(__name__)


@dataclass(frozen=True)
class HybridSnapshot:
    """
    Immutable trained structures

    Attributes:
        matrix: user_id -> job_id -> summed interaction weight
        job_features: job_id -> lowercase feature set
        neighbors: user_id -> users sharing at least one job
        trained_at: When training finished
        num_interactions: Interactions consumed by training
    """
    matrix: Mapping[int, Mapping[int, float]]
    job_features: Mapping[int, FrozenSet[str]]
    neighbors: Mapping[int, FrozenSet[int]]
    trained_at: datetime
    num_interactions: int = 0

    @property
    def num_users(self) -> int:
        return len(self.matrix)

    @property
    def num_jobs(self) -> int:
        return len(self.job_features)


def job_feature_set(job: Job) -> FrozenSet[str]:
    """Lowercase title, lowercase description words and each lowercase skill"""
    features: Set[str] = set()
    if job.title:
        features.add(job.title.lower())
    if job.description:
        features.update(job.description.lower().split())
    for skill in job.required_skills:
        if skill:
            features.add(skill.lower())
    return frozenset(features)


def build_matrix(interactions: Iterable[Interaction]) -> Dict[int, Dict[int, float]]:
    """Sum stamped interaction weights per (user, job); SEARCH and malformed records skipped"""
    matrix: Dict[int, Dict[int, float]] = defaultdict(dict)
    for interaction in interactions:
        if not interaction.is_well_formed():
            log.debug("Skipping malformed %s interaction", interaction.kind.value)
            continue
        if interaction.job is None:
            continue
        row = matrix[interaction.user_id]
        row[interaction.job.id] = row.get(interaction.job.id, 0.0) + interaction.weight
    return dict(matrix)


def build_job_features(jobs: Iterable[Job], show_progress: bool = False) -> Dict[int, FrozenSet[str]]:
    return {
        job.id: job_feature_set(job)
        for job in tqdm(list(jobs), desc="Extracting job features", disable=not show_progress)
    }


def build_shared_item_neighbors(matrix: Mapping[int, Mapping[int, float]]) -> Dict[int, FrozenSet[int]]:
    """Shared-item neighbor policy: any common interacted job makes a neighbor"""
    job_users: Dict[int, Set[int]] = defaultdict(set)
    for user_id, row in matrix.items():
        for job_id in row:
            job_users[job_id].add(user_id)

    neighbors = {}
    for user_id, row in matrix.items():
        others: Set[int] = set()
        for job_id in row:
            others |= job_users[job_id]
        others.discard(user_id)
        neighbors[user_id] = frozenset(others)
    return neighbors


def _freeze(matrix: Dict[int, Dict[int, float]]) -> Mapping[int, Mapping[int, float]]:
    return MappingProxyType({uid: MappingProxyType(dict(row)) for uid, row in matrix.items()})


def _check_cancel(cancel_event: Optional[threading.Event], phase: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise TrainingCancelled(f"Training cancelled before {phase}")


def train(
    interactions: Sequence[Interaction],
    jobs: Iterable[Job],
    config: Optional[TrainingConfig] = None,
    cancel_event: Optional[threading.Event] = None
) -> HybridSnapshot:
    """
    Build a fresh snapshot from all interactions and the job catalog

    Three phases (matrix, features, neighbors); the cancel event is
    checked between them.

    Args:
        interactions: Global interaction history
        jobs: Job catalog
        config: Training settings (max_interactions bounds the pass)
        cancel_event: Set to request cooperative cancellation

    Returns:
        New immutable HybridSnapshot
    """
    cfg = config or default_config.training
    interactions = list(interactions)

    if cfg.max_interactions and len(interactions) > cfg.max_interactions:
        log.warning(
            "Bounding training pass to the newest %d of %d interactions",
            cfg.max_interactions, len(interactions),
        )
        interactions = sorted(interactions, key=lambda i: i.timestamp, reverse=True)[:cfg.max_interactions]

    log.info("Training hybrid model with %d interactions", len(interactions))

    _check_cancel(cancel_event, "interaction matrix")
    matrix = build_matrix(interactions)

    _check_cancel(cancel_event, "job features")
    features = build_job_features(jobs, show_progress=cfg.show_progress)

    _check_cancel(cancel_event, "neighbor graph")
    neighbors = build_shared_item_neighbors(matrix)

    snapshot = HybridSnapshot(
        matrix=_freeze(matrix),
        job_features=MappingProxyType(features),
        neighbors=MappingProxyType(neighbors),
        trained_at=datetime.now(),
        num_interactions=len(interactions),
    )
    log.info("Model training completed: %d users, %d jobs", snapshot.num_users, snapshot.num_jobs)
    return snapshot


class HybridRecommender:
    """
    Coarse Jaccard / shared-item strategy answering from a snapshot

    Serves as a cached fallback when the index-based path is
    unavailable or stale.
    """

    def __init__(self, config: Optional[HybridConfig] = None):
        self.config = config or default_config.hybrid

    def content_ranking(self, snapshot: HybridSnapshot, user_id: int) -> List[Tuple[int, float]]:
        """Un-interacted jobs by max Jaccard similarity with interacted jobs"""
        interacted = snapshot.matrix.get(user_id, {})
        interacted_features = [
            snapshot.job_features[job_id] for job_id in interacted
            if job_id in snapshot.job_features
        ]

        scores = []
        for job_id, features in snapshot.job_features.items():
            if job_id in interacted:
                continue
            best = max((jaccard(features, other) for other in interacted_features), default=0.0)
            scores.append((job_id, best))

        scores.sort(key=lambda x: x[1], reverse=True)
        return scores

    def collaborative_candidates(self, snapshot: HybridSnapshot, user_id: int) -> List[int]:
        """Union of jobs interacted with by shared-item neighbors"""
        seen: Dict[int, None] = {}
        for neighbor in sorted(snapshot.neighbors.get(user_id, ())):
            for job_id in snapshot.matrix.get(neighbor, {}):
                seen.setdefault(job_id, None)
        return list(seen)

    def predict(
        self,
        snapshot: HybridSnapshot,
        user_id: int,
        top_n: Optional[int] = None
    ) -> List[Tuple[int, float]]:
        """
        Blend content and collaborative lists for one user

        Returns:
            (job_id, hybrid score) sorted descending; ties keep content
            ranking order. Empty for users absent from the snapshot.
        """
        if user_id not in snapshot.matrix:
            return []

        blended: Dict[int, float] = {}
        for job_id, _ in self.content_ranking(snapshot, user_id):
            blended[job_id] = blended.get(job_id, 0.0) + self.config.content_weight
        for job_id in self.collaborative_candidates(snapshot, user_id):
            blended[job_id] = blended.get(job_id, 0.0) + self.config.collaborative_weight

        ranked = sorted(blended.items(), key=lambda x: x[1], reverse=True)
        return ranked[:top_n] if top_n else ranked
