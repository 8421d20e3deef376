"""
Offline Evaluation of Recommendation Quality
Token-overlap relevance against a user's own interactions
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set

import numpy as np
from tqdm import tqdm

from .config import EvalConfig, default_config
from .models import Interaction, Job
from .text import job_tokens, tokenize

METRIC_NAMES = ('Accuracy', 'Precision', 'Recall', 'F1 Score', 'Relevance Strength')


def zero_metrics() -> Dict[str, float]:
    return {name: 0.0 for name in METRIC_NAMES}


def ground_truth_tokens(interactions: Iterable[Interaction]) -> Set[str]:
    """Query tokens plus tokens of every interacted job"""
    tokens: Set[str] = set()
    for interaction in interactions:
        if interaction.query:
            tokens.update(tokenize(interaction.query))
        if interaction.job is not None:
            tokens.update(job_tokens(interaction.job))
    return tokens


class RecommendationEvaluator:
    """
    Two-level relevance strength:
        1.0  if at least `strong_match_fraction` of a job's tokens are in the ground truth
        0.9  if any token overlaps
        0.0  otherwise

    Metrics:
        Accuracy = Precision = Σ strength / |recommended|
        Recall             = min(1, Σ strength / |ground truth|)
        F1                 = 2PR / (P + R)
        Relevance Strength = Σ strength / #(strength > 0)
    """

    def __init__(self, config: Optional[EvalConfig] = None):
        self.config = config or default_config.eval

    def relevance_strength(self, truth: Set[str], tokens: Set[str]) -> float:
        if not tokens:
            return 0.0
        matching = len(tokens & truth)
        if matching == 0:
            return 0.0
        if matching / len(tokens) >= self.config.strong_match_fraction:
            return self.config.strong_strength
        return self.config.weak_strength

    def evaluate(
        self,
        recommended: Sequence[Job],
        interactions: Sequence[Interaction]
    ) -> Dict[str, float]:
        """
        Args:
            recommended: Recommended jobs, in ranked order
            interactions: Ground-truth interactions of the same user

        Returns:
            Dict with Accuracy, Precision, Recall, F1 Score and
            Relevance Strength; all zero if either input is empty
        """
        if not recommended or not interactions:
            return zero_metrics()

        truth = ground_truth_tokens(interactions)
        strengths = [self.relevance_strength(truth, job_tokens(job)) for job in recommended]

        total = sum(strengths)
        matched = sum(1 for s in strengths if s > 0)

        precision = total / len(recommended)
        recall = min(1.0, total / len(interactions))
        f1 = 0.0 if precision + recall == 0 else 2 * precision * recall / (precision + recall)
        avg_strength = total / matched if matched else 0.0

        return {
            'Accuracy': precision,
            'Precision': precision,
            'Recall': recall,
            'F1 Score': f1,
            'Relevance Strength': avg_strength,
        }


def evaluate_users(
    recommend: Callable[[int], Sequence[Job]],
    interactions_by_user: Mapping[int, Sequence[Interaction]],
    config: Optional[EvalConfig] = None,
    show_progress: bool = False
) -> Dict[str, float]:
    """
    Average the evaluator's metrics over many users

    Args:
        recommend: user_id -> recommended jobs
        interactions_by_user: user_id -> ground-truth interactions
        config: Evaluation settings (sample_users limits the users scored)

    Returns:
        Mean of each metric, plus 'Users' (number of users evaluated)
    """
    cfg = config or default_config.eval
    evaluator = RecommendationEvaluator(cfg)

    user_ids: List[int] = sorted(interactions_by_user)
    if cfg.sample_users and cfg.sample_users < len(user_ids):
        rng = np.random.default_rng(0)
        user_ids = sorted(rng.choice(user_ids, size=cfg.sample_users, replace=False).tolist())

    per_metric: Dict[str, List[float]] = {name: [] for name in METRIC_NAMES}
    for user_id in tqdm(user_ids, desc="Evaluating", disable=not show_progress):
        metrics = evaluator.evaluate(list(recommend(user_id)), interactions_by_user[user_id])
        for name in METRIC_NAMES:
            per_metric[name].append(metrics[name])

    summary = {
        name: float(np.mean(values)) if values else 0.0
        for name, values in per_metric.items()
    }
    summary['Users'] = float(len(user_ids))
    return summary
