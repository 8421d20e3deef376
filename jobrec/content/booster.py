"""
Extra-candidate Booster
Bounded keyword-match score for jobs outside the primary index results
"""

from typing import Dict, Iterable, List, Optional, Set

from ..config import BoosterConfig, default_config
from ..models import Job
from ..text import tokenize


class ExtraCandidateBooster:
    """
    Score keyword-matched jobs against the user's search queries

    For each query token, every field containing it contributes its
    importance weight (full weight for a case-sensitive match, a
    fraction for a case-insensitive one). The per-token average is
    boosted and capped so this secondary path cannot dominate the
    index scores.
    """

    def __init__(self, config: Optional[BoosterConfig] = None):
        self.config = config or default_config.booster

    def _field_match(self, value: Optional[str], token: str, weight: float) -> float:
        if not value:
            return 0.0
        if token in value:
            return weight
        if token.lower() in value.lower():
            return weight * self.config.case_insensitive_factor
        return 0.0

    def token_contribution(self, job: Job, token: str) -> float:
        cfg = self.config
        contribution = 0.0
        contribution += self._field_match(job.title, token, cfg.title_weight)
        contribution += self._field_match(job.company, token, cfg.company_weight)
        contribution += self._field_match(job.location, token, cfg.location_weight)
        contribution += self._field_match(job.category, token, cfg.category_weight)
        contribution += self._field_match(job.description, token, cfg.description_weight)
        for skill in job.required_skills:
            contribution += self._field_match(skill, token, cfg.skill_weight)
        return contribution

    def score_job(self, job: Job, query_tokens: List[str]) -> float:
        if not query_tokens:
            return 0.0

        total = sum(self.token_contribution(job, token) for token in query_tokens)
        average = total / len(query_tokens)
        return min(average * self.config.overall_boost, self.config.max_score)

    def score(
        self,
        query_text: str,
        candidates: Iterable[Job],
        exclude_ids: Optional[Set[int]] = None,
        already_scored: Optional[Iterable[Job]] = None
    ) -> Dict[Job, float]:
        """
        Args:
            query_text: All of the user's search queries joined together
            candidates: Keyword-matched jobs from the job repository
            exclude_ids: Job ids never to score (already applied)
            already_scored: Jobs scored by the relevance index

        Returns:
            job -> extra score for each candidate not excluded
        """
        query_tokens = tokenize(query_text)
        if not query_tokens:
            return {}

        exclude_ids = exclude_ids or set()
        scored_ids = {job.id for job in (already_scored or ())}

        results = {}
        for job in candidates:
            if job.id in exclude_ids or job.id in scored_ids or job in results:
                continue
            results[job] = self.score_job(job, query_tokens)
        return results
