"""
Ephemeral Relevance Index
In-memory BM25 index over candidate jobs, queried with a weighted profile

Algorithm:
    score(job) = Σ_(token, w) Σ_field [ w × boost_field × bm25(field, token, job)
                                      + w × fuzzy × Σ_term~token sim(token, term) × bm25(field, term, job) ]

    bm25(f, t, d) = idf(t) × tf × (k1 + 1) / (tf + k1 × (1 - b + b × |d| / avg|d|))
    idf(t)        = ln((N + 1) / df)
    sim(t, u)     = 1 - edits(t, u) / min(|t|, |u|)
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from rank_bm25 import BM25Plus
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from ..config import IndexConfig, default_config
from ..exceptions import IndexScoringError
from ..log import get_logger
from ..models import Job, UserProfile
from ..text import tokenize, tokenize_all

log = get_logger(__name__)

FIELDS = ('content', 'company', 'location', 'category')


def bounded_edit_distance(a: str, b: str, max_edits: int) -> Optional[int]:
    """
    Levenshtein distance between a and b, or None if it exceeds max_edits
    """
    distance = Levenshtein.distance(a, b, score_cutoff=max_edits)
    return distance if distance <= max_edits else None


def job_fields(job: Job) -> Dict[str, List[str]]:
    """Analyzed tokens of each indexed field"""
    return {
        'content': tokenize(job.title) + tokenize_all(job.required_skills) + tokenize(job.description),
        'company': tokenize(job.company),
        'location': tokenize(job.location),
        'category': tokenize(job.category),
    }


def build_field_index(corpus: Sequence[List[str]], config: IndexConfig) -> Optional[BM25Plus]:
    """
    BM25 statistics for one field, None when no document has tokens there

    delta = 0 turns BM25+ into plain BM25 with an idf that stays
    positive on small candidate sets.
    """
    if not any(corpus):
        return None
    return BM25Plus(list(corpus), k1=config.k1, b=config.b, delta=0.0)


class RelevanceIndex:
    """
    One document per candidate job with fields content (title + skills +
    description), company, location and category.

    Exact clauses are boosted by the profile weight scaled per field
    (company and location weigh more than generic content). Fuzzy clauses
    are boosted at a fraction of the profile weight and tolerate
    misspellings and stemming gaps.
    """

    def __init__(self, jobs: Sequence[Job], config: Optional[IndexConfig] = None):
        self.config = config or default_config.index
        self.jobs: List[Job] = list(jobs)
        self._term_cache: Dict[Tuple[str, str], Dict[int, float]] = {}
        self._fuzzy_cache: Dict[Tuple[str, str], List[Tuple[str, float]]] = {}

        try:
            corpora: Dict[str, List[List[str]]] = {name: [] for name in FIELDS}
            for job in self.jobs:
                for name, tokens in job_fields(job).items():
                    corpora[name].append(tokens)
            self.fields: Dict[str, Optional[BM25Plus]] = {
                name: build_field_index(corpus, self.config) for name, corpus in corpora.items()
            }
        except (AttributeError, TypeError, ValueError, ZeroDivisionError) as e:
            raise IndexScoringError(f"Failed to build relevance index: {e}") from e

        self._vocabulary: Dict[str, List[str]] = {
            name: list(bm25.idf) if bm25 is not None else []
            for name, bm25 in self.fields.items()
        }
        log.debug("Indexed %d candidate jobs", len(self.jobs))

    def field_boosts(self) -> Dict[str, float]:
        return {
            'content': self.config.content_boost,
            'company': self.config.company_boost,
            'location': self.config.location_boost,
            'category': self.config.category_boost,
        }

    def _bm25(self, field: str, term: str) -> Dict[int, float]:
        """Per-document BM25 weight of one term in one field"""
        key = (field, term)
        if key in self._term_cache:
            return self._term_cache[key]

        bm25 = self.fields[field]
        weights: Dict[int, float] = {}
        if bm25 is not None and term in bm25.idf:
            scores = bm25.get_scores([term])
            weights = {int(doc): float(scores[doc]) for doc in np.flatnonzero(scores)}

        self._term_cache[key] = weights
        return weights

    def _max_edits(self, token: str) -> int:
        if len(token) < self.config.fuzzy_min_length:
            return 0
        # 3-5 chars tolerate one edit, longer tokens the configured maximum
        if len(token) <= 5:
            return min(1, self.config.fuzzy_max_edits)
        return self.config.fuzzy_max_edits

    def _fuzzy_terms(self, field: str, token: str) -> List[Tuple[str, float]]:
        """Indexed terms within edit distance of token, with similarity"""
        key = (field, token)
        if key in self._fuzzy_cache:
            return self._fuzzy_cache[key]

        found = process.extract(
            token,
            self._vocabulary[field],
            scorer=Levenshtein.distance,
            processor=None,
            score_cutoff=self._max_edits(token),
            limit=None,
        )

        matches = []
        for term, edits, _ in found:
            similarity = 1.0 - edits / min(len(token), len(term))
            if similarity > 0:
                matches.append((term, similarity))

        self._fuzzy_cache[key] = matches
        return matches

    def score(self, profile: UserProfile) -> Dict[Job, float]:
        """
        Score every indexed job against the profile

        Args:
            profile: token -> weight (negative weights push scores down)

        Returns:
            job -> relevance score for jobs scoring above the
            low-confidence threshold
        """
        if not profile or not self.jobs:
            return {}

        try:
            doc_scores = self._score_docs(profile)
        except (ArithmeticError, TypeError, ValueError) as e:
            raise IndexScoringError(f"Relevance index query failed: {e}") from e

        results = {}
        for doc, score in doc_scores.items():
            if score > self.config.min_score:
                results[self.jobs[doc]] = score

        log.debug("Index matched %d docs, %d above %.2f", len(doc_scores), len(results), self.config.min_score)
        return results

    def _score_docs(self, profile: UserProfile) -> Dict[int, float]:
        doc_scores: Dict[int, float] = defaultdict(float)
        boosts = self.field_boosts()

        for token, weight in profile.items():
            if not token or not weight:
                continue

            for field in FIELDS:
                # Exact term clause
                exact_boost = weight * boosts[field]
                for doc, bm25 in self._bm25(field, token).items():
                    doc_scores[doc] += exact_boost * bm25

                # Fuzzy clause
                fuzzy_boost = weight * self.config.fuzzy_boost
                for term, similarity in self._fuzzy_terms(field, token):
                    for doc, bm25 in self._bm25(field, term).items():
                        doc_scores[doc] += fuzzy_boost * similarity * bm25

        return doc_scores


def score_jobs(
    profile: UserProfile,
    candidates: Sequence[Job],
    config: Optional[IndexConfig] = None
) -> Dict[Job, float]:
    """Build an ephemeral index over candidates and score them in one call"""
    if not profile or not candidates:
        return {}
    return RelevanceIndex(candidates, config).score(profile)
