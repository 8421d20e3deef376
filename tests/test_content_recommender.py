"""Tests for the end-to-end content-based path."""

from __future__ import annotations

from unittest import mock

from jobrec.content import ContentBasedRecommender
from jobrec.content import recommender as content_module
from jobrec.data_processor import JobRepository
from jobrec.exceptions import IndexScoringError
from jobrec.models import Job

from conftest import make_interaction, repo_of

J1 = Job(1, "Java Backend Engineer")
J2 = Job(2, "Java Developer")
J3 = Job(3, "Graphic Designer")


def _scenario():
    jobs = JobRepository([J1, J2, J3])
    interactions = repo_of(
        make_interaction(7, "SEARCH", query="java backend", minutes=0),
        make_interaction(7, "APPLICATION", job=J1, minutes=5),
    )
    return ContentBasedRecommender(jobs, interactions)


def test_end_to_end_scenario() -> None:
    results = _scenario().recommend(7)
    ids = [r.job_id for r in results]
    # Already applied
    assert 1 not in ids
    assert ids[0] == 2
    # J3 shares nothing with the profile and falls below the threshold
    assert 3 not in ids


def test_results_carry_title_company_and_sorted_scores(catalog) -> None:
    jobs = JobRepository(catalog.values())
    interactions = repo_of(
        make_interaction(1, "LIKE", job=catalog[4], minutes=1),
        make_interaction(1, "SEARCH", query="python engineer", minutes=2),
    )
    results = ContentBasedRecommender(jobs, interactions).recommend(1)
    assert results
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0].title == jobs.get(results[0].job_id).title


def test_dynamic_threshold() -> None:
    rec = _scenario()
    assert rec.threshold_for(1) == 0.3
    assert rec.threshold_for(2) == 0.5


def test_unknown_user_gets_empty_list() -> None:
    assert _scenario().recommend(999) == []


def test_no_candidates_left() -> None:
    jobs = JobRepository([J1])
    interactions = repo_of(make_interaction(7, "APPLICATION", job=J1))
    assert ContentBasedRecommender(jobs, interactions).recommend(7) == []


def test_index_failure_degrades_to_booster() -> None:
    rec = _scenario()
    with mock.patch.object(content_module, "score_jobs", side_effect=IndexScoringError("boom")):
        results = rec.recommend(7)
    # The keyword lookup for "java backend" only finds J1, which is applied
    assert results == []

    jobs = JobRepository([J1, J2, Job(4, "Java backend lead")])
    interactions = repo_of(
        make_interaction(7, "SEARCH", query="java backend", minutes=0),
        make_interaction(7, "APPLICATION", job=J1, minutes=5),
    )
    with mock.patch.object(content_module, "score_jobs", side_effect=IndexScoringError("boom")):
        results = ContentBasedRecommender(jobs, interactions).recommend(7)
    assert [r.job_id for r in results] == [4]


def test_recent_window_is_bounded() -> None:
    jobs = JobRepository([J1, J2, J3])
    old = [make_interaction(7, "SEARCH", query="graphic designer", minutes=i) for i in range(3)]
    new = [make_interaction(7, "SEARCH", query="java", minutes=100 + i) for i in range(10)]
    rec = ContentBasedRecommender(jobs, repo_of(*old, *new))
    ids = [r.job_id for r in rec.recommend(7)]
    assert 3 not in ids
