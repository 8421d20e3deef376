"""Tests for the recommendation service wiring and fallback."""

from __future__ import annotations

import pytest

from jobrec.config import Config
from jobrec.service import RecommendationService

from conftest import make_interaction, repo_of


@pytest.fixture
def service(job_repo, catalog):
    interactions = repo_of(
        make_interaction(1, "LIKE", job=catalog[1], minutes=0),
        make_interaction(2, "LIKE", job=catalog[1], minutes=1),
        make_interaction(2, "LIKE", job=catalog[2], minutes=2),
        # Only a dislike: the content path keeps nothing above threshold
        make_interaction(3, "DISLIKE", job=catalog[3], minutes=3),
    )
    svc = RecommendationService(job_repo, interactions, Config())
    yield svc
    svc.close()


def test_hybrid_is_empty_until_trained(service) -> None:
    assert service.hybrid(1) == []
    snapshot = service.train_model()
    assert service.store.current() is snapshot
    assert service.hybrid(1)


def test_content_based(service) -> None:
    ids = [r.job_id for r in service.content_based(1)]
    assert 2 in ids
    assert 3 not in ids


def test_collaborative(service) -> None:
    # cos((1), (1, 1)) = 0.707 > 0.7
    assert [r.job_id for r in service.collaborative(1)] == [2]


def test_recommend_falls_back_to_hybrid(service) -> None:
    assert service.content_based(3) == []
    assert service.recommend(3) == []

    service.train_model()
    fallback = service.recommend(3)
    assert fallback
    assert 3 not in [r.job_id for r in fallback]


def test_refresh_model_runs_in_background(service) -> None:
    task = service.refresh_model()
    snapshot = task.result(timeout=10)
    assert service.store.current() is snapshot
    assert snapshot.num_users == 3
