"""Tests for the extra-candidate keyword booster."""

from __future__ import annotations

import pytest

from jobrec.content.booster import ExtraCandidateBooster
from jobrec.models import Job


def test_title_match_weights() -> None:
    booster = ExtraCandidateBooster()
    job = Job(1, "senior java role", "", (), "", "", "")
    # Case-sensitive hit on the title only: 1.0 x 1.2 overall boost
    assert booster.score_job(job, ["java"]) == pytest.approx(1.2)


def test_case_insensitive_match_is_discounted() -> None:
    booster = ExtraCandidateBooster()
    job = Job(1, "Senior Java Role", "", (), "", "", "")
    assert booster.score_job(job, ["java"]) == pytest.approx(0.9 * 1.2)


def test_score_is_averaged_over_tokens() -> None:
    booster = ExtraCandidateBooster()
    job = Job(1, "", "", (), "", "", "data")
    # Category hit (0.7) for one of two tokens
    assert booster.score_job(job, ["data", "rust"]) == pytest.approx(0.7 / 2 * 1.2)


def test_score_is_capped() -> None:
    booster = ExtraCandidateBooster()
    job = Job(1, "java", "java", ("java", "java"), "java", "java", "java")
    assert booster.score_job(job, ["java"]) == pytest.approx(1.2)


def test_score_skips_excluded_and_already_scored() -> None:
    booster = ExtraCandidateBooster()
    applied = Job(1, "java developer")
    indexed = Job(2, "java engineer")
    extra = Job(3, "java architect")
    scores = booster.score(
        "Java",
        [applied, indexed, extra],
        exclude_ids={1},
        already_scored=[indexed],
    )
    assert list(scores) == [extra]


def test_empty_query_scores_nothing() -> None:
    assert ExtraCandidateBooster().score("  ", [Job(1, "java")]) == {}
