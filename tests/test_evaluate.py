"""Tests for the offline evaluator."""

from __future__ import annotations

import pytest

from jobrec.evaluate import METRIC_NAMES, RecommendationEvaluator, evaluate_users, ground_truth_tokens
from jobrec.models import Job

from conftest import make_interaction

JAVA_DEV = Job(2, "Java Developer")
DESIGNER = Job(3, "Graphic Designer")


def test_empty_inputs_give_zero_metrics() -> None:
    evaluator = RecommendationEvaluator()
    expected = {name: 0.0 for name in METRIC_NAMES}
    assert evaluator.evaluate([], [make_interaction(1, "LIKE", job=JAVA_DEV)]) == expected
    assert evaluator.evaluate([JAVA_DEV], []) == expected


def test_ground_truth_combines_queries_and_jobs() -> None:
    truth = ground_truth_tokens([
        make_interaction(1, "SEARCH", query="Remote Python"),
        make_interaction(1, "LIKE", job=JAVA_DEV),
    ])
    assert truth == {"remote", "python", "java", "developer"}


@pytest.mark.parametrize(
    "tokens, expected",
    [
        ({"java", "developer"}, 1.0),
        ({"java", "designer"}, 0.9),
        ({"graphic", "designer"}, 0.0),
        (set(), 0.0),
    ],
)
def test_relevance_strength_levels(tokens, expected) -> None:
    evaluator = RecommendationEvaluator()
    assert evaluator.relevance_strength({"java", "developer"}, tokens) == expected


def test_metrics() -> None:
    metrics = RecommendationEvaluator().evaluate(
        [JAVA_DEV, DESIGNER],
        [make_interaction(1, "LIKE", job=JAVA_DEV)],
    )
    assert metrics["Precision"] == pytest.approx(0.5)
    assert metrics["Accuracy"] == metrics["Precision"]
    assert metrics["Recall"] == pytest.approx(1.0)
    assert metrics["F1 Score"] == pytest.approx(2 * 0.5 / 1.5)
    assert metrics["Relevance Strength"] == pytest.approx(1.0)


def test_recall_is_capped() -> None:
    recommended = [Job(i, "Java Developer") for i in range(3)]
    interactions = [make_interaction(1, "LIKE", job=JAVA_DEV)]
    metrics = RecommendationEvaluator().evaluate(recommended, interactions)
    assert metrics["Recall"] == 1.0
    assert metrics["Precision"] == pytest.approx(1.0)


def test_evaluate_users_averages() -> None:
    history = {
        1: [make_interaction(1, "LIKE", job=JAVA_DEV)],
        2: [make_interaction(2, "LIKE", job=DESIGNER)],
    }
    summary = evaluate_users(lambda user_id: [JAVA_DEV], history)
    assert summary["Users"] == 2.0
    assert summary["Precision"] == pytest.approx(0.5)
    assert summary["Relevance Strength"] == pytest.approx(0.5)
