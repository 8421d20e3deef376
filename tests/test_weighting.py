"""Tests for the interaction weighting table."""

from __future__ import annotations

import pytest

from jobrec.config import ProfileConfig
from jobrec.models import InteractionKind, Job
from jobrec.weighting import build_policy_table, creation_weight, field_weights

from conftest import make_interaction


def test_policy_table_covers_every_kind() -> None:
    table = build_policy_table()
    assert set(table) == set(InteractionKind)
    assert table[InteractionKind.SEARCH].uses_query
    assert not table[InteractionKind.SEARCH].uses_job
    assert table[InteractionKind.COMMENT].comment_bonus == pytest.approx(0.5)
    assert table[InteractionKind.APPLICATION].scale == pytest.approx(0.5)
    assert table[InteractionKind.DISLIKE].scale < 0


def test_policy_table_follows_config() -> None:
    table = build_policy_table(ProfileConfig(applied_base_weight=2.0, applied_boost=1.5))
    assert table[InteractionKind.APPLICATION].scale == pytest.approx(3.0)


def test_field_weights_order() -> None:
    weights = field_weights()
    assert weights['title'] > weights['skills'] > weights['description']


@pytest.mark.parametrize("kind, expected", [
    ("LIKE", 1.0), ("DISLIKE", -1.0), ("COMMENT", 0.8), ("APPLICATION", 1.5), ("SEARCH", 0.5),
])
def test_creation_weights(kind, expected) -> None:
    assert creation_weight(InteractionKind(kind)) == pytest.approx(expected)


def test_interaction_create_stamps_weight() -> None:
    job = Job(1, "Backend Engineer")
    interaction = make_interaction(1, "APPLICATION", job=job)
    assert interaction.weight == pytest.approx(1.5)
    assert interaction.is_well_formed()


def test_well_formed_invariant() -> None:
    job = Job(1, "Backend Engineer")
    assert make_interaction(1, "SEARCH", query="java").is_well_formed()
    assert not make_interaction(1, "SEARCH").is_well_formed()
    assert not make_interaction(1, "LIKE").is_well_formed()
    assert not make_interaction(1, "LIKE", job=job, query="java").is_well_formed()


def test_job_skills_are_stored_as_tuple() -> None:
    assert Job(1, "t", "d", "Python").required_skills == ("Python",)
    assert Job(1, "t", "d", ["Python", "SQL"]).required_skills == ("Python", "SQL")
    assert Job(1, "t", "d", "").required_skills == ()
    assert Job(1, "t", "d", None).required_skills == ()
