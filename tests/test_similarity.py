"""Tests for the cosine / Jaccard similarity primitives."""

from __future__ import annotations

import pytest

from jobrec.similarity import cosine, cosine_to_many, jaccard, top_k


def test_cosine_with_itself_is_one() -> None:
    v = {"python": 2.0, "java": 1.0, "sql": 0.5}
    assert cosine(v, v) == pytest.approx(1.0)


def test_cosine_zero_and_disjoint_vectors() -> None:
    v = {"python": 2.0}
    assert cosine(v, {"python": 0.0}) == 0.0
    assert cosine(v, {}) == 0.0
    assert cosine(v, {"java": 3.0}) == 0.0


def test_cosine_is_symmetric() -> None:
    a = {1: 1.5, 2: -1.0, 3: 0.8}
    b = {1: 1.0, 3: 1.0, 4: 2.0}
    assert cosine(a, b) == pytest.approx(cosine(b, a))


def test_cosine_uses_key_union_norms() -> None:
    # Extra key in b lowers the similarity below 1
    assert cosine({"a": 1.0}, {"a": 1.0, "b": 1.0}) == pytest.approx(1 / 2 ** 0.5)


def test_cosine_to_many_matches_pairwise() -> None:
    target = {1: 1.0, 2: 1.0}
    others = [{1: 1.0, 2: 1.0}, {3: 1.0}, {}, {1: 2.0}]
    sims = cosine_to_many(target, others)
    assert len(sims) == 4
    for sim, other in zip(sims, others):
        assert sim == pytest.approx(cosine(target, other))


def test_cosine_to_many_empty() -> None:
    assert len(cosine_to_many({1: 1.0}, [])) == 0


def test_jaccard() -> None:
    assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
    assert jaccard(set(), set()) == 0.0


def test_top_k_is_stable_for_ties() -> None:
    ranked = top_k({"x": 1.0, "y": 2.0, "z": 1.0}, 3)
    assert ranked == [("y", 2.0), ("x", 1.0), ("z", 1.0)]
    assert len(top_k({"x": 1.0, "y": 2.0}, 1)) == 1


def test_cosine_with_negative_weights() -> None:
    assert cosine({1: 1.0, 2: -1.0}, {1: 1.0, 2: 1.0}) == pytest.approx(0.0)
    assert cosine({1: 1.0}, {1: -2.0}) == pytest.approx(-1.0)
