"""Shared fixtures for the recommendation engine tests."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from jobrec.data_processor import InteractionRepository, JobRepository
from jobrec.models import Interaction, InteractionKind, Job

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_interaction(user_id, kind, job=None, query=None, comment=None, minutes=0):
    """Interaction stamped from the weighting table, `minutes` after BASE_TIME."""
    return Interaction.create(
        user_id=user_id,
        kind=InteractionKind(kind),
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        job=job,
        query=query,
        comment_text=comment,
    )


@pytest.fixture
def catalog() -> dict[int, Job]:
    jobs = [
        Job(1, "Java Backend Engineer", "Build backend services", ("Java", "Spring"), "Acme", "Berlin", "Engineering"),
        Job(2, "Java Developer", "", (), "Globex", "Munich", "Engineering"),
        Job(3, "Graphic Designer", "", (), "Initech", "Paris", "Design"),
        Job(4, "Python Data Engineer", "ETL pipelines in python", ("Python", "SQL"), "Acme", "Berlin", "Data"),
        Job(5, "Frontend Developer", "React user interfaces", ("JavaScript", "React"), "Umbrella", "Remote", "Engineering"),
    ]
    return {job.id: job for job in jobs}


@pytest.fixture
def job_repo(catalog) -> JobRepository:
    return JobRepository(catalog.values())


def repo_of(*interactions) -> InteractionRepository:
    return InteractionRepository(interactions)
