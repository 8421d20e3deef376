"""
Data access boundary
In-memory job / interaction repositories loaded from JSONL or CSV
"""

from collections import defaultdict
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .config import DataConfig, InteractionWeightConfig, default_config
from .exceptions import DataLoadError
from .log import get_logger
from .models import Interaction, InteractionKind, Job

log = get_logger(__name__)


class JobRepository:
    """
    Read-only job lookup

    fetch-all, fetch-by-id and keyword substring search across
    title / description / skills / company / location / category
    """

    def __init__(self, jobs: Iterable[Job] = ()):
        self._jobs: Dict[int, Job] = {}
        for job in jobs:
            self._jobs[job.id] = job

    def __len__(self) -> int:
        return len(self._jobs)

    def all(self) -> List[Job]:
        return list(self._jobs.values())

    def get(self, job_id: int) -> Optional[Job]:
        return self._jobs.get(job_id)

    def search_all_fields(self, query: str) -> List[Job]:
        """Jobs with the whole query as a case-insensitive substring of any field"""
        needle = (query or "").lower()
        if not needle.strip():
            return []

        matches = []
        for job in self._jobs.values():
            haystacks = [job.title, job.description, job.company, job.location, job.category]
            haystacks.extend(job.required_skills)
            if any(needle in (h or "").lower() for h in haystacks):
                matches.append(job)
        return matches


class InteractionRepository:
    """
    Read-only interaction lookup

    fetch-all for one user, most-recent-N for one user (newest first),
    and fetch-all (global) for training
    """

    def __init__(self, interactions: Iterable[Interaction] = ()):
        self._all: List[Interaction] = list(interactions)
        self._by_user: Dict[int, List[Interaction]] = defaultdict(list)
        for interaction in self._all:
            self._by_user[interaction.user_id].append(interaction)

    def __len__(self) -> int:
        return len(self._all)

    def all(self) -> List[Interaction]:
        return list(self._all)

    def user_ids(self) -> List[int]:
        return list(self._by_user.keys())

    def for_user(self, user_id: int) -> List[Interaction]:
        return list(self._by_user.get(user_id, []))

    def recent_for_user(self, user_id: int, limit: int = 10) -> List[Interaction]:
        """Most recent interactions of a user, newest first"""
        ordered = sorted(self.for_user(user_id), key=lambda i: i.timestamp, reverse=True)
        return ordered[:limit]

    def by_user(self) -> Dict[int, List[Interaction]]:
        return {user_id: list(items) for user_id, items in self._by_user.items()}


def _read_table(filepath: Path) -> pd.DataFrame:
    if not filepath.exists():
        raise DataLoadError(f"Not found: {filepath}")

    try:
        if filepath.suffix == '.csv':
            return pd.read_csv(filepath)
        return pd.read_json(filepath, lines=True)
    except ValueError as e:
        raise DataLoadError(f"Could not parse {filepath}: {e}") from e


def _optional_str(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    text = str(value)
    return text if text else None


def _parse_skills(value) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(s) for s in value if s]
    text = _optional_str(value)
    if text is None:
        return []
    # CSV files store skills pipe- or comma-separated
    sep = '|' if '|' in text else ','
    return [s.strip() for s in text.split(sep) if s.strip()]


def load_jobs(filepath: Union[str, Path]) -> List[Job]:
    """
    Load jobs from JSONL / CSV

    Expected columns: id, title, description, required_skills,
    company, location, category
    """
    df = _read_table(Path(filepath))
    if 'id' not in df.columns:
        raise DataLoadError(f"{filepath}: missing 'id' column")

    jobs = []
    for row in df.to_dict(orient='records'):
        jobs.append(Job(
            id=int(row['id']),
            title=_optional_str(row.get('title')) or "",
            description=_optional_str(row.get('description')) or "",
            required_skills=tuple(_parse_skills(row.get('required_skills'))),
            company=_optional_str(row.get('company')) or "",
            location=_optional_str(row.get('location')) or "",
            category=_optional_str(row.get('category')) or "",
        ))

    log.info("Loaded %d jobs from %s", len(jobs), filepath)
    return jobs


def load_interactions(
    filepath: Union[str, Path],
    jobs: JobRepository,
    weights: Optional[InteractionWeightConfig] = None
) -> List[Interaction]:
    """
    Load interactions from JSONL / CSV

    Expected columns: user_id, kind, timestamp, job_id, query,
    comment_text and optionally weight (stamped from the weighting
    table when absent). Rows with an unknown kind or an unknown
    job id are skipped.
    """
    df = _read_table(Path(filepath))
    missing = {'user_id', 'kind', 'timestamp'} - set(df.columns)
    if missing:
        raise DataLoadError(f"{filepath}: missing columns {sorted(missing)}")

    interactions = []
    skipped = 0

    for row in df.to_dict(orient='records'):
        try:
            kind = InteractionKind(str(row['kind']).upper())
        except ValueError:
            skipped += 1
            continue

        job = None
        job_id = row.get('job_id')
        if job_id is not None and not pd.isna(job_id):
            job = jobs.get(int(job_id))
            if job is None:
                skipped += 1
                continue

        timestamp = pd.Timestamp(row['timestamp']).to_pydatetime()
        interaction = Interaction.create(
            user_id=int(row['user_id']),
            kind=kind,
            timestamp=timestamp,
            job=job,
            query=_optional_str(row.get('query')),
            comment_text=_optional_str(row.get('comment_text')),
            weights=weights,
        )

        weight = row.get('weight')
        if weight is not None and not pd.isna(weight):
            interaction = replace(interaction, weight=float(weight))
        interactions.append(interaction)

    if skipped:
        log.warning("Skipped %d interaction rows in %s", skipped, filepath)
    log.info("Loaded %d interactions from %s", len(interactions), filepath)
    return interactions


def load_dataset(
    config: Optional[DataConfig] = None,
    weights: Optional[InteractionWeightConfig] = None
):
    """
    Load both repositories from the configured paths

    Returns:
        (JobRepository, InteractionRepository)
    """
    cfg = config or default_config.data
    jobs = JobRepository(load_jobs(cfg.jobs_path))
    interactions = InteractionRepository(load_interactions(cfg.interactions_path, jobs, weights))
    return jobs, interactions
