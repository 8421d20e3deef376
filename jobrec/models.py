"""Data models for jobs, interactions and recommendations."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class InteractionKind(str, Enum):
    LIKE = "LIKE"
    DISLIKE = "DISLIKE"
    COMMENT = "COMMENT"
    APPLICATION = "APPLICATION"
    SEARCH = "SEARCH"


@dataclass(frozen=True)
class Job:
    id: int
    title: str = ""
    description: str = ""
    required_skills: Tuple[str, ...] = ()
    company: str = ""
    location: str = ""
    category: str = ""

    def __post_init__(self):
        # Accept a single skill or any iterable of skills but store a hashable tuple
        skills = self.required_skills
        if isinstance(skills, str):
            skills = (skills,) if skills else ()
        if not isinstance(skills, tuple):
            skills = tuple(skills or ())
        object.__setattr__(self, "required_skills", skills)


@dataclass(frozen=True)
class Interaction:
    user_id: int
    kind: InteractionKind
    timestamp: datetime
    job: Optional[Job] = None
    query: Optional[str] = None
    comment_text: Optional[str] = None
    weight: float = 0.0

    @classmethod
    def create(
        cls,
        user_id: int,
        kind: InteractionKind,
        timestamp: datetime,
        job: Optional[Job] = None,
        query: Optional[str] = None,
        comment_text: Optional[str] = None,
        weights=None,
    ) -> "Interaction":
        """Build an interaction, stamping its weight from the weighting table."""
        from .weighting import creation_weight

        kind = InteractionKind(kind)
        return cls(
            user_id=user_id,
            kind=kind,
            timestamp=timestamp,
            job=job,
            query=query,
            comment_text=comment_text,
            weight=creation_weight(kind, weights),
        )

    @property
    def job_id(self) -> Optional[int]:
        return self.job.id if self.job is not None else None

    def is_well_formed(self) -> bool:
        """SEARCH carries a query and no job; every other kind carries a job."""
        if self.kind is InteractionKind.SEARCH:
            return self.job is None and bool(self.query)
        return self.job is not None and self.query is None


@dataclass
class RecommendationResult:
    job_id: int
    title: str
    company: str
    score: float

    @classmethod
    def from_job(cls, job: Job, score: float) -> "RecommendationResult":
        return cls(job_id=job.id, title=job.title, company=job.company, score=float(score))

    def to_dict(self) -> dict:
        return {
            'job_id': self.job_id,
            'title': self.title,
            'company': self.company,
            'score': self.score,
        }


# user_id -> job_id -> summed interaction score
InteractionMatrix = Dict[int, Dict[int, float]]

# token -> accumulated weight
UserProfile = Dict[str, float]

