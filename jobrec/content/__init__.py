"""
Content-based recommendation: profile, relevance index, keyword booster
"""

from .booster import ExtraCandidateBooster
from .index import RelevanceIndex, score_jobs
from .profile import ProfileBuilder, build_user_profile
from .recommender import ContentBasedRecommender

__all__ = [
    'ExtraCandidateBooster',
    'RelevanceIndex',
    'score_jobs',
    'ProfileBuilder',
    'build_user_profile',
    'ContentBasedRecommender',
]
