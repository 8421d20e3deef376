"""
Job Recommendation Scoring Engine
Content-based + collaborative + hybrid job ranking

Components:
- text.py: Tokenizer and term-frequency vectors
- weighting.py: Interaction kind -> weight policy table
- similarity.py: Cosine / Jaccard similarity primitives
- content/: Profile builder, relevance index, extra-candidate booster
- collaborative/: User-user neighbor recommendations
- hybrid/: Trained snapshot, prediction and background training
- evaluate.py: Offline recommendation quality metrics
- service.py: Facade used by a serving layer
- config.py: Configuration settings
"""

from .config import Config, default_config, get_config, load_config
from .models import InteractionKind, Interaction, Job, RecommendationResult

__version__ = "1.0.0"

__all__ = [
    'Config',
    'default_config',
    'get_config',
    'load_config',
    'InteractionKind',
    'Interaction',
    'Job',
    'RecommendationResult',
]
