"""
Hybrid Jaccard + Shared-Item Recommendation
Immutable trained snapshot with background refresh
"""

from .model import HybridRecommender, HybridSnapshot, train
from .trainer import ModelStore, ModelTrainer, TrainingTask

__all__ = [
    'HybridRecommender',
    'HybridSnapshot',
    'train',
    'ModelStore',
    'ModelTrainer',
    'TrainingTask',
]
