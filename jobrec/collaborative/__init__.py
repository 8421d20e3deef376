"""
Collaborative filtering: user-user cosine neighbors
"""

from .model import CollaborativeRecommender, build_interaction_matrix, user_item_vector

__all__ = ['CollaborativeRecommender', 'build_interaction_matrix', 'user_item_vector']
