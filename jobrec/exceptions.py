"""
Exception hierarchy for the recommendation engine
"""


class RecommenderError(Exception):
    """Base class for all engine errors"""


class ConfigError(RecommenderError):
    """Invalid configuration file or override"""


class DataLoadError(RecommenderError):
    """Job / interaction data could not be loaded"""


class IndexScoringError(RecommenderError):
    """
    Relevance index could not be built or queried.

    Recoverable: the caller may retry with a fresh index or degrade
    to the extra-candidate booster / hybrid path.
    """


class TrainingError(RecommenderError):
    """Hybrid model training failed"""


class TrainingCancelled(TrainingError):
    """Training was cancelled between phases"""
