"""
Text utilities: tokenizer and term-frequency vectors
"""

import re
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .models import Job

_SPLIT_RE = re.compile(r'\W+')


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lowercase word tokens

    >>> tokenize("Senior  Go-Dev!!")
    ['senior', 'go', 'dev']
    """
    if text is None or not text.strip():
        return []
    return [t for t in _SPLIT_RE.split(text.lower()) if t]


def tokenize_all(texts: Iterable[Optional[str]]) -> List[str]:
    tokens: List[str] = []
    for text in texts:
        tokens.extend(tokenize(text))
    return tokens


def job_tokens(job: Job) -> set:
    """Distinct tokens of a job's title, description and skills"""
    tokens = set(tokenize(job.title))
    tokens.update(tokenize(job.description))
    tokens.update(tokenize_all(job.required_skills))
    return tokens


def term_frequencies(text: Optional[str]) -> Dict[str, float]:
    """Token -> relative frequency within the text"""
    tokens = tokenize(text)
    if not tokens:
        return {}
    total = len(tokens)
    return {token: count / total for token, count in Counter(tokens).items()}


def text_similarity(text1: Optional[str], text2: Optional[str]) -> float:
    """Cosine similarity of two texts' term-frequency vectors"""
    from .similarity import cosine
    return cosine(term_frequencies(text1), term_frequencies(text2))
