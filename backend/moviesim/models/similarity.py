"""Text similarity primitives. Every score is in [0, 1]."""

from collections import Counter
from typing import Optional
import numpy as np

from .text import TextNormalizer, default_normalizer

# Cosine carries most of the weight for descriptions, Levenshtein the least
TEXT_WEIGHTS = {
    "cosine": 0.6,
    "jaccard": 0.3,
    "levenshtein": 0.1,
}

def jaccard_similarity(text1: str, text2: str, normalizer: Optional[TextNormalizer] = None) -> float:
    """
    Intersection over union of the two normalized token sets.

    Returns 0 when either side has no tokens.
    """
    normalizer = normalizer or default_normalizer
    set1 = set(normalizer.normalize(text1))
    set2 = set(normalizer.normalize(text2))
    if not set1 or not set2:
        return 0.0

    intersection = len(set1 & set2)
    union = len(set1) + len(set2) - intersection
    return intersection / union if union else 0.0

def cosine_similarity(text1: str, text2: str, normalizer: Optional[TextNormalizer] = None) -> float:
    """
    Cosine of the angle between the term-frequency vectors of both texts.

    Returns 0 when either vector has zero magnitude.
    """
    normalizer = normalizer or default_normalizer
    freq1 = Counter(normalizer.normalize(text1))
    freq2 = Counter(normalizer.normalize(text2))
    if not freq1 or not freq2:
        return 0.0

    vocabulary = sorted(set(freq1) | set(freq2))
    vector1 = np.array([freq1[word] for word in vocabulary], dtype=float)
    vector2 = np.array([freq2[word] for word in vocabulary], dtype=float)

    magnitude = np.linalg.norm(vector1) * np.linalg.norm(vector2)
    if magnitude == 0:
        return 0.0
    score = float(np.dot(vector1, vector2) / magnitude)
    return min(1.0, max(0.0, score))

def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Compute the Levenshtein edit distance between two strings s1 and s2.
    The comparison is case-insensitive and uses two rows of the DP matrix.

    When the lengths differ by more than half of the longer string, the
    longer length is returned as a worst-case approximation instead of the
    exact distance.
    """
    s1, s2 = s1.lower(), s2.lower()
    m, n = len(s1), len(s2)

    longest = max(m, n)
    if abs(m - n) > longest * 0.5:
        return longest

    prev_row = list(range(n + 1))
    curr_row = [0] * (n + 1)

    for i in range(1, m + 1):
        curr_row[0] = i
        for j in range(1, n + 1):
            if s1[i - 1] == s2[j - 1]:
                curr_row[j] = prev_row[j - 1]
            else:
                delete = prev_row[j] + 1
                insert = curr_row[j - 1] + 1
                replace = prev_row[j - 1] + 1
                curr_row[j] = min(insert, delete, replace)
        prev_row, curr_row = curr_row, prev_row

    return prev_row[n]

def levenshtein_similarity(s1: str, s2: str) -> float:
    """1 - distance / longest length; two empty strings are identical."""
    max_length = max(len(s1), len(s2))
    if max_length == 0:
        return 1.0
    # lower() can change length for some non-ASCII characters
    similarity = 1.0 - levenshtein_distance(s1, s2) / max_length
    return min(1.0, max(0.0, similarity))

def combined_similarity(text1: str, text2: str, normalizer: Optional[TextNormalizer] = None) -> float:
    """Weighted blend of cosine, Jaccard and Levenshtein similarity."""
    cosine = cosine_similarity(text1, text2, normalizer)
    jaccard = jaccard_similarity(text1, text2, normalizer)
    levenshtein = levenshtein_similarity(text1, text2)
    return (
        cosine * TEXT_WEIGHTS["cosine"]
        + jaccard * TEXT_WEIGHTS["jaccard"]
        + levenshtein * TEXT_WEIGHTS["levenshtein"]
    )
