"""Comparators over structured movie fields."""

from typing import Optional, Sequence

def genre_similarity(genres1: Optional[Sequence[str]], genres2: Optional[Sequence[str]]) -> float:
    """Jaccard overlap of case-insensitive genre labels; 0 if either is missing."""
    if not genres1 or not genres2:
        return 0.0

    set1 = {g.lower() for g in genres1}
    set2 = {g.lower() for g in genres2}
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)

def rating_similarity(rating1: float, rating2: float) -> float:
    """
    Closeness of two ratings on the 0-10 scale.

    Both ratings must lie in [0, 10]; other values give results outside
    [0, 1] and are not corrected here.
    """
    return 1.0 - abs(rating1 - rating2) / 10.0

def director_similarity(director1: Optional[str], director2: Optional[str]) -> float:
    """1 for a case-insensitive exact match, 0 otherwise or when unknown."""
    if not director1 or not director2:
        return 0.0
    return 1.0 if director1.lower() == director2.lower() else 0.0
