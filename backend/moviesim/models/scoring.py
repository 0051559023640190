"""Combines text and attribute similarity into one movie score."""

from enum import Enum
from typing import Optional

from ..data.movie import Movie
from .attributes import director_similarity, genre_similarity, rating_similarity
from .similarity import (
    combined_similarity,
    cosine_similarity,
    jaccard_similarity,
    levenshtein_similarity,
)
from .text import TextNormalizer

class Algorithm(str, Enum):
    """Text similarity strategies."""
    JACCARD = "jaccard"
    COSINE = "cosine"
    LEVENSHTEIN = "levenshtein"
    COMBINED = "combined"

# Director carries a tenth of the rating weight
REFERENCE_WEIGHTS = {
    "text": 0.365,
    "genre": 0.25,
    "rating": 0.35,
    "director": 0.035,
}

def text_similarity(text1: str,
                    text2: str,
                    algorithm: Algorithm = Algorithm.COMBINED,
                    normalizer: Optional[TextNormalizer] = None) -> float:
    """Score two texts with the selected algorithm."""
    algorithm = Algorithm(algorithm)
    if algorithm is Algorithm.JACCARD:
        return jaccard_similarity(text1, text2, normalizer)
    if algorithm is Algorithm.COSINE:
        return cosine_similarity(text1, text2, normalizer)
    if algorithm is Algorithm.LEVENSHTEIN:
        return levenshtein_similarity(text1, text2)
    return combined_similarity(text1, text2, normalizer)

def attribute_similarity(movie: Movie, reference: Movie) -> float:
    """Weighted genre, rating and director agreement with the reference movie."""
    return (
        genre_similarity(movie.genres, reference.genres) * REFERENCE_WEIGHTS["genre"]
        + rating_similarity(movie.rating, reference.rating) * REFERENCE_WEIGHTS["rating"]
        + director_similarity(movie.director, reference.director) * REFERENCE_WEIGHTS["director"]
    )

def movie_similarity(movie: Movie,
                     query: str,
                     algorithm: Algorithm = Algorithm.COMBINED,
                     reference: Optional[Movie] = None,
                     normalizer: Optional[TextNormalizer] = None) -> float:
    """
    Similarity of ``movie`` to a query text.

    The movie side is its description (twice) plus genres; the title is left
    out so titles do not dominate. With a reference movie, genre, rating and
    director agreement are blended in; otherwise the text score is returned.
    """
    score = text_similarity(movie.comparison_text, query, algorithm, normalizer)
    if reference is None:
        return score
    return score * REFERENCE_WEIGHTS["text"] + attribute_similarity(movie, reference)
