"""Tests for attribute comparators and score combination."""

import pytest

from moviesim.data.movie import Movie
from moviesim.models.attributes import director_similarity, genre_similarity, rating_similarity
from moviesim.models.scoring import (
    REFERENCE_WEIGHTS,
    Algorithm,
    attribute_similarity,
    movie_similarity,
    text_similarity,
)
from moviesim.models.similarity import combined_similarity, jaccard_similarity

class TestAttributes:
    """Test structured field comparators."""

    def test_genre_overlap_ignores_case(self):
        """Test genre overlap ignores label case."""
        assert genre_similarity(["Action", "Sci-Fi"], ["action", "Drama"]) == pytest.approx(1 / 3)

    def test_genre_missing(self):
        """Test missing genres score 0."""
        assert genre_similarity(None, ["Drama"]) == 0.0
        assert genre_similarity([], ["Drama"]) == 0.0
        assert genre_similarity(["Drama"], []) == 0.0

    def test_rating(self):
        """Test rating closeness on the 0-10 scale."""
        assert rating_similarity(8.0, 6.0) == pytest.approx(0.8)
        assert rating_similarity(7.5, 7.5) == 1.0
        assert rating_similarity(0.0, 10.0) == 0.0

    def test_director(self):
        """Test director equality and unknown directors."""
        assert director_similarity("Christopher Nolan", "christopher nolan") == 1.0
        assert director_similarity("Christopher Nolan", "Ridley Scott") == 0.0
        assert director_similarity(None, "Ridley Scott") == 0.0
        assert director_similarity("", "") == 0.0

class TestTextSimilarity:
    """Test algorithm dispatch."""

    def test_dispatch(self):
        """Test each algorithm name picks its measure."""
        text1, text2 = "the great movie", "a great film"
        assert text_similarity(text1, text2, Algorithm.JACCARD) == jaccard_similarity(text1, text2)
        assert text_similarity(text1, text2, "jaccard") == jaccard_similarity(text1, text2)
        assert text_similarity(text1, text2) == combined_similarity(text1, text2)

    def test_unknown_algorithm(self):
        """Test an unknown algorithm raises ValueError."""
        with pytest.raises(ValueError):
            text_similarity("a", "b", "bm25")

class TestMovieSimilarity:
    """Test reference-movie weighting."""

    @pytest.fixture
    def reference(self):
        return Movie(id="r", title="Heat", rating=8.3, genres=["Action", "Crime"],
                     description="A group of professional bank robbers feel the heat from police.",
                     director="Michael Mann")

    @pytest.fixture
    def twin(self):
        return Movie(id="t", title="Thief", rating=8.3, genres=["crime", "action"],
                     description="An expert safecracker wants out after one last score.",
                     director="michael mann")

    def test_weights_sum_to_one(self):
        """Test the reference weights sum to 1."""
        assert sum(REFERENCE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_without_reference_is_text_only(self, twin):
        """Test the score is text-only without a reference."""
        query = "safecracker heist"
        assert movie_similarity(twin, query) == text_similarity(twin.comparison_text, query)

    def test_matching_attributes_contribute_their_full_weight(self, reference, twin):
        """Test matching attributes add their full weight."""
        assert attribute_similarity(twin, reference) == pytest.approx(0.635)

        score = movie_similarity(twin, reference.reference_text, Algorithm.COMBINED, reference)
        text = text_similarity(twin.comparison_text, reference.reference_text)
        assert score == pytest.approx(0.635 + 0.365 * text)
        assert score >= 0.635

    def test_unknown_director_is_neutral(self, reference):
        """Test an unknown director adds nothing."""
        other = Movie(id="o", title="Ronin", rating=8.3, genres=["Action", "Crime"])
        assert attribute_similarity(other, reference) == pytest.approx(0.25 + 0.35)

    def test_comparison_text_weights_description_twice(self, twin):
        """Test the scored text repeats the description."""
        assert twin.comparison_text.count(twin.description) == 2
        assert twin.comparison_text.endswith("crime action")
