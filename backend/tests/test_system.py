"""System tests for configuration, caching and module wiring."""

import threading
import pytest

from moviesim.service.cache import BoundedCache, NullCache
from moviesim.service.config import Config

class TestSystemSetup:
    """Test system setup and configuration."""

    def test_config_defaults(self):
        """Test configuration defaults."""
        defaults = Config()
        assert defaults.CATALOG_PATH == "backend/data/movies.json"
        assert defaults.NORMALIZE_CACHE_SIZE == 1000
        assert defaults.DEFAULT_TOP_N == 6
        assert defaults.MIN_MATCH_CONFIDENCE == 0.3
        assert defaults.API_HOST == "0.0.0.0"
        assert defaults.API_PORT == 8000

    def test_config_from_env(self, monkeypatch):
        """Test environment overrides keep field types."""
        monkeypatch.setenv("MOVIESIM_DEFAULT_TOP_N", "10")
        monkeypatch.setenv("MOVIESIM_MIN_MATCH_CONFIDENCE", "0.5")
        monkeypatch.setenv("MOVIESIM_CATALOG_PATH", "/tmp/movies.csv")

        loaded = Config.from_env()
        assert loaded.DEFAULT_TOP_N == 10
        assert loaded.MIN_MATCH_CONFIDENCE == 0.5
        assert loaded.CATALOG_PATH == "/tmp/movies.csv"

    def test_imports(self):
        """Test that all modules can be imported."""
        try:
            from moviesim.models.text import normalize
            from moviesim.models.similarity import combined_similarity
            from moviesim.models.scoring import movie_similarity
            from moviesim.pipeline.resolve import find_closest_match
            from moviesim.pipeline.rank import get_recommendations
            from moviesim.service.api import app
            from moviesim.scripts.recommend import main
        except ImportError as e:
            pytest.fail(f"Failed to import module: {e}")

class TestBoundedCache:
    """Test the bounded normalizer cache."""

    def test_get_set(self):
        """Test round trip and hit/miss counters."""
        cache = BoundedCache(2)
        assert cache.get("a") is None
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert cache.stats()["hits"] == 1
        assert cache.stats()["misses"] == 1

    def test_evicts_oldest(self):
        """Test the oldest entry is evicted on overflow."""
        cache = BoundedCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        assert "a" not in cache
        assert len(cache) == 2
        assert cache.stats()["evictions"] == 1

    def test_overwrite_does_not_evict(self):
        """Test overwriting a key keeps the size."""
        cache = BoundedCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 3)
        assert cache.get("a") == 3
        assert len(cache) == 2

    def test_zero_size_stores_nothing(self):
        """Test a zero-size cache stays empty."""
        cache = BoundedCache(0)
        cache.set("a", 1)
        assert len(cache) == 0

    def test_negative_size(self):
        """Test a negative size is rejected."""
        with pytest.raises(ValueError):
            BoundedCache(-1)

    def test_clear(self):
        """Test clear drops entries and statistics."""
        cache = BoundedCache(2)
        cache.set("a", 1)
        cache.get("a")
        cache.clear()
        assert len(cache) == 0
        assert cache.stats()["hits"] == 0

    def test_concurrent_writes_stay_bounded(self):
        """Test concurrent writers never exceed the bound."""
        cache = BoundedCache(50)

        def worker(offset):
            for i in range(200):
                cache.set(f"{offset}-{i}", i)
                cache.get(f"{offset}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
        assert cache.stats()["evictions"] == 8 * 200 - 50

    def test_null_cache(self):
        """Test the null cache stores nothing."""
        cache = NullCache()
        cache.set("a", 1)
        assert cache.get("a") is None
        assert len(cache) == 0
        assert "a" not in cache
