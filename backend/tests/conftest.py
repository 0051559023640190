"""Shared fixtures."""

from pathlib import Path
import pytest

from moviesim.data.loaders import catalog_loader

SAMPLE_CATALOG = Path(__file__).resolve().parent.parent / "data" / "movies.json"

@pytest.fixture(scope="session")
def catalog():
    """The bundled sample catalog."""
    return catalog_loader.load(SAMPLE_CATALOG)

@pytest.fixture
def by_title(catalog):
    """Look up a sample movie by exact title."""
    titles = {movie.title: movie for movie in catalog}
    return titles.__getitem__
