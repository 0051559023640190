"""Catalog loading and record normalization."""

import ast
import json
import math
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import pandas as pd
import structlog
from pydantic import ValidationError

from .movie import Movie

logger = structlog.get_logger(__name__)

class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into movies."""

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == '' or value.strip() == 'N/A'
    return pd.api.types.is_scalar(value) and pd.isna(value)

class SchemaMapper:
    """Maps different record schemas to Movie fields."""

    # Standard field names and the keys they may arrive under
    STANDARD_COLUMNS = {
        'id': ['id', 'movie_id', 'movieid', 'item_id', 'imdbid', 'imdb_id'],
        'title': ['title', 'name', 'movie_title'],
        'year': ['year', 'release_year', 'release_date', 'date'],
        'rating': ['rating', 'imdbrating', 'imdb_rating', 'vote_average', 'score'],
        'genres': ['genres', 'genre', 'categories', 'category'],
        'description': ['description', 'overview', 'plot', 'summary', 'desc'],
        'director': ['director', 'directors'],
        'runtime': ['runtime'],
        'actors': ['actors', 'cast'],
        'awards': ['awards'],
        'poster': ['poster', 'poster_url', 'poster_path', 'url'],
    }

    @classmethod
    def infer_schema(cls, columns: Iterable[str]) -> Dict[str, str]:
        """Infer a standard-field to source-key mapping."""
        columns = list(columns)
        lowered = {str(col).lower(): col for col in reversed(columns)}
        mapping = {}

        for standard_col, possible_names in cls.STANDARD_COLUMNS.items():
            for possible_name in possible_names:
                if possible_name in lowered:
                    mapping[standard_col] = lowered[possible_name]
                    break

        return mapping

    @classmethod
    def standardize_record(cls, record: Dict[str, Any], mapping: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Build Movie keyword arguments from one raw record."""
        if mapping is None:
            mapping = cls.infer_schema(record.keys())

        std = {}
        for std_col, orig_col in mapping.items():
            value = record.get(orig_col)
            if not _is_missing(value):
                std[std_col] = value

        if 'genres' in std:
            std['genres'] = cls.parse_genres(std['genres'])
        if 'year' in std:
            std['year'] = cls.parse_year(std['year'])
        std['rating'] = cls.parse_rating(std.get('rating'))
        for text_col in ('title', 'description', 'director', 'runtime', 'actors', 'awards', 'poster'):
            if text_col in std:
                std[text_col] = str(std[text_col]).strip()

        return std

    @staticmethod
    def parse_genres(value: Any) -> List[str]:
        """Parse genres from a list, a list literal or a comma/pipe separated string."""
        if _is_missing(value):
            return []
        if isinstance(value, (list, tuple)):
            items = value
        else:
            text = str(value).strip()
            items = None
            if text.startswith('[') and text.endswith(']'):
                try:
                    items = ast.literal_eval(text)
                except (ValueError, SyntaxError):
                    items = None
            if not isinstance(items, (list, tuple)):
                items = re.split(r'[,|]', text.strip('[]'))

        genres = []
        for item in items:
            name = item.get('name', '') if isinstance(item, dict) else item
            name = str(name).strip().strip('\'"')
            if name:
                genres.append(name)
        return genres

    @staticmethod
    def parse_year(value: Any) -> Optional[int]:
        """First four-digit run, so "2010", "2010-07-16" and "2010–2015" all give 2010."""
        if _is_missing(value):
            return None
        if pd.api.types.is_number(value) and not isinstance(value, bool):
            return int(value)
        match = re.search(r'\d{4}', str(value))
        return int(match.group()) if match else None

    @staticmethod
    def parse_rating(value: Any) -> float:
        """Numeric rating, 0 when absent, unparseable or not finite."""
        if _is_missing(value):
            return 0.0
        try:
            rating = float(value)
        except (TypeError, ValueError):
            return 0.0
        return rating if math.isfinite(rating) else 0.0

def movie_from_omdb(payload: Dict[str, Any]) -> Optional[Movie]:
    """Convert an OMDb title lookup payload into a Movie.

    Returns None for "not found" payloads or ones without an id or title.
    """
    if payload.get('Response') != 'True':
        return None

    # OMDb reports unknown fields as "N/A"
    payload = {key: value for key, value in payload.items() if not _is_missing(value)}
    try:
        return Movie(
            id=payload['imdbID'],
            title=payload['Title'],
            year=SchemaMapper.parse_year(payload.get('Year')),
            rating=SchemaMapper.parse_rating(payload.get('imdbRating')),
            genres=SchemaMapper.parse_genres(payload.get('Genre')),
            description=payload.get('Plot', 'No description available.'),
            director=payload.get('Director'),
            actors=payload.get('Actors'),
            runtime=payload.get('Runtime'),
            awards=payload.get('Awards'),
            poster=payload.get('Poster'),
        )
    except (KeyError, ValidationError) as e:
        logger.warning("Skipping malformed OMDb payload", error=str(e))
        return None

def find_by_id(movies: Sequence[Movie], movie_id: Union[str, int]) -> Optional[Movie]:
    """Look up a movie by exact identifier."""
    movie_id = str(movie_id).strip()
    for movie in movies:
        if movie.id == movie_id:
            return movie
    return None

class CatalogLoader:
    """Loads a movie catalog from JSON, JSON Lines or CSV."""

    SUPPORTED_SUFFIXES = ('.json', '.jsonl', '.csv')

    def load(self, path: Union[str, Path]) -> List[Movie]:
        """Load, standardize and validate every record in ``path``."""
        path = Path(path)
        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")

        suffix = path.suffix.lower()
        logger.info("Loading catalog", path=str(path), format=suffix)

        if suffix not in self.SUPPORTED_SUFFIXES:
            raise CatalogError(f"Unsupported catalog format: {suffix}")

        if suffix == '.json':
            df = self._read_json(path)
        else:
            try:
                df = self._read_table(path, suffix)
            except (ValueError, pd.errors.ParserError) as e:
                raise CatalogError(f"Could not parse {path}: {e}") from e

        movies = self.from_records(df.to_dict(orient='records'))
        if not movies:
            raise CatalogError(f"No usable movie records in {path}")

        logger.info("Catalog loaded", path=str(path), movies=len(movies))
        return movies

    @staticmethod
    def _read_table(path: Path, suffix: str) -> pd.DataFrame:
        if suffix == '.jsonl':
            return pd.read_json(path, lines=True, dtype=False)
        try:
            return pd.read_csv(path, encoding='utf-8')
        except UnicodeDecodeError:
            return pd.read_csv(path, encoding='latin-1')

    @staticmethod
    def _read_json(path: Path) -> pd.DataFrame:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('movies', [])
        if not isinstance(data, list):
            raise CatalogError(f"Expected a list of movies in {path}")
        return pd.DataFrame.from_records(data)

    def from_records(self, records: Iterable[Dict[str, Any]]) -> List[Movie]:
        """Build movies from raw records, skipping invalid ones and duplicate ids."""
        movies = []
        seen_ids = set()
        skipped = 0

        for row_num, record in enumerate(records):
            if not _is_missing(record.get('Response')):
                movie = movie_from_omdb(record)
                if movie is None:
                    logger.warning("Skipping unusable OMDb record", row=row_num)
                    skipped += 1
                    continue
            else:
                mapping = SchemaMapper.infer_schema(record.keys())
                if row_num == 0:
                    logger.info("Schema mapping", mapping=mapping)

                try:
                    movie = Movie(**SchemaMapper.standardize_record(record, mapping))
                except ValidationError as e:
                    logger.warning("Skipping invalid movie record", row=row_num, errors=e.error_count())
                    skipped += 1
                    continue

            if movie.id in seen_ids:
                logger.warning("Skipping duplicate movie id", row=row_num, movie_id=movie.id)
                skipped += 1
                continue

            seen_ids.add(movie.id)
            movies.append(movie)

        if skipped:
            logger.info("Records skipped", skipped=skipped, loaded=len(movies))
        return movies

# Global catalog loader instance
catalog_loader = CatalogLoader()
