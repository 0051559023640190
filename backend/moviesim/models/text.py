"""Text normalization shared by every token-based similarity measure."""

import re
from typing import List, Optional, Union

from ..service.cache import BoundedCache, NullCache
from ..service.config import config


STOPWORDS = frozenset([
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for',
    'of', 'with', 'by', 'from', 'as', 'is', 'was', 'are', 'were', 'been',
    'be', 'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would',
    'could', 'should', 'may', 'might', 'must', 'can', 'this', 'that',
    'these', 'those', 'it', 'its', 'his', 'her', 'their', 'our',
])

MIN_TOKEN_LENGTH = 3

_ALPHA_TOKEN = re.compile(r'^[a-z]+$')

class TextNormalizer:
    """Lowercases, splits and filters free text into comparison tokens.

    Results may be memoized in an injected cache; a cache never changes what
    ``normalize`` returns, only how fast it returns it.
    """

    def __init__(self, cache: Optional[Union[BoundedCache, NullCache]] = None):
        self.cache = cache if cache is not None else NullCache()

    def normalize(self, text: Optional[str]) -> List[str]:
        """Return the ordered tokens of ``text`` (duplicates kept)."""
        if not text:
            return []

        cached = self.cache.get(text)
        if cached is not None:
            return list(cached)

        tokens = tuple(
            word for word in text.lower().split()
            if len(word) >= MIN_TOKEN_LENGTH
            and _ALPHA_TOKEN.match(word)
            and word not in STOPWORDS
        )
        self.cache.set(text, tokens)
        return list(tokens)

default_normalizer = TextNormalizer(BoundedCache(config.NORMALIZE_CACHE_SIZE))

def normalize(text: Optional[str]) -> List[str]:
    """Normalize with the process-wide default normalizer."""
    return default_normalizer.normalize(text)
