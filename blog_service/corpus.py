"""
Read-only article corpus accessors.

The engine only needs ``find_by_id`` and ``list_all``; ``find_by_slug`` is used
when available and otherwise emulated by scanning ``list_all``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from .models import Article
from .validation import estimate_reading_time

logger = logging.getLogger(__name__)


class ArticleCorpus(Protocol):
    """Interface required of the article store."""

    def find_by_id(self, article_id: str) -> Optional[Article]:
        """Return the article with ``article_id`` or ``None``."""

    def list_all(self) -> List[Article]:
        """Return every article in a stable order."""


class InMemoryArticleCorpus:
    """Article corpus held in memory, in insertion order."""

    def __init__(self, articles: Iterable[Article] = ()):
        self._articles: Dict[str, Article] = {}
        self._slug_index: Dict[str, str] = {}
        for article in articles:
            self.add(article)

    def add(self, article: Article) -> None:
        """Add an article; ``id`` and ``slug`` must be unique."""
        if article.id in self._articles:
            raise ValueError(f"Duplicate article id: {article.id}")
        slug_key = article.slug.strip().lower()
        if slug_key and slug_key in self._slug_index:
            raise ValueError(f"Duplicate article slug: {article.slug}")
        self._articles[article.id] = article
        if slug_key:
            self._slug_index[slug_key] = article.id

    def find_by_id(self, article_id: str) -> Optional[Article]:
        return self._articles.get(article_id)

    def find_by_slug(self, slug: str) -> Optional[Article]:
        article_id = self._slug_index.get(slug.strip().lower())
        if article_id is None:
            return None
        return self._articles.get(article_id)

    def list_all(self) -> List[Article]:
        return list(self._articles.values())

    def __len__(self) -> int:
        return len(self._articles)


def find_article_by_slug(corpus: ArticleCorpus, slug: str) -> Optional[Article]:
    """Look up an article by slug on any corpus, case-insensitively."""
    finder = getattr(corpus, "find_by_slug", None)
    if callable(finder):
        return finder(slug)
    normalized = slug.strip().lower()
    for article in corpus.list_all():
        if article.slug.strip().lower() == normalized:
            return article
    return None


def load_corpus_from_json(path: Union[str, Path]) -> InMemoryArticleCorpus:
    """
    Load a corpus from a JSON file holding a list of article records.

    Records without a positive ``reading_time`` get one estimated from their
    content.

    Args:
        path: Path to the JSON file

    Returns:
        InMemoryArticleCorpus with the articles in file order
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw: Any = json.load(f)

    if isinstance(raw, dict):
        raw = raw.get("articles", [])
    if not isinstance(raw, list):
        raise ValueError(f"Corpus file {path} must contain a list of articles")

    articles = []
    for record in raw:
        article = Article.model_validate(record)
        if article.reading_time <= 0:
            article.reading_time = estimate_reading_time(article.content, article.content_type)
        articles.append(article)

    logger.info(f"Loaded {len(articles)} articles from {path}")
    return InMemoryArticleCorpus(articles)
