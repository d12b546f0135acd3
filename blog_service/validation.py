"""
Input validation for recommendation requests and article records.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

import markdown

from .errors import ValidationError
from .models import Article, RelatedPostsOptions, RelatedPostsStrategy

MIN_LIMIT = 1
MAX_LIMIT = 10
VALID_CONTENT_TYPES = ("markdown", "html")
DEFAULT_WORDS_PER_MINUTE = 200


@dataclass
class ArticleValidationResult:
    """Outcome of an article completeness check."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def _safe_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def _fail(field_name: str, message: str, value: Any) -> None:
    raise ValidationError(
        f"Invalid {field_name}: {message}",
        {"field": field_name, "value": _safe_value(value), "errors": [message]},
    )


def validate_article_id(article_id: Any, field_name: str = "anchor_article_id") -> str:
    """
    Validate an article identifier.

    Args:
        article_id: Identifier supplied by the caller
        field_name: Field name reported in the error

    Returns:
        The identifier, stripped of surrounding whitespace

    Raises:
        ValidationError: If the identifier is not a non-empty string
    """
    if not isinstance(article_id, str) or not article_id.strip():
        _fail(field_name, "must be a non-empty string", article_id)
    return article_id.strip()


def validate_slug(slug: Any) -> str:
    """Validate a slug and return it normalized (stripped, lowercased)."""
    if not isinstance(slug, str) or not slug.strip():
        _fail("slug", "must be a non-empty string", slug)
    return slug.strip().lower()


def validate_limit(limit: Any) -> int:
    """Validate that ``limit`` is an integer within [1, 10]."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        _fail("limit", "must be an integer", limit)
    if limit < MIN_LIMIT or limit > MAX_LIMIT:
        _fail("limit", f"must be between {MIN_LIMIT} and {MAX_LIMIT}", limit)
    return limit


def validate_min_score(min_score: Any) -> float:
    """Validate that ``min_score`` is a number within [0, 1]."""
    if isinstance(min_score, bool) or not isinstance(min_score, (int, float)):
        _fail("min_score", "must be a number", min_score)
    if math.isnan(min_score) or min_score < 0 or min_score > 1:
        _fail("min_score", "must be between 0 and 1", min_score)
    return float(min_score)


def validate_strategy(strategy: Any) -> RelatedPostsStrategy:
    """Coerce a strategy name or enum member to ``RelatedPostsStrategy``."""
    if isinstance(strategy, RelatedPostsStrategy):
        return strategy
    if isinstance(strategy, str):
        try:
            return RelatedPostsStrategy(strategy.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(s.value for s in RelatedPostsStrategy)
    _fail("strategy", f"must be one of: {allowed}", strategy)


def validate_read_history(read_history_ids: Any) -> List[str]:
    """Validate a reader history list and return its ids in order."""
    if read_history_ids is None:
        return []
    if isinstance(read_history_ids, str) or not isinstance(read_history_ids, Sequence):
        _fail("read_history_ids", "must be a list of article ids", read_history_ids)
    history = []
    for index, article_id in enumerate(read_history_ids):
        history.append(validate_article_id(article_id, field_name=f"read_history_ids[{index}]"))
    return history


def validate_related_request(anchor_article_id: Any, options: RelatedPostsOptions) -> RelatedPostsOptions:
    """
    Validate a complete related-posts request before any corpus access.

    ``options`` must already have its defaults resolved.

    Returns:
        A new ``RelatedPostsOptions`` with normalized values

    Raises:
        ValidationError: On the first invalid field
    """
    validate_article_id(anchor_article_id)
    return RelatedPostsOptions(
        strategy=validate_strategy(options.strategy),
        limit=validate_limit(options.limit),
        exclude_anchor=bool(options.exclude_anchor),
        min_score=validate_min_score(options.min_score),
    )


def validate_article_data(data: Union[Article, Mapping[str, Any]]) -> ArticleValidationResult:
    """
    Check an article record for completeness.

    Args:
        data: ``Article`` instance or raw mapping of article fields

    Returns:
        ArticleValidationResult listing every violated rule
    """
    if isinstance(data, Article):
        record = data.model_dump()
    else:
        record = dict(data or {})

    errors: List[str] = []

    for name in ("id", "title", "content", "slug"):
        if not record.get(name):
            errors.append(f"{name} must not be empty")

    author = record.get("author") or {}
    author_name = author.get("name") if isinstance(author, Mapping) else getattr(author, "name", None)
    if not author_name:
        errors.append("author.name must not be empty")

    if not record.get("category"):
        errors.append("category must not be empty")
    if not record.get("published_at"):
        errors.append("published_at must not be empty")

    if record.get("content_type") not in VALID_CONTENT_TYPES:
        errors.append("content_type must be 'markdown' or 'html'")

    reading_time = record.get("reading_time")
    if isinstance(reading_time, bool) or not isinstance(reading_time, (int, float)) or reading_time <= 0:
        errors.append("reading_time must be greater than 0")

    return ArticleValidationResult(is_valid=not errors, errors=errors)


def estimate_reading_time(
    content: Optional[str],
    content_type: str = "markdown",
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> int:
    """
    Estimate reading time in minutes from article content.

    Markdown is rendered to HTML first so that markup does not count as words.

    Returns:
        Reading time in whole minutes, at least 1
    """
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be > 0")
    text = content or ""
    if content_type == "markdown":
        text = markdown.markdown(text)
    plain = re.sub(r"<[^>]+>", " ", text)
    word_count = len(plain.split())
    return max(1, math.ceil(word_count / words_per_minute))
