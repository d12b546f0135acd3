"""
Basic import tests to verify the core functionality.
"""

import pytest


def test_blog_service_imports():
    """Test that blog_service modules can be imported."""
    from blog_service import RelatedPostsEngine, PersonalizedRecommender
    from blog_service.models import Article, ArticleCard, RelatedPost, RelatedPostsStrategy
    from blog_service.validation import validate_limit, estimate_reading_time

    assert callable(validate_limit)
    assert callable(estimate_reading_time)
    assert {strategy.value for strategy in RelatedPostsStrategy} == {"category", "tags", "content", "mixed"}

    article = Article(id="1", slug="hello", title="Hello")
    card = article.to_card()
    assert isinstance(card, ArticleCard)
    assert card.title == "Hello"
    assert RelatedPost(article=card, score=0.5).score == 0.5
    assert RelatedPostsEngine is not None
    assert PersonalizedRecommender is not None


def test_error_imports():
    """Test that the error taxonomy can be imported."""
    from blog_service.errors import BlogServiceError, NotFoundError, ValidationError, FetchError

    for error_type in (NotFoundError, ValidationError, FetchError):
        assert issubclass(error_type, BlogServiceError)


def test_app_imports():
    """Test that the web layer can be imported."""
    from app.main import create_app
    from app.related_posts import create_related_posts_module

    assert callable(create_app)
    assert callable(create_related_posts_module)


def test_logging_config_imports():
    """Test that logging helpers can be imported."""
    from blog_service.logging_config import setup_logging, stop_logging, get_logger

    assert callable(setup_logging)
    assert callable(stop_logging)
    assert get_logger("test").name == "test"


if __name__ == "__main__":
    pytest.main([__file__])
