"""
Tests for the personalization layer.
"""
import logging
from unittest.mock import patch

import pytest

from blog_service.corpus import InMemoryArticleCorpus
from blog_service.errors import NotFoundError, ValidationError
from blog_service.models import Article, Author, ReaderPreferenceProfile
from blog_service.recommendations import (
    PersonalizedRecommender,
    RelatedPostsEngine,
    build_preference_profile,
    personalized_score,
)


def _make_article(article_id: str, category="Technologies", tags=None, reading_time=5, title=None):
    return Article(
        id=article_id,
        slug=f"{article_id}-slug",
        title=title or f"Post {article_id}",
        excerpt="",
        content="Body",
        category=category,
        tags=tags or [],
        reading_time=reading_time,
        author=Author(name="Grace"),
        published_at="2024-05-01T00:00:00Z",
    )


class CountingCorpus(InMemoryArticleCorpus):

    def __init__(self, articles=()):
        super().__init__(articles)
        self.list_all_calls = 0

    def list_all(self):
        self.list_all_calls += 1
        return super().list_all()


def _corpus():
    return CountingCorpus([
        _make_article("anchor", category="Design", tags=["figma"], reading_time=6),
        _make_article("read-1", category="Technologies", tags=["React"], reading_time=4),
        _make_article("read-2", category="Technologies", tags=["react", "css"], reading_time=6),
        _make_article("tech", category="Technologies", tags=["React"], reading_time=5),
        _make_article("travel", category="Travel", tags=["lisbon"], reading_time=25),
        _make_article("growth", category="Growth", tags=["css"], reading_time=9),
    ])


class TestPreferenceProfile:

    def test_profile_from_history(self):
        corpus = _corpus()
        profile = build_preference_profile([corpus.find_by_id("read-1"), corpus.find_by_id("read-2")])
        assert profile.category_counts == {"Technologies": 2}
        assert profile.tag_counts == {"react": 2, "css": 1}
        assert profile.average_reading_time == pytest.approx(5.0)
        assert profile.complexity_preference == pytest.approx(0.5)
        assert profile.history_size == 2

    def test_empty_history_uses_defaults(self):
        profile = build_preference_profile([])
        assert profile.average_reading_time == 8.0
        assert profile.complexity_preference == 0.8
        assert profile.category_counts == {}

    def test_personalized_score_blend(self):
        profile = ReaderPreferenceProfile(
            category_counts={"Technologies": 2},
            tag_counts={"react": 2},
            average_reading_time=5.0,
            complexity_preference=0.5,
            history_size=2,
        )
        candidate = _make_article("c", tags=["React"], reading_time=5)
        expected = 0.4 * (2 / 5) + 0.3 * (2 / 3) + 0.2 * 1.0 + 0.1 * 1.0
        assert personalized_score(candidate, profile) == pytest.approx(expected)

    def test_personalized_score_bounds(self):
        profile = ReaderPreferenceProfile(
            category_counts={"Technologies": 50},
            tag_counts={"react": 50},
            average_reading_time=5.0,
            complexity_preference=0.5,
        )
        assert personalized_score(_make_article("c", tags=["react"], reading_time=5), profile) == pytest.approx(1.0)
        far = _make_article("far", category="Travel", reading_time=200)
        assert personalized_score(far, profile) == 0.0


class TestPersonalizedRecommender:

    def setup_method(self):
        self.corpus = _corpus()
        self.engine = RelatedPostsEngine(self.corpus)
        self.personalizer = PersonalizedRecommender(self.engine)

    def test_excludes_anchor_and_read_articles(self):
        cards = self.personalizer.get_personalized_related("anchor", ["read-1", "read-2"], limit=10)
        ids = [card.id for card in cards]
        assert "anchor" not in ids
        assert "read-1" not in ids
        assert "read-2" not in ids
        assert set(ids) == {"tech", "travel", "growth"}

    def test_orders_by_preference(self):
        cards = self.personalizer.get_personalized_related("anchor", ["read-1", "read-2"], limit=2)
        assert [card.id for card in cards] == ["tech", "growth"]

    def test_empty_history_delegates_to_related_posts(self):
        cards = self.personalizer.get_personalized_related("anchor", [], limit=3)
        expected = self.engine.get_related("anchor", strategy="mixed", limit=3, min_score=0.2)
        assert cards == [item.article for item in expected]

    def test_default_limit_comes_from_engine(self):
        cards = self.personalizer.get_personalized_related("anchor", ["read-1"])
        assert len(cards) <= self.engine.default_limit

    def test_results_are_cached(self):
        first = self.personalizer.get_personalized_related("anchor", ["read-2", "read-1"], limit=2)
        second = self.personalizer.get_personalized_related("anchor", ["read-1", "read-2"], limit=2)
        assert first == second
        assert self.corpus.list_all_calls == 1
        stats = self.engine.get_cache_stats()
        assert stats["entries_by_kind"]["personalized"] == 1

    def test_clear_personalized_cache_only(self):
        self.personalizer.get_personalized_related("anchor", ["read-1"], limit=2)
        self.engine.get_related("anchor")
        assert self.engine.clear_cache("personalized") == 1
        stats = self.engine.get_cache_stats()
        assert stats["entries_by_kind"]["personalized"] == 0
        assert stats["entries_by_kind"]["primary"] == 1

    def test_unknown_history_ids_are_ignored(self):
        cards = self.personalizer.get_personalized_related("anchor", ["ghost"], limit=10)
        assert {card.id for card in cards} == {"read-1", "read-2", "tech", "travel", "growth"}

    def test_profile_failure_falls_back_to_related_posts(self, caplog):
        expected = [item.article for item in self.engine.get_related("anchor", limit=2)]
        with patch(
            "blog_service.recommendations.personalization.build_preference_profile",
            side_effect=RuntimeError("boom"),
        ):
            with caplog.at_level(logging.WARNING):
                cards = self.personalizer.get_personalized_related("anchor", ["read-1"], limit=2)
        assert cards == expected
        assert any("falling back" in record.getMessage() for record in caplog.records)

    def test_missing_anchor_falls_back_and_fallback_reports_not_found(self, caplog):
        with caplog.at_level(logging.WARNING):
            with pytest.raises(NotFoundError):
                self.personalizer.get_personalized_related("missing", ["read-1"])
        assert any("falling back" in record.getMessage() for record in caplog.records)

    @pytest.mark.parametrize("history", ["read-1", ["read-1", ""], [None]])
    def test_invalid_history_raises(self, history):
        with pytest.raises(ValidationError):
            self.personalizer.get_personalized_related("anchor", history)

    def test_invalid_limit_raises(self):
        with pytest.raises(ValidationError):
            self.personalizer.get_personalized_related("anchor", ["read-1"], limit=11)
