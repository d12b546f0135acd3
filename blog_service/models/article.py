"""
Article data models.

This module contains Pydantic models for full blog articles and the
lightweight card projection returned in recommendation results.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Author(BaseModel):
    """Article author details."""
    name: str = Field(default="", description="Author display name")
    avatar: Optional[str] = Field(default=None, description="Author avatar image URL")
    bio: Optional[str] = Field(default=None, description="Short author biography")


class CardAuthor(BaseModel):
    """Author fields shown on an article card."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Author display name")
    avatar: Optional[str] = Field(default=None, description="Author avatar image URL")


class ArticleCard(BaseModel):
    """Display-only projection of an article, safe to cache and share."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique article identifier")
    title: str = Field(description="Article title")
    excerpt: str = Field(default="", description="Article excerpt")
    slug: str = Field(description="URL slug")
    cover_image: str = Field(default="", description="Cover image URL")
    author: CardAuthor = Field(description="Author name and avatar")
    category: str = Field(description="Article category")
    published_at: str = Field(default="", description="Publish time (ISO format)")


class Article(BaseModel):
    """Full article record as supplied by the corpus.

    Fields default to empty values so that incomplete records can still be
    loaded and reported by ``validate_article_data``.
    """
    id: str = Field(default="", description="Unique article identifier")
    slug: str = Field(default="", description="Unique URL slug")
    title: str = Field(default="", description="Article title")
    excerpt: str = Field(default="", description="Short summary used on cards")
    content: str = Field(default="", description="Full article body")
    content_type: str = Field(default="markdown", description="Either 'markdown' or 'html'")
    category: str = Field(default="", description="Category from the closed category set")
    tags: List[str] = Field(default_factory=list, description="Free-text tags")
    reading_time: int = Field(default=0, description="Estimated reading time in minutes")
    author: Author = Field(default_factory=Author, description="Article author")
    cover_image: str = Field(default="", description="Cover image URL")
    published_at: str = Field(default="", description="Publish time (ISO format)")
    updated_at: Optional[str] = Field(default=None, description="Last update time (ISO format)")
    keywords: List[str] = Field(default_factory=list, description="SEO keywords")
    is_published: bool = Field(default=True, description="Whether the article is published")
    is_featured: bool = Field(default=False, description="Whether the article is featured")

    def to_card(self) -> ArticleCard:
        """Project the article onto its display card."""
        return ArticleCard(
            id=self.id,
            title=self.title,
            excerpt=self.excerpt,
            slug=self.slug,
            cover_image=self.cover_image,
            author=CardAuthor(name=self.author.name, avatar=self.author.avatar),
            category=self.category,
            published_at=self.published_at,
        )


class RelatedPost(BaseModel):
    """A recommended article card with its relatedness score."""
    model_config = ConfigDict(frozen=True)

    article: ArticleCard = Field(description="Recommended article card")
    score: float = Field(description="Relatedness score in [0, 1]")
