"""
Factory for creating the related posts module.
"""
from blog_service.corpus import ArticleCorpus
from blog_service.recommendations import PersonalizedRecommender, build_default_engine
from .routes import create_related_posts_routes


def create_related_posts_module(corpus: ArticleCorpus, recommendation_config=None) -> dict:
    """
    Create the related posts module with all its components.

    Args:
        corpus: Read-only article corpus
        recommendation_config: Optional RecommendationConfig with engine defaults

    Returns:
        Dictionary containing:
            - engine: RelatedPostsEngine instance
            - personalizer: PersonalizedRecommender layered on the engine
            - blueprint: Flask blueprint for routes
    """
    engine = build_default_engine(corpus, recommendation_config)
    personalizer = PersonalizedRecommender(engine)
    blueprint = create_related_posts_routes(engine, personalizer)

    return {
        "engine": engine,
        "personalizer": personalizer,
        "blueprint": blueprint
    }
