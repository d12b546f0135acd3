"""
Related posts routes for API endpoints.
"""
import logging

from flask import Blueprint, jsonify, request

from blog_service.errors import BlogServiceError, FetchError, NotFoundError, ValidationError
from blog_service.recommendations import PersonalizedRecommender, RelatedPostsEngine
from blog_service.validation import validate_strategy

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: 400,
    NotFoundError: 404,
    FetchError: 502,
}


def _parse_int(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            f"Invalid {name}: must be an integer",
            {"field": name, "value": raw, "errors": ["must be an integer"]},
        ) from None


def _parse_float(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(
            f"Invalid {name}: must be a number",
            {"field": name, "value": raw, "errors": ["must be a number"]},
        ) from None


def _parse_bool(name: str):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


def create_related_posts_routes(engine: RelatedPostsEngine, personalizer: PersonalizedRecommender) -> Blueprint:
    """Create related posts routes blueprint."""
    bp = Blueprint('related_posts', __name__, url_prefix='/api/related')

    @bp.errorhandler(BlogServiceError)
    def handle_service_error(error: BlogServiceError):
        status = STATUS_BY_ERROR.get(type(error), 500)
        if status >= 500:
            logger.error(f"Related posts request failed: {error}")
        return jsonify(error.to_dict()), status

    @bp.route('/<article_id>', methods=['GET'])
    def get_related(article_id: str):
        """
        Get posts related to an article.

        Query parameters:
            - strategy: category, tags, content or mixed (default from config)
            - limit: Maximum posts to return, 1-10
            - min_score: Minimum relatedness score, 0-1
            - exclude_anchor: Whether to leave out the article itself (default true)
        """
        raw_strategy = request.args.get('strategy')
        strategy = validate_strategy(raw_strategy) if raw_strategy else engine.default_strategy
        related = engine.get_related(
            article_id,
            strategy=strategy,
            limit=_parse_int('limit'),
            min_score=_parse_float('min_score'),
            exclude_anchor=_parse_bool('exclude_anchor'),
        )
        items = [item.model_dump(mode='json') for item in related]
        return jsonify({
            "article_id": article_id,
            "strategy": strategy.value,
            "items": items,
            "count": len(items)
        })

    @bp.route('/<article_id>/personalized', methods=['GET'])
    def get_personalized(article_id: str):
        """
        Get personalized recommendations.

        Query parameters:
            - history: Comma-separated ids of articles already read
            - limit: Maximum posts to return, 1-10
        """
        raw_history = request.args.get('history', '')
        history = [item.strip() for item in raw_history.split(',') if item.strip()]
        cards = personalizer.get_personalized_related(article_id, history, limit=_parse_int('limit'))
        items = [card.model_dump(mode='json') for card in cards]
        return jsonify({
            "article_id": article_id,
            "items": items,
            "count": len(items)
        })

    @bp.route('/articles/<slug>', methods=['GET'])
    def get_article(slug: str):
        """Get a full article by slug."""
        article = engine.get_article_by_slug(slug)
        return jsonify(article.model_dump(mode='json'))

    @bp.route('/cache/stats', methods=['GET'])
    def cache_stats():
        """Get cache entry counts."""
        return jsonify(engine.get_cache_stats())

    @bp.route('/cache/clear', methods=['POST'])
    def clear_cache():
        """Clear the related posts cache (admin only)."""
        kind = request.args.get('kind', 'all')
        removed = engine.clear_cache(kind)
        return jsonify({"status": "ok", "message": "Cache cleared", "kind": kind, "removed": removed})

    return bp
