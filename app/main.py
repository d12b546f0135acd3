import logging
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from blog_service.corpus import ArticleCorpus, InMemoryArticleCorpus, load_corpus_from_json
from blog_service.logging_config import setup_logging
from app.related_posts import create_related_posts_module

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent


def _load_corpus(corpus_file: str) -> ArticleCorpus:
    """Load the article corpus, falling back to an empty one when the file is missing."""
    path = Path(corpus_file)
    if not path.is_absolute():
        path = BASE_DIR / path
    if not path.exists():
        logger.warning(f"Corpus file {path} not found, starting with an empty corpus")
        return InMemoryArticleCorpus()
    return load_corpus_from_json(path)


def create_app(
    config_manager: Optional[ConfigManager] = None,
    corpus: Optional[ArticleCorpus] = None,
    configure_logging: bool = True,
) -> Flask:
    """
    Create the Flask application.

    Args:
        config_manager: Configuration source, defaults to ``ConfigManager()``
        corpus: Article corpus; loaded from ``paths.corpus_file`` when omitted
        configure_logging: Whether to install the queue-based logging setup

    Returns:
        Configured Flask app with the related posts blueprint registered
    """
    config_manager = config_manager or ConfigManager()
    app_config = config_manager.get_app_config()

    if configure_logging:
        setup_logging(debug=app_config.debug)

    if corpus is None:
        corpus = _load_corpus(config_manager.get_paths_config().corpus_file)

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_proto = 1,     # trust 1 hop for X-Forwarded-Proto
            x_host  = 1,     # trust 1 hop for X-Forwarded-Host
            x_prefix= 1)     # <-- pay attention to X-Forwarded-Prefix

    related_posts_module = create_related_posts_module(
        corpus,
        config_manager.get_recommendation_config()
    )
    app.register_blueprint(related_posts_module["blueprint"])
    app.extensions["related_posts"] = related_posts_module

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"})

    return app
