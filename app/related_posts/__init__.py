"""
Related posts module exposing recommendations over HTTP.
"""

from .routes import create_related_posts_routes
from .factory import create_related_posts_module

__all__ = ['create_related_posts_routes', 'create_related_posts_module']
