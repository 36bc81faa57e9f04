"""
Feed recommendation server: stores, the recommendation service, and the
FastAPI surface around feed_algorithm.
"""

from .app import create_app
from .config import ServerConfig, get_config, reload_config

__all__ = ["ServerConfig", "create_app", "get_config", "reload_config"]
