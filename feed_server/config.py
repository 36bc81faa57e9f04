"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Reads a project-root .env file with python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from feed_algorithm.models import RecommendationConfig

BASE_DIR = Path(__file__).resolve().parent.parent

root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)

DATA_SOURCES = ("memory", "json", "firebase")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data source: "memory" | "json" | "firebase"
    data_source: str = "memory"
    # When data_source=json: path to the posts JSON file
    posts_json_path: Optional[Path] = None
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Optional JSON file overriding RecommendationConfig defaults
    algorithm_config_path: Optional[Path] = None

    # Feed sessions idle longer than this are dropped; 0 keeps them until closed
    session_idle_minutes: int = 30

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return None
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_source=data_source,
            posts_json_path=_path_env("POSTS_JSON_PATH"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH")
            or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            algorithm_config_path=_path_env("ALGORITHM_CONFIG_PATH"),
            session_idle_minutes=int(os.getenv("SESSION_IDLE_MINUTES", "30")),
        )

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []
        if self.data_source == "json":
            if not self.posts_json_path:
                errors.append("DATA_SOURCE=json requires POSTS_JSON_PATH")
            elif not self.posts_json_path.is_file():
                errors.append(f"Posts file not found: {self.posts_json_path}")
        if self.data_source == "firebase" and self.firebase_credentials_path:
            if not self.firebase_credentials_path.is_file():
                errors.append(f"Firebase credentials file not found: {self.firebase_credentials_path}")
        if self.session_idle_minutes < 0:
            errors.append("SESSION_IDLE_MINUTES must be >= 0")
        if self.algorithm_config_path and not self.algorithm_config_path.is_file():
            errors.append(f"Algorithm config not found: {self.algorithm_config_path}")
        return len(errors) == 0, errors

    def load_algorithm_config(self) -> RecommendationConfig:
        """RecommendationConfig from ALGORITHM_CONFIG_PATH, or the defaults."""
        if not self.algorithm_config_path:
            return RecommendationConfig()
        with open(self.algorithm_config_path) as f:
            return RecommendationConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
