#!/usr/bin/env python3
"""
Feed Recommendation API server: entrypoint for python -m feed_server.server.
"""

import uvicorn

from .app import create_app
from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
