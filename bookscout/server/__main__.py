"""
BookScout backend — entrypoint.

    python -m bookscout.server
    bookscout-server
"""

import uvicorn

from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run("bookscout.server.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
