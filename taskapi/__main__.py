"""Run the development server with ``python -m taskapi``."""

import logging

from taskapi import create_app


logger = logging.getLogger("taskapi")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    store = app.extensions["task_store"]
    try:
        app.run(host=app.config["HOST"], port=app.config["PORT"])
    finally:
        store.close()
        logger.info("Task store closed")


if __name__ == "__main__":
    main()
