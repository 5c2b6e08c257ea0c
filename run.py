# run.py: ListingMVP launcher
import logging
import os

from ListingMVP.app import create_app

logger = logging.getLogger("ListingMVP.run")

app = create_app()


def start_server():
    port = int(os.environ.get("PORT", 5050))
    logger.info("Starting ListingMVP Flask server on port %d", port)
    app.run(host="0.0.0.0", port=port, debug=app.config.get("DEBUG", False))


if __name__ == "__main__":
    start_server()
