"""Point d'entrée du client NewsDesk."""

from __future__ import annotations

import logging
import sys

from newsdesk.config import ConfigError, configure_logging, load_config
from newsdesk.services import HttpClient, NewsApi, SessionStore, TokenStore
from newsdesk.ui.app import MainWindow

logger = logging.getLogger("newsdesk")


def main() -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    try:
        config = load_config()
    except ConfigError as exc:
        configure_logging()
        logger.error("Configuration invalide : %s", exc)
        sys.exit(2)

    configure_logging(config.log_level)
    logger.info("API : %s", config.api_base_url)

    tokens = TokenStore(config.token_path)
    http = HttpClient(config.api_base_url, tokens, timeout=config.request_timeout)
    api = NewsApi(http, interests_endpoint=config.interests_endpoint)
    session = SessionStore(api, tokens)
    app = MainWindow(config=config, api=api, session=session)
    try:
        app.run()
    finally:
        http.close()


if __name__ == "__main__":
    main()
