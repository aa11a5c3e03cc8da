# ticketdesk/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the process.

    Modules log through ``logging.getLogger(__name__)``; uvicorn keeps its own
    handlers, so this only shapes records coming from ``ticketdesk.*``.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("ticketdesk").setLevel(level.upper())
