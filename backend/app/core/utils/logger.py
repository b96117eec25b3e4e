import logging
import os


_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=_LOG_FORMAT)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the application.

    Logging is configured lazily on first use so importing a module never
    clobbers a configuration set up by the ASGI server.
    """
    _configure_root()
    return logging.getLogger(f"app.{name}")
