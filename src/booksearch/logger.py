import logging
from typing import Optional

from booksearch.settings import settings as api_settings

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

# Client libraries that log every HTTP round-trip at INFO
_NOISY_LOGGERS = ("elasticsearch", "elastic_transport")

_configured = False


def setup_global_logging(level: str = "INFO") -> None:
    """Configure the root logger once in a standardized format.

    The Elasticsearch transport loggers are held at WARNING unless the
    requested level is DEBUG.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    lvl = _LEVELS.get(level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    transport_level = logging.DEBUG if lvl == logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    _configured = True


class Logger:
    """Thin wrapper over standard logging.

    - Configures logging from `LOG_LEVEL` on first use.
    - `.message(text)` logs at the configured LOG_LEVEL (INFO when unset), for
      the one-line operation traces emitted by the engine and adapters.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        self._logger = logging.getLogger(name or __name__)

    @property
    def name(self) -> str:
        return self._logger.name

    def is_debug(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        level = (api_settings.LOG_LEVEL or "").upper()
        if level == "":
            self.info(msg, *args, **kwargs)
            return
        self._logger.log(_LEVELS.get(level, logging.INFO), msg, *args, **kwargs)
