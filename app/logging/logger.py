import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers of libraries that share the service's stdout handler.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# The Azure SDK logs every HTTP request and response at INFO.
AZURE_LOGGER = "azure"


class Log:
    """Service-wide logging facade writing to stdout."""

    _logger: logging.Logger = logging.getLogger("docnotes")

    @classmethod
    def configure(cls, log_level: str, azure_log_level: str = "WARNING") -> None:
        """Attach one stdout handler to the service and server loggers.

        Safe to call more than once; handlers are only added the first time.
        """
        level = log_level.upper()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        for name in (cls._logger.name, *SERVER_LOGGERS):
            logger = logging.getLogger(name)
            logger.setLevel(level)
            if not logger.handlers:
                logger.addHandler(handler)
            logger.propagate = False

        logging.getLogger(AZURE_LOGGER).setLevel(azure_log_level.upper())

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR with the traceback of the exception being handled."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
