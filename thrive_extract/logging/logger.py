import logging
import sys

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Process-wide diagnostic logger for the extraction pipeline.

    Every extractor reports progress through these class methods so the
    output of one batch reads as a single trace.
    """

    _logger: logging.Logger = logging.getLogger("thrive")

    @classmethod
    def configure(cls, log_level: str, fmt: str = _DEFAULT_FORMAT) -> None:
        """Set the level and attach a stdout handler once."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(fmt))
            cls._logger.addHandler(handler)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error together with the active traceback."""
        cls._logger.exception(message, extra=kwargs)
