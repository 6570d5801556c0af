import sys
import logging
from typing import Any, Optional, Set

from loguru import logger

from pytoa.config.settings import settings

# API keys seen by this process; masked wherever they show up in a message
_secrets: Set[str] = set()


def register_secret(value: Optional[str]) -> None:
    """Mask `value` in every log message from now on."""
    if value:
        _secrets.add(value)


register_secret(settings.toa_api_key)


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask API keys in log records."""
    sensitive_keys = ["key", "token", "secret"]

    def mask(value: str) -> str:
        if len(value) > 8:
            return value[:4] + "****" + value[-4:]
        return "********"

    extra = record.get("extra")
    if isinstance(extra, dict):
        for extra_key, extra_value in extra.items():
            if isinstance(extra_value, str) and any(
                sk in extra_key.lower() for sk in sensitive_keys
            ):
                extra[extra_key] = mask(extra_value)

    for secret in _secrets:
        if secret in record["message"]:
            record["message"] = record["message"].replace(secret, "********")

    return True


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, httpcore) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: Optional[str] = None) -> None:
    """Configures Loguru logger based on client settings."""
    level = (level or settings.log_level).upper()
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
        filter=sensitive_data_filter,
    )
    logger.debug(f"Logging initialized with level: {level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
