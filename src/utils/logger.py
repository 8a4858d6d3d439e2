import sys

from loguru import logger


def setup_logger(*, json_logs: bool = False, level: str = "WARNING") -> None:
    """Configure loguru for the CLI.

    Everything goes to stderr; stdout carries only the token report.
    """
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, serialize=True, level=level.upper())
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=level.upper(),
            colorize=None,
        )
