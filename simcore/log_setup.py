"""Loguru setup shared by every CLI command."""

import sys

from loguru import logger


def setup_logging(verbose: bool = False) -> None:
    """Configure Loguru once: a single stderr sink, DEBUG when verbose."""
    logger.remove()  # drop the default handler to avoid duplicate lines
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        backtrace=False,
        diagnose=False,
    )
