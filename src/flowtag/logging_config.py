"""Logging setup shared by the flowtag CLI."""
import logging
import sys


def setup_logging(level: str = "WARNING"):
    levelno = getattr(logging, level.upper(), logging.WARNING)
    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    # stdout is reserved for the report
    logging.basicConfig(level=levelno, format=fmt, stream=sys.stderr)
