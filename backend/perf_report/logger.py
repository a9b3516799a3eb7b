"""
Logging configuration.
"""
import logging
import sys

from perf_report.config import settings

# Create logger
logger = logging.getLogger("perf_report")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)

# Formatter
formatter = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
console_handler.setFormatter(formatter)

# Add handler
if not logger.handlers:
    logger.addHandler(console_handler)
