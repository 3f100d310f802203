# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for argbind."""
import logging

logger: logging.Logger = logging.getLogger("argbind")
