"""
argbind

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument_model import ArgumentModel, ParsedModel
from .token_parser import TokenParser
from .usage import get_usage, render_usage

__all__ = [
    "ArgumentModel",
    "ParsedModel",
    "TokenParser",
    "get_usage",
    "render_usage",
]
