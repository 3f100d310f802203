# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by argbind.

Signals are raised to interrupt the parse/bind flow (e.g. a help request)
without being treated as traditional exceptions. They inherit from
`BaseException` so they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: A help token was found on the command line.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in argbind.

    These are not errors. They're used to redirect the normal
    parse-then-bind flow, e.g. to print usage instead of binding.
    """


class HelpSignal(FlowSignal):
    """Raised when a help token is encountered while parsing arguments."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
