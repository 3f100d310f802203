# argbind — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for argbind usage output."""
from rich.console import Console

console = Console(highlight=False)
