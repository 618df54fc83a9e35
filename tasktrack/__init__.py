"""Command-line task manager that keeps tasks in a JSON file."""

__version__ = "0.1.0"
__all__ = ["cli", "listing", "model", "store"]