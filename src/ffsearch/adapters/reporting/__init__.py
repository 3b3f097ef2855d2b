from .console import ConsoleReporter, format_column, humanize_bytes

__all__ = ["ConsoleReporter", "format_column", "humanize_bytes"]
