"""
Structured logging package for Storage Quest.

All imports should use explicit paths like
'from storage_quest.structured_logging.enhanced_logging_config import get_logger'.

The directory is named 'structured_logging' rather than 'logging' so it never
shadows Python's standard library logging module.
"""

__all__ = []
