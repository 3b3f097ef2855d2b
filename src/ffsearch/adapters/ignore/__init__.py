from .gitignore import GitIgnoreMatcher

__all__ = ["GitIgnoreMatcher"]
