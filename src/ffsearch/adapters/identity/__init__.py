from .posix import PosixOwnerResolver

__all__ = ["PosixOwnerResolver"]
