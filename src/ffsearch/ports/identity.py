# Licensed under the Apache License, Version 2.0
from abc import ABC, abstractmethod


class OwnerResolverPort(ABC):
    """Resolves numeric owner/group identifiers to display names."""

    @abstractmethod
    def lookup_user(self, uid: int) -> str:
        """Return the user name for `uid`. Raises LookupError if unknown."""
        raise NotImplementedError

    @abstractmethod
    def lookup_group(self, gid: int) -> str:
        """Return the group name for `gid`. Raises LookupError if unknown."""
        raise NotImplementedError
