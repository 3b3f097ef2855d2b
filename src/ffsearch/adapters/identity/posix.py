# Licensed under the Apache License, Version 2.0
import grp
import pwd

from ...ports.identity import OwnerResolverPort


class PosixOwnerResolver(OwnerResolverPort):
    """User/group names from the local account database (pwd/grp)."""

    def lookup_user(self, uid: int) -> str:
        # KeyError is a LookupError
        return pwd.getpwuid(uid).pw_name

    def lookup_group(self, gid: int) -> str:
        return grp.getgrgid(gid).gr_name
