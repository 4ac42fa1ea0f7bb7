"""Permission bits and owner names from POSIX stat results."""

import grp
import os
import pwd
import stat
from functools import lru_cache

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"), (stat.S_IWUSR, "w"), (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"), (stat.S_IWGRP, "w"), (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"), (stat.S_IWOTH, "w"), (stat.S_IXOTH, "x"),
)


def format_permissions(st: os.stat_result) -> str:
    """Render ``st_mode`` as ``drwxr-xr-x`` style text."""
    mode = st.st_mode
    if stat.S_ISDIR(mode):
        kind = "d"
    elif stat.S_ISLNK(mode):
        kind = "l"
    else:
        kind = "-"
    return kind + "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)


@lru_cache(maxsize=None)
def _user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


@lru_cache(maxsize=None)
def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def get_owner(st: os.stat_result) -> str:
    """Return ``"<user> <group>"``, using numeric ids for unknown names."""
    return f"{_user_name(st.st_uid)} {_group_name(st.st_gid)}"
