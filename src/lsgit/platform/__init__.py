"""Platform-specific metadata formatting.

Exposes ``format_permissions(stat_result)`` and ``get_owner(stat_result)``
from the implementation matching the running operating system.
"""

import os

if os.name == "nt":
    from ._windows import format_permissions, get_owner
else:
    from ._unix import format_permissions, get_owner

__all__ = ["format_permissions", "get_owner"]
