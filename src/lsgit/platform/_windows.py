"""Placeholders for Windows, where ACLs do not map onto rwx bits."""

import os


def format_permissions(st: os.stat_result) -> str:
    return "----------"


def get_owner(st: os.stat_result) -> str:
    return "user group"
