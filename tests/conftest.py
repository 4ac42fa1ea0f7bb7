"""Shared pytest fixtures for lsgit tests."""

from fixtures.fs_fixtures import (  # noqa: F401
    fake_stat,
    listing_dir,
    node_factory,
    record_factory,
    settings_factory,
)
from fixtures.git_fixtures import git_repo  # noqa: F401
from fixtures.log_fixtures import reset_lsgit_logger  # noqa: F401
