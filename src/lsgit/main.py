"""Entry point for the lsgit command."""

import os
import sys
from pathlib import Path
from typing import List, Optional

from .cli import parse_arguments
from .config import load_config
from .core import ListingSettings
from .engine import ListingEngine
from .utils import describe_error, setup_logger


def main(argv: Optional[List[str]] = None) -> int:
    """Run lsgit and return the process exit status.

    Only a root path that cannot be listed is fatal; per-entry failures are
    skipped and git failures only disable status markers.
    """
    args = parse_arguments(argv)
    logger = setup_logger("lsgit", verbose=args.verbose)

    start_path = Path(os.path.abspath(args.path))
    if not start_path.exists():
        logger.error(f"Cannot access '{args.path}': No such file or directory")
        return 1
    if not start_path.is_dir():
        logger.error(f"Cannot list '{args.path}': Not a directory")
        return 1

    config = load_config(start_path, logger)
    settings = ListingSettings.from_arguments(args, config, start_path)
    engine = ListingEngine(settings, root_label=args.path)

    try:
        engine.run()
    except OSError as e:
        logger.error(f"Cannot list '{args.path}': {describe_error(e)}")
        return 1
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
