"""ListingEngine - Core orchestration engine for lsgit."""

import logging
from typing import Callable, List, Optional

from rich.console import Console
from rich.text import Text

from .builder import build_flat, build_tree
from .core import ListingSettings
from .formatters import render_listing
from .ignore import IgnoreRules
from .status import StatusIndex, StatusIndexError
from .utils import setup_logger


def make_console(color: str = "auto") -> Console:
    """Create the output console for a color mode (``auto``, ``always`` or ``never``)."""
    options = dict(highlight=False, soft_wrap=True, emoji=False)
    if color == "always":
        return Console(force_terminal=True, **options)
    if color == "never":
        return Console(color_system=None, no_color=True, **options)
    return Console(**options)


class ListingEngine:
    """Orchestrate a listing from status scan to printed output."""

    def __init__(
        self,
        settings: ListingSettings,
        console: Optional[Console] = None,
        root_label: Optional[str] = None,
        index_builder: Callable[..., Optional[StatusIndex]] = StatusIndex.build
    ):
        """Initialize the engine with listing settings.

        Args:
            settings: Listing settings
            console: Console to print to (defaults to one built from settings.color)
            root_label: Text printed as the tree root line (defaults to the start path)
            index_builder: Callable building the status index (dependency injection point)
        """
        self.settings = settings
        self.console = console or make_console(settings.color)
        self.root_label = root_label if root_label is not None else str(settings.start_path)
        self.index_builder = index_builder
        self.logger = setup_logger("lsgit", verbose=settings.verbose)

    def build_status_index(self) -> Optional[StatusIndex]:
        """Build the status index when requested; failures only disable markers."""
        if not self.settings.git:
            return None

        try:
            index = self.index_builder(self.settings.start_path)
        except StatusIndexError as e:
            self.logger.warning(f"Git status unavailable: {e}")
            return None

        if index is None and self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Not inside a git working tree; status markers disabled")
        return index

    def render(self) -> List[Text]:
        """Build the listing and return its rendered lines.

        Raises:
            OSError: If the start path cannot be listed.
        """
        settings = self.settings
        status_index = self.build_status_index()
        ignore_rules = None
        if not settings.show_hidden:
            ignore_rules = IgnoreRules(settings.start_path, settings.ignore_patterns)

        if settings.tree:
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"Building tree from: {settings.start_path}")
            nodes = build_tree(
                settings.start_path,
                0,
                settings.max_depth,
                settings.show_hidden,
                settings.calculate_sizes,
                status_index,
                ignore_rules,
                settings.time_format,
                settings.icons,
            )
            lines = [Text(self.root_label)]
            lines.extend(render_listing(nodes, settings.long_format, tree=True))
            return lines

        records = build_flat(
            settings.start_path,
            settings.show_hidden,
            settings.calculate_sizes,
            status_index,
            ignore_rules,
            settings.time_format,
            settings.icons,
        )
        return render_listing(records, settings.long_format, tree=False)

    def run(self) -> None:
        """Render the listing and print it."""
        lines = self.render()
        for line in lines:
            self.console.print(line)
