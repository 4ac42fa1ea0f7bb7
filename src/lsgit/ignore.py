"""Gitignore-style filtering for directory listings."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pathspec

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".gitignore"


def find_worktree_boundary(path: Path) -> Optional[Path]:
    """Return the nearest ancestor of ``path`` (inclusive) that contains ``.git``."""
    for candidate in (path, *path.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def _read_pattern_lines(ignore_file: Path) -> List[str]:
    """Read an ignore file, returning an empty list when it cannot be read."""
    try:
        with open(ignore_file, "r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError:
        return []


class IgnoreRules:
    """Decide whether a path is excluded by ignore files or extra patterns.

    Rules are layered from the boundary directory (the enclosing working tree,
    or the listing root outside of one) down to the parent of the candidate.
    Each layer's patterns are relative to the directory holding them, and the
    last matching pattern across all layers decides, so a nearer ``.gitignore``
    can re-include what a farther one excluded.
    """

    def __init__(self, root: Path, extra_patterns: Iterable[str] = ()) -> None:
        """Initialize rules for a listing rooted at ``root``.

        Args:
            root: Absolute traversal root.
            extra_patterns: Additional gitignore-syntax patterns, relative to ``root``.
        """
        self.root = root
        self.worktree = find_worktree_boundary(root)
        self.boundary = self.worktree or root
        self.extra_spec = self._compile(list(extra_patterns))
        self._cache: Dict[Path, Optional[pathspec.PathSpec]] = {}
        self._exclude_spec = self._load_info_exclude()

    @staticmethod
    def _compile(lines: List[str]) -> Optional[pathspec.PathSpec]:
        spec = pathspec.PathSpec.from_lines("gitignore", lines)
        return spec if len(spec.patterns) else None

    def _load_info_exclude(self) -> Optional[pathspec.PathSpec]:
        if self.worktree is None:
            return None
        exclude_file = self.worktree / ".git" / "info" / "exclude"
        if not exclude_file.is_file():
            return None
        return self._compile(_read_pattern_lines(exclude_file))

    def _spec_for(self, directory: Path) -> Optional[pathspec.PathSpec]:
        if directory not in self._cache:
            ignore_file = directory / IGNORE_FILENAME
            spec = None
            if ignore_file.is_file():
                spec = self._compile(_read_pattern_lines(ignore_file))
                if spec and logger.isEnabledFor(logging.DEBUG):
                    logger.debug(f"Loaded {len(spec.patterns)} ignore patterns from {ignore_file}")
            self._cache[directory] = spec
        return self._cache[directory]

    def _layers(self, parent: Path) -> List[Tuple[Path, pathspec.PathSpec]]:
        """Return ``(base_dir, spec)`` pairs from the boundary down to ``parent``."""
        try:
            rel_parts = parent.relative_to(self.boundary).parts
        except ValueError:
            return []

        layers: List[Tuple[Path, pathspec.PathSpec]] = []
        if self._exclude_spec is not None:
            layers.append((self.boundary, self._exclude_spec))

        directory = self.boundary
        dirs = [directory]
        for part in rel_parts:
            directory = directory / part
            dirs.append(directory)

        for directory in dirs:
            spec = self._spec_for(directory)
            if spec is not None:
                layers.append((directory, spec))
            if directory == self.root and self.extra_spec is not None:
                layers.append((self.root, self.extra_spec))
        return layers

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """Return True if ``path`` is excluded by the applicable rules.

        Args:
            path: Absolute path of the candidate entry.
            is_dir: Whether the candidate is a directory, so ``dir/`` patterns apply.
        """
        ignored = False
        for base, spec in self._layers(path.parent):
            rel_path = path.relative_to(base).as_posix()
            if is_dir:
                rel_path += "/"
            for pattern in spec.patterns:
                if pattern.include is None:
                    continue
                if pattern.match_file(rel_path) is not None:
                    ignored = pattern.include
        return ignored
