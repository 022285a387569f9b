"""Path resolution module for quickpackage"""

import glob
import logging
import os
import shutil
from pathlib import Path
from typing import List, Tuple, Union

from ..api.exceptions import GlobError, PathError, CopyError

logger = logging.getLogger(__name__)

PathPair = Tuple[Path, Path]


def check_pattern(pattern: str) -> None:
    """Reject malformed glob patterns

    glob.glob() silently treats an unterminated character class as
    literal text, so it is checked here.

    Raises:
        GlobError: If the pattern is empty or has an unbalanced '['
    """
    if not pattern:
        raise GlobError(pattern, "pattern is empty")

    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == '[':
            j = i + 1
            if j < n and pattern[j] in '!^':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            while j < n and pattern[j] != ']':
                j += 1
            if j >= n:
                raise GlobError(pattern, f"unterminated character class at offset {i}")
            i = j
        i += 1


class PathResolver:
    """Expands glob patterns and maps matches under a destination root"""

    def __init__(self, base_dir: Union[str, Path]):
        """Initialize path resolver

        Args:
            base_dir: Directory patterns are resolved against, and that
                relative destination paths are computed from
        """
        self.base_dir = Path(base_dir).resolve()

    def expand(self, pattern: str) -> List[Path]:
        """Expand a glob pattern

        Args:
            pattern: Glob pattern, relative to base_dir or absolute

        Returns:
            Sorted list of matching paths (may be empty). Wildcards
            match names starting with a dot.
        """
        check_pattern(pattern)

        if os.path.isabs(pattern):
            full_pattern = pattern
        else:
            full_pattern = str(self.base_dir / pattern)

        matches = glob.glob(full_pattern, recursive=True, include_hidden=True)
        return [Path(p) for p in sorted(matches)]

    def relative(self, path: Union[str, Path]) -> Path:
        """Path of a match relative to base_dir

        Raises:
            PathError: If the path is not below base_dir
        """
        path = Path(os.path.abspath(path))
        try:
            rel = os.path.relpath(path, self.base_dir)
        except ValueError as e:
            raise PathError(f"Cannot compute {path} relative to {self.base_dir}: {e}")

        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            raise PathError(f"{path} is outside of {self.base_dir}")

        return Path(rel)

    def resolve(self, pattern: str, dest_root: Union[str, Path]) -> List[PathPair]:
        """Map every match of pattern to its place under dest_root

        The directory structure relative to base_dir is kept, so
        ``bin/app`` matched under base_dir lands at ``dest_root/bin/app``.
        Parent directories of each destination are created.

        Args:
            pattern: Glob pattern
            dest_root: Destination root directory

        Returns:
            List of (source, destination) pairs, empty when nothing matched
        """
        dest_root = Path(dest_root)
        matches = self.expand(pattern)

        if not matches:
            logger.warning("Pattern '%s' matched no files in %s", pattern, self.base_dir)
            return []

        pairs = []
        for src in matches:
            dst = dest_root / self.relative(src)
            try:
                dst.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CopyError(f"Failed to create directory {dst.parent}: {e}")
            pairs.append((src, dst))

        return pairs

    def copy(self, pattern: str, dest_root: Union[str, Path],
             required: bool = False) -> List[PathPair]:
        """Copy every match of pattern under dest_root

        Args:
            pattern: Glob pattern
            dest_root: Destination root directory
            required: Raise instead of warning when nothing matches

        Returns:
            List of (source, destination) pairs that were copied

        Raises:
            CopyError: On I/O failure, or on no match when required
        """
        if required and not self.expand(pattern):
            raise CopyError(f"Source file not found: {pattern} (in {self.base_dir})")

        pairs = self.resolve(pattern, dest_root)
        for src, dst in pairs:
            copy_path(src, dst)
        return pairs


def copy_path(src: Path, dst: Path) -> None:
    """Copy a file or a directory tree, overwriting the destination

    Raises:
        CopyError: On any I/O failure
    """
    try:
        if src.is_dir():
            shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
        else:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
    except (OSError, shutil.Error) as e:
        raise CopyError(f"Failed to copy {src} to {dst}: {e}")
    logger.info("Copied %s to %s", src, dst)
