"""Filesystem checks that decide whether a directory qualifies for testing."""

import logging
import os
from typing import List, Optional

from .config import ImpactConfiguration

logger = logging.getLogger(__name__)


class Workspace:
    """Read-only view of the project tree rooted at ``root``.

    Directories are addressed by their root-relative form (``.`` for the root).
    A directory that cannot be listed never qualifies.
    """

    def __init__(self, root: str, config: Optional[ImpactConfiguration] = None):
        self.root = os.path.abspath(root)
        self.config = config or ImpactConfiguration()

    def absolute(self, directory: str) -> str:
        return os.path.normpath(os.path.join(self.root, directory))

    def _file_names(self, directory: str) -> Optional[List[str]]:
        try:
            with os.scandir(self.absolute(directory)) as entries:
                return [entry.name for entry in entries if entry.is_file()]
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            return None

    def has_test_files(self, directory: str) -> bool:
        """True if the directory holds at least one visible test file."""
        names = self._file_names(directory)
        if names is None:
            return False
        return any(self.config.is_test_file(name) for name in names)

    def has_source_files(self, directory: str) -> bool:
        """True if the directory holds at least one buildable source file."""
        names = self._file_names(directory)
        if names is None:
            return False
        return any(self.config.is_source_file(name) for name in names)
