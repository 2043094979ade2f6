"""Path Classifier - Sorts changed paths into categories and seeds the impacted set."""

import logging
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

from ..core.change_set import ChangeSet, directory_of
from ..core.config import ImpactConfiguration
from ..core.workspace import Workspace

logger = logging.getLogger(__name__)


class PathCategory(Enum):
    """Categories a changed path can fall into."""
    HIDDEN = "hidden"
    IGNORED_PREFIX = "ignored_prefix"
    TEST_FILE = "test_file"
    ROOT_FIXTURE = "root_fixture"
    NESTED_FIXTURE = "nested_fixture"
    SOURCE_FILE = "source_file"
    OTHER = "other"


@dataclass
class ClassificationResult:
    """Directories seeded by one pass over a change set."""
    altered: Set[str] = field(default_factory=set)
    impacted: Set[str] = field(default_factory=set)
    categories: Dict[str, PathCategory] = field(default_factory=dict)
    reasons: Dict[str, str] = field(default_factory=dict)

    def mark_impacted(self, directory: str, reason: str) -> None:
        self.impacted.add(directory)
        self.reasons.setdefault(directory, reason)

    def mark_altered(self, directory: str) -> None:
        self.altered.add(directory)
        self.mark_impacted(directory, "altered")


@dataclass(frozen=True)
class ChangedPath:
    """A changed path split into the pieces the rules look at."""
    path: str
    basename: str
    directory: str
    fixture_index: Optional[int]

    @property
    def fixture_parent(self) -> str:
        """Directory that directly contains the first fixture directory."""
        segments = self.directory.split('/')
        return '/'.join(segments[:self.fixture_index]) or '.'


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification table."""
    category: PathCategory
    matches: Callable[[ChangedPath], bool]
    apply: Callable[[ChangedPath, ClassificationResult], None]


class PathClassifier:
    """Classifies changed paths with an ordered rule table; the first matching rule wins.

    Rules, in priority order:
      1. hidden basename (``.`` prefix)          -> ignored
      2. other ignored prefix (``_`` by default) -> ignored
      3. test file                               -> its directory is impacted
      4. under a fixture directory at the root   -> root is impacted if it has tests
      5. under a nested fixture directory        -> ancestors with tests are impacted
      6. source file                             -> its directory is altered and impacted
      7. anything else                           -> ignored

    The classifier never checks that a changed path still exists. Only the
    fixture rules touch the filesystem, to look for test files.
    """

    def __init__(self, workspace: Workspace, config: Optional[ImpactConfiguration] = None):
        self.workspace = workspace
        self.config = config or workspace.config
        self.rules: Tuple[ClassificationRule, ...] = (
            ClassificationRule(PathCategory.HIDDEN,
                               lambda c: (c.basename.startswith('.')
                                          and self.config.is_ignored_name(c.basename)),
                               self._ignore),
            ClassificationRule(PathCategory.IGNORED_PREFIX,
                               lambda c: self.config.is_ignored_name(c.basename),
                               self._ignore),
            ClassificationRule(PathCategory.TEST_FILE,
                               lambda c: c.basename.endswith(self.config.test_suffix),
                               self._apply_test_file),
            ClassificationRule(PathCategory.ROOT_FIXTURE,
                               lambda c: c.fixture_index == 0,
                               self._apply_root_fixture),
            ClassificationRule(PathCategory.NESTED_FIXTURE,
                               lambda c: c.fixture_index is not None and c.fixture_index > 0,
                               self._apply_nested_fixture),
            ClassificationRule(PathCategory.SOURCE_FILE,
                               lambda c: c.basename.endswith(self.config.source_suffix),
                               self._apply_source_file),
        )

    def split(self, path: str) -> ChangedPath:
        directory = directory_of(path)
        segments = directory.split('/') if directory != '.' else []
        try:
            fixture_index = segments.index(self.config.fixture_dir)
        except ValueError:
            fixture_index = None
        return ChangedPath(
            path=path,
            basename=posixpath.basename(path),
            directory=directory,
            fixture_index=fixture_index,
        )

    def match(self, changed: ChangedPath) -> Optional[ClassificationRule]:
        for rule in self.rules:
            if rule.matches(changed):
                return rule
        return None

    def classify(self, path: str) -> PathCategory:
        """Category of a single changed path."""
        rule = self.match(self.split(path))
        return rule.category if rule else PathCategory.OTHER

    def classify_all(self, changes: ChangeSet) -> ClassificationResult:
        """Classify every changed path and collect the altered and impacted directories."""
        result = ClassificationResult()
        for path in changes.sorted():
            changed = self.split(path)
            rule = self.match(changed)
            if rule is None:
                result.categories[path] = PathCategory.OTHER
                continue
            result.categories[path] = rule.category
            rule.apply(changed, result)
            logger.debug("%s -> %s", path, rule.category.value)
        return result

    def bubble_fixture(self, start: str) -> List[str]:
        """Directories from ``start`` up to, but excluding, the root that hold test files."""
        found = []
        directory = start
        while directory != '.':
            if self.workspace.has_test_files(directory):
                found.append(directory)
            directory = directory_of(directory)
        return found

    def _ignore(self, changed: ChangedPath, result: ClassificationResult) -> None:
        pass

    def _apply_test_file(self, changed: ChangedPath, result: ClassificationResult) -> None:
        result.mark_impacted(changed.directory, "test file changed")

    def _apply_root_fixture(self, changed: ChangedPath, result: ClassificationResult) -> None:
        if self.workspace.has_test_files('.'):
            result.mark_impacted('.', f"fixture {changed.path}")

    def _apply_nested_fixture(self, changed: ChangedPath, result: ClassificationResult) -> None:
        for directory in self.bubble_fixture(changed.fixture_parent):
            result.mark_impacted(directory, f"fixture {changed.path}")

    def _apply_source_file(self, changed: ChangedPath, result: ClassificationResult) -> None:
        result.mark_altered(changed.directory)
