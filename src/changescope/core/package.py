"""Package metadata as reported by the package lister."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class DependencyKind(Enum):
    """Flavours of dependency edges, in the order they are checked."""
    REGULAR = "regular"
    TEST = "test"
    XTEST = "xtest"


@dataclass
class Package:
    """A package as reported by the package lister.

    ``dependencies`` already holds the transitive closure; the test lists hold
    the direct imports of in-package and external test files.
    """
    directory: str
    import_path: str
    dependencies: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)
    xtest_imports: List[str] = field(default_factory=list)

    def imports_of(self, kind: DependencyKind) -> List[str]:
        if kind is DependencyKind.REGULAR:
            return self.dependencies
        if kind is DependencyKind.TEST:
            return self.test_imports
        return self.xtest_imports
