"""Configuration shared by the classifier, the engine and the collaborators."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class ImpactConfiguration:
    """Configuration for impact analysis."""
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    fixture_dir: str = "testdata"
    # Basenames with these prefixes are invisible to the toolchain
    ignored_prefixes: Tuple[str, ...] = (".", "_")

    # Comparison specifier: "", "<rev>", "<rev> <rev>", "<rev>..<rev>" or "<rev>...<rev>"
    diff: str = "HEAD"
    # Single-revision comparisons also pick up staged and modified status entries
    include_staged: bool = False

    package_patterns: Tuple[str, ...] = field(default_factory=tuple)
    project_root: Optional[str] = None
    go_binary: str = "go"

    def is_ignored_name(self, basename: str) -> bool:
        return basename.startswith(self.ignored_prefixes)

    def is_test_file(self, basename: str) -> bool:
        return basename.endswith(self.test_suffix) and not self.is_ignored_name(basename)

    def is_source_file(self, basename: str) -> bool:
        return basename.endswith(self.source_suffix)
