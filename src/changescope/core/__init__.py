"""Change collection and workspace plumbing."""

from .change_set import ChangeSet, normalize_path, directory_of
from .config import ImpactConfiguration
from .errors import ChangeScopeError, ChangeListError, PackageListError, ImportResolutionError
from .git_changes import GitChangeLister, ComparisonMode
from .package import Package, DependencyKind
from .workspace import Workspace

__all__ = [
    "ChangeSet", "normalize_path", "directory_of",
    "ImpactConfiguration",
    "ChangeScopeError", "ChangeListError", "PackageListError", "ImportResolutionError",
    "GitChangeLister", "ComparisonMode",
    "Package", "DependencyKind",
    "Workspace",
]
