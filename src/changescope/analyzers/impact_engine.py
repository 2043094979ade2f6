"""Impact Engine - Folds package reachability into the classified change set."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..core.change_set import ChangeSet
from ..core.config import ImpactConfiguration
from ..core.workspace import Workspace
from ..core.package import DependencyKind, Package
from .package_graph import PackageGraph, PackageLocator
from .path_classifier import ClassificationResult, PathCategory, PathClassifier

logger = logging.getLogger(__name__)


@dataclass
class ImpactReport:
    """Everything computed during one impact analysis run."""
    changes: ChangeSet
    altered: Set[str]
    seeded: Set[str]
    impacted: Set[str]
    buildable: List[str]
    reasons: Dict[str, str] = field(default_factory=dict)
    categories: Dict[str, PathCategory] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'changes': self.changes.sorted(),
            'categories': {path: self.categories[path].value for path in sorted(self.categories)},
            'altered': sorted(self.altered),
            'impacted': sorted(self.impacted),
            'buildable': list(self.buildable),
            'reasons': {path: self.reasons[path] for path in self.buildable if path in self.reasons},
        }


class ImpactEngine:
    """Computes which package directories must be retested.

    The package lister already expands each package's regular dependencies to
    their transitive closure, so reachability is a one-level membership test
    against the altered directories: regular dependencies first, then test
    imports, then external test imports. Any import path that cannot be
    located aborts the run.
    """

    def __init__(self, graph: PackageGraph, workspace: Workspace,
                 locator: Optional[PackageLocator] = None,
                 config: Optional[ImpactConfiguration] = None):
        self.graph = graph
        self.workspace = workspace
        self.locator = locator if locator is not None else graph
        self.config = config or workspace.config
        self.classifier = PathClassifier(workspace, self.config)

    def analyze(self, changes: ChangeSet) -> ImpactReport:
        """Classify the changes, propagate through the package graph and prune."""
        classification = self.classifier.classify_all(changes)
        impacted, reasons = self.propagate(classification)
        buildable = self.prune(impacted)
        return ImpactReport(
            changes=changes,
            altered=set(classification.altered),
            seeded=set(classification.impacted),
            impacted=impacted,
            buildable=buildable,
            reasons=reasons,
            categories=dict(classification.categories),
        )

    def propagate(self, classification: ClassificationResult):
        """Return the impacted directories and the reason each one was added.

        The classification result is left untouched.
        """
        impacted = set(classification.impacted)
        reasons = dict(classification.reasons)
        altered = classification.altered
        if not altered:
            return impacted, reasons

        # Locators backed by an external tool can resolve everything in one call
        prefetch = getattr(self.locator, 'prefetch', None)
        if prefetch is not None:
            prefetch(self.pending_imports(altered))

        for package in self.graph.packages():
            reason = self.impact_reason(package, altered)
            if reason is None:
                continue
            impacted.add(package.directory)
            reasons.setdefault(package.directory, reason)
            logger.debug("%s impacted: %s", package.directory, reason)
        return impacted, reasons

    def pending_imports(self, altered: Set[str]) -> List[str]:
        """Unlisted imports of the packages whose dependencies will be examined."""
        unlisted = set(self.graph.unlisted_imports())
        pending = set()
        for package in self.graph.packages():
            if package.directory in altered:
                continue
            for kind in DependencyKind:
                pending.update(dep for dep in self.graph.dependencies(package.import_path, kind)
                               if dep in unlisted)
        return sorted(pending)

    def impact_reason(self, package: Package, altered: Set[str]) -> Optional[str]:
        """Why ``package`` is impacted by the altered directories, or None if it is not."""
        if package.directory in altered:
            return "altered"
        for kind in DependencyKind:
            for dep in self.graph.dependencies(package.import_path, kind):
                dep_directory = self.locator.locate(dep)
                if dep_directory in altered:
                    return f"imports {dep_directory} ({kind.value})"
        return None

    def prune(self, impacted: Set[str]) -> List[str]:
        """Drop directories that are gone or hold no buildable files; sorted."""
        buildable = []
        for directory in sorted(impacted):
            if self.workspace.has_source_files(directory):
                buildable.append(directory)
            else:
                logger.debug("Pruned %s: no buildable files", directory)
        return buildable
