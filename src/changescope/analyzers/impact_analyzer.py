"""Impact Analyzer - Runs the collaborators and the engine for one invocation."""

import logging
from typing import Optional

from ..core.change_set import ChangeSet
from ..core.config import ImpactConfiguration
from ..core.git_changes import GitChangeLister
from ..core.workspace import Workspace
from ..parsers.go_list_parser import GoListParser
from .impact_engine import ImpactEngine, ImpactReport
from .package_graph import PackageGraph

logger = logging.getLogger(__name__)


class ImpactAnalyzer:
    """Main orchestrator: changed files + package list -> impacted directories.

    Collaborators are created from the configuration unless injected.
    Nothing is kept between runs; every call to ``analyze`` starts from
    fresh sets.
    """

    def __init__(self, configuration: Optional[ImpactConfiguration] = None,
                 change_lister: Optional[GitChangeLister] = None,
                 package_lister: Optional[GoListParser] = None):
        self.config = configuration or ImpactConfiguration()
        self._change_lister = change_lister
        self._package_lister = package_lister

    @property
    def change_lister(self) -> GitChangeLister:
        """Lazy initialization of the git change lister."""
        if self._change_lister is None:
            self._change_lister = GitChangeLister(self.config.project_root,
                                                  include_staged=self.config.include_staged)
        return self._change_lister

    def project_root(self) -> str:
        return self.config.project_root or self.change_lister.project_root()

    @property
    def package_lister(self) -> GoListParser:
        """Lazy initialization of the go list wrapper."""
        if self._package_lister is None:
            self._package_lister = GoListParser(self.project_root(), go_binary=self.config.go_binary)
        return self._package_lister

    def changed_files(self) -> ChangeSet:
        return self.change_lister.changed_files(self.config.diff)

    def analyze(self, changes: Optional[ChangeSet] = None) -> ImpactReport:
        """Compute the impacted directories for the configured comparison."""
        if changes is None:
            changes = self.changed_files()
        logger.debug("%d changed files", len(changes))

        graph = PackageGraph(self.package_lister.list_packages(self.config.package_patterns))
        workspace = Workspace(self.project_root(), self.config)
        engine = ImpactEngine(graph, workspace, locator=self.package_lister, config=self.config)
        return engine.analyze(changes)
