"""Package Graph - Read-only view of the package lister's dependency data."""

import logging
from typing import Dict, Iterable, List, Optional, Protocol

import networkx as nx

from ..core.errors import ImportResolutionError
from ..core.package import DependencyKind, Package

logger = logging.getLogger(__name__)


class PackageLocator(Protocol):
    """Resolves an import path to a project-relative directory."""

    def locate(self, import_path: str) -> str:
        ...


class PackageGraph:
    """Packages keyed by directory, with dependency edges labelled by kind.

    Nodes of the underlying multigraph are import paths. Listed packages carry
    their ``Package`` under the ``package`` node attribute; imports that were
    not listed (standard library, third-party modules) are bare nodes. Cycles
    are allowed: the graph is only ever queried one level deep.
    """

    def __init__(self, packages: Iterable[Package] = ()):
        self.graph = nx.MultiDiGraph()
        self._by_directory: Dict[str, Package] = {}
        for package in packages:
            self.add_package(package)

    def add_package(self, package: Package) -> None:
        if package.directory in self._by_directory:
            logger.debug("Skipping duplicate package at %s", package.directory)
            return
        self._by_directory[package.directory] = package
        self.graph.add_node(package.import_path, package=package)
        for kind in DependencyKind:
            for dep in package.imports_of(kind):
                self.graph.add_edge(package.import_path, dep, key=kind)

    def __len__(self) -> int:
        return len(self._by_directory)

    def packages(self) -> List[Package]:
        """Packages in listing order."""
        return list(self._by_directory.values())

    def package_at(self, directory: str) -> Optional[Package]:
        return self._by_directory.get(directory)

    def dependencies(self, import_path: str, kind: DependencyKind) -> List[str]:
        if import_path not in self.graph:
            return []
        return [dep for _, dep, key in self.graph.out_edges(import_path, keys=True) if key is kind]

    def unlisted_imports(self) -> List[str]:
        """Imported paths that have no listed package of their own."""
        return sorted(node for node, data in self.graph.nodes(data=True) if 'package' not in data)

    def locate(self, import_path: str) -> str:
        """Directory of a listed package."""
        data = self.graph.nodes[import_path] if import_path in self.graph else {}
        if 'package' not in data:
            raise ImportResolutionError(import_path, "not a listed package")
        return data['package'].directory
