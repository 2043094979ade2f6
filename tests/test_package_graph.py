import pytest

from changescope.analyzers.package_graph import PackageGraph
from changescope.core import DependencyKind, ImportResolutionError

from conftest import package


def test_dependencies_by_kind():
    graph = PackageGraph([
        package("a", deps=["fmt", "example.com/m/b"], test_imports=["testing"],
                xtest_imports=["example.com/m/a", "example.com/m/c"]),
    ])
    assert graph.dependencies("example.com/m/a", DependencyKind.REGULAR) == ["fmt", "example.com/m/b"]
    assert graph.dependencies("example.com/m/a", DependencyKind.TEST) == ["testing"]
    assert graph.dependencies("example.com/m/a", DependencyKind.XTEST) == ["example.com/m/a", "example.com/m/c"]
    assert graph.dependencies("example.com/m/unknown", DependencyKind.REGULAR) == []


def test_same_import_in_several_kinds_keeps_each_edge():
    graph = PackageGraph([package("a", deps=["example.com/m/b"], test_imports=["example.com/m/b"])])
    assert graph.dependencies("example.com/m/a", DependencyKind.REGULAR) == ["example.com/m/b"]
    assert graph.dependencies("example.com/m/a", DependencyKind.TEST) == ["example.com/m/b"]


def test_packages_keep_listing_order_and_skip_duplicate_directories():
    first = package("b")
    graph = PackageGraph([first, package("a"), package("b", deps=["fmt"])])
    assert [p.directory for p in graph.packages()] == ["b", "a"]
    assert graph.package_at("b") is first
    assert graph.package_at("missing") is None
    assert len(graph) == 2


def test_cycles_are_accepted():
    graph = PackageGraph([
        package("a", deps=["example.com/m/b"]),
        package("b", deps=["example.com/m/a"]),
    ])
    assert graph.locate("example.com/m/a") == "a"
    assert graph.locate("example.com/m/b") == "b"


def test_unlisted_imports():
    graph = PackageGraph([
        package("a", deps=["fmt", "example.com/m/b"], test_imports=["testing"]),
        package("b", deps=["fmt"]),
    ])
    assert graph.unlisted_imports() == ["fmt", "testing"]


def test_locate_unlisted_import_fails():
    graph = PackageGraph([package("a", deps=["fmt"])])
    with pytest.raises(ImportResolutionError, match="fmt"):
        graph.locate("fmt")
