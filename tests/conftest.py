from pathlib import Path

import pytest

from changescope.core import ImpactConfiguration, ImportResolutionError, Package, Workspace


class DictLocator:
    """In-memory stand-in for the go toolchain's import path resolution."""

    def __init__(self, directories):
        self.directories = dict(directories)
        self.calls = []

    def locate(self, import_path):
        self.calls.append(import_path)
        try:
            return self.directories[import_path]
        except KeyError:
            raise ImportResolutionError(import_path, "unknown") from None


def make_files(root: Path, *paths: str) -> Path:
    for path in paths:
        target = root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("package x\n")
    return root


def package(directory, deps=(), test_imports=(), xtest_imports=(), module="example.com/m"):
    import_path = module if directory == "." else f"{module}/{directory}"
    return Package(
        directory=directory,
        import_path=import_path,
        dependencies=list(deps),
        test_imports=list(test_imports),
        xtest_imports=list(xtest_imports),
    )


@pytest.fixture
def config():
    return ImpactConfiguration()


@pytest.fixture
def workspace(tmp_path, config):
    return Workspace(str(tmp_path), config)
