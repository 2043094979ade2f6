"""Go toolchain integration for package listing and import-path resolution."""

import json
import logging
import os
import subprocess
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.package import Package
from ..core.errors import ImportResolutionError, PackageListError

logger = logging.getLogger(__name__)

# cgo's pseudo-package has no directory of its own and locates to ""
PSEUDO_PACKAGES = frozenset(['C'])


def decode_json_stream(output: str) -> List[dict]:
    """Decode the concatenated JSON objects printed by ``go list -json``."""
    decoder = json.JSONDecoder()
    objects = []
    index = 0
    length = len(output)
    while True:
        while index < length and output[index].isspace():
            index += 1
        if index >= length:
            break
        obj, index = decoder.raw_decode(output, index)
        objects.append(obj)
    return objects


class GoListParser:
    """Wrapper for ``go list``.

    Lists packages with their dependency closures and resolves import paths
    to directories relative to ``project_root``. Resolutions are cached for
    the lifetime of the parser.
    """

    def __init__(self, project_root: str, go_binary: str = "go", cwd: Optional[str] = None):
        self.project_root = os.path.abspath(project_root)
        self.go_binary = go_binary
        self.cwd = cwd
        self._directories: Dict[str, str] = {}

    def relative(self, directory: str) -> str:
        """Project-relative, slash-separated form of an absolute directory."""
        relative = os.path.relpath(directory, self.project_root)
        return relative.replace(os.sep, '/')

    def list_packages(self, patterns: Sequence[str] = ()) -> List[Package]:
        """Run ``go list -json`` for the patterns and return the matching packages."""
        output = self._run(['list', '-json', *patterns], PackageListError)
        try:
            records = decode_json_stream(output)
        except ValueError as e:
            raise PackageListError(f"cannot decode go list output: {e}") from e

        packages = []
        for record in records:
            if not record.get('Dir') or not record.get('ImportPath'):
                raise PackageListError(f"go list returned a package without Dir or ImportPath: {record!r}")
            package = Package(
                directory=self.relative(record['Dir']),
                import_path=record['ImportPath'],
                dependencies=list(record.get('Deps') or []),
                test_imports=list(record.get('TestImports') or []),
                xtest_imports=list(record.get('XTestImports') or []),
            )
            self._directories[package.import_path] = package.directory
            packages.append(package)

        logger.debug("go list returned %d packages", len(packages))
        return packages

    def prefetch(self, import_paths: Iterable[str]) -> None:
        """Resolve every unknown import path with a single ``go list -find`` call."""
        missing = sorted({path for path in import_paths
                          if path not in self._directories and path not in PSEUDO_PACKAGES})
        if not missing:
            return

        output = self._run(['list', '-find', '-f', '{{.ImportPath}}\t{{.Dir}}', *missing],
                           ImportResolutionError)
        for line in output.splitlines():
            if not line.strip():
                continue
            import_path, _, directory = line.partition('\t')
            if not directory:
                raise ImportResolutionError(import_path, "go list reported no directory")
            self._directories[import_path] = self.relative(directory)
        logger.debug("Resolved %d import paths", len(missing))

    def locate(self, import_path: str) -> str:
        """Directory of ``import_path`` relative to the project root."""
        if import_path in PSEUDO_PACKAGES:
            return ''
        if import_path not in self._directories:
            self.prefetch([import_path])
        try:
            return self._directories[import_path]
        except KeyError:
            raise ImportResolutionError(import_path, "not reported by go list") from None

    def _run(self, args: List[str], error_type) -> str:
        cmd = [self.go_binary, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.cwd,
            )
        except FileNotFoundError as e:
            raise self._error(error_type, args, f"{self.go_binary} not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip() or f"exit status {e.returncode}"
            raise self._error(error_type, args, detail) from e
        return result.stdout

    @staticmethod
    def _error(error_type, args: List[str], detail: str):
        if error_type is ImportResolutionError:
            return ImportResolutionError(' '.join(args[4:]), detail)
        return error_type(f"go {' '.join(args)} failed: {detail}")
