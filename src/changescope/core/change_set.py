"""Unordered collection of distinct changed paths."""

import posixpath
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List


def normalize_path(path: str) -> str:
    """Normalize a changed path to a forward-slash, root-relative form.

    Surrounding whitespace, Windows separators and a leading ``./`` are
    removed. Returns an empty string for blank input.
    """
    path = path.strip().replace('\\', '/')
    if not path:
        return ''
    path = posixpath.normpath(path)
    if path == '.':
        return ''
    return path


def directory_of(path: str) -> str:
    """Directory of a root-relative path; ``.`` for files at the root."""
    return posixpath.dirname(path) or '.'


@dataclass(frozen=True)
class ChangeSet:
    """Set of changed file paths relative to the project root."""
    paths: FrozenSet[str] = frozenset()

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> 'ChangeSet':
        normalized = (normalize_path(p) for p in paths)
        return cls(frozenset(p for p in normalized if p))

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __or__(self, other: 'ChangeSet') -> 'ChangeSet':
        return ChangeSet(self.paths | other.paths)

    def sorted(self) -> List[str]:
        return sorted(self.paths)
