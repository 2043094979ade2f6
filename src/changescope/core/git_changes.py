"""Changed-file listing backed by git."""

import logging
import os
from enum import Enum
from typing import List, Optional

from git import Repo
from git.exc import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError

from .change_set import ChangeSet
from .errors import ChangeListError

logger = logging.getLogger(__name__)


class ComparisonMode(Enum):
    """How a comparison specifier is interpreted."""
    WORKING_TREE = "working_tree"
    SINGLE_REVISION = "single_revision"
    EXPLICIT_RANGE = "explicit_range"

    @classmethod
    def from_specifier(cls, specifier: str) -> 'ComparisonMode':
        specifier = specifier.strip()
        if not specifier:
            return cls.WORKING_TREE
        # "sha1 sha2", "sha1..sha2" or "sha1...sha2"
        if ' ' in specifier or '.' in specifier:
            return cls.EXPLICIT_RANGE
        return cls.SINGLE_REVISION


def parse_status_output(output: str, untracked_only: bool = False) -> List[str]:
    """Parse ``git status --porcelain -z`` output into file paths.

    Each entry is ``XY <path>``. Renames are reported as a deletion of the
    original path plus an addition of the new one, so both names are kept.
    Copies only contribute the new path; the source is untouched.
    """
    fields = output.split('\0')
    paths = []
    i = 0
    while i < len(fields):
        entry = fields[i]
        i += 1
        if len(entry) < 4:
            continue
        status, path = entry[:2], entry[3:]

        original = None
        if 'R' in status or 'C' in status:
            # -z puts the source path in the following field
            if i < len(fields):
                original = fields[i]
                i += 1
            if 'C' in status:
                original = None

        if untracked_only and status != '??':
            continue
        paths.append(path)
        if original:
            paths.append(original)
    return paths


def parse_name_only_output(output: str) -> List[str]:
    """Parse ``git diff --name-only -z`` output into file paths."""
    return [path for path in output.split('\0') if path.strip()]


def git_stderr(exc: GitCommandError) -> str:
    """Stderr of a failed git command without GitPython's ``stderr: '...'`` wrapping."""
    stderr = (exc.stderr or '').strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
        if len(stderr) >= 2 and stderr[0] == stderr[-1] == "'":
            stderr = stderr[1:-1]
    return stderr.strip()


class GitChangeLister:
    """Lists the files changed in a git working tree.

    The comparison specifier behaves like ``git diff``:

      ""
        Everything pending in the working tree: modified, staged and untracked files.
      "<commit>"
        Changes relative to <commit>, plus untracked files (plus every pending
        status entry when ``include_staged`` is set).
      "<commit> <commit>", "<commit>..<commit>", "<commit>...<commit>"
        Changes between exactly those revisions. Untracked files are not included.

    Rename detection is disabled so that a renamed file shows up under both
    its old and its new name.
    """

    def __init__(self, path: Optional[str] = None, include_staged: bool = False):
        self.include_staged = include_staged
        try:
            self.repo = Repo(path or os.getcwd(), search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise ChangeListError(f"not a git repository: {path or os.getcwd()}") from exc

    def project_root(self) -> str:
        """Absolute path of the repository working tree."""
        if self.repo.working_tree_dir is None:
            raise ChangeListError("repository has no working tree")
        return str(self.repo.working_tree_dir)

    def changed_files(self, specifier: str = "HEAD") -> ChangeSet:
        """Return the set of changed files for a comparison specifier."""
        specifier = specifier.strip()
        mode = ComparisonMode.from_specifier(specifier)
        logger.debug("Listing changes for %r (%s)", specifier, mode.value)

        if mode is ComparisonMode.WORKING_TREE:
            return ChangeSet.from_paths(self._status(untracked_only=False))

        diffs = self._diff(specifier.split())
        if mode is ComparisonMode.EXPLICIT_RANGE:
            return ChangeSet.from_paths(diffs)

        pending = self._status(untracked_only=not self.include_staged)
        return ChangeSet.from_paths(diffs + pending)

    def _status(self, untracked_only: bool) -> List[str]:
        output = self._run('status', '--porcelain', '-z', '--untracked-files=all')
        return parse_status_output(output, untracked_only=untracked_only)

    def _diff(self, revisions: List[str]) -> List[str]:
        output = self._run('diff', '--name-only', '--no-renames', '-z', *revisions, '--')
        return parse_name_only_output(output)

    def _run(self, command: str, *args: str) -> str:
        try:
            return getattr(self.repo.git, command)(*args)
        except GitCommandNotFound as exc:
            raise ChangeListError("git executable not found") from exc
        except GitCommandError as exc:
            stderr = git_stderr(exc)
            raise ChangeListError(f"git {command} failed: {stderr or exc}") from exc
