"""Error taxonomy for impact analysis runs."""


class ChangeScopeError(Exception):
    """Base class for every fatal error raised while computing impacted paths."""


class ChangeListError(ChangeScopeError):
    """The version-control change lister could not be run or failed."""


class PackageListError(ChangeScopeError):
    """The package lister could not be run, failed, or produced unreadable output."""


class ImportResolutionError(ChangeScopeError):
    """An import path could not be resolved to a directory."""

    def __init__(self, import_path: str, detail: str = ""):
        self.import_path = import_path
        message = f"cannot resolve import path {import_path!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
