"""changescope - select the Go packages impacted by a git change set."""

__version__ = "0.1.0"
