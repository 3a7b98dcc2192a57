"""Push the files changed in a git repository to a remote host."""

__version__ = "0.1.0"
