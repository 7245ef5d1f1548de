"""code-deps: Build and inspect file-level dependency graphs of web projects."""

__version__ = "0.1.0"
