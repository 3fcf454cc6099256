"""HTTP API for authors and their articles backed by MySQL, with MySQL protocol helpers."""

__version__ = "0.1.0"