"""WIT (Where Is It?) inventory label service."""

__version__ = "0.1.0"
