"""doclog: compiler-style diagnostic rendering for the terminal."""

__version__ = "0.1.0"
