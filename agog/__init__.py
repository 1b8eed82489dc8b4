"""agog - a command line tool for time and project management."""

__version__ = "0.1"
