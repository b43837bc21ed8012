"""Create and manage todo lists stored as CSV files, from the command line or from Python."""

__version__ = "0.1.0"