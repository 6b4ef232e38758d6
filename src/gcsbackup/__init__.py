"""Back up local directory trees to a Google Cloud Storage bucket."""

__version__ = "0.1.0"
