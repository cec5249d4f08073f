"""docstamp - permalink stamping for markdown documentation."""

__version__ = "0.1.0"
