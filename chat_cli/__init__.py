"""Chat with a completion service through an editable transcript file."""

__version__ = "0.1.0"
