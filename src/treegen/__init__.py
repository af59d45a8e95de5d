"""treegen: branching-rule tree generation and tree population statistics."""

__version__ = "0.1.0"
