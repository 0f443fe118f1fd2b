"""Classic JSON search API: envelope encoding and request parameter normalization."""

__version__ = "1.0.0"
