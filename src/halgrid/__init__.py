"""HalGrid: multi-platform fantasy football aggregation and insights."""

__version__ = "1.0.0"
