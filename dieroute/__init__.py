"""Capacity-aware route allocation between dies of a multi-die design."""

__version__ = "0.1.0"