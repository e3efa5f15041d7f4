"""Package version, sent as the SDK version of every ping."""

__all__ = ["__version__"]

__version__ = "0.1.0"
