"""Version information for kubectl_lite."""

__version__ = "0.1.0"
