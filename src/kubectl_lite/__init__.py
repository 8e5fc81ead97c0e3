"""kubectl-lite: a kubectl-like client built on cached API discovery."""

from kubectl_lite.__version__ import __version__

__all__ = ["__version__"]
