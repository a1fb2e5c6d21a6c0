"""Swift source lint engine with width-preserving autocorrection."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("swiftguard")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
