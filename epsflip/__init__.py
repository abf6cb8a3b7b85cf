"""Random flip walks over approximate tensor decomposition schemes over GF(2)."""

__version__ = "0.1.0"

__all__ = ["__version__"]