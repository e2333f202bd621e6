# Bump this when making backwards-incompatible changes to the wire codec.
__version__ = "0.1.0"

__all__ = ["__version__"]
