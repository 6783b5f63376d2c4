"""pkgrel - release automation for packaged repositories."""

__version__ = "0.3.0"
