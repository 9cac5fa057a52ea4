"""releaseos - semantic versioning and changelog automation for Maven reactors"""

__version__ = "0.3.0"
