"""Multi-zone time synchronisation for a fixed roster of office locations."""
__version__ = "0.1.0"
