"""Daily coffee machine timer: SQLite store, Flask API and scheduler, GPIO pulse, client and panel."""

__version__ = "0.1.0"
__all__ = ["__version__"]