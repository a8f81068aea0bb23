"""AES-GCM authenticated encryption (aesgcm) and the GHASH universal hash (ghash)."""

__version__ = "0.1.0"
__all__ = ["aesgcm", "ghash"]