"""Network emulator with a Go-Back-N transport protocol."""

__version__ = "1.0.0"
__all__ = ["packets", "emulator", "gbn"]