"""Hot and dead pixel detection and correction for RGB images."""

__version__ = "0.1.0"
