"""BMP handling, pixel filters, a bitmap diff tool and small string and arithmetic helpers."""

__version__ = "0.1.0"

__all__ = [
    "bmp",
    "bmpdiff",
    "checkpoints",
    "cli",
    "filters",
    "images",
    "pixels",
    "text",
]