"""
ByteSize Value Object

Immutable representation of a payload size with formatting capabilities.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ByteSize:
    """
    Immutable byte count.

    Provides human-readable formatting for logs and error messages.
    """

    bytes: int

    def __post_init__(self):
        """Validate size."""
        if self.bytes < 0:
            raise ValueError(f"Size cannot be negative: {self.bytes}")

    def to_human_readable(self) -> str:
        """
        Format size in human-readable format.

        Returns:
            String like "1.5 MB" or "256.0 KB"
        """
        size = float(self.bytes)
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if size < 1024.0:
                return f"{size:.1f} {unit}"
            size /= 1024.0
        return f"{size:.1f} PB"

    def __str__(self) -> str:
        return self.to_human_readable()
