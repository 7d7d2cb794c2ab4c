"""
MediaType Value Object

A validated MIME main/sub pair such as image/png or video/mp4.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MediaType:
    """Immutable main/sub type pair without parameters."""

    main_type: str
    sub_type: str

    def __post_init__(self):
        if not self.main_type or not self.sub_type:
            raise ValueError("Media type requires a non-empty main and sub type")

    @property
    def mime(self) -> str:
        """Full MIME string, e.g. "image/png"."""
        return f"{self.main_type}/{self.sub_type}"

    @classmethod
    def from_string(cls, value: str) -> "MediaType":
        """
        Rebuild a MediaType from a stored "main/sub" string.

        Raises:
            ValueError: If value is not a main/sub pair
        """
        main_type, sep, sub_type = value.partition("/")
        if not sep:
            raise ValueError(f"Invalid media type: {value}")
        return cls(main_type=main_type, sub_type=sub_type)

    def __str__(self) -> str:
        return self.mime
