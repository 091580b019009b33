"""
Common geometry models shared by the compositor layers.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, Field


class Size(BaseModel):
    """Image or canvas size in pixels"""

    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")


class Region(BaseModel):
    """
    Rectangular pixel region on the canvas.

    Used for image placements and badge pixel bounds. Coordinates are
    integers, ``x2``/``y2`` are exclusive.
    """

    x: int = Field(..., description="X coordinate")
    y: int = Field(..., description="Y coordinate")
    width: int = Field(..., ge=0, description="Width")
    height: int = Field(..., ge=0, description="Height")

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> "Region":
        """Create region from two corner points."""
        return cls(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))

    @property
    def x2(self) -> int:
        """Get right edge coordinate."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate."""
        return self.y + self.height

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(x1, y1, x2, y2) tuple."""
        return (self.x, self.y, self.x2, self.y2)

    @property
    def area_pixels(self) -> int:
        """Get area of region in pixels."""
        return self.width * self.height

    def contains(self, other: "Region") -> bool:
        """Check if another region lies entirely inside this one."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.x2 <= self.x2
            and other.y2 <= self.y2
        )

    def intersects(self, other: "Region") -> bool:
        """Check if this region intersects with another."""
        return not (
            self.x2 <= other.x or other.x2 <= self.x or self.y2 <= other.y or other.y2 <= self.y
        )

    def intersection(self, other: "Region") -> "Region":
        """Overlap of two regions (empty region at this origin if none)."""
        x1, y1 = max(self.x, other.x), max(self.y, other.y)
        x2, y2 = min(self.x2, other.x2), min(self.y2, other.y2)
        if x2 <= x1 or y2 <= y1:
            return Region(x=self.x, y=self.y, width=0, height=0)
        return Region.from_points(x1, y1, x2, y2)
