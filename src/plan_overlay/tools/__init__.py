"""Pointer-driven annotation tools.

- rectangles: one drawn rectangle per floor button / parking section
- boundaries: click boundary lines to split a facade into floor strips
- markers: drag unit markers on a plan and persist the new position
"""

from plan_overlay.tools.rectangles import (
    FloorButtonTool,
    RectangleCaptureTool,
    SectionAreaTool,
)
from plan_overlay.tools.boundaries import BoundaryLineTool
from plan_overlay.tools.markers import (
    MarkerDragTool,
    floor_marker_tool,
    section_marker_tool,
)

__all__ = [
    "FloorButtonTool",
    "RectangleCaptureTool",
    "SectionAreaTool",
    "BoundaryLineTool",
    "MarkerDragTool",
    "floor_marker_tool",
    "section_marker_tool",
]
