"""Rendering package: pure frame builders plus the stdout writer."""

from .frame import RenderContext, build_frame, build_status_line, display_path, render_frame
from .help import build_help_page
from .layout import FrameGeometry, frame_geometry, scroll_start_for_selection

__all__ = [
    "RenderContext",
    "build_frame",
    "build_status_line",
    "display_path",
    "render_frame",
    "build_help_page",
    "FrameGeometry",
    "frame_geometry",
    "scroll_start_for_selection",
]
