"""Decoder and renderer adapters for the planners' output."""

from .video_processing import OpenCVDecoder
from .renderer import PillowRenderer, save_contact_sheet

__all__ = ["OpenCVDecoder", "PillowRenderer", "save_contact_sheet"]
