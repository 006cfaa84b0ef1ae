"""Announcement channels and the markdown game log."""

from .channels import Channel, ChannelManager, Visibility
from .markdown_logger import MarkdownLogger

__all__ = ["Channel", "ChannelManager", "Visibility", "MarkdownLogger"]
