#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderer options and configuration file loading."""

from mdtree.options.base import BaseRendererOptions, CloneFrozenMixin
from mdtree.options.config import find_config_file, load_config_file, load_renderer_options
from mdtree.options.markdown import MarkdownRendererOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownRendererOptions",
    "find_config_file",
    "load_config_file",
    "load_renderer_options",
]
