# src/archview/utils/__init__.py
"""
通用工具函式套件。
"""

from .color_utils import get_analogous_dark_color, get_contrast_text_color
from .path_utils import find_project_root, resolve_relative_to

__all__ = [
    "find_project_root",
    "get_analogous_dark_color",
    "get_contrast_text_color",
    "resolve_relative_to",
]
