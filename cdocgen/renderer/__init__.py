"""コメント生成モジュール。"""

from .comment_renderer import render
from .wrappers import find_group, render_file_header, render_group

__all__ = ["render", "find_group", "render_file_header", "render_group"]
