"""C declaration classifier and Doxygen comment generator."""

from .classifier.declaration_classifier import analyze_declaration
from .renderer.comment_renderer import render

__version__ = "0.1.0"

__all__ = ["analyze_declaration", "render", "__version__"]
