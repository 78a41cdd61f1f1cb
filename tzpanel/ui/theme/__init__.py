"""Theme system — colors, stylesheet generation, and row icons."""
from .colors import THEMES
from .icons import Themer
from .stylesheet import build_stylesheet, build_menu_stylesheet

__all__ = ["THEMES", "Themer", "build_stylesheet", "build_menu_stylesheet"]
