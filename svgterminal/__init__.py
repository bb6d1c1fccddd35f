"""Animated SVG terminals rendered from a declarative list of blocks"""

__version__ = '0.5.0'
