"""Content blocks available in configurations"""

from svgterminal.blocks.base import Block, BlockContext, BlockRegistry, BlockResult
from svgterminal.blocks.dynamic import DYNAMIC_BLOCKS
from svgterminal.blocks.static import STATIC_BLOCKS


def default_registry():
    """Return a BlockRegistry holding all the built-in blocks"""
    return BlockRegistry(block_class() for block_class in STATIC_BLOCKS + DYNAMIC_BLOCKS)
