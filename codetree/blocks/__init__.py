"""Code block tree module."""

from .code_block import CodeBlock
from .builder import build_block, build_blocks

__all__ = ['CodeBlock', 'build_block', 'build_blocks']
