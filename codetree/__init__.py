"""Generic n-ary trees of code blocks."""

from .blocks import CodeBlock, build_block, build_blocks

__all__ = ['CodeBlock', 'build_block', 'build_blocks']
