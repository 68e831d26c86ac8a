"""Evaluation module for block tree metrics."""

from .metrics import (
    blocks_equal,
    tree_edit_distance,
    normalized_tree_distance,
    block_depths,
    branching_factors,
    summarize_block,
    blocks_to_frame,
)

__all__ = [
    'blocks_equal',
    'tree_edit_distance',
    'normalized_tree_distance',
    'block_depths',
    'branching_factors',
    'summarize_block',
    'blocks_to_frame',
]
