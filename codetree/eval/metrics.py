import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from codetree.blocks import CodeBlock

logger = logging.getLogger(__name__)

DEFAULT_EDIT_COSTS: Dict[str, float] = {
    'prototype': 1.0,
    'statements': 1.0,
    'missing_block': 1.0,
}

FRAME_COLUMNS = [
    'index',
    'depth',
    'prototype',
    'num_statements',
    'num_children',
    'subtree_size',
    'subtree_height',
]


def _edit_costs(edit_costs: Optional[Dict[str, float]]) -> Dict[str, float]:
    costs = dict(DEFAULT_EDIT_COSTS)
    if edit_costs is not None:
        unknown = set(edit_costs) - set(DEFAULT_EDIT_COSTS)
        if unknown:
            raise ValueError(f"Unknown edit cost keys: {sorted(unknown)}")
        costs.update(edit_costs)
    return costs


def blocks_equal(block1: CodeBlock, block2: CodeBlock) -> bool:
    """Structural equality on prototypes, statements and children."""
    stack = [(block1, block2)]
    while stack:
        b1, b2 = stack.pop()
        if b1.prototype != b2.prototype:
            return False
        if list(b1.iter_statements()) != list(b2.iter_statements()):
            return False
        if b1.get_num_children() != b2.get_num_children():
            return False
        stack.extend(zip(b1.iter_children(), b2.iter_children()))
    return True


def tree_edit_distance(
    block1: CodeBlock,
    block2: CodeBlock,
    edit_costs: Optional[Dict[str, float]] = None,
) -> float:
    """
    Positional edit distance between two block trees.

    Children are aligned by index. A differing prototype or statement list
    costs one edit each; every block of a subtree present in only one tree
    costs 'missing_block'.
    """
    costs = _edit_costs(edit_costs)
    cost = 0.0
    stack = [(block1, block2)]
    while stack:
        b1, b2 = stack.pop()
        if b1.prototype != b2.prototype:
            cost += costs['prototype']
        if list(b1.iter_statements()) != list(b2.iter_statements()):
            cost += costs['statements']
        children1 = list(b1.iter_children())
        children2 = list(b2.iter_children())
        for i in range(max(len(children1), len(children2))):
            if i < len(children1) and i < len(children2):
                stack.append((children1[i], children2[i]))
            else:
                extra = children1[i] if i < len(children1) else children2[i]
                cost += costs['missing_block'] * extra.get_total_num_blocks()
    return cost


def normalized_tree_distance(
    block1: CodeBlock,
    block2: CodeBlock,
    edit_costs: Optional[Dict[str, float]] = None,
) -> float:
    dist = tree_edit_distance(block1, block2, edit_costs)
    total_blocks = block1.get_total_num_blocks() + block2.get_total_num_blocks()
    return dist / float(total_blocks)


def block_depths(block: CodeBlock) -> List[int]:
    """Depth of every block in preorder, the root being at depth 1."""
    return [depth for _, depth in block.iter_blocks_with_depth()]


def branching_factors(block: CodeBlock) -> np.ndarray:
    """Number of children of each block that has any, in preorder."""
    counts = [b.get_num_children() for b in block.iter_blocks()]
    return np.asarray([c for c in counts if c > 0], dtype=int)


def summarize_block(block: CodeBlock) -> Dict[str, float]:
    statement_counts = np.asarray([b.get_num_statements() for b in block.iter_blocks()], dtype=float)
    branching = branching_factors(block)
    return {
        'num_blocks': int(statement_counts.size),
        'height': block.get_height(),
        'num_statements': int(statement_counts.sum()),
        'mean_statements_per_block': float(statement_counts.mean()),
        'mean_branching': float(branching.mean()) if branching.size else 0.0,
        'max_branching': int(branching.max()) if branching.size else 0,
    }


def blocks_to_frame(block: CodeBlock) -> pd.DataFrame:
    """One row per block, in preorder."""
    visited = list(block.iter_blocks_with_depth())

    # Children follow their parent in preorder, so a reverse pass sees them first.
    sizes: Dict[int, int] = {}
    heights: Dict[int, int] = {}
    for b, _ in reversed(visited):
        sizes[id(b)] = 1 + sum(sizes[id(c)] for c in b.iter_children())
        heights[id(b)] = 1 + max((heights[id(c)] for c in b.iter_children()), default=0)

    rows = []
    for i, (b, depth) in enumerate(visited):
        rows.append({
            'index': i,
            'depth': depth,
            'prototype': b.prototype,
            'num_statements': b.get_num_statements(),
            'num_children': b.get_num_children(),
            'subtree_size': sizes[id(b)],
            'subtree_height': heights[id(b)],
        })
    logger.debug("Built block frame with %d rows", len(rows))
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
