"""Build code block trees from nested Python literals."""

import logging
from typing import Any, List, Mapping, Sequence

from .code_block import CodeBlock

logger = logging.getLogger(__name__)

BLOCK_KEYS = {'prototype', 'statements', 'children'}


def build_block(node: Any) -> CodeBlock:
    """
    Convert a nested literal to a CodeBlock.

    Accepted forms:
    - 'proto' or None -> leaf block with that prototype
    - (prototype, statements) or (prototype, statements, children)
    - {'prototype': ..., 'statements': [...], 'children': [...]}, all keys optional

    Children are themselves nested literals. Blocks are only created through
    the constructor, add_statements and add_child.
    """
    prototype, statements, children = _unpack(node)
    statements = _as_sequence(statements, 'statements')
    children = list(_as_sequence(children, 'children'))
    block = CodeBlock(prototype)
    block.add_statements(statements)
    if children:
        logger.debug("Building %d children of %r", len(children), prototype)
    for child in children:
        block.add_child(build_block(child))
    return block


def build_blocks(nodes: Sequence[Any]) -> List[CodeBlock]:
    return [build_block(node) for node in nodes]


def _as_sequence(items: Any, field: str):
    if items is None:
        return ()
    if isinstance(items, (str, bytes)):
        raise TypeError(f"Block {field} must be a sequence, not {type(items).__name__}")
    return items


def _unpack(node: Any):
    if node is None or isinstance(node, str):
        return node, (), ()

    if isinstance(node, tuple):
        if len(node) == 2:
            prototype, statements = node
            return prototype, statements, ()
        if len(node) == 3:
            return node
        raise ValueError(f"Block tuple must have 2 or 3 items, got {len(node)}")

    if isinstance(node, Mapping):
        unknown = set(node) - BLOCK_KEYS
        if unknown:
            raise ValueError(f"Unknown block keys: {sorted(unknown)}")
        return node.get('prototype'), node.get('statements', ()), node.get('children', ())

    raise TypeError(f"Cannot build a block from {type(node).__name__}")
