"""N-ary tree of code blocks and their statements."""

import copy as _copy
import logging
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

PLACEHOLDER_TEXT = 'CodeBlock({prototype!r}: {blocks} blocks, height {height})'


class CodeBlock(Generic[T]):
    """
    A block of code and the blocks nested inside it.

    prototype: header of the block (function signature, class declaration...),
        or None for a bare nested scope
    statements: statements held directly by this block, opaque to the tree
    children: nested blocks, owned by this block, in source order

    Every query walks the tree with an explicit stack, so deep trees do not
    run into the interpreter's recursion limit.
    """
    def __init__(self, prototype: Optional[str] = None):
        self.prototype = prototype
        self._statements: List[T] = []
        self._children: List['CodeBlock[T]'] = []

    @classmethod
    def from_block(cls, source: 'CodeBlock[T]') -> 'CodeBlock[T]':
        """Copy constructor, same as ``source.copy()`` but building ``cls`` blocks."""
        return source._copy_tree(cls)

    def copy(self) -> 'CodeBlock[T]':
        """
        Deep copy of this block and its subtree.

        Statements are copied into new lists but the statement objects
        themselves are shared with the source.
        """
        return self._copy_tree(type(self))

    def _copy_tree(self, block_type) -> 'CodeBlock[T]':
        root = block_type(self.prototype)
        stack: List[Tuple['CodeBlock[T]', 'CodeBlock[T]']] = [(self, root)]
        while stack:
            src, dst = stack.pop()
            dst._statements.extend(src._statements)
            for child in src._children:
                child_copy = type(child)(child.prototype)
                dst._children.append(child_copy)
                stack.append((child, child_copy))
        return root

    def __copy__(self) -> 'CodeBlock[T]':
        return self.copy()

    def __deepcopy__(self, memo) -> 'CodeBlock[T]':
        root = self.copy()
        for block in root.iter_blocks():
            block._statements = [_copy.deepcopy(s, memo) for s in block._statements]
        return root

    # Prototype

    def get_prototype(self) -> Optional[str]:
        return self.prototype

    def set_prototype(self, prototype: Optional[str]):
        self.prototype = prototype

    def get_prototypes_recursively(self) -> List[Optional[str]]:
        """Prototypes of this block and all nested blocks, depth-first."""
        return [block.prototype for block in self.iter_blocks()]

    # Statements

    def add_statement(self, statement: T):
        self._statements.append(statement)

    def add_statements(self, statements: Iterable[T]):
        """Append statements in order."""
        for statement in statements:
            self._statements.append(statement)

    def get_statements(self) -> List[T]:
        """Copy of the statements held directly by this block."""
        return list(self._statements)

    def get_num_statements(self) -> int:
        return len(self._statements)

    def get_statements_recursively(self) -> List[T]:
        """All statements of this block and its nested blocks, depth-first."""
        statements: List[T] = []
        for block in self.iter_blocks():
            statements.extend(block._statements)
        return statements

    # Children

    def add_child(self, child: 'CodeBlock[T]'):
        """
        Attach ``child`` as the last nested block.

        The block takes ownership of ``child``: callers should not keep
        mutating it through another reference, and must not attach the same
        instance under a second parent. Attaching a block to itself or to
        one of its own descendants raises ValueError.
        """
        for block in child.iter_blocks():
            if block is self:
                logger.debug("Rejected attaching %r below itself", self.prototype)
                raise ValueError(f"Cannot attach block {self.prototype!r}: it would contain itself")
        self._children.append(child)

    def get_children(self) -> List['CodeBlock[T]']:
        """Deep copies of the nested blocks. Changes to them do not affect this block."""
        return [child.copy() for child in self._children]

    def get_num_children(self) -> int:
        return len(self._children)

    # Aggregates

    def get_height(self) -> int:
        """Number of levels in the tree, a single block has height 1."""
        height = 0
        stack: List[Tuple['CodeBlock[T]', int]] = [(self, 1)]
        while stack:
            block, level = stack.pop()
            height = max(height, level)
            for child in block._children:
                stack.append((child, level + 1))
        return height

    def get_total_num_blocks(self) -> int:
        """Count total blocks in this subtree, including this one."""
        return sum(1 for _ in self.iter_blocks())

    def iter_blocks(self) -> Iterator['CodeBlock[T]']:
        """
        Walk this block and its nested blocks depth-first, without copying.

        The yielded blocks are the live ones, for read-only use.
        """
        stack: List['CodeBlock[T]'] = [self]
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block._children))

    def iter_blocks_with_depth(self) -> Iterator[Tuple['CodeBlock[T]', int]]:
        """Same walk as iter_blocks, paired with depths starting at 1."""
        stack: List[Tuple['CodeBlock[T]', int]] = [(self, 1)]
        while stack:
            block, depth = stack.pop()
            yield block, depth
            stack.extend((child, depth + 1) for child in reversed(block._children))

    def iter_children(self) -> Iterator['CodeBlock[T]']:
        """Live direct children, read-only."""
        return iter(self._children)

    def iter_statements(self) -> Iterator[T]:
        """Statements held directly by this block, without copying."""
        return iter(self._statements)

    def __repr__(self):
        parts: List[str] = []
        stack: List[object] = [self]
        while stack:
            item = stack.pop()
            if not isinstance(item, CodeBlock):
                parts.append(item)
                continue
            if item._children:
                parts.append(f"CodeBlock({item.prototype!r}, statements={len(item._statements)}, children=[")
                stack.append('])')
                for i, child in reversed(list(enumerate(item._children))):
                    stack.append(child)
                    if i:
                        stack.append(', ')
            elif item._statements:
                parts.append(f"CodeBlock({item.prototype!r}, statements={len(item._statements)})")
            else:
                parts.append(f"CodeBlock({item.prototype!r})")
        return ''.join(parts)

    def __str__(self):
        return PLACEHOLDER_TEXT.format(
            prototype=self.prototype,
            blocks=self.get_total_num_blocks(),
            height=self.get_height(),
        )
