"""Shared block trees for the test suite."""

import pytest

from codetree import CodeBlock


@pytest.fixture
def nested_tree():
    """root [a, b] -> child [c] -> grandchild [d]."""
    root = CodeBlock('main()')
    root.add_statements(['a', 'b'])
    child = CodeBlock('helper()')
    child.add_statement('c')
    grandchild = CodeBlock(None)
    grandchild.add_statement('d')
    child.add_child(grandchild)
    root.add_child(child)
    return root


@pytest.fixture
def wide_tree():
    """main() with leaves helper() and util()."""
    root = CodeBlock('main()')
    root.add_child(CodeBlock('helper()'))
    root.add_child(CodeBlock('util()'))
    return root


@pytest.fixture
def make_chain():
    """Factory for a single path of blocks `depth` levels deep."""
    def _make(depth):
        root = CodeBlock('level 1')
        current = root
        for level in range(2, depth + 1):
            child = CodeBlock(f'level {level}')
            child.add_statement(level)
            current.add_child(child)
            current = child
        return root
    return _make
