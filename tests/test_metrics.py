import numpy as np
import pytest

from codetree import CodeBlock, build_block
from codetree.eval import (
    block_depths,
    blocks_equal,
    blocks_to_frame,
    branching_factors,
    normalized_tree_distance,
    summarize_block,
    tree_edit_distance,
)


@pytest.fixture
def program():
    return build_block((
        'module', ['import os'], [
            ('class A:', [], [('def m(self):', ['pass'])]),
            ('def f():', ['x = 1', 'return x']),
            ('def g():', []),
        ],
    ))


def test_copy_is_structurally_equal(program):
    clone = program.copy()
    assert blocks_equal(program, clone)
    assert tree_edit_distance(program, clone) == 0
    assert normalized_tree_distance(program, clone) == 0.0


def test_blocks_equal_detects_differences(program):
    clone = program.copy()
    clone.add_statement('extra')
    assert not blocks_equal(program, clone)
    assert not blocks_equal(program, CodeBlock('module'))


def test_edit_distance_counts_prototype_and_statements():
    a = build_block(('f()', [1]))
    b = build_block(('g()', [2]))
    assert tree_edit_distance(a, b) == 2.0
    assert tree_edit_distance(a, b, {'prototype': 0.5}) == 1.5


def test_edit_distance_counts_missing_subtrees(program):
    trimmed = build_block(('module', ['import os'], [
        ('class A:', [], [('def m(self):', ['pass'])]),
    ]))
    assert tree_edit_distance(program, trimmed) == 2.0
    assert tree_edit_distance(trimmed, program) == 2.0
    expected = 2.0 / (program.get_total_num_blocks() + trimmed.get_total_num_blocks())
    assert normalized_tree_distance(program, trimmed) == pytest.approx(expected)


def test_unknown_edit_cost_key(program):
    with pytest.raises(ValueError):
        tree_edit_distance(program, program, {'rename': 1.0})


def test_block_depths(program):
    assert block_depths(program) == [1, 2, 3, 2, 2]


def test_branching_factors(program):
    np.testing.assert_array_equal(branching_factors(program), np.array([3, 1]))
    assert branching_factors(CodeBlock('leaf')).size == 0


def test_summarize_block(program):
    summary = summarize_block(program)
    assert summary['num_blocks'] == 5
    assert summary['height'] == 3
    assert summary['num_statements'] == 4
    assert summary['mean_statements_per_block'] == pytest.approx(0.8)
    assert summary['mean_branching'] == pytest.approx(2.0)
    assert summary['max_branching'] == 3


def test_summarize_leaf():
    summary = summarize_block(CodeBlock('leaf'))
    assert summary['num_blocks'] == 1
    assert summary['mean_branching'] == 0.0
    assert summary['max_branching'] == 0


def test_blocks_to_frame(program):
    frame = blocks_to_frame(program)
    assert len(frame) == program.get_total_num_blocks()
    assert frame['prototype'].tolist() == program.get_prototypes_recursively()
    assert frame['depth'].tolist() == block_depths(program)
    assert frame['subtree_size'].tolist() == [5, 2, 1, 1, 1]
    assert frame['subtree_height'].tolist() == [3, 2, 1, 1, 1]
    assert frame['num_statements'].sum() == len(program.get_statements_recursively())
