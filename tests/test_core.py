import random

import pytest

from huffman_core import HuffmanLogic, HuffmanNode
from huffman_errors import EmptyAlphabetError, HuffmanError, MalformedTreeError


def _code_lengths(text):
	logic = HuffmanLogic()
	codes = logic.generate_codes(logic.build_tree(logic.count_frequencies(text)))
	return {char: length for char, (_, length) in codes.items()}


def test_count_frequencies():
	logic = HuffmanLogic()
	assert logic.count_frequencies("abca") == {'a': 2, 'b': 1, 'c': 1}
	assert logic.count_frequencies("") == {}


def test_count_frequencies_ignores_order():
	logic = HuffmanLogic()
	assert logic.count_frequencies("abcabd") == logic.count_frequencies("dbacba")


def test_abca_gives_a_the_shortest_code():
	logic = HuffmanLogic()
	codes = logic.generate_codes(logic.build_tree(logic.count_frequencies("abca")))
	assert codes == {'a': (0b0, 1), 'b': (0b10, 2), 'c': (0b11, 2)}


def test_code_lengths_follow_frequencies():
	lengths = _code_lengths("a" * 5 + "bb" + "c" + "d")
	assert lengths == {'a': 1, 'b': 2, 'c': 3, 'd': 3}


def test_build_tree_empty_alphabet():
	logic = HuffmanLogic()
	with pytest.raises(EmptyAlphabetError):
		logic.build_tree({})


def test_empty_alphabet_is_recoverable():
	with pytest.raises(HuffmanError):
		HuffmanLogic().build_tree({})


def test_single_symbol_tree_is_a_leaf():
	logic = HuffmanLogic()
	root = logic.build_tree({'x': 7})
	assert root.is_leaf
	assert root.freq == 7
	assert logic.generate_codes(root) == {'x': (0, 1)}


def test_internal_frequencies_are_sums():
	logic = HuffmanLogic()
	text = "".join(random.Random(3).choice("abcdefgh") for _ in range(500))
	root = logic.build_tree(logic.count_frequencies(text))
	assert root.freq == len(text)

	stack = [root]
	while stack:
		node = stack.pop()
		if node.is_leaf:
			continue
		assert node.left is not None and node.right is not None
		assert node.freq == node.left.freq + node.right.freq
		stack.extend([node.left, node.right])


def test_ties_follow_insertion_order():
	logic = HuffmanLogic()
	codes = logic.generate_codes(logic.build_tree({'p': 1, 'q': 1}))
	assert codes == {'p': (0, 1), 'q': (1, 1)}


def test_codes_are_prefix_free():
	logic = HuffmanLogic()
	rng = random.Random(11)
	for alphabet in ("ab", "abcdefg", "日本語テキスト", "".join(chr(c) for c in range(32, 300))):
		text = "".join(rng.choice(alphabet) for _ in range(rng.randint(50, 2000)))
		codes = logic.generate_codes(logic.build_tree(logic.count_frequencies(text)))
		assert set(codes) == set(text)
		assert logic.is_prefix_free(codes)
		assert all(length >= 1 for _, length in codes.values())


def test_is_prefix_free_detects_overlap():
	logic = HuffmanLogic()
	assert not logic.is_prefix_free({'a': (0b0, 1), 'b': (0b01, 2)})
	assert not logic.is_prefix_free({'a': (0b10, 2), 'b': (0b10, 2)})
	assert logic.is_prefix_free({'a': (0b0, 1), 'b': (0b10, 2), 'c': (0b11, 2)})


def test_generate_codes_rejects_missing_tree():
	with pytest.raises(MalformedTreeError):
		HuffmanLogic().generate_codes(None)


def test_generate_codes_rejects_half_built_node():
	root = HuffmanNode(None, 2, left=HuffmanNode('a', 1))
	with pytest.raises(MalformedTreeError):
		HuffmanLogic().generate_codes(root)


def test_malformed_tree_reads_as_assertion():
	assert issubclass(MalformedTreeError, AssertionError)


def test_invert_codes():
	logic = HuffmanLogic()
	codes = {'a': (0, 1), 'b': (2, 2), 'c': (3, 2)}
	assert logic.invert_codes(codes) == {(0, 1): 'a', (2, 2): 'b', (3, 2): 'c'}


def test_invert_codes_rejects_duplicates():
	with pytest.raises(MalformedTreeError):
		HuffmanLogic().invert_codes({'a': (1, 2), 'b': (1, 2)})


def test_merge_codes_later_tables_win():
	logic = HuffmanLogic()
	merged = logic.merge_codes({'a': (0, 1), 'b': (1, 1)}, {'b': (3, 2)}, {})
	assert merged == {'a': (0, 1), 'b': (3, 2)}
	assert logic.merge_codes() == {}
