# filename: huffman_core.py

import heapq
from collections import Counter
from itertools import count

from huffman_errors import EmptyAlphabetError, MalformedTreeError


class HuffmanNode:
    def __init__(self, char, freq, left=None, right=None):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.char is not None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.char!r}, {self.freq})"
        return f"HuffmanNode(<internal>, {self.freq})"


class HuffmanLogic:
    def count_frequencies(self, text):
        # Counter keeps first-seen order, which later drives tie-breaking
        return Counter(text)

    def build_tree(self, freqs):
        if not freqs:
            raise EmptyAlphabetError()

        # (freq, sequence, node): equal frequencies pop in insertion order
        sequence = count()
        priority_queue = [(freq, next(sequence), HuffmanNode(char, freq)) for char, freq in freqs.items()]
        heapq.heapify(priority_queue)

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            left_freq, _, left = heapq.heappop(priority_queue)
            right_freq, _, right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left_freq + right_freq, left, right)
            heapq.heappush(priority_queue, (merged.freq, next(sequence), merged))

        return priority_queue[0][2]

    def generate_codes(self, node):
        """Map every leaf symbol to its ``(value, length)`` code.

        Left branches append a 0 bit, right branches a 1 bit. A tree that is a
        single leaf gets the one-bit code ``(0, 1)``.
        """
        if node is None:
            raise MalformedTreeError("cannot generate codes without a tree")
        if node.is_leaf:
            return {node.char: (0, 1)}

        codes = {}
        stack = [(node, 0, 0)]
        while stack:
            current, value, depth = stack.pop()
            if current.is_leaf:
                codes[current.char] = (value, depth)
                continue
            if current.left is None or current.right is None:
                raise MalformedTreeError(f"internal node at depth {depth} is missing a child")
            stack.append((current.right, (value << 1) | 1, depth + 1))
            stack.append((current.left, value << 1, depth + 1))
        return codes

    def invert_codes(self, codes):
        inverted = {}
        for char, code in codes.items():
            if code in inverted:
                raise MalformedTreeError(f"code {code} assigned to both {inverted[code]!r} and {char!r}")
            inverted[code] = char
        return inverted

    def merge_codes(self, *tables):
        merged = {}
        for table in tables:
            for char, code in table.items():
                merged[char] = code
        return merged

    def is_prefix_free(self, codes):
        entries = sorted(codes.values(), key=lambda code: code[1])
        for i, (value, length) in enumerate(entries):
            for other_value, other_length in entries[i + 1:]:
                if other_length == length:
                    if other_value == value:
                        return False
                    continue
                if other_value >> (other_length - length) == value:
                    return False
        return True
