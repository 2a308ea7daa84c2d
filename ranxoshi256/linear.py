# ranxoshi256/linear.py
# GF(2) model of the xoshiro256 state transition (scrambler excluded).
# A state vector is one 256-bit int: bit 64*w + b is bit b of word s[w].
# A matrix is a list of 256 row masks; row i tells which input bits feed output bit i.

import logging

from .xoshiro256 import MASK64

logger = logging.getLogger('ranxoshi256.linear')

BITS = 256
WORD = 64


def pack_state(words):
    x = 0
    for w, word in enumerate(words):
        x |= (word & MASK64) << (WORD * w)
    return x


def unpack_state(vector):
    return [(vector >> (WORD * w)) & MASK64 for w in range(4)]


def _xor_words(a, b):
    return [x ^ y for x, y in zip(a, b)]


def _shl_words(a, k):
    # bits shifted past 63 are dropped
    return [0] * k + a[:WORD - k]


def _rotl_words(a, k):
    return a[WORD - k:] + a[:WORD - k]


def symbolic_step(coeffs):
    """
    Propagate 256 coefficient masks (one per state bit) through one step.
    Mirrors Ranxoshi256.next_raw() word for word, with xor of words done bitwise.
    """
    s = [coeffs[w * WORD:(w + 1) * WORD] for w in range(4)]
    t = _shl_words(s[1], 17)
    s[2] = _xor_words(s[2], s[0])
    s[3] = _xor_words(s[3], s[1])
    s[1] = _xor_words(s[1], s[2])
    s[0] = _xor_words(s[0], s[3])
    s[2] = _xor_words(s[2], t)
    s[3] = _rotl_words(s[3], 45)
    return s[0] + s[1] + s[2] + s[3]


def identity():
    return [1 << i for i in range(BITS)]


def transition_matrix():
    return symbolic_step(identity())


def compose(a, b):
    # matrix of "apply b, then a"
    out = []
    for row in a:
        acc = 0
        while row:
            low = row & -row
            acc ^= b[low.bit_length() - 1]
            row ^= low
        out.append(acc)
    return out


def matrix_power(m, n):
    result = identity()
    base = m
    while n:
        if n & 1:
            result = compose(base, result)
        n >>= 1
        if n:
            base = compose(base, base)
    return result


def apply(matrix, vector):
    out = 0
    for i, row in enumerate(matrix):
        if bin(row & vector).count('1') & 1:
            out |= (1 << i)
    return out


def advance(gen, n):
    """Skip gen ahead by n steps in place; advance(gen, 2**128) matches gen.jump()."""
    if n < 0:
        raise ValueError("cannot advance by a negative number of steps")
    m = matrix_power(transition_matrix(), n)
    gen.s = unpack_state(apply(m, pack_state(gen.s)))
    logger.debug("advanced generator by %d steps", n)
    return gen
