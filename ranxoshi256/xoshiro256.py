# ranxoshi256/xoshiro256.py
# xoshiro256** generator used by the oracle, the attacker and the experiments.
# State: four 64-bit words (s0, s1, s2, s3) held in a plain list.
# Update: xor/shift/rotate (linear over GF(2)); output scrambled as rotl(s1*5, 7)*9.

import logging

import numpy as np

logger = logging.getLogger('ranxoshi256')

MASK64 = (1 << 64) - 1
SEED_BYTES = 32

# advances the state by 2^128 steps
JUMP = (0x180EC6D33CFD0ABA, 0xD5A61266F0C9392C, 0xA9582618E03FC9AA, 0x39ABDC4529B1661C)

_F32_CO_DIV = np.float32(16777216.0)            # 2^24
_F32_CC_DIV = np.float32(0xFFFFFFFF)            # rounds to 2^32 in single precision
_F64_CO_DIV = 9007199254740992.0                # 2^53
_F64_CC_DIV = float(MASK64)                     # rounds to 2^64


def rotl(x, k):
    return ((x << k) & MASK64) | (x >> (64 - k))


class Ranxoshi256:
    def __init__(self, seed=None):
        self.s = [0, 0, 0, 0]
        if seed is not None:
            self.seed(seed)

    @classmethod
    def from_words(cls, words):
        words = list(words)
        if len(words) != 4:
            raise ValueError(f"state needs exactly 4 words, got {len(words)}")
        gen = cls()
        gen.s = [int(w) & MASK64 for w in words]
        return gen

    def seed(self, material):
        """
        Paste 32 bytes of seed material into the state, big-endian per word,
        so the same bytes give the same stream on any host.
        An all-zero seed is accepted as-is (the generator then outputs zeros forever).
        """
        material = bytes(material)
        if len(material) != SEED_BYTES:
            raise ValueError(f"seed must be exactly {SEED_BYTES} bytes, got {len(material)}")
        self.s = [int.from_bytes(material[i * 8:i * 8 + 8], 'big') for i in range(4)]

    def words(self):
        return tuple(self.s)

    def to_bytes(self):
        # inverse of seed()
        return b''.join(w.to_bytes(8, 'big') for w in self.s)

    def copy(self):
        return self.__class__.from_words(self.s)

    def next_raw(self):
        s = self.s
        res = (rotl((s[1] * 5) & MASK64, 7) * 9) & MASK64
        t = (s[1] << 17) & MASK64
        # order matters: s1 and s0 read the freshly updated s2 and s3
        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = rotl(s[3], 45)
        return res

    def peek_next(self):
        # output of the next call without consuming it
        return (rotl((self.s[1] * 5) & MASK64, 7) * 9) & MASK64

    def float_co(self):
        """Float32 in [0.0, 1.0); 2^24 possible values."""
        return np.float32(self.next_raw() >> 40) / _F32_CO_DIV

    def float_cc(self):
        """Float32 in [0.0, 1.0]; more precision, less uniform."""
        return np.float32(self.next_raw() >> 32) / _F32_CC_DIV

    def double_co(self):
        """Double in [0.0, 1.0); 2^53 possible values."""
        return (self.next_raw() >> 11) / _F64_CO_DIV

    def double_cc(self):
        """Double in [0.0, 1.0]; more precision, less uniform."""
        return float(self.next_raw()) / _F64_CC_DIV

    def jump(self):
        """
        Advance the state by 2^128 calls to next_raw() using 256 real calls.
        Gives non-overlapping subsequences for parallel streams from one seed.
        """
        s0 = s1 = s2 = s3 = 0
        for word in JUMP:
            for b in range(64):
                if (word >> b) & 1:
                    s0 ^= self.s[0]
                    s1 ^= self.s[1]
                    s2 ^= self.s[2]
                    s3 ^= self.s[3]
                self.next_raw()
        self.s = [s0, s1, s2, s3]

    def __eq__(self, other):
        if not isinstance(other, Ranxoshi256):
            return NotImplemented
        return self.s == other.s

    def __repr__(self):
        return 'Ranxoshi256(' + ', '.join(f'0x{w:016x}' for w in self.s) + ')'


def split_streams(material, n):
    # stream k starts 2^128 * k steps into the sequence of `material`
    streams = []
    gen = Ranxoshi256(material)
    for k in range(n):
        streams.append(gen.copy())
        gen.jump()
    logger.debug("split seed into %d jumped streams", n)
    return streams
