from .xoshiro256 import JUMP, MASK64, SEED_BYTES, Ranxoshi256, rotl, split_streams

__all__ = [
    "JUMP",
    "MASK64",
    "SEED_BYTES",
    "Ranxoshi256",
    "rotl",
    "split_streams",
]
