# ranxoshi256/config.py
# Configuration for the oracle service and the experiments

# Network config
HOST = '127.0.0.1'
PORT = 5000

# Seed configuration:
# - SEED_MODE:
#     'fixed'  : use the 32-byte seed in SEED (hex, 64 digits)
#                if SEED is None, the default seed bytes 00 01 .. 1f are used
# The generator never reads OS entropy; any other mode falls back to the default seed.
SEED_MODE = 'fixed'

SEED = '0001020304050607' '08090a0b0c0d0e0f' '1011121314151617' '18191a1b1c1d1e1f'  # or None

# Number of jumps (2^128 steps each) applied at startup.
# Give each oracle instance its own index to serve non-overlapping streams.
STREAM_INDEX = 0

# Default kind returned by /get_output:
# 'raw' | 'float_co' | 'float_cc' | 'double_co' | 'double_cc'
OUTPUT_MODE = 'raw'

# Experiments
HISTOGRAM_BUCKETS = 16
RESULTS_DIR = 'results'

# Logging level
LOG_LEVEL = 'INFO'
