# ranxoshi256/experiments/run_experiments.py
# Split one seed into jumped streams, draw doubles from each and bucket them.
# Writes a CSV (stream, bucket, count) for plot_heatmap.py.

import argparse
import csv
import os
import time

from ranxoshi256 import config
from ranxoshi256.xoshiro256 import SEED_BYTES, split_streams


def collect_histograms(seed, streams, samples, buckets=config.HISTOGRAM_BUCKETS):
    rows = []
    for k, gen in enumerate(split_streams(seed, streams)):
        counts = [0] * buckets
        for _ in range(samples):
            # double_co() < 1.0, so the index stays below buckets
            counts[int(gen.double_co() * buckets)] += 1
        for b, c in enumerate(counts):
            rows.append((k, b, c))
    return rows


def write_csv(rows, csv_path):
    os.makedirs(os.path.dirname(csv_path) or '.', exist_ok=True)
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['stream', 'bucket', 'count'])
        writer.writerows(rows)
    return csv_path


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--seed', default=bytes(range(SEED_BYTES)).hex(), help='32-byte seed as 64 hex digits')
    parser.add_argument('--streams', type=int, default=8, help='number of jumped streams')
    parser.add_argument('--samples', type=int, default=10000, help='doubles drawn per stream')
    parser.add_argument('--buckets', type=int, default=config.HISTOGRAM_BUCKETS, help='histogram buckets')
    args = parser.parse_args()

    seed = bytes.fromhex(args.seed)
    print(f"[experiments] streams={args.streams}, samples={args.samples}, buckets={args.buckets}")
    rows = collect_histograms(seed, args.streams, args.samples, args.buckets)
    csv_path = os.path.join(config.RESULTS_DIR, f'stream_histogram_{int(time.time())}.csv')
    write_csv(rows, csv_path)
    print("[experiments] Experiments complete. CSV saved at:", csv_path)


if __name__ == '__main__':
    main()
