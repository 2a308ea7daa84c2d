# ranxoshi256/experiments/plot_heatmap.py
"""
Heatmap of stream uniformity: x axis = bucket of [0, 1), y axis = jumped stream,
cell value = count / expected count (1.0 is perfectly uniform).

CSV expected columns: stream, bucket, count
 - stream: int (number of jumps from the seed)
 - bucket: int (0 .. buckets-1)
 - count: int (draws that fell into the bucket)

Usage:
    python -m ranxoshi256.experiments.plot_heatmap --csv results/stream_histogram_XXXX.csv --out heatmap.png
"""

import argparse
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def prepare_pivot(df):
    # expected count per bucket is the stream's total spread evenly
    totals = df.groupby('stream')['count'].transform('sum')
    buckets = df.groupby('stream')['bucket'].transform('count')
    df = df.assign(ratio=df['count'] / (totals / buckets))
    pivot = df.pivot(index='stream', columns='bucket', values='ratio')
    return pivot.sort_index()


def plot_heatmap(pivot, title='Jumped Stream Uniformity', out_file=None, annotate=True, show=True):
    data = pivot.to_numpy(dtype=float)
    # colour scale symmetric around the uniform ratio 1.0
    spread = max(float(np.nanmax(np.abs(data - 1.0))), 1e-3)

    fig, ax = plt.subplots(figsize=(0.6 * data.shape[1] + 3, 0.5 * data.shape[0] + 2))
    im = ax.imshow(data, aspect='auto', cmap='coolwarm', vmin=1.0 - spread, vmax=1.0 + spread)
    ax.set_xticks(np.arange(data.shape[1]), labels=pivot.columns.tolist())
    ax.set_yticks(np.arange(data.shape[0]), labels=pivot.index.tolist())
    ax.set(xlabel='Bucket of [0, 1)', ylabel='Stream (jumps from seed)', title=title)
    if annotate:
        for (i, j), val in np.ndenumerate(data):
            label = 'N/A' if np.isnan(val) else f"{val:.2f}"
            ax.text(j, i, label, ha='center', va='center', fontsize=8)
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label='count / expected')
    fig.tight_layout()

    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        fig.savefig(out_file, dpi=300)
        print(f"Heatmap saved to {out_file}")
    if show:
        plt.show()
    return fig


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to stream histogram CSV')
    parser.add_argument('--out', default='results/heatmap_stream_uniformity.png', help='Output PNG path')
    parser.add_argument('--title', default='Jumped Stream Uniformity', help='Plot title')
    parser.add_argument('--no-show', action='store_true', help='Only save the PNG, do not open a window')
    args = parser.parse_args()

    df = pd.read_csv(args.csv)
    required = {'stream', 'bucket', 'count'}
    if not required.issubset(set(df.columns)):
        raise SystemExit(f"CSV must contain columns: {required}. Found: {df.columns.tolist()}")

    df['stream'] = df['stream'].astype(int)
    df['bucket'] = df['bucket'].astype(int)
    df['count'] = df['count'].astype(float)

    pivot = prepare_pivot(df)
    plot_heatmap(pivot, title=args.title, out_file=args.out, annotate=True, show=not args.no_show)


if __name__ == '__main__':
    main()
