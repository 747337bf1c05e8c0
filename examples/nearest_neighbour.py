#!/usr/bin/env python
"""Branch-and-bound 1-NN search with an early-abandoning DTW engine.

Shows how a caller owns the cutoff policy: the best distance found so far is
passed as the cutoff, so most comparisons stop after a few rows and come back
as ``INFEASIBLE``.

Usage
-----
    python examples/nearest_neighbour.py

Requirements
------------
    pip install -e .              # core only
    pip install -e ".[plot]"      # to show the cost matrix of the best match
"""

import logging
import math

import numpy as np

import dtwengine as dt


def make_dataset(n_series=50, length=60, seed=0):
    """Labelled sine and square waves with random phase and noise.

    Returns
    -------
    list[dt.LabeledSeries]
        Records whose last attribute is the class label (0 or 1).
    """
    rng = np.random.default_rng(seed)
    t = np.linspace(0, 2 * np.pi, length)
    records = []
    for k in range(n_series):
        label = k % 2
        phase = rng.uniform(0, np.pi)
        wave = np.sin(t + phase) if label == 0 else np.sign(np.sin(t + phase))
        wave = wave + rng.normal(0, 0.1, length)
        records.append(
            dt.LabeledSeries(values=np.append(wave, label), class_index=length,
                             name=f"series_{k}")
        )
    return records


def nearest_neighbour(query, candidates, measure):
    """Return ``(best_record, best_distance, n_abandoned)``."""
    best, best_dist, abandoned = None, math.inf, 0
    for record in candidates:
        dist = measure.distance_between(query, record, cutoff=best_dist)
        if dt.is_infeasible(dist):
            abandoned += 1
        elif dist < best_dist:
            best, best_dist = record, dist
    return best, best_dist, abandoned


def main():
    logging.basicConfig(level=logging.INFO)

    records = make_dataset()
    query, train = records[0], records[1:]

    engine = dt.DTW(early_abandon=True)
    best, best_dist, abandoned = nearest_neighbour(query, train, engine)
    print(f"Nearest neighbour of {query.name}: {best.name} "
          f"(label {best.label:.0f}, distance {best_dist:.4f})")
    print(f"Abandoned {abandoned} / {len(train)} comparisons")

    result = engine.align(query.to_sequence(), best.to_sequence())
    print(result.summary())
    print(dt.format_path(result.path))

    import matplotlib.pyplot as plt

    result.plot()
    plt.show()


if __name__ == "__main__":
    main()
