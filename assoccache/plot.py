#! /usr/bin/env python3
"""Plot the report printed by assoccache-sim or assoccache-trace.

Usage:
    assoccache-sim | python -m assoccache.plot [output.png]
"""
import sys

from matplotlib import pyplot as plt
from matplotlib.gridspec import GridSpec
import numpy as np


def parseStats(lines):
    """Turn a printed report into one dict per ``Scenario:`` block.

    Lines that are not part of a stats block (per access output, cache
    dumps) are ignored.
    """
    records = []
    for line in lines:
        spl = line.strip().split(': ')
        if len(spl) != 2:
            continue
        key, value = spl
        if key == 'Scenario':
            records.append({'scenario': value})
        elif not records:
            continue
        elif key == 'Cache Misses':
            records[-1]['totalMisses'] = int(value)
        elif key == 'Cache Searches':
            records[-1]['totalAccesses'] = int(value)
        elif key == 'Cache Hit Rate':
            records[-1]['hitRate'] = None if value == 'undefined' else float(value[:-1])/100
        elif key == 'Read Misses':
            records[-1]['readMisses'] = int(value)
        elif key == 'Write Misses':
            records[-1]['writeMisses'] = int(value)
    return records


def plotStats(records):
    """Hit rate and read/write misses per scenario. Returns the figure."""
    labels = [r['scenario'] for r in records]
    hitRate = np.asarray([np.nan if r.get('hitRate') is None else r['hitRate'] for r in records])
    readMisses = np.asarray([r.get('readMisses', 0) for r in records])
    writeMisses = np.asarray([r.get('writeMisses', 0) for r in records])

    bar_width = 0.35
    index = np.arange(len(records))
    fig = plt.figure()
    gs = GridSpec(2, 1, figure=fig)

    ax = fig.add_subplot(gs[0, 0])
    ax.bar(index, hitRate * 100, width=bar_width*2, color='C0')
    ax.set_ylabel("Hit rate (%)")
    ax.set_ylim(0, 100)
    ax.set_xticks(())

    ax = fig.add_subplot(gs[1, 0])
    ax.bar(index, readMisses, width=bar_width, color='C0', label='Read')
    ax.bar(index + bar_width, writeMisses, width=bar_width, color='C1', label='Write')
    ax.set_ylabel("Misses")
    ax.set_xticks(index + bar_width/2)
    ax.set_xticklabels(labels, rotation=30, ha='right')
    ax.legend()
    fig.tight_layout()
    return fig


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    records = parseStats(sys.stdin)
    if not records:
        print("no statistics found on stdin", file=sys.stderr)
        return 1
    fig = plotStats(records)
    if argv:
        fig.savefig(argv[0])
    else:
        plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
