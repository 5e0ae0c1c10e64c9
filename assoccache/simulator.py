#! /usr/bin/env python3
"""Replay named access patterns against a fully associative cache.

Statistics are cumulative: every scenario runs against the same cache, and
the counters are printed after each one.

Usage:
    assoccache-sim
    assoccache-sim --scenario temporal-read mixed-read --blocks 64
    assoccache-sim --scenario random --seed 1 --dump | python -m assoccache.plot
"""
import argparse
import sys

from assoccache.cache import AssociativeCache, CacheError
from assoccache import scenarios


def replay(cache, name, verbose=False, seed=None, file=None):
    if name == "random":
        accesses = scenarios.randomAccess(seed=seed)
    else:
        accesses = scenarios.SCENARIOS[name]()
    print("Scenario: %s"%name, file=file)
    if verbose:
        for address, isWrite in accesses:
            way, hit = cache.lookup(address, isWrite)
            print("%s 0x%x %s block %d"%("W" if isWrite else "R", address,
                    "hit " if hit else "miss", way), file=file)
    else:
        scenarios.run(cache, accesses)
    cache.printStats(file=file)


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--scenario", nargs="+", default=scenarios.DEFAULT_ORDER,
                    choices=sorted(scenarios.SCENARIOS), help="Scenarios to run, in order")
    ap.add_argument("--blocks", type=int, default=128, help="Number of cache lines (default: 128)")
    ap.add_argument("--block-size", type=int, default=16, help="Words per line (default: 16)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the random scenario")
    ap.add_argument("--dump", action="store_true", help="Print every line after the last scenario")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print every access")
    args = ap.parse_args(argv)

    try:
        cache = AssociativeCache(numBlocks=args.blocks, blockSizeWords=args.block_size)
    except CacheError as e:
        ap.error(str(e))

    for name in args.scenario:
        replay(cache, name, args.verbose, args.seed)
    if args.dump:
        cache.printCacheState()
    return 0


if __name__ == "__main__":
    sys.exit(main())
