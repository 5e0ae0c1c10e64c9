#! /usr/bin/env python3
"""Replay a memory trace from stdin.

One access per line, ``R <hexaddr>`` or ``W <hexaddr>``.

Usage:
    assoccache-trace [nLines [skip [numBlocks [blockSizeWords]]]] < trace
"""
import sys

from assoccache.cache import AssociativeCache, CacheError


def parseLine(line):
    """Return ``(address, isWrite)`` for one trace line.

    Raises ValueError on anything that is not a read or write record.
    """
    spl = line.split()
    if len(spl) != 2 or spl[0] not in ("R", "W"):
        raise ValueError("expected 'R <addr>' or 'W <addr>', got %r"%line.rstrip())
    return int(spl[1], 16), spl[0] == "W"


def replay(cache, lines, nLines=-1, skip=0, err=None):
    """Feed trace lines into ``cache``.

    Parameters
    ----------
    lines (iterable of str):
        The trace.
    nLines (int):
        Number of non-blank lines to replay after ``skip``, -1 for all of them.
    skip (int):
        Number of leading lines to ignore.

    Returns the number of lines that were rejected.
    """
    if err is None:
        err = sys.stderr
    bad = 0
    replayed = 0
    for i, line in enumerate(lines):
        if i < skip or not line.strip():
            continue
        if replayed == nLines:
            break
        replayed += 1
        try:
            address, isWrite = parseLine(line)
            cache.access(address, isWrite)
        except ValueError as e:
            bad += 1
            print("line %d: %s"%(i + 1, e), file=err)
    return bad


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        nLines = int(argv[0]) if len(argv) > 0 else -1
        skip = int(argv[1]) if len(argv) > 1 else 0
        numBlocks = int(argv[2]) if len(argv) > 2 else 128
        blockSizeWords = int(argv[3]) if len(argv) > 3 else 16
        cache = AssociativeCache(numBlocks, blockSizeWords)
    except (ValueError, CacheError) as e:
        print("%s\n%s"%(e, __doc__.strip().splitlines()[-1]), file=sys.stderr)
        return 2

    bad = replay(cache, sys.stdin, nLines, skip)
    print("Scenario: trace")
    cache.printStats()
    if bad:
        print("Rejected Lines: %d"%bad)
    return 0


if __name__ == '__main__':
    sys.exit(main())
