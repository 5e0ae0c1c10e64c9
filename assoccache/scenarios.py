"""Named access patterns.

Each scenario yields ``(address, isWrite)`` pairs. The address ranges are
those of the classic 64K word memory / 2K word cache exercise.
"""
import numpy as np


def sweep(start, stop, isWrite=False):
    for address in range(start, stop):
        yield address, isWrite


def spatialRead():
    yield from sweep(0, 1000)


def spatialWrite():
    yield from sweep(0, 2000, True)


def temporalRead():
    # each half of the range is swept twice in a row
    for start, stop in ((0, 1000), (1000, 2000)):
        yield from sweep(start, stop)
        yield from sweep(start, stop)


def temporalWrite():
    yield from sweep(0, 4000, True)
    yield from sweep(0, 4000, True)
    yield from sweep(1000, 2000, True)
    yield from sweep(1000, 2000, True)


def mixedRead():
    yield from sweep(0, 100)
    yield from sweep(500, 3000)
    yield from sweep(500, 3000)


def mixedWrite():
    yield from sweep(0, 1000, True)
    yield from sweep(0, 1000, True)
    yield from sweep(2000, 6000, True)


def mixedReadWrite():
    """Read then write every word, as in ``arr[i] = x*arr[i]``."""
    for start, stop in ((0, 1000), (0, 1000), (2000, 6000)):
        for address in range(start, stop):
            yield address, False
            yield address, True


def randomAccess(n=10000, addressSpace=0x10000, readRatio=0.8, seed=None):
    """Uniformly random addresses.

    Parameters
    ----------
    n (int):
        Number of accesses.
    addressSpace (int):
        Addresses are drawn from ``[0, addressSpace)``. (Default 64K words)
    readRatio (float):
        Probability that an access is a read.
    seed (int):
        Seed for numpy's default_rng, None for a fresh one.
    """
    rng = np.random.default_rng(seed)
    addresses = rng.integers(0, addressSpace, size=n)
    writes = rng.random(n) >= readRatio
    for address, isWrite in zip(addresses, writes):
        yield int(address), bool(isWrite)


SCENARIOS = {
    "spatial-read": spatialRead,
    "spatial-write": spatialWrite,
    "temporal-read": temporalRead,
    "temporal-write": temporalWrite,
    "mixed-read": mixedRead,
    "mixed-write": mixedWrite,
    "mixed-readwrite": mixedReadWrite,
    "random": randomAccess,
}

# spatial, temporal, then mixed
DEFAULT_ORDER = [name for name in SCENARIOS if name != "random"]


def run(cache, accesses):
    """Feed ``(address, isWrite)`` pairs into ``cache``, return how many were issued."""
    n = 0
    for address, isWrite in accesses:
        cache.access(address, isWrite)
        n += 1
    return n
