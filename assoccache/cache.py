#! /usr/bin/env python
import copy
import numbers
import threading


class CacheError(Exception):
    pass


class InvalidConfiguration(CacheError, ValueError):
    pass


class InvalidAddress(CacheError, ValueError):
    pass


def isInteger(x):
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


class CacheLine:


    def __init__(self):
        self.valid = False
        self.dirty = False
        self.tag = -1 # never equal to a real tag, addresses are non-negative
        self.lastAccessTime = 0

    def __repr__(self):
        return "CacheLine(tag=%d, valid=%s, dirty=%s, lastAccessTime=%d)"%(
                self.tag, self.valid, self.dirty, self.lastAccessTime)


class AssociativeCache:


    def __init__(self, numBlocks=128, blockSizeWords=16):
        """Fully associative cache with LRU replacement.

        Only the metadata of each line is modelled, no data is stored.

        Parameters
        ----------

        numBlocks (int):
            Number of cache lines. (Default 128)
        blockSizeWords (int):
            Number of words per line, must be a power of two. Determines the
            number of offset bits. (Default 16, 4 offset bits)
        """
        if not isInteger(numBlocks) or numBlocks < 1:
            raise InvalidConfiguration("numBlocks must be a positive integer, got %r"%(numBlocks,))
        if not isInteger(blockSizeWords) or blockSizeWords < 1 or blockSizeWords & (blockSizeWords - 1):
            raise InvalidConfiguration("blockSizeWords must be a positive power of two, got %r"%(blockSizeWords,))

        self.numBlocks = int(numBlocks)
        self.blockSizeWords = int(blockSizeWords)

        self.offsetBits = self.blockSizeWords.bit_length() - 1

        self.lock = threading.Lock()
        self.lines = [CacheLine() for i in range(self.numBlocks)]

        self.currentTime = 0
        self.totalAccesses = 0
        self.totalMisses = 0
        self.readMisses = 0
        self.writeMisses = 0

    def tagOf(self, address):
        return address >> self.offsetBits

    def access(self, address, isWrite=False):
        """Access a given address.

        Parameters
        ----------
        address (int):
            The word address which is accessed, must be non-negative.
        isWrite (bool):
            True if the access is a write, False for a read (default read).
        """
        self.lookup(address, isWrite)

    def lookup(self, address, isWrite=False):
        """Same as access, but returns (slot index, hit) for the access."""
        if not isInteger(address) or address < 0:
            raise InvalidAddress("address must be a non-negative integer, got %r"%(address,))
        address = int(address)

        with self.lock:
            self.currentTime += 1
            self.totalAccesses += 1

            tag = self.tagOf(address)

            for i, line in enumerate(self.lines):
                if line.valid and line.tag == tag:
                    line.lastAccessTime = self.currentTime
                    if isWrite:
                        line.dirty = True
                    return i, True

            self.totalMisses += 1
            if isWrite:
                self.writeMisses += 1
            else:
                self.readMisses += 1

            way = self.selectVictim()
            line = self.lines[way]
            line.valid = True
            line.tag = tag
            line.dirty = bool(isWrite)
            line.lastAccessTime = self.currentTime
            return way, False

    def selectVictim(self):
        """Pick the slot to replace on a miss.

        Single left to right pass: an invalid slot is always taken, so the
        last invalid slot scanned wins. Otherwise the valid slot with the
        strictly smallest lastAccessTime wins.
        """
        index = None
        minAccess = self.currentTime
        for i, line in enumerate(self.lines):
            if not line.valid or line.lastAccessTime < minAccess:
                index = i
                minAccess = line.lastAccessTime
        return index

    def stats(self):
        """Aggregate counters.

        hitRate and missRate are fractions in [0, 1], None before the first access.
        """
        with self.lock:
            hits = self.totalAccesses - self.totalMisses
            if self.totalAccesses:
                missRate = self.totalMisses / self.totalAccesses
                hitRate = 1 - missRate
            else:
                missRate = None
                hitRate = None
            return {
                "totalAccesses": self.totalAccesses,
                "totalMisses": self.totalMisses,
                "readMisses": self.readMisses,
                "writeMisses": self.writeMisses,
                "hits": hits,
                "hitRate": hitRate,
                "missRate": missRate,
            }

    def dump(self):
        """Copies of every line in physical order."""
        with self.lock:
            return [copy.copy(line) for line in self.lines]

    def validCount(self):
        return sum(1 for line in self.dump() if line.valid)

    def printStats(self, file=None):
        s = self.stats()
        print("Cache Misses: %d"%s["totalMisses"], file=file)
        print("Cache Searches: %d"%s["totalAccesses"], file=file)
        if s["hitRate"] is None:
            print("Cache Hit Rate: undefined", file=file)
        else:
            print("Cache Hit Rate: %0.3f%%"%(s["hitRate"]*100), file=file)
        print("Read Misses: %d"%s["readMisses"], file=file)
        print("Write Misses: %d"%s["writeMisses"], file=file)

    def printCacheState(self, file=None):
        for i, line in enumerate(self.dump()):
            print("Block %d: tag=%d, valid=%d, dirty=%d, lastAccessTime=%d"%(
                    i, line.tag, line.valid, line.dirty, line.lastAccessTime), file=file)
