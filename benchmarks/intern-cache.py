#!/usr/bin/env python3
"""
Benchmark: parse and sum repeated fractions with cached and uncached factories.

Both runs must give the same sum; cache statistics are logged.
"""

import argparse
import logging
import random
import sys
import time
sys.path.append('.')

from rationals.config import CacheConfig
from rationals.intern_cache import InternCache
from rationals.rational import RationalFactory


def run(factory, texts):
    start = time.perf_counter()
    values = [factory.from_string(text) for text in texts]
    total = factory.sum(*values)
    return total, time.perf_counter() - start


if __name__ == "__main__":
    argparser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    argparser.add_argument('--count', type=int, default=200000, help='number of parsed strings')
    argparser.add_argument('--distinct', type=int, default=5000, help='number of distinct fractions')
    argparser.add_argument('--high-water', type=int, default=2**16)
    argparser.add_argument('--low-water', type=int, default=2**12)
    argparser.add_argument('--seed', type=int, default=1)
    args = argparser.parse_args()

    logging.basicConfig(level=logging.INFO)

    rnd = random.Random(args.seed)
    pool = ['{}/{}'.format(rnd.randint(-999, 999), rnd.randint(1, 999)) for _ in range(args.distinct)]
    texts = [rnd.choice(pool) for _ in range(args.count)]

    cached = RationalFactory(InternCache(CacheConfig(high_water=args.high_water, low_water=args.low_water)))
    uncached = RationalFactory(InternCache(CacheConfig.disabled()))

    cached_total, cached_time = run(cached, texts)
    uncached_total, uncached_time = run(uncached, texts)
    assert cached_total == uncached_total

    logging.info('sum: %s', cached_total.round_to_significants(10))
    logging.info('cached: %.3fs, stats: %s, size: %d', cached_time, cached.cache.stats, len(cached.cache))
    logging.info('uncached: %.3fs', uncached_time)
