"""Singletons: share one object per identifier.

``singleton`` caches the first resolved object. Re-binding the same
identifier discards that cached object; other identifiers keep theirs.
"""

from __future__ import annotations

from bindwire import Container


class Cache:
    pass


class RedisCache(Cache):
    pass


class MemoryCache(Cache):
    pass


class Metrics:
    pass


def main() -> None:
    container = Container()

    container.singleton(Cache, RedisCache)
    first = container.resolve(Cache)
    print(f"same_instance={first is container.resolve(Cache)}")  # => same_instance=True

    container.singleton(Metrics)
    metrics = container.resolve(Metrics)

    container.singleton(Cache, MemoryCache)
    second = container.resolve(Cache)
    print(f"rebound_type={type(second).__name__}")  # => rebound_type=MemoryCache
    print(f"rebound_is_new={second is not first}")  # => rebound_is_new=True
    print(f"metrics_kept={container.resolve(Metrics) is metrics}")  # => metrics_kept=True

    transient = Container()
    transient.bind(Cache, RedisCache)
    print(f"transient_same={transient.resolve(Cache) is transient.resolve(Cache)}")  # => transient_same=False


if __name__ == "__main__":
    main()
