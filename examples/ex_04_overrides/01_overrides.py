"""Overrides: supply constructor arguments for a single resolution.

Overrides are keyed by parameter name and apply to the requested concrete
only. They follow alias bindings but never reach nested dependencies, and
they are ignored once a singleton has been cached.
"""

from __future__ import annotations

from bindwire import Container


class Transport:
    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout


class ApiClient:
    def __init__(self, transport: Transport, base_url: str) -> None:
        self.transport = transport
        self.base_url = base_url


def main() -> None:
    container = Container()

    client = container.resolve(ApiClient, {"base_url": "https://api.example.org"})
    print(f"base_url={client.base_url}")  # => base_url=https://api.example.org

    client = container.make(ApiClient, base_url="https://a", timeout=1.0)
    print(f"nested_timeout={client.transport.timeout}")  # => nested_timeout=5.0

    custom = Transport(timeout=30.0)
    client = container.make(ApiClient, base_url="https://b", transport=custom)
    print(f"override_object={client.transport is custom}")  # => override_object=True

    container.bind("client", ApiClient)
    print(f"through_alias={container.make('client', base_url='https://c').base_url}")  # => through_alias=https://c

    container.singleton(Transport)
    cached = container.make(Transport, timeout=2.0)
    print(f"cached_timeout={container.make(Transport, timeout=9.0).timeout}")  # => cached_timeout=2.0
    print(f"cached_same={container.resolve(Transport) is cached}")  # => cached_same=True


if __name__ == "__main__":
    main()
