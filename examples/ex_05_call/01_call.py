"""Method invocation: call methods and functions with injected parameters.

``Container.call`` accepts ``"module.Class@method"`` strings, ``(owner, "method")``
pairs, callable classes, bound methods and plain functions. Class owners are
resolved through the container first; overrides apply to the invoked method.
"""

from __future__ import annotations

from bindwire import Container


class Config:
    def __init__(self) -> None:
        self.currency = "EUR"


class Mailer:
    def send(self, to: str) -> str:
        return f"sent:{to}"


class InvoiceService:
    def __init__(self, mailer: Mailer) -> None:
        self.mailer = mailer

    def handle(self, config: Config, invoice_id: int) -> str:
        return f"invoice={invoice_id} currency={config.currency}"


class NightlyCleanup:
    def __call__(self, config: Config, dry_run: bool = True) -> str:
        return f"cleanup dry_run={dry_run}"


def notify(mailer: Mailer, to: str) -> str:
    return mailer.send(to)


def main() -> None:
    container = Container()

    result = container.call((InvoiceService, "handle"), {"invoice_id": 7})
    print(result)  # => invoice=7 currency=EUR

    result = container.call("__main__.InvoiceService@handle", {"invoice_id": 8})
    print(result)  # => invoice=8 currency=EUR

    print(container.call(NightlyCleanup))  # => cleanup dry_run=True
    print(container.call((NightlyCleanup,), {"dry_run": False}))  # => cleanup dry_run=False

    service = InvoiceService(Mailer())
    print(container.call(service.handle, {"invoice_id": 9}))  # => invoice=9 currency=EUR

    print(container.call(notify, {"to": "ops@example.org"}))  # => sent:ops@example.org


if __name__ == "__main__":
    main()
