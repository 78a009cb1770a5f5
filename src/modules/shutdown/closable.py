"""Interface for services the shutdown coordinator can close."""

from typing import Any, Awaitable, Optional, Protocol, runtime_checkable


@runtime_checkable
class Closable(Protocol):
    """A resource with a single ``close`` operation.

    ``close`` usually returns an awaitable. A synchronous ``close`` returning
    ``None`` counts as an immediate success.
    """

    def close(self) -> Optional[Awaitable[Any]]:
        ...


def service_name(service: Closable) -> str:
    """Name used for a service in log output."""
    name = getattr(service, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(service).__name__
