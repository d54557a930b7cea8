"""Single-method capability interfaces implemented by whatever type needs them."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Checkable(Protocol):
    """Can have its health checked; returns the raw health report."""

    def health_check(self) -> bytes:
        ...


@runtime_checkable
class Initializer(Protocol):
    """Reports protocol version and server address of a VM to the node runtime."""

    def initialize(self, protocol_version: int, vm_server_addr: str) -> None:
        ...


@runtime_checkable
class Verifiable(Protocol):
    """A block or vertex that can be verified once its parents are verified."""

    def verify(self) -> None:
        ...
