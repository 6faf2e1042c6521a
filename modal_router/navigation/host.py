"""
Interfaces of the collaborators the route service drives.

The route service never inspects a host's internals; it only relies on
the protocols below.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

PRIMARY_OUTLET = "primary"


@dataclass(frozen=True)
class ActivationEvent:
    """Emitted by a host right before it activates a component in an outlet."""

    outlet_name: str
    path: Optional[str] = None


ActivationListener = Callable[[ActivationEvent], None]
QueryParamsListener = Callable[[Dict[str, Any]], None]


@runtime_checkable
class OutletController(Protocol):
    """Rendering controller of one named outlet."""

    def deactivate(self) -> None:
        ...

    def destroy(self) -> None:
        ...


@runtime_checkable
class NavigationHost(Protocol):
    """
    The host navigation framework.

    ``navigate`` receives a mapping of outlet name to path (None clears
    that outlet). ``config`` is the live route table the host resolves
    paths against.
    """

    config: List[Any]

    def navigate(
        self,
        targets: Mapping[str, Optional[str]],
        query_params: Optional[Dict[str, Any]] = None,
        skip_location_change: bool = False,
    ) -> None:
        ...

    def back(self) -> None:
        ...

    def reset_config(self, routes: List[Any]) -> None:
        ...

    def subscribe_activation(self, listener: ActivationListener) -> None:
        ...

    def subscribe_query_params(self, listener: QueryParamsListener) -> None:
        ...


@runtime_checkable
class SessionStore(Protocol):
    """Session-scoped key/value store for serialized component contexts."""

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    def set(self, key: str, record: Dict[str, Any]) -> None:
        ...
