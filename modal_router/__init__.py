"""
modal_router - stackable modal outlets with independent histories

Lets a single-outlet navigation host behave as if it supported any number
of stacked "virtual outlets" (modal dialogs opened on top of each other),
each with its own history, while leaving the primary navigation untouched.
"""

__version__ = "0.1.0"

# Version tuple for programmatic comparison
VERSION_TUPLE = (0, 1, 0)

from .exceptions import (
    ModalRouterError,
    ContextConfigurationError,
    NavigationError,
    OutletActivationError,
)
from .state import (
    ComponentType,
    Context,
    ContextCodec,
    ContextRegistry,
    OutletHistory,
    ParameterSlot,
    Routable,
    RouteEntry,
)
from .navigation import (
    PRIMARY_OUTLET,
    ActivationEvent,
    DynamicRouteTable,
    Navigator,
    OutletStackRegistry,
    RouteDefinition,
    RouteService,
    create_route_service,
)

__all__ = [
    "__version__",
    "VERSION_TUPLE",
    "ModalRouterError",
    "ContextConfigurationError",
    "NavigationError",
    "OutletActivationError",
    "ComponentType",
    "Context",
    "ContextCodec",
    "ContextRegistry",
    "OutletHistory",
    "ParameterSlot",
    "Routable",
    "RouteEntry",
    "PRIMARY_OUTLET",
    "ActivationEvent",
    "DynamicRouteTable",
    "Navigator",
    "OutletStackRegistry",
    "RouteDefinition",
    "RouteService",
    "create_route_service",
]
