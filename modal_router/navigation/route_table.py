"""
Runtime route definitions scoped to modal outlets.
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger

from .host import NavigationHost

logger = logger.bind(module="route_table")


@dataclass
class RouteDefinition:
    """
    A path the host can resolve to a component factory.

    ``outlet`` is None for primary routes and set to the outlet name for
    routes added on behalf of a modal outlet.
    """

    path: str
    component: Optional[Callable[[], Any]] = None
    outlet: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def for_outlet(self, outlet: str) -> 'RouteDefinition':
        """Copy of this route stamped with ``outlet``."""
        return replace(self, outlet=outlet, data=copy.deepcopy(self.data))


class DynamicRouteTable:
    """Adds and removes copies of a route template on the host's live config."""

    def __init__(self, host: NavigationHost, template: Sequence[RouteDefinition]):
        self.host = host
        self.template: List[RouteDefinition] = list(template)

    def add_outlet_routes(self, outlet: str) -> List[RouteDefinition]:
        routes = [route.for_outlet(outlet) for route in self.template]
        self.host.config.extend(routes)
        logger.debug(f"Added {len(routes)} routes for outlet {outlet}")
        return routes

    def remove_outlet_routes(self, outlet: str) -> int:
        """Replace the host config with every route not owned by ``outlet``."""
        remaining = [route for route in self.host.config if getattr(route, "outlet", None) != outlet]
        removed = len(self.host.config) - len(remaining)
        self.host.reset_config(remaining)
        logger.debug(f"Removed {removed} routes for outlet {outlet}")
        return removed

    def routes_for(self, outlet: Optional[str]) -> List[RouteDefinition]:
        return [route for route in self.host.config if getattr(route, "outlet", None) == outlet]
