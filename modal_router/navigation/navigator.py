"""
In-memory navigation host.

Resolves paths against its live route config, keeps the primary outlet's
history and query parameters, and activates components in named outlets
through outlet controllers. Rendering is left to subclasses; by default
the activated component is just kept on the controller.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger

from ..exceptions import NavigationError, OutletActivationError
from .host import (
    PRIMARY_OUTLET,
    ActivationEvent,
    ActivationListener,
    QueryParamsListener,
)
from .route_table import RouteDefinition

logger = logger.bind(module="navigator")


class MemoryOutletController:
    """Outlet controller that keeps the activated component in memory."""

    def __init__(self, name: str):
        self.name = name
        self.component: Any = None
        self.path: Optional[str] = None
        self.destroyed = False

    @property
    def is_activated(self) -> bool:
        return self.component is not None

    def activate(self, component: Any, path: Optional[str] = None) -> None:
        if self.destroyed:
            raise NavigationError(f"Outlet {self.name} has been destroyed")
        if self.is_activated:
            raise OutletActivationError(self.name)
        self.component = component
        self.path = path

    def deactivate(self) -> None:
        self.component = None
        self.path = None

    def destroy(self) -> None:
        self.deactivate()
        self.destroyed = True


@dataclass
class PrimaryLocation:
    path: Optional[str]
    query_params: Dict[str, Any]


class Navigator:
    """Reference implementation of the NavigationHost protocol."""

    def __init__(self, routes: Optional[List[RouteDefinition]] = None):
        self.config: List[RouteDefinition] = list(routes or [])
        self.outlets: Dict[str, Any] = {}
        self.primary_history: List[PrimaryLocation] = []
        self.primary_component: Any = None
        self.query_params: Dict[str, Any] = {}
        self._activation_listeners: List[ActivationListener] = []
        self._query_params_listeners: List[QueryParamsListener] = []

    # ------------------------------------------------------------------
    # Subscriptions

    def subscribe_activation(self, listener: ActivationListener) -> None:
        self._activation_listeners.append(listener)

    def subscribe_query_params(self, listener: QueryParamsListener) -> None:
        self._query_params_listeners.append(listener)
        listener(dict(self.query_params))

    def _emit_activation(self, event: ActivationEvent) -> None:
        for listener in list(self._activation_listeners):
            listener(event)

    def _set_query_params(self, params: Optional[Dict[str, Any]]) -> None:
        params = dict(params or {})
        if params == self.query_params:
            return
        self.query_params = params
        for listener in list(self._query_params_listeners):
            listener(dict(params))

    # ------------------------------------------------------------------
    # Route config

    def reset_config(self, routes: List[RouteDefinition]) -> None:
        self.config = list(routes)

    def resolve(self, path: Optional[str], outlet: str = PRIMARY_OUTLET) -> RouteDefinition:
        """Find the route for ``path`` in ``outlet``; raise NavigationError if none."""
        wanted_outlet = None if outlet == PRIMARY_OUTLET else outlet
        normalized = (path or "").strip("/")
        for route in self.config:
            if route.outlet == wanted_outlet and route.path.strip("/") == normalized:
                return route
        raise NavigationError(f"Cannot match any routes. URL segment: '{path or ''}' (outlet: {outlet})")

    # ------------------------------------------------------------------
    # Outlets

    def create_outlet_controller(self, name: str) -> Any:
        controller = self._build_outlet_controller(name)
        self.outlets[name] = controller
        return controller

    def release_outlet_controller(self, name: str) -> None:
        """Forget the controller of a torn-down outlet."""
        if self.outlets.pop(name, None) is not None:
            logger.debug(f"Released outlet controller for {name}")

    def _build_outlet_controller(self, name: str) -> Any:
        return MemoryOutletController(name)

    def _instantiate(self, route: RouteDefinition) -> Any:
        if route.component is None:
            return None
        return route.component()

    # ------------------------------------------------------------------
    # Navigation

    def navigate(
        self,
        targets: Mapping[str, Optional[str]],
        query_params: Optional[Dict[str, Any]] = None,
        skip_location_change: bool = False,
    ) -> None:
        """Apply every outlet target, then publish the query parameters."""
        for outlet, path in targets.items():
            if outlet == PRIMARY_OUTLET:
                self._navigate_primary(path, query_params, record=not skip_location_change)
            else:
                self._navigate_outlet(outlet, path)
        if PRIMARY_OUTLET not in targets and query_params is not None:
            self._set_query_params(query_params)

    def _navigate_primary(self, path: Optional[str], query_params: Optional[Dict[str, Any]],
                          record: bool = True) -> None:
        # A cleared primary outlet falls back to the '' route, which must exist.
        route = self.resolve(path, PRIMARY_OUTLET)
        if record:
            self.primary_history.append(PrimaryLocation(path, dict(query_params or {})))
        self._set_query_params(query_params)
        self._emit_activation(ActivationEvent(PRIMARY_OUTLET, path))
        self._show_primary(route, self._instantiate(route))
        logger.debug(f"Primary outlet now at {path!r}")

    def _navigate_outlet(self, outlet: str, path: Optional[str]) -> None:
        controller = self.outlets.get(outlet)
        if controller is None:
            raise NavigationError(f"Cannot find the outlet {outlet} to load '{path or ''}'")
        if path is None:
            controller.deactivate()
            logger.debug(f"Cleared outlet {outlet}")
            return
        route = self.resolve(path, outlet)
        self._emit_activation(ActivationEvent(outlet, path))
        controller.activate(self._instantiate(route), path)
        logger.debug(f"Outlet {outlet} now at {path!r}")

    def _show_primary(self, route: RouteDefinition, component: Any) -> None:
        self.primary_component = component

    def back(self) -> None:
        """Return the primary outlet to its previous location, if any."""
        if len(self.primary_history) < 2:
            logger.debug("back: primary history has no previous location")
            return
        self.primary_history.pop()
        previous = self.primary_history[-1]
        self._navigate_primary(previous.path, previous.query_params, record=False)

    @property
    def primary_path(self) -> Optional[str]:
        return self.primary_history[-1].path if self.primary_history else None

    def outlet_path(self, outlet: str) -> Optional[str]:
        controller = self.outlets.get(outlet)
        return getattr(controller, "path", None) if controller is not None else None

    def location(self) -> Tuple[Optional[str], Dict[str, Optional[str]]]:
        """Primary path plus the path shown in every known outlet."""
        return self.primary_path, {name: self.outlet_path(name) for name in self.outlets}
