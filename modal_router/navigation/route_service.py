# modal_router/navigation/route_service.py
# Description: Navigation coordinator for the primary outlet and stacked modal outlets.
#
# The host only tracks one navigation stack. This service layers any number
# of named modal outlets on top of it, each with its own history, and keeps
# the host's route config in step with outlet creation and teardown.
#
# Imports
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence
#
# Third-Party Imports
from loguru import logger
#
# Local Imports
from ..config import RouterSettings
from ..state.context import Context, ContextRegistry, Routable
from ..state.route_model import OutletHistory, RouteEntry
from .activation_guard import ActivationGuard
from .host import PRIMARY_OUTLET, NavigationHost, OutletController, SessionStore
from .outlet_stack import OutletStackRegistry
from .route_table import DynamicRouteTable, RouteDefinition
#
#######################################################################################################################
#
# Classes:

logger = logger.bind(module="route_service")

OutletControllerFactory = Callable[[str], OutletController]


class RouteService:
    """
    Routes navigation requests to the primary outlet or the active modal outlet.

    When no modal is open every call is delegated to the host unchanged.
    Once a modal outlet is open, navigation pushes onto that outlet's
    history and targets the outlet by name, preserving the primary
    outlet's query parameters.
    """

    def __init__(
        self,
        router: NavigationHost,
        modal_routes: Sequence[RouteDefinition] = (),
        session_store: Optional[SessionStore] = None,
        settings: Optional[RouterSettings] = None,
        outlet_controller_factory: Optional[OutletControllerFactory] = None,
        context_registry: Optional[ContextRegistry] = None,
    ):
        self.router = router
        self.settings = settings or RouterSettings()
        self.session_store = session_store
        self.outlet_controller_factory = outlet_controller_factory
        self.context_registry = context_registry or ContextRegistry()

        self.outlet_stack = OutletStackRegistry(self.settings.outlet_prefix)
        self.route_table = DynamicRouteTable(router, modal_routes)
        self.outlet_controllers: Dict[str, OutletController] = {}
        self.primary_query_params: Dict[str, Any] = {}

        self.activation_guard = ActivationGuard(self.outlet_controllers, self.outlet_stack.matches)
        self.router.subscribe_activation(self.activation_guard)
        self.router.subscribe_query_params(self._on_primary_query_params)

        logger.info(f"RouteService initialized (outlet prefix={self.settings.outlet_prefix!r}, "
                    f"{len(self.route_table.template)} modal route templates)")

    def _on_primary_query_params(self, params: Optional[Dict[str, Any]]) -> None:
        self.primary_query_params = dict(params or {})

    # ------------------------------------------------------------------
    # Outlet stack

    @property
    def is_modal_open(self) -> bool:
        return self.outlet_stack.is_modal_open

    def get_current_active_outlet(self) -> Optional[OutletHistory]:
        """The outlet on top of the modal stack, or None."""
        return self.outlet_stack.active_outlet()

    def open_outlet(self) -> str:
        """
        Open a new modal outlet on top of the stack.

        Mints the next ``<prefix><n>`` name, pushes an empty history, adds a
        stamped copy of the modal route template to the host config and,
        if a controller factory is configured, registers a controller.
        """
        name = self.outlet_stack.open_outlet()
        self.route_table.add_outlet_routes(name)
        if self.outlet_controller_factory is not None:
            self.create_outlet_controller(name, self.outlet_controller_factory)
        logger.info(f"Opened modal outlet {name} (open outlets: {self.outlet_stack.names()})")
        return name

    def close_outlet(self, name: str) -> Optional[OutletHistory]:
        """Remove the routes of ``name`` from the host config, then drop its history."""
        self.route_table.remove_outlet_routes(name)
        history = self.outlet_stack.close_outlet(name)
        logger.info(f"Closed modal outlet {name} (open outlets: {self.outlet_stack.names()})")
        return history

    def close_active_outlet(self) -> Optional[str]:
        """
        Tear down the active modal outlet.

        The outlet's target is cleared first (the host must not be left
        pointing at routes that no longer exist), then its routes and
        history are removed, then its controller is deactivated, destroyed
        and unregistered. Hosts that track controllers release theirs last.
        """
        active = self.get_current_active_outlet()
        if active is None:
            logger.debug("close_active_outlet: no modal outlet open")
            return None

        name = active.name
        self.clear_route()
        self.close_outlet(name)
        controller = self.outlet_controllers.get(name)
        if controller is not None:
            controller.deactivate()
            controller.destroy()
            self.unregister_outlet_controller(name)
        release = getattr(self.router, "release_outlet_controller", None)
        if release is not None:
            release(name)
        return name

    # ------------------------------------------------------------------
    # Outlet controllers

    def register_outlet_controller(self, name: str, controller: OutletController) -> None:
        self.outlet_controllers[name] = controller
        logger.debug(f"Registered outlet controller for {name}")

    def unregister_outlet_controller(self, name: str) -> Optional[OutletController]:
        controller = self.outlet_controllers.pop(name, None)
        if controller is not None:
            logger.debug(f"Unregistered outlet controller for {name}")
        return controller

    def get_outlet_controller(self, name: str) -> Optional[OutletController]:
        return self.outlet_controllers.get(name)

    def create_outlet_controller(self, name: str, factory: OutletControllerFactory) -> OutletController:
        """Build a controller for ``name`` with ``factory`` and register it."""
        controller = factory(name)
        self.register_outlet_controller(name, controller)
        return controller

    # ------------------------------------------------------------------
    # Navigation

    def _navigate_outlet(self, name: str, url: Optional[str]) -> None:
        self.router.navigate(
            {name: url if url else None},
            query_params=self.primary_query_params,
            skip_location_change=self.settings.skip_location_change,
        )

    def navigate(self, url: Optional[str] = None, params: Optional[Dict[str, Any]] = None,
                 caller: Optional[Routable] = None) -> None:
        """
        Navigate the primary outlet, or the active modal outlet when one is open.

        A ``caller`` gets the chance to save its context before leaving.
        In a modal, the entry is pushed before the host is asked to
        navigate; a failing host leaves the push in place.
        """
        if caller is not None:
            caller.save_context()

        active = self.get_current_active_outlet()
        if active is None:
            logger.debug(f"Primary navigation to {url!r} params={params}")
            self.router.navigate({PRIMARY_OUTLET: url}, query_params=params)
            return

        active.push_entry(RouteEntry(url, dict(params or {})))
        logger.debug(f"Outlet {active.name} navigation to {url!r} (depth={active.depth})")
        self._navigate_outlet(active.name, url)

    def go_back(self, caller: Optional[Routable] = None) -> None:
        """
        Browser-style back navigation.

        In a modal, the current and previous entries are popped and the
        previous one is navigated to again, which pushes it back: the
        history shrinks by one and the prior route is displayed.
        """
        if caller is not None:
            caller.save_context()

        if not self.is_modal_open:
            logger.debug("Primary back navigation")
            self.router.back()
            return

        entry = self.pop_previous_entry()
        if entry is not None:
            self.navigate(entry.url, entry.params)
        else:
            logger.debug("go_back: no previous entry in the active outlet")

    def clear_route(self) -> None:
        """Clear the displayed route of the active target without touching history."""
        active = self.get_current_active_outlet()
        if active is None:
            self.router.navigate({PRIMARY_OUTLET: None})
            return
        self._navigate_outlet(active.name, None)

    # ------------------------------------------------------------------
    # History accessors

    def get_current_outlet_history(self) -> List[RouteEntry]:
        active = self.get_current_active_outlet()
        return active.reachable_entries() if active is not None else []

    def get_previous_entry(self) -> Optional[RouteEntry]:
        active = self.get_current_active_outlet()
        return active.previous_entry() if active is not None else None

    def pop_previous_entry(self) -> Optional[RouteEntry]:
        """Drop the current entry and hand back the previous one, removing it too."""
        active = self.get_current_active_outlet()
        if active is None:
            return None
        active.discard_entry()  # current
        return active.discard_entry()  # previous

    # ------------------------------------------------------------------
    # Parameters

    def get_parameter(self, name: str) -> Any:
        """
        Input parameter ``name`` of the component being displayed.

        Reads the top entry of the active modal outlet when it has one,
        otherwise the primary outlet's query parameters.
        """
        active = self.get_current_active_outlet()
        if active is not None:
            entry = active.current_entry()
            if entry is not None:
                return entry.params.get(name) if entry.params else None

        key = self.settings.primary_fallback_parameter or name
        return self.primary_query_params.get(key)

    # ------------------------------------------------------------------
    # Component contexts

    @staticmethod
    def generate_unique_id() -> str:
        return uuid.uuid4().hex[:12]

    def set_component_session_data(self, component_id: str, context: Context) -> None:
        if self.session_store is None:
            logger.warning(f"No session store configured; context for {component_id} not saved")
            return
        self.session_store.set(component_id, context.to_session_storage())
        logger.debug(f"Saved {context.type.value} context for {component_id}")

    def get_component_session_data(self, component_id: str) -> Optional[Context]:
        """Restore the context saved for ``component_id``, or None if there is none."""
        if self.session_store is None:
            return None
        record = self.session_store.get(component_id)
        if record is None:
            return None
        return self.context_registry.restore(record)


def create_route_service(
    router: NavigationHost,
    modal_routes: Sequence[RouteDefinition] = (),
    settings: Optional[RouterSettings] = None,
    outlet_controller_factory: Optional[OutletControllerFactory] = None,
) -> RouteService:
    """Build a RouteService with the session store selected by ``settings``."""
    from ..session.session_store import create_session_store

    settings = settings or RouterSettings.from_config()
    factory = outlet_controller_factory
    if factory is None:
        factory = getattr(router, "create_outlet_controller", None)
    return RouteService(
        router,
        modal_routes,
        session_store=create_session_store(settings),
        settings=settings,
        outlet_controller_factory=factory,
    )

#
# End of route_service.py
#######################################################################################################################
