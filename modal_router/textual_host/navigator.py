"""
Navigation host for Textual apps.

The primary outlet's first screen is pushed onto the app's default screen
and later primary screens replace it with ``switch_screen``; every modal
outlet pushes its screen on top.
"""

from typing import Any, List, Optional, TYPE_CHECKING

from loguru import logger

from ..navigation.host import ActivationEvent
from ..navigation.navigator import Navigator
from ..navigation.route_table import RouteDefinition
from .messages import OutletActivated
from .screen_outlet import BlankScreen, ScreenOutletController

if TYPE_CHECKING:
    from textual.app import App

logger = logger.bind(module="textual_navigator")


class TextualNavigator(Navigator):
    """Navigator that renders routed components as Textual screens."""

    def __init__(self, app: 'App', routes: Optional[List[RouteDefinition]] = None):
        super().__init__(routes)
        self.app = app

    def _build_outlet_controller(self, name: str) -> ScreenOutletController:
        return ScreenOutletController(self.app, name)

    def _emit_activation(self, event: ActivationEvent) -> None:
        super()._emit_activation(event)
        self.app.post_message(OutletActivated(event.outlet_name, event.path))

    def _show_primary(self, route: RouteDefinition, component: Any) -> None:
        screen = component if component is not None else BlankScreen()
        if self.primary_component is None:
            # The default screen was never pushed, so it cannot be switched out.
            self.app.push_screen(screen)
        else:
            if self.app.screen is not self.primary_component:
                logger.warning("Switching the primary screen while modal screens are open")
            self.app.switch_screen(screen)
        self.primary_component = screen
