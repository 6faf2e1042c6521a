"""
Outlet controller backed by the Textual screen stack.
"""

from typing import Optional, TYPE_CHECKING

from loguru import logger
from textual.screen import ModalScreen, Screen

from ..exceptions import NavigationError, OutletActivationError

if TYPE_CHECKING:
    from textual.app import App

logger = logger.bind(module="screen_outlet")


class BlankScreen(Screen):
    """Shown in the primary outlet when a route has no component."""


class EmptyOutletScreen(ModalScreen):
    """Shown in a modal outlet when a route has no component."""


class ScreenOutletController:
    """
    Shows at most one screen for a named modal outlet.

    Activating pushes the screen on the app's screen stack; deactivating
    pops it again when it is on top.
    """

    def __init__(self, app: 'App', name: str):
        self.app = app
        self.name = name
        self.screen: Optional[Screen] = None
        self.path: Optional[str] = None
        self.destroyed = False

    @property
    def is_activated(self) -> bool:
        return self.screen is not None

    def activate(self, screen: Optional[Screen], path: Optional[str] = None) -> None:
        if self.destroyed:
            raise NavigationError(f"Outlet {self.name} has been destroyed")
        if self.screen is not None:
            raise OutletActivationError(self.name)
        screen = screen if screen is not None else EmptyOutletScreen()
        self.app.push_screen(screen)
        self.screen = screen
        self.path = path
        logger.debug(f"Outlet {self.name} pushed {type(screen).__name__}")

    def deactivate(self) -> None:
        screen = self.screen
        if screen is None:
            return
        self.screen = None
        self.path = None
        if self.app.screen is screen:
            self.app.pop_screen()
            logger.debug(f"Outlet {self.name} popped {type(screen).__name__}")
        elif screen in self.app.screen_stack:
            logger.warning(f"Outlet {self.name}: screen {type(screen).__name__} is not on top; left in place")

    def destroy(self) -> None:
        self.deactivate()
        self.destroyed = True
