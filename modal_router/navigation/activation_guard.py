"""
Guard against reentrant activation of modal outlets.

Hosts may emit several activation signals for the same outlet while one
navigation is still being processed. Before a modal outlet is activated
again, whatever controller is registered under that name is deactivated,
at most once per outlet at a time.
"""

from typing import Callable, Dict, Optional, Set

from loguru import logger

from .host import ActivationEvent, OutletController

logger = logger.bind(module="activation_guard")


class ActivationGuard:
    """Single-flight deactivation per outlet name."""

    def __init__(
        self,
        controllers: Dict[str, OutletController],
        matches: Callable[[Optional[str]], bool],
    ):
        self._controllers = controllers
        self._matches = matches
        self._in_flight: Set[str] = set()

    def is_in_flight(self, outlet_name: str) -> bool:
        return outlet_name in self._in_flight

    def __call__(self, event: ActivationEvent) -> None:
        self.on_activation(event)

    def on_activation(self, event: ActivationEvent) -> bool:
        """
        Deactivate the controller registered under the event's outlet.

        Returns True if a deactivation happened during this call.
        """
        name = event.outlet_name
        if not self._matches(name):
            return False
        if name in self._in_flight:
            logger.debug(f"Ignoring reentrant activation of {name}")
            return False

        controller = self._controllers.get(name)
        if controller is None:
            return False

        self._in_flight.add(name)
        try:
            controller.deactivate()
        finally:
            self._in_flight.discard(name)
        logger.debug(f"Deactivated {name} ahead of activation of {event.path!r}")
        return True
