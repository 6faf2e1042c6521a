"""
Exception hierarchy for modal_router.
"""


class ModalRouterError(Exception):
    """Base exception for all modal_router errors."""
    pass


class ContextConfigurationError(ModalRouterError):
    """A stored or incoming context tag has no registered codec."""
    pass


class NavigationError(ModalRouterError):
    """The navigation host could not resolve or perform a navigation."""
    pass


class OutletActivationError(ModalRouterError):
    """An outlet was activated while it already displays a component."""

    def __init__(self, outlet_name: str):
        super().__init__(f"Cannot activate an already activated outlet: {outlet_name}")
        self.outlet_name = outlet_name
