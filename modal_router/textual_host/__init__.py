"""
Textual binding: renders the primary outlet and modal outlets as screens.
"""

from .messages import OutletActivated
from .screen_outlet import BlankScreen, EmptyOutletScreen, ScreenOutletController
from .navigator import TextualNavigator

__all__ = [
    'OutletActivated',
    'BlankScreen',
    'EmptyOutletScreen',
    'ScreenOutletController',
    'TextualNavigator',
]
