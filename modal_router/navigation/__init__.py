"""
Navigation management module: modal outlet stack, dynamic routes and the
route service that coordinates them with the navigation host.
"""

from .host import (
    PRIMARY_OUTLET,
    ActivationEvent,
    NavigationHost,
    OutletController,
    SessionStore,
)
from .outlet_stack import OutletStackRegistry
from .route_table import DynamicRouteTable, RouteDefinition
from .activation_guard import ActivationGuard
from .navigator import MemoryOutletController, Navigator
from .route_service import RouteService, create_route_service

__all__ = [
    'PRIMARY_OUTLET',
    'ActivationEvent',
    'NavigationHost',
    'OutletController',
    'SessionStore',
    'OutletStackRegistry',
    'DynamicRouteTable',
    'RouteDefinition',
    'ActivationGuard',
    'MemoryOutletController',
    'Navigator',
    'RouteService',
    'create_route_service',
]
