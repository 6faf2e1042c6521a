"""
State containers for routed components: route entries, outlet histories
and serializable component contexts.
"""

from .route_model import RouteEntry, OutletHistory
from .context import (
    ComponentType,
    Context,
    ContextCodec,
    ContextRegistry,
    ParameterSlot,
    Routable,
    fill_from_data,
)

__all__ = [
    'RouteEntry',
    'OutletHistory',
    'ComponentType',
    'Context',
    'ContextCodec',
    'ContextRegistry',
    'ParameterSlot',
    'Routable',
    'fill_from_data',
]
