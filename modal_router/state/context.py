"""
Per-component context records and the registry that restores them.

A context is a component's serializable state, tagged with the component
type so it can be rebuilt from the session store after a reload.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from loguru import logger

from ..exceptions import ContextConfigurationError

logger = logger.bind(module="context")


class ComponentType(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


@dataclass
class ParameterSlot:
    """Output holder filled by Context.fill_parameter_value()."""

    name: str
    value: Any = None


ParameterFiller = Callable[['Context', str, ParameterSlot], bool]


def fill_from_data(context: 'Context', name: str, target: ParameterSlot) -> bool:
    """Copy ``context.data[name]`` into ``target.value`` when the key exists."""
    if context.data and name in context.data:
        target.value = context.data[name]
        return True
    return False


@dataclass
class Context:
    """Tagged component state: ``{"type": tag, "data": {...}}``."""

    type: ComponentType
    data: Dict[str, Any] = field(default_factory=dict)
    filler: ParameterFiller = field(default=fill_from_data, repr=False, compare=False)

    def __post_init__(self):
        self.type = ComponentType(self.type)

    def to_session_storage(self) -> Dict[str, Any]:
        return {"type": self.type.value, "data": self.data}

    def fill_parameter_value(self, parameter: Any, target: ParameterSlot) -> bool:
        """
        Fill ``target`` with the stored value for ``parameter``.

        ``parameter`` is a name or anything with a ``name`` attribute.
        Returns False, leaving ``target`` untouched, when nothing is stored.
        """
        name = parameter if isinstance(parameter, str) else parameter.name
        return self.filler(self, name, target)


class ContextCodec:
    """Serializes and restores contexts of one component type."""

    def __init__(self, tag: ComponentType, filler: ParameterFiller = fill_from_data):
        self.tag = ComponentType(tag)
        self.filler = filler

    def create(self, data: Optional[Dict[str, Any]] = None) -> Context:
        return Context(self.tag, dict(data or {}), self.filler)

    def encode(self, context: Context) -> Dict[str, Any]:
        return context.to_session_storage()

    def decode(self, stored: Mapping[str, Any]) -> Context:
        data = stored.get("data") or {}
        if not isinstance(data, Mapping):
            raise ContextConfigurationError(
                f"Stored context data for '{self.tag.value}' must be a mapping, got {type(data).__name__}"
            )
        return self.create(dict(data))


class ContextRegistry:
    """
    Maps component-type tags to context codecs.

    Populated with the default codecs on first use. Registering a codec
    for a tag replaces that tag only; restoring a tag with no codec is a
    configuration error.
    """

    def __init__(self):
        self._codecs: Dict[ComponentType, ContextCodec] = {}

    def initialize(self) -> None:
        for tag in ComponentType:
            self._codecs.setdefault(tag, ContextCodec(tag))
        logger.debug(f"Context registry initialized with {len(self._codecs)} codecs")

    def _ensure_initialized(self) -> None:
        if not self._codecs:
            self.initialize()

    def register(self, tag: ComponentType, codec: Optional[ContextCodec] = None) -> ContextCodec:
        """
        Register ``codec`` for ``tag``, replacing whatever is registered.

        Without a codec, an existing registration is kept and returned.
        The default codecs are installed first, so overriding one tag
        leaves the others restorable.
        """
        self._ensure_initialized()
        tag = ComponentType(tag)
        existing = self._codecs.get(tag)
        if codec is None or codec is existing:
            return existing
        self._codecs[tag] = codec
        logger.debug(f"Registered context codec for '{tag.value}'")
        return codec

    def is_registered(self, tag: ComponentType) -> bool:
        self._ensure_initialized()
        try:
            return ComponentType(tag) in self._codecs
        except (ValueError, TypeError):
            return False

    def codec_for(self, tag: Any) -> ContextCodec:
        self._ensure_initialized()
        try:
            component_type = ComponentType(tag)
        except (ValueError, TypeError):
            component_type = None
        codec = self._codecs.get(component_type) if component_type is not None else None
        if codec is None:
            logger.error(f"No context codec registered for tag {tag!r}")
            raise ContextConfigurationError(
                f"Context implementation for type {tag!r} is missing or not configured"
            )
        return codec

    def create(self, tag: ComponentType, data: Optional[Dict[str, Any]] = None) -> Context:
        """Build a new context of type ``tag`` wired to its codec."""
        return self.codec_for(tag).create(data)

    def restore(self, stored: Mapping[str, Any]) -> Context:
        """Rebuild a typed context from a stored ``{"type", "data"}`` record."""
        if not isinstance(stored, Mapping) or "type" not in stored:
            raise ContextConfigurationError(f"Stored context record has no type tag: {stored!r}")
        return self.codec_for(stored["type"]).decode(stored)


class Routable(ABC):
    """A routed component that can persist its context before navigating away."""

    @abstractmethod
    def save_context(self) -> None:
        ...
