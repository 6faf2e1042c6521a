"""
Stack of open modal outlets.
"""

from typing import List, Optional

from loguru import logger

from ..state.route_model import OutletHistory

logger = logger.bind(module="outlet_stack")

DEFAULT_OUTLET_PREFIX = "modal_"


class OutletStackRegistry:
    """
    Ordered stack of open outlet histories.

    Names are minted deterministically as ``<prefix><counter>``. The counter
    grows by one per opened outlet and, after a close, is re-derived from
    the outlet left on top so it can never point past the stack or mint a
    name that is still open.
    """

    def __init__(self, prefix: str = DEFAULT_OUTLET_PREFIX):
        self.prefix = prefix
        self.counter = 0
        self._stack: List[OutletHistory] = []

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def is_modal_open(self) -> bool:
        return len(self._stack) > 0

    def matches(self, outlet_name: Optional[str]) -> bool:
        """True if ``outlet_name`` follows the modal naming scheme."""
        return bool(outlet_name) and outlet_name.startswith(self.prefix)

    def mint_name(self) -> str:
        return f"{self.prefix}{self.counter}"

    def open_outlet(self) -> str:
        name = self.mint_name()
        self._stack.append(OutletHistory(name))
        self.counter += 1
        logger.debug(f"Pushed outlet {name} (depth={len(self._stack)})")
        return name

    def close_outlet(self, name: str) -> Optional[OutletHistory]:
        """Remove the outlet called ``name`` and return its history."""
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].name == name:
                history = self._stack.pop(index)
                break
        else:
            logger.warning(f"close_outlet: no open outlet named {name}")
            return None

        if index != len(self._stack):
            logger.warning(f"Closed outlet {name} below the top of the stack")
        self.counter = self._next_counter()
        logger.debug(f"Popped outlet {name} (depth={len(self._stack)}, counter={self.counter})")
        return history

    def _next_counter(self) -> int:
        if not self._stack:
            return 0
        suffix = self._stack[-1].name[len(self.prefix):]
        try:
            return int(suffix) + 1
        except ValueError:
            return len(self._stack)

    def active_outlet(self) -> Optional[OutletHistory]:
        """The outlet on top of the stack, or None when no modal is open."""
        if self._stack:
            return self._stack[-1]
        return None

    def get(self, name: str) -> Optional[OutletHistory]:
        for history in self._stack:
            if history.name == name:
                return history
        return None

    def names(self) -> List[str]:
        return [history.name for history in self._stack]
