"""Textual messages posted by the Textual navigation host."""

from typing import Optional

from textual.message import Message


class OutletActivated(Message):
    """Posted when a routed screen is about to be shown in an outlet."""
    def __init__(self, outlet_name: str, path: Optional[str] = None):
        super().__init__()
        self.outlet_name = outlet_name
        self.path = path
