"""
Root conftest.py for shared test fixtures and configuration.
This file provides common fixtures used across the test suite.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from modal_router.config import RouterSettings
from modal_router.navigation.navigator import Navigator
from modal_router.navigation.route_service import RouteService
from modal_router.navigation.route_table import RouteDefinition
from modal_router.session.session_store import InMemorySessionStore
from modal_router.state.context import ComponentType, Context, Routable


# ========== Path and File System Fixtures ==========

@pytest.fixture
def isolated_temp_dir():
    """Create an isolated temporary directory that's always cleaned up."""
    temp_dir = tempfile.mkdtemp(prefix="modal_router_test_")
    temp_path = Path(temp_dir)
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_dir, ignore_errors=True)


# ========== Component Fixtures ==========

class RoutedComponent:
    """Plain component created by the in-memory navigator."""

    def __init__(self, name: str):
        self.name = name


def component_factory(name: str):
    def _create():
        return RoutedComponent(name)
    return _create


class RecordingRoutable(Routable):
    """Routable that records every save_context() call."""

    def __init__(self, service: Optional[RouteService] = None, component_id: str = "second-1", number: int = 0):
        self.service = service
        self.id = component_id
        self.number = number
        self.saved = 0

    def save_context(self) -> None:
        self.saved += 1
        if self.service is not None:
            self.service.set_component_session_data(
                self.id, Context(ComponentType.SECOND, {"number": self.number})
            )


@pytest.fixture
def primary_routes() -> List[RouteDefinition]:
    return [
        RouteDefinition("", component_factory("empty")),
        RouteDefinition("home", component_factory("home")),
        RouteDefinition("first", component_factory("first")),
    ]


@pytest.fixture
def modal_routes() -> List[RouteDefinition]:
    return [
        RouteDefinition("", component_factory("modal-empty")),
        RouteDefinition("detail", component_factory("detail")),
        RouteDefinition("edit", component_factory("edit")),
        RouteDefinition("second", component_factory("second"), data={"title": "Second"}),
    ]


# ========== Service Fixtures ==========

@pytest.fixture
def navigator(primary_routes) -> Navigator:
    return Navigator(primary_routes)


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def settings() -> RouterSettings:
    return RouterSettings()


@pytest.fixture
def route_service(navigator, modal_routes, session_store, settings) -> RouteService:
    return RouteService(
        navigator,
        modal_routes,
        session_store=session_store,
        settings=settings,
        outlet_controller_factory=navigator.create_outlet_controller,
    )


@pytest.fixture
def routable(route_service) -> RecordingRoutable:
    return RecordingRoutable(route_service, number=42)


class RecordingHost:
    """Navigation host double that records every call."""

    def __init__(self, routes: Optional[List[Any]] = None):
        self.config: List[Any] = list(routes or [])
        self.navigations: List[Dict[str, Any]] = []
        self.back_calls = 0
        self.activation_listeners = []
        self.query_params_listeners = []

    def navigate(self, targets, query_params=None, skip_location_change=False):
        self.navigations.append({
            "targets": dict(targets),
            "query_params": query_params,
            "skip_location_change": skip_location_change,
        })

    def back(self):
        self.back_calls += 1

    def reset_config(self, routes):
        self.config = list(routes)

    def subscribe_activation(self, listener):
        self.activation_listeners.append(listener)

    def subscribe_query_params(self, listener):
        self.query_params_listeners.append(listener)

    def publish_query_params(self, params):
        for listener in self.query_params_listeners:
            listener(params)

    def emit_activation(self, event):
        for listener in self.activation_listeners:
            listener(event)


@pytest.fixture
def recording_host() -> RecordingHost:
    return RecordingHost([RouteDefinition("")])
