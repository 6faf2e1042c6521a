"""
Tests for the in-memory navigation host.
"""
import pytest

from modal_router.exceptions import NavigationError, OutletActivationError
from modal_router.navigation.host import PRIMARY_OUTLET, ActivationEvent, NavigationHost
from modal_router.navigation.navigator import MemoryOutletController, Navigator
from modal_router.navigation.route_table import RouteDefinition


class TestNavigator:
    """Test suite for Navigator."""

    def test_satisfies_host_protocol(self, navigator):
        assert isinstance(navigator, NavigationHost)

    def test_resolve_ignores_slashes(self, navigator):
        assert navigator.resolve("/home/").path == "home"

    def test_resolve_respects_outlet(self, navigator):
        navigator.config.append(RouteDefinition("detail", outlet="modal_0"))
        assert navigator.resolve("detail", "modal_0").outlet == "modal_0"
        with pytest.raises(NavigationError):
            navigator.resolve("detail", PRIMARY_OUTLET)

    def test_activation_emitted_before_component_created(self, navigator):
        order = []
        navigator.config.append(RouteDefinition("tracked", lambda: order.append("created")))
        navigator.subscribe_activation(lambda event: order.append(event))

        navigator.navigate({PRIMARY_OUTLET: "tracked"})
        assert order == [ActivationEvent(PRIMARY_OUTLET, "tracked"), "created"]

    def test_query_params_subscription_gets_current_value(self, navigator):
        received = []
        navigator.navigate({PRIMARY_OUTLET: "home"}, query_params={"number": 1})
        navigator.subscribe_query_params(received.append)
        navigator.navigate({PRIMARY_OUTLET: "first"}, query_params={"number": 2})
        assert received == [{"number": 1}, {"number": 2}]

    def test_unchanged_query_params_not_republished(self, navigator):
        received = []
        navigator.subscribe_query_params(received.append)
        navigator.navigate({PRIMARY_OUTLET: "home"}, query_params={"a": 1})
        navigator.navigate({PRIMARY_OUTLET: "first"}, query_params={"a": 1})
        assert received == [{}, {"a": 1}]

    def test_skip_location_change_not_recorded(self, navigator):
        navigator.navigate({PRIMARY_OUTLET: "home"})
        navigator.navigate({PRIMARY_OUTLET: "first"}, skip_location_change=True)
        assert navigator.primary_component.name == "first"
        assert [loc.path for loc in navigator.primary_history] == ["home"]

    def test_unknown_outlet_raises(self, navigator):
        with pytest.raises(NavigationError):
            navigator.navigate({"modal_0": "detail"})

    def test_back_on_single_location_is_noop(self, navigator):
        navigator.navigate({PRIMARY_OUTLET: "home"})
        navigator.back()
        assert navigator.primary_path == "home"

    def test_location(self, navigator):
        navigator.navigate({PRIMARY_OUTLET: "home"})
        navigator.config.append(RouteDefinition("detail", outlet="modal_0"))
        navigator.create_outlet_controller("modal_0")
        navigator.navigate({"modal_0": "detail"})
        assert navigator.location() == ("home", {"modal_0": "detail"})

    def test_release_outlet_controller(self, navigator):
        navigator.create_outlet_controller("modal_0")
        navigator.release_outlet_controller("modal_0")
        navigator.release_outlet_controller("modal_0")

        assert "modal_0" not in navigator.outlets
        with pytest.raises(NavigationError):
            navigator.navigate({"modal_0": "detail"})


class TestMemoryOutletController:
    """Test suite for MemoryOutletController."""

    def test_double_activation_raises(self):
        controller = MemoryOutletController("modal_0")
        controller.activate(object(), "detail")
        with pytest.raises(OutletActivationError) as exc_info:
            controller.activate(object(), "edit")
        assert exc_info.value.outlet_name == "modal_0"

    def test_deactivate_allows_reactivation(self):
        controller = MemoryOutletController("modal_0")
        controller.activate(object(), "detail")
        controller.deactivate()
        controller.activate(object(), "edit")
        assert controller.path == "edit"

    def test_destroyed_controller_refuses_activation(self):
        controller = MemoryOutletController("modal_0")
        controller.destroy()
        with pytest.raises(NavigationError):
            controller.activate(object())
