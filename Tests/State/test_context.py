"""
Tests for component contexts and the context registry.
"""
import pytest

from modal_router.exceptions import ContextConfigurationError
from modal_router.state.context import (
    ComponentType,
    Context,
    ContextCodec,
    ContextRegistry,
    ParameterSlot,
)


class TestContext:
    """Test suite for Context."""

    def test_to_session_storage(self):
        context = Context(ComponentType.SECOND, {"number": 42})
        assert context.to_session_storage() == {"type": "second", "data": {"number": 42}}

    def test_fill_parameter_found(self):
        context = Context(ComponentType.FIRST, {"number": 42})
        slot = ParameterSlot("number")
        assert context.fill_parameter_value("number", slot) is True
        assert slot.value == 42

    def test_fill_parameter_accepts_named_object(self):
        context = Context(ComponentType.FIRST, {"number": 42})
        slot = ParameterSlot("out")
        assert context.fill_parameter_value(ParameterSlot("number"), slot) is True
        assert slot.value == 42

    def test_fill_parameter_missing_leaves_target_untouched(self):
        context = Context(ComponentType.THIRD, {"number": 42})
        slot = ParameterSlot("other", value="unchanged")
        assert context.fill_parameter_value("other", slot) is False
        assert slot.value == "unchanged"

    def test_fill_parameter_falsy_value_is_found(self):
        context = Context(ComponentType.FIRST, {"count": 0})
        slot = ParameterSlot("count", value=None)
        assert context.fill_parameter_value("count", slot) is True
        assert slot.value == 0

    def test_string_tag_is_coerced(self):
        context = Context("second", {"number": 3})
        assert context.type is ComponentType.SECOND
        assert context.to_session_storage() == {"type": "second", "data": {"number": 3}}

    def test_unknown_string_tag_rejected(self):
        with pytest.raises(ValueError):
            Context("fourth")

    def test_fill_parameter_empty_data(self):
        slot = ParameterSlot("number")
        assert Context(ComponentType.FIRST).fill_parameter_value("number", slot) is False


class TestContextRegistry:
    """Test suite for ContextRegistry."""

    @pytest.fixture
    def registry(self):
        return ContextRegistry()

    def test_restore_second_context(self, registry):
        stored = Context(ComponentType.SECOND, {"number": 42}).to_session_storage()
        restored = registry.restore(stored)

        assert restored.type is ComponentType.SECOND
        slot = ParameterSlot("number")
        assert restored.fill_parameter_value("number", slot) is True
        assert slot.value == 42

        missing = ParameterSlot("missing", value="keep")
        assert restored.fill_parameter_value("missing", missing) is False
        assert missing.value == "keep"

    def test_lazy_initialization_registers_all_types(self, registry):
        for tag in ComponentType:
            assert registry.is_registered(tag)

    def test_unknown_tag_raises(self, registry):
        with pytest.raises(ContextConfigurationError):
            registry.restore({"type": "fourth", "data": {}})

    def test_custom_codec_before_lookup_keeps_defaults(self, registry):
        custom = ContextCodec(ComponentType.FIRST)
        assert registry.register(ComponentType.FIRST, custom) is custom

        restored = registry.restore({"type": "second", "data": {"number": 1}})
        assert restored.type is ComponentType.SECOND
        assert registry.codec_for(ComponentType.FIRST) is custom

    def test_custom_codec_replaces_default_after_lookup(self, registry):
        registry.restore({"type": "first", "data": {}})
        custom = ContextCodec(ComponentType.FIRST)

        assert registry.register(ComponentType.FIRST, custom) is custom
        assert registry.codec_for(ComponentType.FIRST) is custom

    def test_missing_type_raises(self, registry):
        with pytest.raises(ContextConfigurationError):
            registry.restore({"data": {}})

    def test_non_mapping_data_raises(self, registry):
        with pytest.raises(ContextConfigurationError):
            registry.restore({"type": "first", "data": [1, 2]})

    def test_register_is_idempotent(self, registry):
        first = registry.register(ComponentType.THIRD)
        assert registry.register(ComponentType.THIRD) is first
        assert registry.register(ComponentType.THIRD, first) is first

    def test_custom_filler_per_tag(self, registry):
        def upper_filler(context, name, target):
            if name in context.data:
                target.value = str(context.data[name]).upper()
                return True
            return False

        registry.register(ComponentType.FIRST, ContextCodec(ComponentType.FIRST, upper_filler))
        restored = registry.restore({"type": "first", "data": {"label": "abc"}})
        slot = ParameterSlot("label")
        assert restored.fill_parameter_value("label", slot)
        assert slot.value == "ABC"

    def test_create_uses_codec(self, registry):
        context = registry.create(ComponentType.SECOND, {"number": 5})
        assert context == Context(ComponentType.SECOND, {"number": 5})
