"""Unit tests for type validation helpers."""

import pytest

from chefling.application.container import Container
from chefling.application.type_checks import is_empty, is_sub_type, validate_type
from chefling.domain import ContainerError, ErrorReason


class Base:
    pass


class Derived(Base):
    pass


class Leaf(Derived):
    pass


def _reason_message(value):
    with pytest.raises(ContainerError) as exc_info:
        validate_type(value, Container)
    assert exc_info.value.reason is ErrorReason.INVALID_TYPE
    return str(exc_info.value)


class TestIsSubType:
    """Test cases for is_sub_type."""

    def test_direct_subclass(self):
        """Test that a direct subclass is a subtype."""
        assert is_sub_type(Base, Derived)

    def test_transitive_subclass(self):
        """Test that subtyping is transitive."""
        assert is_sub_type(Base, Leaf)

    def test_type_is_not_its_own_subtype(self):
        """Test that subtyping is not reflexive."""
        assert not is_sub_type(Base, Base)

    def test_base_is_not_subtype_of_derived(self):
        """Test that subtyping is directional."""
        assert not is_sub_type(Derived, Base)

    def test_non_classes(self):
        """Test that non-classes are never subtypes."""
        assert not is_sub_type(Base, Derived())
        assert not is_sub_type(None, Derived)


class TestIsEmpty:
    """Test cases for is_empty."""

    def test_empty_values(self):
        """Test that None and empty containers are empty."""
        assert is_empty(None)
        assert is_empty("")
        assert is_empty([])

    def test_non_empty_values(self):
        """Test that classes and zero are not empty."""
        assert not is_empty(Base)
        assert not is_empty(0)


class TestValidateType:
    """Test cases for validate_type."""

    def test_valid_class_passes(self):
        """Test that a plain class is accepted."""
        validate_type(Base, Container)

    def test_none_is_empty(self):
        """Test that None is rejected as empty."""
        assert _reason_message(None) == "Type [None] is invalid, because it is empty"

    def test_empty_string_is_empty(self):
        """Test that an empty string is rejected as empty."""
        assert "because it is empty" in _reason_message("")

    def test_instance_is_not_a_class(self):
        """Test that instances are rejected and named by their type."""
        assert _reason_message(123) == "Type [Int] is invalid, because it is not a class"

    def test_function_is_not_a_class(self):
        """Test that functions are rejected and named by their __name__."""

        def factory():
            pass

        assert _reason_message(factory) == "Type [factory] is invalid, because it is not a class"

    def test_object_is_base_type(self):
        """Test that the universal base class is rejected."""
        assert _reason_message(object) == "Type [object] is invalid, because it is a base builtin type"

    def test_type_is_base_type(self):
        """Test that the metaclass is rejected."""
        assert "a base builtin type" in _reason_message(type)

    def test_exception_types_are_rejected(self):
        """Test that exception classes, including ContainerError, are rejected."""
        assert "an exception type" in _reason_message(ValueError)
        assert "an exception type" in _reason_message(ContainerError)

    def test_container_type_is_rejected(self):
        """Test that the container class and its subclasses are rejected."""

        class CustomContainer(Container):
            pass

        assert _reason_message(Container) == "Type [Container] is invalid, because it is a container type"
        assert "a container type" in _reason_message(CustomContainer)

    def test_container_instance_is_rejected(self):
        """Test that a container instance is rejected."""
        assert "a container instance" in _reason_message(Container())

    def test_error_carries_value(self):
        """Test that the error keeps the rejected value."""
        with pytest.raises(ContainerError) as exc_info:
            validate_type(object, Container)
        assert exc_info.value.dependency_type is object
