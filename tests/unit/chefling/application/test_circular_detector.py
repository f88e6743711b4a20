"""Unit tests for CircularDependencyDetector."""

import pytest

from chefling.application.circular_detector import CircularDependencyDetector
from chefling.domain import ContainerError, ErrorReason


class ServiceA:
    pass


class ServiceB:
    pass


class ServiceC:
    pass


class TestCircularDependencyDetector:
    """Test cases for CircularDependencyDetector class."""

    def test_detector_initialization(self):
        """Test that detector starts with nothing in flight."""
        detector = CircularDependencyDetector()
        assert detector.get_stack() == []

    def test_push_marks_type(self):
        """Test that push marks a type as resolving."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        assert detector.is_resolving(ServiceA)
        assert detector.get_stack() == [ServiceA]

    def test_push_multiple_dependencies(self):
        """Test that push keeps resolution order."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)
        detector.push(ServiceC)

        assert detector.get_stack() == [ServiceA, ServiceB, ServiceC]

    def test_push_detects_circular_dependency(self):
        """Test that pushing a marked type raises with the cycle path."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)

        with pytest.raises(ContainerError) as exc_info:
            detector.push(ServiceA)

        error = exc_info.value
        assert error.reason is ErrorReason.CIRCULAR_DEPENDENCY
        assert error.dependency_chain == [ServiceA, ServiceB, ServiceA]
        assert "ServiceA -> ServiceB -> ServiceA" in str(error)

    def test_push_detects_self_reference(self):
        """Test that a type requested twice in a row closes a cycle."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)

        with pytest.raises(ContainerError) as exc_info:
            detector.push(ServiceA)

        assert exc_info.value.dependency_chain == [ServiceA, ServiceA]

    def test_cycle_path_starts_at_first_occurrence(self):
        """Test that types entered before the cycle are not reported."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)
        detector.push(ServiceC)

        with pytest.raises(ContainerError) as exc_info:
            detector.push(ServiceB)

        assert exc_info.value.dependency_chain == [ServiceB, ServiceC, ServiceB]

    def test_pop_clears_marker(self):
        """Test that pop removes the marker of the given type."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.pop(ServiceA)

        assert not detector.is_resolving(ServiceA)
        detector.push(ServiceA)

    def test_pop_unknown_type_is_noop(self):
        """Test that popping an unmarked type does nothing."""
        detector = CircularDependencyDetector()
        detector.pop(ServiceA)
        assert detector.get_stack() == []

    def test_guard_clears_marker_on_success(self):
        """Test that guard clears the marker after a normal exit."""
        detector = CircularDependencyDetector()

        with detector.guard(ServiceA):
            assert detector.is_resolving(ServiceA)

        assert not detector.is_resolving(ServiceA)

    def test_guard_clears_marker_on_failure(self):
        """Test that guard clears the marker when the block raises."""
        detector = CircularDependencyDetector()

        with pytest.raises(RuntimeError):
            with detector.guard(ServiceA):
                raise RuntimeError("construction failed")

        assert not detector.is_resolving(ServiceA)

    def test_nested_guard_failure_keeps_outer_marker(self):
        """Test that a failing inner guard leaves the outer marker in place."""
        detector = CircularDependencyDetector()

        with detector.guard(ServiceA):
            with pytest.raises(ContainerError):
                with detector.guard(ServiceA):
                    pass  # pragma: no cover
            assert detector.is_resolving(ServiceA)

        assert detector.get_stack() == []

    def test_clear(self):
        """Test that clear drops every marker."""
        detector = CircularDependencyDetector()
        detector.push(ServiceA)
        detector.push(ServiceB)
        detector.clear()

        assert detector.get_stack() == []
