"""Pytest configuration and fixtures for asyncmapper tests."""

import pytest
from typing import Any
from asyncmapper import Result


@pytest.fixture
def nested_data() -> dict[str, Any]:
    """Provide a nested mapping/list structure for path lookups."""
    return {"a": ["0", {"b": ["0", "1", "X"]}, "2"]}


class CallCounter:
    """Sync transform that counts its invocations."""

    def __init__(self, result: Any = None) -> None:
        self.calls = 0
        self.result = result

    def __call__(self, value: Any) -> Any:
        self.calls += 1
        return value if self.result is None else self.result


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()


# Pytest markers for organizing tests
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


# Custom assertion helpers
def assert_result_ok(result: Result) -> None:
    """Assert that a mapper result is OK."""
    from asyncmapper.util import is_ok
    assert is_ok(result), f"Mapper result should be OK, got: {result}"


def assert_result_error(result: Result) -> None:
    """Assert that a mapper result is an error."""
    from asyncmapper.util import is_err
    assert is_err(result), f"Mapper result should be error, got: {result}"
