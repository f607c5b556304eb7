"""Test container with per-component unmocking."""

from dishka import AsyncContainer, make_async_container

from newsboard.util.di import PROVIDERS, Component, get_provider

# Test doubles must be imported before get_provider walks __subclasses__()
from tests.di.clock import MockClockProvider  # noqa: F401
from tests.di.persistence import MockPersistenceProvider  # noqa: F401


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is a test double.

    Args:
        unmock: Components that should use their production provider,
            e.g. ``{"persistence"}`` to run against PostgreSQL

    Raises:
        ValueError: On an unknown component, or one whose dependencies
            are still mocked
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers)


def _validate_unmock(unmock: set[Component]) -> None:
    mockable = [p for p in PROVIDERS if p.__mock_component__ is not None]
    known = {p.__mock_component__ for p in mockable}

    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    for base in mockable:
        if base.__mock_component__ in unmock:
            missing = base.__depends_on__ - unmock
            if missing:
                raise ValueError(
                    f"Component '{base.__mock_component__}' requires "
                    f"{set(missing)} to be unmocked"
                )
