"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests can swap for in-memory or frozen variants
Component = Literal["persistence", "clock"]


class ProviderBase(Provider):
    """Base for every newsboard provider.

    Attributes:
        __mock_component__: Component a mockable base stands for, None for
            providers that are always real (config, domain, application)
        __is_mock__: Set on the test implementation of a component
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()
