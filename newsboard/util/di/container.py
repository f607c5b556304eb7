"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from newsboard.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Callers
    open a REQUEST scope per unit of work:

        async with container() as request_container:
            use_case = await request_container.get(SubmitItemUseCase)

    Returns:
        Configured DI container with production providers
    """
    # Get provider instances - all are instantiated without arguments
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
