"""Configuration provider."""

from dishka import Scope, provide

from newsboard.config import Settings
from newsboard.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Loads Settings once per container.

    Values come from the environment and an optional .env file, so tests
    point integration runs at their database by setting DATABASE__URL
    before the container is built.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return Settings()
