"""Logfire setup.

Services and repositories emit spans and structured events directly:

    with logfire.span("item_service.insert_item", author_id=author_id):
        ...
    logfire.info("Item inserted", item_id=item_id)

Scripts call ``configure_logfire`` once at startup; the persistence provider
instruments the engine it builds.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from newsboard.config import ObservabilitySettings, Settings


def _should_send(observability: ObservabilitySettings) -> bool:
    # Explicit setting wins, otherwise send only when a token is configured
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings, component: str = "newsboard") -> None:
    """Configure Logfire for a process.

    Args:
        settings: Application settings; OBSERVABILITY__LOGFIRE_TOKEN and
            OBSERVABILITY__SEND_TO_LOGFIRE control cloud export
        component: Service name reported for this process, e.g. the
            script name for maintenance jobs
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name=component,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        component=component,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement run on ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
