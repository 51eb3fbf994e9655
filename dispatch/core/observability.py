"""
Observability integrations.
Sentry for error tracking.
"""

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from dispatch.core.config import settings

logger = structlog.get_logger(__name__)

_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry is active after the call
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        # Don't send PII
        send_default_pii=False,
    )

    _sentry_initialized = True
    logger.info(
        "Sentry initialized",
        environment=settings.sentry_environment,
        sample_rate=settings.sentry_traces_sample_rate,
    )
    return True
