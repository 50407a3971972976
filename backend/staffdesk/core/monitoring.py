import sentry_sdk

from staffdesk.core.config import settings


def configure_error_monitoring() -> bool:
    if not settings.sentry_dsn:
        return False
    # Events carry request bodies otherwise, and login bodies hold passwords.
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    return True
