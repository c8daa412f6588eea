from datetime import datetime, timedelta, timezone


def utc_now_naive() -> datetime:
    """Current UTC time without tzinfo, the form stored in every timestamp column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def days_ago(days: int) -> datetime:
    return utc_now_naive() - timedelta(days=days)
