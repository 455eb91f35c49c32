"""Date helpers for the publish_date wire/storage format."""

from datetime import datetime

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_date(value: str) -> datetime:
    """Parse 'yyyy-MM-dd HH:mm:ss'. Raises ValueError on anything else."""
    return datetime.strptime(value, DATE_FORMAT)


def format_date(value: datetime | None) -> str | None:
    return value.strftime(DATE_FORMAT) if value is not None else None
