from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def assume_utc(value: datetime) -> datetime:
    # SQLite drops the zone; its CURRENT_TIMESTAMP is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCDateTime = Annotated[datetime, AfterValidator(assume_utc)]
