from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """当前 UTC 时间（带时区）"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """统一为带时区的 UTC 时间

    SQLite 不保存时区信息，读回的无时区时间按 UTC 处理。
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
