from datetime import datetime
from typing import Optional

import strawberry


@strawberry.type
class SyncResult:
    success: bool
    message: str
    count: Optional[int] = None


@strawberry.type
class SyncStatus:
    """Last run of one sync job, read from the sync_metadata table."""
    source: str
    data_type: str
    last_sync_started_at: Optional[datetime]
    last_sync_completed_at: Optional[datetime]
    last_sync_status: Optional[str]
    records_processed: int
    error_message: Optional[str]
    sync_duration_ms: Optional[int]
