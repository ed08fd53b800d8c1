from enum import StrEnum

from pydantic import BaseModel


class FetchStatus(StrEnum):
    ok = "ok"
    http_error = "http_error"  # non-2xx, body still available
    challenge = "challenge"  # anti-bot page and no rendered replacement
    transport_error = "transport_error"
    unavailable = "unavailable"  # headless engine missing from the runtime
    failed = "failed"  # headless render exhausted its retries


class FetchResult(BaseModel):
    url: str
    html: str | None = None
    status: FetchStatus
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.ok and bool(self.html)
