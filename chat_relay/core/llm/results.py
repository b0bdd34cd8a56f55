from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    text: str

    outcome = "success"


@dataclass(frozen=True)
class HttpError:
    status_code: int
    body: str

    outcome = "http_error"

    @property
    def message(self) -> str:
        return f"DeepSeek request failed ({self.status_code}): {self.body}"


@dataclass(frozen=True)
class Timeout:
    duration_ms: float

    outcome = "timeout"

    @property
    def whole_seconds(self) -> int:
        return int(self.duration_ms // 1000)


@dataclass(frozen=True)
class TransportError:
    # None when the underlying exception carried no message.
    message: str | None

    outcome = "transport_error"


@dataclass(frozen=True)
class EmptyContent:
    outcome = "empty_content"


@dataclass(frozen=True)
class MissingCredential:
    outcome = "missing_credential"


CompletionResult = Success | HttpError | Timeout | TransportError | EmptyContent | MissingCredential
