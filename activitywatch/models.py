# =============================================================================
# activitywatch/models.py  —  Data Models (buckets, events, output format)
# =============================================================================
#
# These dataclasses mirror the JSON objects aw-server returns.  They are only
# ever built by decoding a response (from_dict), they are frozen, and they
# live for exactly one tool call.
#
# DECODING RULES:
#   - A Bucket needs an "id"; every other field may be missing or null.
#   - An Event needs "timestamp", "duration" and "data".  An event missing
#     any of those is a contract mismatch with the server, not a partial
#     event, so from_dict raises ValueError.
#   - Timestamps are normalised to UTC.  Naive timestamps (aw-server writes
#     bucket "created" without an offset) are taken to already be UTC.
#
# RENDERING:
#   Each model renders itself two ways:
#     - to_dict()      → structured form, same key names as the wire format
#     - to_markdown()  → one human-readable subsection
#   Absent optional fields are left out of the markdown entirely.
# =============================================================================

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

# Display format for every timestamp in markdown output.
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"          # Machine-readable


# -----------------------------------------------------------------------------
# Decoding helpers
# -----------------------------------------------------------------------------
def _parse_timestamp(value: Any, field_name: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(
            f"field `{field_name}`: expected an ISO 8601 string, got {type(value).__name__}"
        )
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"field `{field_name}`: {e}") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _optional_timestamp(payload: dict, key: str) -> Optional[datetime]:
    value = payload.get(key)
    if value is None:
        return None
    return _parse_timestamp(value, key)


def _optional_str(payload: dict, key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field `{key}`: expected a string, got {type(value).__name__}")
    return value


def _require_object(payload: Any, what: str) -> dict:
    if not isinstance(payload, dict):
        raise ValueError(f"expected {what} to be a JSON object, got {type(payload).__name__}")
    return payload


def _format_value(value: Any) -> str:
    """Plain strings as-is, everything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# -----------------------------------------------------------------------------
# Bucket — a container that groups events by watcher and host
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Bucket:
    """An ActivityWatch bucket, e.g. ``aw-watcher-window_myhost``."""

    id: str
    client: Optional[str] = None           # Watcher that created the bucket
    bucket_type: Optional[str] = None      # Wire key "type", e.g. "currentwindow"
    hostname: Optional[str] = None
    created: Optional[datetime] = None
    data: Optional[dict[str, Any]] = None  # Free-form bucket metadata
    last_updated: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "Bucket":
        payload = _require_object(payload, "bucket")

        bucket_id = payload.get("id")
        if not isinstance(bucket_id, str):
            raise ValueError("missing or invalid field `id`")

        data = payload.get("data")
        if data is not None:
            data = dict(_require_object(data, "bucket `data`"))

        return cls(
            id=bucket_id,
            client=_optional_str(payload, "client"),
            bucket_type=_optional_str(payload, "type"),
            hostname=_optional_str(payload, "hostname"),
            created=_optional_timestamp(payload, "created"),
            data=data,
            last_updated=_optional_timestamp(payload, "last_updated"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "client": self.client,
            "type": self.bucket_type,
            "hostname": self.hostname,
            "created": _format_timestamp(self.created),
            "data": self.data,
            "last_updated": _format_timestamp(self.last_updated),
        }

    def to_markdown(self) -> str:
        """Format bucket information as a markdown subsection."""
        lines = [f"## {self.id}"]

        if self.client is not None:
            lines.append(f"- **Client**: {self.client}")
        if self.bucket_type is not None:
            lines.append(f"- **Type**: {self.bucket_type}")
        if self.hostname is not None:
            lines.append(f"- **Hostname**: {self.hostname}")
        if self.created is not None:
            lines.append(f"- **Created**: {self.created.strftime(_TIMESTAMP_FORMAT)}")
        if self.last_updated is not None:
            lines.append(f"- **Last Updated**: {self.last_updated.strftime(_TIMESTAMP_FORMAT)}")
        if self.data:
            lines.append(f"- **Metadata**: {_format_value(self.data)}")

        return "\n".join(lines)


# -----------------------------------------------------------------------------
# Event — a timestamped activity record
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Event:
    """One event from a bucket (a window focus, an AFK period, ...)."""

    timestamp: datetime
    duration: float                     # Seconds
    data: dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None            # Assigned by aw-server on insert

    @classmethod
    def from_dict(cls, payload: Any) -> "Event":
        payload = _require_object(payload, "event")

        for key in ("timestamp", "duration", "data"):
            if key not in payload:
                raise ValueError(f"missing field `{key}`")

        duration = payload["duration"]
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ValueError(
                f"field `duration`: expected a number, got {type(duration).__name__}"
            )

        event_id = payload.get("id")
        if event_id is not None and (isinstance(event_id, bool) or not isinstance(event_id, int)):
            raise ValueError(f"field `id`: expected an integer, got {type(event_id).__name__}")

        return cls(
            timestamp=_parse_timestamp(payload["timestamp"], "timestamp"),
            duration=float(duration),
            data=dict(_require_object(payload["data"], "event `data`")),
            id=event_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "duration": self.duration,
            "data": self.data,
        }

    def to_markdown(self) -> str:
        """Format event information as a markdown subsection."""
        lines = [f"### {self.timestamp.strftime(_TIMESTAMP_FORMAT)} ({self.duration:.1f}s)"]
        for key, value in self.data.items():
            lines.append(f"- **{key}**: {_format_value(value)}")
        return "\n".join(lines)
