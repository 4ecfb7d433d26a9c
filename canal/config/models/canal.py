"""Root configuration model for the binlog client."""

import re
import ssl
from datetime import timedelta, tzinfo
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
)

from canal.config.models.dump import DumpConfig
from canal.constants import MAX_DURATION_NS, MAX_SERVER_ID
from canal.filter import TableFilter

# Go-style durations such as "1h30m", "500ms", "1.5s"
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_FULL = re.compile(r"(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|ms|s|m|h))+")
_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}


def nanoseconds_to_timedelta(nanoseconds: float) -> timedelta:
    """Convert a nanosecond count to a timedelta (microsecond resolution).

    Raises:
        ValueError: If the value does not fit a signed 64-bit nanosecond count
    """
    if abs(nanoseconds) > MAX_DURATION_NS:
        raise ValueError(f"duration out of range: {nanoseconds}ns")
    return timedelta(microseconds=nanoseconds / 1000)


def parse_duration(value: str) -> timedelta | None:
    """Parse a Go-style duration string.

    Returns:
        The parsed timedelta, or None when the string is not in Go form

    Raises:
        ValueError: If the duration does not fit a signed 64-bit nanosecond count
    """
    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not _DURATION_FULL.fullmatch(text):
        return None
    nanoseconds = sum(
        float(amount) * _UNIT_NANOSECONDS[unit] for amount, unit in _DURATION_PART.findall(text)
    )
    return nanoseconds_to_timedelta(sign * nanoseconds)


class CanalConfig(BaseModel):
    """Runtime configuration of a replication client.

    Missing keys keep the zero values declared here (empty string, zero,
    False, empty list). The hard-coded quick-start values live in
    canal.config.defaults instead. Scalars are strict: a TOML value of the
    wrong type is rejected rather than coerced.

    ``tls_config`` and ``timestamp_string_location`` are opaque handles
    owned by the caller. They are stored by reference, never read from a
    document and never serialised. Deep copies of a config holding an
    SSLContext are not supported.
    """

    model_config = ConfigDict(
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    OPAQUE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"tls_config", "timestamp_string_location"}
    )

    tls_config: ssl.SSLContext | None = Field(default=None, exclude=True, repr=False)
    timestamp_string_location: tzinfo | None = Field(default=None, exclude=True)

    # Connection identity
    user: StrictStr = Field(default="", description="Replication user")
    password: StrictStr = Field(default="", repr=False, description="Replication password")
    charset: StrictStr = Field(default="", description="Connection charset")
    flavor: StrictStr = Field(default="", description="Server flavor: mysql or mariadb")
    addr: StrictStr = Field(default="", description="Server address as host:port")

    # Table filtering, matched against "db.table"
    include_table_regex: list[StrictStr] = Field(
        default_factory=list,
        description="Only tables matching one of these are processed (empty = all)",
    )
    exclude_table_regex: list[StrictStr] = Field(
        default_factory=list,
        description="Tables matching any of these are skipped",
    )

    dump: DumpConfig = Field(default_factory=DumpConfig, description="mysqldump settings")

    # Timing: integers are nanoseconds, strings are Go or ISO-8601 durations
    read_timeout: timedelta = Field(default=timedelta(0), description="Socket read timeout")
    heartbeat_period: timedelta = Field(
        default=timedelta(0), description="Master heartbeat period"
    )
    max_reconnect_attempts: StrictInt = Field(
        default=0,
        description="Reconnect attempts before giving up (<= 0 = retry forever)",
    )
    server_id: StrictInt = Field(
        default=0,
        ge=0,
        le=MAX_SERVER_ID,
        description="Replica server id, unique among clients of the same source",
    )

    # Feature flags
    parse_time: StrictBool = Field(default=False, description="Decode DATETIME into datetime")
    semi_sync_enabled: StrictBool = Field(
        default=False, description="Enable semi-sync replication"
    )
    discard_no_meta_row_event: StrictBool = Field(
        default=False, description="Drop row events without table metadata"
    )
    disable_retry_sync: StrictBool = Field(
        default=False, description="Do not re-sync a broken connection"
    )
    use_decimal: StrictBool = Field(default=False, description="Decode DECIMAL into Decimal")

    @field_validator("read_timeout", "heartbeat_period", mode="before")
    @classmethod
    def parse_go_duration(cls, value: Any) -> Any:
        if isinstance(value, (bool, float)):
            raise ValueError("duration must be an integer of nanoseconds or a duration string")
        if isinstance(value, int):
            return nanoseconds_to_timedelta(value)
        if isinstance(value, str):
            parsed = parse_duration(value)
            if parsed is not None:
                return parsed
        return value

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "CanalConfig":
        """Build a config from a decoded TOML document.

        Keys naming the opaque handles are dropped and only TOML keys
        (aliases) are bound, so ``[dump] databases`` is ignored like any
        other unknown key.

        Raises:
            pydantic.ValidationError: If a value has the wrong type
        """
        data = {k: v for k, v in document.items() if k not in cls.OPAQUE_FIELDS}
        return cls.model_validate(data, by_alias=True, by_name=False)

    def table_filter(self) -> TableFilter:
        """Compile the include/exclude regex lists into a TableFilter.

        Raises:
            InvalidTablePatternError: If a pattern is not a valid regex
        """
        return TableFilter.from_patterns(self.include_table_regex, self.exclude_table_regex)

    def is_table_eligible(self, database: str, table: str) -> bool:
        return self.table_filter().is_table_eligible(database, table)
