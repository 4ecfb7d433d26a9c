"""Unit tests for configuration pydantic models."""

import ssl
from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from canal.config.errors import InvalidDumpScopeError, InvalidTablePatternError
from canal.config.models import CanalConfig, DumpConfig, DumpTargets, parse_duration


class TestDumpConfig:
    """Tests for DumpConfig model."""

    def test_zero_values(self) -> None:
        """DumpConfig defaults to structural zero values."""
        dump = DumpConfig()
        assert dump.execution_path == ""
        assert dump.tables == []
        assert dump.databases == []
        assert dump.max_allowed_packet_mb == 0
        assert dump.discard_err is False
        assert dump.skip_master_data is False

    def test_populate_by_alias_and_name(self) -> None:
        """Fields accept both the TOML key and the field name."""
        by_alias = DumpConfig.model_validate({"mysqldump": "md", "dbs": ["a"]})
        by_name = DumpConfig(execution_path="md", databases=["a"])
        assert by_alias == by_name

    def test_enabled(self) -> None:
        """An empty execution path disables dumping."""
        assert DumpConfig().enabled is False
        assert DumpConfig(execution_path="mysqldump").enabled is True

    def test_tables_override_databases(self) -> None:
        """Non-empty tables win over databases."""
        dump = DumpConfig(table_db="db1", tables=["t1"], databases=["db2"])

        targets = dump.resolve_targets()

        assert targets == DumpTargets(database="db1", tables=["t1"])
        assert targets.databases == []
        assert targets.is_table_scoped is True

    def test_databases_used_without_tables(self) -> None:
        """Databases are dumped wholesale when no tables are listed."""
        targets = DumpConfig(table_db="ignored", databases=["db2", "db3"]).resolve_targets()

        assert targets == DumpTargets(databases=["db2", "db3"])
        assert targets.is_table_scoped is False

    def test_resolve_targets_copies_lists(self) -> None:
        """Resolved targets do not alias the config lists."""
        dump = DumpConfig(tables=["t1"])
        dump.resolve_targets().tables.append("t2")
        assert dump.tables == ["t1"]

    def test_where_is_verbatim(self) -> None:
        """The where clause is stored unchanged."""
        assert DumpConfig(where="id > 10 AND name = 'x'").where == "id > 10 AND name = 'x'"

    def test_ignored_table_pairs(self) -> None:
        """ignore_tables entries split on the first dot."""
        dump = DumpConfig(ignore_tables=["app.audit", "logs.events.v2"])
        assert dump.ignored_table_pairs() == [("app", "audit"), ("logs", "events.v2")]

    @pytest.mark.parametrize("entry", ["audit", ".audit", "app."])
    def test_ignored_table_pairs_rejects_bad_entries(self, entry: str) -> None:
        """Entries without both parts raise InvalidDumpScopeError."""
        with pytest.raises(InvalidDumpScopeError):
            DumpConfig(ignore_tables=[entry]).ignored_table_pairs()


class TestParseDuration:
    """Tests for Go-style duration parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("10s", timedelta(seconds=10)),
            ("1m30s", timedelta(seconds=90)),
            ("2h", timedelta(hours=2)),
            ("500ms", timedelta(milliseconds=500)),
            ("1.5s", timedelta(seconds=1.5)),
            ("-3s", timedelta(seconds=-3)),
            ("0", timedelta(0)),
        ],
    )
    def test_parses_go_durations(self, text: str, expected: timedelta) -> None:
        """Go duration strings are converted to timedelta."""
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "ten seconds", "10", "PT10S", "5d"])
    def test_rejects_other_strings(self, text: str) -> None:
        """Non-Go strings return None."""
        assert parse_duration(text) is None

    @pytest.mark.parametrize("text", ["99999999999999999h", "2562048h", "9223372037s"])
    def test_out_of_range_raises_value_error(self, text: str) -> None:
        """Durations beyond a signed 64-bit nanosecond count are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            parse_duration(text)

    def test_largest_duration_accepted(self) -> None:
        """The upper bound itself still parses."""
        assert parse_duration("2562047h") == timedelta(hours=2562047)


class TestCanalConfig:
    """Tests for CanalConfig model."""

    def test_zero_values(self) -> None:
        """All fields default to structural zero values."""
        config = CanalConfig()
        assert config.user == ""
        assert config.password == ""
        assert config.addr == ""
        assert config.server_id == 0
        assert config.max_reconnect_attempts == 0
        assert config.read_timeout == timedelta(0)
        assert config.heartbeat_period == timedelta(0)
        assert config.parse_time is False
        assert config.use_decimal is False
        assert config.tls_config is None
        assert config.timestamp_string_location is None

    def test_duration_formats(self) -> None:
        """Durations accept nanosecond integers, Go strings and ISO-8601."""
        config = CanalConfig.model_validate(
            {"read_timeout": "PT10S", "heartbeat_period": 2_500_000_000}
        )
        assert config.read_timeout == timedelta(seconds=10)
        assert config.heartbeat_period == timedelta(seconds=2.5)
        assert CanalConfig(read_timeout=timedelta(seconds=3)).read_timeout == timedelta(seconds=3)
        assert CanalConfig(read_timeout="250ms").read_timeout == timedelta(milliseconds=250)

    def test_invalid_duration_raises(self) -> None:
        """Unparseable durations fail validation."""
        with pytest.raises(ValidationError):
            CanalConfig.model_validate({"read_timeout": "soon"})

    def test_server_id_bounds(self) -> None:
        """server_id is an unsigned 32-bit integer."""
        assert CanalConfig(server_id=2**32 - 1).server_id == 2**32 - 1
        with pytest.raises(ValidationError):
            CanalConfig(server_id=2**32)
        with pytest.raises(ValidationError):
            CanalConfig(server_id=-1)

    def test_opaque_handles_stored_by_reference(self) -> None:
        """The TLS context and timezone are kept as the same objects."""
        context = ssl.create_default_context()
        location = timezone(timedelta(hours=8))

        config = CanalConfig(tls_config=context, timestamp_string_location=location)

        assert config.tls_config is context
        assert config.timestamp_string_location is location

    def test_opaque_handles_not_serialised(self) -> None:
        """Opaque handles are excluded from dumps."""
        config = CanalConfig(
            tls_config=ssl.create_default_context(),
            timestamp_string_location=timezone.utc,
        )
        dumped = config.model_dump()
        assert "tls_config" not in dumped
        assert "timestamp_string_location" not in dumped

    def test_tls_config_type_checked(self) -> None:
        """Only an SSLContext is accepted as the TLS handle."""
        with pytest.raises(ValidationError):
            CanalConfig(tls_config="yes")

    def test_from_document_drops_opaque_keys(self) -> None:
        """from_document never binds opaque handles."""
        config = CanalConfig.from_document({"addr": "h:1", "tls_config": object()})
        assert config.addr == "h:1"
        assert config.tls_config is None

    def test_password_hidden_from_repr(self) -> None:
        """The password does not appear in repr."""
        config = CanalConfig(user="root", password="hunter2")
        assert "hunter2" not in repr(config)

    def test_table_filter(self) -> None:
        """table_filter compiles the regex lists."""
        config = CanalConfig(
            include_table_regex=[r".*\.canal"],
            exclude_table_regex=[r"mysql\..*"],
        )

        table_filter = config.table_filter()

        assert table_filter.include_patterns == [r".*\.canal"]
        assert table_filter.exclude_patterns == [r"mysql\..*"]
        assert config.is_table_eligible("app", "canal") is True
        assert config.is_table_eligible("mysql", "canal") is False

    def test_table_filter_invalid_pattern(self) -> None:
        """A bad regex surfaces when the filter is compiled."""
        config = CanalConfig(include_table_regex=["app.(orders"])
        with pytest.raises(InvalidTablePatternError):
            config.table_filter()
