"""mysqldump sub-configuration models.

Describes how the external dump tool is invoked to take the initial
snapshot. Keys live under the ``[dump]`` table of the configuration file.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from canal.config.errors import InvalidDumpScopeError


@dataclass(frozen=True)
class DumpTargets:
    """Effective dump scope after applying the tables-over-databases rule."""

    database: str = ""
    tables: list[str] = field(default_factory=list)
    databases: list[str] = field(default_factory=list)

    @property
    def is_table_scoped(self) -> bool:
        return bool(self.tables)


class DumpConfig(BaseModel):
    """mysqldump invocation settings.

    ``tables`` and ``databases`` are mutually exclusive in effect: when
    ``tables`` is non-empty it overrides ``databases`` and names tables of
    ``table_db``. Use resolve_targets() instead of reading both lists.
    """

    model_config = ConfigDict(extra="ignore", validate_by_name=True, validate_by_alias=True)

    execution_path: StrictStr = Field(
        default="",
        alias="mysqldump",
        description="mysqldump binary, e.g. mysqldump or /usr/bin/mysqldump (empty = no dump)",
    )
    table_db: StrictStr = Field(default="", description="Database that `tables` belongs to")
    protocol: StrictStr = Field(default="", description="Connection protocol override")
    where: StrictStr = Field(
        default="",
        description="Row filter passed verbatim to --where (quotes are mandatory)",
    )
    tables: list[StrictStr] = Field(default_factory=list, description="Tables of table_db to dump")
    ignore_tables: list[StrictStr] = Field(
        default_factory=list,
        description="Tables to skip, in db.table form",
    )
    databases: list[StrictStr] = Field(
        default_factory=list,
        alias="dbs",
        description="Databases to dump wholesale",
    )
    extra_options: list[StrictStr] = Field(
        default_factory=list,
        description="Extra flags passed through to mysqldump",
    )
    max_allowed_packet_mb: StrictInt = Field(
        default=0,
        description="--max_allowed_packet in MB (0 = tool default)",
    )
    discard_err: StrictBool = Field(default=False, description="Discard mysqldump stderr")
    skip_master_data: StrictBool = Field(
        default=False,
        description="Skip --master-data when FLUSH TABLES WITH READ LOCK is not permitted",
    )

    @property
    def enabled(self) -> bool:
        """Whether an initial dump should run at all."""
        return self.execution_path != ""

    def resolve_targets(self) -> DumpTargets:
        """Resolve what to dump.

        Returns:
            DumpTargets naming either tables of table_db or whole databases,
            never both.
        """
        if self.tables:
            return DumpTargets(database=self.table_db, tables=list(self.tables))
        return DumpTargets(databases=list(self.databases))

    def ignored_table_pairs(self) -> list[tuple[str, str]]:
        """Split ignore_tables into (database, table) pairs.

        Raises:
            InvalidDumpScopeError: If an entry has no database part
        """
        pairs: list[tuple[str, str]] = []
        for entry in self.ignore_tables:
            database, sep, table = entry.partition(".")
            if not sep or not database or not table:
                raise InvalidDumpScopeError(
                    f"ignore_tables entry must be in db.table form: {entry!r}"
                )
            pairs.append((database, table))
        return pairs
