"""Include/exclude table filtering over qualified ``database.table`` names.

Patterns are regular expressions matched with ``re.search``, so they are
not implicitly anchored. A table is eligible when it matches at least one
include pattern (or there are none) and matches no exclude pattern.

Example:
    >>> table_filter = TableFilter.from_patterns([r".*\\.canal"], [r"mysql\\..*"])
    >>> table_filter.is_table_eligible("app", "canal")
    True
    >>> table_filter.is_table_eligible("mysql", "canal")
    False
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from canal.config.errors import InvalidTablePatternError


def qualified_table_name(database: str, table: str) -> str:
    """Build the ``database.table`` string that patterns are matched against."""
    return f"{database}.{table}"


def _compile(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise InvalidTablePatternError(
                f"Invalid table pattern {pattern!r}: {e}", pattern=pattern
            ) from e
    return tuple(compiled)


@dataclass(frozen=True)
class TableFilter:
    """Compiled include/exclude rule set.

    Immutable and side-effect free, so one instance can be shared by any
    number of replication workers.
    """

    include: tuple[re.Pattern[str], ...] = ()
    exclude: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_patterns(
        cls,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
    ) -> "TableFilter":
        """Compile raw regex strings into a filter.

        Args:
            include: Patterns a table must match (empty = match everything)
            exclude: Patterns a table must not match

        Returns:
            TableFilter instance

        Raises:
            InvalidTablePatternError: If a pattern is not a valid regex
        """
        return cls(include=_compile(include), exclude=_compile(exclude))

    @property
    def include_patterns(self) -> list[str]:
        return [p.pattern for p in self.include]

    @property
    def exclude_patterns(self) -> list[str]:
        return [p.pattern for p in self.exclude]

    def matches(self, qualified_name: str) -> bool:
        """Check whether a ``database.table`` name is eligible for processing."""
        # any() stops at the first hit in each list
        if self.include and not any(p.search(qualified_name) for p in self.include):
            return False
        if self.exclude and any(p.search(qualified_name) for p in self.exclude):
            return False
        return True

    def is_table_eligible(self, database: str, table: str) -> bool:
        return self.matches(qualified_table_name(database, table))

    def filter_tables(self, tables: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
        """Keep the eligible (database, table) pairs, preserving order."""
        return [(db, tbl) for db, tbl in tables if self.is_table_eligible(db, tbl)]
