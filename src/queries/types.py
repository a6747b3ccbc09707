"""Typed contracts for filtered query construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, List, Mapping, Tuple

from utils.query_builder import FilterOperator

FilterCriteria = Mapping[str, Any]


class ClauseGroup(Enum):
    """Whether a clause is evaluated before or after row grouping."""

    WHERE = "WHERE"
    HAVING = "HAVING"


@dataclass(frozen=True)
class FilterSpec:
    """How one recognized filter key turns into a clause."""

    key: str
    column: str
    operator: FilterOperator
    group: ClauseGroup
    coerce: Callable[[str, Any], Any]
    is_provided: Callable[[Any], bool]


@dataclass(frozen=True)
class Clause:
    """A compiled `<expression> <operator> <placeholder>` fragment."""

    key: str
    text: str
    group: ClauseGroup
    index: int

    @property
    def placeholder(self) -> str:
        return self.text.rsplit(" ", 1)[-1]


@dataclass(frozen=True)
class BuiltQuery:
    """Statement text plus the parameters its placeholders refer to.

    Unpacks as ``sql, params = built``.
    """

    sql: str
    params: List[Any]
    clauses: Tuple[Clause, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.params

    def clauses_in(self, group: ClauseGroup) -> List[Clause]:
        return [clause for clause in self.clauses if clause.group is group]
