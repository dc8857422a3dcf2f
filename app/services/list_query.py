from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.schemas.common import Page, Pagination, QueryInfo, Sort
from app.schemas.enums import SortDirection

OPS = {"=", "!=", ">", "<", ">=", "<=", "~", "flag"}


@dataclass(frozen=True)
class Clause:
    column: Any
    op: str
    value: Any

    def to_predicate(self):
        col, value = self.column, self.value
        if self.op == "=":
            return col == value
        if self.op == "!=":
            return col != value
        if self.op == ">":
            return col > value
        if self.op == "<":
            return col < value
        if self.op == ">=":
            return col >= value
        if self.op == "<=":
            return col <= value
        if self.op == "~":
            return col.ilike(f"%{value}%")
        if self.op == "flag":
            # column holds a boolean SQL expression; False selects its negation
            return col if value else ~col
        raise ValueError(f"unsupported filter operator {self.op!r}")


@dataclass
class FilterSet:
    """Ordered collection of optional predicates.

    Clauses whose value is None are dropped, so an absent filter field never
    narrows the result.
    """

    clauses: list[Clause] = field(default_factory=list)

    def add(self, column, op: str, value) -> "FilterSet":
        if op not in OPS:
            raise ValueError(f"unsupported filter operator {op!r}")
        if value is None:
            return self
        if isinstance(value, Enum):
            value = value.value
        self.clauses.append(Clause(column, op, value))
        return self

    def when(self, value, build) -> "FilterSet":
        """Add ``build(value)`` as a boolean predicate when a value is given."""
        if value is None:
            return self
        if isinstance(value, Enum):
            value = value.value
        self.clauses.append(Clause(build(value), "flag", True))
        return self

    def predicates(self) -> list:
        return [c.to_predicate() for c in self.clauses]

    def apply(self, q: Query) -> Query:
        for predicate in self.predicates():
            q = q.filter(predicate)
        return q

    def __len__(self) -> int:
        return len(self.clauses)


@dataclass(frozen=True)
class SortSpec:
    """Allow-list of sortable keys for one resource."""

    allowed: dict[str, Any]
    default: Any

    def resolve(self, sort_by: str | None):
        return self.allowed.get(sort_by or "", self.default)

    def order_by(self, sort: Sort) -> list:
        column = self.resolve(sort.sort_by)
        direction = desc if sort.sort_direction == SortDirection.DESC else asc
        clauses = [direction(column)]
        if column is not self.default:
            clauses.append(asc(self.default))
        return clauses


def paginate(
    q: Query,
    filters: FilterSet,
    sort_spec: SortSpec,
    sort: Sort,
    pagination: Pagination,
) -> Page:
    """Filter, count, sort and slice one query.

    The count and the page are taken from the same filtered query object, so
    both always see an identical predicate set.
    """
    return _page(filters.apply(q), sort_spec.order_by(sort), pagination)


def paginate_query(q: Query, pagination: Pagination, *order_by) -> Page:
    """Pagination for nested sub-lists that have no filters or sorting.

    Rows are ordered by every column given, in order; the last one must be
    unique within the list so pages never overlap.
    """
    if not order_by:
        raise ValueError("paginate_query needs at least one order_by column")
    return _page(q, [asc(column) for column in order_by], pagination)


def _page(filtered: Query, order_by: list, pagination: Pagination) -> Page:
    num_items = filtered.order_by(None).count()
    rows = filtered.order_by(*order_by).offset(pagination.offset).limit(pagination.limit).all()
    return Page(
        items=rows,
        pagination=pagination,
        query_info=QueryInfo.build(num_items, pagination.page_size),
    )
