"""Test helper functions."""

import copy
import json
import math
import re
from email.message import Message
from io import BytesIO
from types import SimpleNamespace
from typing import Any, Dict, List, Optional


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    return isinstance(value, str) and value.lower() == "nan"


def _sort_key(value: Any) -> float:
    # Postgres orders numeric NaN above every other number
    if _is_nan(value):
        return math.inf
    return value


def _compare(op: str, actual: Any, expected: Any) -> bool:
    """Evaluate a PostgREST operator the way Postgres would for one row."""
    if op == "is":
        return actual is None if str(expected).lower() == "null" else actual is expected
    if actual is None:
        return False
    if _is_nan(expected):
        if op == "eq":
            return _is_nan(actual)
        if op == "neq":
            return not _is_nan(actual)
    if op == "eq":
        return actual == expected
    if op == "neq":
        return actual != expected
    if op == "ilike":
        regex = re.escape(str(expected)).replace("%", ".*").replace("_", ".")
        return re.fullmatch(regex, str(actual), flags=re.IGNORECASE | re.DOTALL) is not None
    left, right = _sort_key(actual), _sort_key(float(expected))
    if op == "gte":
        return left >= right
    if op == "lte":
        return left <= right
    raise ValueError(f"unsupported operator: {op}")


class InMemoryQuery:
    """PostgREST-like query builder evaluated over in-memory rows.

    Records every builder call in ``calls`` so tests can also assert on the
    query shape.
    """

    def __init__(self, table_name: str, rows: List[Dict[str, Any]], error: Optional[Exception] = None):
        self.table_name = table_name
        self.rows = rows
        self.error = error
        self.calls: List[tuple] = []
        self.columns = "*"
        self._negate = False
        self._predicates = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def select(self, columns: str = "*"):
        self.calls.append(("select", columns))
        self.columns = columns
        return self

    @property
    def not_(self):
        self._negate = True
        return self

    def _filter(self, op: str, column: str, value: Any):
        negate, self._negate = self._negate, False
        self.calls.append((f"not.{op}" if negate else op, column, value))

        def predicate(row, op=op, column=column, value=value, negate=negate):
            return _compare(op, row.get(column), value) != negate

        self._predicates.append(predicate)
        return self

    def eq(self, column: str, value: Any):
        return self._filter("eq", column, value)

    def neq(self, column: str, value: Any):
        return self._filter("neq", column, value)

    def gte(self, column: str, value: Any):
        return self._filter("gte", column, value)

    def lte(self, column: str, value: Any):
        return self._filter("lte", column, value)

    def ilike(self, column: str, pattern: str):
        return self._filter("ilike", column, pattern)

    def is_(self, column: str, value: Any):
        return self._filter("is", column, value)

    def or_(self, filters: str):
        self.calls.append(("or", filters))
        conditions = []
        for part in filters.split(","):
            column, op, value = part.split(".", 2)
            conditions.append((op, column, value))

        def predicate(row, conditions=conditions):
            return any(_compare(op, row.get(column), value) for op, column, value in conditions)

        self._predicates.append(predicate)
        return self

    def order(self, column: str, desc: bool = False):
        self.calls.append(("order", column, desc))
        self._order = (column, desc)
        return self

    def limit(self, size: int):
        self.calls.append(("limit", size))
        self._limit = size
        return self

    def execute(self):
        self.calls.append(("execute",))
        if self.error is not None:
            raise self.error

        # Embedded "alias:table!inner(...)" resources drop rows without a match
        inner_aliases = re.findall(r"(\w+):\w+!inner", self.columns)
        rows = [
            row for row in self.rows
            if all(row.get(alias) is not None for alias in inner_aliases)
        ]
        rows = [row for row in rows if all(predicate(row) for predicate in self._predicates)]

        if self._order is not None:
            column, desc = self._order
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: _sort_key(row[column]), reverse=desc)
            rows = missing + present if desc else present + missing

        if self._limit is not None:
            rows = rows[:self._limit]

        return SimpleNamespace(data=copy.deepcopy(rows))

    def called(self, name: str) -> List[tuple]:
        """All recorded calls of one builder method."""
        return [call for call in self.calls if call[0] == name]


class InMemoryClient:
    """Stand-in for ``supabase.Client`` backed by dict rows per table."""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]], error: Optional[Exception] = None):
        self.tables = tables
        self.error = error
        self.queries: List[InMemoryQuery] = []

    def table(self, name: str) -> InMemoryQuery:
        query = InMemoryQuery(name, self.tables.get(name, []), error=self.error)
        self.queries.append(query)
        return query

    @property
    def last_query(self) -> InMemoryQuery:
        return self.queries[-1]


def call_endpoint(handler_cls, path: str, headers: Optional[Dict[str, str]] = None) -> SimpleNamespace:
    """Drive a BaseHTTPRequestHandler GET without a socket and parse the response."""
    h = handler_cls.__new__(handler_cls)
    h.command = "GET"
    h.path = path
    h.request_version = "HTTP/1.1"
    h.requestline = f"GET {path} HTTP/1.1"
    h.client_address = ("127.0.0.1", 8000)
    h.headers = Message()
    for name, value in (headers or {}).items():
        h.headers[name] = value
    h.wfile = BytesIO()

    h.do_GET()

    raw = h.wfile.getvalue()
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("latin-1").split("\r\n")
    status = int(lines[0].split(" ")[1])
    response_headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        response_headers[name.strip().lower()] = value.strip()

    return SimpleNamespace(
        status=status,
        headers=response_headers,
        body=json.loads(body.decode("utf-8")) if body else None,
    )
