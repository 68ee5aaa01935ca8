"""
Parameterized SQL fragment builders.

- SqlParams: running positional parameter list ($1, $2, ...)
- sql_for_partial_update: sparse update payload -> SET clause
- company_filter_clause / job_filter_clause: search criteria -> WHERE clause

Fragments reference values only through placeholders; caller input never
lands in the SQL text.
"""

from collections.abc import Mapping
from typing import Any

from jobly.errors import BadRequestError


class SqlParams:
    """Owns the ordered values of one statement and hands out their placeholders."""

    def __init__(self, values=None):
        self.values: list[Any] = list(values or [])

    def add(self, value: Any) -> str:
        """Append a value and return the placeholder that references it."""
        self.values.append(value)
        return f"${len(self.values)}"

    def __len__(self) -> int:
        return len(self.values)


def sql_for_partial_update(
    data: Mapping[str, Any], js_to_sql: Mapping[str, str]
) -> tuple[str, list[Any]]:
    """
    Build the SET clause of a partial update.

    Args:
        data: Fields to change, e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: Field name -> column name, only where they differ,
            e.g. {"firstName": "first_name"}

    Returns:
        (set_cols, values), e.g.
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If data is empty
    """
    if not data:
        raise BadRequestError("No data")

    params = SqlParams()
    cols = [f'"{js_to_sql.get(field, field)}"={params.add(value)}' for field, value in data.items()]

    return ", ".join(cols), params.values


def company_filter_clause(
    filters: Mapping[str, Any] | None, params: SqlParams | None = None
) -> tuple[str, list[Any]]:
    """
    Build the WHERE predicates for a company search.

    Recognized filters, applied in this order:
    - minEmployees: num_employees >= value
    - maxEmployees: num_employees <= value
    - name: case-insensitive substring match

    Returns:
        (clause, values); clause is "" when no filter is active
    """
    params = params if params is not None else SqlParams()
    filters = filters or {}
    where = []

    if filters.get("minEmployees") is not None:
        where.append(f"num_employees >= {params.add(filters['minEmployees'])}")

    if filters.get("maxEmployees") is not None:
        where.append(f"num_employees <= {params.add(filters['maxEmployees'])}")

    if filters.get("name"):
        where.append(f"lower(name) LIKE lower({params.add(_contains(filters['name']))})")

    return " AND ".join(where), params.values


def job_filter_clause(
    filters: Mapping[str, Any] | None, params: SqlParams | None = None
) -> tuple[str, list[Any]]:
    """
    Build the WHERE predicates for a job search.

    Recognized filters, applied in this order:
    - minSalary: salary >= value
    - hasEquity: when true, equity > 0 (no parameter)
    - title: case-insensitive substring match

    Returns:
        (clause, values); clause is "" when no filter is active
    """
    params = params if params is not None else SqlParams()
    filters = filters or {}
    where = []

    if filters.get("minSalary") is not None:
        where.append(f"salary >= {params.add(filters['minSalary'])}")

    if filters.get("hasEquity") is True:
        where.append("equity > 0")

    if filters.get("title"):
        where.append(f"lower(title) LIKE lower({params.add(_contains(filters['title']))})")

    return " AND ".join(where), params.values


def _contains(term: str) -> str:
    """LIKE pattern for a substring match; callers lower() both sides in SQL."""
    return f"%{term}%"
