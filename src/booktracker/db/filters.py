# ABOUTME: Compiles token FilterExpressions into SQLite WHERE clauses for store scans.
# ABOUTME: Uses instr() for case-sensitive substring tests and json_each() for tag sets.

from booktracker.metadata.matcher import Contains, FilterExpression

TEXT = "text"
JSON_SET = "json_set"


def _compile_predicate(pred: Contains, table: str, columns: dict[str, str]) -> str:
    kind = columns.get(pred.field)
    if kind is None:
        raise ValueError(f"Field {pred.field!r} is not searchable on {table}")
    column = f"{table}.{pred.field}"
    if kind == JSON_SET:
        return f"EXISTS (SELECT 1 FROM json_each({column}) WHERE instr(json_each.value, ?) > 0)"
    return f"instr({column}, ?) > 0"


def compile_filter(
    expression: FilterExpression, table: str, columns: dict[str, str]
) -> tuple[str, list[str]]:
    """Translate ``expression`` into a WHERE clause and its bound parameters.

    ``columns`` whitelists the searchable columns of ``table`` and says how
    each is stored. An empty expression compiles to an always-true clause.

    Returns:
        A (sql, params) pair ready to append after ``WHERE``.
    """
    if expression.is_empty:
        return "1", []

    clauses: list[str] = []
    params: list[str] = []
    for clause in expression.clauses:
        parts = [_compile_predicate(pred, table, columns) for pred in clause]
        params.extend(pred.value for pred in clause)
        clauses.append("(" + " OR ".join(parts) + ")")
    return " AND ".join(clauses), params
