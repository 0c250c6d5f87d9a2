# src/dbviewer/database/resolver.py
"""Table identifier case correction for PostgreSQL queries.

PostgreSQL folds unquoted identifiers to lower case, so a table created as
``"Users"`` cannot be reached with ``SELECT * FROM users``. The resolver
finds the stored spelling of every table referenced after FROM, JOIN,
UPDATE or INTO and rewrites the query to quote it.

This is a regular-expression heuristic, not a SQL parser: identifiers in
string literals or comments that follow one of the keywords are rewritten
too. Callers treat the rewrite as best effort and fall back to the original
query when anything goes wrong.
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from dbviewer.logging import get_logger

TABLE_REFERENCE_PATTERN = re.compile(
    r"\b(?:FROM|JOIN|UPDATE|INTO)\s+([a-zA-Z_][a-zA-Z0-9_]*)",
    re.IGNORECASE,
)

EXACT_TABLE_LOOKUP = """
    SELECT c.relname
    FROM pg_class c
    JOIN pg_namespace n ON n.oid = c.relnamespace
    WHERE n.nspname = 'public'
        AND c.relkind = 'r'
        AND c.relname = $1
    LIMIT 1
"""

CASE_INSENSITIVE_TABLE_LOOKUP = """
    SELECT c.relname
    FROM pg_class c
    JOIN pg_namespace n ON n.oid = c.relnamespace
    WHERE n.nspname = 'public'
        AND c.relkind = 'r'
        AND LOWER(c.relname) = LOWER($1)
    ORDER BY c.relname
    LIMIT 1
"""


def extract_table_candidates(query: str) -> List[str]:
    """Collect table names referenced after FROM, JOIN, UPDATE or INTO.

    Returns:
        Unique names in order of first appearance, spelled as written
    """
    candidates: List[str] = []
    for match in TABLE_REFERENCE_PATTERN.finditer(query):
        name = match.group(1)
        if name not in candidates:
            candidates.append(name)
    return candidates


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def rewrite_query(query: str, resolved: Dict[str, str]) -> str:
    """Quote every resolved table reference with its stored spelling.

    Args:
        query: Original SQL text
        resolved: Mapping of name as written to stored identifier

    Returns:
        Rewritten SQL text; unchanged when ``resolved`` is empty
    """
    fixed = query
    for written, actual in resolved.items():
        pattern = re.compile(
            r"\b(FROM|JOIN|UPDATE|INTO)(\s+)" + re.escape(written) + r"\b",
            re.IGNORECASE,
        )
        replacement = quote_identifier(actual)
        fixed = pattern.sub(lambda m: m.group(1) + m.group(2) + replacement, fixed)
    return fixed


class IdentifierResolver:
    """Resolve table names against the ``public`` schema catalog.

    Args:
        connection: An asyncpg connection (anything with ``fetchval``)
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self.logger = get_logger("database.resolver")

    async def resolve(self, name: str) -> Optional[str]:
        """Find the stored identifier for ``name``.

        Tries an exact match first, then a case-insensitive one.

        Returns:
            Stored identifier, or None if no table matches
        """
        actual = await self._connection.fetchval(EXACT_TABLE_LOOKUP, name)
        if actual is None:
            actual = await self._connection.fetchval(CASE_INSENSITIVE_TABLE_LOOKUP, name)
        return actual

    async def resolve_all(self, names: Iterable[str]) -> Dict[str, str]:
        """Resolve several names, skipping the ones without a match."""
        resolved: Dict[str, str] = {}
        for name in names:
            actual = await self.resolve(name)
            if actual is None:
                self.logger.debug("Table reference left unresolved", table=name)
                continue
            resolved[name] = actual
        return resolved

    async def fix_query(self, query: str) -> str:
        """Return ``query`` with its table references case-corrected."""
        resolved = await self.resolve_all(extract_table_candidates(query))
        return rewrite_query(query, resolved)
