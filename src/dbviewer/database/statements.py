# src/dbviewer/database/statements.py
"""Splitting of SQL scripts into individual statements.

Statement boundaries are found with SQLite's own tokenizer
(``sqlite3.complete_statement``), so semicolons inside string literals,
quoted identifiers, comments and trigger bodies do not end a statement.
PostgreSQL dollar-quoted bodies are not understood and may be split.
"""

import re
import sqlite3
from typing import List

_COMMENTS = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)


def split_statements(script: str) -> List[str]:
    """Statements of ``script`` in order, without empty or comment-only ones.

    Text after the last semicolon counts as a final statement.
    """
    statements: List[str] = []
    pieces = script.split(";")
    buffer = ""
    for position, piece in enumerate(pieces):
        buffer += piece
        if position == len(pieces) - 1:
            break
        buffer += ";"
        if sqlite3.complete_statement(buffer):
            _append(statements, buffer)
            buffer = ""
    _append(statements, buffer)
    return statements


def _append(statements: List[str], text: str) -> None:
    text = text.strip()
    if _COMMENTS.sub("", text).strip(" \t\r\n;"):
        statements.append(text)
