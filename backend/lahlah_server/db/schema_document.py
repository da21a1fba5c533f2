"""Schema Document — the DDL artifact split into database and structural statements.

Invariants:
    - database_statements holds only CREATE DATABASE/SCHEMA and USE statements
    - structural_statements holds everything else, in document order
    - Statements carry no trailing ';' and no comments
    - The split happens once, at parse time; bootstrap never edits SQL text
"""

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

_DATABASE_STATEMENT = re.compile(r"^(CREATE\s+(DATABASE|SCHEMA)\b|USE\s)", re.IGNORECASE)
_CREATE_TABLE = re.compile(
    r"^CREATE\s+(?:TEMPORARY\s+)?TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
    r"(?:[`\"]?[\w$]+[`\"]?\.)?[`\"]?([\w$]+)[`\"]?",
    re.IGNORECASE,
)


def split_statements(sql: str) -> list[str]:
    """Split SQL text on top-level ';', dropping comments and blank statements.

    Quotes (', ", `) protect their contents; '--', '#' and '/* */' comments
    are removed.
    """
    statements: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    i, n = 0, len(sql)

    while i < n:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < n else ""

        if quote:
            buf.append(ch)
            if ch == "\\" and quote != "`" and nxt:
                buf.append(nxt)
                i += 2
                continue
            if ch == quote:
                if nxt == quote:  # doubled quote escapes itself
                    buf.append(nxt)
                    i += 2
                    continue
                quote = None
            i += 1
            continue

        if ch in ("'", '"', "`"):
            quote = ch
            buf.append(ch)
        elif ch == "#" or (ch == "-" and nxt == "-" and sql[i + 2:i + 3] in ("", " ", "\t", "\n", "\r")):
            end = sql.find("\n", i)
            i = n if end == -1 else end
            continue
        elif ch == "/" and nxt == "*":
            end = sql.find("*/", i + 2)
            i = n if end == -1 else end + 2
            buf.append(" ")
            continue
        elif ch == ";":
            _flush(buf, statements)
        else:
            buf.append(ch)
        i += 1

    _flush(buf, statements)
    return statements


def _flush(buf: list[str], statements: list[str]) -> None:
    statement = "".join(buf).strip()
    buf.clear()
    if statement:
        statements.append(statement)


def is_database_statement(statement: str) -> bool:
    return bool(_DATABASE_STATEMENT.match(statement.lstrip()))


@dataclass(frozen=True)
class SchemaDocument:
    """Ordered DDL with the database preamble kept apart from the structure."""
    database_statements: tuple[str, ...] = ()
    structural_statements: tuple[str, ...] = ()
    source: str | None = None

    @classmethod
    def parse(cls, sql: str, source: str | None = None) -> "SchemaDocument":
        database, structural = [], []
        for statement in split_statements(sql):
            (database if is_database_statement(statement) else structural).append(statement)
        return cls(tuple(database), tuple(structural), source)

    @classmethod
    def load(cls, path: str | Path = SCHEMA_PATH) -> "SchemaDocument":
        path = Path(path)
        return cls.parse(path.read_text(encoding="utf-8"), source=str(path))

    @property
    def declared_tables(self) -> list[str]:
        """Table names of the CREATE TABLE statements, in document order."""
        names = []
        for statement in self.structural_statements:
            match = _CREATE_TABLE.match(statement)
            if match:
                names.append(match.group(1))
        return names

    @property
    def statements(self) -> tuple[str, ...]:
        """The full document: preamble first, then structure."""
        return self.database_statements + self.structural_statements


async def load_schema(path: str | Path = SCHEMA_PATH) -> SchemaDocument:
    """Read and parse the schema file without blocking the event loop."""
    return await asyncio.to_thread(SchemaDocument.load, path)
