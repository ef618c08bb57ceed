"""Regex-based scanning of TypeScript sources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from spfx_upgrade.findings import Position

IMPORT_RE = re.compile(
    r"""import\s+(?P<clause>[\w$*\s{},]+?)\s+from\s+(?P<quote>['"])(?P<module>[^'"]+)(?P=quote)\s*;?"""
)
NAMED_IMPORTS_RE = re.compile(r"\{(?P<names>[^}]*)\}")


@dataclass(frozen=True, slots=True)
class TsImport:
    """An ES module import statement."""

    module: str
    names: tuple[str, ...]
    statement: str
    position: Position


class TsFile:
    """TypeScript source file loaded by the project collector.

    The text is read once during collection; comment masking and import
    scanning are computed on first use and cached.
    """

    def __init__(self, path: Path, relative_path: str, source: str) -> None:
        self.path = path
        self.relative_path = relative_path
        self.source = source

    def __repr__(self) -> str:
        return f"TsFile({self.relative_path!r})"

    @cached_property
    def masked_source(self) -> str:
        """Source with comments blanked out, offsets preserved."""
        return mask_comments(self.source)

    @cached_property
    def imports(self) -> tuple[TsImport, ...]:
        found: list[TsImport] = []
        for match in IMPORT_RE.finditer(self.masked_source):
            found.append(
                TsImport(
                    module=match.group("module"),
                    names=_imported_names(match.group("clause")),
                    statement=self.source[match.start() : match.end()],
                    position=self.position_at(match.start()),
                )
            )
        return tuple(found)

    def find_all(self, pattern: re.Pattern[str]) -> list[Position]:
        """Return positions of every pattern match outside comments."""
        return [self.position_at(match.start()) for match in pattern.finditer(self.masked_source)]

    def position_at(self, offset: int) -> Position:
        line_start = self.source.rfind("\n", 0, offset) + 1
        return Position(
            line=self.source.count("\n", 0, offset) + 1,
            character=offset - line_start + 1,
        )


def mask_comments(source: str) -> str:
    """Replace line and block comments with spaces, keeping newlines."""
    chars = list(source)
    length = len(source)
    quote: str | None = None
    index = 0
    while index < length:
        char = source[index]
        if quote is not None:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
            index += 1
            continue

        if char in {"'", '"', "`"}:
            quote = char
            index += 1
            continue

        if source.startswith("//", index):
            end = source.find("\n", index)
            end = length if end == -1 else end
            _blank(chars, index, end)
            index = end
            continue

        if source.startswith("/*", index):
            end = source.find("*/", index + 2)
            end = length if end == -1 else end + 2
            _blank(chars, index, end)
            index = end
            continue

        index += 1
    return "".join(chars)


def _blank(chars: list[str], start: int, end: int) -> None:
    for position in range(start, end):
        if chars[position] != "\n":
            chars[position] = " "


def _imported_names(clause: str) -> tuple[str, ...]:
    names: list[str] = []
    named = NAMED_IMPORTS_RE.search(clause)
    head = clause[: named.start()] if named else clause
    for part in head.split(","):
        part = part.strip()
        if not part:
            continue
        names.append("*" if part.startswith("*") else part)
    if named:
        for part in named.group("names").split(","):
            name = part.strip().split(" as ")[0].strip()
            if name:
                names.append(name)
    return tuple(names)
