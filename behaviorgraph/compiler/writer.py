from __future__ import annotations

from typing import List


class CodeWriter:
    """Indented string accumulator for the module skeleton."""

    def __init__(self, indent: int = 0, unit: str = "    "):
        self._lines: List[str] = []
        self._indent = indent
        self._unit = unit

    @property
    def prefix(self) -> str:
        return self._unit * self._indent

    def writeln(self, line: str = "") -> "CodeWriter":
        if line:
            self._lines.append(self.prefix + line)
        else:
            self._lines.append("")
        return self

    def blank(self) -> "CodeWriter":
        return self.writeln()

    def comment(self, text: str) -> "CodeWriter":
        return self.writeln(f"// {text}")

    def push(self) -> "CodeWriter":
        self._indent += 1
        return self

    def pop(self) -> "CodeWriter":
        self._indent = max(0, self._indent - 1)
        return self

    def open(self, header: str) -> "CodeWriter":
        """Write ``header {`` and indent."""
        return self.writeln(f"{header} {{").push()

    def close(self, trailer: str = "}") -> "CodeWriter":
        return self.pop().writeln(trailer)

    def raw(self, blocks: List[str]) -> "CodeWriter":
        """Append text that already carries its own indentation."""
        self._lines.extend(blocks)
        return self

    def result(self) -> str:
        return "\n".join(self._lines)
