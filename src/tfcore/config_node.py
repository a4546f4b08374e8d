"""Structured key/value tree used for persistence.

A :class:`ConfigNode` holds ordered ``key = value`` pairs and named child
nodes.  Keys and node names may repeat.  The text form is the brace-delimited
cfg layout::

    FLIGHTDATA_PART
    {
    	partName = liquidEngine
    	FLIGHTDATA
    	{
    		scope = kerbin
    		flightData = 1250
    	}
    }
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from tfcore._constants import format_number
from tfcore.exceptions import TfNodeParseError

_COMMENT = "//"
_INDENT = "\t"


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


class ConfigNode:
    """An ordered tree of string values and named child nodes."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._values: list[tuple[str, str]] = []
        self._nodes: list[ConfigNode] = []

    def __repr__(self) -> str:
        return f"ConfigNode(name={self.name!r}, values={len(self._values)}, nodes={len(self._nodes)})"

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @property
    def values(self) -> list[tuple[str, str]]:
        return list(self._values)

    def has_value(self, key: str) -> bool:
        return any(k == key for k, _ in self._values)

    def get_value(self, key: str) -> str | None:
        """Return the first value stored under *key*, or ``None``."""
        for k, v in self._values:
            if k == key:
                return v
        return None

    def get_values(self, key: str) -> list[str]:
        return [v for k, v in self._values if k == key]

    def add_value(self, key: str, value: Any) -> None:
        self._values.append((key, _to_text(value)))

    def set_value(self, key: str, value: Any) -> None:
        """Replace the first value under *key*, appending when absent."""
        text = _to_text(value)
        for index, (k, _) in enumerate(self._values):
            if k == key:
                self._values[index] = (key, text)
                return
        self._values.append((key, text))

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> list[ConfigNode]:
        return list(self._nodes)

    def has_node(self, name: str) -> bool:
        return any(node.name == name for node in self._nodes)

    def get_node(self, name: str) -> ConfigNode | None:
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def get_nodes(self, name: str) -> list[ConfigNode]:
        return [node for node in self._nodes if node.name == name]

    def add_node(self, name: str | ConfigNode) -> ConfigNode:
        """Append a child node; a string creates a fresh empty node."""
        node = ConfigNode(name) if isinstance(name, str) else name
        self._nodes.append(node)
        return node

    def walk(self) -> Iterator[ConfigNode]:
        """Yield this node and every descendant depth-first."""
        yield self
        for node in self._nodes:
            yield from node.walk()

    # ------------------------------------------------------------------
    # Text form
    # ------------------------------------------------------------------

    def _dump_lines(self, depth: int) -> list[str]:
        pad = _INDENT * depth
        lines = [f"{pad}{key} = {value}" for key, value in self._values]
        for node in self._nodes:
            lines.append(f"{pad}{node.name}")
            lines.append(f"{pad}{{")
            lines.extend(node._dump_lines(depth + 1))
            lines.append(f"{pad}}}")
        return lines

    def dumps(self) -> str:
        """Serialize the contents of this node (not the node itself)."""
        lines = self._dump_lines(0)
        return "\n".join(lines) + "\n" if lines else ""

    @classmethod
    def parse(cls, text: str, name: str = "") -> ConfigNode:
        """Parse cfg text into a root node named *name*.

        Raises
        ------
        TfNodeParseError
            On unbalanced braces or a ``{`` that has no node name.
        """
        root = cls(name)
        stack: list[ConfigNode] = [root]
        pending: str | None = None

        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.split(_COMMENT, 1)[0].strip()
            while line:
                if line.startswith("{"):
                    if pending is None:
                        raise TfNodeParseError("'{' without a node name", line=lineno)
                    stack.append(stack[-1].add_node(pending))
                    pending = None
                    line = line[1:].strip()
                    continue
                if line.startswith("}"):
                    if len(stack) == 1:
                        raise TfNodeParseError("unexpected '}'", line=lineno)
                    stack.pop()
                    line = line[1:].strip()
                    continue

                if pending is not None:
                    raise TfNodeParseError(f"node {pending!r} is missing its '{{'", line=lineno)

                if "=" in line and ("{" not in line or line.index("=") < line.index("{")):
                    key, _, value = line.partition("=")
                    # A one-line node closes on the same line as its last value.
                    value, brace, rest = value.partition("}")
                    stack[-1].add_value(key.strip(), value.strip())
                    line = (brace + rest).strip()
                    continue

                # Node name, optionally with its brace on the same line.
                head, brace, rest = line.partition("{")
                pending = head.strip()
                line = (brace + rest).strip()

        if pending is not None:
            raise TfNodeParseError(f"node {pending!r} is missing its '{{'")
        if len(stack) != 1:
            raise TfNodeParseError(f"{len(stack) - 1} unclosed node(s)")
        return root

    @classmethod
    def load(cls, path: Path | str, name: str = "") -> ConfigNode:
        return cls.parse(Path(path).read_text(encoding="utf-8"), name=name)

    def save(self, path: Path | str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.dumps(), encoding="utf-8")
