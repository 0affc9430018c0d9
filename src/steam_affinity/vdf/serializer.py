"""
Serializer for text VDF.

Output follows the layout Steam writes: one tab of indentation per level,
two tabs between key and value, braces on their own lines.
"""

from steam_affinity.vdf.lines import escape
from steam_affinity.vdf.models import Leaf, VdfObject


def dump_lines(node: VdfObject, depth: int = 0) -> list[str]:
    """Serialize an object's entries to lines, without line terminators."""
    indent = "\t" * depth
    lines: list[str] = []

    for key, child in node.items():
        if isinstance(child, Leaf):
            lines.append(f'{indent}"{escape(key)}"\t\t"{escape(child.value)}"')
        else:
            lines.append(f'{indent}"{escape(key)}"')
            lines.append(f"{indent}{{")
            lines.extend(dump_lines(child, depth + 1))
            lines.append(f"{indent}}}")

    return lines


def dumps(node: VdfObject) -> str:
    """Serialize to text. The final closing brace has no trailing newline."""
    return "\n".join(dump_lines(node))
