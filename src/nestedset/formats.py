"""
nestedset.formats - Reading and writing node records.

Supports CSV and TSV (with a header row) and JSON (an array of objects).
Field names on both sides are configurable; the defaults are:

    input:  id, label, parent, leaf
    output: pid, classification, classification_label, classification_origin,
            classification_parent, parent_id, leaf, lft, rgt, count
"""

from __future__ import annotations

import csv
import json
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, TextIO

from nestedset.config.defaults import DEFAULT_CONFIG
from nestedset.core.errors import NestedSetError
from nestedset.core.models import Node

INPUT_FIELDS: dict[str, str] = DEFAULT_CONFIG["input"]["fields"]
OUTPUT_FIELDS: dict[str, str] = DEFAULT_CONFIG["output"]["fields"]

_TRUE = {"true", "1", "yes", "y", "t"}
_FALSE = {"false", "0", "no", "n", "f", ""}


class FormatError(NestedSetError, ValueError):
    """Input cannot be decoded or the format cannot be determined."""


class Format(Enum):
    """Supported record formats."""

    CSV = "csv"
    TSV = "tsv"
    JSON = "json"

    @property
    def delimiter(self) -> str:
        """Field delimiter for the tabular formats."""
        return "\t" if self is Format.TSV else ","


def parse_format(name: str) -> Format:
    """Resolve a format name (case-insensitive).

    Raises:
        FormatError: Unknown format name.
    """
    try:
        return Format(name.strip().lower())
    except ValueError:
        choices = ", ".join(f.value for f in Format)
        raise FormatError(f"Unknown format {name!r} (choose from {choices})") from None


def format_from_path(path: Path | str | None) -> Format | None:
    """Guess the format from a file extension, None if unknown."""
    if path is None:
        return None
    suffix = Path(path).suffix.lstrip(".").lower()
    for fmt in Format:
        if fmt.value == suffix:
            return fmt
    return None


# -----------------------------------------------------------------------------
# Reading
# -----------------------------------------------------------------------------


def read_nodes(
    stream: TextIO, fmt: Format, fields: dict[str, str] | None = None
) -> list[Node]:
    """Read raw node records in input order.

    Args:
        stream: Text stream to read from.
        fmt: Format of the stream.
        fields: Input field names (keys: id, label, parent, leaf).

    Returns:
        List of Node, unindexed.

    Raises:
        FormatError: Malformed document, missing field or bad leaf value.
    """
    names = {**INPUT_FIELDS, **(fields or {})}
    if fmt is Format.JSON:
        records = _read_json(stream)
    else:
        records = _read_table(stream, fmt, names)
    return [_to_node(record, names, number) for number, record in enumerate(records, start=1)]


def _read_json(stream: TextIO) -> list[dict[str, Any]]:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise FormatError(f"JSON input is not valid UTF-8: {e}") from e

    if not isinstance(data, list):
        raise FormatError("JSON input must be an array of node objects")
    for number, record in enumerate(data, start=1):
        if not isinstance(record, dict):
            raise FormatError(f"Record {number}: expected an object, got {type(record).__name__}")
    return data


def _read_table(stream: TextIO, fmt: Format, names: dict[str, str]) -> list[dict[str, Any]]:
    reader = csv.DictReader(stream, delimiter=fmt.delimiter)
    records: list[dict[str, Any]] = []
    try:
        header = reader.fieldnames or []
        for key in ("id", "label"):
            if names[key] not in header:
                raise FormatError(f"Missing column {names[key]!r} in {fmt.value.upper()} header")
        for record in reader:
            records.append(record)
    except csv.Error as e:
        raise FormatError(f"Invalid {fmt.value.upper()} at line {reader.line_num}: {e}") from e
    except UnicodeDecodeError as e:
        # Decoding is buffered, so the failing byte may lie beyond this record.
        raise FormatError(
            f"{fmt.value.upper()} input is not valid UTF-8 "
            f"({len(records)} records read): {e}"
        ) from e
    return records


def _to_node(record: dict[str, Any], names: dict[str, str], number: int) -> Node:
    identity = _text(record.get(names["id"]))
    if identity is None:
        raise FormatError(f"Record {number}: missing {names['id']!r}")

    label = _text(record.get(names["label"]))
    if label is None:
        raise FormatError(f"Record {number}: missing {names['label']!r}")

    parent = _text(record.get(names["parent"]))
    return Node(
        identity=identity,
        label=label,
        parent_identity=parent or None,
        is_leaf=_parse_leaf(record.get(names["leaf"]), number),
    )


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _parse_leaf(value: Any, number: int) -> bool:
    """Decode a leaf flag; absent or empty means False."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise FormatError(f"Record {number}: invalid leaf value {value!r}")


# -----------------------------------------------------------------------------
# Writing
# -----------------------------------------------------------------------------


def output_names(fields: dict[str, str] | None = None) -> dict[str, str]:
    """Merge output field renames over the defaults.

    Raises:
        FormatError: Two fields would be written under the same name.
    """
    names = {**OUTPUT_FIELDS, **(fields or {})}
    owners: dict[str, str] = {}
    for key in OUTPUT_FIELDS:
        name = names[key]
        if name in owners:
            raise FormatError(
                f"Output fields {owners[name]!r} and {key!r} are both named {name!r}"
            )
        owners[name] = key
    return names


def node_to_record(node: Node, fields: dict[str, str] | None = None) -> dict[str, Any]:
    """Serialize an indexed node to an ordered, JSON-compatible dict.

    Args:
        node: The node to serialize.
        fields: Output field names (keys as in DEFAULT_CONFIG output.fields).

    Returns:
        Dict keyed by output field name, in output column order.
    """
    names = output_names(fields)
    return {
        names["pid"]: node.position_id,
        names["identity"]: node.identity,
        names["label"]: node.label,
        names["origin"]: node.origin_identity,
        names["parent"]: node.parent_identity,
        names["parent_id"]: node.parent_position_id,
        names["leaf"]: node.is_leaf,
        names["lft"]: node.left,
        names["rgt"]: node.right,
        names["count"]: node.child_count,
    }


def write_nodes(
    nodes: Iterable[Node],
    stream: TextIO,
    fmt: Format,
    fields: dict[str, str] | None = None,
) -> None:
    """Write indexed nodes to a stream.

    Args:
        nodes: Indexed nodes in output order.
        stream: Text stream to write to.
        fmt: Output format.
        fields: Output field names.

    Raises:
        FormatError: Two fields would be written under the same name.
    """
    records = [node_to_record(node, fields) for node in nodes]

    if fmt is Format.JSON:
        json.dump(records, stream, indent=2, ensure_ascii=False)
        stream.write("\n")
        return

    names = output_names(fields)
    columns = [names[key] for key in OUTPUT_FIELDS]
    writer = csv.writer(stream, delimiter=fmt.delimiter, lineterminator="\n")
    writer.writerow(columns)
    for record in records:
        writer.writerow([_cell(record[column]) for column in columns])


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
