"""TOON layout selection and recursive encoding of value trees."""

from __future__ import annotations

from toonline.models import Array, EncodeOptions, Object, Value, is_scalar
from toonline.primitives import (
    encode_key,
    encode_primitive,
    format_header,
    join_encoded_values,
)
from toonline.strings import LIST_ITEM_MARKER
from toonline.writer import LineWriter

LIST_ITEM_PREFIX = f"{LIST_ITEM_MARKER} "


def encode_value(value: Value, options: EncodeOptions | None = None) -> str:
    """Encode a normalized value tree into TOON.

    Args:
        value: The root of the value tree.
        options: Encoding options; defaults to ``EncodeOptions()``.

    Returns:
        TOON-formatted string (no trailing newline).
    """
    if options is None:
        options = EncodeOptions()

    if is_scalar(value):
        return encode_primitive(value, options.delimiter.value)

    writer = LineWriter(options.indent)
    match value:
        case Array():
            encode_array(None, value, writer, 0, options)
        case Object():
            encode_object(value, writer, 0, options)
    return writer.render()


# -- objects -----------------------------------------------------------------


def encode_object(
    value: Object, writer: LineWriter, depth: int, options: EncodeOptions
) -> None:
    """Write each entry of an object at ``depth``, in stored order."""
    for key, field_value in value.entries:
        encode_key_value_pair(key, field_value, writer, depth, options)


def encode_key_value_pair(
    key: str, value: Value, writer: LineWriter, depth: int, options: EncodeOptions
) -> None:
    encoded_key = encode_key(key)
    match value:
        case Array():
            encode_array(key, value, writer, depth, options)
        case Object():
            writer.push(depth, f"{encoded_key}:")
            if value.entries:
                encode_object(value, writer, depth + 1, options)
        case _:
            scalar = encode_primitive(value, options.delimiter.value)
            writer.push(depth, f"{encoded_key}: {scalar}")


# -- arrays ------------------------------------------------------------------


def is_array_of_primitives(value: Array) -> bool:
    return all(is_scalar(item) for item in value.items)


def is_array_of_arrays(value: Array) -> bool:
    return all(isinstance(item, Array) for item in value.items)


def is_array_of_objects(value: Array) -> bool:
    return all(isinstance(item, Object) for item in value.items)


def encode_array(
    key: str | None,
    value: Array,
    writer: LineWriter,
    depth: int,
    options: EncodeOptions,
) -> None:
    """Pick a layout for an array and write it at ``depth``.

    Layouts, first match wins: empty, inline primitives, list of inline
    primitive arrays, tabular objects, then the expanded list.

    Args:
        key: Key the array belongs to, or None for root/list arrays.
        value: The array to encode.
        writer: Output accumulator.
        depth: Indentation depth of the header line.
        options: Encoding options.
    """
    delimiter = options.delimiter.value

    if not value.items:
        writer.push(
            depth, format_header(0, key, None, delimiter, options.length_marker)
        )
        return

    if is_array_of_primitives(value):
        writer.push(depth, format_inline_array(value, key, options))
        return

    if is_array_of_arrays(value) and all(
        is_array_of_primitives(item) for item in value.items
    ):
        _write_list_header(key, value, writer, depth, options)
        for item in value.items:
            inline = format_inline_array(item, None, options)
            writer.push(depth + 1, LIST_ITEM_PREFIX + inline)
        return

    if is_array_of_objects(value):
        fields = detect_tabular_header(value)
        if fields:
            encode_tabular_array(key, value, fields, writer, depth, options)
            return

    _write_list_header(key, value, writer, depth, options)
    encode_list_items(value, writer, depth + 1, options)


def format_inline_array(
    value: Array, key: str | None, options: EncodeOptions
) -> str:
    """Format a primitive array on one line, e.g. ``tags[3]: a,b,c``."""
    delimiter = options.delimiter.value
    header = format_header(
        len(value.items), key, None, delimiter, options.length_marker
    )
    if not value.items:
        return header
    return f"{header} {join_encoded_values(value.items, delimiter)}"


def _write_list_header(
    key: str | None,
    value: Array,
    writer: LineWriter,
    depth: int,
    options: EncodeOptions,
) -> None:
    header = format_header(
        len(value.items), key, None, options.delimiter.value, options.length_marker
    )
    writer.push(depth, header)


# -- tabular arrays ----------------------------------------------------------


def detect_tabular_header(rows: Array) -> list[str]:
    """Return the shared field list if ``rows`` can be rendered as a table.

    Every row must be an object with exactly the first row's keys (any
    order) and only scalar values. A single non-conforming row disqualifies
    the whole array.

    Args:
        rows: The array to inspect.

    Returns:
        Field names in the first row's key order, or an empty list.
    """
    if not rows.items:
        return []

    first = rows.items[0]
    if not isinstance(first, Object):
        return []

    header = first.keys()
    if not header:
        return []

    for row in rows.items:
        if not isinstance(row, Object) or len(row.entries) != len(header):
            return []
        values = dict(row.entries)
        for field in header:
            if field not in values or not is_scalar(values[field]):
                return []

    return header


def encode_tabular_array(
    key: str | None,
    rows: Array,
    fields: list[str],
    writer: LineWriter,
    depth: int,
    options: EncodeOptions,
) -> None:
    header = format_header(
        len(rows.items), key, fields, options.delimiter.value, options.length_marker
    )
    writer.push(depth, header)
    write_tabular_rows(rows, fields, writer, depth + 1, options)


def write_tabular_rows(
    rows: Array,
    fields: list[str],
    writer: LineWriter,
    depth: int,
    options: EncodeOptions,
) -> None:
    """Write one delimited line per row, with values in header order."""
    delimiter = options.delimiter.value
    for row in rows.items:
        values = dict(row.entries)
        line = join_encoded_values((values[field] for field in fields), delimiter)
        writer.push(depth, line)


# -- list items --------------------------------------------------------------


def encode_list_items(
    value: Array, writer: LineWriter, depth: int, options: EncodeOptions
) -> None:
    """Write each element of an array as a ``- `` item at ``depth``."""
    for item in value.items:
        match item:
            case Array():
                encode_array_as_list_item(None, item, writer, depth, options)
            case Object():
                encode_object_as_list_item(item, writer, depth, options)
            case _:
                scalar = encode_primitive(item, options.delimiter.value)
                writer.push(depth, LIST_ITEM_PREFIX + scalar)


def encode_array_as_list_item(
    key: str | None,
    value: Array,
    writer: LineWriter,
    depth: int,
    options: EncodeOptions,
) -> None:
    """Write an array whose header sits on a ``- `` line.

    A bare array element keeps its body one level below the dash. A keyed
    array is the first field of an object item, so its body also clears the
    sibling fields and goes two levels below the dash.
    """
    if is_array_of_primitives(value):
        inline = format_inline_array(value, key, options)
        writer.push(depth, LIST_ITEM_PREFIX + inline)
        return

    body_depth = depth + 1 if key is None else depth + 2
    fields = detect_tabular_header(value) if is_array_of_objects(value) else []
    header = format_header(
        len(value.items),
        key,
        fields,
        options.delimiter.value,
        options.length_marker,
    )
    writer.push(depth, LIST_ITEM_PREFIX + header)

    if fields:
        write_tabular_rows(value, fields, writer, body_depth, options)
    else:
        encode_list_items(value, writer, body_depth, options)


def encode_object_as_list_item(
    value: Object, writer: LineWriter, depth: int, options: EncodeOptions
) -> None:
    """Write an object as a list item.

    The first field shares the ``- `` line; the remaining fields follow at
    ``depth + 1``. Nested content under the first field (object entries,
    table rows, list items) is indented to ``depth + 2`` since the dash
    occupies one level.

    Args:
        value: The object to encode.
        writer: Output accumulator.
        depth: Depth of the dash line.
        options: Encoding options.
    """
    if not value.entries:
        writer.push(depth, LIST_ITEM_MARKER)
        return

    (first_key, first_value), *rest = value.entries
    encoded_key = encode_key(first_key)

    match first_value:
        case Array():
            encode_array_as_list_item(first_key, first_value, writer, depth, options)
        case Object():
            writer.push(depth, f"{LIST_ITEM_PREFIX}{encoded_key}:")
            if first_value.entries:
                encode_object(first_value, writer, depth + 2, options)
        case _:
            scalar = encode_primitive(first_value, options.delimiter.value)
            writer.push(depth, f"{LIST_ITEM_PREFIX}{encoded_key}: {scalar}")

    for key, field_value in rest:
        encode_key_value_pair(key, field_value, writer, depth + 1, options)
