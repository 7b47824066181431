"""Тести bounded-серіалізатора (core.serialization).

Фіксуємо контракт маркерів (цикли/обрізання), лічильники та форматування
compact/expanded, на яке покладаються viewer і highlighter.
"""

from __future__ import annotations

import json
from typing import Any

from core.serialization import SerializationResult, json_loads, serialize, stringify


def test_circular_ref_to_root() -> None:
    a: dict[str, Any] = {"v": {"x": 100}}
    a["v"]["y"] = a

    result = serialize(a)

    assert result.text == '{"v":{"x":100,"y":"<<circular ref to the root object>>"}}'
    assert result.circular_refs == 1


def test_circular_ref_to_parent_level() -> None:
    a: dict[str, Any] = {"child": {}}
    a["child"]["back"] = a["child"]

    result = serialize(a)

    assert '"back":"<<circular ref to parent level 1>>"' in result.text
    assert result.circular_refs == 1


def test_self_referencing_list() -> None:
    items: list[Any] = [1]
    items.append(items)

    result = serialize(items)

    assert result.text == '[1,"<<circular ref to the root object>>"]'


def test_shared_subgraph_is_not_a_cycle() -> None:
    shared = [1, 2]
    result = serialize({"a": shared, "b": shared})

    assert result.text == '{"a":[1,2],"b":[1,2]}'
    assert result.circular_refs == 0


def test_string_truncation_marker_and_counter() -> None:
    result = serialize("x" * 100, max_string_length=20)

    assert result.text == '"' + "x" * 8 + ' …92 more chars…"'
    assert result.trimmed_strings == 1


def test_string_at_limit_is_untouched() -> None:
    result = serialize("abc", max_string_length=3)
    assert result.text == '"abc"'
    assert result.trimmed_strings == 0


def test_array_truncation_keeps_prefix_and_marker() -> None:
    result = serialize([1, 2, 3, 4, 5], max_array_size=3)

    assert result.text == '[1,2,"…3 more items…"]'
    assert result.trimmed_arrays == 1


def test_budgets_apply_recursively_and_counters_accumulate() -> None:
    value = {"a": ["long string here"] * 4, "b": {"c": "another long one"}}

    result = serialize(value, max_string_length=13, max_array_size=2)

    assert result.trimmed_arrays == 1
    assert result.trimmed_strings == 2
    assert result.truncated is True
    assert result.stats() == {"circular_refs": 0, "trimmed_strings": 2, "trimmed_arrays": 1}


def test_scalars_follow_json_literals() -> None:
    assert serialize(None).text == "null"
    assert serialize(True).text == "true"
    assert serialize(False).text == "false"
    assert serialize(3).text == "3"
    assert serialize(1.5).text == "1.5"
    assert serialize("привіт \"світ\"\n").text == '"привіт \\"світ\\"\\n"'


def test_opaque_values_fall_back_to_str() -> None:
    class Thing:
        def __str__(self) -> str:
            return "thing!"

    assert serialize({"t": Thing()}).text == '{"t":"thing!"}'
    assert serialize(set()).text == '"set()"'


def test_non_string_keys_are_coerced_like_json() -> None:
    assert serialize({1: "a", False: "b", None: "c"}).text == '{"1":"a","false":"b","null":"c"}'


def test_expanded_layout_without_compact() -> None:
    value = {"a": [1, 2], "b": {}}

    text = serialize(value, indent=2, compact=False).text

    assert text == '{\n  "a": [\n    1,\n    2\n  ],\n  "b": {}\n}'


def test_compact_keeps_short_containers_on_one_line() -> None:
    value = {"short": [1, 2, 3], "long": ["x" * 30, "y" * 30]}

    text = serialize(value, indent=2, compact=True).text

    assert text == (
        '{\n'
        '  "short": [1, 2, 3],\n'
        '  "long": [\n'
        '    "' + "x" * 30 + '",\n'
        '    "' + "y" * 30 + '"\n'
        '  ]\n'
        '}'
    )


def test_string_indent_unit() -> None:
    assert serialize([[1]], indent="\t", compact=False).text == "[\n\t[\n\t\t1\n\t]\n]"


def test_round_trip_preserves_values_and_key_order() -> None:
    value = {
        "z": 1,
        "a": [True, False, None, 1.25, "s"],
        "m": {"nested": {"deep": [[], {}]}},
        "юнікод": "так",
    }

    for indent in (None, 2, "  "):
        for compact in (True, False):
            text = serialize(value, indent=indent, compact=compact).text
            parsed = json_loads(text)
            assert parsed == value
            assert list(parsed) == list(value)


def test_stringify_native_and_fallback_agree() -> None:
    value = {"a": [1, {"b": None}], "c": "ї"}

    for indent in (None, 0, 2, "\t"):
        assert stringify(value, indent=indent) == serialize(
            value, indent=indent, compact=False
        ).text


def test_stringify_falls_back_on_cycles_silently() -> None:
    a: dict[str, Any] = {"k": 1}
    a["self"] = a

    text = stringify(a, indent=2)

    assert text == '{\n  "k": 1,\n  "self": "<<circular ref to the root object>>"\n}'


def test_stringify_matches_stdlib_json_for_plain_data() -> None:
    value = {"a": [1, 2.5, None], "b": {"c": True}}
    assert stringify(value) == json.dumps(value, separators=(",", ":"))
    assert stringify(value, indent=2) == json.dumps(value, indent=2)


def test_json_loads_accepts_bytes() -> None:
    assert json_loads(b'{"a": 1}') == {"a": 1}


def test_result_without_markers_is_not_truncated() -> None:
    result = serialize([1, 2])
    assert isinstance(result, SerializationResult)
    assert result.truncated is False


def test_array_marker_is_not_subject_to_string_budget() -> None:
    result = serialize(list(range(10)), max_string_length=5, max_array_size=2)

    assert result.text == '[0,1,"…8 more items…"]'
    assert result.trimmed_arrays == 1
    assert result.trimmed_strings == 0
