"""Path accessor tests: get, upsert, remove, merge and clone."""

import copy
import datetime
import typing

import pytest

from pyjsonprop import (
    InvalidArgumentError,
    InvalidPathError,
    InvalidPredicateError,
    NotFoundError,
    clone_path,
    get,
    get_required,
    merge,
    remove,
    remove_path,
    upsert,
    upsert_many,
)


class TestGet:
    def test_array_index(self):
        assert get({"items": [{"n": 1}, {"n": 2}]}, "items.1.n", 0) == 2

    def test_out_of_range_index(self):
        assert get({"items": [{"n": 1}]}, "items.5.n", -1) == -1

    @pytest.mark.parametrize("path", ["missing", "a.missing", "a.b.c.d", "a.b.0"])
    def test_missing_path_returns_default(self, path):
        assert get({"a": {"b": 1}}, path, "default") == "default"

    def test_default_is_none(self):
        assert get({}, "a") is None

    def test_nested_object(self):
        assert get({"user": {"address": {"city": "NYC"}}}, "user.address.city") == "NYC"

    def test_none_tree(self):
        assert get(None, "a", 5) == 5

    @pytest.mark.parametrize("path", ["", None, "a..b", "a."])
    def test_empty_or_malformed_path(self, path):
        assert get({"a": 1}, path, "d") == "d"

    def test_null_value_returns_default(self):
        assert get({"a": None}, "a", "d") == "d"

    def test_type_mismatch_returns_default(self):
        assert get({"a": "x"}, "a", 0) == 0

    def test_converts_to_default_type(self):
        assert get({"a": "5"}, "a", 0) == 5

    def test_bool_default(self):
        assert get({"flag": True}, "flag", False) is True

    def test_as_type(self):
        assert get({"a": 1}, "a", as_type=str) == "1"

    def test_as_type_overrides_default_type(self):
        assert get({"a": 1.5}, "a", 0, as_type=float) == 1.5

    def test_index_segment_on_object_is_a_key(self):
        assert get({"a": {"0": "zero"}}, "a.0") == "zero"

    def test_leading_zero_key(self):
        assert get({"codes": {"007": "bond"}}, "codes.007") == "bond"
        assert get({"codes": {"7": "seven"}}, "codes.007", "d") == "d"

    def test_leading_zero_index_on_array(self):
        assert get({"items": ["a", "b"]}, "items.01") == "b"

    @pytest.mark.parametrize("as_type", [list[int], typing.List[int], typing.Literal["x"]])
    def test_parameterized_type(self, as_type):
        expected = [1] if typing.get_origin(as_type) is list else "d"
        assert get({"a": [1]}, "a", "d", as_type=as_type) == expected

    def test_union_type(self):
        assert get({"a": "x"}, "a", as_type=int | str) == "x"

    def test_underscore_number_string(self):
        assert get({"a": "1_000"}, "a", 0) == 0
        assert get({"a": "1_000.5"}, "a", 0.0) == 0.0

    def test_key_segment_on_array(self):
        assert get({"a": [1]}, "a.x", "d") == "d"

    def test_returns_container(self):
        assert get({"a": {"b": [1, 2]}}, "a") == {"b": [1, 2]}

    def test_array_root(self):
        assert get([{"n": 1}], "0.n") == 1

    def test_scalar_root(self):
        assert get(5, "a", "d") == "d"


class TestGetRequired:
    def test_found(self):
        assert get_required({"a": {"b": 2}}, "a.b") == 2

    def test_missing_default_message(self):
        with pytest.raises(NotFoundError, match="JSON property not found: a.b"):
            get_required({}, "a.b")

    def test_custom_message_path_placeholder(self):
        with pytest.raises(NotFoundError, match="setting timeout is required"):
            get_required({}, "timeout", "setting {path} is required")

    def test_custom_message_positional_placeholder(self):
        with pytest.raises(NotFoundError, match="missing: x"):
            get_required({}, "x", "missing: {0}")

    def test_message_with_unknown_placeholder(self):
        with pytest.raises(NotFoundError, match="missing"):
            get_required({}, "x", "missing {other}")

    def test_is_key_error(self):
        with pytest.raises(KeyError):
            get_required({}, "x")

    def test_null_value_returns_none(self):
        assert get_required({"a": None}, "a") is None

    def test_conversion_failure_returns_none(self):
        assert get_required({"a": "x"}, "a", as_type=int) is None

    def test_empty_path(self):
        with pytest.raises(NotFoundError):
            get_required({"a": 1}, "")

    def test_none_tree(self):
        with pytest.raises(NotFoundError):
            get_required(None, "a")

    def test_internal_details(self):
        with pytest.raises(NotFoundError) as exc_info:
            get_required({}, "a")
        assert "'a'" in exc_info.value.internal()


class TestUpsert:
    def test_creates_intermediates(self):
        assert upsert({}, "user.address.city", "NYC") == {"user": {"address": {"city": "NYC"}}}

    def test_updates_existing(self):
        result = upsert({"user": {"name": "John", "role": "admin"}}, "user.name", "John Doe")
        assert result == {"user": {"name": "John Doe", "role": "admin"}}

    def test_does_not_mutate_input(self):
        tree = {"a": {"b": 1}, "items": [1, 2]}
        snapshot = copy.deepcopy(tree)
        upsert(tree, "a.c", 2)
        upsert(tree, "items.0", 9)
        assert tree == snapshot

    @pytest.mark.parametrize(
        ("path", "value"),
        [
            ("a", 1),
            ("a.b.c", "x"),
            ("a.list", [1, {"b": 2}]),
            ("a.obj", {"k": None}),
            ("flag", False),
        ],
    )
    def test_write_then_read(self, path, value):
        tree = {"a": {"b": {"c": "old"}}}
        assert get(upsert(tree, path, value), path) == value

    def test_null_is_a_write(self):
        result = upsert({"a": 1}, "a", None)
        assert result == {"a": None}

    def test_replaces_scalar_intermediate(self):
        assert upsert({"a": 5}, "a.b", 1) == {"a": {"b": 1}}

    def test_array_element(self):
        result = upsert({"items": [{"n": 1}, {"n": 2}]}, "items.1.n", 9)
        assert result == {"items": [{"n": 1}, {"n": 9}]}

    def test_append_at_array_length(self):
        assert upsert({"items": [1]}, "items.1", 2) == {"items": [1, 2]}

    def test_append_intermediate(self):
        assert upsert({"items": []}, "items.0.n", 1) == {"items": [{"n": 1}]}

    def test_index_beyond_array_length_pads_with_null(self):
        assert upsert({"items": []}, "items.3", "x") == {"items": [None, None, None, "x"]}

    def test_padded_intermediate(self):
        result = upsert({"items": [1]}, "items.2.n", 5)
        assert result == {"items": [1, None, {"n": 5}]}
        assert get(result, "items.2.n") == 5

    def test_index_past_pad_limit(self):
        with pytest.raises(InvalidPathError, match="array index out of range"):
            upsert({"items": []}, "items.65536", 1)

    def test_leading_zero_key(self):
        assert upsert({}, "codes.007", "bond") == {"codes": {"007": "bond"}}

    def test_leading_zero_key_does_not_alias_number(self):
        result = upsert({"codes": {"7": "seven"}}, "codes.007", "bond")
        assert result == {"codes": {"7": "seven", "007": "bond"}}

    def test_leading_zero_index_on_array(self):
        assert upsert({"items": [1, 2]}, "items.01", 9) == {"items": [1, 9]}

    def test_array_addressed_by_key_is_replaced(self):
        assert upsert({"tags": ["a"]}, "tags.name", "x") == {"tags": {"name": "x"}}

    def test_index_segment_on_object(self):
        assert upsert({"a": {}}, "a.0", "zero") == {"a": {"0": "zero"}}

    def test_none_tree(self):
        assert upsert(None, "a", 1) == {"a": 1}

    def test_scalar_tree(self):
        assert upsert("text", "a", 1) == {"a": 1}

    def test_array_root_with_key(self):
        with pytest.raises(InvalidPathError):
            upsert([1], "a", 1)

    @pytest.mark.parametrize("path", ["", None])
    def test_empty_path(self, path):
        with pytest.raises(InvalidArgumentError, match="path cannot be empty"):
            upsert({}, path, 1)

    def test_normalizes_value(self):
        result = upsert({}, "when", datetime.datetime(2024, 1, 1))
        assert result == {"when": "2024-01-01T00:00:00"}

    def test_value_is_not_aliased(self):
        value = {"x": [1]}
        result = upsert({}, "a", value)
        value["x"].append(2)
        assert result["a"]["x"] == [1]

    def test_unsupported_value(self):
        with pytest.raises(InvalidArgumentError):
            upsert({}, "a", object())


class TestUpsertMany:
    def test_applies_all(self):
        tree = {"user": {"name": "John", "settings": {"theme": "dark"}}}
        result = upsert_many(
            tree,
            {
                "user.age": 30,
                "user.settings.language": "en-US",
                "user.settings.theme": None,
                "user.address.city": "New York",
            },
        )
        assert result == {
            "user": {
                "name": "John",
                "settings": {"theme": None, "language": "en-US"},
                "age": 30,
                "address": {"city": "New York"},
            }
        }

    def test_later_write_wins(self):
        assert upsert_many({}, {"a.b": 1, "a": 2}) == {"a": 2}
        assert upsert_many({}, {"a": 2, "a.b": 1}) == {"a": {"b": 1}}

    def test_none_updates(self):
        with pytest.raises(InvalidArgumentError, match="updates cannot be None"):
            upsert_many({}, None)

    def test_non_mapping_updates(self):
        with pytest.raises(InvalidArgumentError):
            upsert_many({}, [("a", 1)])

    def test_empty_updates_returns_copy(self):
        tree = {"a": 1}
        result = upsert_many(tree, {})
        assert result == tree
        assert result is not tree

    def test_failure_leaves_input_untouched(self):
        tree = {"a": 1}
        with pytest.raises(InvalidPathError):
            upsert_many(tree, {"b": 1, "": 2})
        assert tree == {"a": 1}


class TestRemove:
    def test_recursive(self, user_doc):
        result = remove(user_doc, lambda key, value: key == "internal")
        assert result == {"user": {"id": 1, "roles": [{"id": 1}, {"id": 2}]}}

    def test_non_recursive(self, user_doc):
        result = remove(user_doc, lambda key, value: key == "internal", recursive=False)
        assert result == user_doc

    def test_top_level(self):
        result = remove({"a": 1, "b": 2}, lambda key, value: value == 2, recursive=False)
        assert result == {"a": 1}

    def test_null_values(self):
        result = remove({"a": None, "b": {"c": None, "d": 1}}, lambda key, value: value is None)
        assert result == {"b": {"d": 1}}

    def test_cel_expression(self, user_doc):
        result = remove(user_doc, 'key == "internal"')
        assert result == {"user": {"id": 1, "roles": [{"id": 1}, {"id": 2}]}}

    def test_cel_expression_on_value(self):
        doc = {"a": {"enabled": False}, "b": {"enabled": True}, "c": "text"}
        result = remove(doc, "value.enabled == false", recursive=False)
        assert result == {"b": {"enabled": True}, "c": "text"}

    def test_invalid_cel_expression(self):
        with pytest.raises(InvalidPredicateError):
            remove({}, "key ==")

    def test_non_callable_predicate(self):
        with pytest.raises(InvalidPredicateError):
            remove({}, 42)

    def test_nested_arrays(self):
        doc = {"m": [[{"x": 1, "internal": 2}], 3]}
        result = remove(doc, lambda key, value: key == "internal")
        assert result == {"m": [[{"x": 1}], 3]}

    def test_idempotent(self, user_doc):
        pred = lambda key, value: key == "internal"  # noqa: E731
        once = remove(user_doc, pred)
        assert remove(once, pred) == once

    def test_does_not_mutate_input(self, user_doc):
        snapshot = copy.deepcopy(user_doc)
        remove(user_doc, lambda key, value: key == "id")
        assert user_doc == snapshot

    def test_result_is_independent(self):
        doc = {"a": {"b": [1]}}
        result = remove(doc, lambda key, value: False)
        result["a"]["b"].append(2)
        assert doc == {"a": {"b": [1]}}

    def test_none_tree(self):
        assert remove(None, lambda key, value: True) == {}


class TestRemovePath:
    def test_object_member(self):
        assert remove_path({"a": {"b": 1, "c": 2}}, "a.b") == {"a": {"c": 2}}

    def test_array_element(self):
        assert remove_path({"items": [1, 2, 3]}, "items.1") == {"items": [1, 3]}

    def test_missing_path(self):
        tree = {"a": 1}
        result = remove_path(tree, "b.c")
        assert result == tree
        assert result is not tree

    def test_out_of_range_index(self):
        assert remove_path({"items": [1]}, "items.3") == {"items": [1]}

    def test_does_not_mutate_input(self):
        tree = {"a": {"b": 1}}
        remove_path(tree, "a.b")
        assert tree == {"a": {"b": 1}}

    def test_after_upsert(self):
        result = remove_path(upsert({}, "x.y.z", 1), "x.y.z")
        assert get(result, "x.y.z", "gone") == "gone"
        assert result == {"x": {"y": {}}}

    def test_empty_path(self):
        with pytest.raises(InvalidArgumentError):
            remove_path({"a": 1}, "")


class TestMerge:
    def test_replaces_arrays(self, merge_source, merge_other):
        result = merge(merge_source, merge_other)
        assert result == {
            "config": {
                "timeout": 60,
                "endpoints": ["api3", "api1"],
                "database": {"port": 5432, "host": "localhost"},
            }
        }

    def test_unions_arrays(self, merge_source, merge_other):
        result = merge(merge_source, merge_other, merge_arrays=True)
        assert result["config"]["endpoints"] == ["api1", "api2", "api3"]

    def test_union_uses_deep_equality(self):
        result = merge({"l": [{"a": 1}]}, {"l": [{"a": 1}, {"a": 2}]}, merge_arrays=True)
        assert result == {"l": [{"a": 1}, {"a": 2}]}

    def test_union_keeps_bool_and_number_apart(self):
        result = merge({"l": [1]}, {"l": [True]}, merge_arrays=True)
        assert result == {"l": [1, True]}
        assert result["l"][1] is True

    def test_scalar_conflict(self):
        assert merge({"a": 1}, {"a": "x"}) == {"a": "x"}

    def test_object_over_array(self):
        assert merge({"a": [1]}, {"a": {"b": 1}}, merge_arrays=True) == {"a": {"b": 1}}

    def test_adds_new_keys(self):
        assert merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_does_not_mutate_inputs(self, merge_source, merge_other):
        source_snapshot = copy.deepcopy(merge_source)
        other_snapshot = copy.deepcopy(merge_other)
        merge(merge_source, merge_other, merge_arrays=True)
        assert merge_source == source_snapshot
        assert merge_other == other_snapshot

    def test_result_does_not_alias_other(self):
        other = {"new": {"list": [1]}}
        result = merge({}, other)
        result["new"]["list"].append(2)
        assert other == {"new": {"list": [1]}}

    def test_none_source(self):
        assert merge(None, {"a": 1}) == {"a": 1}

    def test_none_other(self):
        source = {"a": 1}
        result = merge(source, None)
        assert result == source
        assert result is not source

    @pytest.mark.parametrize("empty", [[], "", None, {}])
    def test_empty_source(self, empty):
        assert merge(empty, {"a": 1}) == {"a": 1}

    @pytest.mark.parametrize("empty", [[], "", None, {}])
    def test_empty_other(self, empty):
        assert merge({"a": 1}, empty) == {"a": 1}

    @pytest.mark.parametrize(("source", "other"), [([1], {}), ({}, [1]), ("x", {})])
    def test_non_object(self, source, other):
        with pytest.raises(InvalidArgumentError):
            merge(source, other)


class TestClonePath:
    def test_copies_value(self):
        assert clone_path({"a": {"b": 5}}, "a.b", "x.y") == {"a": {"b": 5}, "x": {"y": 5}}

    def test_missing_source(self):
        tree = {"a": 1}
        result = clone_path(tree, "missing", "b")
        assert result == tree
        assert result is not tree

    def test_null_is_copied(self):
        assert clone_path({"a": None}, "a", "b") == {"a": None, "b": None}

    def test_overwrites_destination(self):
        result = clone_path({"source": {"id": 123}, "dest": "old"}, "source.id", "dest")
        assert result == {"source": {"id": 123}, "dest": 123}

    def test_copy_is_deep(self):
        result = clone_path({"a": {"b": [1]}}, "a", "c")
        result["c"]["b"].append(2)
        assert result["a"]["b"] == [1]

    def test_array_element(self):
        result = clone_path({"items": [{"n": 1}, {"n": 2}]}, "items.1", "last")
        assert result["last"] == {"n": 2}

    def test_does_not_mutate_input(self):
        tree = {"a": {"b": 5}}
        clone_path(tree, "a.b", "x.y")
        assert tree == {"a": {"b": 5}}

    @pytest.mark.parametrize(("source", "destination"), [("", "b"), ("a", ""), (None, "b")])
    def test_empty_paths(self, source, destination):
        with pytest.raises(InvalidArgumentError, match="path cannot be empty"):
            clone_path({"a": 1}, source, destination)
