from __future__ import annotations

import pytest

from shapex import ChangeKind, ShapeXStateError, diff, diff_changes


def test_equal_states_have_no_changes() -> None:
    assert diff({"counter": 1, "nested": {"value": "x"}}, {"counter": 1, "nested": {"value": "x"}}) == []


def test_scalar_value_change() -> None:
    changes = diff_changes({"counter": 1}, {"counter": 2})
    assert [(c.path, c.kind) for c in changes] == [("$.counter", ChangeKind.VALUE_CHANGED)]
    assert changes[0].old == 1
    assert changes[0].new == 2


def test_nested_change_reports_child_before_parent() -> None:
    old = {"counter": 1, "nested": {"value": "test"}}
    new = {"counter": 1, "nested": {"value": "changed"}}
    assert diff(old, new) == ["$.nested.value", "$.nested"]


def test_deleted_key_is_recorded_once_and_not_descended() -> None:
    old = {"keep": 1, "gone": {"deep": {"deeper": 1}}}
    changes = diff_changes(old, {"keep": 1})
    assert [(c.path, c.kind) for c in changes] == [("$.gone", ChangeKind.DELETED)]
    assert changes[0].new is None


def test_type_change_is_recorded_once() -> None:
    changes = diff_changes({"counter": 1}, {"counter": "1"})
    assert [(c.path, c.kind) for c in changes] == [("$.counter", ChangeKind.TYPE_CHANGED)]


def test_bool_and_number_are_different_types() -> None:
    changes = diff_changes({"flag": True}, {"flag": 1})
    assert changes[0].kind is ChangeKind.TYPE_CHANGED


def test_object_replaced_by_none_is_a_value_change() -> None:
    changes = diff_changes({"nested": {"value": 1}}, {"nested": None})
    assert [(c.path, c.kind) for c in changes] == [("$.nested", ChangeKind.VALUE_CHANGED)]


def test_added_root_key_is_not_reported() -> None:
    # The walk follows the old tree; additions only surface at their parent.
    assert diff({"counter": 1}, {"counter": 1, "extra": 2}) == []


def test_added_nested_key_is_reported_at_parent_only() -> None:
    assert diff({"nested": {"a": 1}}, {"nested": {"a": 1, "b": 2}}) == ["$.nested"]


def test_list_reorder_is_a_change() -> None:
    assert diff({"items": [1, 2]}, {"items": [2, 1]}) == ["$.items.0", "$.items.1", "$.items"]


def test_list_shrink_reports_deleted_index() -> None:
    changes = diff_changes({"items": [1, 2, 3]}, {"items": [1, 2]})
    assert [(c.path, c.kind) for c in changes] == [
        ("$.items.2", ChangeKind.DELETED),
        ("$.items", ChangeKind.VALUE_CHANGED),
    ]


def test_key_order_is_significant() -> None:
    assert diff({"o": {"a": 1, "b": 2}}, {"o": {"b": 2, "a": 1}}) == ["$.o"]


def test_tuple_and_list_with_same_items_are_equal() -> None:
    assert diff({"items": (1, 2)}, {"items": [1, 2]}) == []


def test_mapping_replaced_by_list_deletes_old_keys() -> None:
    changes = diff_changes({"x": {"a": 1}}, {"x": [1]})
    assert [(c.path, c.kind) for c in changes] == [
        ("$.x.a", ChangeKind.DELETED),
        ("$.x", ChangeKind.VALUE_CHANGED),
    ]


def test_list_replaced_by_mapping_deletes_old_indices() -> None:
    changes = diff_changes({"x": [1, 2]}, {"x": {"a": 1}})
    assert [(c.path, c.kind) for c in changes] == [
        ("$.x.0", ChangeKind.DELETED),
        ("$.x.1", ChangeKind.DELETED),
        ("$.x", ChangeKind.VALUE_CHANGED),
    ]


def test_custom_prefix_and_separator() -> None:
    old = {"nested": {"value": 1}}
    new = {"nested": {"value": 2}}
    assert diff(old, new, prefix="#", separator="/") == ["#/nested/value", "#/nested"]


def test_non_container_root_yields_no_paths() -> None:
    assert diff(1, 2) == []


def test_root_replaced_by_non_mapping_deletes_every_key() -> None:
    changes = diff_changes({"a": 1, "b": 2}, None)
    assert [(c.path, c.kind) for c in changes] == [
        ("$.a", ChangeKind.DELETED),
        ("$.b", ChangeKind.DELETED),
    ]


def test_circular_state_raises() -> None:
    looped: dict[str, object] = {"counter": 1}
    looped["self"] = looped
    with pytest.raises(ShapeXStateError):
        diff(looped, {"counter": 2})
