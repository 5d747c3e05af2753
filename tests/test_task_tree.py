"""Tests for task tree construction."""

import logging

import pytest

from workflow_console.core.models import TaskRecord, TaskStatus
from workflow_console.core.task_names import MalformedTaskName
from workflow_console.core.task_tree import (
    DuplicateTaskPath,
    TaskNode,
    TaskTreeBuilder,
    build_task_tree,
    find_node,
    placeholder_nodes,
)


def _walk(node):
    yield node
    for child in node.children:
        yield from _walk(child)


def _child_names(node):
    return [child.segment for child in node.children]


def _shape(node):
    return (node.full_name, node.status, tuple(_shape(child) for child in node.children))


class TestBuildTaskTree:
    """Tests for build_task_tree on the basic workflow."""

    def test_root_is_synthetic(self, basic_records):
        root = build_task_tree(basic_records)
        assert root.is_root
        assert root.path == ()
        assert root.record is None
        assert root.status is None
        assert _child_names(root) == ["basic"]

    def test_sibling_order_follows_input(self, basic_records):
        root = build_task_tree(basic_records)
        basic = root.children[0]
        assert _child_names(basic) == [
            "my_task_1",
            "my_task_2",
            "any_task_name_here",
            "parallel_task_foo",
            "abc",
        ]
        assert _child_names(basic.children[2]) == ["nested_task", "nested_task_2"]
        assert _child_names(basic.children[3]) == ["bar", "baz"]

    def test_paths_extend_parent_paths(self, basic_records):
        root = build_task_tree(basic_records)
        for node in _walk(root):
            for child in node.children:
                assert child.path == node.path + (child.segment,)

    def test_every_record_is_attached(self, basic_records):
        root = build_task_tree(basic_records)
        attached = [node.record for node in _walk(root) if node.record is not None]
        assert attached == basic_records

    def test_paths_are_unique(self, basic_records):
        root = build_task_tree(basic_records)
        paths = [node.path for node in _walk(root)]
        assert len(paths) == len(set(paths))

    def test_empty_input_gives_bare_root(self):
        root = build_task_tree([])
        assert root.children == []

    def test_idempotent(self, basic_records):
        first = build_task_tree(basic_records)
        second = build_task_tree(basic_records)
        assert first is not second
        assert _shape(first) == _shape(second)

    def test_builder_is_reusable(self, make_records):
        builder = TaskTreeBuilder()
        a = builder.build(make_records(["+a", "+a+x"]))
        b = builder.build(make_records(["+b"]))
        assert _child_names(a) == ["a"]
        assert _child_names(b) == ["b"]


class TestPlaceholders:
    """Intermediate ancestors that are implied but not listed."""

    def test_missing_ancestors_become_placeholders(self, make_records, caplog):
        with caplog.at_level(logging.WARNING, logger="workflow_console.core.task_tree"):
            root = build_task_tree(make_records(["+wf+group+leaf"]))
        wf = root.children[0]
        group = wf.children[0]
        assert wf.is_placeholder
        assert group.is_placeholder
        assert group.children[0].record is not None
        assert [node.full_name for node in placeholder_nodes(root)] == ["+wf", "+wf+group"]
        assert "+wf+group" in caplog.text

    def test_later_record_fills_placeholder(self, make_records):
        root = build_task_tree(make_records(["+wf+a+x", "+wf", "+wf+a"]))
        assert placeholder_nodes(root) == []
        assert find_node(root, "+wf+a").record.full_name == "+wf+a"

    def test_first_creation_fixes_sibling_position(self, make_records):
        # +wf+b is created as a placeholder before +wf+a is listed
        root = build_task_tree(make_records(["+wf", "+wf+b+deep", "+wf+a", "+wf+b"]))
        assert _child_names(root.children[0]) == ["b", "a"]

    def test_interleaved_deep_references_keep_order(self, make_records):
        names = ["+wf", "+wf+a", "+wf+b", "+wf+a+x", "+wf+b+y", "+wf+a+z", "+wf+c"]
        root = build_task_tree(make_records(names))
        wf = root.children[0]
        assert _child_names(wf) == ["a", "b", "c"]
        assert _child_names(wf.children[0]) == ["x", "z"]


class TestTreeErrors:
    """Data-integrity errors surface to the caller."""

    def test_duplicate_full_name(self, make_records):
        with pytest.raises(DuplicateTaskPath) as exc_info:
            build_task_tree(make_records(["+wf", "+wf+a", "+wf+a"]))
        assert exc_info.value.path == "+wf+a"

    def test_malformed_name_is_not_dropped(self, make_records):
        with pytest.raises(MalformedTaskName):
            build_task_tree(make_records(["+wf", "+wf++a"]))

    def test_parent_id_mismatch(self):
        records = [
            TaskRecord("+wf", TaskStatus.SUCCESS, 0, id="1"),
            TaskRecord("+wf+a", TaskStatus.SUCCESS, 1, id="2", parent_id="99"),
        ]
        with pytest.raises(MalformedTaskName, match="parent id 99"):
            build_task_tree(records)

    def test_parent_id_mismatch_when_parent_listed_later(self):
        records = [
            TaskRecord("+wf+a", TaskStatus.SUCCESS, 0, id="2", parent_id="1"),
            TaskRecord("+wf", TaskStatus.SUCCESS, 1, id="7"),
        ]
        with pytest.raises(MalformedTaskName):
            build_task_tree(records)

    def test_matching_parent_ids_pass(self, basic_records):
        root = build_task_tree(basic_records)
        nested = find_node(root, "+basic+any_task_name_here+nested_task")
        assert nested.record.parent_id == "4"


class TestTaskNode:
    def test_labels(self):
        node = TaskNode(segment="bar", path=("basic", "parallel_task_foo", "bar"))
        assert node.label == "+bar"
        assert node.full_name == "+basic+parallel_task_foo+bar"
        assert node.depth == 3
        assert node.is_placeholder

    def test_find_node_missing(self, basic_records):
        root = build_task_tree(basic_records)
        assert find_node(root, "+basic+nope") is None
        assert find_node(root, "") is root
