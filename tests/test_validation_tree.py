"""Tests for wisejob.validation_tree.

Tests cover:
- Conversion of engine nodes (objects, camelCase objects, dicts) into the typed tree
- One diagnostic per leaf, depth-first and in child order
- Branches never reported themselves
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from wisejob.validation_tree import (
    ValidationBranch,
    ValidationLeaf,
    as_validation_node,
    format_diagnostic,
    iter_diagnostics,
    report_validation_errors,
)


class EngineNode:
    """Stand-in for an engine validation node with a getter for its value."""

    def __init__(self, value=None, propertyName="", message="", children=()):
        self._value = value
        self.propertyName = propertyName
        self.message = message
        self.children = list(children)

    def getValue(self):
        return self._value


class TestAsValidationNode:

    def test_node_without_children_is_leaf(self):
        node = as_validation_node(EngineNode("-1", "hffmc", "must be positive"))
        assert isinstance(node, ValidationLeaf)
        assert node.value == "-1"
        assert node.property_name == "hffmc"

    def test_node_with_children_is_branch(self):
        raw = EngineNode(propertyName="scenario", children=[EngineNode("x", "name", "required")])
        node = as_validation_node(raw)
        assert isinstance(node, ValidationBranch)
        assert isinstance(node.children[0], ValidationLeaf)

    def test_snake_case_objects(self):
        raw = SimpleNamespace(value=3, property_name="dx", message="too big", children=[])
        assert as_validation_node(raw) == ValidationLeaf(value=3, property_name="dx", message="too big")

    def test_dicts(self):
        raw = {"propertyName": "ignitions", "children": [{"value": None, "propertyName": "time", "message": "missing"}]}
        node = as_validation_node(raw)
        assert isinstance(node, ValidationBranch)
        assert node.children[0].property_name == "time"

    def test_typed_nodes_pass_through(self):
        leaf = ValidationLeaf(value="a", property_name="b", message="c")
        assert as_validation_node(leaf) is leaf

    def test_branch_needs_children(self):
        with pytest.raises(ValidationError):
            ValidationBranch(children=())


class TestDiagnostics:
    """Tests for diagnostic formatting and traversal."""

    def test_format(self):
        leaf = ValidationLeaf(value="-1", property_name="fmcOverride", message="Value out of range")
        assert format_diagnostic(leaf) == "'-1' is invalid for 'fmcOverride': \"Value out of range\""

    def test_root_with_two_leaves(self):
        """Only the leaves are reported, never the root."""
        root = EngineNode(
            "root-value",
            "job",
            "root message",
            children=[EngineNode("a", "first", "bad a"), EngineNode("b", "second", "bad b")],
        )
        lines = list(iter_diagnostics(root))
        assert lines == [
            "'a' is invalid for 'first': \"bad a\"",
            "'b' is invalid for 'second': \"bad b\"",
        ]

    def test_single_leaf_root(self):
        """A root with no children is itself the failure."""
        lines = list(iter_diagnostics(EngineNode("x", "name", "required")))
        assert lines == ["'x' is invalid for 'name': \"required\""]

    def test_missing_value_prints_empty(self):
        leaf = ValidationLeaf(value=None, property_name="time", message="missing")
        assert format_diagnostic(leaf) == "'' is invalid for 'time': \"missing\""

    def test_falsy_values_kept(self):
        leaf = ValidationLeaf(value=0, property_name="dx", message="must be positive")
        assert format_diagnostic(leaf).startswith("'0' is invalid")

    def test_depth_first_order(self):
        root = EngineNode(
            children=[
                EngineNode(children=[EngineNode("1", "a", "m"), EngineNode("2", "b", "m")]),
                EngineNode("3", "c", "m"),
                EngineNode(children=[EngineNode(children=[EngineNode("4", "d", "m")])]),
            ]
        )
        values = [line.split("'")[1] for line in iter_diagnostics(root)]
        assert values == ["1", "2", "3", "4"]


class TestReportValidationErrors:

    def test_reports_every_root(self):
        emitted = []
        nodes = [
            EngineNode(children=[EngineNode("a", "p", "m")]),
            EngineNode("b", "q", "n"),
        ]
        lines = report_validation_errors(nodes, emit=emitted.append)
        assert lines == emitted
        assert len(lines) == 2

    def test_logs_by_default(self, caplog):
        report_validation_errors([EngineNode("a", "p", "m")])
        assert "'a' is invalid for 'p': \"m\"" in caplog.text

    def test_no_nodes(self):
        assert report_validation_errors([], emit=lambda line: None) == []


class TestDeepTrees:
    """Engine trees nested deeper than the interpreter recursion limit."""

    DEPTH = 5000

    def _chain(self):
        node = {"value": "deep", "propertyName": "leaf", "message": "bad"}
        for level in range(self.DEPTH):
            node = {"propertyName": f"level{level}", "children": [node]}
        return node

    def test_deep_tree_converts(self):
        node = as_validation_node(self._chain())
        assert isinstance(node, ValidationBranch)

    def test_deep_tree_reports_leaf(self):
        lines = list(iter_diagnostics(self._chain()))
        assert lines == ["'deep' is invalid for 'leaf': \"bad\""]

    def test_wide_and_deep_order(self):
        root = self._chain()
        root["children"].append({"value": "last", "propertyName": "tail", "message": "bad"})
        values = [line.split("'")[1] for line in iter_diagnostics(root)]
        assert values == ["deep", "last"]
