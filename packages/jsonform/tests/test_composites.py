"""Tests for array and object validator nodes."""

import pytest

from dataknobs_jsonform import (
    ArrayNode,
    BrokenReferenceError,
    NumberNode,
    ObjectNode,
    SchemaError,
    StringNode,
    build,
)


class TestArrayNode:
    """Test ArrayNode behavior."""

    def test_children_follow_data(self):
        """Test that every entry gets a child node."""
        node = build({"type": "array", "items": {"type": "string"}}, ["Bart", "Lisa"])
        assert isinstance(node, ArrayNode)
        assert [type(item) for item in node.items] == [StringNode, StringNode]
        assert node.value() == ["Bart", "Lisa"]
        assert node.valid()

    def test_absent_value_is_empty(self):
        """Test that an absent value yields no items."""
        node = build({"type": "array", "items": {"type": "string"}})
        assert node.items == []
        assert node.value() == []

    def test_padded_to_min_items(self):
        """Test that short data is padded with undefined items."""
        node = build({"type": "array", "items": {"type": "number"}, "minItems": 3}, [1, 2])
        assert len(node.items) == 3
        assert node.items[2].value() is None
        assert node.errors == []
        assert not node.valid()
        assert node.value() == [1, 2, None]

    def test_max_items(self):
        """Test the maxItems keyword."""
        node = build({"type": "array", "items": {"type": "number"}, "maxItems": 2}, [1, 2, 3])
        assert node.errors == ["Must have at most 2 items"]
        assert not node.can_add_item()
        assert node.remove_item(0).valid()
        assert not node.can_add_item()
        assert node.remove_item(0).can_add_item()

    def test_child_validity(self):
        """Test that an invalid child makes the array invalid."""
        node = build({"type": "array", "items": {"type": "number", "minimum": 0}}, [1, -1])
        assert node.errors == []
        assert not node.valid()
        assert node.items[1].errors == ["Must be greater than or equal to 0"]

    def test_positional_items(self):
        """Test pairing of list-valued items with data by index."""
        schema = {
            "type": "array",
            "items": [{"type": "string"}, {"type": "number"}],
            "minItems": 3,
        }
        node = build(schema, ["Homer", 39])
        assert [type(item) for item in node.items] == [StringNode, NumberNode]
        # No padding for positional items
        assert len(node.items) == 2
        assert node.errors == ["Must have at least 3 items"]

    def test_positional_surplus_items(self):
        """Test that entries beyond the item schemas are reported."""
        node = build({"type": "array", "items": [{"type": "string"}]}, ["a", "b"])
        assert node.errors == ["Unknown item: 1"]
        assert node.value() == ["a"]

    def test_missing_items_schema(self):
        """Test that entries without any item schema are reported."""
        node = build({"type": "array"}, [1])
        assert node.errors == ["Unknown item: 0"]
        assert node.items == []

    def test_non_list(self):
        """Test that non-list data is reported."""
        node = build({"type": "array", "items": {"type": "string"}}, "Homer")
        assert node.errors == ["Must be an array"]
        assert node.value() == []

    def test_remove_item(self):
        """Test removing an item by index."""
        node = build({"type": "array", "items": {"type": "number"}}, [10, 20, 30])
        node.remove_item(1)
        assert node.value() == [10, 30]

    def test_remove_item_out_of_range(self):
        """Test removing a missing item."""
        node = build({"type": "array", "items": {"type": "number"}}, [10])
        with pytest.raises(IndexError):
            node.remove_item(5)

    def test_add_and_set_item(self):
        """Test appending and replacing items."""
        node = build({"type": "array", "items": {"type": "string", "default": "?"}}, ["a"])
        node.add_item()
        assert node.value() == ["a", "?"]
        node.add_item("c")
        node.set_item(0, "z")
        assert node.value() == ["z", "?", "c"]

    def test_children_rebuilt_on_mutation(self):
        """Test that child nodes are recreated, not patched."""
        node = build({"type": "array", "items": {"type": "number"}}, [1, 2])
        first = node.items[0]
        node.set_data([1, 2])
        assert node.items[0] is not first
        assert node.items[0].value() == 1

    def test_failed_set_data_keeps_items(self):
        """Test that a schema error while rebuilding leaves the items as they were."""
        schema = {"type": "array", "items": [{"type": "string"}, {"$ref": "#/missing"}]}
        node = build(schema, ["x"])
        first = node.items[0]
        with pytest.raises(BrokenReferenceError):
            node.set_data(["y", "z"])
        assert node.value() == ["x"]
        assert node.items[0] is first
        assert node.errors == []

    def test_child_paths(self):
        """Test that children know their location."""
        node = build({"type": "array", "items": {"type": "number"}}, [1, 2])
        assert [item.path for item in node.items] == [(0,), (1,)]

    def test_not_inline(self):
        """Test the rendering hint."""
        assert build({"type": "array", "items": {"type": "number"}}).inline is False


class TestObjectNode:
    """Test ObjectNode behavior."""

    def test_properties(self, person_schema, homer):
        """Test that declared properties become children."""
        node = build(person_schema, homer)
        assert isinstance(node, ObjectNode)
        assert set(node.properties) == {"name", "age", "role", "children"}
        assert node.value() == homer
        assert node.valid()

    def test_required_property_synthesized(self):
        """Test that an absent required property gets an undefined child."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string", "minLength": 1}},
            "required": ["name"],
        }
        node = build(schema, {})
        assert "name" in node.properties
        assert node.properties["name"].value() == ""
        assert node.errors == []
        assert not node.valid()
        assert node.required("name")

    def test_required_uses_default(self):
        """Test that a synthesized child still applies its default."""
        schema = {
            "type": "object",
            "properties": {"age": {"type": "number", "default": 10}},
            "required": ["age"],
        }
        node = build(schema)
        assert node.value() == {"age": 10}
        assert node.valid()

    def test_required_without_schema(self):
        """Test that a required key with no schema is a schema defect."""
        with pytest.raises(SchemaError):
            build({"type": "object", "required": ["ghost"]}, {})

    def test_unknown_property(self):
        """Test that undeclared keys are reported and dropped."""
        schema = {"type": "object", "properties": {"name": {"type": "string"}}}
        node = build(schema, {"name": "Homer", "job": "safety"})
        assert node.errors == ["Unknown property: job"]
        assert "job" not in node.properties
        assert node.value() == {"name": "Homer"}
        assert not node.valid()

    def test_additional_properties_schema(self):
        """Test that an additionalProperties schema admits extra keys."""
        schema = {"type": "object", "additionalProperties": {"type": "number"}}
        node = build(schema, {"x": 1, "y": "two"})
        assert node.errors == []
        assert node.properties["y"].errors == ["Must be a number"]
        assert node.can_add_property()

    def test_boolean_additional_properties(self):
        """Test that boolean additionalProperties admits nothing."""
        node = build({"type": "object", "additionalProperties": True}, {"x": 1})
        assert node.errors == ["Unknown property: x"]
        assert not node.can_add_property()

    def test_declared_property_wins(self):
        """Test that properties take precedence over additionalProperties."""
        schema = {
            "type": "object",
            "properties": {"x": {"type": "string"}},
            "additionalProperties": {"type": "number"},
        }
        node = build(schema, {"x": "text"})
        assert isinstance(node.properties["x"], StringNode)

    def test_non_mapping(self):
        """Test that non-mapping data is reported but required keys remain."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"],
        }
        node = build(schema, ["Homer"])
        assert node.errors == ["Must be an object"]
        assert node.value() == {"name": ""}

    def test_add_and_remove_property(self, person_schema, homer):
        """Test adding and removing properties."""
        node = build(person_schema, homer)
        node.add_property("bio", "Works at the plant")
        assert node.value()["bio"] == "Works at the plant"
        node.remove_property("bio")
        assert "bio" not in node.value()

    def test_remove_required_property_resets_it(self, person_schema, homer):
        """Test that removing a required key brings it back undefined."""
        node = build(person_schema, homer)
        node.remove_property("name")
        assert node.properties["name"].value() == ""
        assert not node.valid()

    def test_remove_missing_property(self, person_schema, homer):
        """Test removing an absent key."""
        node = build(person_schema, homer)
        with pytest.raises(KeyError):
            node.remove_property("bio")

    def test_set_property(self, person_schema, homer):
        """Test replacing a property value."""
        node = build(person_schema, homer)
        node.set_property("age", -1)
        assert node.properties["age"].errors == ["Must be greater than or equal to 0"]
        assert not node.valid()

    def test_labels(self, person_schema):
        """Test labels from titles, including referenced ones."""
        node = build(person_schema, {})
        assert node.label("name") == "Name"
        assert node.label("nickname") == "Nickname"
        assert node.label("role") == "role"
        assert node.title == "Person"

    def test_children_rebuilt_on_mutation(self, person_schema, homer):
        """Test that child nodes are recreated, not patched."""
        node = build(person_schema, homer)
        name = node.properties["name"]
        node.set_data(node.value())
        assert node.properties["name"] is not name

    def test_failed_set_data_keeps_properties(self):
        """Test that a schema error while rebuilding leaves the properties as they were."""
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"$ref": "#/missing"}},
        }
        node = build(schema, {"a": "x", "c": 1})
        with pytest.raises(BrokenReferenceError):
            node.set_data({"a": "y", "b": "z"})
        assert node.value() == {"a": "x"}
        assert node.errors == ["Unknown property: c"]

    def test_nested_paths(self, person_schema, homer):
        """Test that nested children know their location."""
        node = build(person_schema, homer)
        assert node.properties["children"].items[2].path == ("children", 2)
        assert node.properties["children"].items[2].root is person_schema
