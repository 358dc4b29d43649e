"""Tests for the shapes module.

Matching compares property names only. Two schemas with the same names but
different property types are treated as the same shape; that is an accepted
precision tradeoff, pinned down by test_types_ignored.
"""

from typegen.shapes import ShapeIndex

_SCHEMAS: dict = {
    "Point": {
        "type": "object",
        "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
    },
    "Size": {
        "type": "object",
        "properties": {"y": {"type": "integer"}, "x": {"type": "integer"}},
    },
    "Label": {"type": "object", "properties": {"text": {"type": "string"}}},
    "Empty": {"type": "object", "properties": {}},
    "Alias": {"$ref": "#/components/schemas/Point"},
    "Plain": {"type": "string"},
}


class TestShapeIndex:
    """Test property-name-set lookup."""

    def setup_method(self):
        self.index = ShapeIndex.from_schemas(_SCHEMAS)

    def test_exact_match(self):
        schema = {"type": "object", "properties": {"text": {"type": "string"}}}
        assert self.index.match(schema) == "Label"

    def test_order_of_properties_ignored(self):
        schema = {"properties": {"y": {}, "x": {}}}
        assert self.index.match(schema) == "Point"

    def test_first_schema_in_document_order_wins(self):
        """Point and Size share a shape; Point comes first."""
        assert self.index.by_shape[frozenset({"x", "y"})] == "Point"

    def test_types_ignored(self):
        schema = {"properties": {"x": {"type": "string"}, "y": {"type": "boolean"}}}
        assert self.index.match(schema) == "Point"

    def test_subset_does_not_match(self):
        assert self.index.match({"properties": {"x": {}}}) is None

    def test_superset_does_not_match(self):
        assert self.index.match({"properties": {"x": {}, "y": {}, "z": {}}}) is None

    def test_no_properties(self):
        assert self.index.match({"type": "object"}) is None
        assert self.index.match({"type": "object", "properties": {}}) is None

    def test_reference_never_matches(self):
        assert self.index.match({"$ref": "#/components/schemas/Point"}) is None

    def test_non_dict(self):
        assert self.index.match(None) is None

    def test_skips_refs_and_shapeless_candidates(self):
        assert set(self.index.by_shape.values()) == {"Point", "Label"}

    def test_empty_table(self):
        assert ShapeIndex().match({"properties": {"x": {}}}) is None
