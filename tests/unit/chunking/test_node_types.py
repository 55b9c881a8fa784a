"""Tests for the per-language boundary node-type table."""

from chunkforge.chunking.languages import SupportedLanguage
from chunkforge.chunking.node_types import (
    LANGUAGE_NODE_TYPES,
    get_boundary_node_types,
    get_node_category,
    get_node_types,
)


class TestNodeTypeTable:
    """Tests for LANGUAGE_NODE_TYPES and its lookups."""

    def test_every_language_has_entry(self):
        assert set(LANGUAGE_NODE_TYPES) == set(SupportedLanguage)

    def test_no_empty_categories(self):
        for language, table in LANGUAGE_NODE_TYPES.items():
            assert table, language
            for category, kinds in table.items():
                assert kinds, f"{language.value}.{category}"

    def test_python_boundary_types(self):
        kinds = get_boundary_node_types("python")
        assert {"function_definition", "class_definition"} <= kinds
        assert "import_from_statement" in kinds

    def test_typescript_extends_javascript(self):
        javascript = get_boundary_node_types("javascript")
        typescript = get_boundary_node_types("typescript")
        assert javascript < typescript
        assert "interface_declaration" in typescript
        assert "type_alias_declaration" in typescript

    def test_tsx_uses_typescript_table(self):
        assert get_node_types("tsx") == get_node_types("typescript")

    def test_unknown_language_uses_javascript(self):
        assert get_node_types("cobol") == get_node_types("javascript")

    def test_category_first_match(self):
        # function_definition is listed under functions and methods
        assert get_node_category("python", "function_definition") == "functions"

    def test_categories(self):
        assert get_node_category("rust", "impl_item") == "impls"
        assert get_node_category("go", "method_declaration") == "methods"
        assert get_node_category("css", "rule_set") == "rules"
        assert get_node_category("javascript", "arrow_function") == "functions"

    def test_unknown_node_type(self):
        assert get_node_category("python", "expression_statement") is None
