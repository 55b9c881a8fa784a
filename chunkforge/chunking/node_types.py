"""
Boundary node types per grammar.

Maps each supported language to categories of tree-sitter node kinds that
count as chunk boundaries. The table is keyed by the closed
SupportedLanguage enum; a language added to the enum without an entry
here fails at import time.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from chunkforge.chunking.languages import SupportedLanguage, require_all_languages

NodeTypeTable = Dict[str, Tuple[str, ...]]

_JAVASCRIPT: NodeTypeTable = {
    "functions": ("function_declaration", "function_expression", "arrow_function"),
    "classes": ("class_declaration",),
    "methods": ("method_definition",),
    "imports": ("import_statement",),
    "variables": ("variable_declaration", "lexical_declaration"),
}

_TYPESCRIPT: NodeTypeTable = {
    **_JAVASCRIPT,
    "interfaces": ("interface_declaration",),
    "types": ("type_alias_declaration",),
}

LANGUAGE_NODE_TYPES: Dict[SupportedLanguage, NodeTypeTable] = {
    SupportedLanguage.JAVASCRIPT: _JAVASCRIPT,
    SupportedLanguage.TYPESCRIPT: _TYPESCRIPT,
    SupportedLanguage.TSX: _TYPESCRIPT,
    SupportedLanguage.PYTHON: {
        "functions": ("function_definition",),
        "classes": ("class_definition",),
        "methods": ("function_definition",),
        "imports": ("import_statement", "import_from_statement"),
        "variables": ("assignment",),
    },
    SupportedLanguage.GO: {
        "functions": ("function_declaration",),
        "methods": ("method_declaration",),
        "types": ("type_declaration",),
        "imports": ("import_declaration",),
        "variables": ("var_declaration", "const_declaration", "short_var_declaration"),
    },
    SupportedLanguage.RUST: {
        "functions": ("function_item",),
        "structs": ("struct_item",),
        "impls": ("impl_item",),
        "traits": ("trait_item",),
        "imports": ("use_declaration",),
        "variables": ("let_declaration",),
    },
    SupportedLanguage.JAVA: {
        "functions": ("method_declaration",),
        "classes": ("class_declaration",),
        "interfaces": ("interface_declaration",),
        "imports": ("import_declaration",),
        "variables": ("local_variable_declaration",),
    },
    SupportedLanguage.RUBY: {
        "functions": ("method",),
        "classes": ("class",),
        "modules": ("module",),
        "imports": ("require", "load"),
        "variables": ("assignment",),
    },
    SupportedLanguage.C: {
        "functions": ("function_definition",),
        "structs": ("struct_specifier",),
        "enums": ("enum_specifier",),
        "typedefs": ("type_definition",),
        "includes": ("preproc_include",),
        "variables": ("declaration",),
    },
    SupportedLanguage.CPP: {
        "functions": ("function_definition",),
        "classes": ("class_specifier",),
        "structs": ("struct_specifier",),
        "namespaces": ("namespace_definition",),
        "templates": ("template_declaration",),
        "includes": ("preproc_include",),
        "variables": ("declaration",),
    },
    SupportedLanguage.HTML: {
        "elements": ("element",),
        "scripts": ("script_element",),
        "styles": ("style_element",),
    },
    SupportedLanguage.CSS: {
        "rules": ("rule_set",),
        "media": ("media_statement",),
        "keyframes": ("keyframes_statement",),
        "imports": ("import_statement",),
    },
    SupportedLanguage.BASH: {
        "functions": ("function_definition",),
        "commands": ("command",),
        "variables": ("variable_assignment",),
    },
}

require_all_languages(LANGUAGE_NODE_TYPES, "LANGUAGE_NODE_TYPES")

DEFAULT_LANGUAGE = SupportedLanguage.JAVASCRIPT


def _resolve(language: str) -> SupportedLanguage:
    try:
        return SupportedLanguage(language)
    except ValueError:
        return DEFAULT_LANGUAGE


def get_node_types(language: str) -> NodeTypeTable:
    """Category table for a language; unknown languages use JavaScript's."""
    return LANGUAGE_NODE_TYPES[_resolve(language)]


def get_boundary_node_types(language: str) -> FrozenSet[str]:
    """Flattened set of every boundary node kind for a language."""
    return frozenset(
        node_type for kinds in get_node_types(language).values() for node_type in kinds
    )


def get_node_category(language: str, node_type: str) -> Optional[str]:
    """First category listing node_type, in table order."""
    for category, kinds in get_node_types(language).items():
        if node_type in kinds:
            return category
    return None
