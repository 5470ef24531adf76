"""
Assignability, display and literal inference for TypeInfo values.
"""

from typing import Optional

from ..models.type_info import TypeInfo

# tree-sitter literal node type -> inferred type name
LITERAL_TYPES = {
    'string': 'string',
    'template_string': 'string',
    'number': 'number',
    'true': 'boolean',
    'false': 'boolean',
    'null': 'null',
    'regex': 'RegExp',
}


def is_assignable(source: TypeInfo, target: TypeInfo) -> bool:
    """
    Whether a value of type `source` may be passed where `target` is expected.

    ``any`` accepts everything; otherwise names must match and both sides
    must agree on being an array. Generic arguments are not compared.
    """
    if target.name == 'any':
        return True
    return source.name == target.name and source.is_array == target.is_array


def stringify_type(type_info: TypeInfo) -> str:
    """Render a type as ``name<arg, ...>`` with a trailing ``[]`` for arrays of any depth."""
    text = type_info.name
    if type_info.generic_args:
        text += '<' + ', '.join(stringify_type(arg) for arg in type_info.generic_args) + '>'
    if type_info.is_array:
        text += '[]'
    return text


def infer_literal_type(node_type: str) -> Optional[TypeInfo]:
    """Type of a literal syntax node, or None if the node is not a literal."""
    name = LITERAL_TYPES.get(node_type)
    return TypeInfo(name) if name else None
