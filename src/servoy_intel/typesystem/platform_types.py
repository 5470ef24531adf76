"""
Mapping of platform (JVM-style) type codes to script types.

Type codes come from the platform reference catalog, e.g. ``java.lang.String``,
``I``, ``[Ljava.lang.Object;`` or ``[[I``.
"""

import logging
import re
from typing import Mapping, Optional

from ..models.type_info import TypeInfo
from .doc_types import parse_doc_type

logger = logging.getLogger(__name__)

PLATFORM_TYPE_MAP = {
    # Boxed and library types
    'java.lang.String': 'string',
    'java.lang.Integer': 'number',
    'java.lang.Double': 'number',
    'java.lang.Float': 'number',
    'java.lang.Long': 'number',
    'java.lang.Short': 'number',
    'java.lang.Number': 'number',
    'java.math.BigDecimal': 'number',
    'java.lang.Boolean': 'boolean',
    'java.util.Date': 'Date',
    'java.sql.Timestamp': 'Date',
    'java.sql.Time': 'Date',
    'java.sql.Date': 'Date',
    'java.util.List': 'Array<any>',
    'java.util.Map': 'Record<string, any>',
    'java.lang.Object': 'any',

    # Short primitive names
    'int': 'number',
    'long': 'number',
    'short': 'number',
    'double': 'number',
    'float': 'number',
    'char': 'string',
    'boolean': 'boolean',
    'void': 'void',
    'any': 'any',

    # Platform scripting types
    'com.servoy.j2db.scripting.JSLogger': 'JSLogger',
    'com.servoy.j2db.util.UUID': 'UUID',
    'com.servoy.j2db.scripting.JSMap': 'JSMap',
    'com.servoy.j2db.scripting.JSBlobLoaderBuilder': 'JSBlobLoaderBuilder',
    'com.servoy.j2db.dataprocessing.JSDataSet': 'JSDataSet',
    'com.servoy.j2db.scripting.JSWindow': 'JSWindow',

    # Rhino
    'org.mozilla.javascript.Function': 'Function',
    'org.mozilla.javascript.NativeArray': 'Array<any>',
    'org.mozilla.javascript.NativeObject': 'object',
}

PRIMITIVE_CODES = {
    'I': 'number',   # int
    'Z': 'boolean',
    'B': 'byte',
    'D': 'number',   # double
    'F': 'number',   # float
    'J': 'number',   # long
    'S': 'number',   # short
    'C': 'string',   # char
}

_ARRAY_CODE_RE = re.compile(r'^(\[+)(L?)([^;\[]+);?$')


def map_platform_type(type_code: Optional[str], alias_table: Optional[Mapping[str, str]] = None) -> TypeInfo:
    """
    Decode a platform type code.

    Resolution order: array signature, built-in map, suffix match against
    `alias_table` (qualified name -> scripting name), then an opaque type
    named after the raw code. Never raises.

    Args:
        type_code: JVM-style code; None or blank means ``any``
        alias_table: Qualified names of catalog objects to their scripting names

    Returns:
        The decoded TypeInfo
    """
    if type_code is None or not type_code.strip():
        return TypeInfo('any')
    type_code = type_code.strip()

    array_match = _ARRAY_CODE_RE.match(type_code)
    if array_match:
        brackets, object_marker, base = array_match.groups()
        if object_marker == 'L':
            inner = map_platform_type(base, alias_table)
        elif base in PRIMITIVE_CODES:
            inner = parse_doc_type(PRIMITIVE_CODES[base])
        else:
            logger.warning(f"Unknown primitive array base type: {base}")
            inner = TypeInfo(base)
        return inner.as_array(len(brackets))

    mapped = PLATFORM_TYPE_MAP.get(type_code)
    if mapped:
        return parse_doc_type(mapped)

    if alias_table:
        for qualified_name, scripting_name in alias_table.items():
            if type_code.endswith(qualified_name):
                return TypeInfo(scripting_name)

    logger.warning(f"Unknown platform type: {type_code}")
    return TypeInfo(type_code)
