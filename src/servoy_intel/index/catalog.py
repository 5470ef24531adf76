"""
Platform reference catalog parsing.

The catalog is a JSON document shaped like::

    {"servoydoc": {"runtime": {"object": [
        {"_scriptingName": "application",
         "_qualifiedName": "com.servoy.j2db.scripting.JSApplication",
         "description": "...",
         "functions": {"function": [
             {"_name": "output",
              "parameters": {"parameter": [{"_name": "msg", "_typecode": "java.lang.Object"}]},
              "return": {"_typecode": "void"},
              "descriptions": {"description": {"__cdata": "..."}}}]},
         "constants": {"constant": [...]},
         "properties": {"property": [...]}}]}}}

Single entries may appear as a dict instead of a one-element list.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..constants import NO_OBJECT_DESCRIPTION
from ..errors import CatalogError
from ..models import Function, Param, ScriptObject, Variable
from ..typesystem import map_platform_type

logger = logging.getLogger(__name__)

# Upper-case doc object for the globals scope; the lower-case `globals`
# entry is the one offered for completion.
GLOBALS_DOC_OBJECT = 'Globals'


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _cdata(container: Optional[Mapping[str, Any]], key: str) -> str:
    """Text of ``container[key]['__cdata']``, tolerating list-valued entries."""
    if not container:
        return ''
    entries = _as_list(container.get(key))
    if not entries or not isinstance(entries[0], Mapping):
        return ''
    return entries[0].get('__cdata', '') or ''


def _type_code(entry: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not entry:
        return None
    return entry.get('_typecode')


def _is_true(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.lower() == 'true')


class CatalogParser:
    """Converts the raw catalog document into ScriptObjects."""

    def __init__(self, alias_table: Mapping[str, str]):
        self.alias_table = alias_table

    def parse_object(self, obj: Mapping[str, Any]) -> ScriptObject:
        return ScriptObject(
            name=obj['_scriptingName'],
            functions=[self.parse_function(f) for f in _as_list((obj.get('functions') or {}).get('function'))],
            constants=[self.parse_constant(c) for c in _as_list((obj.get('constants') or {}).get('constant'))],
            properties=[self.parse_property(p) for p in _as_list((obj.get('properties') or {}).get('property'))],
            description=obj.get('description') or NO_OBJECT_DESCRIPTION,
        )

    def parse_function(self, func: Mapping[str, Any]) -> Function:
        params = []
        for param in _as_list((func.get('parameters') or {}).get('parameter')):
            params.append(Param(
                name=param['_name'],
                type=map_platform_type(param.get('_typecode'), self.alias_table),
                description=param.get('description') or '',
                optional=_is_true(param.get('_optional')),
            ))
        return Function(
            name=func['_name'],
            params=params,
            returns=map_platform_type(_type_code(func.get('return')), self.alias_table),
            description=_cdata(func.get('descriptions'), 'description'),
        )

    def parse_constant(self, constant: Mapping[str, Any]) -> Variable:
        deprecated = None
        if constant.get('_deprecated'):
            deprecated = constant.get('deprecated') or 'Deprecated'
        return Variable(
            name=constant['_name'],
            type=map_platform_type(_type_code(constant.get('return')), self.alias_table),
            description=_cdata(constant.get('descriptions'), 'description'),
            deprecated=deprecated,
        )

    def parse_property(self, prop: Mapping[str, Any]) -> Variable:
        return Variable(
            name=prop['_name'],
            type=map_platform_type(_type_code(prop.get('return')), self.alias_table),
            description=_cdata(prop.get('descriptions'), 'description'),
        )


def is_top_level_object(obj: Mapping[str, Any]) -> bool:
    """Whether a catalog object is offered as a top-level completion object."""
    scripting_name = obj.get('_scriptingName')
    if not scripting_name or scripting_name == GLOBALS_DOC_OBJECT:
        return False
    if obj.get('_extendsComponent'):
        return False
    simple_name = (obj.get('_qualifiedName') or '').rsplit('.', 1)[-1]
    if len(simple_name) > 1 and simple_name[0] == 'I' and simple_name[1].isupper():
        return False  # interface
    if scripting_name.startswith('JS'):
        return False  # value type such as JSDataSet, not a service object
    return True


def parse_platform_catalog(document: Mapping[str, Any]) -> List[ScriptObject]:
    """
    Build ScriptObjects from a parsed catalog document.

    Raises:
        CatalogError: If the document lacks the runtime object list
    """
    try:
        raw_objects = _as_list(document['servoydoc']['runtime']['object'])
    except (KeyError, TypeError) as e:
        raise CatalogError(f"Invalid platform catalog format: missing {e}") from e

    alias_table: Dict[str, str] = {}
    for obj in raw_objects:
        if obj.get('_qualifiedName') and obj.get('_scriptingName'):
            alias_table[obj['_qualifiedName']] = obj['_scriptingName']

    parser = CatalogParser(alias_table)
    objects = []
    for obj in raw_objects:
        if not is_top_level_object(obj):
            continue
        try:
            objects.append(parser.parse_object(obj))
        except (KeyError, TypeError) as e:
            logger.warning(f"Skipping malformed catalog object {obj.get('_scriptingName')}: {e}")
    return objects


def load_platform_catalog(path: str) -> List[ScriptObject]:
    """
    Read and parse the catalog file.

    Raises:
        CatalogError: If the file cannot be read or parsed
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except (OSError, TypeError, json.JSONDecodeError) as e:
        raise CatalogError(f"Error reading platform catalog '{path}': {e}") from e
    return parse_platform_catalog(document)
