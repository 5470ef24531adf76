"""
Call-site overload checking for an open document.

Every `object.method(args)` call whose object is a known ScriptObject is
checked against that object's overloads. Argument types come from literals
and from variables whose type is known from a literal initializer or an
`@type` doc comment. Anything else is `any` and always compatible.

All mutable state lives in a `_CallChecker` created per `analyze()` call, so
concurrent analyses never interact.
"""

import logging
from typing import Dict, List, Optional, Sequence

import tree_sitter

from ..config import AnalyzerConfig
from ..errors import ScriptParseError
from ..extraction import ParsedScript, node_text, parse_doc_comment, parse_script
from ..index import SymbolIndex
from ..models import ANY, Function, Param, TypeInfo
from ..typesystem import infer_literal_type, is_assignable, stringify_type
from .models import Diagnostic, Position, Range, Severity

logger = logging.getLogger(__name__)

Scope = Dict[str, Optional[TypeInfo]]  # None marks an untracked name

_DECLARATION_TYPES = {'lexical_declaration', 'variable_declaration'}

# traversal markers
_VISIT, _BIND, _POP_SCOPE = range(3)


def format_overload_message(full_name: str, mismatches: Sequence[str]) -> str:
    return f"No matching overload found for function '{full_name}'.\n" + ';\n'.join(mismatches)


class DiagnosticEngine:
    """Produces diagnostics for a document against a ready SymbolIndex."""

    def __init__(self, symbol_index: SymbolIndex, config: Optional[AnalyzerConfig] = None):
        self.symbol_index = symbol_index
        self.config = config or AnalyzerConfig()

    def analyze(self, text: str, uri: Optional[str] = None) -> Optional[List[Diagnostic]]:
        """
        Check every call site in `text`.

        Args:
            text: Full document content
            uri: Document identifier, used in log messages

        Returns:
            Diagnostics in document order, or None if the document does not
            parse (callers keep whatever they published before)
        """
        try:
            script = parse_script(text, uri)
        except ScriptParseError as e:
            logger.error(f"Diagnostics skipped: {e}")
            return None

        checker = _CallChecker(self, script)
        checker.run()
        return checker.diagnostics

    def is_compatible(self, actual: TypeInfo, param: Param) -> bool:
        if actual.name == 'null' and param.optional:
            return True
        if self.config.allow_unknown_actuals and 'unknown' in (actual.name, param.type.name):
            return True
        return is_assignable(actual, param.type)

    def match_overload(self, func: Function, arg_types: Sequence[TypeInfo]) -> List[str]:
        """Mismatch lines for calling `func` with `arg_types`; empty if it matches."""
        mismatches = []
        for index, actual in enumerate(arg_types):
            if index >= len(func.params):
                mismatches.append(f"Argument {index + 1}: unexpected")
                continue
            param = func.params[index]
            if not self.is_compatible(actual, param):
                mismatches.append(f"Argument {index + 1} ('{param.name}'): expected "
                                  f"{stringify_type(param.type)}, got {stringify_type(actual)}")

        required = func.required_count
        total = len(func.params)
        if not required <= len(arg_types) <= total:
            mismatches.append(f"Incorrect number of arguments: expected {required}-{total}, "
                              f"got {len(arg_types)}")
        return mismatches


class _CallChecker:
    """Single-use walker holding the scope stack for one document."""

    def __init__(self, engine: DiagnosticEngine, script: ParsedScript):
        self.engine = engine
        self.script = script
        self.scopes: List[Scope] = [{}]
        self.diagnostics: List[Diagnostic] = []
        self._lines = script.source.split(b'\n')

    def run(self):
        work = [(_VISIT, self.script.root)]
        while work:
            action, node = work.pop()
            if action == _POP_SCOPE:
                self.scopes.pop()
                continue
            if action == _BIND:
                self._bind(node)
                continue

            if node.type == 'statement_block':
                self.scopes.append(dict(self.scopes[-1]))
                work.append((_POP_SCOPE, node))
            elif node.type == 'variable_declarator':
                work.append((_BIND, node))
            elif node.type == 'call_expression':
                self._check_call(node)

            work.extend((_VISIT, child) for child in reversed(node.named_children))

    # Bindings

    def _bind(self, declarator: tree_sitter.Node):
        name_node = declarator.child_by_field_name('name')
        if name_node is None or name_node.type != 'identifier':
            return
        name = node_text(name_node)

        declared = self._declared_type(declarator)
        if declared is None:
            value = declarator.child_by_field_name('value')
            declared = infer_literal_type(value.type) if value is not None else None

        self.scopes[-1][name] = declared

    def _declared_type(self, declarator: tree_sitter.Node) -> Optional[TypeInfo]:
        statement = declarator.parent
        anchor = statement if statement is not None and statement.type in _DECLARATION_TYPES else declarator
        comment = self.script.comment_before(anchor)
        if comment is None or not comment.is_doc_block:
            return None
        type_tag = parse_doc_comment(comment.value).first({'type'})
        if type_tag is None or not type_tag.type_text:
            return None
        return type_tag.type

    def _lookup(self, name: str) -> TypeInfo:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name] or ANY
        return ANY

    # Calls

    def _argument_type(self, node: tree_sitter.Node) -> TypeInfo:
        literal = infer_literal_type(node.type)
        if literal is not None:
            return literal
        if node.type == 'identifier':
            return self._lookup(node_text(node))
        return ANY

    def _check_call(self, node: tree_sitter.Node):
        callee = node.child_by_field_name('function')
        arguments = node.child_by_field_name('arguments')
        if callee is None or callee.type != 'member_expression':
            return
        if arguments is None or arguments.type != 'arguments':
            return
        target = callee.child_by_field_name('object')
        prop = callee.child_by_field_name('property')
        if target is None or target.type != 'identifier':
            return
        if prop is None or prop.type != 'property_identifier':
            return

        object_name = node_text(target)
        method_name = node_text(prop)
        obj = self.engine.symbol_index.lookup(object_name)
        if obj is None:
            return
        overloads = obj.overloads(method_name)
        if not overloads:
            return

        arg_types = [self._argument_type(arg) for arg in arguments.named_children if arg.type != 'comment']

        best: Optional[List[str]] = None
        for func in overloads:
            mismatches = self.engine.match_overload(func, arg_types)
            if not mismatches:
                return
            if best is None or len(mismatches) < len(best):
                best = mismatches

        full_name = f"{object_name}.{method_name}"
        self.diagnostics.append(Diagnostic(
            message=format_overload_message(full_name, best),
            range=Range(self._position(node.start_point), self._position(node.end_point)),
            severity=Severity.ERROR,
            mismatches=best,
        ))

    def _position(self, point) -> Position:
        row, byte_column = point
        line = self._lines[row] if row < len(self._lines) else b''
        return Position(row, len(line[:byte_column].decode('utf-8', errors='replace')))
