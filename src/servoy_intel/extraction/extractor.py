"""
Declaration extraction for script files.

Turns one file into functions, top-level variables and constructor-style
classes, merging the syntax tree's shape with doc-comment typing.
"""

import logging
from typing import Iterator, List, Optional

import tree_sitter

from ..constants import (
    NO_CLASS_DESCRIPTION,
    NO_FUNCTION_DESCRIPTION,
    NO_PARAM_DESCRIPTION,
    NO_VARIABLE_DESCRIPTION,
)
from ..models import (
    UNKNOWN,
    VOID,
    Class,
    ExtractionResult,
    Function,
    Param,
    SourceLocation,
    Variable,
)
from .jsdoc import EXTENDS_TITLES, RETURN_TITLES, DocComment, parse_doc_comment
from .parser import ParsedScript, node_text, parse_script

logger = logging.getLogger(__name__)

FUNCTION_NODE_TYPES = {
    'function_declaration', 'generator_function_declaration',
    'function_expression', 'function', 'generator_function',
    'arrow_function', 'method_definition', 'class_body',
}
FUNCTION_VALUE_TYPES = {'function_expression', 'function', 'generator_function', 'arrow_function'}
LITERAL_NODE_TYPES = {'string', 'template_string', 'number', 'true', 'false', 'null', 'regex'}


def merge_params(doc_params: List[Param], ast_params: List[Param]) -> List[Param]:
    """
    Merge doc-declared parameters into the syntax tree's parameter list by name.

    Tree parameters keep their order; a doc entry with the same name supplies
    type, description and optionality. Doc entries with no tree counterpart
    are appended in doc order.
    """
    by_name = {p.name: p for p in doc_params}
    merged = []
    for ast_param in ast_params:
        doc_param = by_name.get(ast_param.name)
        if doc_param is None:
            merged.append(ast_param)
        else:
            merged.append(Param(ast_param.name, doc_param.type, doc_param.description,
                                doc_param.optional or ast_param.optional))

    seen = {p.name for p in merged}
    for doc_param in doc_params:
        if doc_param.name not in seen:
            merged.append(doc_param)
            seen.add(doc_param.name)
    return merged


class ScriptExtractor:
    """Extracts declarations from script source using tree-sitter."""

    def parse_file(self, file_path: str, content: str) -> ExtractionResult:
        """
        Extract declarations from source text.

        Raises:
            ScriptParseError: If the source does not parse
        """
        script = parse_script(content, file_path)
        result = ExtractionResult()

        for node in script.root.named_children:
            if node.type == 'function_declaration':
                self._process_function_declaration(script, node, result)

        for declarator in self._top_level_declarators(script.root):
            variable = self._process_declarator(script, declarator)
            if variable:
                result.variables.append(variable)

        return result

    # Functions and classes

    def _process_function_declaration(self, script: ParsedScript, node: tree_sitter.Node,
                                      result: ExtractionResult):
        name_node = node.child_by_field_name('name')
        if name_node is None:
            return
        name = node_text(name_node)
        doc = self._doc_for(script, node)
        ast_params = self._ast_params(node)
        body = node.child_by_field_name('body')
        member_assignments = list(self._this_assignments(body))

        if not member_assignments:
            result.functions.append(self._build_function(script, name, node, doc, ast_params))
            return

        cls = Class(
            name=name,
            description=(doc.description if doc and doc.description else NO_CLASS_DESCRIPTION),
            params=merge_params(doc.params() if doc else [], ast_params),
            location=self._location(script, node),
        )
        if doc:
            extends_tag = doc.first(EXTENDS_TITLES)
            if extends_tag and extends_tag.type_text:
                cls.extends = extends_tag.type_text

        for statement, member_name, value in member_assignments:
            member_doc = self._doc_for(script, statement)
            if value.type in FUNCTION_VALUE_TYPES:
                cls.methods.append(self._build_function(
                    script, member_name, statement, member_doc, self._ast_params(value)))
            elif value.type in LITERAL_NODE_TYPES:
                cls.variables.append(self._build_variable(script, member_name, statement, member_doc))

        result.classes.append(cls)

    def _build_function(self, script: ParsedScript, name: str, node: tree_sitter.Node,
                        doc: Optional[DocComment], ast_params: List[Param]) -> Function:
        function = Function(
            name=name,
            params=merge_params(doc.params() if doc else [], ast_params),
            returns=VOID,
            description=NO_FUNCTION_DESCRIPTION,
            location=self._location(script, node),
        )
        if doc:
            if doc.description:
                function.description = doc.description
            return_tag = doc.first(RETURN_TITLES)
            if return_tag:
                function.returns = return_tag.type
        return function

    def _ast_params(self, function_node: tree_sitter.Node) -> List[Param]:
        params_node = function_node.child_by_field_name('parameters')
        if params_node is None:
            # single-identifier arrow function: x => ...
            single = function_node.child_by_field_name('parameter')
            return [self._untyped_param(node_text(single))] if single is not None else []

        params = []
        for child in params_node.named_children:
            if child.type == 'identifier':
                params.append(self._untyped_param(node_text(child)))
            elif child.type == 'assignment_pattern':
                left = child.child_by_field_name('left')
                if left is not None and left.type == 'identifier':
                    params.append(self._untyped_param(node_text(left), optional=True))
            elif child.type == 'rest_pattern':
                for inner in child.named_children:
                    if inner.type == 'identifier':
                        params.append(self._untyped_param(node_text(inner), optional=True))
        return params

    @staticmethod
    def _untyped_param(name: str, optional: bool = False) -> Param:
        return Param(name, UNKNOWN, NO_PARAM_DESCRIPTION, optional)

    @staticmethod
    def _this_assignments(body: Optional[tree_sitter.Node]):
        """Yield (statement, member name, value node) for direct `this.x = value` statements."""
        if body is None:
            return
        for statement in body.named_children:
            if statement.type != 'expression_statement' or not statement.named_children:
                continue
            expression = statement.named_children[0]
            if expression.type != 'assignment_expression':
                continue
            left = expression.child_by_field_name('left')
            right = expression.child_by_field_name('right')
            if left is None or right is None or left.type != 'member_expression':
                continue
            target = left.child_by_field_name('object')
            prop = left.child_by_field_name('property')
            if target is not None and target.type == 'this' and prop is not None \
                    and prop.type == 'property_identifier':
                yield statement, node_text(prop), right

    # Variables

    def _top_level_declarators(self, node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
        for child in node.named_children:
            if child.type in FUNCTION_NODE_TYPES:
                continue
            if child.type == 'variable_declarator':
                yield child
            yield from self._top_level_declarators(child)

    def _process_declarator(self, script: ParsedScript, declarator: tree_sitter.Node) -> Optional[Variable]:
        name_node = declarator.child_by_field_name('name')
        if name_node is None or name_node.type != 'identifier':
            return None
        return self._build_variable(script, node_text(name_node), declarator,
                                    self._doc_for(script, declarator))

    def _build_variable(self, script: ParsedScript, name: str, node: tree_sitter.Node,
                        doc: Optional[DocComment]) -> Variable:
        variable = Variable(name, UNKNOWN, NO_VARIABLE_DESCRIPTION, location=self._location(script, node))
        if doc:
            if doc.description:
                variable.description = doc.description
            type_tag = doc.first({'type'})
            if type_tag and type_tag.type_text:
                variable.type = type_tag.type
            deprecated_tag = doc.first({'deprecated'})
            if deprecated_tag:
                variable.deprecated = deprecated_tag.description or "Deprecated"
        return variable

    # Helpers

    @staticmethod
    def _doc_for(script: ParsedScript, node: tree_sitter.Node) -> Optional[DocComment]:
        comment = script.comment_before(node)
        return parse_doc_comment(comment.value) if comment else None

    @staticmethod
    def _location(script: ParsedScript, node: tree_sitter.Node) -> SourceLocation:
        row, column = node.start_point
        return SourceLocation(script.file_path or "", row + 1, column)
