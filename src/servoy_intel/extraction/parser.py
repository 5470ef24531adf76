"""
tree-sitter parsing with a line-indexed comment map.

Parsing runs in two passes: the first collects every comment that is
immediately followed (on the next line) by a code token into a read-only
map keyed by that next line, the second (in the callers) walks declarations
and looks comments up by their start line.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional

import tree_sitter
from tree_sitter_javascript import language

from ..errors import ScriptParseError

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(language())


@dataclass(frozen=True)
class Comment:
    """A source comment with its delimiters stripped."""

    value: str
    is_block: bool
    start_line: int  # 1-based
    end_line: int  # 1-based

    @property
    def is_doc_block(self) -> bool:
        """True for `/** ... */` style comments."""
        return self.is_block and self.value.startswith('*')


@dataclass(frozen=True)
class ParsedScript:
    """A parsed source file: syntax tree root plus the adjacency comment map."""

    root: tree_sitter.Node
    source: bytes
    comments: Mapping[int, Comment]  # line after the comment's last line -> comment
    file_path: Optional[str] = None

    def comment_before(self, node: tree_sitter.Node) -> Optional[Comment]:
        """The comment ending exactly one line above `node`, if any."""
        return self.comments.get(start_line(node))


def start_line(node: tree_sitter.Node) -> int:
    return node.start_point[0] + 1


def node_text(node: tree_sitter.Node) -> str:
    return node.text.decode('utf-8', errors='replace')


def _iter_leaves(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield leaf tokens (comments included) in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == 'comment' or node.child_count == 0:
            yield node
            continue
        stack.extend(reversed(node.children))


def _to_comment(node: tree_sitter.Node) -> Comment:
    text = node_text(node)
    is_block = text.startswith('/*')
    value = text[2:-2] if is_block else text[2:]
    return Comment(value, is_block, start_line(node), node.end_point[0] + 1)


def _collect_comments(root: tree_sitter.Node) -> Mapping[int, Comment]:
    by_next_line = {}
    pending: List[Comment] = []

    for leaf in _iter_leaves(root):
        if leaf.type == 'comment':
            pending.append(_to_comment(leaf))
            continue
        if leaf.start_byte == leaf.end_byte:
            continue  # zero-width tokens (automatic semicolons)
        line = start_line(leaf)
        for comment in pending:
            if comment.end_line + 1 == line:
                by_next_line[line] = comment
                break
        pending = []

    return MappingProxyType(by_next_line)


def _first_error_line(root: tree_sitter.Node) -> Optional[int]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == 'ERROR' or node.is_missing:
            return start_line(node)
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_script(content: str, file_path: Optional[str] = None) -> ParsedScript:
    """
    Parse script source.

    Args:
        content: Source text
        file_path: Used for error messages and declaration locations

    Returns:
        ParsedScript with the syntax tree and comment map

    Raises:
        ScriptParseError: If the source contains syntax errors
    """
    source = content.encode('utf8')
    parser = tree_sitter.Parser(_JS_LANGUAGE)
    tree = parser.parse(source)

    if tree.root_node.has_error:
        raise ScriptParseError("syntax error", file_path, _first_error_line(tree.root_node))

    return ParsedScript(tree.root_node, source, _collect_comments(tree.root_node), file_path)
