"""
Reader for structured doc comments.

Recognized tags: @type, @param (also @arg/@argument), @returns/@return,
@extends/@augments and @deprecated. Other tags are kept but ignored by
callers.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..constants import NO_PARAM_DESCRIPTION
from ..models import Param, TypeInfo
from ..typesystem import parse_doc_type

logger = logging.getLogger(__name__)

PARAM_TITLES = {'param', 'arg', 'argument'}
RETURN_TITLES = {'return', 'returns'}
EXTENDS_TITLES = {'extends', 'augments'}
_TYPED_TITLES = PARAM_TITLES | RETURN_TITLES | EXTENDS_TITLES | {'type', 'throws', 'property'}

_TAG_START_RE = re.compile(r'^@(\w+)')
_NAME_RE = re.compile(r'^(\[[^\]]*\]|[\w$.]+)')


@dataclass
class DocTag:
    title: str
    type_text: Optional[str] = None
    name: Optional[str] = None
    description: str = ""
    bracketed: bool = False  # name written as [name] or [name=default]

    @property
    def type(self) -> TypeInfo:
        resolved = parse_doc_type(self.type_text)
        return resolved.with_optional() if self.bracketed else resolved


@dataclass
class DocComment:
    description: str = ""
    tags: List[DocTag] = field(default_factory=list)

    def first(self, titles) -> Optional[DocTag]:
        for tag in self.tags:
            if tag.title.lower() in titles:
                return tag
        return None

    def all(self, titles) -> List[DocTag]:
        return [tag for tag in self.tags if tag.title.lower() in titles]

    def params(self) -> List[Param]:
        """Named @param tags as parameters, in tag order."""
        params = []
        for tag in self.all(PARAM_TITLES):
            if not tag.name:
                continue
            param_type = tag.type
            params.append(Param(
                name=tag.name,
                type=param_type,
                description=tag.description or NO_PARAM_DESCRIPTION,
                optional=param_type.optional,
            ))
        return params


def _unwrap(value: str) -> List[str]:
    """Strip leading `*` gutters from a block comment body."""
    lines = []
    for line in value.splitlines():
        stripped = line.strip()
        if stripped.startswith('*'):
            stripped = stripped[1:]
            if stripped.startswith(' '):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return lines


def _read_braced(text: str) -> Tuple[Optional[str], str]:
    """Split a leading balanced `{...}` off `text`; returns (inner, rest)."""
    if not text.startswith('{'):
        return None, text
    depth = 0
    for index, char in enumerate(text):
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return text[1:index].strip(), text[index + 1:].lstrip()
    logger.debug(f"Unbalanced type braces in doc tag: {text!r}")
    return text[1:].strip(), ""


def _parse_tag(title: str, body: str) -> DocTag:
    tag = DocTag(title=title)
    rest = body.strip()

    if title.lower() in _TYPED_TITLES:
        tag.type_text, rest = _read_braced(rest)

    lower = title.lower()
    if lower in PARAM_TITLES or lower == 'property':
        match = _NAME_RE.match(rest)
        if match:
            raw_name = match.group(1)
            rest = rest[match.end():].strip()
            if raw_name.startswith('['):
                tag.bracketed = True
                raw_name = raw_name[1:-1].split('=', 1)[0].strip()
            tag.name = raw_name or None
            if tag.type_text is None:
                # name-first form: @param x {string} ...
                tag.type_text, rest = _read_braced(rest)
    elif lower in EXTENDS_TITLES and tag.type_text is None:
        words = rest.split(None, 1)
        if words:
            tag.type_text = words[0]
            rest = words[1] if len(words) > 1 else ""

    if rest.startswith('- '):
        rest = rest[2:]
    tag.description = rest.strip()
    return tag


def parse_doc_comment(value: str) -> DocComment:
    """
    Parse the body of a comment (delimiters already removed).

    Args:
        value: Comment text, e.g. the part between `/*` and `*/`

    Returns:
        DocComment with free-text description and tags in source order
    """
    description_lines: List[str] = []
    raw_tags: List[Tuple[str, List[str]]] = []

    for line in _unwrap(value):
        match = _TAG_START_RE.match(line)
        if match:
            raw_tags.append((match.group(1), [line[match.end():]]))
        elif raw_tags:
            raw_tags[-1][1].append(line)
        else:
            description_lines.append(line)

    doc = DocComment(description='\n'.join(description_lines).strip())
    for title, body_lines in raw_tags:
        doc.tags.append(_parse_tag(title, '\n'.join(body_lines)))
    return doc
