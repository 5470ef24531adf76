"""
Display formatting for functions: completion detail, markdown docs,
snippets and signature labels.
"""

from typing import List

from ..models import Function, Param
from ..typesystem import stringify_type


def _param_label(param: Param) -> str:
    return f"{param.name}{'?' if param.optional else ''}"


def format_signature_label(func: Function) -> str:
    """``name(a: string, b?: number)``"""
    params = ', '.join(f"{_param_label(p)}: {stringify_type(p.type)}" for p in func.params)
    return f"{func.name}({params})"


def format_function_detail(*funcs: Function) -> str:
    """One ``(method) name(params): returns`` line per overload."""
    return '\n'.join(
        f"(method) {format_signature_label(func)}: {stringify_type(func.returns)}"
        for func in funcs
    )


def format_function_docs(*funcs: Function) -> str:
    """Markdown documentation for one or more overloads."""
    sections: List[str] = []
    for func in funcs:
        doc = f"**{func.name}**\n\n_{func.description}_\n\n"
        for p in func.params:
            optional = '_(optional)_' if p.optional else ''
            doc += f"- **{p.name}** ({stringify_type(p.type)}){optional}: {p.description}\n"
        sections.append(doc)
    return '\n---\n'.join(sections)


def format_snippet(func: Function) -> str:
    """Insert-text snippet with tab stops; optional params are bracketed."""
    stops = []
    for index, p in enumerate(func.params, start=1):
        stop = f"${{{index}:{p.name}}}"
        stops.append(f"[{stop}]" if p.optional else stop)
    return f"{func.name}({','.join(stops)})"
