"""
Conditional Section Processor

Interprets the two marker dialects that templates use to place resume sections.

Dialect A (block conditional):
    {{#IF_NAME}} before {{NAME}} after {{/IF_NAME}}

Dialect B (loop templating):
    {{#NAME}} per-item body {{/NAME}}

Source text is first tokenized into a tree of PlainText / ConditionalBlock /
LoopBlock nodes, then each pass interprets the tree. Blocks a pass has no
resolution for are re-emitted verbatim; cleanup_placeholders() strips whatever
markers are still left at the end.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from vellum.contexts.templating.defaults import (
    ADDITIONAL_SECTIONS_MARKER,
    SECTION_DATA_FIELDS,
    SECTIONED_ORDER,
)
from vellum.contexts.templating.entity_renderers import (
    render_additional_sections,
    render_section,
)
from vellum.contexts.templating.escaping import escape_latex
from vellum.contexts.templating.latex_patterns import MarkerRegex
from vellum.contexts.templating.logger import _log_debug, log_cleanup_result
from vellum.contexts.templating.loop_items import LOOP_ITEM_VIEWS, ItemView
from vellum.contexts.templating.resume_data_structure import ResumeData
from vellum.contexts.templating.style_analyzer import TemplateStyle
from vellum.utils.text_processing import set_max_consecutive_blank_lines

MAX_CLEANUP_ITERATIONS = 15

SECTION_MARKER_RE = re.compile(MarkerRegex.SECTION_MARKER)
IF_BLOCK_RE = re.compile(MarkerRegex.IF_BLOCK)
UNLESS_BLOCK_RE = re.compile(MarkerRegex.UNLESS_BLOCK)
OPTIONAL_BLOCK_RE = re.compile(MarkerRegex.OPTIONAL_BLOCK)
RESIDUAL_CONDITIONAL_RE = re.compile(MarkerRegex.RESIDUAL_CONDITIONAL)
RESIDUAL_TOKEN_RE = re.compile(MarkerRegex.RESIDUAL_TOKEN)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass
class PlainText:
    text: str


@dataclass
class ConditionalBlock:
    """{{#IF_NAME}} children {{/IF_NAME}}"""

    name: str
    children: List["Node"] = field(default_factory=list)


@dataclass
class LoopBlock:
    """
    {{#NAME}} body {{/NAME}}

    body keeps the raw source between the markers; loop bodies are resolved
    per item from that text.
    """

    name: str
    body: str
    children: List["Node"] = field(default_factory=list)


Node = Union[PlainText, ConditionalBlock, LoopBlock]


def open_marker(name: str, conditional: bool) -> str:
    return "{{#" + ("IF_" if conditional else "") + name + "}}"


def close_marker(name: str, conditional: bool) -> str:
    return "{{/" + ("IF_" if conditional else "") + name + "}}"


@dataclass
class _OpenFrame:
    name: str
    conditional: bool
    marker: str
    body_start: int
    children: List[Node] = field(default_factory=list)


def _find_open_frame(stack: List[_OpenFrame], name: str, conditional: bool) -> Optional[int]:
    for depth in range(len(stack) - 1, -1, -1):
        if stack[depth].name == name and stack[depth].conditional == conditional:
            return depth
    return None


def tokenize_markers(text: str) -> List[Node]:
    """
    Split text into a tree of plain text, conditional blocks and loop blocks.

    A closing marker pairs with the innermost open marker of the same kind and
    name. Open markers that are never closed, and closing markers with no open
    partner, stay in the tree as plain text.

    Args:
        text: Template source

    Returns:
        Top-level nodes in source order

    Example:
        >>> tokenize_markers("a{{#IF_X}}b{{/IF_X}}")
        [PlainText(text='a'), ConditionalBlock(name='X', children=[PlainText(text='b')])]
    """
    root: List[Node] = []
    stack: List[_OpenFrame] = []

    def current() -> List[Node]:
        return stack[-1].children if stack else root

    def unwind(frame: _OpenFrame):
        target = current()
        target.append(PlainText(frame.marker))
        target.extend(frame.children)

    pos = 0
    for match in SECTION_MARKER_RE.finditer(text):
        if match.start() > pos:
            current().append(PlainText(text[pos:match.start()]))
        pos = match.end()

        name = match.group("name")
        conditional = match.group("conditional") is not None

        if match.group("closing") == "#":
            stack.append(_OpenFrame(name, conditional, match.group(0), match.end()))
            continue

        depth = _find_open_frame(stack, name, conditional)
        if depth is None:
            current().append(PlainText(match.group(0)))
            continue

        while len(stack) - 1 > depth:
            unwind(stack.pop())

        frame = stack.pop()
        if conditional:
            node = ConditionalBlock(name, frame.children)
        else:
            node = LoopBlock(name, text[frame.body_start:match.start()], frame.children)
        current().append(node)

    if pos < len(text):
        current().append(PlainText(text[pos:]))

    while stack:
        unwind(stack.pop())

    return root


def emit_nodes(nodes: List[Node]) -> str:
    """Reassemble nodes into source text, markers included."""
    parts = []
    for node in nodes:
        if isinstance(node, PlainText):
            parts.append(node.text)
        elif isinstance(node, ConditionalBlock):
            parts.append(open_marker(node.name, True))
            parts.append(emit_nodes(node.children))
            parts.append(close_marker(node.name, True))
        else:
            parts.append(open_marker(node.name, False) + node.body + close_marker(node.name, False))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Dialect A: block conditionals
# ---------------------------------------------------------------------------


def resolve_conditionals(text: str, fragments: Mapping[str, Optional[str]]) -> str:
    """
    Resolve {{#IF_NAME}} blocks against pre-rendered fragments.

    For each block whose NAME is a key of fragments:
    - fragment None (no data): the whole block is removed
    - block holds a {{NAME}} placeholder: before + fragment + after, or removed
      when the fragment is blank
    - block holds no placeholder: it acts as a gate and its body is kept

    Blocks for other names are left in place, with their bodies still resolved.

    Args:
        text: Template source
        fragments: Marker name -> rendered LaTeX, or None when there is no data

    Returns:
        Text with the named conditional blocks resolved
    """
    return _resolve_conditional_nodes(tokenize_markers(text), fragments)


def _resolve_conditional_nodes(nodes: List[Node], fragments: Mapping[str, Optional[str]]) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, ConditionalBlock):
            parts.append(_resolve_conditional_block(node, fragments))
        else:
            parts.append(emit_nodes([node]))
    return "".join(parts)


def _resolve_conditional_block(block: ConditionalBlock, fragments: Mapping[str, Optional[str]]) -> str:
    if block.name in fragments and fragments[block.name] is None:
        return ""

    inner = _resolve_conditional_nodes(block.children, fragments)
    if block.name not in fragments:
        return open_marker(block.name, True) + inner + close_marker(block.name, True)

    fragment = fragments[block.name]
    before, placeholder, after = inner.partition("{{" + block.name + "}}")
    if not placeholder:
        return inner
    if not fragment.strip():
        return ""
    return before + fragment + after


def inject_sections(template: str, resume: ResumeData, style: TemplateStyle) -> str:
    """
    Inject every resume section into a sectioned template through Dialect A.

    Each section is rendered with its entity renderer and placed at its own
    {{#IF_SECTION}} block; sections without entries have their blocks removed.
    Free-form additional sections use the ADDITIONAL_SECTIONS marker.
    """
    fragments: Dict[str, Optional[str]] = {}

    for kind in SECTIONED_ORDER:
        entries = getattr(resume, SECTION_DATA_FIELDS[kind])
        fragments[kind.value] = render_section(kind, entries, style) if entries else None

    fragments[ADDITIONAL_SECTIONS_MARKER] = (
        render_additional_sections(resume.additional_sections, style)
        if resume.additional_sections
        else None
    )

    present = [name for name, fragment in fragments.items() if fragment is not None]
    _log_debug(f"Injecting sections with data: {', '.join(present) or 'none'}")

    return resolve_conditionals(template, fragments)


# ---------------------------------------------------------------------------
# Dialect B: loop templating
# ---------------------------------------------------------------------------


def has_loop_markers(template: str) -> bool:
    """Check once whether the template opens a loop block for any known section."""
    return any(open_marker(kind.value, False) in template for kind in SECTIONED_ORDER)


def resolve_loops(text: str, items: Mapping[str, List[ItemView]]) -> str:
    """
    Expand {{#NAME}} loop blocks over per-item field views.

    For each NAME in items, its loop blocks are expanded once per view (instances
    joined with a newline). A NAME with no items has its loop blocks and its
    {{#IF_NAME}} blocks removed. Other blocks are re-emitted unchanged.

    Args:
        text: Template source
        items: Marker name -> item views (see loop_items.LOOP_ITEM_VIEWS)

    Returns:
        Text with the named loops expanded
    """
    return _resolve_loop_nodes(tokenize_markers(text), items)


def _resolve_loop_nodes(nodes: List[Node], items: Mapping[str, List[ItemView]]) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, PlainText):
            parts.append(node.text)
        elif isinstance(node, ConditionalBlock):
            if node.name in items and not items[node.name]:
                continue
            parts.append(open_marker(node.name, True))
            parts.append(_resolve_loop_nodes(node.children, items))
            parts.append(close_marker(node.name, True))
        elif node.name in items:
            parts.append("\n".join(render_loop_item(node.body, view) for view in items[node.name]))
        else:
            parts.append(emit_nodes([node]))
    return "".join(parts)


def render_loop_item(body: str, view: Mapping[str, Any]) -> str:
    """
    Resolve one loop-body instance against an item view.

    Constructs are resolved in a fixed order, each pass working on the output of
    the previous one:
    1. Array sub-loops ({{#field}} ... {{.}} ... {{/field}} for list fields)
    2. {{#if field}} / {{#unless field}} blocks
    3. Generic optional blocks ({{#field}} ... {{field}} ... {{/field}})
    4. Scalar substitution ({{field}})

    Example:
        >>> render_loop_item("{{name}}{{#if isCurrentJob}} (Present){{/if}}",
        ...                  {"name": "Analyst", "isCurrentJob": True})
        'Analyst (Present)'
    """
    result = _expand_sub_loops(body, view)
    result = _resolve_if_unless(result, view)
    result = _resolve_optional_blocks(result, view)
    return _substitute_scalars(result, view)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _expand_sub_loops(text: str, view: Mapping[str, Any]) -> str:
    for name, value in view.items():
        if not isinstance(value, list):
            continue

        pattern = re.compile(MarkerRegex.SUB_LOOP.replace("{field}", re.escape(name)))

        def expand(match, elements=value):
            instances = []
            for element in elements:
                instance = match.group(1)
                for token in MarkerRegex.ELEMENT_TOKENS:
                    instance = instance.replace(token, escape_latex(element))
                instances.append(instance)
            return "\n".join(instances)

        text = pattern.sub(expand, text)
    return text


def _resolve_if_unless(text: str, view: Mapping[str, Any]) -> str:
    text = IF_BLOCK_RE.sub(lambda m: m.group(2) if view.get(m.group(1)) else "", text)
    return UNLESS_BLOCK_RE.sub(lambda m: "" if view.get(m.group(1)) else m.group(2), text)


def _resolve_optional_blocks(text: str, view: Mapping[str, Any]) -> str:
    def resolve(match):
        name, content = match.group(1), match.group(2)
        value = view.get(name)
        if value is None or value == "":
            return ""
        return content.replace("{{" + name + "}}", _scalar_text(value))

    return OPTIONAL_BLOCK_RE.sub(resolve, text)


def _substitute_scalars(text: str, view: Mapping[str, Any]) -> str:
    for name, value in view.items():
        if isinstance(value, (str, int, float)):
            text = text.replace("{{" + name + "}}", _scalar_text(value))
    return text


def render_loop_sections(template: str, resume: ResumeData) -> str:
    """
    Run the loop dialect over every section, using LOOP_ITEM_VIEWS for item fields.

    Sections without entries lose their loop blocks and their {{#IF_SECTION}} blocks.
    """
    items: Dict[str, List[ItemView]] = {}
    for kind in SECTIONED_ORDER:
        to_view = LOOP_ITEM_VIEWS[kind]
        items[kind.value] = [to_view(entry) for entry in getattr(resume, SECTION_DATA_FIELDS[kind])]

    _log_debug("Expanding loop sections")
    return resolve_loops(template, items)


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------


def cleanup_placeholders(text: str, max_iterations: int = MAX_CLEANUP_ITERATIONS) -> str:
    """
    Strip unresolved markers until the text stops changing.

    Each iteration removes leftover {{#IF_...}} ... {{/IF_...}} blocks, then any
    remaining {{...}} token, then collapses runs of blank lines to one. Stops at
    a fixed point or after max_iterations.

    Args:
        text: Rendered LaTeX that may still contain markers
        max_iterations: Upper bound on cleanup iterations

    Returns:
        Text without marker syntax
    """
    removed = len(RESIDUAL_TOKEN_RE.findall(text))
    result = text
    iterations = 0

    while iterations < max_iterations:
        iterations += 1
        previous = result
        result = RESIDUAL_CONDITIONAL_RE.sub("", result)
        result = RESIDUAL_TOKEN_RE.sub("", result)
        result = set_max_consecutive_blank_lines(result, max_consecutive=1)
        if result == previous:
            break

    log_cleanup_result(removed, iterations)
    return result
