"""
Markdown renderer shared by every markdown dialect.

Renders the section list into markdown that `markdown_parser` reads back
into the same sections. Tools sections are never rendered here: dialects
with a tool concept put them in frontmatter or JSON.
"""

import re
from typing import List, Optional

from core.canonical_models import (
    CanonicalPackage, ContextSection, CustomSection, Dialect, Example,
    ExamplesSection, InstructionsSection, MetadataSection, PersonaSection,
    Priority, RulesSection, SectionType, ToolsSection
)

from .markdown_parser import classify_heading

MAX_HEADING_DESCRIPTION = 120
LEADING_BACKTICKS = re.compile(r'^[ \t]*(`+)', re.MULTILINE)


def render_heading(title: str, level: int = 2) -> str:
    return f"{'#' * level} {title}"


def render_persona(persona: PersonaSection) -> str:
    role = persona.role.rstrip('.')
    sentence = f"You are {persona.name}, {role}." if persona.name else f"You are {role}."
    lines = [sentence]
    traits = []
    if persona.style:
        traits.append(f"Style: {', '.join(persona.style)}")
    if persona.expertise:
        traits.append(f"Expertise: {', '.join(persona.expertise)}")
    if traits:
        lines.append('')
        lines.extend(traits)
    return '\n'.join(lines)


def render_rules(section: RulesSection) -> str:
    lines: List[str] = []
    for index, rule in enumerate(section.items, 1):
        marker = f"{index}." if section.ordered else '-'
        indent = ' ' * (len(marker) + 1)
        first, *rest = rule.content.split('\n')
        lines.append(f"{marker} {first}")
        lines.extend(f"{indent}{line}" for line in rest)
        if rule.rationale:
            lines.append(f"{indent}- *Rationale: {rule.rationale}*")
        for snippet in rule.examples:
            lines.append(f"{indent}- Example: `{snippet}`")
    return '\n'.join(lines)


def render_rules_as_prose(section: RulesSection) -> str:
    """Collapse a rules list into a paragraph of sentences."""
    sentences = []
    for rule in section.items:
        sentence = ' '.join(rule.content.split())
        if rule.rationale:
            sentence = f"{sentence.rstrip('.')} ({rule.rationale.rstrip('.')})"
        if not sentence.endswith(('.', '!', '?')):
            sentence += '.'
        sentences.append(sentence)
    return ' '.join(sentences)


def _example_label(example: Example) -> Optional[str]:
    if example.good is True:
        return '✅ Good'
    if example.good is False:
        return '❌ Bad'
    return None


def code_fence(code: str) -> str:
    """Backtick fence longer than any backtick run opening a line of `code`."""
    longest = max((len(match.group(1)) for match in LEADING_BACKTICKS.finditer(code)), default=0)
    return '`' * max(3, longest + 1)


def render_example(example: Example) -> str:
    parts: List[str] = []
    label = _example_label(example)
    description = example.description.strip()
    short = description and '\n' not in description and len(description) <= MAX_HEADING_DESCRIPTION

    if label and short:
        parts.append(render_heading(f"{label}: {description}", 3))
    elif label:
        parts.append(render_heading(label, 3))
        if description:
            parts.append(description)
    elif short:
        parts.append(render_heading(description, 3))
    elif description:
        parts.append(description)

    fence = code_fence(example.code)
    parts.append(f"{fence}{example.language or ''}\n{example.code}\n{fence}")
    return '\n\n'.join(parts)


def render_examples(section: ExamplesSection) -> str:
    return '\n\n'.join(render_example(example) for example in section.examples)


def _titled(title: str, fallback: str, kind: SectionType) -> str:
    """Keep a heading that the parser will classify back into `kind`."""
    title = title or fallback
    if classify_heading(title) != kind:
        title = f"{title} {fallback}"
    return title


def render_metadata(metadata: MetadataSection, include_title: bool = True,
                    include_description: bool = False) -> List[str]:
    blocks = []
    if include_title and metadata.title:
        title = f"{metadata.icon} {metadata.title}" if metadata.icon else metadata.title
        blocks.append(render_heading(title, 1))
    if include_description and metadata.description:
        blocks.append(metadata.description)
    return blocks


def render_body(pkg: CanonicalPackage, dialect: Dialect, include_title: bool = True,
                include_description: bool = False, collapse_rules: bool = False) -> str:
    """
    Render a package body as markdown.

    Args:
        pkg: Package to render
        dialect: Target dialect; custom sections owned by it are restored
            verbatim, all others are skipped
        include_title: Emit the metadata title as a `#` heading
        include_description: Emit the description as the first paragraph
        collapse_rules: Render rules as prose instead of a list

    Returns:
        Markdown text without trailing newline
    """
    blocks: List[str] = []
    metadata = pkg.metadata_section()
    if metadata is not None:
        blocks.extend(render_metadata(metadata, include_title, include_description))

    # Raw title of the block currently open. Consecutive sections sharing a
    # title render under one heading, the way the parser splits them. A block
    # holds at most one rules list, so back-to-back rules sections each get
    # their own heading.
    current = None
    after_rules = False
    for section in pkg.sections:
        if isinstance(section, MetadataSection) or isinstance(section, ToolsSection):
            continue
        if isinstance(section, CustomSection) and (section.dialect != dialect.value
                                                   or section.executable):
            continue
        follows_rules, after_rules = after_rules, isinstance(section, RulesSection)

        if isinstance(section, InstructionsSection):
            content = section.content
            if section.priority == Priority.HIGH:
                content = f"**Important:** {content}"
            title = section.title or ('Instructions' if current is not None else '')
            if title and title != current:
                blocks.append(render_heading(title))
                current = title
            blocks.append(content)

        elif isinstance(section, RulesSection):
            title = section.title or 'Rules'
            if collapse_rules:
                if title != current or follows_rules:
                    blocks.append(render_heading(title))
                blocks.append(render_rules_as_prose(section))
            else:
                if (title != current or follows_rules
                        or classify_heading(title) != SectionType.RULES):
                    blocks.append(render_heading(_titled(title, 'Rules', SectionType.RULES)))
                blocks.append(render_rules(section))
            current = title

        elif isinstance(section, ExamplesSection):
            title = section.title or 'Examples'
            blocks.append(render_heading(title))
            blocks.append(render_examples(section))
            current = title

        elif isinstance(section, PersonaSection):
            if current is not None:
                blocks.append(render_heading('Persona'))
                current = 'Persona'
            blocks.append(render_persona(section))

        elif isinstance(section, ContextSection):
            title = section.title or 'Context'
            blocks.append(render_heading(_titled(title, 'Context', SectionType.CONTEXT)))
            blocks.append(section.content)
            current = title

        elif isinstance(section, CustomSection):
            blocks.append(section.content)

    return '\n\n'.join(blocks)
