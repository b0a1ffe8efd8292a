"""
Heuristic markdown body parser shared by every markdown dialect.

The body is split on level-1/2 headings (headings inside fenced code do not
count). The first `#` heading is the package title; text before the first
`##` is the lead. Each `##` block is then classified by its heading:

- example(s)                                 -> examples
- rules / guidelines / principles / conventions / standards / best practices,
  when the block holds list items            -> rules
- persona / role / identity                  -> persona
- context / background                       -> context
- any other block containing fenced code     -> examples
- everything else                            -> instructions titled with
  the heading text

The last rule is the ambiguous-heading policy: a heading that names no known
section becomes an instructions section. It is deliberate and covered by
tests; see DESIGN.md before changing it.

A fenced code block that is never closed cannot be mapped and is preserved
verbatim as a custom section through the PackageBuilder.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.canonical_models import (
    ContextSection, Example, ExamplesSection, InstructionsSection,
    PersonaSection, Priority, Rule, RulesSection, SectionType
)

from .builder import PackageBuilder

HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.*?)\s*#*\s*$')
FENCE_OPEN_PATTERN = re.compile(r'^\s*(`{3,}|~{3,})\s*([\w+#.-]*)')
LIST_ITEM_PATTERN = re.compile(r'^(\s*)([-*+]|\d+[.)])\s+(.*)$')
SUBHEADING_PATTERN = re.compile(r'^#{3,6}\s+(.*?)\s*#*\s*$')
IMPORTANT_PATTERN = re.compile(r'^\*\*important:?\*\*:?\s*', re.IGNORECASE)
RATIONALE_PATTERN = re.compile(r'^\*?(?:rationale|why):\s*(.*?)\*?$', re.IGNORECASE)
RULE_EXAMPLE_PATTERN = re.compile(r'^example:\s*(.*)$', re.IGNORECASE)
PERSONA_TRAIT_PATTERN = re.compile(r'^(style|expertise):\s*(.*)$', re.IGNORECASE)
EXAMPLE_LABEL_PATTERN = re.compile(
    r'^(good|bad|correct|incorrect|preferred)(?:\s+example)?\s*(?::|$)\s*(.*)$',
    re.IGNORECASE | re.DOTALL,
)

HEADING_KEYWORDS = [
    (SectionType.EXAMPLES, re.compile(r'\bexamples?\b', re.IGNORECASE)),
    (SectionType.RULES, re.compile(
        r"\b(rules?|guidelines?|principles?|conventions?|standards?|best practices?"
        r"|do'?s and don'?ts)\b", re.IGNORECASE)),
    (SectionType.PERSONA, re.compile(r'\b(persona|role|identity)\b', re.IGNORECASE)),
    (SectionType.CONTEXT, re.compile(r'\b(context|background)\b', re.IGNORECASE)),
]

GOOD_MARKERS = ('✅', '✓', '👍')
BAD_MARKERS = ('❌', '✗', '✘', '👎', '🚫')


@dataclass
class MarkdownBlock:
    """A `##` block. `title` is None for the lead."""
    title: Optional[str]
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return '\n'.join(self.lines).strip('\n')


@dataclass
class MarkdownDocument:
    title: Optional[str]
    lead: MarkdownBlock
    blocks: List[MarkdownBlock]


def _closes_fence(line: str, marker: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(marker) and not stripped.strip(marker[0])


def split_document(body: str) -> MarkdownDocument:
    """Split a markdown body into title, lead and `##` blocks."""
    title = None
    lead = MarkdownBlock(None)
    blocks: List[MarkdownBlock] = []
    current = lead
    fence_marker = None

    for line in body.split('\n'):
        if fence_marker:
            if _closes_fence(line, fence_marker):
                fence_marker = None
            current.lines.append(line)
            continue

        fence = FENCE_OPEN_PATTERN.match(line)
        if fence:
            fence_marker = fence.group(1)
            current.lines.append(line)
            continue

        heading = HEADING_PATTERN.match(line)
        if heading and len(heading.group(1)) <= 2:
            text = heading.group(2)
            if len(heading.group(1)) == 1 and title is None and not blocks:
                title = text
                continue
            current = MarkdownBlock(text)
            blocks.append(current)
            continue

        current.lines.append(line)

    return MarkdownDocument(title=title, lead=lead, blocks=blocks)


def classify_heading(title: Optional[str]) -> Optional[SectionType]:
    """Map a heading to the section type it names, or None if it names none."""
    if not title:
        return None
    for section_type, pattern in HEADING_KEYWORDS:
        if pattern.search(title):
            return section_type
    return None


def split_icon(title: str) -> Tuple[Optional[str], str]:
    """Split a leading emoji/symbol token off a title: '🔧 Tools' -> ('🔧', 'Tools')."""
    parts = title.split(None, 1)
    if len(parts) == 2 and not any(ch.isalnum() for ch in parts[0]):
        return parts[0], parts[1]
    return None, title


def has_fence(lines: List[str]) -> bool:
    return any(FENCE_OPEN_PATTERN.match(line) for line in lines)


def has_list_items(lines: List[str]) -> bool:
    fence_marker = None
    for line in lines:
        if fence_marker:
            if _closes_fence(line, fence_marker):
                fence_marker = None
            continue
        fence = FENCE_OPEN_PATTERN.match(line)
        if fence:
            fence_marker = fence.group(1)
        elif LIST_ITEM_PATTERN.match(line):
            return True
    return False


def _apply_sub_item(rule: Rule, text: str) -> None:
    rationale = RATIONALE_PATTERN.match(text)
    if rationale:
        rule.rationale = rationale.group(1).strip()
        return
    example = RULE_EXAMPLE_PATTERN.match(text)
    if example:
        value = example.group(1).strip()
        if len(value) >= 2 and value.startswith('`') and value.endswith('`'):
            value = value[1:-1]
        rule.examples.append(value)
        return
    rule.content = f"{rule.content}\n- {text}"


def parse_rules(lines: List[str]) -> Tuple[str, List[Rule], str, bool]:
    """
    Parse a list of rules.

    Top-level list items become rules. Nested items are read as
    `*Rationale: ...*`, `Example: \\`...\\`` or, failing both, kept as part
    of the rule text. Indented lines continue the current rule.

    Returns:
        Tuple of (intro text, rules, trailing text, ordered flag)
    """
    intro: List[str] = []
    trailing: List[str] = []
    rules: List[Rule] = []
    base_indent = None
    ordered = False
    current = None

    for line in lines:
        if trailing:
            trailing.append(line)
            continue

        item = LIST_ITEM_PATTERN.match(line)
        if item:
            indent = len(item.group(1).expandtabs(4))
            if base_indent is None:
                base_indent = indent
                ordered = item.group(2)[0].isdigit()
            if indent <= base_indent or current is None:
                current = Rule(content=item.group(3).strip())
                rules.append(current)
            else:
                _apply_sub_item(current, item.group(3).strip())
            continue

        if current is None:
            intro.append(line)
        elif not line.strip():
            continue
        elif line[:1] in (' ', '\t'):
            current.content = f"{current.content}\n{line.strip()}"
        else:
            trailing.append(line)

    return '\n'.join(intro).strip('\n'), rules, '\n'.join(trailing).strip('\n'), ordered


def parse_example_label(label: str) -> Tuple[str, Optional[bool]]:
    """
    Read a good/bad marker off an example heading.

    '✅ Good: Use const' -> ('Use const', True)
    'Avoid globals'      -> ('Avoid globals', False)
    """
    text = label.strip()
    good = None
    for marker in GOOD_MARKERS:
        if text.startswith(marker):
            good = True
            text = text[len(marker):].strip()
            break
    else:
        for marker in BAD_MARKERS:
            if text.startswith(marker):
                good = False
                text = text[len(marker):].strip()
                break

    labelled = EXAMPLE_LABEL_PATTERN.match(text)
    if labelled:
        if good is None:
            good = labelled.group(1).lower() in ('good', 'correct', 'preferred')
        text = labelled.group(2).strip()
    elif good is None and re.match(r"^(avoid|don'?t|do not|never)\b", text, re.IGNORECASE):
        good = False
    return text, good


def parse_examples(lines: List[str]) -> Tuple[List[Example], str, str]:
    """
    Parse fenced code blocks into examples.

    A `###` heading or the prose right before a fence describes the example
    that follows. Prose that describes no fence is returned as leftover; an
    unterminated fence and everything after it is returned as a gap.

    Returns:
        Tuple of (examples, leftover prose, unparseable gap)
    """
    examples: List[Example] = []
    leftover: List[str] = []
    pending: List[str] = []
    heading_line = None
    heading_desc = ''
    heading_good = None
    gap = ''
    i = 0

    while i < len(lines):
        line = lines[i]
        subheading = SUBHEADING_PATTERN.match(line.strip())
        if subheading:
            if heading_line is not None:
                leftover.append(heading_line)
            leftover.extend(pending)
            heading_line = line
            heading_desc, heading_good = parse_example_label(subheading.group(1))
            pending = []
            i += 1
            continue

        fence = FENCE_OPEN_PATTERN.match(line)
        if not fence:
            pending.append(line)
            i += 1
            continue

        marker = fence.group(1)
        language = fence.group(2) or None
        end = i + 1
        while end < len(lines) and not _closes_fence(lines[end], marker):
            end += 1
        if end >= len(lines):
            gap = '\n'.join(lines[i:])
            break

        prose = '\n'.join(pending).strip()
        description = '\n\n'.join(part for part in (heading_desc, prose) if part)
        examples.append(Example(
            code='\n'.join(lines[i + 1:end]),
            description=description,
            language=language,
            good=heading_good if heading_line is not None else None,
        ))
        heading_line = None
        heading_desc = ''
        heading_good = None
        pending = []
        i = end + 1

    if heading_line is not None:
        leftover.append(heading_line)
    leftover.extend(pending)
    return examples, '\n'.join(leftover).strip('\n'), gap


def parse_persona(text: str) -> Tuple[Optional[PersonaSection], str]:
    """
    Parse 'You are <name>, <role>.' prose plus optional Style:/Expertise: lines.

    Returns:
        Tuple of (persona or None, remaining text)
    """
    stripped = text.lstrip()
    if not stripped.lower().startswith('you are '):
        return None, text

    first_line, _, rest = stripped.partition('\n')
    sentence_body = first_line[len('you are '):]
    end = re.search(r'\.(\s|$)', sentence_body)
    if end:
        sentence = sentence_body[:end.start()].strip()
        tail = sentence_body[end.end():].strip()
    else:
        sentence = sentence_body.strip()
        tail = ''

    name = None
    role = sentence
    if ', ' in sentence:
        head, remainder = sentence.split(', ', 1)
        if (head[:1].isupper() and len(head.split()) <= 4
                and not head.lower().startswith(('a ', 'an ', 'the '))):
            name, role = head, remainder

    persona = PersonaSection(role=role, name=name)
    remaining = rest.split('\n')
    if tail:
        remaining.insert(0, tail)

    consumed = 0
    for line in remaining:
        if not line.strip():
            consumed += 1
            continue
        trait = PERSONA_TRAIT_PATTERN.match(line.strip())
        if not trait:
            break
        values = [v.strip() for v in trait.group(2).split(',') if v.strip()]
        if trait.group(1).lower() == 'style':
            persona.style = values
        else:
            persona.expertise = values
        consumed += 1

    return persona, '\n'.join(remaining[consumed:]).strip('\n')


def _instructions(text: str, title: str) -> InstructionsSection:
    priority = Priority.MEDIUM
    important = IMPORTANT_PATTERN.match(text)
    if important:
        priority = Priority.HIGH
        text = text[important.end():]
    return InstructionsSection(content=text.strip('\n'), title=title, priority=priority)


def parse_block(title: Optional[str], lines: List[str], builder: PackageBuilder,
                detect_rules: bool = True) -> None:
    """Classify one block and add the resulting sections to the builder."""
    text = '\n'.join(lines).strip('\n')
    if not text.strip():
        return
    heading = title or ''
    kind = classify_heading(title)

    if detect_rules and kind == SectionType.RULES and has_list_items(lines):
        intro, rules, trailing, ordered = parse_rules(lines)
        if intro.strip():
            builder.add(_instructions(intro, heading))
        builder.add(RulesSection(items=rules, title=heading, ordered=ordered))
        if trailing.strip():
            builder.add(_instructions(trailing, heading))
        return

    if kind == SectionType.PERSONA or (title is None and text.lstrip().lower().startswith('you are ')):
        persona, remaining = parse_persona(text)
        if persona is None:
            persona = PersonaSection(role=text.strip())
            remaining = ''
        builder.add(persona)
        if remaining.strip():
            parse_block(None, remaining.split('\n'), builder, detect_rules)
        return

    if kind == SectionType.EXAMPLES or has_fence(lines):
        examples, leftover, gap = parse_examples(lines)
        if examples:
            builder.add(ExamplesSection(examples=examples, title=heading or 'Examples'))
            if leftover.strip():
                builder.add(_instructions(leftover, heading))
            builder.preserve(gap, title=title)
            return
        if gap:
            if leftover.strip():
                builder.add(_instructions(leftover, heading))
            builder.preserve(gap, title=title)
            return

    if kind == SectionType.CONTEXT:
        builder.add(ContextSection(content=text, title=heading))
        return

    builder.add(_instructions(text, heading))


def _split_first_paragraph(text: str) -> Tuple[str, str]:
    stripped = text.strip('\n')
    first, _, rest = stripped.partition('\n\n')
    return first.strip(), rest.strip('\n')


def parse_body(body: str, builder: PackageBuilder, detect_rules: bool = True,
               lead_description: bool = False) -> None:
    """
    Parse a markdown body into sections on the builder.

    Args:
        body: Markdown text without frontmatter
        builder: Accumulator for the package being decoded
        detect_rules: Turn lists under rule headings into rules sections
        lead_description: Use the first lead paragraph as the package
            description when none is set yet
    """
    document = split_document(body)
    if document.title:
        icon, title = split_icon(document.title)
        builder.metadata.title = title
        if icon:
            builder.metadata.icon = icon

    lead = document.lead.text
    if lead_description and lead.strip() and not builder.metadata.description:
        first, rest = _split_first_paragraph(lead)
        if (first and not first.lower().startswith('you are ')
                and not LIST_ITEM_PATTERN.match(first)
                and not FENCE_OPEN_PATTERN.match(first)
                and not first.startswith('#')):
            builder.metadata.description = ' '.join(first.split('\n'))
            lead = rest
    if lead.strip():
        parse_block(None, lead.split('\n'), builder, detect_rules)

    for block in document.blocks:
        parse_block(block.title, block.lines, builder, detect_rules)
