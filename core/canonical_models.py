"""
Canonical data models for dialect-independent configuration packages.

A CanonicalPackage is the unit every conversion passes through. Its body is
an ordered list of sections, each one of eight independent dataclasses tagged
with a SectionType. Sections do not share a base class: code that renders
them dispatches on the tag and must handle every variant explicitly.

Per-dialect configuration (scoping globs, inclusion modes, project scope)
travels beside the sections in `dialect_configs`. It only informs how an
encoder renders the package; it never replaces the section list.

Packages are values. Decoders build them, everything downstream reads them
and derives copies (`with_sections`) instead of mutating.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class Dialect(str, Enum):
    """Closed set of supported configuration dialects."""
    CURSOR = "cursor"
    CLAUDE = "claude"
    CLAUDE_SKILL = "claude-skill"
    COPILOT = "copilot"
    KIRO = "kiro"
    KIRO_AGENT = "kiro-agent"
    AGENTS_MD = "agents.md"
    WINDSURF = "windsurf"
    AIDER = "aider"
    CONTINUE = "continue"
    DROID = "droid"
    GEMINI = "gemini"
    RULER = "ruler"
    TRAE = "trae"
    ZENCODER = "zencoder"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: Union[str, "Dialect"]) -> "Dialect":
        """
        Resolve a declared format name to a Dialect.

        Args:
            value: Dialect member or format name (case-insensitive)

        Returns:
            Matching Dialect

        Raises:
            ValueError: If the name is not a supported dialect
        """
        if isinstance(value, Dialect):
            return value
        key = str(value).strip().lower()
        key = _DIALECT_ALIASES.get(key, key)
        for dialect in cls:
            if dialect.value == key:
                return dialect
        raise ValueError(f"Unknown format: {value}")

    @classmethod
    def names(cls) -> List[str]:
        return [dialect.value for dialect in cls]


_DIALECT_ALIASES = {
    "agents-md": "agents.md",
    "agents_md": "agents.md",
    "agentsmd": "agents.md",
    "claude_skill": "claude-skill",
    "skill": "claude-skill",
    "kiro_agent": "kiro-agent",
    "windsurfrules": "windsurf",
    "conventions": "aider",
    "factory": "droid",
    "factory-droid": "droid",
    "gemini-cli": "gemini",
}


class Subtype(str, Enum):
    """What kind of artifact a package is."""
    RULE = "rule"
    AGENT = "agent"
    SKILL = "skill"
    SLASH_COMMAND = "slash-command"
    PROMPT = "prompt"
    WORKFLOW = "workflow"
    TOOL = "tool"
    TEMPLATE = "template"
    COLLECTION = "collection"
    CHATMODE = "chatmode"


class SectionType(str, Enum):
    METADATA = "metadata"
    INSTRUCTIONS = "instructions"
    RULES = "rules"
    EXAMPLES = "examples"
    TOOLS = "tools"
    PERSONA = "persona"
    CONTEXT = "context"
    CUSTOM = "custom"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class MetadataSection:
    """
    Package-level descriptive fields.

    `model` and `globs` are dialect hints: a model-selection preference and
    the path patterns a rule applies to. Dialects without an equivalent lose
    them on conversion.
    """
    type: ClassVar[SectionType] = SectionType.METADATA

    title: str = ""
    description: str = ""
    icon: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    model: Optional[str] = None
    globs: List[str] = field(default_factory=list)


@dataclass
class InstructionsSection:
    type: ClassVar[SectionType] = SectionType.INSTRUCTIONS

    content: str
    title: str = ""
    priority: Priority = Priority.MEDIUM


@dataclass
class Rule:
    """One atomic rule with optional rationale and example snippets."""
    content: str
    rationale: Optional[str] = None
    examples: List[str] = field(default_factory=list)


@dataclass
class RulesSection:
    type: ClassVar[SectionType] = SectionType.RULES

    items: List[Rule] = field(default_factory=list)
    title: str = "Rules"
    ordered: bool = False


@dataclass
class Example:
    """A code example. `good` is None when the source did not say."""
    code: str
    description: str = ""
    language: Optional[str] = None
    good: Optional[bool] = None


@dataclass
class ExamplesSection:
    type: ClassVar[SectionType] = SectionType.EXAMPLES

    examples: List[Example] = field(default_factory=list)
    title: str = "Examples"


@dataclass
class ToolsSection:
    type: ClassVar[SectionType] = SectionType.TOOLS

    tools: List[str] = field(default_factory=list)
    description: str = ""


@dataclass
class PersonaSection:
    type: ClassVar[SectionType] = SectionType.PERSONA

    role: str
    name: Optional[str] = None
    icon: Optional[str] = None
    style: List[str] = field(default_factory=list)
    expertise: List[str] = field(default_factory=list)


@dataclass
class ContextSection:
    type: ClassVar[SectionType] = SectionType.CONTEXT

    content: str
    title: str = "Context"


@dataclass
class CustomSection:
    """
    Escape hatch for dialect-specific content with no canonical equivalent.

    `dialect` names the owning dialect so that encoding back to that same
    dialect can restore the content verbatim. `executable` marks executable
    tool definitions (MCP servers, hooks), which are never carried across.
    """
    type: ClassVar[SectionType] = SectionType.CUSTOM

    content: str
    dialect: Optional[str] = None
    title: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    executable: bool = False


Section = Union[
    MetadataSection,
    InstructionsSection,
    RulesSection,
    ExamplesSection,
    ToolsSection,
    PersonaSection,
    ContextSection,
    CustomSection,
]

SECTION_CLASSES: Dict[SectionType, type] = {
    SectionType.METADATA: MetadataSection,
    SectionType.INSTRUCTIONS: InstructionsSection,
    SectionType.RULES: RulesSection,
    SectionType.EXAMPLES: ExamplesSection,
    SectionType.TOOLS: ToolsSection,
    SectionType.PERSONA: PersonaSection,
    SectionType.CONTEXT: ContextSection,
    SectionType.CUSTOM: CustomSection,
}


# Dialect configuration blocks. `extra` keeps native fields the canonical
# model has no slot for, so a same-dialect round trip can restore them.

@dataclass
class CursorConfig:
    dialect: ClassVar[Dialect] = Dialect.CURSOR

    always_apply: Optional[bool] = None
    globs: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClaudeConfig:
    dialect: ClassVar[Dialect] = Dialect.CLAUDE

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClaudeSkillConfig:
    dialect: ClassVar[Dialect] = Dialect.CLAUDE_SKILL

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CopilotConfig:
    dialect: ClassVar[Dialect] = Dialect.COPILOT

    apply_to: Optional[str] = None
    instruction_name: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class KiroConfig:
    """Kiro steering file configuration. `inclusion` is always|fileMatch|manual."""
    dialect: ClassVar[Dialect] = Dialect.KIRO

    inclusion: Optional[str] = None
    file_match_pattern: Optional[str] = None
    domain: Optional[str] = None
    filename: Optional[str] = None
    foundational_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class KiroAgentConfig:
    dialect: ClassVar[Dialect] = Dialect.KIRO_AGENT

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AgentsMdConfig:
    dialect: ClassVar[Dialect] = Dialect.AGENTS_MD

    project: Optional[str] = None
    scope: Optional[str] = None
    include_frontmatter: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WindsurfConfig:
    dialect: ClassVar[Dialect] = Dialect.WINDSURF

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AiderConfig:
    dialect: ClassVar[Dialect] = Dialect.AIDER

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ContinueConfig:
    """Continue rule or prompt. `invokable` marks prompts run as slash commands."""
    dialect: ClassVar[Dialect] = Dialect.CONTINUE

    always_apply: Optional[bool] = None
    globs: List[str] = field(default_factory=list)
    invokable: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DroidConfig:
    dialect: ClassVar[Dialect] = Dialect.DROID

    argument_hint: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GeminiConfig:
    dialect: ClassVar[Dialect] = Dialect.GEMINI

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RulerConfig:
    dialect: ClassVar[Dialect] = Dialect.RULER

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TraeConfig:
    dialect: ClassVar[Dialect] = Dialect.TRAE

    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ZencoderConfig:
    dialect: ClassVar[Dialect] = Dialect.ZENCODER

    always_apply: Optional[bool] = None
    globs: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GenericConfig:
    dialect: ClassVar[Dialect] = Dialect.GENERIC

    extra: Dict[str, Any] = field(default_factory=dict)


DialectConfig = Union[
    CursorConfig,
    ClaudeConfig,
    ClaudeSkillConfig,
    CopilotConfig,
    KiroConfig,
    KiroAgentConfig,
    AgentsMdConfig,
    WindsurfConfig,
    AiderConfig,
    ContinueConfig,
    DroidConfig,
    GeminiConfig,
    RulerConfig,
    TraeConfig,
    ZencoderConfig,
    GenericConfig,
]

DIALECT_CONFIG_CLASSES: Dict[Dialect, type] = {
    Dialect.CURSOR: CursorConfig,
    Dialect.CLAUDE: ClaudeConfig,
    Dialect.CLAUDE_SKILL: ClaudeSkillConfig,
    Dialect.COPILOT: CopilotConfig,
    Dialect.KIRO: KiroConfig,
    Dialect.KIRO_AGENT: KiroAgentConfig,
    Dialect.AGENTS_MD: AgentsMdConfig,
    Dialect.WINDSURF: WindsurfConfig,
    Dialect.AIDER: AiderConfig,
    Dialect.CONTINUE: ContinueConfig,
    Dialect.DROID: DroidConfig,
    Dialect.GEMINI: GeminiConfig,
    Dialect.RULER: RulerConfig,
    Dialect.TRAE: TraeConfig,
    Dialect.ZENCODER: ZencoderConfig,
    Dialect.GENERIC: GenericConfig,
}


@dataclass
class CanonicalPackage:
    """
    Dialect-independent representation of one configuration package.

    Attributes:
        id: Stable identifier
        name: Display name
        version: Semantic version
        description: Short description
        author: Author handle
        tags: Free-text tags
        format: Intended dialect family
        subtype: Kind of artifact
        sections: Ordered document body
        dialect_configs: Optional per-dialect configuration blocks
        format_scores: Optional per-dialect compatibility scores (0-100)
        source_format: Dialect the package was decoded from
        source_url: Where the source artifact came from
        official: Published by the tool vendor
        verified: Published by a verified author
    """
    id: str
    name: str
    version: str = "1.0.0"
    description: str = ""
    author: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    format: Dialect = Dialect.GENERIC
    subtype: Subtype = Subtype.RULE
    sections: List[Section] = field(default_factory=list)
    dialect_configs: Dict[Dialect, DialectConfig] = field(default_factory=dict)
    format_scores: Dict[Dialect, int] = field(default_factory=dict)
    source_format: Optional[Dialect] = None
    source_url: Optional[str] = None
    official: bool = False
    verified: bool = False

    def metadata_section(self) -> Optional[MetadataSection]:
        """Return the first metadata section, if any."""
        for section in self.sections:
            if isinstance(section, MetadataSection):
                return section
        return None

    def sections_of(self, section_type: SectionType) -> List[Section]:
        return [s for s in self.sections if s.type == section_type]

    def body_sections(self) -> List[Section]:
        """All sections except metadata."""
        return [s for s in self.sections if s.type != SectionType.METADATA]

    def config_for(self, dialect: Dialect) -> Optional[DialectConfig]:
        return self.dialect_configs.get(dialect)

    def with_sections(self, sections: List[Section]) -> 'CanonicalPackage':
        """Return a copy of this package with a different section list."""
        return replace(self, sections=list(sections))


@dataclass
class ConversionResult:
    """
    Output of a single conversion.

    Attributes:
        content: Rendered text in the target dialect
        format: Target dialect
        warnings: Human-readable warnings in generation order
        lossy_conversion: True if any source content was not carried over
        quality_score: Conversion fidelity, 0-100
        filename: Suggested file name for the rendered content
    """
    content: str
    format: Dialect
    warnings: List[str] = field(default_factory=list)
    lossy_conversion: bool = False
    quality_score: int = 100
    filename: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'content': self.content,
            'format': self.format.value,
            'warnings': list(self.warnings),
            'lossyConversion': self.lossy_conversion,
            'qualityScore': self.quality_score,
            'filename': self.filename,
        }
