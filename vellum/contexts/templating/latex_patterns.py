"""
LaTeX Pattern Constants

Centralized marker strings used for template style detection, placeholder
substitution, and section generation. Organized into frozen dataclasses by
category for immutability and clear grouping.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StructuralMacros:
    """
    Custom commands that some templates define for specific visual elements.

    Their presence in a template changes how headers, section titles, and
    category lists are emitted.
    """
    CONTACT_INFO: str = 'NameEmailPhoneSiteGithub'
    NEW_SECTION: str = 'NewPart'
    SKILLS_ENTRY: str = 'SkillsEntry'
    SEPARATOR_SPACE: str = 'sepspace'

    # Argument count of the contact macro: name, email, phone, website, github
    CONTACT_INFO_ARGS: int = 5


@dataclass(frozen=True)
class StyleMarkers:
    """
    Literal substrings whose presence signals a template's layout conventions.
    """
    COMPACT_SPACING: tuple = (r'\sepspace', r'vspace*{0.5em}')
    SPACIOUS_SPACING: tuple = (r'\bigskip', r'vspace{2em}')
    NON_LIST_BULLETS: tuple = (r'\noindent\hangindent', r'\parbox')


@dataclass(frozen=True)
class DetectionRegex:
    """Regex patterns for template inspection."""
    # \newcommand{\Name} - captures Name
    NEWCOMMAND_DEFINITION: str = r'\\newcommand\{\\(\w+)\}'


@dataclass(frozen=True)
class Placeholders:
    """
    Always-present placeholder tokens substituted before any section work.
    """
    FIRST_NAME: str = '{{FIRST_NAME}}'
    LAST_NAME: str = '{{LAST_NAME}}'
    EMAIL: str = '{{EMAIL}}'
    PHONE: str = '{{PHONE}}'
    PROFESSIONAL_SUMMARY: str = '{{PROFESSIONAL_SUMMARY}}'

    # Whole-body marker: its presence selects monolithic rendering
    TEMPLATE_CONTENT: str = '{{TEMPLATE_CONTENT}}'


@dataclass(frozen=True)
class MarkerRegex:
    """
    Regex building blocks for the two marker dialects.

    Block conditional: {{#IF_NAME}} before {{NAME}} after {{/IF_NAME}}
    Loop templating:   {{#NAME}} body {{/NAME}}
    """
    # Tokenizer for top-level markers ({{#IF_X}}, {{/IF_X}}, {{#X}}, {{/X}})
    SECTION_MARKER: str = r'\{\{(?P<closing>[#/])(?P<conditional>IF_)?(?P<name>[A-Z][A-Z0-9_]*)\}\}'

    # Loop-body constructs
    SUB_LOOP: str = r'\{\{#{field}\}\}([\s\S]*?)\{\{/{field}\}\}'
    IF_BLOCK: str = r'\{\{#if (\w+)\}\}([\s\S]*?)\{\{/if\}\}'
    UNLESS_BLOCK: str = r'\{\{#unless (\w+)\}\}([\s\S]*?)\{\{/unless\}\}'
    OPTIONAL_BLOCK: str = r'\{\{#(\w+)\}\}([\s\S]*?)\{\{/\1\}\}'
    ELEMENT_TOKENS: tuple = ('{{.}}', '{{this}}')

    # Cleanup
    RESIDUAL_CONDITIONAL: str = r'\{\{#IF_[^}]+\}\}[\s\S]*?\{\{/IF_[^}]+\}\}'
    RESIDUAL_TOKEN: str = r'\{\{[^}]+\}\}'
