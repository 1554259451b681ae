"""
Script Extractor - Markdown script -> ScriptData

The chat assistant streams its script as Markdown:

    # Title
    **Style:** visual style
    ## Hook
    ...
    ## Body
    ...
    ## CTA
    ...

`extract_script` is called with the full cumulative text after every chunk.
It keeps no state between calls and re-derives the whole record each time, so
a section the model revises mid-stream is picked up as revised. Because of
that, a longer prefix may yield a different (or no) result than a shorter one.
"""

import re
from typing import List, Optional, Tuple

from adgen.models.script import ScriptData, DEFAULT_TITLE, DEFAULT_VISUAL_STYLE

TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)
STYLE_PATTERN = re.compile(r"^(?:\*\*|__)?Style:(?:\*\*|__)?\s*(.+)$", re.MULTILINE | re.IGNORECASE)

# Loose headings: the line only has to begin with the keyword ("## Hooks and Loops" is a Hook).
SECTION_PATTERNS = {
    "hook": re.compile(r"^##\s*Hook.*$", re.MULTILINE | re.IGNORECASE),
    "body": re.compile(r"^##\s*Body.*$", re.MULTILINE | re.IGNORECASE),
    "cta": re.compile(r"^##\s*(?:CTA|Call\s*to\s*Action).*$", re.MULTILINE | re.IGNORECASE),
}

# Exact headings: keyword plus optional trailing punctuation only.
EXACT_SECTION_PATTERNS = {
    "hook": re.compile(r"^##[ \t]*Hook[ \t:.!-]*$", re.MULTILINE | re.IGNORECASE),
    "body": re.compile(r"^##[ \t]*Body[ \t:.!-]*$", re.MULTILINE | re.IGNORECASE),
    "cta": re.compile(r"^##[ \t]*(?:CTA|Call[ \t]*to[ \t]*Action)[ \t:.!-]*$", re.MULTILINE | re.IGNORECASE),
}


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _find_headings(text: str, exact: bool) -> List[Tuple[str, re.Match]]:
    patterns = EXACT_SECTION_PATTERNS if exact else SECTION_PATTERNS
    found = []
    for name, pattern in patterns.items():
        match = pattern.search(text)
        if match:
            found.append((name, match))
    # Slice by position, not by canonical order
    found.sort(key=lambda item: item[1].start())
    return found


def _first_group(pattern: re.Pattern, text: str, default: str) -> str:
    match = pattern.search(text)
    if not match:
        return default
    # A present but blank value stays blank
    return match.group(1).strip()


def extract_script(markdown: Optional[str], exact_headings: bool = False) -> Optional[ScriptData]:
    """
    Parse a (possibly partial) Markdown script.

    Args:
        markdown: Cumulative assistant text.
        exact_headings: Only accept section headings that are exactly
            "Hook", "Body", "CTA" or "Call to Action".

    Returns:
        ScriptData, or None while no section heading has been written yet.
        Title and style fall back to their defaults; missing sections are "".
    """
    if not markdown:
        return None

    text = normalize_newlines(markdown)
    headings = _find_headings(text, exact_headings)
    if not headings:
        return None

    sections = {"hook": "", "body": "", "cta": ""}
    for i, (name, match) in enumerate(headings):
        end = headings[i + 1][1].start() if i + 1 < len(headings) else len(text)
        sections[name] = text[match.end():end].strip()

    return ScriptData(
        title=_first_group(TITLE_PATTERN, text, DEFAULT_TITLE),
        visual_style=_first_group(STYLE_PATTERN, text, DEFAULT_VISUAL_STYLE),
        hook=sections["hook"],
        body=sections["body"],
        cta=sections["cta"],
    )
