import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from webbuilder.inference.prompt import CSS_MARKER, HTML_MARKER, JS_MARKER


# ============================================================
# RESULT
# ============================================================

@dataclass
class GenerationResult:
    markup: str = ""
    stylesheet: str = ""
    script: str = ""


# ============================================================
# CODE FENCES
# ============================================================

# ``` with an optional language tag (html, css, js, javascript, ...)
# and the line break that follows it.
_FENCE_RE = re.compile(r"```[\w+#.-]*[ \t]*\r?\n?")


def strip_code_fences(code: str) -> str:
    """
    Remove markdown code fences anywhere in the text, not only at the edges.
    """
    return _FENCE_RE.sub("", code)


# ============================================================
# SECTION SPLITTER (LLM TRUST BOUNDARY)
# ============================================================

_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("markup", HTML_MARKER),
    ("stylesheet", CSS_MARKER),
    ("script", JS_MARKER),
)

_MARKER_RE = re.compile(
    "|".join(re.escape(marker) for _, marker in _SECTIONS),
    re.IGNORECASE,
)


def _find_markers(text: str) -> List[Tuple[int, int, str]]:
    """
    All marker occurrences as (start, end, field), in text order.
    """
    by_marker = {marker.lower(): field for field, marker in _SECTIONS}
    return [
        (m.start(), m.end(), by_marker[m.group(0).lower()])
        for m in _MARKER_RE.finditer(text)
    ]


def _clean(section: str) -> str:
    return strip_code_fences(section.strip()).strip()


def split_sections(raw_text: str) -> GenerationResult:
    """
    Split a completion into HTML, CSS and JavaScript.

    Strategy:
    1. Locate every marker occurrence (case-insensitive)
    2. A section starts after the FIRST occurrence of its marker and runs
       up to the next marker of any kind, or the end of text
    3. Missing marker -> empty string

    NEVER throws.
    """

    if not raw_text or not isinstance(raw_text, str):
        return GenerationResult()

    occurrences = _find_markers(raw_text)

    sections: Dict[str, str] = {}
    for index, (_, end, field) in enumerate(occurrences):
        if field in sections:
            continue

        if index + 1 < len(occurrences):
            stop = occurrences[index + 1][0]
        else:
            stop = len(raw_text)

        sections[field] = _clean(raw_text[end:stop])

    return GenerationResult(**sections)
