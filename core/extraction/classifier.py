"""
Content classifier: decides whether a candidate string is human-readable text.

Candidates come from string literals, markup text and attribute values, so
most of them are noise: CSS utility classes, SVG path data, measurements,
attribute names. The rules below are applied in order and the first match
rejects the string. Whatever survives must still contain a letter (from any
script) and be longer than one character.
"""

import re
from typing import FrozenSet, Optional, Pattern, Tuple

SVG_ELEMENTS: FrozenSet[str] = frozenset({
    'svg', 'path', 'circle', 'rect', 'line', 'polygon', 'polyline',
    'ellipse', 'g', 'defs', 'use', 'clipPath', 'mask', 'pattern',
    'filter', 'text', 'tspan',
})

SVG_ATTRIBUTES: FrozenSet[str] = frozenset({
    'd', 'points', 'cx', 'cy', 'r', 'x', 'y', 'x1', 'y1', 'x2', 'y2',
    'width', 'height', 'viewBox', 'fill', 'stroke', 'transform',
    'clipPath', 'maskUnits', 'gradientUnits', 'patternUnits',
    'filterUnits', 'stopColor', 'strokeWidth',
})


def _rule(name: str, pattern: str, flags: int = 0) -> Tuple[str, Pattern[str]]:
    return name, re.compile(pattern, flags)


# Order matters only for rejection_reason(); any match rejects.
EXCLUSION_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    # CSS classes and styles
    _rule("css-hyphenated-class", r"^[a-zA-Z0-9]+-[a-zA-Z0-9_-]+\Z"),
    _rule("css-underscored-class", r"^[a-zA-Z0-9]+_[a-zA-Z0-9_-]+\Z"),
    _rule("utility-prefix",
          r"^(flex|grid|text-|bg-|p-|m-|w-|h-|border|rounded|shadow|transition"
          r"|transform|scale|rotate|translate|opacity|blur)"),
    _rule("structural-prefix",
          r"^(container|wrapper|section|row|col|box|card|btn|button|nav|header"
          r"|footer|sidebar|main|content)"),
    _rule("state-prefix",
          r"^(xs|sm|md|lg|xl|2xl|hover|focus|active|disabled|selected|loading"
          r"|error|success|warning|info)"),
    _rule("animation-prefix",
          r"^(animate|motion|fade|slide|zoom|spin|pulse|bounce|shake|flip|rotate|scale)"),
    _rule("position-class", r"^(left|right|top|bottom|center|middle|start|end)-[a-zA-Z0-9_-]+\Z"),
    _rule("layout-suffix-class", r"^[a-zA-Z]+-(container|wrapper|section|content|component)\Z"),

    # CSS values and measurements
    _rule("measurement", r"^[0-9]+(\.[0-9]+)?(px|rem|em|vh|vw|%|s|ms)\Z"),

    # SVG
    _rule("svg-path-data", r"^[MLHVCSQTAZ][0-9\s,.-]*\Z", re.IGNORECASE),
    # Multi-command paths ('M10 20 L30 40'); every command but Z takes a numeric argument
    _rule("svg-path-commands", r"^(?:[MLHVCSQTA]\s*-?[0-9][0-9\s,.-]*|Z\s*)+\Z", re.IGNORECASE),
    _rule("svg-element",
          r"^(path|svg|circle|rect|line|polygon|polyline|ellipse|g|defs|use"
          r"|clipPath|mask|pattern|filter)\Z"),
    _rule("svg-attribute",
          r"^(stroke|fill|points|d|cx|cy|r|x|y|x1|y1|x2|y2|width|height|viewBox|transform)\Z"),
    _rule("transform-matrix", r"^matrix\(.*\)\Z"),
    _rule("transform-translate", r"^translate\(.*\)\Z"),
    _rule("transform-scale", r"^scale\(.*\)\Z"),
    _rule("transform-rotate", r"^rotate\(.*\)\Z"),
    _rule("numeric-only", r"^[0-9\s.,-]+\Z"),

    # Variable references and literal keywords
    _rule("css-variable", r"^var\(--.*\)\Z"),
    _rule("literal-keyword", r"^(true|false|null|undefined|NaN)\Z"),

    # Layout keywords
    _rule("layout-keyword",
          r"^(absolute|relative|fixed|static|block|inline|none|hidden|visible|invisible)\Z"),

    # Technical attribute names
    _rule("attribute-name",
          r"^(id|class|className|style|type|name|value|data-.*|aria-.*|role|tabindex|placeholder)\Z"),

    # Short hyphenated identifiers: 'blur-1', 'blur-f', 'blur-f-1'
    _rule("hyphen-digits", r"^[a-zA-Z]+-[0-9]+\Z"),
    _rule("hyphen-letter", r"^[a-zA-Z]+-[a-z]\Z"),
    _rule("hyphen-letter-digits", r"^[a-zA-Z]+-[a-z]-[0-9]+\Z"),
)


def rejection_reason(text: str) -> Optional[str]:
    """
    Explain why a candidate string is not content.

    Args:
        text: Candidate string, already trimmed by the caller

    Returns:
        Name of the first rule that rejects the string, or None if it is content
    """
    if not text:
        return "empty"

    for name, pattern in EXCLUSION_RULES:
        if pattern.search(text):
            return name

    # A hyphen without any space almost always means an identifier or class name
    if '-' in text and ' ' not in text:
        return "hyphenated-identifier"

    if not any(ch.isalpha() for ch in text):
        return "no-letters"

    if len(text) <= 1:
        return "too-short"

    return None


def is_meaningful_content(text: str) -> bool:
    """True if the string is human-readable content worth keeping"""
    return rejection_reason(text) is None


def is_svg_element(name: str) -> bool:
    return name in SVG_ELEMENTS


def is_svg_attribute(name: str) -> bool:
    return name in SVG_ATTRIBUTES
