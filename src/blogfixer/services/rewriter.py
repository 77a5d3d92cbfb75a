"""Rewrites article HTML into a clean, SEO-friendly fragment."""

import html
import re

WRAPPER_OPEN = '<div class="blog-content">'
WRAPPER_CLOSE = "</div>"
FALLBACK_ALT_TEXT = "Blog image"

# Applied in order; document-level markup has no place inside an article
STRIP_PATTERNS = [
    re.compile(r"<html\b[^>]*>", re.IGNORECASE),
    re.compile(r"</html\s*>", re.IGNORECASE),
    re.compile(r"<head\b[^>]*>[\s\S]*?</head\s*>", re.IGNORECASE),
    re.compile(r"<body\b[^>]*>", re.IGNORECASE),
    re.compile(r"</body\s*>", re.IGNORECASE),
    re.compile(r"<title\b[^>]*>[\s\S]*?</title\s*>", re.IGNORECASE),
    re.compile(r"<meta\b[^>]*>", re.IGNORECASE),
    re.compile(r"<link\b[^>]*>", re.IGNORECASE),
]

IMG_PATTERN = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
SRC_PATTERN = re.compile(r"""(?<![\w-])src=["']([^"']+)["']""", re.IGNORECASE)
EXCESS_BLANK_LINES_PATTERN = re.compile(r"\n\s*\n\s*\n")
DIV_TAG_PATTERN = re.compile(r"<div\b[^>]*>|</div\s*>", re.IGNORECASE)


def alt_text_from_src(src: str) -> str:
    """Derive readable alt text from an image URL's file name.

    `https://cdn.example.com/files/red_running-shoe.jpg?v=2` gives
    `red running shoe`.
    """
    filename = html.unescape(src).split("?", 1)[0].split("#", 1)[0].split("/")[-1]
    stem = filename.split(".", 1)[0]
    text = re.sub(r"[-_]+", " ", stem).strip()
    return text or FALLBACK_ALT_TEXT


def _fix_img_tag(match: re.Match) -> str:
    attributes = match.group(1)

    self_closing = attributes.rstrip().endswith("/")
    if self_closing:
        attributes = attributes.rstrip()[:-1].rstrip()

    if "alt=" not in attributes:
        src_match = SRC_PATTERN.search(attributes)
        alt_text = alt_text_from_src(src_match.group(1)) if src_match else FALLBACK_ALT_TEXT
        attributes += f' alt="{html.escape(alt_text, quote=True)}"'

    if "loading=" not in attributes:
        attributes += ' loading="lazy"'

    return f"<img{attributes} />" if self_closing else f"<img{attributes}>"


def is_wrapped(content: str) -> bool:
    """Check whether content is exactly one blog-content container."""
    if not content.startswith(WRAPPER_OPEN):
        return False

    depth = 0
    for match in DIV_TAG_PATTERN.finditer(content):
        if match.group(0).startswith("</"):
            depth -= 1
            if depth == 0:
                return match.end() == len(content)
        else:
            depth += 1
    return False


def fix_article_content(content: str | None) -> str:
    """Clean article HTML and wrap it in a blog-content container.

    Removes document-level tags, fills in missing image alt text and lazy
    loading, and collapses runs of blank lines. Running it on its own output
    returns that output unchanged.

    Args:
        content: The article HTML.

    Returns:
        The rewritten HTML, or an empty string for empty content.
    """
    if not content:
        return ""

    fixed = content
    for pattern in STRIP_PATTERNS:
        fixed = pattern.sub("", fixed)

    fixed = IMG_PATTERN.sub(_fix_img_tag, fixed)
    fixed = EXCESS_BLANK_LINES_PATTERN.sub("\n\n", fixed).strip()

    if is_wrapped(fixed):
        return fixed
    return f"{WRAPPER_OPEN}{fixed}{WRAPPER_CLOSE}"
