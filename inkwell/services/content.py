import logging
import math
import re

import frontmatter

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 150
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10

# Pre-compiled once, applied in order
_MARKDOWN_PATTERNS = [
    (re.compile(r"#{1,6}\s+"), ""),  # headings
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),  # bold
    (re.compile(r"\*(.*?)\*"), r"\1"),  # italics
    (re.compile(r"`(.*?)`"), r"\1"),  # inline code
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),  # links, keep the text
    (re.compile(r"\n"), " "),
]
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def slugify(text: str) -> str:
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def strip_front_matter(content: str) -> str:
    try:
        return frontmatter.loads(content).content
    except Exception as e:
        logger.debug(f"Front matter could not be parsed, using raw content: {e}")
        return content


def generate_excerpt(content: str, max_length: int = EXCERPT_LENGTH) -> str:
    """
    Plain-text preview of a markdown body: front matter and inline markup are
    removed, and anything past max_length is cut and suffixed with an ellipsis.
    """
    plain = strip_front_matter(content)
    for pattern, replacement in _MARKDOWN_PATTERNS:
        plain = pattern.sub(replacement, plain)
    plain = plain.strip()

    if len(plain) <= max_length:
        return plain
    return plain[:max_length].strip() + "..."


def calculate_reading_time(text: str) -> str:
    words = strip_front_matter(text).split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def validate_title(title: str) -> bool:
    return TITLE_MIN_LENGTH <= len(title.strip()) <= TITLE_MAX_LENGTH


def validate_content(content: str) -> bool:
    return len(content.strip()) >= CONTENT_MIN_LENGTH


def validate_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email))
