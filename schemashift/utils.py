import inspect
import json
import re
import unicodedata
from enum import Enum
from typing import Any

__all__ = (
    'CONVERSION_ERROR_KEY',
    'RenameRule',
    'parse_example',
    'split_documentation',
    'split_words',
    'update_ref',
)

_WORD_RE = re.compile(r'[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+')

# Vendor extension holding the message of an error placeholder schema
CONVERSION_ERROR_KEY = 'x-conversion-error'


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:].lower()


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def split_words(name: str) -> list[str]:
    """Split an identifier into its words.

    Handles snake_case, kebab-case, PascalCase and camelCase input as well as
    acronyms, so ``'HTTPStatusCode'`` becomes ``['HTTP', 'Status', 'Code']``.
    """
    words = []
    for chunk in re.split(r'[^A-Za-z0-9]+', remove_accents(name)):
        words.extend(_WORD_RE.findall(chunk))
    return words


class RenameRule(str, Enum):
    """Container-wide renaming rules for fields and variants."""

    LOWER = 'lowercase'
    UPPER = 'UPPERCASE'
    PASCAL = 'PascalCase'
    CAMEL = 'camelCase'
    SNAKE = 'snake_case'
    SCREAMING_SNAKE = 'SCREAMING_SNAKE_CASE'
    KEBAB = 'kebab-case'
    SCREAMING_KEBAB = 'SCREAMING-KEBAB-CASE'

    def apply(self, name: str) -> str:
        """Rename ``name`` according to this rule."""
        if self is RenameRule.LOWER:
            return name.lower()
        if self is RenameRule.UPPER:
            return name.upper()

        words = split_words(name)
        if self is RenameRule.PASCAL:
            return ''.join(capitalize(w) for w in words)
        if self is RenameRule.CAMEL:
            if not words:
                return ''
            return words[0].lower() + ''.join(capitalize(w) for w in words[1:])
        if self is RenameRule.SNAKE:
            return '_'.join(w.lower() for w in words)
        if self is RenameRule.SCREAMING_SNAKE:
            return '_'.join(w.upper() for w in words)
        if self is RenameRule.KEBAB:
            return '-'.join(w.lower() for w in words)
        return '-'.join(w.upper() for w in words)


def parse_example(example: Any) -> Any:
    """Interpret an example value.

    Strings holding JSON are decoded; any other string is kept verbatim, so
    both ``'{"id": 1}'`` and ``'plain text'`` are accepted.
    """
    if not isinstance(example, str):
        return example
    try:
        return json.loads(example)
    except ValueError:
        return example


def split_documentation(doc: str | None) -> tuple[str | None, str | None]:
    """Split a docstring into a summary and a description.

    The summary is everything before the first blank line, the description
    is the rest. Either part is ``None`` when empty.
    """
    if not doc:
        return None, None

    lines = inspect.cleandoc(doc).splitlines()
    summary_lines: list[str] = []
    description_lines: list[str] = []
    before_empty = True
    for line in lines:
        if not line.strip():
            before_empty = False
        if before_empty:
            summary_lines.append(line.strip())
        else:
            description_lines.append(line)

    summary = ' '.join(summary_lines).strip()
    description = '\n'.join(description_lines).strip()
    return summary or None, description or None


def update_ref(ref: str) -> str:
    """Update $ref paths from Swagger 2.0 to OpenAPI 3.0 format."""
    if ref.startswith('#/definitions/'):
        return ref.replace('#/definitions/', '#/components/schemas/', 1)

    if ref.startswith('#/parameters/'):
        return ref.replace('#/parameters/', '#/components/parameters/', 1)

    if ref.startswith('#/responses/'):
        return ref.replace('#/responses/', '#/components/responses/', 1)

    return ref
