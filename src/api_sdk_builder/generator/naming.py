"""String helpers shared by every target language.

Names are handled as word lists so each language can render the same
words in its own convention (camelCase, PascalCase, snake_case).
"""

import re

WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z0-9]+")


def split_words(text: str) -> list[str]:
    """Split a path segment, tag or package name into words.

    'user-profiles' -> ['user', 'profiles'], 'APIKeys' -> ['API', 'Keys']
    """
    words = []
    for chunk in re.split(r"[^A-Za-z0-9]+", text):
        words.extend(WORD_RE.findall(chunk))
    return words


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def camel(words: list[str]) -> str:
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(w) for w in words[1:])


def pascal(words: list[str]) -> str:
    return "".join(capitalize(w) for w in words)


def snake(words: list[str]) -> str:
    return "_".join(w.lower() for w in words)


def name_key(words: list[str]) -> str:
    """Case-insensitive identity of a word list; equal keys collide in some convention."""
    return "".join(words).lower()


def method_words(method: str, path: str) -> list[str]:
    """HTTP method followed by the words of each literal path segment.

    GET /users/{id}/orders -> ['get', 'users', 'orders']
    """
    words = [method.lower()]
    for segment in path.split("/"):
        if not segment or segment.startswith("{"):
            continue
        words.extend(split_words(segment))
    return words


def sanitize_identifier(name: str, keywords: frozenset[str], escape_format: str = "{}_") -> str:
    """Turn an arbitrary parameter name into a legal identifier.

    Keywords are escaped with escape_format ('{}_' appends an underscore,
    '@{}' gives the C# verbatim form).
    """
    ident = re.sub(r"[^0-9A-Za-z_]", "_", name) or "_"
    if ident[0].isdigit():
        ident = "_" + ident
    if ident in keywords:
        ident = escape_format.format(ident)
    return ident


def doc_line(text: str) -> str:
    """Collapse a summary to one line that is safe inside any block comment."""
    return " ".join(text.split()).replace("*/", "* /")


def xml_escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
