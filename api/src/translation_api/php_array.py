"""Read and write PHP group files (``<?php return [...];``).

Writing reproduces PHP's ``var_export`` layout so files stay byte-compatible
with those produced by the PHP tooling. Reading accepts both the long
``array(...)`` and the short ``[...]`` syntax, comments, trailing commas and
string concatenation, which covers hand-written language files.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from translation_api.tree import sort_tree

INDENT = "  "
FILE_HEADER = "<?php\n\nreturn "

_INT_KEY = re.compile(r"^(0|-?[1-9][0-9]*)$")
_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(r"-?\d+(\.\d+)?")
_OCTAL = re.compile(r"[0-7]{1,3}")


class PhpSyntaxError(ValueError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


# --- writing ---------------------------------------------------------------


def _export_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _export_key(key: Any) -> str:
    text = str(key)
    if _INT_KEY.match(text):
        return text
    return _export_string(text)


def _export_scalar(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    return _export_string(str(value))


def _export_array(tree: Mapping[str, Any], indent: str) -> str:
    lines = ["array ("]
    inner = indent + INDENT
    for key, value in tree.items():
        if isinstance(value, Mapping):
            lines.append(f"{inner}{_export_key(key)} => ")
            lines.append(f"{inner}{_export_array(value, inner)},")
        else:
            lines.append(f"{inner}{_export_key(key)} => {_export_scalar(value)},")
    lines.append(f"{indent})")
    return "\n".join(lines)


def var_export(tree: Mapping[str, Any]) -> str:
    """Render ``tree`` the way PHP's ``var_export($array, true)`` does."""
    return _export_array(tree, "")


def dumps(tree: Mapping[str, Any]) -> str:
    """Serialize a group tree as a complete PHP file, keys sorted at every level."""
    return f"{FILE_HEADER}{var_export(sort_tree(tree))};\n"


# --- reading ---------------------------------------------------------------

_PUNCT = ("=>", "(", ")", "[", "]", ",", ";", ".")
_DOUBLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # lexing helpers

    def _skip(self) -> None:
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif text.startswith("//", self.pos) or ch == "#":
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise PhpSyntaxError("unterminated comment", self.pos)
                self.pos = end + 2
            else:
                return

    def _peek_punct(self) -> Optional[str]:
        self._skip()
        for punct in _PUNCT:
            if self.text.startswith(punct, self.pos):
                return punct
        return None

    def _expect(self, punct: str) -> None:
        if self._peek_punct() != punct:
            raise PhpSyntaxError(f"expected {punct!r}", self.pos)
        self.pos += len(punct)

    def _word(self) -> Optional[str]:
        self._skip()
        match = _WORD.match(self.text, self.pos)
        return match.group(0) if match else None

    # grammar

    def parse_file(self) -> Dict[str, Any]:
        self._skip()
        if self.text.startswith("<?php", self.pos):
            self.pos += len("<?php")
        word = self._word()
        if word is None or word.lower() != "return":
            raise PhpSyntaxError("expected 'return'", self.pos)
        self.pos += len(word)
        value = self.parse_value()
        if not isinstance(value, dict):
            raise PhpSyntaxError("file does not return an array", self.pos)
        if self._peek_punct() == ";":
            self.pos += 1
        self._skip()
        if self.text.startswith("?>", self.pos):
            self.pos += 2
            self._skip()
        if self.pos != len(self.text):
            raise PhpSyntaxError("unexpected trailing content", self.pos)
        return value

    def parse_value(self) -> Any:
        punct = self._peek_punct()
        if punct == "[":
            self.pos += 1
            return self._parse_entries("]")
        word = self._word()
        if word is not None:
            lowered = word.lower()
            if lowered == "array":
                self.pos += len(word)
                self._expect("(")
                return self._parse_entries(")")
            if lowered in ("true", "false", "null"):
                self.pos += len(word)
                return {"true": "1", "false": "", "null": ""}[lowered]
            raise PhpSyntaxError(f"unsupported expression {word!r}", self.pos)
        return self._parse_concatenation()

    def _parse_concatenation(self) -> str:
        parts = [self._parse_scalar()]
        while self._peek_punct() == ".":
            self.pos += 1
            parts.append(self._parse_scalar())
        return "".join(parts)

    def _parse_scalar(self) -> str:
        self._skip()
        if self.pos >= len(self.text):
            raise PhpSyntaxError("unexpected end of file", self.pos)
        ch = self.text[self.pos]
        if ch == "'":
            return self._parse_single_quoted()
        if ch == '"':
            return self._parse_double_quoted()
        match = _NUMBER.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return match.group(0)
        raise PhpSyntaxError(f"unexpected character {ch!r}", self.pos)

    def _parse_single_quoted(self) -> str:
        start = self.pos
        self.pos += 1
        out: List[str] = []
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < len(text) and text[self.pos + 1] in ("\\", "'"):
                out.append(text[self.pos + 1])
                self.pos += 2
            elif ch == "'":
                self.pos += 1
                return "".join(out)
            else:
                out.append(ch)
                self.pos += 1
        raise PhpSyntaxError("unterminated string", start)

    def _parse_double_quoted(self) -> str:
        start = self.pos
        self.pos += 1
        out: List[str] = []
        text = self.text
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < len(text):
                nxt = text[self.pos + 1]
                octal = _OCTAL.match(text, self.pos + 1)
                if nxt in _DOUBLE_ESCAPES:
                    out.append(_DOUBLE_ESCAPES[nxt])
                    self.pos += 2
                elif octal:
                    out.append(chr(int(octal.group(0), 8)))
                    self.pos = octal.end()
                else:
                    out.append(ch)
                    self.pos += 1
            elif ch == '"':
                self.pos += 1
                return "".join(out)
            else:
                out.append(ch)
                self.pos += 1
        raise PhpSyntaxError("unterminated string", start)

    def _parse_entries(self, closing: str) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        next_index = 0
        while True:
            if self._peek_punct() == closing:
                self.pos += 1
                return result
            first = self.parse_value()
            if self._peek_punct() == "=>":
                self.pos += 2
                if isinstance(first, dict):
                    raise PhpSyntaxError("array used as key", self.pos)
                key = first
                value = self.parse_value()
                if _INT_KEY.match(key) and int(key) >= next_index:
                    next_index = int(key) + 1
            else:
                key, value = str(next_index), first
                next_index += 1
            result[key] = value
            punct = self._peek_punct()
            if punct == ",":
                self.pos += 1
            elif punct != closing:
                raise PhpSyntaxError(f"expected ',' or {closing!r}", self.pos)


def loads(text: str) -> Dict[str, Any]:
    """Parse a PHP group file into a nested dict with string leaves."""
    return _Parser(text).parse_file()

