# DisplayFormatter.py
"""""
Turns a raw buffer or result into the grouped string shown on the display.

Only the preview line goes through here. The input buffer itself is never grouped,
because the evaluator has to read it back.
"""""

import re

from .LRUCache import LRUCache

_PROGRAMMER_SPLIT = re.compile(r"(<<|>>|[+\-×÷%()\s])")
_PROGRAMMER_SYMBOLS = ("+", "-", "×", "÷", "%", "(", ")", "<<", ">>")
_DECIMAL_GROUPS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_HEX_GROUPS = re.compile(r"\B(?=(\w{2})+(?!\w))")
_OCT_GROUPS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_NUMERAL = re.compile(r"[0-9A-Fa-f]+")


def group_decimal(value, use_separator=True):
    if not use_separator or "e" in value:
        return value
    whole, dot, fraction = value.partition(".")
    return _DECIMAL_GROUPS.sub(",", whole) + dot + fraction


def group_binary(value, use_separator=True):
    if not re.fullmatch(r"[01]+", value):
        return value
    padding = -len(value) % 4
    value = "0" * padding + value
    if not use_separator:
        return value
    return " ".join(value[i:i + 4] for i in range(0, len(value), 4))


def group_hex(value, use_separator=True):
    value = value.upper()
    if not use_separator:
        return value
    return _HEX_GROUPS.sub(" ", value)


def group_octal(value, use_separator=True):
    if not use_separator:
        return value
    return _OCT_GROUPS.sub(" ", value)


_GROUPERS = {
    "BIN": group_binary,
    "OCT": group_octal,
    "DEC": group_decimal,
    "HEX": group_hex
}


class DisplayFormatter:
    def __init__(self, cache_size=100):
        self.cache = LRUCache(cache_size)

    def format_value(self, value, base="DEC", mode="Standard", options=None):
        options = options or {}
        use_separator = bool(options.get("use_thousands_separator", False))
        text = "" if value is None else str(value)

        if not text.strip():
            return "0"
        if text == "Error":
            return text

        key = (text, base, mode, use_separator)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if mode == "Programmer":
            formatted = self._format_programmer(text, base, use_separator)
        else:
            formatted = self._format_standard(text, use_separator)

        self.cache.set(key, formatted)
        return formatted

    def _format_programmer(self, text, base, use_separator):
        grouper = _GROUPERS.get(base, group_decimal)

        # A plain (possibly negative) value keeps its sign glued to the digits
        sign, magnitude = ("-", text[1:]) if text.startswith("-") else ("", text)
        if _NUMERAL.fullmatch(magnitude):
            return sign + grouper(magnitude, use_separator)

        parts = []
        for part in _PROGRAMMER_SPLIT.split(text):
            part = part.strip()
            if not part:
                continue
            if part in _PROGRAMMER_SYMBOLS:
                parts.append(part)
            else:
                parts.append(grouper(part, use_separator))
        return re.sub(r"\s+", " ", " ".join(parts)).strip()

    def _format_standard(self, text, use_separator):
        if not use_separator or re.search(r"\de[+\-]", text):
            return text
        return re.sub(r"\d+(?:\.\d+)?", lambda match: group_decimal(match.group(0)), text)
