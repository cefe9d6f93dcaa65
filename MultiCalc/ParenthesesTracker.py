# ParenthesesTracker.py
"""""
Tracks the parenthesis groups of an input buffer while it is typed.

The tracker answers one question for the button handlers: may a ')' be appended right now?
It mirrors backspace deletions so the open count always matches the buffer text.
"""""

import re
from dataclasses import dataclass
from typing import List, Optional

# Last character of a group that can legally be closed
_CLOSABLE_END = re.compile(r"[0-9A-Fa-f)πe!.]$")
_HAS_OPERAND = re.compile(r"[0-9A-Fa-f)πe]")
_ENDS_WITH_OPERATOR = re.compile(r"(?:[+\-×÷%^,]|<<|>>|mod)\s*$")


@dataclass
class ParenthesesGroup:
    start: int
    end: Optional[int] = None
    content: str = ""

    @property
    def is_open(self):
        return self.end is None


class ParenthesesTracker:
    def __init__(self):
        self.groups: List[ParenthesesGroup] = []
        self._closed_stack: List[ParenthesesGroup] = []

    def open(self, position):
        self.groups.append(ParenthesesGroup(start=position))

    def close(self, position, expr=None):
        """Close the most recent open group. Returns False when nothing is open."""
        group = self.get_last_open_group()
        if group is None:
            return False
        group.end = position
        if expr is not None:
            group.content = expr[group.start + 1:position]
        self._closed_stack.append(group)
        return True

    def get_open_count(self):
        return sum(1 for group in self.groups if group.is_open)

    def get_groups(self):
        return tuple(self.groups)

    def reset(self):
        self.groups = []
        self._closed_stack = []

    def is_balanced(self):
        return self.get_open_count() == 0

    def get_last_open_group(self):
        for group in reversed(self.groups):
            if group.is_open:
                return group
        return None

    def can_close(self, expr):
        """True if a ')' may follow `expr`.

        Needs an open group, some operand inside it, and no dangling operator or
        fresh '(' at the end.
        """
        if self.get_open_count() <= 0:
            return False

        last_open = expr.rfind("(")
        if last_open == -1:
            return False

        content = expr[last_open + 1:].strip()
        if not content or not _HAS_OPERAND.search(content):
            return False

        stripped = expr.rstrip()
        if _ENDS_WITH_OPERATOR.search(stripped):
            return False
        return bool(_CLOSABLE_END.search(stripped))

    def handle_backspace(self, position, expr):
        """Mirror the deletion of expr[position] into the group list."""
        if position < 0 or position >= len(expr):
            return
        char = expr[position]

        if char == "(":
            group = self.get_last_open_group()
            if group is not None:
                self.groups.remove(group)

        elif char == ")":
            if self._closed_stack:
                group = self._closed_stack.pop()
                group.end = None
                group.content = ""

    def rebuild(self, expr):
        """Re-derive every group from the buffer text."""
        self.reset()
        for position, char in enumerate(expr):
            if char == "(":
                self.open(position)
            elif char == ")":
                self.close(position, expr)
