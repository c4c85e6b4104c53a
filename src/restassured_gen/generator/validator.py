"""Structural checks for generated Java source.

This is not a Java parser. It verifies what the templates must guarantee:
brackets balance and every string or char literal is terminated on its
own line.
"""

import re
from collections.abc import Iterable

from restassured_gen.request.base import GeneratedUnit

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_PAIRS = {")": "(", "]": "[", "}": "{"}


def validate_java(source: str, class_name: str | None = None) -> list[str]:
    """Check one Java source for structural errors.

    Returns a list of error messages, empty when the source is well formed.
    """
    errors: list[str] = []
    stack: list[tuple[str, int]] = []
    quote: str | None = None
    quote_line = 0
    block_comment = False
    line = 1
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if ch in "\r\n":
            if quote:
                errors.append(f"Unterminated literal (line {quote_line})")
                quote = None
            if ch == "\n":
                line += 1
        elif block_comment:
            if ch == "*" and nxt == "/":
                block_comment = False
                i += 1
        elif quote:
            if ch == "\\" and nxt not in "\r\n":
                i += 1
            elif ch == quote:
                quote = None
        elif ch == "/" and nxt == "/":
            while i < n and source[i] != "\n":
                i += 1
            continue
        elif ch == "/" and nxt == "*":
            block_comment = True
            i += 1
        elif ch in ('"', "'"):
            quote = ch
            quote_line = line
        elif ch in "([{":
            stack.append((ch, line))
        elif ch in _PAIRS:
            if not stack or stack[-1][0] != _PAIRS[ch]:
                errors.append(f"Unbalanced '{ch}' (line {line})")
            else:
                stack.pop()
        i += 1

    if quote:
        errors.append(f"Unterminated literal (line {quote_line})")
    if block_comment:
        errors.append("Unterminated block comment")
    for opener, opened_at in stack:
        errors.append(f"Unclosed '{opener}' (line {opened_at})")

    if class_name is not None and f"public class {class_name} " not in source:
        errors.append(f"Missing declaration of public class {class_name}")
    return errors


def validate_units(units: Iterable[GeneratedUnit]) -> dict[str, str]:
    """Run :func:`validate_java` on every unit.

    Returns dict of {file_name: error_message} for units with errors.
    """
    errors = {}
    for unit in units:
        problems = validate_java(unit.source_text, unit.class_name)
        if not _IDENTIFIER.fullmatch(unit.class_name):
            problems.append(f"{unit.class_name} is not a valid Java class name")
        if unit.file_name != f"{unit.class_name}.java":
            problems.append(f"File name does not match class {unit.class_name}")
        if problems:
            errors[unit.file_name] = "; ".join(problems)
    return errors
