"""Java string literal encoding.

Every piece of user text that ends up inside a generated string literal
passes through :func:`escape_java` exactly once. Encoding already-escaped
text escapes it again.
"""

import re

# Lone surrogates cannot be written as UTF-8; Java reads them back from \uXXXX.
_SURROGATE = re.compile("[\ud800-\udfff]")


def escape_java(text: str) -> str:
    text = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
    return _SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def java_string(text: str) -> str:
    """Quote ``text`` as a Java string literal."""
    return f'"{escape_java(text)}"'
