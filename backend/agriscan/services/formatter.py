"""
AgriScan Backend - AI Answer Formatter
=======================================

What:  Rewrites Gemini's markdown-ish answer into an HTML fragment the web
       client can drop into a container.
How:   Four regex rewrites applied in a fixed order. Each rule sees the
       output of the previous one.

Rule order:
    1. strip every '*' and '#'
    2. **X**            → <strong>X</strong>
    3. "* X" to EOL     → <li class="ml-4 list-disc">X</li>
    4. newline          → <br>

Rule 1 removes the asterisks rules 2 and 3 look for, so those two never
fire on real input and "**bold**" comes out as plain "bold". Clients rely on
the current output; keep the order.
"""

import re

_MARKER_CHARS = re.compile(r"[*#]")
_BOLD = re.compile(r"\*\*(.*?)\*\*")
# \Z rather than $: only the true end of input ends a list item
_LIST_ITEM = re.compile(r"\* (.*?)(?:\n|\Z)")

LIST_ITEM_HTML = r'<li class="ml-4 list-disc">\1</li>'


def format_response(raw: str) -> str:
    """Convert an AI answer to an HTML fragment. Pure and total."""
    result = _MARKER_CHARS.sub("", raw)
    result = _BOLD.sub(r"<strong>\1</strong>", result)
    result = _LIST_ITEM.sub(LIST_ITEM_HTML, result)
    return result.replace("\n", "<br>")
