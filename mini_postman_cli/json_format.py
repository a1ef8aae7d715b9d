"""Display-only JSON re-indenter.

Works on the character stream in one pass without building a tree, so it
never fails: unbalanced or otherwise malformed input still comes out
re-indented, just not prettily.
"""

INDENT = "  "
WHITESPACE = (" ", "\t", "\r", "\n")
OPENERS = ("{", "[")
CLOSERS = ("}", "]")


def looks_like_json(text: str) -> bool:
    return bool(text) and text[0] in OPENERS


def _newline(level: int) -> str:
    # a negative level (extra closers) renders flush left
    return "\n" + INDENT * max(level, 0)


def format_json(raw: str) -> str:
    out = []
    indent = 0
    in_string = False
    prev = ""
    n = len(raw)

    for i, c in enumerate(raw):
        if c == '"' and prev != "\\":
            in_string = not in_string
            out.append(c)
        elif in_string:
            out.append(c)
        elif c in OPENERS:
            out.append(c)
            indent += 1
            if i + 1 < n and raw[i + 1] not in CLOSERS:
                out.append(_newline(indent))
        elif c in CLOSERS:
            indent -= 1
            if prev not in OPENERS:
                out.append(_newline(indent))
            out.append(c)
        elif c == ",":
            out.append(c)
            out.append(_newline(indent))
        elif c == ":":
            out.append(": ")
        elif c not in WHITESPACE:
            out.append(c)

        if c not in WHITESPACE:
            prev = c

    out.append("\n")
    return "".join(out)
