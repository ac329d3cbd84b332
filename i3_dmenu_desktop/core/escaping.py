"""String escaping for desktop entry values and i3 exec commands."""

_GENERAL_ESCAPES = {
    "s": " ",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}


def unescape_descriptor_value(value: str) -> str:
    """Apply the general string escape rule of the desktop entry format.

    ``\\s``, ``\\n``, ``\\t``, ``\\r`` and ``\\\\`` are replaced; any other
    backslash sequence is kept as is. Quotes, backticks and dollar signs are
    left escaped because i3 hands the command to ``sh -c``, which unescapes
    them.

    Examples:
        >>> unescape_descriptor_value(r"a\\nb")
        'a\\nb'
        >>> unescape_descriptor_value(r"a\\\\nb")
        'a\\\\nb'
    """
    chars = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            if nxt in _GENERAL_ESCAPES:
                chars.append(_GENERAL_ESCAPES[nxt])
            else:
                chars.append(ch)
                chars.append(nxt)
            i += 2
        else:
            chars.append(ch)
            i += 1
    return "".join(chars)


def quote_for_exec(cmd: str) -> str:
    """Quote a command so i3's ``exec`` treats it as a single argument.

    Examples:
        >>> quote_for_exec("notify-send hello")
        '"notify-send hello"'
        >>> print(quote_for_exec('notify-send "hello, world"'))
        "notify-send \\"hello, world\\""
    """
    escaped = cmd.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unquote_exec(quoted: str) -> str:
    """Reverse :func:`quote_for_exec`.

    Raises:
        ValueError: If the string is not wrapped in double quotes
    """
    if len(quoted) < 2 or not (quoted.startswith('"') and quoted.endswith('"')):
        raise ValueError(f"not a quoted exec string: {quoted!r}")
    chars = []
    body = quoted[1:-1]
    i = 0
    while i < len(body):
        if body[i] == "\\" and i + 1 < len(body):
            chars.append(body[i + 1])
            i += 2
        else:
            chars.append(body[i])
            i += 1
    return "".join(chars)
