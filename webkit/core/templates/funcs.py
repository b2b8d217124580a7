"""
Template functions — helpers registered in every template.

Two groups:

* GitHub Actions expression builders (``gh_var("X")`` → ``${{ vars.X }}``).
  Jinja would try to parse a literal ``${{ ... }}``, so workflow
  templates emit every expression through these.
* A general string bundle (upper, trim, snakecase, ...) with the names
  people know from common template helper libraries.
"""

from __future__ import annotations

import re
from typing import Any

# ── GitHub expressions ──────────────────────────────────────────


def gh_expression(expr: str) -> str:
    return "${{ " + expr + " }}"


def gh_var(name: str) -> str:
    return gh_expression(f"vars.{name}")


def gh_secret(name: str) -> str:
    return gh_expression(f"secrets.{name}")


def gh_input(name: str) -> str:
    return gh_expression(f"inputs.{name}")


def gh_env(name: str) -> str:
    return gh_expression(f"env.{name}")


def _upper_first(word: str) -> str:
    # Characters without a one-to-one capital (``ß`` → ``SS``) are kept as is.
    first = word[0].upper()
    if len(first) != 1:
        first = word[0]
    return first + word[1:]


def pretty_key(key: str) -> str:
    """snake_case → Title Case, leaving the rest of each word alone.

    ``server_type`` → ``Server Type``, ``SSH_KEYS`` → ``SSH KEYS``,
    ``nbg1`` → ``Nbg1``. Empty segments are dropped.
    """
    words = [w for w in key.split("_") if w]
    return " ".join(_upper_first(w) for w in words)


# ── String bundle ───────────────────────────────────────────────

_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])|[0-9]+")


def _words(s: str) -> list[str]:
    return _WORD_BOUNDARY.findall(s)


def trim_prefix(s: str, prefix: str) -> str:
    return s[len(prefix):] if prefix and s.startswith(prefix) else s


def trim_suffix(s: str, suffix: str) -> str:
    return s[: -len(suffix)] if suffix and s.endswith(suffix) else s


def title(s: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in s.split(" "))


def quote(*values: Any) -> str:
    return " ".join(f'"{v}"' for v in values if v is not None)


def squote(*values: Any) -> str:
    return " ".join(f"'{v}'" for v in values if v is not None)


def indent(s: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line for line in s.split("\n"))


def nindent(s: str, spaces: int) -> str:
    return "\n" + indent(s, spaces)


def default(value: Any, fallback: Any) -> Any:
    return value if value else fallback


def snakecase(s: str) -> str:
    return "_".join(w.lower() for w in _words(s))


def kebabcase(s: str) -> str:
    return "-".join(w.lower() for w in _words(s))


def camelcase(s: str) -> str:
    words = _words(s)
    return "".join(w[:1].upper() + w[1:].lower() for w in words)


def trunc(s: str, length: int) -> str:
    if length < 0:
        return s[length:]
    return s[:length]


STRING_FUNCS: dict[str, Any] = {
    "upper": lambda s: s.upper(),
    "lower": lambda s: s.lower(),
    "trim": lambda s: s.strip(),
    "trim_prefix": trim_prefix,
    "trim_suffix": trim_suffix,
    "title": title,
    "replace": lambda s, old, new: s.replace(old, new),
    "contains": lambda s, sub: sub in s,
    "has_prefix": lambda s, prefix: s.startswith(prefix),
    "has_suffix": lambda s, suffix: s.endswith(suffix),
    "quote": quote,
    "squote": squote,
    "indent": indent,
    "nindent": nindent,
    "default": default,
    "join": lambda items, sep: sep.join(str(i) for i in items),
    "split": lambda s, sep: s.split(sep),
    "snakecase": snakecase,
    "kebabcase": kebabcase,
    "camelcase": camelcase,
    "trunc": trunc,
    "repeat": lambda s, n: s * n,
    "nospace": lambda s: "".join(s.split()),
}

GITHUB_FUNCS: dict[str, Any] = {
    "gh_expression": gh_expression,
    "gh_var": gh_var,
    "gh_secret": gh_secret,
    "gh_input": gh_input,
    "gh_env": gh_env,
    "pretty_key": pretty_key,
}


def template_funcs() -> dict[str, Any]:
    """Every function available to templates, by name."""
    return {**STRING_FUNCS, **GITHUB_FUNCS}
