"""Django-style template renderer.

Renders Django/pongo2-dialect prompt templates on a sandboxed Jinja2
environment. Tags are rewritten to their Jinja2 spelling before parsing:

- filter arguments ``{{ value|floatformat:0 }}`` become ``floatformat(0)``
- ``forloop.counter`` and friends become ``loop.index`` and friends
- ``{% empty %}`` inside a ``for`` becomes ``{% else %}``

Dictionary keys win over attributes on dotted lookups, and missing names
render as empty strings and compare false, as in Django. Comparisons
between a number and a numeric string compare as numbers, and a comparison
that cannot be evaluated is false instead of an error.
"""

import logging
import operator
import re
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, getcontext
from typing import Any

from jinja2 import ChainableUndefined, TemplateError, TemplateSyntaxError, nodes
from jinja2.compiler import CodeGenerator, Frame
from jinja2.sandbox import SandboxedEnvironment

from promptschema.interfaces.renderer import BaseTemplateRenderer, TemplateRenderError

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"\{\{.*?\}\}|\{%.*?%\}", re.DOTALL)
FILTER_ARG_PATTERN = re.compile(
    r"""\|\s*(\w+)\s*:\s*("[^"]*"|'[^']*'|[^\s|}%)]+)"""
)
FORLOOP_PATTERN = re.compile(
    r"\bforloop\.(counter0|counter|revcounter0|revcounter|first|last)\b",
    re.IGNORECASE,
)
EMPTY_TAG_PATTERN = re.compile(r"^\{%(-?)\s*empty\s*(-?)%\}$")

FORLOOP_ATTRIBUTES = {
    "counter": "index",
    "counter0": "index0",
    "revcounter": "revindex",
    "revcounter0": "revindex0",
    "first": "first",
    "last": "last",
}

COMPARE_OPERATORS = {
    "eq": operator.eq,
    "ne": operator.ne,
    "gt": operator.gt,
    "gteq": operator.ge,
    "lt": operator.lt,
    "lteq": operator.le,
    "in": lambda a, b: a in b,
    "notin": lambda a, b: a not in b,
}


def floatformat(value: Any, arg: Any = -1) -> str:
    """Django ``floatformat``: round a number to ``arg`` decimal places.

    A negative ``arg`` drops the decimals when the value is whole.
    Values that are not numbers render as an empty string.
    """
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        return ""
    try:
        places = int(arg)
    except (TypeError, ValueError):
        return str(value)
    if not d.is_finite():
        return str(value)

    if d == d.to_integral_value() and places <= 0:
        return str(int(d))

    _, digits, exponent = d.as_tuple()
    prec = max(getcontext().prec, abs(places) + len(digits) + abs(exponent) + 1)
    exp = Decimal(1).scaleb(-abs(places))
    rounded = d.quantize(exp, ROUND_HALF_UP, Context(prec=prec))
    if not rounded:
        rounded = rounded.copy_abs()
    return f"{rounded:f}"


class LenientUndefined(ChainableUndefined):
    """Undefined that renders empty and compares false."""

    def __lt__(self, other: Any) -> bool:
        return False

    def __le__(self, other: Any) -> bool:
        return False

    def __gt__(self, other: Any) -> bool:
        return False

    def __ge__(self, other: Any) -> bool:
        return False


def _as_number(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


class DjangoCodeGenerator(CodeGenerator):
    """Compiles comparisons to calls to ``environment.compare``."""

    def visit_Compare(self, node: nodes.Compare, frame: Frame) -> None:
        # a < b < c becomes compare(a < b) and compare(b < c)
        left = node.expr
        self.write("(")
        for index, operand in enumerate(node.ops):
            if index:
                self.write(" and ")
            self.write(f"environment.compare({operand.op!r}, ")
            self.visit(left, frame)
            self.write(", ")
            self.visit(operand.expr, frame)
            self.write(")")
            left = operand.expr
        self.write(")")


class DjangoEnvironment(SandboxedEnvironment):
    """Sandboxed environment with Django lookup order for ``a.b``."""

    code_generator_class = DjangoCodeGenerator

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]
            except (KeyError, TypeError):
                pass
        return super().getattr(obj, attribute)

    def compare(self, op: str, left: Any, right: Any) -> bool:
        """Evaluate a template comparison.

        Template variables usually arrive as strings, so ``"5" > 0`` compares
        5 with 0. For ``in`` against a string the left side is stringified.
        Operands that still cannot be compared give False.
        """
        if op in ("in", "notin"):
            if isinstance(right, str) and _is_number(left):
                left = str(left)
        elif _is_number(right):
            left = _as_number(left)
        elif _is_number(left):
            right = _as_number(right)

        try:
            return bool(COMPARE_OPERATORS[op](left, right))
        except (TypeError, ValueError, ArithmeticError):
            return False


def _rewrite_tag(match: re.Match[str]) -> str:
    tag = match.group(0)
    empty = EMPTY_TAG_PATTERN.match(tag)
    if empty:
        return "{%" + empty.group(1) + " else " + empty.group(2) + "%}"
    tag = FILTER_ARG_PATTERN.sub(r"|\1(\2)", tag)
    return FORLOOP_PATTERN.sub(
        lambda m: "loop." + FORLOOP_ATTRIBUTES[m.group(1).lower()], tag
    )


def to_jinja_syntax(template: str) -> str:
    """Rewrite Django-dialect tags in a template to Jinja2 syntax."""
    return TAG_PATTERN.sub(_rewrite_tag, template)


class DjangoTemplateRenderer(BaseTemplateRenderer):
    """Renders Django-style templates using Jinja2."""

    def __init__(self, autoescape: bool = True) -> None:
        """Initialize the renderer.

        Args:
            autoescape: Whether placeholder output is HTML-escaped.
        """
        self.env = DjangoEnvironment(
            autoescape=autoescape,
            undefined=LenientUndefined,
            keep_trailing_newline=True,
        )
        self.env.filters["floatformat"] = floatformat

    def render(self, template: str, context: dict[str, Any]) -> str:
        """Render a Django-style template string with the given context."""
        try:
            compiled = self.env.from_string(to_jinja_syntax(template))
        except TemplateSyntaxError as e:
            logger.error(f"Failed to parse template: {e}")
            raise TemplateRenderError(f"failed to parse template: {e}", stage="parse") from e

        try:
            return compiled.render(**context)
        except (TemplateError, TypeError, ValueError, ArithmeticError) as e:
            logger.error(f"Failed to render template: {e}", exc_info=True)
            raise TemplateRenderError(f"failed to render template: {e}", stage="render") from e
