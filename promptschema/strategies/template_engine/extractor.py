"""Template variable extraction.

Scans Django/Jinja-style template text for ``{{ ... }}`` placeholders and
``{% for x in y %}`` loops without executing the template. Matching is
purely lexical: the whole placeholder body before any filter pipeline is
taken as the variable name, so ``{{ a.b }}`` yields ``a.b`` and
``{{ a + b }}`` yields ``a + b``.
"""

import re

# {{ name }} or {{ name|filter:arg }}; group 1 is everything before the first pipe
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^}|]+)(?:\|[^}]*)?\s*\}\}")

# {% for item in items %}; group 1 is the bare identifier being iterated
FOR_LOOP_PATTERN = re.compile(
    r"\{%\s*for\s+\w+\s+in\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*%\}",
    re.ASCII,
)


def extract_variables(template: str) -> list[str]:
    """Extract variable names referenced by placeholders.

    Args:
        template: The template source text.

    Returns:
        Unique variable names in order of first appearance.
    """
    variables: list[str] = []
    seen: set[str] = set()

    for match in PLACEHOLDER_PATTERN.finditer(template):
        var_name = match.group(1).strip()
        if var_name and var_name not in seen:
            variables.append(var_name)
            seen.add(var_name)

    return variables


def extract_for_loop_arrays(template: str) -> list[str]:
    """Extract the names of arrays iterated by ``for`` loops.

    Dotted loop sources such as ``{% for x in a.b %}`` are not matched.
    Duplicates are kept; callers merging with other names de-duplicate.

    Args:
        template: The template source text.

    Returns:
        Loop source names in order of appearance.
    """
    return FOR_LOOP_PATTERN.findall(template)


def is_loop_iterator(var_name: str, template: str) -> bool:
    """Check whether a name is the iterator variable of any ``for`` loop."""
    pattern = r"\{%\s*for\s+" + re.escape(var_name) + r"\s+in\s+"
    return re.search(pattern, template) is not None


def is_array_variable(variable: str, for_loop_arrays: list[str]) -> bool:
    """Check whether a variable is iterated by a ``for`` loop."""
    return variable in for_loop_arrays
