"""Function registry and built-in template helpers.

A registry is a plain ``{name: callable}`` mapping. Every function is
installed on each bundle both as a filter and as a global, so templates
can use either form::

    {{ form | contains_errors("email") }}
    {{ contains_errors(form, "email") }}

Registries compose with :func:`merge_functions`: the override wins for
names present in both, and nothing from the base is dropped.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Mapping
from typing import Any

from kida.template import Markup

type FunctionMap = Mapping[str, Callable[..., Any]]


def merge_functions(base: FunctionMap, override: FunctionMap | None) -> dict[str, Callable[..., Any]]:
    """Return a new registry with *override* layered over *base*."""
    merged = dict(base)
    if override:
        merged.update(override)
    return merged


# -- Built-in helpers --


def _errors_of(form: Any) -> Mapping[str, Any]:
    """Errors mapping from a FormState-like object or a bare mapping."""
    if form is None:
        return {}
    if isinstance(form, Mapping):
        return form
    errors = getattr(form, "errors", None)
    return errors if isinstance(errors, Mapping) else {}


def coalesce(*values: Any) -> Any:
    """Return the first truthy argument, else the last one.

    Example:
        {{ coalesce(user.nickname, user.name, "guest") }}
    """
    for value in values:
        if value:
            return value
    return values[-1] if values else ""


def contains_errors(form: Any, field_name: str | None = None) -> bool:
    """True if *form* has validation errors, optionally for one field.

    Example:
        {% if contains_errors(form, "email") %}<p class="error">Check your email</p>{% end %}
    """
    errors = _errors_of(form)
    if field_name is None:
        return any(errors.values())
    return bool(errors.get(field_name))


def field_errors(form: Any, field_name: str) -> list[str]:
    """Messages for a single field, or an empty list.

    Example:
        {% for msg in form | field_errors("username") %}
          <span class="error">{{ msg }}</span>
        {% end %}
    """
    val = _errors_of(form).get(field_name)
    return list(val) if val else []


def field_value(form: Any, field_name: str, default: str = "") -> str:
    """The value the user resubmitted for *field_name*."""
    values = getattr(form, "values", None)
    if isinstance(values, Mapping):
        return values.get(field_name, default)
    return default


def csrf_field(token: str, name: str = "_csrf_token") -> Markup:
    """Hidden input carrying the anti-forgery token.

    Example:
        <form method="post">
            {{ csrf_field(csrf_token) }}
        </form>
    """
    return Markup(
        f'<input type="hidden" name="{html.escape(name, quote=True)}"'
        f' value="{html.escape(token, quote=True)}">'
    )


# Registered on every configuration unless overridden by name.
BUILTIN_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "coalesce": coalesce,
    "contains_errors": contains_errors,
    "csrf_field": csrf_field,
    "field_errors": field_errors,
    "field_value": field_value,
}
