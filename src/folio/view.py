"""Per-request view data passed into a render call.

``ViewData`` is created by the handler, receives its anti-forgery token
from the renderer, and is then read-only for the duration of execution.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Names the renderer always places in the template context. They take
# precedence over same-named keys in ``ViewData.data``.
RESERVED_NAMES: frozenset[str] = frozenset(
    {"data", "session", "feedback", "form", "csrf_token", "page"}
)


@dataclass(frozen=True, slots=True)
class FormState:
    """Validation errors and resubmitted values for a form.

    ``errors`` maps field names to lists of messages::

        {"email": ["Must be a valid email address"]}

    ``values`` holds what the user typed so the form can be re-populated.
    """

    errors: dict[str, list[str]] = field(default_factory=dict)
    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: Any, values: Mapping[str, str] | None = None) -> FormState:
        """Build from any validation result exposing an ``errors`` mapping."""
        errors = getattr(result, "errors", None) or {}
        return cls(
            errors={name: list(messages) for name, messages in errors.items()},
            values=dict(values or {}),
        )

    def has_errors(self, field_name: str | None = None) -> bool:
        if field_name is None:
            return any(self.errors.values())
        return bool(self.errors.get(field_name))

    def value(self, field_name: str, default: str = "") -> str:
        return self.values.get(field_name, default)


@dataclass(slots=True)
class ViewData:
    """Data for one render call.

    Usage::

        view = ViewData(
            data={"title": "Sign up"},
            session_data=session,
            feedback_data={"error": "Please fix the errors below"},
            form_data=FormState(errors=result.errors, values=dict(form)),
            page=Page.SIGNUP,
        )
        renderer.render(sink, request, "signup.html", view)

    ``csrf_token`` is overwritten by the renderer before execution.
    """

    data: dict[str, Any] = field(default_factory=dict)
    session_data: Any = None
    feedback_data: dict[str, str] = field(default_factory=dict)
    form_data: Any = field(default_factory=FormState)
    csrf_token: str = ""
    page: Any = None

    def as_context(self) -> dict[str, Any]:
        """Flatten into a template context.

        Every ``data`` key is available at the top level, so templates read
        ``{{ title }}`` rather than ``{{ data.title }}``; both work.
        """
        context: dict[str, Any] = dict(self.data)
        context.update(
            data=self.data,
            session=self.session_data,
            feedback=self.feedback_data,
            form=self.form_data,
            csrf_token=self.csrf_token,
            page=self.page,
        )
        return context
