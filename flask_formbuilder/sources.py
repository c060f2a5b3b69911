"""
Read interfaces a form binds from, and the implementations shipped with
the package.

A form pulls submitted values from a ``SafeValueSource`` and validation
messages from a ``ValidationErrorSource``. Both are plain read contracts so
any object providing the same methods can be passed to ``Form.render``.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from flask import request

from .const import MSG_TYPE_VALIDATION
from .escaping import sanitize_submitted

log = logging.getLogger(__name__)

SubmittedValue = Union[str, List[str]]


class SafeValueSource(ABC):
    """Source of submitted values already escaped for HTML."""

    @abstractmethod
    def get_all(self) -> Mapping[str, SubmittedValue]:
        """Return every submitted value keyed by field name."""
        ...


class ValidationErrorSource(ABC):
    """Source of messages keyed by field name, grouped by category."""

    @abstractmethod
    def get(self, category: str) -> Mapping[str, str]:
        """Return the messages of ``category`` keyed by field name."""
        ...


class SafeValues(SafeValueSource):
    """
    Submitted values made safe to embed in HTML.

    Every value is escaped with markupsafe, so the result holds ``Markup``
    instances that are not escaped a second time when rendered. Word smart
    quotes are replaced by plain single quotes. Keys using the ``name[]``
    list notation, and keys repeated in a ``MultiDict``, are collapsed into
    a single key holding a list.

    :param raw: a mapping or a Werkzeug ``MultiDict`` of submitted values
    """

    def __init__(self, raw: Optional[Mapping] = None):
        self._values = self._collapse(raw)

    @classmethod
    def from_request(cls) -> "SafeValues":
        """Build from the query string and form data of the current request."""
        return cls(request.values)

    @staticmethod
    def _collapse(raw) -> Dict[str, Any]:
        values = {}
        if not raw:
            return values
        if hasattr(raw, "getlist"):
            items = ((key, raw.getlist(key)) for key in raw.keys())
        else:
            items = raw.items()

        for key, value in items:
            is_list = key.endswith("[]")
            if is_list:
                key = key[:-2]
            if isinstance(value, (list, tuple)):
                if len(value) == 1 and not is_list:
                    value = value[0]
                else:
                    value = list(value)
            elif is_list:
                value = [value]

            if isinstance(value, list) and isinstance(values.get(key), list):
                values[key].extend(sanitize_submitted(value))
            else:
                values[key] = sanitize_submitted(value)
        return values

    def get_all(self) -> Dict[str, Any]:
        return dict(self._values)

    def get(self, key: str, default: Any = "") -> Any:
        return self._values.get(key, default)

    def __contains__(self, key):
        return key in self._values

    def __len__(self):
        return len(self._values)


class ValidationMessages(ValidationErrorSource):
    """
    Registry of messages by category, then by field name.

    A form only reads the ``validation`` category; other categories can be
    used to carry status or info messages along.
    """

    def __init__(self):
        self._messages: Dict[str, Dict[str, str]] = {}

    def add(self, key: str, message: str, category: str = MSG_TYPE_VALIDATION) -> None:
        """
        Add a message for ``key``. A second message for the same key is
        appended to the first one.
        """
        messages = self._messages.setdefault(category, {})
        if messages.get(key):
            messages[key] = "%s; %s" % (messages[key], message)
        else:
            messages[key] = message

    def get(self, category: str = MSG_TYPE_VALIDATION) -> Dict[str, str]:
        return dict(self._messages.get(category, {}))

    def clear(self, category: Optional[str] = None) -> None:
        """Drop the messages of one category, or of all of them."""
        if category is None:
            self._messages.clear()
        else:
            self._messages.pop(category, None)

    def has_errors(self) -> bool:
        return bool(self._messages.get(MSG_TYPE_VALIDATION))


class WTFormErrors(ValidationErrorSource):
    """
    Exposes the errors of a validated WTForms form as validation messages.

    :param form: a ``wtforms.Form`` (or Flask-WTF form) after ``validate()``
    """

    def __init__(self, form):
        self.form = form

    def get(self, category: str = MSG_TYPE_VALIDATION) -> Dict[str, str]:
        if category != MSG_TYPE_VALIDATION:
            return {}
        messages = {}
        for name, errors in (self.form.errors or {}).items():
            # form level errors are keyed by None
            if name is None:
                continue
            text = "; ".join(_flatten(errors))
            if text:
                messages[name] = text
        return messages


def _flatten(errors) -> List[str]:
    if isinstance(errors, str):
        return [errors]
    if isinstance(errors, Mapping):
        errors = errors.values()
    messages = []
    for error in errors:
        messages.extend(_flatten(error))
    return messages
