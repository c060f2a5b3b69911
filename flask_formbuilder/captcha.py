"""
Math question CAPTCHAs used to keep automated submissions out of forms.
"""

import logging
import random
from typing import Any, MutableMapping, Optional, Sequence

from flask import has_request_context, session

from .const import (
    CAPTCHA_SESSION_KEY,
    DEFAULT_CAPTCHA_MAX_VALUE,
    DEFAULT_CAPTCHA_MIN_VALUE,
    DEFAULT_CAPTCHA_OPERATORS,
)
from .i18n import gettext

log = logging.getLogger(__name__)


class MathChallenge(object):
    """
    Generates simple addition/subtraction questions and checks answers.

    The answer of the last generated question is kept in ``store`` under
    ``CAPTCHA_SESSION_KEY``. Without an explicit store the Flask session is
    used while handling a request, a private dict otherwise.

    :param min_value: smallest number used in a question
    :param max_value: largest number used in a question
    :param operators: operators to pick from, ``+`` and/or ``-``
    :param store: mapping holding the expected answer
    :param rng: ``random.Random`` compatible generator
    """

    def __init__(
        self,
        min_value: int = DEFAULT_CAPTCHA_MIN_VALUE,
        max_value: int = DEFAULT_CAPTCHA_MAX_VALUE,
        operators: Sequence[str] = DEFAULT_CAPTCHA_OPERATORS,
        store: Optional[MutableMapping] = None,
        rng: Optional[random.Random] = None,
    ):
        self.min_value = DEFAULT_CAPTCHA_MIN_VALUE
        self.max_value = DEFAULT_CAPTCHA_MAX_VALUE
        self.operators = list(DEFAULT_CAPTCHA_OPERATORS)
        self.question = ""
        self.answer = None
        self._store = store
        self._fallback_store = {}
        self._rng = rng or random.Random()
        self.set_limits(min_value, max_value, operators)

    @property
    def store(self) -> MutableMapping:
        if self._store is not None:
            return self._store
        if has_request_context():
            return session
        return self._fallback_store

    def set_limits(self, min_value: Any, max_value: Any, operators: Any) -> None:
        """
        Set the limits used to generate questions, invalid values are
        ignored and the current ones kept.

        The limits are checked as a pair: when the max in effect would not
        exceed the new min, both current limits are kept.
        """
        new_min = self.min_value
        if _is_number(min_value) and int(min_value) > 0:
            new_min = int(min_value)
        else:
            log.debug("Ignoring captcha min value %r", min_value)
        new_max = self.max_value
        if _is_number(max_value) and int(max_value) > new_min:
            new_max = int(max_value)
        else:
            log.debug("Ignoring captcha max value %r", max_value)
        if new_max <= new_min:
            log.debug("Ignoring captcha min value %r, not below max %r", min_value, new_max)
            new_min = self.min_value
        self.min_value = new_min
        self.max_value = new_max
        if isinstance(operators, (list, tuple)) and operators:
            valid = [op for op in operators if op in ("+", "-")]
            if valid:
                self.operators = valid

    def get_question(self) -> str:
        """
        Generate a question, remember its answer and return the question.
        """
        first = self._rng.randint(self.min_value, self.max_value)
        second = self._rng.randint(self.min_value, self.max_value)
        operator = self._rng.choice(self.operators)

        if operator == "-":
            # keep answers positive
            high, low = max(first, second), min(first, second)
            self.question = gettext("%(first)s minus %(second)s", first=high, second=low)
            self.answer = high - low
        else:
            self.question = gettext("%(first)s plus %(second)s", first=first, second=second)
            self.answer = first + second

        self.store[CAPTCHA_SESSION_KEY] = self.answer
        return self.question

    def check_answer(self, user_answer: Any) -> bool:
        """
        Check the answer a user gave against the stored one. A correct
        answer is consumed so it cannot be replayed.
        """
        expected = self.store.get(CAPTCHA_SESSION_KEY)
        if expected is None:
            return False
        try:
            correct = int(str(user_answer).strip()) == int(expected)
        except (TypeError, ValueError):
            return False
        if correct:
            self.store.pop(CAPTCHA_SESSION_KEY, None)
        return correct


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)
