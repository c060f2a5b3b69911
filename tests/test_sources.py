from unittest.mock import Mock

from markupsafe import Markup
import pytest
from werkzeug.datastructures import MultiDict
from wtforms import Form as WTForm, StringField
from wtforms.validators import DataRequired

from flask_formbuilder.sources import (
    SafeValues,
    SafeValueSource,
    ValidationErrorSource,
    ValidationMessages,
    WTFormErrors,
)


class TestSafeValues:
    def test_values_are_escaped_markup(self):
        values = SafeValues({"name": "<b>Tom</b>"})
        assert values.get("name") == "&lt;b&gt;Tom&lt;/b&gt;"
        assert isinstance(values.get("name"), Markup)

    def test_smart_quotes_are_replaced(self):
        assert SafeValues({"name": "O’Neil ‘x"}).get("name") == "O&#39;Neil &#39;x"

    def test_list_keys_are_collapsed(self):
        values = SafeValues({"ids[]": ["1", "<2>"], "one[]": "x"})
        assert values.get("ids") == ["1", "&lt;2&gt;"]
        assert values.get("one") == ["x"]
        assert "ids[]" not in values

    def test_multidict(self):
        values = SafeValues(MultiDict([("a", "1"), ("a", "2"), ("b", "3"), ("c[]", "4")]))
        assert values.get_all() == {"a": ["1", "2"], "b": "3", "c": ["4"]}

    def test_nested_mapping(self):
        values = SafeValues({"address": {"city": "<x>"}})
        assert values.get("address") == {"city": "&lt;x&gt;"}

    def test_none_becomes_empty(self):
        assert SafeValues({"a": None}).get("a") == ""

    def test_defaults(self):
        values = SafeValues()
        assert values.get_all() == {}
        assert values.get("missing") == ""
        assert values.get("missing", None) is None
        assert len(values) == 0

    def test_get_all_is_a_copy(self):
        values = SafeValues({"a": "1"})
        values.get_all()["a"] = "changed"
        assert values.get("a") == "1"

    def test_from_request(self, app):
        with app.test_request_context("/?q=%3Cx%3E", method="POST", data={"tags[]": ["1", "2"]}):
            values = SafeValues.from_request()
        assert values.get("q") == "&lt;x&gt;"
        assert values.get("tags") == ["1", "2"]

    def test_is_a_value_source(self):
        assert isinstance(SafeValues(), SafeValueSource)

    def test_contract_is_abstract(self):
        with pytest.raises(TypeError):
            SafeValueSource()


class TestValidationMessages:
    def test_add_and_get(self):
        messages = ValidationMessages()
        messages.add("email", "Required")
        assert messages.get("validation") == {"email": "Required"}
        assert messages.get() == {"email": "Required"}
        assert messages.has_errors() is True

    def test_messages_for_the_same_key_are_joined(self):
        messages = ValidationMessages()
        messages.add("email", "Required")
        messages.add("email", "Too long")
        assert messages.get()["email"] == "Required; Too long"

    def test_categories(self):
        messages = ValidationMessages()
        messages.add("saved", "Saved", category="info")
        assert messages.get("info") == {"saved": "Saved"}
        assert messages.get("validation") == {}
        assert messages.has_errors() is False

    def test_clear(self):
        messages = ValidationMessages()
        messages.add("a", "x")
        messages.add("b", "y", category="info")
        messages.clear("info")
        assert messages.get("info") == {}
        assert messages.get() == {"a": "x"}
        messages.clear()
        assert messages.has_errors() is False

    def test_get_returns_a_copy(self):
        messages = ValidationMessages()
        messages.add("a", "x")
        messages.get()["a"] = "changed"
        assert messages.get() == {"a": "x"}

    def test_is_an_error_source(self):
        assert isinstance(ValidationMessages(), ValidationErrorSource)


class TestWTFormErrors:
    def test_messages_are_joined(self):
        form = Mock(errors={"name": ["Required", "Too short"], None: ["Form error"]})
        assert WTFormErrors(form).get("validation") == {"name": "Required; Too short"}

    def test_nested_errors(self):
        form = Mock(errors={"address": {"city": ["Required"]}, "ok": []})
        assert WTFormErrors(form).get() == {"address": "Required"}

    def test_other_categories_are_empty(self):
        form = Mock(errors={"name": ["Required"]})
        assert WTFormErrors(form).get("info") == {}

    def test_wtforms_form(self):
        class SignupForm(WTForm):
            name = StringField("Name", validators=[DataRequired()])

        form = SignupForm(MultiDict())
        assert form.validate() is False
        errors = WTFormErrors(form).get("validation")
        assert list(errors) == ["name"]
        assert errors["name"] == form.errors["name"][0]
