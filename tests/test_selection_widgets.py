from markupsafe import Markup
import pytest

from flask_formbuilder.widgets import (
    ColorSelectionWidget,
    MultiSelectionWidget,
    SelectionFormat,
    SelectionWidget,
    YesNoWidget,
)
from flask_formbuilder.widgets.selection import normalize_choices

ONE_TWO = [("1", "One"), ("2", "Two")]


def numbered_choices(count):
    return [(str(number), "Choice %d" % number) for number in range(1, count + 1)]


class TestChoices:
    def test_pairs(self):
        assert normalize_choices(ONE_TWO) == ONE_TWO

    def test_mapping(self):
        assert normalize_choices({"1": "One", "2": "Two"}) == ONE_TWO

    def test_dicts(self):
        choices = [{"value": "1", "name": "One"}, {"value": "2", "label": "Two"}]
        assert normalize_choices(choices) == ONE_TWO

    def test_plain_values(self):
        assert normalize_choices(["a", "b"]) == [("a", "a"), ("b", "b")]

    def test_malformed(self):
        assert normalize_choices("abc") == []
        assert normalize_choices(None) == []


class TestFormat:
    def test_flex_with_six_choices_is_list(self):
        widget = SelectionWidget("pick", choices=numbered_choices(6))
        assert widget.format is SelectionFormat.LIST
        assert widget.widget_is_fieldset is False

    def test_flex_with_five_choices_is_individual(self):
        widget = SelectionWidget("pick", choices=numbered_choices(5))
        assert widget.format is SelectionFormat.INDIVIDUAL
        assert widget.widget_is_fieldset is True

    def test_explicit_format(self):
        widget = SelectionWidget("pick", choices=numbered_choices(6), format="individual")
        assert widget.format is SelectionFormat.INDIVIDUAL
        widget = SelectionWidget("pick", choices=ONE_TWO, format=SelectionFormat.LIST)
        assert widget.format is SelectionFormat.LIST

    def test_unknown_format_falls_back_to_flex(self):
        widget = SelectionWidget("pick", choices=ONE_TWO, format="grid")
        assert widget.format is SelectionFormat.INDIVIDUAL


class TestListRender:
    def test_single_selected_option(self, renderer):
        widget = SelectionWidget(
            "num", choices=ONE_TWO, format="list", default_label="", value="2", renderer=renderer
        )
        html = widget.render()
        assert html.count('selected="selected"') == 1
        assert '<option value="2" selected="selected">Two</option>' in html
        assert '<option value="1">One</option>' in html
        assert "--" not in html

    def test_value_compared_as_string(self, renderer):
        widget = SelectionWidget("num", choices=ONE_TWO, format="list", value=2, renderer=renderer)
        assert '<option value="2" selected="selected">Two</option>' in widget.render()

    def test_escaped_value_matches_raw_choice(self):
        widget = SelectionWidget("dept", choices=[("R&D", "Research")], format="list")
        widget.set_value(Markup("R&amp;D"))
        assert widget.is_selected("R&D") is True
        widget.set_value("R&D")
        assert widget.is_selected("R&D") is True
        assert widget.is_selected("R&amp;D") is False

    def test_default_option_comes_first(self, renderer):
        widget = SelectionWidget("num", choices=ONE_TWO, format="list", renderer=renderer)
        html = widget.render()
        default = '<option value="" selected="selected">--</option>'
        assert default in html
        assert html.index(default) < html.index('<option value="1">One</option>')

    def test_custom_default_option(self, renderer):
        widget = SelectionWidget(
            "num", choices=ONE_TWO, format="list", default_value="0",
            default_label="Pick one", value="1", renderer=renderer,
        )
        html = widget.render()
        assert '<option value="0">Pick one</option>' in html

    def test_select_markup(self, renderer):
        widget = SelectionWidget("num", "Number", choices=ONE_TWO, format="list", renderer=renderer)
        html = widget.render()
        assert '<div class="field SelectionWidget" id="framework-fieldname-num">' in html
        assert '<label class="formLabel" for="num">Number</label>' in html
        assert '  <select name="num"\n          id="num">\n' in html
        assert "  </select>" in html

    def test_labels_are_escaped(self, renderer):
        widget = SelectionWidget("x", choices=[("a", "<b>")], format="list", renderer=renderer)
        assert ">&lt;b&gt;</option>" in widget.render()

    def test_disabled(self, renderer):
        widget = SelectionWidget(
            "num", choices=ONE_TWO, format="list", value="1", disabled=True, renderer=renderer
        )
        html = widget.render()
        assert 'disabled="disabled">' in html
        assert '<input type="hidden" name="num" value="1" />' in html


class TestMultiSelection:
    def test_value_is_list(self):
        widget = MultiSelectionWidget("tags", choices=ONE_TWO)
        assert widget.get_value() == []
        widget.set_value("1")
        assert widget.get_value() == ["1"]
        widget.set_value(("1", "2"))
        assert widget.get_value() == ["1", "2"]
        widget.set_value(None)
        assert widget.get_value() == []

    def test_list_render(self, renderer):
        widget = MultiSelectionWidget(
            "tags", choices=ONE_TWO, format="list", value=[1, "2"], renderer=renderer
        )
        html = widget.render()
        assert 'name="tags[]"' in html
        assert 'multiple="multiple"' in html
        assert 'size="2"' in html
        assert html.count('selected="selected"') == 2
        assert "--" not in html

    def test_size_is_capped(self, renderer):
        widget = MultiSelectionWidget(
            "tags", choices=numbered_choices(12), format="list", renderer=renderer
        )
        assert 'size="10"' in widget.render()

    def test_checkboxes(self, renderer):
        widget = MultiSelectionWidget("tags", choices=ONE_TWO, value=["2"], renderer=renderer)
        html = widget.render()
        assert html.count('type="checkbox"') == 2
        assert html.count('checked="checked"') == 1

    def test_disabled_hidden_inputs(self, renderer):
        widget = MultiSelectionWidget(
            "tags", choices=ONE_TWO, value=["1", "2"], disabled=True, renderer=renderer
        )
        html = widget.render()
        assert '<input type="hidden" name="tags[]" value="1" />' in html
        assert '<input type="hidden" name="tags[]" value="2" />' in html


class TestIndividualRender:
    def test_radio_buttons(self, renderer):
        widget = SelectionWidget(
            "color", "Color", choices=[("r", "Red"), ("g", "Green")], value="g", renderer=renderer
        )
        html = widget.render()
        assert '<fieldset class="field SelectionWidget" id="framework-fieldname-color">' in html
        assert '<legend class="formLabel">Color</legend>' in html
        assert "  <ol>\n" in html
        assert '    <li class="select-field">\n' in html
        assert (
            '      <input type="radio"\n'
            '             name="color"\n'
            '             id="color-g"\n'
            '             value="g"\n'
            '             checked="checked" />\n'
            '      <label for="color-g">Green</label>\n'
        ) in html
        assert html.count('checked="checked"') == 1

    def test_required_marker_inside_legend(self, renderer):
        widget = SelectionWidget("color", "Color", required=True, choices=ONE_TWO, renderer=renderer)
        assert (
            '<legend class="formLabel">Color <span class="fieldRequired" title="Required">'
            "(Required)</span></legend>"
        ) in widget.render()


class TestYesNoWidget:
    def test_unanswered(self):
        assert YesNoWidget("agree").get_value() is None

    @pytest.mark.parametrize(
        "value,stored,expected",
        [(True, "Y", True), (False, "N", False), ("y", "Y", True), (" N ", "N", False)],
    )
    def test_set_value(self, value, stored, expected):
        widget = YesNoWidget("agree", value=value)
        assert widget.value == stored
        assert widget.get_value() is expected

    def test_invalid_value_is_ignored(self):
        widget = YesNoWidget("agree", value=True)
        widget.set_value("maybe")
        assert widget.get_value() is True

    def test_render(self, renderer):
        html = YesNoWidget("agree", "Agree?", value="Y", renderer=renderer).render()
        assert html.count('type="radio"') == 2
        assert '<label for="agree-Y">Yes</label>' in html
        assert '<label for="agree-N">No</label>' in html
        assert 'value="Y"\n' in html

    def test_always_individual(self):
        assert YesNoWidget("agree", format="list").format is SelectionFormat.INDIVIDUAL


class TestColorSelectionWidget:
    COLORS = [
        {"id": "1", "bg": "FF0000", "fg": "FFFFFF"},
        {"id": "2", "bg": "00FF00", "fg": "000000"},
    ]

    def test_render(self, renderer):
        widget = ColorSelectionWidget("color", "Color", colors=self.COLORS, value="1", renderer=renderer)
        html = widget.render()
        assert '<div class="field ColorSelectionWidget" id="framework-fieldname-color">' in html
        assert (
            '<option value="1" style="background-color: #FF0000; color: #FFFFFF;" '
            'selected="selected">Text</option>'
        ) in html
        assert '<option value="">--</option>' in html
        assert html.count('selected="selected"') == 1

    def test_nothing_selected(self, renderer):
        html = ColorSelectionWidget("color", colors=self.COLORS, renderer=renderer).render()
        assert '<option value="" selected="selected">--</option>' in html

    def test_malformed_colors_are_skipped(self):
        widget = ColorSelectionWidget("color", colors=[{"bg": "000000"}, "red", self.COLORS[0]])
        assert widget.colors == [self.COLORS[0]]

    def test_disabled(self, renderer):
        widget = ColorSelectionWidget(
            "color", colors=self.COLORS, value="2", disabled=True, renderer=renderer
        )
        html = widget.render()
        assert '<input type="hidden" name="color" value="2" />' in html
        assert 'disabled="disabled">' in html
