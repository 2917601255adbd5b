import pytest
from pydantic import ValidationError

from src.models.template import FieldKind, Method, Template, parse_template, parse_templates
from src.utils.errors import TemplateValidationError


def test_defaults():
    template = parse_template(
        "cars",
        {
            "itemSelector": ".card",
            "fields": {"title": {"type": "text", "selector": ".title"}},
        },
    )
    assert template.item_method is Method.CSS
    assert template.fields["title"].method is Method.CSS
    assert template.fields["title"].kind is FieldKind.TEXT
    assert template.next_page is None
    assert template.pagination_limit is None


def test_full_template():
    template = parse_template(
        "cars",
        {
            "itemSelector": "card",
            "itemSelectorMethod": "class",
            "fields": {
                "title": {"type": "text", "selector": "^Title", "method": "regex"},
                "url": {"type": "attribute", "selector": "#link", "method": "id", "attribute": "href"},
            },
            "nextPage": {"selector": "Next", "method": "regex"},
            "paginationLimit": 3,
        },
    )
    assert template.item_method is Method.CLASS_NAME
    assert template.field_names == ["title", "url"]
    assert template.fields["url"].attribute == "href"
    assert template.next_page.method is Method.REGEX
    assert template.pagination_limit == 3


def test_null_and_empty_methods_mean_css():
    template = parse_template(
        "cars",
        {
            "itemSelector": ".card",
            "itemSelectorMethod": None,
            "fields": {"title": {"type": "text", "selector": ".title", "method": ""}},
            "nextPage": {"selector": "a.next", "method": None},
        },
    )
    assert template.item_method is Method.CSS
    assert template.fields["title"].method is Method.CSS
    assert template.next_page.method is Method.CSS


def test_next_page_without_selector_is_ignored():
    template = parse_template(
        "cars",
        {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}, "nextPage": {"selector": ""}},
    )
    assert template.next_page is None


def test_text_field_drops_attribute():
    template = parse_template(
        "cars",
        {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2", "attribute": "href"}}},
    )
    assert template.fields["t"].attribute is None


@pytest.mark.parametrize(
    "raw",
    [
        {"fields": {"t": {"type": "text", "selector": "h2"}}},
        {"itemSelector": "", "fields": {"t": {"type": "text", "selector": "h2"}}},
        {"itemSelector": ".card"},
        {"itemSelector": ".card", "fields": {}},
        {"itemSelector": ".card", "itemSelectorMethod": "xpath", "fields": {"t": {"type": "text", "selector": "h2"}}},
        {"itemSelector": ".card", "fields": {"t": {"type": "html", "selector": "h2"}}},
        {"itemSelector": ".card", "fields": {"t": {"type": "attribute", "selector": "a"}}},
        {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}, "paginationLimit": 0},
        {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}, "paginationLimit": -2},
        "not a template",
    ],
)
def test_invalid_templates(raw):
    with pytest.raises(TemplateValidationError) as exc_info:
        parse_template("broken", raw)
    assert exc_info.value.template == "broken"
    assert "broken" in str(exc_info.value)


@pytest.mark.parametrize("name", ["", "..", "a/b", "a\\b"])
def test_invalid_template_names(name):
    with pytest.raises(TemplateValidationError):
        parse_templates({name: {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}}})


def test_parse_templates_keeps_declaration_order():
    raw = {
        name: {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}}
        for name in ["zeta", "alpha", "mid"]
    }
    assert list(parse_templates(raw)) == ["zeta", "alpha", "mid"]


def test_template_is_immutable():
    template = Template.model_validate(
        {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}}
    )
    with pytest.raises(ValidationError):
        template.item_selector = ".other"
