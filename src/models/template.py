from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)

from src.utils.errors import TemplateValidationError


class Method(StrEnum):
    """Selector resolution strategies, keyed by the strings templates are authored with."""

    CSS = "css"
    CLASS_NAME = "class"
    ID = "id"
    REGEX = "regex"


class FieldKind(StrEnum):
    TEXT = "text"
    ATTRIBUTE = "attribute"


def _default_method(value: Any) -> Any:
    # Missing, null and empty methods all mean CSS
    return value or Method.CSS


MethodField = Annotated[Method, BeforeValidator(_default_method)]


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: FieldKind = Field(alias="type")
    selector: str
    method: MethodField = Method.CSS
    attribute: str | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_text_attribute(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("type", data.get("kind")) == FieldKind.TEXT:
            data = {k: v for k, v in data.items() if k != "attribute"}
        return data

    @model_validator(mode="after")
    def require_attribute(self) -> "FieldSpec":
        if self.kind is FieldKind.ATTRIBUTE and not self.attribute:
            raise ValueError("attribute fields must name the attribute to read")
        return self


class LinkSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: str
    method: MethodField = Method.CSS


class Template(BaseModel):
    """Declarative description of what to extract from a listing page and how to paginate."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    item_selector: str = Field(alias="itemSelector", min_length=1)
    item_method: MethodField = Field(default=Method.CSS, alias="itemSelectorMethod")
    fields: dict[str, FieldSpec] = Field(min_length=1)
    next_page: LinkSpec | None = Field(default=None, alias="nextPage")
    pagination_limit: PositiveInt | None = Field(default=None, alias="paginationLimit")

    @field_validator("next_page", mode="before")
    @classmethod
    def drop_empty_next_page(cls, value: Any) -> Any:
        # A next-page block without a selector means "single page"
        if isinstance(value, dict) and not value.get("selector"):
            return None
        return value

    @property
    def field_names(self) -> list[str]:
        return list(self.fields)


def parse_template(name: str, raw: Any) -> Template:
    """Validate one caller-supplied template, raising TemplateValidationError on any defect."""
    try:
        return Template.model_validate(raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'template'}: {err['msg']}"
            for err in e.errors()
        )
        raise TemplateValidationError(
            f"Template '{name}' is invalid: {problems}", template=name
        ) from e


def parse_templates(raw_templates: dict[str, Any]) -> dict[str, Template]:
    """Validate every template of a request, keeping declaration order."""
    for name in raw_templates:
        # Names become storage directory names
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise TemplateValidationError(f"Invalid template name {name!r}", template=name)
    return {name: parse_template(name, raw) for name, raw in raw_templates.items()}
