"""Pydantic building blocks shared by the API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from marketplace.shared.pagination import Page


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationSchema(ApiModel):
    current: int
    pages: int
    total: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationSchema":
        return cls(current=page.page, pages=page.pages, total=page.total)


class MessageResponse(ApiModel):
    success: bool = True
    message: str
