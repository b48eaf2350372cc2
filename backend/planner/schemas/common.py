"""Shared constrained field types for request payloads."""

from __future__ import annotations

from typing import Annotated

from pydantic import StringConstraints

from planner.models.tasks import (
    COLOR_CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)

TitleStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH),
]
DescriptionStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LENGTH),
]
ColorCategoryStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=COLOR_CATEGORY_MAX_LENGTH),
]
