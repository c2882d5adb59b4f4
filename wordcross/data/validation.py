"""Validation rules for word lists and generation options."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.constants import (
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_MAX_ATTEMPTS,
    MAX_ANSWER_LENGTH,
    MAX_CLUE_LENGTH,
    MAX_GRID_SIZE,
    MAX_LIST_ITEMS,
    MIN_ANSWER_LENGTH,
    MIN_CLUE_LENGTH,
    MIN_GRID_SIZE,
    MIN_LIST_ITEMS,
)
from ..core.exceptions import ListValidationError
from ..utils.logger import get_logger
from .normalization import normalize_answer


LOGGER = get_logger(__name__)

MIN_COMMON_LETTERS = 3


class ListItem(BaseModel):
    """One answer/clue pair of a word list."""

    answer: str = Field(..., min_length=MIN_ANSWER_LENGTH, max_length=MAX_ANSWER_LENGTH)
    clue: str = Field(..., min_length=MIN_CLUE_LENGTH, max_length=MAX_CLUE_LENGTH)
    note: Optional[str] = None
    difficulty: Optional[Literal[1, 2, 3, 4, 5]] = None

    @field_validator("answer")
    @classmethod
    def _normalize(cls, value: str) -> str:
        normalized = normalize_answer(value)
        if not MIN_ANSWER_LENGTH <= len(normalized) <= MAX_ANSWER_LENGTH:
            raise ValueError(
                f"Answer must contain {MIN_ANSWER_LENGTH}-{MAX_ANSWER_LENGTH} letters A-Z"
            )
        return normalized


class ImportList(BaseModel):
    """A topic-organized word list as imported or exported."""

    topic: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    version: int = Field(1, gt=0)
    items: List[ListItem] = Field(..., min_length=MIN_LIST_ITEMS, max_length=MAX_LIST_ITEMS)

    @model_validator(mode="after")
    def _unique_answers(self) -> "ImportList":
        answers = [item.answer for item in self.items]
        if len(answers) != len(set(answers)):
            raise ValueError("Duplicate answers found in list")
        return self


class GridSizeOptions(BaseModel):
    rows: int = Field(DEFAULT_GRID_ROWS, ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    cols: int = Field(DEFAULT_GRID_COLS, ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)


class GenerateOptions(BaseModel):
    """Generation options using the camelCase names of the wire format."""

    model_config = ConfigDict(populate_by_name=True)

    grid_size: GridSizeOptions = Field(default_factory=GridSizeOptions, alias="gridSize")
    seed: Optional[str] = None
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, gt=0, alias="maxAttempts")


@dataclass
class FieldError:
    field: str
    message: str
    code: str = "custom"


@dataclass
class ListValidationResult:
    success: bool
    data: Optional[ImportList] = None
    errors: List[FieldError] = field(default_factory=list)


@dataclass
class AnswerCheck:
    valid: bool
    normalized: str
    issues: List[str] = field(default_factory=list)


def _field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors: List[FieldError] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        errors.append(
            FieldError(
                field=location or "general",
                message=error.get("msg", "Invalid value"),
                code=error.get("type", "custom"),
            )
        )
    return errors


def common_letter_count(answers: Iterable[str]) -> int:
    """Number of distinct letters used at least twice across ``answers``."""

    counts = Counter(letter for answer in answers for letter in answer)
    return sum(1 for count in counts.values() if count >= 2)


def validate_list_json(data: Any) -> ListValidationResult:
    """Validate an imported list payload without raising."""

    try:
        parsed = ImportList.model_validate(data)
    except PydanticValidationError as exc:
        return ListValidationResult(success=False, errors=_field_errors(exc))

    shared = common_letter_count(item.answer for item in parsed.items)
    if shared < MIN_COMMON_LETTERS:
        LOGGER.warning(
            "List '%s' shares only %d common letters; puzzle generation may be challenging",
            parsed.name, shared,
        )
    return ListValidationResult(success=True, data=parsed)


def parse_list(data: Any) -> ImportList:
    """Validate an imported list payload, raising on the first failure."""

    result = validate_list_json(data)
    if not result.success or result.data is None:
        details = "; ".join(f"{err.field}: {err.message}" for err in result.errors)
        raise ListValidationError(f"Invalid word list: {details}")
    return result.data


def parse_generate_options(options: Optional[Mapping[str, Any]]) -> GenerateOptions:
    try:
        return GenerateOptions.model_validate(dict(options or {}))
    except PydanticValidationError as exc:
        details = "; ".join(f"{err.field}: {err.message}" for err in _field_errors(exc))
        raise ListValidationError(f"Invalid generation options: {details}") from exc


def validate_answer_format(answer: str) -> AnswerCheck:
    """Report how ``answer`` normalizes and whether it is usable as-is."""

    issues: List[str] = []
    upper = answer.upper()
    normalized = normalize_answer(upper)
    if len(normalized) != len(upper):
        issues.append("Non-letter characters removed")
    if len(normalized) < MIN_ANSWER_LENGTH:
        issues.append(f"Answer too short (minimum {MIN_ANSWER_LENGTH} letters)")
        return AnswerCheck(valid=False, normalized=normalized, issues=issues)
    if len(normalized) > MAX_ANSWER_LENGTH:
        issues.append(f"Answer too long (maximum {MAX_ANSWER_LENGTH} letters)")
        return AnswerCheck(valid=False, normalized=normalized, issues=issues)
    return AnswerCheck(valid=not issues, normalized=normalized, issues=issues)


__all__ = [
    "AnswerCheck",
    "FieldError",
    "GenerateOptions",
    "GridSizeOptions",
    "ImportList",
    "ListItem",
    "ListValidationResult",
    "common_letter_count",
    "parse_generate_options",
    "parse_list",
    "validate_answer_format",
    "validate_list_json",
]
