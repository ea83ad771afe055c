"""Rule-book validation of documents with JSONPath expressions."""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path
from typing import Any, Union

import yaml
from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as parse_jsonpath
from jsonpath_ng.jsonpath import JSONPath
from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError

from . import codec
from .errors import BuilderInputError, RuleBookError
from .json_types import JSONValue

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT_FAILURE = "Cannot verify an empty JSON"
_FAILURE_SEPARATOR = " => "
_ROOT_FILTER = re.compile(r"\s*\$\s*\[\s*\?")


class _RuleModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DirectValidation(_RuleModel):
    """Expressions that must each match the document."""

    expressions: list[str] = Field(default_factory=list)


class IndirectValidation(_RuleModel):
    """A condition selecting nodes, plus expressions checked against them."""

    condition: str = ""
    expressions: list[str] = Field(default_factory=list)


class Rule(_RuleModel):
    """One entry of a rule book."""

    description: str
    direct_check: bool = Field(default=False, alias="dirCheck")
    direct_validation: DirectValidation = Field(
        default_factory=DirectValidation, alias="dirValidation"
    )
    indirect_validation: IndirectValidation = Field(
        default_factory=IndirectValidation, alias="indValidation"
    )


class RuleBook(RootModel[list[Rule]]):
    """Ordered list of validation rules."""


def load_rule_book(path: Union[str, Path]) -> RuleBook:
    """Load a JSON or YAML rule book from ``path``.

    Raises:
        BuilderInputError: If the file name is blank or the file is absent.
        RuleBookError: If the content is not a valid rule list.
    """
    rule_path = codec.require_file(path)
    try:
        with rule_path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise BuilderInputError(f"Failed to read rule book {rule_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuleBookError(f"Failed to parse rule book {rule_path}: {exc}") from exc

    try:
        return RuleBook.model_validate([] if payload is None else payload)
    except ValidationError as exc:
        raise RuleBookError(f"Invalid rule book {rule_path}: {exc}") from exc


def verify(rule_book_path: Union[str, Path], document_path: Union[str, Path]) -> list[str]:
    """Check the document at ``document_path`` against a rule book file.

    Args:
        rule_book_path (Union[str, Path]): JSON or YAML rule list.
        document_path (Union[str, Path]): JSON document to check.

    Returns:
        list[str]: Failure messages; empty when every rule passes.
    """
    document = codec.load(document_path)
    rule_book = load_rule_book(rule_book_path)
    return verify_document(rule_book, document)


def verify_document(rules: Union[RuleBook, list[Rule]], document: JSONValue) -> list[str]:
    """Evaluate ``rules`` against an in-memory document.

    A direct rule fails once for every expression with no match, reported
    as ``"<description> => <expression>"``. An indirect rule first selects
    nodes with its condition and fails with just its description when
    nothing is selected; otherwise each expression is evaluated against the
    list of selected nodes and fails like a direct expression.

    Returns:
        list[str]: Failure messages in rule order.
    """
    if not document:
        return [EMPTY_DOCUMENT_FAILURE]

    rule_list = rules.root if isinstance(rules, RuleBook) else rules
    failures: list[str] = []
    for rule in rule_list:
        if rule.direct_check:
            failures.extend(
                _failed_expressions(rule.description, rule.direct_validation.expressions, document)
            )
            continue

        condition = rule.indirect_validation.condition
        selected = _matches(condition, document)
        if not selected:
            failures.append(rule.description)
            continue
        failures.extend(
            _failed_expressions(rule.description, rule.indirect_validation.expressions, selected)
        )

    logger.debug("Evaluated %d rule(s), %d failure(s)", len(rule_list), len(failures))
    return failures


def _failed_expressions(
    description: str,
    expressions: list[str],
    document: JSONValue,
) -> list[str]:
    return [
        _FAILURE_SEPARATOR.join((description, expression))
        for expression in expressions
        if not _matches(expression, document)
    ]


def _matches(expression: str, document: JSONValue) -> list[Any]:
    # A root filter tests an object document itself, not its member values.
    if isinstance(document, dict) and _ROOT_FILTER.match(expression):
        document = [document]
    return [match.value for match in _compile(expression).find(document)]


@functools.lru_cache(maxsize=256)
def _compile(expression: str) -> JSONPath:
    if not expression.strip():
        raise RuleBookError("Empty path expression in rule book")
    try:
        return parse_jsonpath(expression)
    except JSONPathError as exc:
        raise RuleBookError(f"Invalid path expression {expression!r}: {exc}") from exc
