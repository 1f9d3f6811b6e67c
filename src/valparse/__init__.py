"""valparse: validate, parse, and freeze data with ordered, labeled rules.

Usage::

    from valparse import unless, is_missing, non_string, validate

    name = validate(payload.get("name"), {
        **unless("name", is_missing, non_string),
        "parse": str.strip,
        "name is blank": lambda s: not s,
    })
"""

from __future__ import annotations

from valparse.domain.atoms import (
    ATOMS,
    Atom,
    atom,
    get_atom,
    is_empty,
    is_missing,
    non_array,
    non_array_in_array,
    non_boolean,
    non_boolean_in_array,
    non_couple_array,
    non_couple_or_triple_array,
    non_function,
    non_function_in_array,
    non_integer,
    non_integer_in_array,
    non_number,
    non_number_in_array,
    non_object,
    non_object_in_array,
    non_single_array,
    non_single_or_couple_array,
    non_single_or_couple_or_triple_array,
    non_string,
    non_string_in_array,
    non_triple_array,
    not_one_of,
    unless,
)
from valparse.domain.errors import Failure, FailureKind, RuleConfigError, ValidationError
from valparse.domain.evaluate import evaluate, validate, validate_async
from valparse.domain.freeze import freeze
from valparse.domain.rules import (
    AnyOf,
    AsyncPredicate,
    AsyncTransform,
    Const,
    Predicate,
    Replace,
    RuleSet,
    Transform,
)
from valparse.domain.serialize import serialize

__version__ = "0.1.0"

__all__ = [
    "ATOMS",
    "AnyOf",
    "AsyncPredicate",
    "AsyncTransform",
    "Atom",
    "Const",
    "Failure",
    "FailureKind",
    "Predicate",
    "Replace",
    "RuleConfigError",
    "RuleSet",
    "Transform",
    "ValidationError",
    "__version__",
    "atom",
    "evaluate",
    "freeze",
    "get_atom",
    "is_empty",
    "is_missing",
    "non_array",
    "non_array_in_array",
    "non_boolean",
    "non_boolean_in_array",
    "non_couple_array",
    "non_couple_or_triple_array",
    "non_function",
    "non_function_in_array",
    "non_integer",
    "non_integer_in_array",
    "non_number",
    "non_number_in_array",
    "non_object",
    "non_object_in_array",
    "non_single_array",
    "non_single_or_couple_array",
    "non_single_or_couple_or_triple_array",
    "non_string",
    "non_string_in_array",
    "non_triple_array",
    "not_one_of",
    "serialize",
    "unless",
    "validate",
    "validate_async",
]
