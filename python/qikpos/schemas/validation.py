"""JSON Schema validation with default filling for commands and jobs."""

from __future__ import annotations

import copy
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Mapping, Sequence

from jsonschema import Draft7Validator, validators
from jsonschema.exceptions import best_match

from ..exceptions import CommandValidationError
from .registry import get_definition, get_schema


def _extend_with_default(validator_class: Any) -> Any:
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator: Any, properties: Mapping[str, Any], instance: Any, schema: Mapping[str, Any]) -> Iterator[Any]:
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if isinstance(subschema, Mapping) and "default" in subschema:
                    instance.setdefault(prop, copy.deepcopy(subschema["default"]))
        yield from validate_properties(validator, properties, instance, schema)

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultingDraft7Validator = _extend_with_default(Draft7Validator)


@lru_cache(maxsize=None)
def _validator(name: str, definition: str | None) -> Any:
    schema = get_schema(name) if definition is None else get_definition(name, definition)
    return DefaultingDraft7Validator(schema)


def _check(name: str, definition: str | None, instance: Any) -> Any:
    candidate = copy.deepcopy(instance)
    error = best_match(_validator(name, definition).iter_errors(candidate))
    if error is not None:
        path = error.json_path if error.absolute_path else ""
        raise CommandValidationError(error.message, path)
    return candidate


def validate_document(name: str, instance: Any) -> Any:
    """Validate ``instance`` against a whole schema document.

    Returns a deep copy with schema defaults filled in; the input is left
    untouched. Raises :class:`CommandValidationError` on the most relevant
    violation.
    """

    return _check(name, None, instance)


def validate_definition(name: str, definition: str, value: Any) -> Any:
    """Validate a single value against one definition of a schema document."""

    return _check(name, definition, value)


def validate_receipt_commands(commands: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return validate_document("receipt", list(commands))


def validate_label_job(job: Mapping[str, Any]) -> Dict[str, Any]:
    return validate_document("label", dict(job))


def validate_barcode_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    return validate_definition("label", "barcodeOptions", dict(options))


def validate_zpl_job(job: Mapping[str, Any]) -> Dict[str, Any]:
    return validate_definition("label", "zplJob", dict(job))


def validate_raw_job(job: Mapping[str, Any]) -> Dict[str, Any]:
    return validate_definition("label", "rawJob", dict(job))
