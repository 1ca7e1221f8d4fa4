"""Partial updates for points of interest.

A JSON Patch document is first parsed into typed operations; anything that
cannot be parsed is a PatchDocumentError, raised before any field is touched.
The parsed operations are applied to a detached projection which is then
re-validated with the creation rules. Only a valid projection is copied back
onto the live entity.
"""
import json
import logging
from typing import Any, Dict, List

from app.core.errors import PatchDocumentError, ValidationError
from app.domain.entities.point_of_interest import PointOfInterest, PointOfInterestForUpdate
from app.domain.value_objects.patch_operations import (
    PatchOperation,
    ReplaceDescription,
    ReplaceName,
)

logger = logging.getLogger(__name__)

SETTING_OPS = ("replace", "add")
CLEARING_OPS = ("remove",)
IMMUTABLE_PATHS = ("id", "cityid", "city_id")
OPERATIONS_BY_PATH = {
    "name": ReplaceName,
    "description": ReplaceDescription,
}


def _normalize_path(path: Any, index: int) -> str:
    if not isinstance(path, str) or not path.startswith("/") or path.startswith("//"):
        raise PatchDocumentError("Operation path must be a JSON Pointer such as '/name'", index)
    normalized = path[1:].lower()
    if not normalized:
        raise PatchDocumentError("Operation path must name a field", index)
    if "/" in normalized:
        raise PatchDocumentError(f"Unsupported nested path '{path}'", index)
    return normalized


def parse_operation(raw: Any, index: int) -> PatchOperation:
    """Parse one JSON Patch entry into a typed operation."""
    if not isinstance(raw, dict):
        raise PatchDocumentError("Each operation must be a JSON object", index)

    op = raw.get("op")
    if not isinstance(op, str):
        raise PatchDocumentError("Operation is missing 'op'", index)
    op = op.lower()
    if op not in SETTING_OPS and op not in CLEARING_OPS:
        raise PatchDocumentError(f"Unsupported operation '{op}'", index)

    path = _normalize_path(raw.get("path"), index)
    if path in IMMUTABLE_PATHS:
        raise PatchDocumentError(f"Path '/{path}' cannot be modified", index)
    operation_type = OPERATIONS_BY_PATH.get(path)
    if operation_type is None:
        raise PatchDocumentError(f"Unknown path '/{path}'", index)

    if op in CLEARING_OPS:
        return operation_type(None)

    if "value" not in raw:
        raise PatchDocumentError(f"Operation '{op}' requires a value", index)
    value = raw["value"]
    if value is not None and not isinstance(value, str):
        raise PatchDocumentError(f"Value for '/{path}' must be a string", index)
    return operation_type(value)


def decode_patch_document(raw: bytes) -> Any:
    """Decode a raw request body into a JSON value.

    Raises:
        PatchDocumentError: if the body is empty, not UTF-8 or not JSON
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PatchDocumentError("Patch document must be UTF-8 encoded JSON") from e
    if not text.strip():
        raise PatchDocumentError("Patch document is missing")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PatchDocumentError(f"Patch document is not valid JSON: {e.msg}") from e


def parse_patch_document(document: Any) -> List[PatchOperation]:
    """Parse a whole JSON Patch document.

    Raises:
        PatchDocumentError: if the document or any operation is malformed
    """
    if not isinstance(document, list):
        raise PatchDocumentError("Patch document must be a JSON array of operations")
    return [parse_operation(raw, index) for index, raw in enumerate(document)]


def apply_operations(target: PointOfInterestForUpdate, operations: List[PatchOperation]) -> None:
    """Apply operations in order; later writes to the same field win."""
    for operation in operations:
        if isinstance(operation, ReplaceName):
            target.name = operation.value
        elif isinstance(operation, ReplaceDescription):
            target.description = operation.value
        else:
            raise PatchDocumentError(f"Unsupported operation {operation!r}")


def apply_patch(point: PointOfInterest, document: Any) -> PointOfInterestForUpdate:
    """Patch ``point`` in place, or leave it untouched and raise.

    ``document`` is either a decoded JSON value or the raw request body.

    Raises:
        PatchDocumentError: if ``document`` is malformed
        ValidationError: if the patched fields break the creation rules
    """
    if isinstance(document, (bytes, bytearray)):
        document = decode_patch_document(bytes(document))
    operations = parse_patch_document(document)

    to_patch = PointOfInterestForUpdate.from_entity(point)
    apply_operations(to_patch, operations)

    errors: Dict[str, List[str]] = to_patch.validation_errors()
    if errors:
        logger.info(f"Patch for point of interest {point.id} rejected: {errors}")
        raise ValidationError(errors)

    to_patch.apply_to(point)
    return to_patch
