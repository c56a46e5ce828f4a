"""
Structural validation of RFC 6902 JSON Patch documents.

Which auxiliary field an operation needs (``from`` or ``value``) depends on
the operation, so the requirements live in ``OPERATION_RULES`` rather than
on the ``Patch`` model itself.
"""
import enum
from dataclasses import dataclass
from typing import Collection

from pydantic import TypeAdapter, ValidationError

from app.schemas import ErrorObject, Patch


class Operation(str, enum.Enum):
    ADD = "add"
    COPY = "copy"
    MOVE = "move"
    REMOVE = "remove"
    REPLACE = "replace"
    TEST = "test"


VALUE = "value"
FROM = "from"

OPERATION_RULES: dict[Operation, frozenset[str]] = {
    Operation.ADD: frozenset({VALUE}),
    Operation.COPY: frozenset({FROM}),
    Operation.MOVE: frozenset({FROM}),
    Operation.REMOVE: frozenset(),
    Operation.REPLACE: frozenset({VALUE}),
    Operation.TEST: frozenset({VALUE}),
}

VALID_OPS = frozenset(op.value for op in Operation)


class Tag(str, enum.Enum):
    REQUIRED = "required"
    SUPPORTED_OPS = "supportedops"
    ONE_OF = "oneof"
    REQUIRE_VALUE_IF_OP_IS = "requirevalueifopis"
    REQUIRE_FROM_IF_OP_IS = "requirefromifopis"
    NOT_EQUAL_FIELD = "nefield"


ERR_EMPTY_BODY = "empty request body given"
ERR_UNMARSHAL = "failed to unmarshal patch request body"
ERR_NO_PATCHES = "no patches given in request body"


# a JSON null body decodes to None and is reported as an empty patch list
_patches_adapter = TypeAdapter(list[Patch] | None)


class PatchParseError(Exception):
    """The request body could not be read as a list of patch operations."""


@dataclass(frozen=True)
class PatchViolation:
    index: int
    field: str
    tag: Tag
    value: str = ""
    param: str = ""

    def __str__(self) -> str:
        return (
            f"Key: 'Patch.{self.field}' Error:Field validation for "
            f"'{self.field}' failed on the '{self.tag.value}' tag"
        )

    def to_error_object(self) -> ErrorObject:
        key = f"[{self.index}]."
        if self.tag is Tag.REQUIRED:
            values = {key + self.field.lower(): ""}
        elif self.tag is Tag.REQUIRE_VALUE_IF_OP_IS:
            values = {key + VALUE: ""}
        elif self.tag is Tag.REQUIRE_FROM_IF_OP_IS:
            values = {key + FROM: ""}
        else:
            values = {key + self.field.lower(): self.value}
            if self.param:
                values[key + self.param.lower()] = self.value
        return ErrorObject(error=str(self), error_values=values)


def parse_patches(body: bytes) -> list[Patch]:
    """
    Read a non-empty list of patch operations from a raw request body.
    """
    if not body:
        raise PatchParseError(ERR_EMPTY_BODY)

    try:
        patches = _patches_adapter.validate_json(body)
    except ValidationError as e:
        raise PatchParseError(ERR_UNMARSHAL) from e

    if not patches:
        raise PatchParseError(ERR_NO_PATCHES)

    return patches


def is_op_supported(op: str, supported_ops: Collection[Operation] | None) -> bool:
    if supported_ops is None:
        return True
    return op in {o.value for o in supported_ops}


def validate_patch(
    patch: Patch,
    supported_ops: Collection[Operation] | None = None,
    index: int = 0,
) -> list[PatchViolation]:
    """
    Check a single patch operation against RFC 6902 and, when given, the
    operations a resource allows. Every failing rule is returned.
    """
    violations: list[PatchViolation] = []

    if not patch.op:
        violations.append(PatchViolation(index, "Op", Tag.REQUIRED))
    else:
        if not is_op_supported(patch.op, supported_ops):
            violations.append(PatchViolation(index, "Op", Tag.SUPPORTED_OPS, patch.op))

        if patch.op not in VALID_OPS:
            violations.append(PatchViolation(index, "Op", Tag.ONE_OF, patch.op))
        else:
            required = OPERATION_RULES[Operation(patch.op)]
            if VALUE in required and not patch.has_value:
                violations.append(
                    PatchViolation(index, "Op", Tag.REQUIRE_VALUE_IF_OP_IS, patch.op)
                )
            if FROM in required and not patch.from_:
                violations.append(
                    PatchViolation(index, "Op", Tag.REQUIRE_FROM_IF_OP_IS, patch.op)
                )

    if not patch.path:
        violations.append(PatchViolation(index, "Path", Tag.REQUIRED))

    if patch.from_ and patch.path and patch.from_ == patch.path:
        violations.append(
            PatchViolation(index, "From", Tag.NOT_EQUAL_FIELD, patch.from_, param="Path")
        )

    return violations


def validate_patches(
    patches: list[Patch], supported_ops: Collection[Operation] | None = None
) -> list[PatchViolation]:
    violations: list[PatchViolation] = []
    for i, patch in enumerate(patches):
        violations.extend(validate_patch(patch, supported_ops, index=i))
    return violations
