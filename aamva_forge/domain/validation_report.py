"""Validation Report models.

A ValidationReport is produced fresh by every reconciliation call and is
never mutated afterwards; both models are frozen.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from aamva_forge.domain.enums import ValidationStatus

EMPTY_REFERENCE = "(empty)"
NOT_FOUND = "Not Found"


class ValidationFieldResult(BaseModel):
    """Reconciliation outcome for a single catalog element.

    Parameters:
        element_id: Three-letter element identifier
        description: Catalog description of the element
        reference_value: Value held by the reference Attribute Record
        observed_value: Value decoded from the scanned record
        status: MATCH, MISMATCH, MISSING_IN_SCAN or INVALID_FORMAT
        message: Human-readable explanation for non-MATCH outcomes
    """

    model_config = ConfigDict(frozen=True)

    element_id: str = Field(..., pattern=r"^[A-Z]{3}$")
    description: str
    reference_value: str
    observed_value: str
    status: ValidationStatus
    message: Optional[str] = None

    @property
    def is_match(self) -> bool:
        return self.status == ValidationStatus.MATCH


class ValidationReport(BaseModel):
    """Field-by-field discrepancy report for one scanned record.

    Parameters:
        is_valid_signature: Record starts with "@" and carries the "ANSI" tag
        raw_string: The raw record exactly as handed to the reconciler
        fields: Field results in catalog order
    """

    model_config = ConfigDict(frozen=True)

    is_valid_signature: bool
    raw_string: str
    fields: tuple[ValidationFieldResult, ...] = ()

    def counts(self) -> dict[ValidationStatus, int]:
        """Number of field results per status (every status present, possibly 0)."""
        tally = {status: 0 for status in ValidationStatus}
        for result in self.fields:
            tally[result.status] += 1
        return tally

    def issues(self) -> list[ValidationFieldResult]:
        """Field results whose status is not MATCH."""
        return [result for result in self.fields if not result.is_match]

    @property
    def is_clean(self) -> bool:
        """Signature valid and every field matched."""
        return self.is_valid_signature and not self.issues()

    def get_field(self, element_id: str) -> Optional[ValidationFieldResult]:
        for result in self.fields:
            if result.element_id == element_id:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation, with a status summary."""
        data = self.model_dump(mode="json")
        data["summary"] = {status.value: count for status, count in self.counts().items()}
        return data
