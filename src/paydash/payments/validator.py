"""
Snapshot Validator

Checks every record of a payment snapshot before it reaches the
aged-metrics engine. Records missing `createdAt` or `amount` are a
data-integrity failure of the upstream store and are never coerced
to zero or "now".
"""

import logging
from typing import Any, Dict, Iterable, List, Union

from pydantic import ValidationError as PydanticValidationError

from paydash.payments.models import PaymentRecord


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("created_at", "amount")


def _wire_name(name: str) -> str:
    return PaymentRecord.model_fields[name].alias or name


def _wire_mapping(record: PaymentRecord) -> Dict[str, Any]:
    """Raw field values of a record keyed by their camelCase names."""
    return {_wire_name(name): value for name, value in record.__dict__.items()}


class DataIntegrityError(Exception):
    """Raised when a payment snapshot contains malformed records."""

    def __init__(self, message: str, errors: list[Dict[str, Any]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(self.message)


class SnapshotValidator:
    """
    Snapshot Validator

    Accepts already-built `PaymentRecord`s or raw mappings (as a store or
    fixture would hand them over) and returns a list of validated records.
    Fails the whole snapshot on the first batch of errors: there are no
    partial reports.
    """

    def __init__(self):
        self.logger = logger

    def validate(
        self,
        records: Iterable[Union[PaymentRecord, Dict[str, Any]]],
    ) -> List[PaymentRecord]:
        """
        Validate a snapshot of payment records.

        Args:
            records: Payment records or raw dictionaries

        Returns:
            List of validated PaymentRecord objects, in input order

        Raises:
            DataIntegrityError: If any record is missing or malformed
        """
        validated: List[PaymentRecord] = []
        errors: List[Dict[str, Any]] = []

        for index, record in enumerate(records):
            if isinstance(record, PaymentRecord):
                # model_construct() bypasses validation: null required fields
                # are missing data, everything else is re-validated below
                missing = [_wire_name(name) for name in REQUIRED_FIELDS if getattr(record, name, None) is None]
                for name in missing:
                    errors.append({
                        "index": index,
                        "field": name,
                        "type": "missing",
                        "msg": f"Field required: {name}",
                    })
                if missing:
                    continue
                record = _wire_mapping(record)

            try:
                validated.append(PaymentRecord.model_validate(record))
            except PydanticValidationError as e:
                for error in e.errors():
                    errors.append({
                        "index": index,
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "type": error["type"],
                        "msg": error["msg"],
                    })

        if errors:
            self.logger.error(f"Snapshot validation failed: {errors}")
            raise DataIntegrityError(
                message="DATA_INTEGRITY_ERROR: Payment snapshot contains malformed records",
                errors=errors,
            )

        return validated
