"""
Display formatting for decoded trees.

Formatting is driven purely by field names: any key containing "date" holds
a raw CCYYMMDD (or, for 835, YYMMDD) value, "time" holds HHMM, and "amount"
(for 835 also "payment") holds a decimal string. The decoders never format
values themselves so that any renderer can apply these rules.
"""
import json
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Union

from pydantic import BaseModel

from claim_models import ClaimDocument
from edi_codes import resolve_claim_status
from remittance_models import RemittanceDocument

_CAMEL_BOUNDARY = re.compile(r'([A-Z])')
_EIGHT_DIGITS = re.compile(r'^\d{8}$')
_SIX_DIGITS = re.compile(r'^\d{6}$')
_FOUR_DIGITS = re.compile(r'^\d{4}$')


def format_field_name(key: str) -> str:
    """'totalChargeAmount' -> 'Total Charge Amount'."""
    spaced = _CAMEL_BOUNDARY.sub(r' \1', key)
    return (spaced[:1].upper() + spaced[1:]).strip()


def _format_amount(value: str) -> str:
    try:
        number = Decimal(value.strip())
        if not number.is_finite():
            return value
        # quantize raises when the result exceeds the context precision.
        return f"${number.quantize(Decimal('0.01'))}"
    except (InvalidOperation, AttributeError):
        return value


def format_field_value(key: str, value: Any, remittance: bool = False) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_none=True)
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, default=lambda v: v.model_dump(exclude_none=True))
    if value is None:
        return ""

    text = str(value)
    lowered = key.lower()

    if 'date' in lowered:
        if _EIGHT_DIGITS.match(text):
            return f"{text[4:6]}/{text[6:8]}/{text[0:4]}"
        # Two-digit years are assumed to be 20YY; there is no century cutoff.
        if remittance and _SIX_DIGITS.match(text):
            return f"{text[2:4]}/{text[4:6]}/20{text[0:2]}"

    if 'time' in lowered and _FOUR_DIGITS.match(text):
        return f"{text[0:2]}:{text[2:4]}"

    if remittance and key == 'claimStatusCode':
        return resolve_claim_status(text)

    if 'amount' in lowered or (remittance and 'payment' in lowered):
        return _format_amount(text)

    return text


def format_record(record: BaseModel, remittance: bool = False) -> Dict[str, str]:
    """Formats the non-empty fields of one record for display, keyed by label."""
    formatted: Dict[str, str] = {}
    for key, value in record:
        if value is None or value == '' or value == []:
            continue
        formatted[format_field_name(key)] = format_field_value(key, value, remittance)
    return formatted


def summarize(document: Union[ClaimDocument, RemittanceDocument]) -> Dict[str, int]:
    """Counts shown on the summary cards above a decoded document."""
    if isinstance(document, RemittanceDocument):
        return {
            'Payments': len(document.payments),
            'Claims': len(document.claims),
            'Services': len(document.services),
            'Adjustments': len(document.adjustments),
        }
    return {
        'Claims': len(document.claims),
        'Services': len(document.services),
        'Providers': len(document.providers),
        # The patients card has always counted subscribers.
        'Patients': len(document.subscribers),
    }
