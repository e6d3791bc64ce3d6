from typing import List, Optional, Union
import logging

from pydantic import BaseModel, Field

from claim_decoder import ClaimDecoder
from claim_models import ClaimDocument
from edi_config import DEFAULT_DELIMITERS
from edi_errors import EdiDecodeError
from edi_models import SegmentWarning
from edi_tokenizer import clean_data
from remittance_decoder import RemittanceDecoder
from remittance_models import RemittanceDocument

logger = logging.getLogger(__name__)

SUPPORTED_TYPES = ("837", "835")

# GS01 functional identifier codes, used when ST01 is missing or unreadable.
FUNCTIONAL_CODES = {"HC": "837", "HP": "835"}


class DecodeResult(BaseModel):
    """Outcome of decoding one payload."""
    success: bool
    transactionType: Optional[str] = None
    document: Optional[Union[ClaimDocument, RemittanceDocument]] = None
    error: Optional[str] = None
    warnings: List[SegmentWarning] = Field(default_factory=list)


def detect_transaction_type(edi_content: str) -> Optional[str]:
    """Returns "837" or "835" from the ST01 (or, failing that, GS01) of a payload."""
    functional_guess = None
    for raw_segment in clean_data(edi_content).split(DEFAULT_DELIMITERS.segment):
        elements = raw_segment.strip().split(DEFAULT_DELIMITERS.element)
        if elements[0] == "ST" and len(elements) > 1 and elements[1] in SUPPORTED_TYPES:
            return elements[1]
        if elements[0] == "GS" and len(elements) > 1 and functional_guess is None:
            functional_guess = FUNCTIONAL_CODES.get(elements[1])
    return functional_guess


class EDIDecodeService:
    """Routes payloads to the 837 or 835 decoder and reports the outcome."""

    def __init__(self):
        self.decoders = {
            "837": ClaimDecoder(),
            "835": RemittanceDecoder(),
        }

    def decode(self, edi_content: str, transaction_type: str = "auto") -> DecodeResult:
        """
        Decode EDI content into its record tree.

        Args:
            edi_content: The raw EDI payload
            transaction_type: "837", "835", or "auto" to detect it from ST01/GS01

        Returns:
            DecodeResult; decode errors are reported in ``error`` rather than raised
        """
        if transaction_type == "auto":
            detected = detect_transaction_type(edi_content)
            # An unrecognised payload still goes through the claim decoder, which
            # reports the empty-payload error or returns a sparse tree.
            transaction_type = detected or "837"
            logger.info(f"Detected transaction type: {detected or 'unknown, defaulting to 837'}")

        decoder = self.decoders.get(transaction_type)
        if decoder is None:
            return DecodeResult(
                success=False,
                error=f"Unsupported transaction type: {transaction_type}. Expected one of {', '.join(SUPPORTED_TYPES)}.",
            )

        try:
            document = decoder.parse(edi_content)
        except EdiDecodeError as e:
            logger.error(f"EDI {transaction_type} decode failed: {e}")
            return DecodeResult(success=False, transactionType=transaction_type, error=str(e))

        return DecodeResult(
            success=True,
            transactionType=transaction_type,
            document=document,
            warnings=list(document.warnings),
        )
