"""
Decoder for X12 835 claim payment / remittance advice transactions.

BPR opens a payment, CLP opens a claim payment (also filed under the current
payment), and SVC opens a service line. CAS, DTM, NM1, AMT, QTY, MIA and MOA
attach to the current claim; TRN to the current payment; LQ to the current
service line. PLB is a provider-level adjustment and belongs to no claim.
"""
import logging
from typing import Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from edi_codes import resolve_remittance_entity_role
from edi_dispatch import ENVELOPE_HANDLERS, Handler, dispatch
from edi_errors import EmptyPayloadError, ParsingFailedError
from edi_models import DateReference
from edi_tokenizer import Segment, component, split_composite, tokenize
from remittance_models import (
    ClaimAdjustment, ClaimEntity, ClaimPayment, InpatientAdjudication, MonetaryAmount,
    OutpatientAdjudication, Party, Payment, ProviderAdjustment, Quantity, RemittanceContext,
    RemittanceDocument, ServicePayment, Trace,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# CAS carries up to six reason/amount/quantity triplets starting at CAS02.
MAX_CAS_TRIPLETS = 6


def _positional(model_cls: Type[ModelT], seg: Segment) -> ModelT:
    """Builds a record whose string fields are declared in element order (01, 02, ...)."""
    names = [name for name, field in model_cls.model_fields.items() if field.annotation == Optional[str]]
    values = {name: seg.get_element(i) for i, name in enumerate(names, start=1)}
    return model_cls(**values)


def handle_bpr(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    payment = Payment(
        transactionHandlingCode=seg.get_element(1),
        totalPaymentAmount=seg.get_element(2),
        creditDebitFlag=seg.get_element(3),
        paymentMethod=seg.get_element(4),
        paymentFormatCode=seg.get_element(5),
        originatingDfiQualifier=seg.get_element(6),
        originatingBankId=seg.get_element(7),
        originatingAccountQualifier=seg.get_element(8),
        originatingAccountNumber=seg.get_element(9),
        originatorCompanyId=seg.get_element(10),
        originatorSupplementalCode=seg.get_element(11),
        receivingDfiQualifier=seg.get_element(12),
        receivingBankId=seg.get_element(13),
        receivingAccountQualifier=seg.get_element(14),
        receivingAccountNumber=seg.get_element(15),
        effectiveDate=seg.get_element(16),
    )
    doc.payments.append(payment)
    return ctx.model_copy(update={'payment': payment})


def handle_trn(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.payment:
        ctx.payment.trace = _positional(Trace, seg)
    return ctx


def handle_n1(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    code = seg.get_element(1)
    doc.parties.append(Party(
        type=resolve_remittance_entity_role(code),
        entityIdentifierCode=code,
        name=seg.get_element(2),
        identificationQualifier=seg.get_element(3),
        identificationCode=seg.get_element(4),
    ))
    return ctx


def handle_lx(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    doc.headerNumber = seg.get_element(1)
    return ctx


def handle_clp(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    claim = _positional(ClaimPayment, seg)
    doc.claims.append(claim)
    if ctx.payment:
        ctx.payment.claims.append(claim)
    return ctx.model_copy(update={'claim': claim, 'service': None})


def handle_cas(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if not ctx.claim:
        return ctx
    values = {'adjustmentGroupCode': seg.get_element(1)}
    for n in range(1, MAX_CAS_TRIPLETS + 1):
        start = 3 * n - 1
        values[f'adjustmentReasonCode{n}'] = seg.get_element(start)
        values[f'adjustmentAmount{n}'] = seg.get_element(start + 1)
        values[f'adjustmentQuantity{n}'] = seg.get_element(start + 2)
    ctx.claim.adjustments.append(ClaimAdjustment(**values))
    return ctx


def handle_nm1(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if not ctx.claim:
        return ctx
    code = seg.get_element(1)
    ctx.claim.entities.append(ClaimEntity(
        type=resolve_remittance_entity_role(code),
        entityTypeCode=code,
        entityType=seg.get_element(2),
        lastName=seg.get_element(3),
        firstName=seg.get_element(4),
        middleName=seg.get_element(5),
        namePrefix=seg.get_element(6),
        nameSuffix=seg.get_element(7),
        identificationQualifier=seg.get_element(8),
        identificationCode=seg.get_element(9),
    ))
    return ctx


def handle_mia(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.inpatientAdjudication = _positional(InpatientAdjudication, seg)
    return ctx


def handle_moa(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.outpatientAdjudication = _positional(OutpatientAdjudication, seg)
    return ctx


def handle_dtm(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.dates.append(DateReference(
            qualifier=seg.get_element(1),
            date=seg.get_element(2),
            time=seg.get_element(3),
        ))
    return ctx


def handle_dtp(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.dates.append(DateReference(
            qualifier=seg.get_element(1),
            formatQualifier=seg.get_element(2),
            date=seg.get_element(3),
        ))
    return ctx


def handle_amt(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.amounts.append(MonetaryAmount(qualifier=seg.get_element(1), amount=seg.get_element(2)))
    return ctx


def handle_qty(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    if ctx.claim:
        ctx.claim.quantities.append(Quantity(qualifier=seg.get_element(1), quantity=seg.get_element(2)))
    return ctx


def handle_svc(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    service = ServicePayment(
        serviceCode=seg.get_element(1),
        chargeAmount=seg.get_element(2),
        paymentAmount=seg.get_element(3),
        revenueCode=seg.get_element(4),
        paidUnits=seg.get_element(5),
        originalServiceCode=seg.get_element(6),
        originalUnits=seg.get_element(7),
    )
    doc.services.append(service)
    if ctx.claim:
        ctx.claim.services.append(service)
    return ctx.model_copy(update={'service': service})


def handle_lq(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    remark = seg.get_element(2)
    if ctx.service and remark:
        ctx.service.remarkCodes.append(remark)
    return ctx


def handle_plb(seg: Segment, doc: RemittanceDocument, ctx: RemittanceContext) -> RemittanceContext:
    first = split_composite(seg.get_element(3))
    second = split_composite(seg.get_element(5))
    doc.adjustments.append(ProviderAdjustment(
        providerIdentifier=seg.get_element(1),
        fiscalPeriodDate=seg.get_element(2),
        adjustmentReasonCode1=component(first, 1),
        adjustmentReferenceId1=component(first, 2),
        providerAdjustmentAmount1=seg.get_element(4),
        adjustmentReasonCode2=component(second, 1),
        adjustmentReferenceId2=component(second, 2),
        providerAdjustmentAmount2=seg.get_element(6),
    ))
    return ctx


REMITTANCE_HANDLERS: Dict[str, Handler] = {
    **ENVELOPE_HANDLERS,
    'BPR': handle_bpr,
    'TRN': handle_trn,
    'N1': handle_n1,
    'LX': handle_lx,
    'CLP': handle_clp,
    'CAS': handle_cas,
    'NM1': handle_nm1,
    'MIA': handle_mia,
    'MOA': handle_moa,
    'DTM': handle_dtm,
    'DTP': handle_dtp,
    'AMT': handle_amt,
    'QTY': handle_qty,
    'SVC': handle_svc,
    'LQ': handle_lq,
    'PLB': handle_plb,
}


class RemittanceDecoder:
    """Decodes a raw 835 payload into a RemittanceDocument. Safe to share between callers."""

    def parse(self, raw: str) -> RemittanceDocument:
        try:
            segments = tokenize(raw)
            document = RemittanceDocument()
            dispatch(segments, REMITTANCE_HANDLERS, document, RemittanceContext())
        except EmptyPayloadError:
            raise
        except Exception as e:
            logger.error(f"835 parsing failed: {e}", exc_info=True)
            raise ParsingFailedError(str(e)) from e

        logger.info(
            f"Parsed 835: {len(document.payments)} payments, {len(document.claims)} claims, "
            f"{len(document.services)} services, {len(document.adjustments)} provider adjustments, "
            f"{len(document.warnings)} segment warnings."
        )
        return document


_default_decoder = RemittanceDecoder()


def parse_835(raw: str) -> RemittanceDocument:
    return _default_decoder.parse(raw)
