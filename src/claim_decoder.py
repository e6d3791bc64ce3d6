"""
Decoder for X12 837 health care claim transactions.

The segment walk keeps a ClaimContext holding the current claim, subscriber,
patient and provider. NM1 and CLM move those pointers; DMG, PRV, DTP, HI and
the service-line segments attach to whatever the pointers hold at the time.
"""
import logging
from typing import Dict

from claim_models import (
    BeginningTransaction, Claim, ClaimContext, ClaimDocument, Demographics, Entity,
    HealthInfo, Service, SubscriberInfo,
)
from edi_codes import is_provider_role, resolve_entity_role
from edi_dispatch import ENVELOPE_HANDLERS, Handler, dispatch
from edi_errors import EmptyPayloadError, ParsingFailedError
from edi_models import DateReference
from edi_tokenizer import Segment, component, split_composite, tokenize

logger = logging.getLogger(__name__)


def handle_bht(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    doc.beginningTransaction = BeginningTransaction(
        hierarchicalStructure=seg.get_element(1),
        transactionPurpose=seg.get_element(2),
        referenceId=seg.get_element(3),
        date=seg.get_element(4),
        time=seg.get_element(5),
        transactionType=seg.get_element(6),
    )
    return ctx


def handle_nm1(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    entity_code = seg.get_element(1)
    role = resolve_entity_role(entity_code)
    entity = Entity(
        type=role,
        entityTypeCode=entity_code,
        entityType=seg.get_element(2),
        lastName=seg.get_element(3),
        firstName=seg.get_element(4),
        middleName=seg.get_element(5),
        namePrefix=seg.get_element(6),
        nameSuffix=seg.get_element(7),
        identificationQualifier=seg.get_element(8),
        identificationCode=seg.get_element(9),
    )

    if role == 'subscriber':
        doc.subscribers.append(entity)
        return ctx.model_copy(update={'subscriber': entity})
    if role == 'patient':
        doc.patients.append(entity)
        return ctx.model_copy(update={'patient': entity})
    if is_provider_role(role):
        doc.providers.append(entity)
        return ctx.model_copy(update={'provider': entity})
    if role == 'payer':
        doc.payers.append(entity)
    else:
        doc.otherEntities.append(entity)
    return ctx


def handle_prv(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    if ctx.provider:
        ctx.provider.providerCode = seg.get_element(1)
        ctx.provider.referenceIdQualifier = seg.get_element(2)
        ctx.provider.referenceId = seg.get_element(3)
    return ctx


def handle_dmg(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    # The subscriber wins when both a subscriber and a patient have been seen.
    entity = ctx.subscriber or ctx.patient
    if entity:
        entity.demographics = Demographics(
            dateFormat=seg.get_element(1),
            birthDate=seg.get_element(2),
            gender=seg.get_element(3),
        )
    return ctx


def handle_sbr(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    doc.subscriberInfo = SubscriberInfo(
        payerResponsibilitySequence=seg.get_element(1),
        individualRelationshipCode=seg.get_element(2),
        groupOrPolicyNumber=seg.get_element(3),
        groupName=seg.get_element(4),
        insuranceTypeCode=seg.get_element(5),
        coordinationOfBenefitsCode=seg.get_element(9),
    )
    return ctx


def handle_clm(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    claim = Claim(
        claimId=seg.get_element(1),
        totalChargeAmount=seg.get_element(2),
        placeOfService=seg.get_element(5),
        providerSignatureIndicator=seg.get_element(6),
        assignmentOfBenefitsIndicator=seg.get_element(7),
        releaseOfInformationIndicator=seg.get_element(8),
        patientSignatureSourceCode=seg.get_element(9),
    )
    doc.claims.append(claim)
    return ctx.model_copy(update={'claim': claim})


def handle_dtp(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    if ctx.claim:
        ctx.claim.dates.append(DateReference(
            qualifier=seg.get_element(1),
            formatQualifier=seg.get_element(2),
            date=seg.get_element(3),
        ))
    return ctx


def handle_hi(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    if not ctx.claim:
        return ctx
    for value in seg.elements:
        if not value:
            continue
        parts = split_composite(value)
        ctx.claim.healthInfo.append(HealthInfo(
            codeQualifier=component(parts, 1),
            code=component(parts, 2),
            dateQualifier=component(parts, 3),
            date=component(parts, 4),
        ))
    return ctx


def _add_service(service: Service, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    # Kept both in the flat list and under its claim.
    doc.services.append(service)
    if ctx.claim:
        ctx.claim.services.append(service)
    return ctx


def handle_sv1(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    return _add_service(Service(
        serviceCode=seg.get_element(1),
        chargeAmount=seg.get_element(2),
        unitOfMeasure=seg.get_element(3),
        serviceUnits=seg.get_element(4),
        placeOfService=seg.get_element(5),
        diagnosisPointer=seg.get_element(7),
    ), doc, ctx)


def handle_sv2(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    return _add_service(Service(
        revenueCode=seg.get_element(1),
        serviceCode=seg.get_element(2),
        chargeAmount=seg.get_element(3),
        unitOfMeasure=seg.get_element(4),
        serviceUnits=seg.get_element(5),
    ), doc, ctx)


def handle_lx(seg: Segment, doc: ClaimDocument, ctx: ClaimContext) -> ClaimContext:
    doc.serviceLineNumber = seg.get_element(1)
    return ctx


CLAIM_HANDLERS: Dict[str, Handler] = {
    **ENVELOPE_HANDLERS,
    'BHT': handle_bht,
    'NM1': handle_nm1,
    'PRV': handle_prv,
    'DMG': handle_dmg,
    'SBR': handle_sbr,
    'CLM': handle_clm,
    'DTP': handle_dtp,
    'HI': handle_hi,
    'SV1': handle_sv1,
    'SV2': handle_sv2,
    'LX': handle_lx,
}


class ClaimDecoder:
    """
    Decodes a raw 837 payload into a ClaimDocument.

    All per-call state lives in locals, so one instance can be shared and
    called from several places at once.
    """

    def parse(self, raw: str) -> ClaimDocument:
        try:
            segments = tokenize(raw)
            document = ClaimDocument()
            dispatch(segments, CLAIM_HANDLERS, document, ClaimContext())
        except EmptyPayloadError:
            raise
        except Exception as e:
            logger.error(f"837 parsing failed: {e}", exc_info=True)
            raise ParsingFailedError(str(e)) from e

        logger.info(
            f"Parsed 837: {len(document.claims)} claims, {len(document.services)} services, "
            f"{len(document.providers)} providers, {len(document.subscribers)} subscribers, "
            f"{len(document.warnings)} segment warnings."
        )
        return document


_default_decoder = ClaimDecoder()


def parse_837(raw: str) -> ClaimDocument:
    return _default_decoder.parse(raw)
