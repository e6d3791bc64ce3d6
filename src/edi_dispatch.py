import logging
from typing import Callable, Dict, List, Mapping, TypeVar

from edi_models import (
    Address, Contact, EdiDocument, FunctionalGroup, FunctionalGroupTrailer, Interchange,
    InterchangeTrailer, Reference, SegmentWarning, TransactionSet, TransactionSetTrailer,
)
from edi_tokenizer import Segment

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=EdiDocument)
CtxT = TypeVar("CtxT")

# A handler reads one segment, writes into the document, and returns the
# context for the next segment (the same object when it has nothing to change).
Handler = Callable[[Segment, DocT, CtxT], CtxT]


def dispatch(
    segments: List[Segment],
    handlers: Mapping[str, Handler],
    document: DocT,
    context: CtxT,
) -> CtxT:
    """
    Walks the segments once, in order, routing each to the handler for its tag.

    Unknown tags are skipped. A handler that raises is recorded as a warning on
    the document and the walk continues with the context it had before that
    segment, so earlier results are never invalidated.
    """
    skipped = 0
    for segment in segments:
        handler = handlers.get(segment.segment_id)
        if handler is None:
            skipped += 1
            continue
        try:
            context = handler(segment, document, context)
        except Exception as e:
            logger.warning(f"Error parsing segment {segment.segment_id} (position {segment.position}): {e}")
            document.warnings.append(SegmentWarning(
                segmentId=segment.segment_id, position=segment.position, message=str(e)
            ))
    logger.debug(f"Dispatched {len(segments)} segments ({skipped} unrecognized, {len(document.warnings)} failed).")
    return context


# --- Envelope and loose-record handlers shared by both transaction types ---

def handle_isa(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.interchange = Interchange(
        authorizationQualifier=seg.get_element(1),
        authorizationInfo=seg.get_element(2),
        securityQualifier=seg.get_element(3),
        securityInfo=seg.get_element(4),
        senderQualifier=seg.get_element(5),
        senderId=seg.get_element(6),
        receiverQualifier=seg.get_element(7),
        receiverId=seg.get_element(8),
        date=seg.get_element(9),
        time=seg.get_element(10),
        repetitionSeparator=seg.get_element(11),
        versionNumber=seg.get_element(12),
        controlNumber=seg.get_element(13),
        acknowledgmentRequested=seg.get_element(14),
        testIndicator=seg.get_element(15),
    )
    return ctx


def handle_gs(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.groups.append(FunctionalGroup(
        functionalCode=seg.get_element(1),
        applicationSender=seg.get_element(2),
        applicationReceiver=seg.get_element(3),
        date=seg.get_element(4),
        time=seg.get_element(5),
        controlNumber=seg.get_element(6),
        responsibleAgency=seg.get_element(7),
        version=seg.get_element(8),
    ))
    return ctx


def handle_st(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.transactionSet = TransactionSet(
        type=seg.get_element(1),
        controlNumber=seg.get_element(2),
        implementationGuide=seg.get_element(3),
    )
    return ctx


def handle_ref(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.references.append(Reference(
        qualifierCode=seg.get_element(1),
        referenceId=seg.get_element(2),
        description=seg.get_element(3),
    ))
    return ctx


def handle_per(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.contacts.append(Contact(
        contactFunctionCode=seg.get_element(1),
        name=seg.get_element(2),
        communicationNumberQualifier1=seg.get_element(3),
        communicationNumber1=seg.get_element(4),
        communicationNumberQualifier2=seg.get_element(5),
        communicationNumber2=seg.get_element(6),
    ))
    return ctx


def handle_n3(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.addresses.append(Address(addressLine1=seg.get_element(1), addressLine2=seg.get_element(2)))
    return ctx


def handle_n4(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    if not doc.addresses:
        logger.debug(f"N4 at position {seg.position} has no preceding N3; dropped.")
        return ctx
    address = doc.addresses[-1]
    address.city = seg.get_element(1)
    address.state = seg.get_element(2)
    address.postalCode = seg.get_element(3)
    address.countryCode = seg.get_element(4)
    return ctx


def handle_se(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.transactionSetTrailer = TransactionSetTrailer(
        segmentCount=seg.get_element(1), controlNumber=seg.get_element(2)
    )
    return ctx


def handle_ge(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.functionalGroupTrailer = FunctionalGroupTrailer(
        transactionSetCount=seg.get_element(1), controlNumber=seg.get_element(2)
    )
    return ctx


def handle_iea(seg: Segment, doc: EdiDocument, ctx: CtxT) -> CtxT:
    doc.interchangeTrailer = InterchangeTrailer(
        groupCount=seg.get_element(1), controlNumber=seg.get_element(2)
    )
    return ctx


ENVELOPE_HANDLERS: Dict[str, Handler] = {
    'ISA': handle_isa,
    'GS': handle_gs,
    'ST': handle_st,
    'REF': handle_ref,
    'PER': handle_per,
    'N3': handle_n3,
    'N4': handle_n4,
    'SE': handle_se,
    'GE': handle_ge,
    'IEA': handle_iea,
}
