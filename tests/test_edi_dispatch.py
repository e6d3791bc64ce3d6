import logging

import pytest

from edi_dispatch import ENVELOPE_HANDLERS, dispatch
from edi_models import EdiDocument
from edi_tokenizer import tokenize

pytestmark = pytest.mark.unit

def _walk(payload, handlers=ENVELOPE_HANDLERS, context=None):
    document = EdiDocument()
    context = dispatch(tokenize(payload), handlers, document, context)
    return document, context

def test_envelope_segments_fill_headers_and_trailers():
    document, _ = _walk(
        "ISA*00*          *00*          *ZZ*SENDER*ZZ*RECEIVER*210315*1234*^*00501*000000001*0*P*>~"
        "GS*HC*SENDER*RECEIVER*20210315*1234*1*X*005010X222A1~"
        "ST*837*0001*005010X222A1~"
        "SE*30*0001~GE*1*1~IEA*1*000000001~"
    )
    assert document.interchange.senderId == "SENDER"
    assert document.interchange.date == "210315"
    assert document.interchange.controlNumber == "000000001"
    assert document.interchange.testIndicator == "P"
    assert document.groups[0].functionalCode == "HC"
    assert document.groups[0].version == "005010X222A1"
    assert document.transactionSet.type == "837"
    assert document.transactionSetTrailer.segmentCount == "30"
    assert document.functionalGroupTrailer.transactionSetCount == "1"
    assert document.interchangeTrailer.controlNumber == "000000001"

def test_trailer_values_are_recorded_not_checked():
    document, _ = _walk("ST*837*0001~SE*999*9999~")
    assert document.transactionSetTrailer.segmentCount == "999"
    assert document.warnings == []

def test_groups_are_appended_in_arrival_order_and_singletons_overwritten():
    document, _ = _walk("ISA*00*A~GS*HC*FIRST~GS*HC*SECOND~ISA*00*B~")
    assert [g.applicationSender for g in document.groups] == ["FIRST", "SECOND"]
    assert document.interchange.authorizationInfo == "B"

def test_n4_completes_the_most_recent_n3():
    document, _ = _walk("N3*1 FIRST ST~N4*ONE*NY*10001~N3*2 SECOND ST*SUITE 5~N4*TWO*CA*90210*US~")
    assert len(document.addresses) == 2
    second = document.addresses[1]
    assert second.addressLine2 == "SUITE 5"
    assert (second.city, second.state, second.postalCode, second.countryCode) == ("TWO", "CA", "90210", "US")
    assert document.addresses[0].city == "ONE"

def test_n4_without_n3_is_dropped():
    document, _ = _walk("N4*NOWHERE*TX*75001~")
    assert document.addresses == []

def test_references_and_contacts():
    document, _ = _walk("REF*EI*123456789~PER*IC*CONTACT NAME*TE*5551234567*EX*12~")
    assert document.references[0].qualifierCode == "EI"
    assert document.references[0].description is None
    contact = document.contacts[0]
    assert contact.name == "CONTACT NAME"
    assert contact.communicationNumber1 == "5551234567"
    assert contact.communicationNumberQualifier2 == "EX"

def test_unknown_tags_are_ignored():
    document, _ = _walk("ZZZ*1*2~REF*EI*1~HL*1**20*1~")
    assert len(document.references) == 1
    assert document.warnings == []

def test_failing_handler_is_isolated_and_reported(caplog):
    def explode(seg, doc, ctx):
        raise ValueError("malformed composite")

    handlers = {**ENVELOPE_HANDLERS, 'BAD': explode}
    with caplog.at_level(logging.WARNING, logger="edi_dispatch"):
        document, _ = _walk("REF*EI*1~BAD*X~REF*EI*2~", handlers)

    assert [r.referenceId for r in document.references] == ["1", "2"]
    assert len(document.warnings) == 1
    assert document.warnings[0].segmentId == "BAD"
    assert document.warnings[0].position == 2
    assert document.warnings[0].message == "malformed composite"
    assert "Error parsing segment BAD" in caplog.text

def test_context_returned_by_a_handler_is_threaded_to_the_next():
    seen = []

    def count(seg, doc, ctx):
        seen.append(ctx)
        return ctx + 1

    _, final = _walk("X*1~X*2~Y~X*3~", {'X': count}, context=0)
    assert seen == [0, 1, 2]
    assert final == 3

def test_failing_handler_keeps_the_previous_context():
    def bump_then_fail(seg, doc, ctx):
        if seg.get_element(1) == "fail":
            raise RuntimeError("boom")
        return ctx + 1

    _, final = _walk("X*ok~X*fail~X*ok~", {'X': bump_then_fail}, context=0)
    assert final == 2
