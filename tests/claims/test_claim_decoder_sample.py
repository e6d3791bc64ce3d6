# FILE: tests/claims/test_claim_decoder_sample.py
import pytest

from claim_decoder import ClaimDecoder, parse_837

pytestmark = pytest.mark.unit

@pytest.fixture(scope="module")
def document(sample_837_edi_string: str):
    return parse_837(sample_837_edi_string)

def test_envelope(document):
    assert document.interchange.senderId == "SUBMITTER_ID  "
    assert document.interchange.versionNumber == "00501"
    assert len(document.groups) == 1
    assert document.transactionSet.implementationGuide == "005010X222A1"
    assert document.beginningTransaction.date == "20210315"
    assert document.interchangeTrailer.groupCount == "1"

def test_entity_counts(document):
    assert len(document.providers) == 2
    assert len(document.subscribers) == 1
    assert len(document.patients) == 1
    assert [e.entityTypeCode for e in document.otherEntities] == ["87"]
    assert document.payers == []

def test_both_prv_segments_update_the_first_provider(document):
    first, second = document.providers
    assert first.lastName == "BILLING PROVIDER"
    assert first.providerCode == "BI"
    assert first.referenceId == "207Q00000X"
    assert second.lastName == "PROVIDER NAME"
    assert second.providerCode is None

def test_patient_dmg_lands_on_subscriber(document):
    subscriber = document.subscribers[0]
    assert subscriber.identificationCode == "123456789"
    assert subscriber.demographics.birthDate == "19950615"
    assert subscriber.demographics.gender == "F"
    assert document.patients[0].lastName == "DOE"
    assert document.patients[0].demographics is None

def test_addresses_references_contacts(document):
    assert [(a.addressLine1, a.city) for a in document.addresses] == [
        ("123 MAIN STREET", "ANYTOWN"),
        ("456 OAK AVENUE", "SOMEWHERE"),
        ("789 ELM STREET", "HOMETOWN"),
    ]
    assert [r.qualifierCode for r in document.references] == ["EI", "SY", "D9"]
    assert document.contacts[0].communicationNumber1 == "5551234567"

def test_claim_tree(document):
    assert len(document.claims) == 1
    claim = document.claims[0]
    assert claim.claimId == "CLAIM001"
    assert [d.qualifier for d in claim.dates] == ["431", "454", "472", "472"]
    assert [h.code for h in claim.healthInfo] == ["Z8701", "M7989"]
    assert [s.serviceCode for s in claim.services] == ["HC:99213", "HC:90834"]
    assert [s.diagnosisPointer for s in claim.services] == ["1", "2"]
    assert document.services == claim.services
    assert document.serviceLineNumber == "2"
    assert document.subscriberInfo.groupOrPolicyNumber == "GROUP123"
    assert document.warnings == []

def test_parsing_twice_gives_identical_trees(sample_837_edi_string: str):
    decoder = ClaimDecoder()
    assert decoder.parse(sample_837_edi_string) == decoder.parse(sample_837_edi_string)

def test_wrapped_payload_parses_like_the_single_line_one(sample_837_edi_string: str):
    wrapped = sample_837_edi_string.replace("~", "~\r\n")
    assert parse_837(wrapped) == parse_837(sample_837_edi_string)

def test_no_state_leaks_between_calls(sample_837_edi_string: str):
    decoder = ClaimDecoder()
    decoder.parse(sample_837_edi_string)
    second = decoder.parse("ST*837*0002~DMG*D8*20000101*M~CLM*OTHER*5.00~")

    assert [c.claimId for c in second.claims] == ["OTHER"]
    assert second.interchange is None
    assert second.subscribers == [] and second.providers == []
    assert second.references == [] and second.addresses == []
    assert second.services == []
