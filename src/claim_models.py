from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from edi_models import DateReference, EdiDocument

# Record tree produced by the 837 (health care claim) decoder.

class Demographics(BaseModel):
    dateFormat: Optional[str] = None
    birthDate: Optional[str] = None
    gender: Optional[str] = None

class Entity(BaseModel):
    """An NM1 party: provider, subscriber, patient, payer or other."""
    type: Optional[str] = None
    entityTypeCode: Optional[str] = None
    entityType: Optional[str] = None
    lastName: Optional[str] = None
    firstName: Optional[str] = None
    middleName: Optional[str] = None
    namePrefix: Optional[str] = None
    nameSuffix: Optional[str] = None
    identificationQualifier: Optional[str] = None
    identificationCode: Optional[str] = None
    demographics: Optional[Demographics] = None
    # PRV taxonomy, only ever set on providers.
    providerCode: Optional[str] = None
    referenceIdQualifier: Optional[str] = None
    referenceId: Optional[str] = None

class BeginningTransaction(BaseModel):
    hierarchicalStructure: Optional[str] = None
    transactionPurpose: Optional[str] = None
    referenceId: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    transactionType: Optional[str] = None

class SubscriberInfo(BaseModel):
    payerResponsibilitySequence: Optional[str] = None
    individualRelationshipCode: Optional[str] = None
    groupOrPolicyNumber: Optional[str] = None
    groupName: Optional[str] = None
    insuranceTypeCode: Optional[str] = None
    coordinationOfBenefitsCode: Optional[str] = None

class HealthInfo(BaseModel):
    codeQualifier: Optional[str] = None
    code: Optional[str] = None
    dateQualifier: Optional[str] = None
    date: Optional[str] = None

class Service(BaseModel):
    serviceCode: Optional[str] = None
    revenueCode: Optional[str] = None
    chargeAmount: Optional[str] = None
    unitOfMeasure: Optional[str] = None
    serviceUnits: Optional[str] = None
    placeOfService: Optional[str] = None
    diagnosisPointer: Optional[str] = None

class Claim(BaseModel):
    claimId: Optional[str] = None
    totalChargeAmount: Optional[str] = None
    placeOfService: Optional[str] = None
    providerSignatureIndicator: Optional[str] = None
    assignmentOfBenefitsIndicator: Optional[str] = None
    releaseOfInformationIndicator: Optional[str] = None
    patientSignatureSourceCode: Optional[str] = None
    services: List[Service] = Field(default_factory=list)
    dates: List[DateReference] = Field(default_factory=list)
    healthInfo: List[HealthInfo] = Field(default_factory=list)

class ClaimDocument(EdiDocument):
    beginningTransaction: Optional[BeginningTransaction] = None
    providers: List[Entity] = Field(default_factory=list)
    subscribers: List[Entity] = Field(default_factory=list)
    patients: List[Entity] = Field(default_factory=list)
    payers: List[Entity] = Field(default_factory=list)
    otherEntities: List[Entity] = Field(default_factory=list)
    subscriberInfo: Optional[SubscriberInfo] = None
    claims: List[Claim] = Field(default_factory=list)
    services: List[Service] = Field(default_factory=list)
    serviceLineNumber: Optional[str] = None

class ClaimContext(BaseModel):
    """The most recently seen claim, subscriber, patient and provider."""
    model_config = ConfigDict(frozen=True)

    claim: Optional[Claim] = None
    subscriber: Optional[Entity] = None
    patient: Optional[Entity] = None
    provider: Optional[Entity] = None
