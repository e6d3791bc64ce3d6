from pydantic import BaseModel, Field
from typing import List, Optional

# Records shared by the 837 and 835 trees. Attribute names are the field names
# a renderer keys its formatting on ("date", "time", "amount"), so they stay
# in camelCase and every value is the raw element string.

class Interchange(BaseModel):
    authorizationQualifier: Optional[str] = None
    authorizationInfo: Optional[str] = None
    securityQualifier: Optional[str] = None
    securityInfo: Optional[str] = None
    senderQualifier: Optional[str] = None
    senderId: Optional[str] = None
    receiverQualifier: Optional[str] = None
    receiverId: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    repetitionSeparator: Optional[str] = None
    versionNumber: Optional[str] = None
    controlNumber: Optional[str] = None
    acknowledgmentRequested: Optional[str] = None
    testIndicator: Optional[str] = None

class FunctionalGroup(BaseModel):
    functionalCode: Optional[str] = None
    applicationSender: Optional[str] = None
    applicationReceiver: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    controlNumber: Optional[str] = None
    responsibleAgency: Optional[str] = None
    version: Optional[str] = None

class TransactionSet(BaseModel):
    type: Optional[str] = None
    controlNumber: Optional[str] = None
    implementationGuide: Optional[str] = None

class TransactionSetTrailer(BaseModel):
    segmentCount: Optional[str] = None
    controlNumber: Optional[str] = None

class FunctionalGroupTrailer(BaseModel):
    transactionSetCount: Optional[str] = None
    controlNumber: Optional[str] = None

class InterchangeTrailer(BaseModel):
    groupCount: Optional[str] = None
    controlNumber: Optional[str] = None

class Reference(BaseModel):
    qualifierCode: Optional[str] = None
    referenceId: Optional[str] = None
    description: Optional[str] = None

class Contact(BaseModel):
    contactFunctionCode: Optional[str] = None
    name: Optional[str] = None
    communicationNumberQualifier1: Optional[str] = None
    communicationNumber1: Optional[str] = None
    communicationNumberQualifier2: Optional[str] = None
    communicationNumber2: Optional[str] = None

class Address(BaseModel):
    """An N3 street address, completed in place by the N4 that follows it."""
    addressLine1: Optional[str] = None
    addressLine2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None
    countryCode: Optional[str] = None

class DateReference(BaseModel):
    qualifier: Optional[str] = None
    formatQualifier: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None

class SegmentWarning(BaseModel):
    """A segment whose handler raised; the rest of the document was still decoded."""
    segmentId: str
    position: int
    message: str

class EdiDocument(BaseModel):
    """Envelope and loose records common to the claim and remittance trees."""
    interchange: Optional[Interchange] = None
    groups: List[FunctionalGroup] = Field(default_factory=list)
    transactionSet: Optional[TransactionSet] = None
    references: List[Reference] = Field(default_factory=list)
    contacts: List[Contact] = Field(default_factory=list)
    addresses: List[Address] = Field(default_factory=list)
    transactionSetTrailer: Optional[TransactionSetTrailer] = None
    functionalGroupTrailer: Optional[FunctionalGroupTrailer] = None
    interchangeTrailer: Optional[InterchangeTrailer] = None
    warnings: List[SegmentWarning] = Field(default_factory=list)
