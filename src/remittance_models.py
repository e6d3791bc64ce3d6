from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from edi_models import DateReference, EdiDocument

# Record tree produced by the 835 (claim payment / remittance advice) decoder.

class Trace(BaseModel):
    traceType: Optional[str] = None
    traceNumber: Optional[str] = None
    originatorId: Optional[str] = None
    originatorSupplementalId: Optional[str] = None

class Party(BaseModel):
    """An N1 payer or payee identification."""
    type: Optional[str] = None
    entityIdentifierCode: Optional[str] = None
    name: Optional[str] = None
    identificationQualifier: Optional[str] = None
    identificationCode: Optional[str] = None

class ClaimEntity(BaseModel):
    """An NM1 inside a claim payment loop (patient, insured, rendering provider...)."""
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

class ClaimAdjustment(BaseModel):
    adjustmentGroupCode: Optional[str] = None
    adjustmentReasonCode1: Optional[str] = None
    adjustmentAmount1: Optional[str] = None
    adjustmentQuantity1: Optional[str] = None
    adjustmentReasonCode2: Optional[str] = None
    adjustmentAmount2: Optional[str] = None
    adjustmentQuantity2: Optional[str] = None
    adjustmentReasonCode3: Optional[str] = None
    adjustmentAmount3: Optional[str] = None
    adjustmentQuantity3: Optional[str] = None
    adjustmentReasonCode4: Optional[str] = None
    adjustmentAmount4: Optional[str] = None
    adjustmentQuantity4: Optional[str] = None
    adjustmentReasonCode5: Optional[str] = None
    adjustmentAmount5: Optional[str] = None
    adjustmentQuantity5: Optional[str] = None
    adjustmentReasonCode6: Optional[str] = None
    adjustmentAmount6: Optional[str] = None
    adjustmentQuantity6: Optional[str] = None

class MonetaryAmount(BaseModel):
    qualifier: Optional[str] = None
    amount: Optional[str] = None

class Quantity(BaseModel):
    qualifier: Optional[str] = None
    quantity: Optional[str] = None

class InpatientAdjudication(BaseModel):
    coveredDays: Optional[str] = None
    ppsOperatingOutlierAmount: Optional[str] = None
    lifetimePsychiatricDays: Optional[str] = None
    claimDrgAmount: Optional[str] = None
    remarkCode1: Optional[str] = None
    claimDisproportionateShareAmount: Optional[str] = None
    claimMspPassThroughAmount: Optional[str] = None
    claimPpsCapitalAmount: Optional[str] = None
    ppsCapitalFspDrgAmount: Optional[str] = None
    ppsCapitalHspDrgAmount: Optional[str] = None
    ppsCapitalDshDrgAmount: Optional[str] = None
    oldCapitalAmount: Optional[str] = None
    ppsCapitalImeAmount: Optional[str] = None
    ppsOperatingHospitalSpecificDrgAmount: Optional[str] = None
    costReportDayCount: Optional[str] = None
    ppsOperatingFederalSpecificDrgAmount: Optional[str] = None
    claimPpsCapitalOutlierAmount: Optional[str] = None
    claimIndirectTeachingAmount: Optional[str] = None
    nonpayableProfessionalComponentAmount: Optional[str] = None
    remarkCode2: Optional[str] = None
    remarkCode3: Optional[str] = None
    remarkCode4: Optional[str] = None
    remarkCode5: Optional[str] = None
    ppsCapitalExceptionAmount: Optional[str] = None

class OutpatientAdjudication(BaseModel):
    reimbursementRate: Optional[str] = None
    hcpcsPayableAmount: Optional[str] = None
    remarkCode1: Optional[str] = None
    remarkCode2: Optional[str] = None
    remarkCode3: Optional[str] = None
    remarkCode4: Optional[str] = None
    remarkCode5: Optional[str] = None
    esrdPaymentAmount: Optional[str] = None
    nonpayableProfessionalComponentAmount: Optional[str] = None

class ServicePayment(BaseModel):
    serviceCode: Optional[str] = None
    chargeAmount: Optional[str] = None
    paymentAmount: Optional[str] = None
    revenueCode: Optional[str] = None
    paidUnits: Optional[str] = None
    originalServiceCode: Optional[str] = None
    originalUnits: Optional[str] = None
    remarkCodes: List[str] = Field(default_factory=list)

class ClaimPayment(BaseModel):
    claimSubmitterId: Optional[str] = None
    claimStatusCode: Optional[str] = None
    totalChargeAmount: Optional[str] = None
    claimPaymentAmount: Optional[str] = None
    patientResponsibilityAmount: Optional[str] = None
    claimFilingIndicatorCode: Optional[str] = None
    payerClaimControlNumber: Optional[str] = None
    facilityTypeCode: Optional[str] = None
    claimFrequencyCode: Optional[str] = None
    services: List[ServicePayment] = Field(default_factory=list)
    dates: List[DateReference] = Field(default_factory=list)
    adjustments: List[ClaimAdjustment] = Field(default_factory=list)
    entities: List[ClaimEntity] = Field(default_factory=list)
    amounts: List[MonetaryAmount] = Field(default_factory=list)
    quantities: List[Quantity] = Field(default_factory=list)
    inpatientAdjudication: Optional[InpatientAdjudication] = None
    outpatientAdjudication: Optional[OutpatientAdjudication] = None

class Payment(BaseModel):
    transactionHandlingCode: Optional[str] = None
    totalPaymentAmount: Optional[str] = None
    creditDebitFlag: Optional[str] = None
    paymentMethod: Optional[str] = None
    paymentFormatCode: Optional[str] = None
    originatingDfiQualifier: Optional[str] = None
    originatingBankId: Optional[str] = None
    originatingAccountQualifier: Optional[str] = None
    originatingAccountNumber: Optional[str] = None
    originatorCompanyId: Optional[str] = None
    originatorSupplementalCode: Optional[str] = None
    receivingDfiQualifier: Optional[str] = None
    receivingBankId: Optional[str] = None
    receivingAccountQualifier: Optional[str] = None
    receivingAccountNumber: Optional[str] = None
    effectiveDate: Optional[str] = None
    trace: Optional[Trace] = None
    claims: List[ClaimPayment] = Field(default_factory=list)

class ProviderAdjustment(BaseModel):
    """A PLB provider-level adjustment, independent of any claim."""
    providerIdentifier: Optional[str] = None
    fiscalPeriodDate: Optional[str] = None
    adjustmentReasonCode1: Optional[str] = None
    adjustmentReferenceId1: Optional[str] = None
    providerAdjustmentAmount1: Optional[str] = None
    adjustmentReasonCode2: Optional[str] = None
    adjustmentReferenceId2: Optional[str] = None
    providerAdjustmentAmount2: Optional[str] = None

class RemittanceDocument(EdiDocument):
    payments: List[Payment] = Field(default_factory=list)
    parties: List[Party] = Field(default_factory=list)
    claims: List[ClaimPayment] = Field(default_factory=list)
    services: List[ServicePayment] = Field(default_factory=list)
    adjustments: List[ProviderAdjustment] = Field(default_factory=list)
    headerNumber: Optional[str] = None

class RemittanceContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    claim: Optional[ClaimPayment] = None
    payment: Optional[Payment] = None
    service: Optional[ServicePayment] = None
