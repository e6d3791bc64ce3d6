from typing import Dict, Optional

# NM101 entity identifier codes used by the 837 decoder.
ENTITY_ROLES: Dict[str, str] = {
    '85': 'billing_provider',
    'IL': 'subscriber',
    'QC': 'patient',
    'PR': 'payer',
    '82': 'rendering_provider',
    '77': 'service_facility',
    'DN': 'referring_provider',
}

# NM1 and N1 codes seen in 835 claim and header loops.
REMITTANCE_ENTITY_ROLES: Dict[str, str] = {
    **ENTITY_ROLES,
    '74': 'corrected_insured',
    'TT': 'crossover_carrier',
    'PE': 'payee',
    'GB': 'other_insured',
}

PROVIDER_ROLES = frozenset({
    'billing_provider',
    'rendering_provider',
    'referring_provider',
    'service_facility',
})

CLAIM_STATUS_CODES: Dict[str, str] = {
    "1": "Processed as Primary",
    "2": "Processed as Secondary",
    "3": "Processed as Tertiary",
    "4": "Denied",
    "19": "Processed as Primary, Forwarded",
    "20": "Processed as Secondary, Forwarded",
    "21": "Processed as Tertiary, Forwarded",
    "22": "Reversal of Previous Payment",
    "23": "Not Our Claim, Forwarded",
    "25": "Reject",
}


def resolve_entity_role(code: Optional[str]) -> Optional[str]:
    """Maps an NM101 code to its role, passing unknown codes through unchanged."""
    return ENTITY_ROLES.get(code, code)


def resolve_remittance_entity_role(code: Optional[str]) -> Optional[str]:
    return REMITTANCE_ENTITY_ROLES.get(code, code)


def resolve_claim_status(code: Optional[str]) -> Optional[str]:
    """Maps a CLP02 claim status code to a label, passing unknown codes through."""
    return CLAIM_STATUS_CODES.get(code, code)


def is_provider_role(role: Optional[str]) -> bool:
    return role in PROVIDER_ROLES
