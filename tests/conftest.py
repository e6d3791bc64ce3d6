# FILE: tests/conftest.py

import pytest
import sys
import os
import logging

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from edi_config import configure_logging

# ==============================================================================
# PYTEST CONFIGURATION & HOOKS
# ==============================================================================

def pytest_configure(config):
    """Configure pytest settings and markers."""
    config.addinivalue_line("markers", "unit: Pure unit tests with no external dependencies.")
    config.addinivalue_line("markers", "integration: Tests exercising several modules or the command line together.")

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment(pytestconfig):
    """Set up test environment with logging configuration."""
    log_level = pytestconfig.getoption("log_cli_level") or "INFO"
    configure_logging(log_level)
    logging.info(f"Test logging configured with level: {log_level.upper()}")
    yield

# ==============================================================================
# SAMPLE PAYLOADS
# ==============================================================================

@pytest.fixture(scope="session")
def sample_837_edi_string() -> str:
    """
    The 837P sample the viewer ships with, on a single line.

    Contains two billing providers (the first with a PRV taxonomy), one
    subscriber, one patient, a pay-to NM1*87, one claim with two DTP dates,
    two HI diagnosis codes and two SV1 service lines, each with its own DTP.
    """
    return (
        "ISA*00*          *00*          *ZZ*SUBMITTER_ID  *ZZ*RECEIVER_ID   *210315*1234*^*00501*000000001*0*P*>~"
        "GS*HC*SENDER*RECEIVER*20210315*1234*1*X*005010X222A1~"
        "ST*837*0001*005010X222A1~"
        "BHT*0019*00*0001*20210315*1234*CH~"
        "NM1*85*2*BILLING PROVIDER*****XX*1234567890~"
        "PRV*BI*PXC*207Q00000X~"
        "N3*123 MAIN STREET~"
        "N4*ANYTOWN*NY*12345~"
        "REF*EI*123456789~"
        "PER*IC*CONTACT NAME*TE*5551234567~"
        "NM1*87*2~"
        "N3*456 OAK AVENUE~"
        "N4*SOMEWHERE*CA*90210~"
        "HL*1**20*1~"
        "PRV*BI*PXC*207Q00000X~"
        "NM1*85*2*PROVIDER NAME*****XX*9876543210~"
        "HL*2*1*22*1~"
        "SBR*P*18*GROUP123****MB~"
        "NM1*IL*1*SMITH*JOHN*A***MI*123456789~"
        "DMG*D8*19800101*M~"
        "N3*789 ELM STREET~"
        "N4*HOMETOWN*TX*75001~"
        "REF*SY*123456789~"
        "HL*3*2*23*0~"
        "PAT*19~"
        "NM1*QC*1*DOE*JANE*B~"
        "DMG*D8*19950615*F~"
        "CLM*CLAIM001*150.00***11:B:1*Y*A*Y*I~"
        "DTP*431*D8*20210301~"
        "DTP*454*D8*20210301~"
        "REF*D9*DIAGNOSIS001~"
        "HI*BK:Z8701*BF:M7989~"
        "LX*1~"
        "SV1*HC:99213*75.00*UN*1***1~"
        "DTP*472*D8*20210301~"
        "LX*2~"
        "SV1*HC:90834*75.00*UN*1***2~"
        "DTP*472*D8*20210301~"
        "SE*30*0001~"
        "GE*1*1~"
        "IEA*1*000000001~"
    )

@pytest.fixture(scope="session")
def sample_835_edi_string() -> str:
    """
    An 835 remittance, one segment per line as payers usually send them.

    Contains one ACH payment with a trace number, payer and payee N1 loops,
    two claim payments (the first paid with two service lines, the second
    denied), and one PLB provider adjustment with two reason/amount pairs.
    """
    return """
ISA*00*          *00*          *ZZ*PAYERID        *ZZ*PROVIDERID     *210315*1234*^*00501*000000002*0*P*:~
GS*HP*PAYER*PROVIDER*20210315*1234*2*X*005010X221A1~
ST*835*0001~
BPR*I*125.00*C*ACH*CCP*01*999999999*DA*123456*1512345678**01*888888888*DA*654321*20210320~
TRN*1*12345*1512345678~
DTM*405*20210315~
N1*PR*INSURANCE COMPANY~
N3*100 PAYER WAY~
N4*PAYERTOWN*NY*10001~
REF*2U*PAYERID~
PER*CX*CLAIMS DEPT*TE*8005551234~
N1*PE*BILLING PROVIDER*XX*1234567890~
N3*123 MAIN STREET~
N4*ANYTOWN*NY*12345~
LX*1~
CLP*CLAIM001*1*150.00*125.00*25.00*MC*PAY001*11*1~
CAS*CO*45*25.00~
NM1*QC*1*DOE*JANE****MI*123456789~
NM1*82*1*PROVIDER*RENDER****XX*1234567890~
MOA***MA01~
DTM*232*20210301~
DTM*233*20210301~
AMT*AU*150.00~
SVC*HC:99213*75.00*65.00**1~
DTM*472*20210301~
CAS*CO*45*10.00~
LQ*HE*N130~
SVC*HC:90834*75.00*60.00**1~
DTM*472*20210301~
CAS*PR*2*15.00~
CLP*CLAIM002*4*200.00*0*0*MC*PAY002*11~
CAS*CO*29*200.00~
NM1*QC*1*SMITH*JOHN~
PLB*1234567890*20211231*L6:INTEREST*-5.00*WO*10.00~
SE*33*0001~
GE*1*2~
IEA*1*000000002~
""".strip()

@pytest.fixture(scope="session")
def minimal_837_edi_string() -> str:
    """A claim with one service line and nothing else between the envelopes."""
    return (
        "ISA*...~GS*HC*...~ST*837*0001*...~"
        "CLM*CLAIM001*150.00~"
        "SV1*HC:99213*75.00*UN*1~"
        "SE*30*0001~GE*1*1~IEA*1*000000001~"
    )
