import logging
import sys
from typing import Optional

from pydantic import BaseModel, ConfigDict

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s"


class Delimiters(BaseModel):
    """
    The delimiter set used to split a payload.

    The values are fixed defaults. The ISA segment declares its own delimiters
    positionally, but they are not sniffed; payloads using other characters
    are not supported.
    """
    model_config = ConfigDict(frozen=True)

    segment: str = "~"
    element: str = "*"
    sub_element: str = "^"
    # Composite fields (HI, SV1-01, PLB03) use the ISA16 component separator,
    # which in practice is ':' for the payloads this decoder targets.
    component: str = ":"


DEFAULT_DELIMITERS = Delimiters()


def configure_logging(level: Optional[str] = "INFO") -> None:
    """Configure root logging for the CLI and the test session."""
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
