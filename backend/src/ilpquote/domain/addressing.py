"""
ILP address construction for Mojaloop parties.

An address consists of 4 parts:
1. ILP address allocation scheme identifier (always the global scheme)
2. FSPID of the DFSP owning the party account
3. Identifier type being used to identify the account
4. Identifier of the account
"""

import re

from .errors import InvalidParty
from .models import PartyIdentity


# ILP global address allocation scheme
GLOBAL_SCHEME = "g"

# Address grammar from the ILP addresses RFC (RFC 0015)
ILP_ADDRESS_PATTERN = re.compile(
    r"^(g|private|example|peer|self|test[1-3]?|local)([.][a-zA-Z0-9_~-]+)+$"
)
MAX_ADDRESS_LENGTH = 1023


class IlpAddressBuilder:
    """
    Builds ILP addresses from party objects.

    By default segments are not checked against the ILP address grammar.
    With ``strict=True`` the built address must match it.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def build(self, party: object) -> str:
        """
        Return the ILP address of a Mojaloop party.

        Args:
            party: Party object (``PartyIdentity`` or Mojaloop mapping)

        Raises:
            InvalidParty: If required fields are missing, or in strict
                mode when the address is not a legal ILP address
        """
        identity = party if isinstance(party, PartyIdentity) else PartyIdentity.from_party(party)

        address = ".".join((
            GLOBAL_SCHEME,
            identity.fsp_id,
            identity.party_id_type.lower(),
            identity.party_identifier.lower(),
        ))

        if self.strict:
            validate_address(address)
        return address


def validate_address(address: str) -> None:
    """Raise InvalidParty if the address breaks the ILP address grammar."""
    if len(address) > MAX_ADDRESS_LENGTH:
        raise InvalidParty(f"ILP address exceeds {MAX_ADDRESS_LENGTH} characters")
    if not ILP_ADDRESS_PATTERN.match(address):
        raise InvalidParty(f"Not a valid ILP address: {address!r}")
