import copy
import os

import pytest

# Settings are read when ilpquote.main is imported
os.environ.setdefault("ILP_SECRET", "test-secret")

from ilpquote.infrastructure.currency_table import load_currency_table
from ilpquote.services.ilp import IlpService

SECRET = "Quaixohyaesahju3thivuiChai5cahng"

QUOTE_REQUEST = {
    "quoteId": "20508493-6a87-4bb9-9e67-0a5a3f2b1f0c",
    "transactionId": "7ea1a4e1-3c1f-4f9d-a30b-8f6b12f0c7b1",
    "payee": {
        "partyIdInfo": {
            "partyIdType": "MSISDN",
            "partyIdentifier": "123456",
            "fspId": "dfspa",
        },
    },
    "payer": {
        "partyIdInfo": {
            "partyIdType": "MSISDN",
            "partyIdentifier": "987654",
            "fspId": "dfspb",
        },
        "name": "Alice",
    },
    "amountType": "SEND",
    "amount": {"currency": "USD", "amount": "100.00"},
    "transactionType": {
        "scenario": "TRANSFER",
        "initiator": "PAYER",
        "initiatorType": "CONSUMER",
    },
}

QUOTE_RESPONSE = {
    "transferAmount": {"currency": "USD", "amount": "100.00"},
    "expiration": "2030-01-01T00:00:00.000Z",
    "note": "Lunch money",
}


@pytest.fixture()
def currency_table():
    return load_currency_table()


@pytest.fixture()
def service(currency_table) -> IlpService:
    return IlpService(secret=SECRET, currency_decimals=currency_table)


@pytest.fixture()
def quote_request() -> dict:
    return copy.deepcopy(QUOTE_REQUEST)


@pytest.fixture()
def quote_response() -> dict:
    return copy.deepcopy(QUOTE_RESPONSE)
