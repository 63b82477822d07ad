"""
Currency-aware conversion of Mojaloop amounts to ILP amounts.

ILP v1 carries amounts as unsigned 64-bit integers in the currency's minor
unit. A Mojaloop amount is a decimal string, so the conversion multiplies
by 10 ^ decimal places of the currency.

Design Decisions:
- Scaling shifts the digit string of the Decimal, so it is exact for any
  exponent and never rounds
- Amounts that would need rounding are rejected, not truncated
"""

from decimal import Decimal
from typing import Mapping

from .errors import InvalidAmount, NonIntegerAmount, UnknownCurrency
from .models import Money


# Largest amount an ILP v1 payment packet can carry
MAX_ILP_AMOUNT = 2**64 - 1


class CurrencyAmountConverter:
    """
    Converts Money values to ILP integer amount strings.

    Example:
        converter = CurrencyAmountConverter({"USD": 2})
        converter.convert(Money("USD", Decimal("100.00")))  # "10000"
    """

    def __init__(self, currency_decimals: Mapping[str, int]) -> None:
        self.currency_decimals = currency_decimals

    def decimal_places(self, currency: str) -> int:
        """
        Look up the number of decimal places for a currency.

        Raises:
            UnknownCurrency: If the currency is not in the table
        """
        try:
            return self.currency_decimals[currency]
        except (KeyError, TypeError):
            raise UnknownCurrency(currency) from None

    def convert(self, money: Money) -> str:
        """
        Convert an amount to an unsigned integer string in minor units.

        Args:
            money: Currency and decimal amount

        Returns:
            Decimal digits with no sign and no leading zeros

        Raises:
            UnknownCurrency: If the currency is not in the table
            InvalidAmount: If the amount is negative, not finite or too large
            NonIntegerAmount: If scaling leaves a fractional part
        """
        places = self.decimal_places(money.currency)
        amount = money.amount

        if not amount.is_finite():
            raise InvalidAmount(f"Amount must be finite, got {amount}")
        if amount < 0:
            raise InvalidAmount(f"Amount must not be negative, got {amount}")

        _, digits, exponent = amount.as_tuple()
        coefficient = "".join(map(str, digits)).lstrip("0")
        if not coefficient:
            return "0"

        # checked before scaling so extreme exponents never build huge integers
        if amount.adjusted() + places > len(str(MAX_ILP_AMOUNT)) - 1:
            raise InvalidAmount(f"Amount {amount} {money.currency} exceeds the ILP amount range")

        shift = exponent + places
        if shift < 0:
            kept, dropped = coefficient[:shift], coefficient[shift:]
            if dropped.strip("0"):
                raise NonIntegerAmount(
                    f"Amount {amount} has more than {places} decimal places "
                    f"allowed for {money.currency}"
                )
            value = int(kept or "0")
        else:
            value = int(coefficient) * 10**shift

        if value > MAX_ILP_AMOUNT:
            raise InvalidAmount(f"Amount {amount} {money.currency} exceeds the ILP amount range")

        return str(value)
