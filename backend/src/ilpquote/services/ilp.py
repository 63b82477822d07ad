"""
ILP orchestrator service.

Coordinates the quote-response pipeline:
1. Amount conversion to ILP minor units
2. Payee ILP address construction
3. Transaction object encoding as packet data
4. ILP packet serialization
5. Fulfilment and condition calculation

Also validates fulfilments presented later against issued conditions.
"""

import logging
from typing import Any, Mapping

from ilpquote.domain.addressing import IlpAddressBuilder
from ilpquote.domain.amounts import CurrencyAmountConverter
from ilpquote.domain.encoding import b64url_decode, b64url_encode
from ilpquote.domain.errors import IlpError
from ilpquote.domain.hashing import calculate_condition, calculate_fulfilment, verify_fulfilment
from ilpquote.domain.models import IlpArtifact, Money, PacketInput, TransactionSummary
from ilpquote.domain.payload import TransactionPayloadEncoder
from ilpquote.infrastructure.packet import IlpV1PacketCodec, PacketCodec


class IlpService:
    """
    An abstraction of ILP suitable for the Mojaloop API ILP requirements.

    The secret is shared out of band with the counterparty, which runs the
    same calculation to derive identical fulfilments.

    Example:
        service = IlpService(
            secret="s3cr3t",
            currency_decimals=load_currency_table(),
        )

        artifact = service.generate_quote_response_artifact(
            quote_request, quote_response
        )
        assert service.validate_fulfilment(artifact.fulfilment, artifact.condition)
    """

    def __init__(
        self,
        secret: str | bytes,
        currency_decimals: Mapping[str, int],
        packet_codec: PacketCodec | None = None,
        address_builder: IlpAddressBuilder | None = None,
        payload_encoder: TransactionPayloadEncoder | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize ILP service.

        Args:
            secret: Shared secret keying the fulfilment HMAC
            currency_decimals: Currency code to decimal places table
            packet_codec: ILP packet serializer (ILP v1 codec if None)
            address_builder: Address builder (permissive if None)
            payload_encoder: Transaction data encoder (created if None)
            logger: Logger for pipeline events (module logger if None)
        """
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self.amounts = CurrencyAmountConverter(currency_decimals)
        self.packet_codec = packet_codec or IlpV1PacketCodec()
        # ILP v1 packets are parsed with the v1 codec unless the injected codec can parse
        self.packet_parser = (
            self.packet_codec if hasattr(self.packet_codec, "deserialize") else IlpV1PacketCodec()
        )
        self.address_builder = address_builder or IlpAddressBuilder()
        self.payload_encoder = payload_encoder or TransactionPayloadEncoder()
        self.logger = logger or logging.getLogger(__name__)

    def generate_quote_response_artifact(
        self,
        quote_request: Mapping[str, Any],
        quote_response: Mapping[str, Any],
    ) -> IlpArtifact:
        """
        Generate the fulfilment, ILP packet and condition for a quote response.

        Args:
            quote_request: Mojaloop quote request (transactionId, quoteId,
                payee, payer, transactionType)
            quote_response: Mojaloop quote response (transferAmount, note)

        Returns:
            IlpArtifact with base64url fulfilment, packet and condition

        Raises:
            UnknownCurrency, InvalidAmount, NonIntegerAmount, InvalidParty:
                Propagated unchanged from the pipeline stages
        """
        summary = TransactionSummary.from_quote(quote_request, quote_response)

        try:
            packet_input = PacketInput(
                amount=self.amounts.convert(Money.from_mapping(summary.amount)),
                address=self.address_builder.build(summary.payee),
                data=self.payload_encoder.encode(summary),
            )
        except IlpError as e:
            self.logger.warning(
                f"Cannot build ILP packet for quote {summary.quote_id}: {e}"
            )
            raise

        ilp_packet = b64url_encode(self.packet_codec.serialize(packet_input))
        fulfilment = calculate_fulfilment(ilp_packet, self._secret)
        condition = calculate_condition(fulfilment)

        self.logger.info(
            f"Generated ILP for quote {summary.quote_id} "
            f"(transaction {summary.transaction_id}): "
            f"address={packet_input.address} amount={packet_input.amount}"
        )
        self.logger.debug(f"ILP condition for quote {summary.quote_id}: {condition}")

        return IlpArtifact(
            fulfilment=fulfilment,
            ilp_packet=ilp_packet,
            condition=condition,
        )

    def calculate_fulfilment(self, ilp_packet: str) -> str:
        """Calculate the fulfilment of a base64url ILP packet with this service's secret."""
        return calculate_fulfilment(ilp_packet, self._secret)

    def validate_fulfilment(self, fulfilment: str, condition: str) -> bool:
        """
        Validate a fulfilment against a condition.

        Returns:
            True if the fulfilment is a 32-byte preimage of the condition,
            otherwise False. Never raises for malformed input.
        """
        return verify_fulfilment(fulfilment, condition)

    def decode_packet(self, ilp_packet: str) -> tuple[PacketInput, dict[str, Any]]:
        """
        Decode a base64url ILP packet and the transaction object it carries.

        Raises:
            InvalidEncoding: If the packet or its data is not decodable
            InvalidPacket: If the bytes are not an ILP v1 payment packet
        """
        packet = self.packet_parser.deserialize(b64url_decode(ilp_packet))
        return packet, self.payload_encoder.decode(packet.data)

    def decode_transaction(self, ilp_packet: str) -> dict[str, Any]:
        """Return the transaction object attached to a base64url ILP packet."""
        _, transaction = self.decode_packet(ilp_packet)
        return transaction
