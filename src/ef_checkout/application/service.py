"""CheckoutApplicationService: cart snapshot + payment → immutable order.

Checkout flow:
1. Snapshot the cart (reject when empty)
2. Price the snapshot once (subtotal, shipping, tax, total)
3. Settle the payment (card/paypal validated locally, crypto via wallet)
4. Persist the order with listings copied by value
5. Clear the cart line by line (failures logged, order kept)

Nothing is written before step 4, so a failed payment never leaves an order.
"""

import copy
import logging
import re

from config.settings import settings
from src.ef_cart.application.service import CartApplicationService
from src.ef_cart.domain.models import CartSnapshot
from src.ef_checkout.application.schemas import (
    CardPaymentIn,
    CheckoutRequest,
    CryptoPaymentIn,
    PaymentIn,
)
from src.ef_checkout.domain.models import Order, OrderLine, PaymentRecord
from src.ef_checkout.domain.pricing import PriceBreakdown, compute_pricing
from src.ef_checkout.domain.repository import CheckoutRepositoryProtocol
from src.ef_checkout.domain.wallet import WalletProviderProtocol
from src.ef_common.cents import usd_cents_to_wei
from src.ef_common.datetime_utils import estimated_delivery, utc_now
from src.ef_common.enums import PaymentType
from src.ef_common.errors import (
    AppError,
    EmptyCartError,
    InsufficientWalletBalanceError,
    InvalidPaymentError,
    OrderNotFoundError,
    WalletNotConnectedError,
    WalletTransferRejectedError,
)
from src.ef_common.id_generator import generate_order_id

logger = logging.getLogger("ef.checkout")

_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
_CVV_RE = re.compile(r"^\d{3,4}$")


def _card_record(payment: CardPaymentIn) -> PaymentRecord:
    digits = re.sub(r"[\s-]", "", payment.card_number)
    if not digits.isdigit() or not 12 <= len(digits) <= 19:
        raise InvalidPaymentError("card number must be 12-19 digits")
    if not _EXPIRY_RE.match(payment.expiry.strip()):
        raise InvalidPaymentError("expiry must be MM/YY")
    if not _CVV_RE.match(payment.cvv.strip()):
        raise InvalidPaymentError("cvv must be 3 or 4 digits")
    return PaymentRecord(type=PaymentType.CARD.value, last4=digits[-4:])


class CheckoutApplicationService:
    def __init__(
        self,
        cart_service: CartApplicationService | None = None,
        eth_price_cents: int | None = None,
        merchant_address: str | None = None,
    ) -> None:
        self._cart = cart_service or CartApplicationService()
        self._eth_price_cents = eth_price_cents or settings.ETH_USD_PRICE_CENTS
        self._merchant_address = merchant_address or settings.MERCHANT_WALLET_ADDRESS

    @property
    def eth_price_cents(self) -> int:
        return self._eth_price_cents

    async def _priced_cart(
        self, store: CheckoutRepositoryProtocol, account_id: str
    ) -> tuple[CartSnapshot, PriceBreakdown]:
        snapshot = await self._cart.get_cart(store, account_id)
        if snapshot.is_empty:
            raise EmptyCartError()
        return snapshot, compute_pricing(snapshot.total_price_cents)

    async def quote(
        self, store: CheckoutRepositoryProtocol, account_id: str
    ) -> tuple[int, PriceBreakdown, int]:
        """Preview for the checkout page: (total_items, pricing, amount_wei)."""
        snapshot, pricing = await self._priced_cart(store, account_id)
        amount_wei = usd_cents_to_wei(pricing.total_cents, self._eth_price_cents)
        return snapshot.total_items, pricing, amount_wei

    async def checkout(
        self,
        store: CheckoutRepositoryProtocol,
        wallet: WalletProviderProtocol,
        account_id: str,
        req: CheckoutRequest,
    ) -> Order:
        snapshot, pricing = await self._priced_cart(store, account_id)
        payment = await self._settle(wallet, req.payment, pricing.total_cents)

        now = utc_now()
        order = Order(
            id=generate_order_id(),
            account_id=account_id,
            lines=[
                OrderLine(listing=copy.deepcopy(item.listing), quantity=item.line.quantity)
                for item in snapshot.items
            ],
            subtotal_cents=pricing.subtotal_cents,
            shipping_cents=pricing.shipping_cents,
            tax_cents=pricing.tax_cents,
            total_cents=pricing.total_cents,
            shipping_address=req.shipping_address.to_domain(),
            payment=payment,
            created_at=now,
            estimated_delivery=estimated_delivery(now),
        )
        order = await store.save_order(order)
        logger.info(
            "Order %s placed by %s: %d items, total %d cents, paid by %s",
            order.id, account_id, order.item_count, order.total_cents, payment.type,
        )

        try:
            await self._cart.clear(store, account_id)
        except Exception:
            logger.exception("Failed to clear cart for %s after order %s", account_id, order.id)
        return order

    async def _settle(
        self, wallet: WalletProviderProtocol, payment: PaymentIn, total_cents: int
    ) -> PaymentRecord:
        if isinstance(payment, CardPaymentIn):
            return _card_record(payment)
        if isinstance(payment, CryptoPaymentIn):
            return await self._pay_with_wallet(wallet, payment.wallet_address, total_cents)
        return PaymentRecord(type=PaymentType.PAYPAL.value)

    async def _pay_with_wallet(
        self, wallet: WalletProviderProtocol, requested: str | None, total_cents: int
    ) -> PaymentRecord:
        accounts = await wallet.get_accounts()
        if not accounts:
            raise WalletNotConnectedError()
        if requested is not None and requested not in accounts:
            raise WalletNotConnectedError(f"Wallet account {requested} is not connected")
        from_address = requested or accounts[0]

        amount_wei = usd_cents_to_wei(total_cents, self._eth_price_cents)
        balance = await wallet.get_balance(from_address)
        if balance < amount_wei:
            raise InsufficientWalletBalanceError(amount_wei, balance)

        try:
            tx_hash = await wallet.send_value(from_address, self._merchant_address, amount_wei)
        except AppError:
            raise
        except Exception as exc:
            raise WalletTransferRejectedError(str(exc)) from exc
        logger.info("Wallet transfer %s: %d wei from %s", tx_hash, amount_wei, from_address)

        return PaymentRecord(
            type=PaymentType.CRYPTO.value,
            wallet_address=from_address,
            transaction_hash=tx_hash,
            amount_wei=amount_wei,
        )

    async def list_orders(self, store: CheckoutRepositoryProtocol, account_id: str) -> list[Order]:
        return await store.list_orders(account_id)

    async def get_order(
        self, store: CheckoutRepositoryProtocol, account_id: str, order_id: str
    ) -> Order:
        order = await store.get_order(order_id)
        if order is None or order.account_id != account_id:
            raise OrderNotFoundError(order_id)
        return order
