"""Voucher service: flat-value discount vouchers redeemed on sales."""

from datetime import datetime, timezone

from coffeeshop.utils.exceptions import BadRequestError
from coffeeshop.utils.service import CollectionService


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VoucherService(CollectionService):
    collection_name = "vouchers"
    label = "Voucher"

    async def redeemable_value(self, voucher_id: str) -> float:
        """Discount a voucher grants right now. 404 if unknown, 400 if expired."""
        voucher = await self._get_raw(voucher_id)
        if _as_utc(voucher["expiry_date"]) < datetime.now(timezone.utc):
            raise BadRequestError("Voucher expired")
        return float(voucher["value"])
