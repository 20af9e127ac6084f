from __future__ import annotations

import math
from typing import Any

from ..schemas.envelope import error_response
from ..schemas.requests import CouponValidateRequest
from .dataset_loader import COUPONS, DatasetLoader

INVALID_CODE = "Invalid coupon code"
BELOW_MINIMUM = "Order total does not meet the coupon minimum"


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def compute_discount(coupon: dict[str, Any], total_amount: float) -> float:
    kind = coupon.get("discountType")
    if kind == "percentage":
        # half-up like the storefront's Math.round
        return math.floor(total_amount * _number(coupon.get("discountValue")) / 100 + 0.5)
    if kind == "fixed":
        return _number(coupon.get("discountValue"))
    return 0.0


class CouponService:
    def __init__(self, loader: DatasetLoader) -> None:
        self.loader = loader

    async def validate(self, request: CouponValidateRequest) -> dict[str, Any]:
        code = str(request.code or "").strip().upper()
        total_amount = _number(request.total_amount)
        coupons = await self.loader.load_list(COUPONS)
        found = next(
            (
                coupon
                for coupon in coupons
                if isinstance(coupon, dict)
                and str(coupon.get("code", "")).upper() == code
                and coupon.get("isActive")
            ),
            None,
        )
        if found is None:
            return error_response(INVALID_CODE)
        minimum = _number(found.get("minimumAmount"))
        if minimum and total_amount < minimum:
            return error_response(BELOW_MINIMUM)
        return {"success": True, "coupon": found, "discountAmount": compute_discount(found, total_amount)}


__all__ = ["CouponService", "compute_discount"]
