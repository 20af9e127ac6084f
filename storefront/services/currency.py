from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

logger = logging.getLogger(__name__)

BASE_CURRENCY = "SAR"
CACHE_TTL_SECONDS = 5 * 60
STALE_CACHE_SECONDS = 60 * 60
DEFAULT_RATES = {"USD": 0.27, "EGP": 8.25, "AED": 0.98, "SAR": 1.0}


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    name: str
    name_ar: str
    symbol: str


SUPPORTED_CURRENCIES = {
    "SAR": CurrencyInfo("SAR", "Saudi Riyal", "ريال سعودي", "ر.س"),
    "EGP": CurrencyInfo("EGP", "Egyptian Pound", "جنيه مصري", "ج.م"),
    "AED": CurrencyInfo("AED", "UAE Dirham", "درهم إماراتي", "د.إ"),
}


class UnsupportedCurrencyError(ValueError):
    pass


class CurrencyService:
    """SAR-based exchange rates with a short-lived cache.

    A failed fetch falls back to the last good rates while they are under an
    hour old, then to fixed defaults.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._transport = transport
        self._clock = clock
        self._rates: Optional[dict[str, float]] = None
        self._last_update = 0.0
        self._last_good: Optional[tuple[dict[str, float], float]] = None

    async def get_rates(self) -> dict[str, float]:
        now = self._clock()
        if self._rates is not None and now - self._last_update < CACHE_TTL_SECONDS:
            return dict(self._rates)
        try:
            rates = await self._fetch()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Exchange rate fetch failed, using cached rates: %s", exc)
            if self._last_good is not None and now - self._last_good[1] < STALE_CACHE_SECONDS:
                self._rates = dict(self._last_good[0])
            else:
                self._rates = dict(DEFAULT_RATES)
            return dict(self._rates)
        self._rates = rates
        self._last_update = now
        self._last_good = (dict(rates), now)
        return dict(rates)

    async def _fetch(self) -> dict[str, float]:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(self.url)
        response.raise_for_status()
        data = response.json()
        raw = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(raw, dict):
            raise ValueError("Invalid exchange rate response")
        rates = {code: float(raw.get(code) or DEFAULT_RATES[code]) for code in ("USD", "EGP", "AED")}
        rates[BASE_CURRENCY] = 1.0
        return rates

    async def refresh_rates(self) -> dict[str, float]:
        self._last_update = 0.0
        return await self.get_rates()

    async def convert_from_sar(self, amount: float, to_currency: str) -> float:
        if to_currency == BASE_CURRENCY:
            return amount
        rates = await self.get_rates()
        if to_currency not in rates:
            raise UnsupportedCurrencyError(f"Unsupported currency: {to_currency}")
        return amount * rates[to_currency]

    async def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        if from_currency == to_currency:
            return amount
        rates = await self.get_rates()
        if from_currency not in rates:
            raise UnsupportedCurrencyError(f"Unsupported currency: {from_currency}")
        return await self.convert_from_sar(amount / rates[from_currency], to_currency)

    @staticmethod
    def format(amount: float, currency: str) -> str:
        info = SUPPORTED_CURRENCIES.get(currency)
        if info is None:
            return f"{amount:.2f}"
        return f"{amount:,.2f} {info.symbol}"

    @staticmethod
    def currency_info(currency: str) -> Optional[CurrencyInfo]:
        return SUPPORTED_CURRENCIES.get(currency)

    @staticmethod
    def supported_currencies() -> list[CurrencyInfo]:
        return list(SUPPORTED_CURRENCIES.values())


__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_RATES",
    "CurrencyInfo",
    "CurrencyService",
    "SUPPORTED_CURRENCIES",
    "UnsupportedCurrencyError",
]
