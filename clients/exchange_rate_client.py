from __future__ import annotations
import logging
import os
from dataclasses import replace
from typing import Dict, List, Optional

import requests
from dotenv import load_dotenv

from models.budget import CategoryAllocation
from utils.errors import CurrencyError
from utils.money import scale_half_up

logger = logging.getLogger(__name__)

class ExchangeRateClient:
    """
    Reads exchange rates from ExchangeRate-API (real rates only).
    Failures surface as CurrencyError; there are no built-in sample rates,
    so the caller decides what to show when the service is unavailable.
    """

    OPEN_URL = "https://api.exchangerate-api.com/v4/latest/{base}"
    KEYED_URL = "https://v6.exchangerate-api.com/v6/{key}/latest/{base}"

    def __init__(self, api_key: Optional[str] = None, timeout: int = 15):
        load_dotenv()
        self.api_key = api_key or os.getenv("CURRENCY_API_KEY")
        self.timeout = timeout

    def rates(self, base: str = "USD") -> Dict[str, float]:
        base = self._code(base)
        url = self.url(base)
        logger.info("Fetching exchange rates for %s", base)
        try:
            res = requests.get(url, timeout=self.timeout)
            res.raise_for_status()
            data = res.json()
        except requests.RequestException as e:
            raise CurrencyError(f"Exchange rate request for {base} failed: {self._redact(e)}") from e
        except ValueError as e:
            raise CurrencyError(f"Exchange rate response for {base} was not JSON") from e

        rates = None
        if isinstance(data, dict):
            # v6 answers with conversion_rates, the open v4 endpoint with rates
            rates = data.get("conversion_rates") or data.get("rates")
        if not rates:
            raise CurrencyError(f"Exchange rate response for {base} has no rates")
        return {str(k).upper(): float(v) for k, v in rates.items()}

    def url(self, base: str) -> str:
        if self.api_key:
            return self.KEYED_URL.format(key=self.api_key, base=base)
        return self.OPEN_URL.format(base=base)

    def rate(self, from_ccy: str, to_ccy: str) -> float:
        from_ccy, to_ccy = self._code(from_ccy), self._code(to_ccy)
        if from_ccy == to_ccy:
            return 1.0
        rate = self.rates(from_ccy).get(to_ccy)
        if not rate:
            raise CurrencyError(f"Currency not supported: {to_ccy}")
        return rate

    def convert(self, amount: float, from_ccy: str, to_ccy: str) -> float:
        return float(amount) * self.rate(from_ccy, to_ccy)

    def convert_allocations(
        self,
        allocations: List[CategoryAllocation],
        from_ccy: str,
        to_ccy: str,
        rate: Optional[float] = None,
    ) -> List[CategoryAllocation]:
        if rate is None:
            rate = self.rate(from_ccy, to_ccy)
        return [
            replace(
                a,
                amount=scale_half_up(a.amount, rate),
                min=scale_half_up(a.min, rate),
                max=scale_half_up(a.max, rate),
                tips=list(a.tips),
            )
            for a in allocations
        ]

    def _redact(self, error: Exception) -> str:
        text = str(error)
        if self.api_key:
            text = text.replace(self.api_key, "***")
        return text

    def _code(self, value: str) -> str:
        code = str(value or "").strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise CurrencyError(f"Currency must be a 3-letter code, got {value!r}")
        return code
