"""Exchange-rate API interactions.

Two sources are used:
- a primary source (Frankfurter) returning a whole table for a base currency
- a secondary, USD-quoted source (Open Exchange Rates) for currencies the
  primary one does not cover

Fetch failures never raise: they are logged and yield None, which the
calculations treat as "convert nothing".
"""

from typing import Any

import requests

from runway.config import DEFAULT_OXR_API_URL, DEFAULT_RATES_API_URL, get_oxr_app_id
from runway.domain.currency import fold_usd_quote, rebuild_from_usd
from runway.domain.models import ExchangeRates
from runway.log import get_logger

REQUEST_TIMEOUT = 10

log = get_logger(__name__)


def fetch_latest_rates(base: str, api_url: str = DEFAULT_RATES_API_URL) -> ExchangeRates | None:
    """Get the latest rates for a base currency.

    Args:
        base: Base currency code.
        api_url: Root URL of the rates API.

    Returns:
        Mapping of currency code to units per 1 base, or None on any failure.
    """
    try:
        response = requests.get(
            f"{api_url.rstrip('/')}/latest",
            params={"from": base},
            headers={"Accept": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        rates = response.json()["rates"]
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        log.warning("rates.fetch_failed", base=base, error=str(e))
        return None

    return {str(code): float(rate) for code, rate in rates.items()}


def fetch_usd_quote(
    code: str,
    app_id: str | None,
    api_url: str = DEFAULT_OXR_API_URL,
) -> float | None:
    """Get one currency's rate quoted against USD.

    Args:
        code: Currency to quote.
        app_id: Open Exchange Rates app id. Without one nothing is fetched.
        api_url: Latest-rates endpoint.

    Returns:
        Units of `code` per 1 USD, or None on any failure.
    """
    if not app_id:
        log.info("rates.usd_quote_skipped", currency=code, reason="no app id")
        return None

    try:
        response = requests.get(
            api_url,
            params={"app_id": app_id, "symbols": code},
            headers={"Accept": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        quote = response.json()["rates"][code]
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        log.warning("rates.usd_quote_failed", currency=code, error=str(e))
        return None

    return float(quote)


def load_rate_table(base: str, rates_config: dict[str, Any]) -> ExchangeRates | None:
    """Build the full rate table for a base currency.

    Args:
        base: Base currency code.
        rates_config: The [rates] table of the configuration.

    Returns:
        Base-relative rate table including the extra currencies whose quotes
        could be fetched, or None if the primary fetch fails.
    """
    api_url = rates_config.get("api_url", DEFAULT_RATES_API_URL)
    oxr_url = rates_config.get("oxr_api_url", DEFAULT_OXR_API_URL)
    extra_currencies = [str(c).upper() for c in rates_config.get("extra_currencies", [])]
    app_id = get_oxr_app_id()

    if base in extra_currencies:
        usd_quote = fetch_usd_quote(base, app_id, oxr_url)
        usd_rates = fetch_latest_rates("USD", api_url)
        if usd_rates is None or usd_quote is None:
            return None
        rates = rebuild_from_usd(usd_rates, base, usd_quote)
        log.info("rates.rebuilt_from_usd", base=base, currencies=len(rates))
        return rates

    rates = fetch_latest_rates(base, api_url)
    if rates is None:
        return None

    for code in extra_currencies:
        if code in rates:
            continue
        usd_quote = fetch_usd_quote(code, app_id, oxr_url)
        if usd_quote is not None:
            rates = fold_usd_quote(rates, base, code, usd_quote)

    log.info("rates.loaded", base=base, currencies=len(rates))
    return rates
