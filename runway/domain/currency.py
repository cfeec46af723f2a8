"""Pure functions for currency conversion.

Exchange-rate tables are expressed against a single base currency
(rates[X] = units of X per 1 unit of base). A table may be None while rates
are unavailable; every conversion then degrades to identity.

No rounding happens here. Rounding is a display concern.
"""

from runway.domain.models import ExchangeRates


def to_base(amount: float, currency: str, base: str, rates: ExchangeRates | None) -> float:
    """Convert an amount into the base currency.

    Args:
        amount: Amount in `currency`.
        currency: Currency the amount is expressed in.
        base: Base currency of the rate table.
        rates: Base-relative rate table, or None if unavailable.

    Returns:
        Amount in base currency, or the original amount if no rate applies.
    """
    if rates is None or currency == base:
        return amount
    rate = rates.get(currency)
    if not rate:
        return amount
    return amount / rate


def to_display(
    amount: float,
    from_currency: str,
    display_currency: str,
    base: str,
    rates: ExchangeRates | None,
) -> float:
    """Convert an amount into the display currency via the base currency.

    Args:
        amount: Amount in `from_currency`.
        from_currency: Currency the amount is expressed in.
        display_currency: Currency to present the amount in.
        base: Base currency of the rate table.
        rates: Base-relative rate table, or None if unavailable.

    Returns:
        Amount in display currency. Missing rates leave the amount unconverted
        at whichever step they are missing.
    """
    if rates is None or from_currency == display_currency:
        return amount

    base_amount = to_base(amount, from_currency, base, rates)
    if display_currency == base:
        return base_amount

    display_rate = rates.get(display_currency)
    if not display_rate:
        return base_amount
    return base_amount * display_rate


def fold_usd_quote(rates: ExchangeRates, base: str, code: str, usd_rate: float) -> ExchangeRates:
    """Add a currency quoted against USD to a base-relative table.

    Args:
        rates: Existing base-relative rate table.
        base: Base currency of the table.
        code: Currency being added.
        usd_rate: Units of `code` per 1 USD.

    Returns:
        New rate table including `code`. Unchanged when the table has no USD
        bridge to go through.
    """
    folded = dict(rates)
    if base == "USD":
        folded[code] = usd_rate
    elif "USD" in rates:
        folded[code] = rates["USD"] * usd_rate
    return folded


def rebuild_from_usd(usd_rates: ExchangeRates, code: str, usd_rate: float) -> ExchangeRates:
    """Build a table whose base is `code` from a USD-based table.

    Used when the base currency is one only the USD-quoted source covers.
    Every rate is inverted through the USD bridge.

    Args:
        usd_rates: USD-relative rate table (1 USD = X other).
        code: New base currency.
        usd_rate: Units of `code` per 1 USD.

    Returns:
        Table relative to `code`.
    """
    rebuilt = {other: rate / usd_rate for other, rate in usd_rates.items() if other != code}
    rebuilt["USD"] = 1 / usd_rate
    return rebuilt


def has_rate(currency: str, base: str, rates: ExchangeRates | None) -> bool:
    """Check whether a currency can actually be converted with this table."""
    if currency == base:
        return True
    return rates is not None and bool(rates.get(currency))
