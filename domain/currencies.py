from decimal import Decimal
from types import MappingProxyType

from domain.models.currency import SupportedCurrency

SUPPORTED_CURRENCIES: tuple[SupportedCurrency, ...] = (
    SupportedCurrency("USD", "US Dollar", "$"),
    SupportedCurrency("EUR", "Euro", "€"),
    SupportedCurrency("GBP", "British Pound", "£"),
    SupportedCurrency("JPY", "Japanese Yen", "¥"),
    SupportedCurrency("CAD", "Canadian Dollar", "C$"),
    SupportedCurrency("AUD", "Australian Dollar", "A$"),
    SupportedCurrency("CHF", "Swiss Franc", "CHF"),
    SupportedCurrency("CNY", "Chinese Yuan", "¥"),
    SupportedCurrency("INR", "Indian Rupee", "₹"),
    SupportedCurrency("BRL", "Brazilian Real", "R$"),
    SupportedCurrency("RUB", "Russian Ruble", "₽"),
    SupportedCurrency("KRW", "South Korean Won", "₩"),
    SupportedCurrency("MXN", "Mexican Peso", "$"),
    SupportedCurrency("SGD", "Singapore Dollar", "S$"),
    SupportedCurrency("HKD", "Hong Kong Dollar", "HK$"),
    SupportedCurrency("NZD", "New Zealand Dollar", "NZ$"),
    SupportedCurrency("SEK", "Swedish Krona", "kr"),
    SupportedCurrency("NOK", "Norwegian Krone", "kr"),
    SupportedCurrency("DKK", "Danish Krone", "kr"),
    SupportedCurrency("PLN", "Polish Zloty", "zł"),
)

SUPPORTED_CODES: frozenset[str] = frozenset(c.code for c in SUPPORTED_CURRENCIES)

FALLBACK_ANCHOR = "USD"

# Hand-maintained units per 1 USD, used when neither cache nor network can help
FALLBACK_USD_RATES: MappingProxyType = MappingProxyType({
    "USD": Decimal("1"),
    "EUR": Decimal("0.85"),
    "GBP": Decimal("0.73"),
    "JPY": Decimal("110.0"),
    "CAD": Decimal("1.25"),
    "AUD": Decimal("1.35"),
    "CHF": Decimal("0.92"),
    "CNY": Decimal("6.45"),
    "INR": Decimal("74.0"),
    "BRL": Decimal("5.2"),
    "RUB": Decimal("73.0"),
    "KRW": Decimal("1180.0"),
    "MXN": Decimal("20.0"),
    "SGD": Decimal("1.35"),
    "HKD": Decimal("7.8"),
    "NZD": Decimal("1.4"),
    "SEK": Decimal("8.5"),
    "NOK": Decimal("8.8"),
    "DKK": Decimal("6.3"),
    "PLN": Decimal("3.9"),
})
