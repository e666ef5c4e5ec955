from __future__ import annotations

from pydantic import BaseModel


class Currency(BaseModel):
    code: str
    symbol: str
    name: str


_CURRENCY_DATA = [
    # North America
    ("USD", "$", "US Dollar"),
    ("CAD", "C$", "Canadian Dollar"),
    ("MXN", "MX$", "Mexican Peso"),
    # Europe
    ("EUR", "€", "Euro"),
    ("GBP", "£", "British Pound"),
    ("CHF", "CHF", "Swiss Franc"),
    ("SEK", "kr", "Swedish Krona"),
    ("NOK", "kr", "Norwegian Krone"),
    ("DKK", "kr", "Danish Krone"),
    ("PLN", "zł", "Polish Zloty"),
    ("CZK", "Kč", "Czech Koruna"),
    ("HUF", "Ft", "Hungarian Forint"),
    ("RON", "lei", "Romanian Leu"),
    ("BGN", "лв", "Bulgarian Lev"),
    # Asia Pacific
    ("JPY", "¥", "Japanese Yen"),
    ("CNY", "¥", "Chinese Yuan"),
    ("KRW", "₩", "South Korean Won"),
    ("INR", "₹", "Indian Rupee"),
    ("SGD", "S$", "Singapore Dollar"),
    ("HKD", "HK$", "Hong Kong Dollar"),
    ("TWD", "NT$", "Taiwan Dollar"),
    ("THB", "฿", "Thai Baht"),
    ("MYR", "RM", "Malaysian Ringgit"),
    ("IDR", "Rp", "Indonesian Rupiah"),
    ("PHP", "₱", "Philippine Peso"),
    ("VND", "₫", "Vietnamese Dong"),
    ("PKR", "₨", "Pakistani Rupee"),
    ("BDT", "৳", "Bangladeshi Taka"),
    ("LKR", "Rs", "Sri Lankan Rupee"),
    # Oceania
    ("AUD", "A$", "Australian Dollar"),
    ("NZD", "NZ$", "New Zealand Dollar"),
    # Middle East
    ("AED", "د.إ", "UAE Dirham"),
    ("SAR", "﷼", "Saudi Riyal"),
    ("ILS", "₪", "Israeli Shekel"),
    ("QAR", "ر.ق", "Qatari Riyal"),
    ("KWD", "د.ك", "Kuwaiti Dinar"),
    ("BHD", "د.ب", "Bahraini Dinar"),
    ("OMR", "ر.ع.", "Omani Rial"),
    ("JOD", "د.ا", "Jordanian Dinar"),
    ("LBP", "ل.ل", "Lebanese Pound"),
    # Africa
    ("ZAR", "R", "South African Rand"),
    ("NGN", "₦", "Nigerian Naira"),
    ("EGP", "E£", "Egyptian Pound"),
    ("KES", "KSh", "Kenyan Shilling"),
    ("GHS", "₵", "Ghanaian Cedi"),
    ("TZS", "TSh", "Tanzanian Shilling"),
    ("UGX", "USh", "Ugandan Shilling"),
    ("MAD", "د.م.", "Moroccan Dirham"),
    # South America
    ("BRL", "R$", "Brazilian Real"),
    ("ARS", "AR$", "Argentine Peso"),
    ("CLP", "CL$", "Chilean Peso"),
    ("COP", "COL$", "Colombian Peso"),
    ("PEN", "S/", "Peruvian Sol"),
    ("UYU", "$U", "Uruguayan Peso"),
    # Other
    ("RUB", "₽", "Russian Ruble"),
    ("TRY", "₺", "Turkish Lira"),
    ("UAH", "₴", "Ukrainian Hryvnia"),
]

CURRENCIES: dict[str, Currency] = {
    code: Currency(code=code, symbol=symbol, name=name) for code, symbol, name in _CURRENCY_DATA
}


def get_currency(code: str) -> Currency | None:
    return CURRENCIES.get(code.upper()) if code else None


def is_supported(code: str) -> bool:
    return get_currency(code) is not None


def currency_symbol(code: str) -> str:
    """Symbol for a currency code, falling back to the code itself."""
    currency = get_currency(code)
    return currency.symbol if currency else code
