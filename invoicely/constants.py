from datetime import timezone

UTC = timezone.utc

DEFAULT_CURRENCY = "USD"
DEFAULT_PRIMARY_COLOR = "#3B82F6"
DEFAULT_INVOICE_PREFIX = "INV"
DEFAULT_NEXT_INVOICE_NUMBER = 1001
DEFAULT_PAYMENT_TERMS_DAYS = 30

RECENT_INVOICES_LIMIT = 5

STATUS_LABELS = {
    "draft": "Draft",
    "sent": "Sent",
    "paid": "Paid",
    "overdue": "Overdue",
}
