from .number import parse_locale_number, parse_monetary_value
from .csv_schema import ExchangeSchema, canonicalize_header, read_csv_records
from .diagnostics import IssueCode
from .exchange_adapter import ExchangeAdapter
from .registry import AdapterRegistry, UnknownExchangeError, default_registry
