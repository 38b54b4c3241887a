# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Statement Loader - converts dynamic payloads into typed statement records.

Payloads from files or upstream services are loosely shaped dicts. They are
converted exactly once here; the domain layer only ever sees the frozen
record dataclasses.

Supported sources:
- A JSON file:
    {
      "company": {"symbol": "ACME", "fiscal_year_end_month": 12, "currency": "USD"},
      "income_statements": [{"period_end_date": "2024-03-31", "period_type": "quarterly", ...}],
      "balance_sheets": [...],
      "cash_flow_statements": [...],
      "prices": [{"price_date": "2024-03-28", "close": 150.0, ...}]
    }
- A directory holding company.json (optional) and any of
  income_statements.csv, balance_sheets.csv, cash_flow_statements.csv,
  daily_prices.csv (read with pandas; empty cells become None).
"""

import json
import logging
from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

import pandas as pd

from fiscalmetrics.domain.models.periods import PeriodType
from fiscalmetrics.domain.models.statements import (
    BalanceSheet,
    CashFlowStatement,
    CompanyStatements,
    DailyPrice,
    IncomeStatement,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", IncomeStatement, BalanceSheet, CashFlowStatement, DailyPrice)

# Upstream column names mapped onto record fields
FIELD_ALIASES = {
    "total_revenue": "revenue",
    "basic_eps": "eps",
    "common_stock_shares_outstanding": "shares_outstanding",
    "date": "price_date",
}

CSV_FILES = {
    "income_statements": "income_statements.csv",
    "balance_sheets": "balance_sheets.csv",
    "cash_flow_statements": "cash_flow_statements.csv",
    "prices": "daily_prices.csv",
}

_DATE_FIELDS = {"period_end_date", "price_date"}


class StatementLoadError(Exception):
    """Raised when a statement source cannot be read or a record is malformed."""


def parse_date(value: Any, field_name: str = "date") -> date:
    """
    Parse an ISO date, datetime or pandas Timestamp into a date.

    Raises:
        StatementLoadError: If the value is missing or not a date
    """
    if value is None:
        raise StatementLoadError(f"Missing {field_name}")
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as e:
        raise StatementLoadError(f"Invalid {field_name}: {value!r}") from e


def parse_number(value: Any, field_name: str) -> Optional[float]:
    """
    Parse a numeric cell. Blank cells and NaN become None.

    Raises:
        StatementLoadError: If the value is present but not numeric
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise StatementLoadError(f"Invalid number for {field_name}: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        num = float(value)
        return None if num != num else num  # NaN from pandas
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        return float(Decimal(text))
    except InvalidOperation as e:
        raise StatementLoadError(f"Invalid number for {field_name}: {value!r}") from e


def build_record(
    record_cls: Type[RecordT],
    payload: Mapping[str, Any],
    default_period_type: Optional[PeriodType] = None,
) -> RecordT:
    """
    Build one typed record from a loosely shaped mapping.

    Unknown keys are ignored; aliased upstream names are accepted.

    Raises:
        StatementLoadError: On a missing date or period type, or a bad value
    """
    known = {f.name for f in fields(record_cls)}
    kwargs: Dict[str, Any] = {}
    for raw_key, raw_value in payload.items():
        key = FIELD_ALIASES.get(str(raw_key).strip().lower(), str(raw_key).strip().lower())
        if key not in known:
            continue
        if key in _DATE_FIELDS:
            kwargs[key] = parse_date(raw_value, key)
        elif key == "period_type":
            if raw_value is None:
                continue
            try:
                kwargs[key] = PeriodType.parse(raw_value)
            except ValueError as e:
                raise StatementLoadError(str(e)) from e
        else:
            kwargs[key] = parse_number(raw_value, key)

    for date_field in _DATE_FIELDS & known:
        if date_field not in kwargs:
            raise StatementLoadError(f"{record_cls.__name__} record missing {date_field}")

    if "period_type" in known and "period_type" not in kwargs:
        if default_period_type is None:
            raise StatementLoadError(f"{record_cls.__name__} record missing period_type")
        kwargs["period_type"] = default_period_type

    return record_cls(**kwargs)


def build_records(
    record_cls: Type[RecordT],
    payloads: Iterable[Mapping[str, Any]],
    default_period_type: Optional[PeriodType] = None,
) -> List[RecordT]:
    return [build_record(record_cls, payload, default_period_type) for payload in payloads or []]


def statements_from_payload(
    payload: Mapping[str, Any], default_period_type: Optional[Union[PeriodType, str]] = None
) -> CompanyStatements:
    """Convert a full company payload (see module docstring) into CompanyStatements."""
    if not isinstance(payload, Mapping):
        raise StatementLoadError(f"Expected a JSON object, got {type(payload).__name__}")

    period_type = PeriodType.parse(default_period_type) if default_period_type else None
    company = payload.get("company") or {}

    fye_month = company.get("fiscal_year_end_month")
    if fye_month is not None:
        try:
            fye_month = int(fye_month)
        except (TypeError, ValueError) as e:
            raise StatementLoadError(f"Invalid fiscal_year_end_month: {fye_month!r}") from e

    statements = CompanyStatements(
        fiscal_year_end_month=fye_month,
        currency=company.get("currency"),
        symbol=company.get("symbol"),
        incomes=build_records(IncomeStatement, payload.get("income_statements", []), period_type),
        balance_sheets=build_records(BalanceSheet, payload.get("balance_sheets", []), period_type),
        cash_flows=build_records(CashFlowStatement, payload.get("cash_flow_statements", []), period_type),
        prices=build_records(DailyPrice, payload.get("prices", [])),
    )
    logger.debug(
        f"Loaded {len(statements.incomes)} income, {len(statements.balance_sheets)} balance, "
        f"{len(statements.cash_flows)} cash flow records and {len(statements.prices)} prices"
    )
    return statements


def _read_csv_records(path: Path) -> List[Dict[str, Any]]:
    try:
        df = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise StatementLoadError(f"Failed to read {path}: {e}") from e
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def load_company_statements(
    source: Union[str, Path], default_period_type: Optional[Union[PeriodType, str]] = None
) -> CompanyStatements:
    """
    Load statements from a JSON file or a directory of CSV files.

    Args:
        source: Path to a .json file or a directory
        default_period_type: Period type for records that do not carry one

    Raises:
        StatementLoadError: If the source is missing, unreadable or malformed
    """
    path = Path(source)
    if not path.exists():
        raise StatementLoadError(f"Statement source not found: {path}")

    if path.is_dir():
        payload: Dict[str, Any] = {}
        company_file = path / "company.json"
        if company_file.exists():
            payload["company"] = _read_json(company_file)
        for key, filename in CSV_FILES.items():
            csv_path = path / filename
            if csv_path.exists():
                payload[key] = _read_csv_records(csv_path)
        if not payload.get("income_statements"):
            logger.warning(f"No income statements found in {path}")
        return statements_from_payload(payload, default_period_type)

    return statements_from_payload(_read_json(path), default_period_type)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StatementLoadError(f"Failed to read {path}: {e}") from e
