#!/usr/bin/env python3
"""
CAMT.053 Statement Parser

Parses ISO 20022 bank-to-customer statements into an Account and its
Transactions. Works on any camt.053.001.xx namespace version by matching
local element names, and only ever walks direct children so that nested
<Id> or <Nm> elements from other parts of the tree are never picked up.

Parsing is all-or-nothing: a missing required element or an amount that
cannot be read fails the whole file with MalformedDocumentError.
"""

import logging
import re
from pathlib import Path

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from ..core.currency import to_cents
from ..core.dates import FinancialDate
from ..core.errors import CurrencyError, MalformedDocumentError
from ..core.models import Account, Transaction
from ..core.money import DEFAULT_CURRENCY, Money
from .models import AnnotatedAmount, EncodedAmount, ParsedStatement, PlainAmount

logger = logging.getLogger(__name__)

CLOSING_BALANCE_CODES = ("CLBD", "CLAV")
OPENING_BALANCE_CODES = ("OPBD", "PRCD")

CREDIT = "CRDT"
DEBIT = "DBIT"

DEFAULT_DESCRIPTION = "Transaction"
MERCHANT_MAX_CHARS = 50

# Tried in order against the description when no counterparty name exists
MERCHANT_PATTERNS = [
    re.compile(r"CARD\s+\d+\s+(.+?)(?:\s+\d{2}/\d{2})?$", re.IGNORECASE),
    re.compile(r"POS\s+(.+?)(?:\s+\d{2}/\d{2})?$", re.IGNORECASE),
    re.compile(r"(.+?)\s+\d{2}/\d{2}/\d{4}$", re.IGNORECASE),
]

# Banks fill EndToEndId with this placeholder when the payer gave none
NOT_PROVIDED = "NOTPROVIDED"

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _child(tag: Tag | None, *path: str) -> Tag | None:
    """Walk direct children by local name; None as soon as a step is missing."""
    current = tag
    for name in path:
        if current is None:
            return None
        current = current.find(name, recursive=False)
    return current


def _text(tag: Tag | None) -> str | None:
    """Stripped element text, or None for a missing or empty element."""
    if tag is None:
        return None
    text = tag.get_text(strip=True)
    return text or None


def _first_text(tag: Tag | None, *paths: tuple[str, ...]) -> str | None:
    """Text of the first path that yields a non-empty value."""
    for path in paths:
        value = _text(_child(tag, *path))
        if value:
            return value
    return None


def _require_text(tag: Tag | None, path: tuple[str, ...], what: str) -> str:
    value = _text(_child(tag, *path))
    if value is None:
        raise MalformedDocumentError(f"Missing required element {'/'.join(path)} ({what})")
    return value


def _mask_iban(iban: str) -> str:
    return f"****{iban[-4:]}" if len(iban) > 4 else "****"


def decode_amount(tag: Tag) -> EncodedAmount:
    """Classify an <Amt> element as plain or currency-annotated."""
    text = tag.get_text(strip=True)
    currency = tag.get("Ccy")
    if isinstance(currency, str) and currency.strip():
        return AnnotatedAmount(text=text, currency=currency.strip().upper())
    return PlainAmount(text=text)


def amount_to_money(amount: EncodedAmount, default_currency: str, context: str) -> Money:
    """
    Convert a decoded amount to unsigned Money.

    Raises:
        MalformedDocumentError: If the decimal text cannot be parsed
    """
    currency = amount.currency if isinstance(amount, AnnotatedAmount) else default_currency
    try:
        cents = to_cents(amount.text)
    except CurrencyError as e:
        raise MalformedDocumentError(f"Unparseable amount {amount.text!r} in {context}: {e}") from e
    return Money.from_cents(cents, currency)


def apply_indicator(amount: Money, indicator: str, context: str) -> Money:
    """Sign an amount by its CdtDbtInd: DBIT is negative, CRDT positive."""
    if indicator == DEBIT:
        return -amount.abs()
    if indicator == CREDIT:
        return amount.abs()
    raise MalformedDocumentError(f"Unknown credit/debit indicator {indicator!r} in {context}")


def extract_merchant(description: str, counterparty_name: str | None) -> str:
    """
    Derive a merchant label.

    Prefers the counterparty name, then the card/POS/dated patterns in the
    description, then the first 50 characters of the description.
    """
    if counterparty_name and counterparty_name.strip():
        return counterparty_name.strip()

    for pattern in MERCHANT_PATTERNS:
        match = pattern.search(description)
        if match and match.group(1):
            return match.group(1).strip()

    return description[:MERCHANT_MAX_CHARS].strip()


class CamtParser:
    """
    Parser for CAMT.053 bank statements.

    Stateless; one instance can parse any number of files, from any thread.
    """

    def parse_file(self, path: str | Path) -> ParsedStatement:
        """Read and parse a CAMT.053 file from disk."""
        with open(path, "rb") as f:
            return self.parse(f.read())

    def parse(self, xml: str | bytes) -> ParsedStatement:
        """
        Parse one CAMT.053 document.

        Args:
            xml: Document text or raw bytes

        Returns:
            ParsedStatement with the account and every entry

        Raises:
            MalformedDocumentError: Wrapping the first problem found
        """
        try:
            return self._parse_document(xml)
        except (MalformedDocumentError, ParserRejectedMarkup, ValueError) as e:
            raise MalformedDocumentError(f"Failed to parse CAMT.053 file: {e}") from e

    def _parse_document(self, xml: str | bytes) -> ParsedStatement:
        if isinstance(xml, str):
            # The text is already decoded, so any declared encoding no longer applies
            xml = _XML_DECLARATION.sub("", xml, count=1).encode("utf-8")

        soup = BeautifulSoup(xml, "xml")
        statement = _child(soup, "Document", "BkToCstmrStmt", "Stmt")
        if statement is None:
            raise MalformedDocumentError("Invalid CAMT.053 format: missing Document/BkToCstmrStmt/Stmt")

        statement_id = _require_text(statement, ("Id",), "statement id")
        account = self._parse_account(statement)
        opening_balance = self._parse_balance(statement, OPENING_BALANCE_CODES, account.currency)

        transactions = [
            self._parse_entry(entry, index, statement_id, account)
            for index, entry in enumerate(statement.find_all("Ntry", recursive=False), start=1)
        ]

        logger.info(
            f"Parsed statement {statement_id} for account {_mask_iban(account.iban)}: "
            f"{len(transactions)} entries, closing balance {account.balance.to_decimal_str()}"
        )

        return ParsedStatement(
            statement_id=statement_id,
            account=account,
            transactions=transactions,
            opening_balance=opening_balance,
            created_at=_text(_child(statement, "CreDtTm")),
        )

    def _parse_account(self, statement: Tag) -> Account:
        account_tag = _child(statement, "Acct")
        if account_tag is None:
            raise MalformedDocumentError("Missing required element Acct")

        iban = _require_text(account_tag, ("Id", "IBAN"), "account IBAN")
        currency = _text(_child(account_tag, "Ccy")) or DEFAULT_CURRENCY
        institution = _child(account_tag, "Svcr", "FinInstnId")

        closing = self._parse_balance(statement, CLOSING_BALANCE_CODES, currency)
        if closing is None:
            logger.warning(f"No closing balance (CLBD/CLAV) for account {_mask_iban(iban)}, using 0.00")
            closing = Money.zero(currency)

        return Account(
            iban=iban.replace(" ", ""),
            bic=_first_text(institution, ("BIC",), ("BICFI",)),
            account_holder_name=_first_text(account_tag, ("Ownr", "Nm")) or "Unknown",
            bank_name=_first_text(institution, ("Nm",)) or "Unknown Bank",
            account_type="checking",
            balance=closing,
            currency=currency,
            is_active=True,
        )

    def _parse_balance(self, statement: Tag, codes: tuple[str, ...], currency: str) -> Money | None:
        """Signed balance for the first code in preference order that is present."""
        balances = statement.find_all("Bal", recursive=False)
        by_code: dict[str, Tag] = {}
        for balance in balances:
            code = _text(_child(balance, "Tp", "CdOrPrtry", "Cd"))
            if code and code not in by_code:
                by_code[code] = balance

        for code in codes:
            balance = by_code.get(code)
            if balance is None:
                continue
            context = f"balance {code}"
            amount_tag = _child(balance, "Amt")
            if amount_tag is None:
                raise MalformedDocumentError(f"Missing required element Amt in {context}")
            amount = amount_to_money(decode_amount(amount_tag), currency, context)
            indicator = _require_text(balance, ("CdtDbtInd",), context)
            signed = apply_indicator(amount, indicator, context)
            logger.debug(f"Using {code} balance {signed.to_decimal_str()} {signed.currency}")
            return signed

        return None

    def _parse_entry(self, entry: Tag, index: int, statement_id: str, account: Account) -> Transaction:
        context = f"entry {index}"

        amount_tag = _child(entry, "Amt")
        if amount_tag is None:
            raise MalformedDocumentError(f"Missing required element Amt in {context}")
        indicator = _require_text(entry, ("CdtDbtInd",), context)
        amount = apply_indicator(
            amount_to_money(decode_amount(amount_tag), account.currency, context), indicator, context
        )

        booking_text = _first_text(entry, ("BookgDt", "Dt"), ("BookgDt", "DtTm"))
        if booking_text is None:
            raise MalformedDocumentError(f"Missing required element BookgDt/Dt in {context}")
        value_text = _first_text(entry, ("ValDt", "Dt"), ("ValDt", "DtTm")) or booking_text
        value_date = FinancialDate.from_iso_datetime(value_text)
        booking_date = FinancialDate.from_iso_datetime(booking_text)

        details = _child(entry, "NtryDtls", "TxDtls")
        description = self._description(entry, details)
        counterparty_name, counterparty_iban = self._counterparty(details, indicator)

        return Transaction(
            account_iban=account.iban,
            date=value_date,
            booking_date=booking_date,
            amount=amount,
            description=description,
            merchant=extract_merchant(description, counterparty_name),
            counterparty_name=counterparty_name,
            counterparty_iban=counterparty_iban,
            reference=self._reference(entry, details),
            statement_id=statement_id,
        )

    def _description(self, entry: Tag, details: Tag | None) -> str:
        remittance = _child(details, "RmtInf")
        if remittance is not None:
            lines = [_text(line) for line in remittance.find_all("Ustrd", recursive=False)]
            unstructured = " ".join(line for line in lines if line)
            if unstructured:
                return unstructured

        return (
            _first_text(details, ("AddtlTxInf",))
            or _first_text(entry, ("AddtlNtryInf",))
            or DEFAULT_DESCRIPTION
        )

    def _counterparty(self, details: Tag | None, indicator: str) -> tuple[str | None, str | None]:
        """
        The other side of the payment.

        A credit was paid to us by the debtor; a debit was paid by us to the
        creditor.
        """
        parties = _child(details, "RltdPties")
        if parties is None:
            return None, None

        party, party_account = ("Dbtr", "DbtrAcct") if indicator == CREDIT else ("Cdtr", "CdtrAcct")
        name = _first_text(parties, (party, "Nm"), (party, "Pty", "Nm"))
        iban = _first_text(parties, (party_account, "Id", "IBAN"))
        return name, iban.replace(" ", "") if iban else None

    def _reference(self, entry: Tag, details: Tag | None) -> str | None:
        creditor_reference = _first_text(details, ("RmtInf", "Strd", "CdtrRefInf", "Ref"))
        if creditor_reference:
            return creditor_reference

        end_to_end = _first_text(details, ("Refs", "EndToEndId"))
        if end_to_end and end_to_end.upper() != NOT_PROVIDED:
            return end_to_end

        return _first_text(entry, ("AcctSvcrRef",))
