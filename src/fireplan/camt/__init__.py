"""
CAMT.053 Statement Import

Parses ISO 20022 bank-to-customer statements into accounts and
transactions.

Key Components:
- CamtParser: all-or-nothing statement parser
- ParsedStatement: account, transactions and statement metadata
- PlainAmount / AnnotatedAmount: the two <Amt> encodings seen on the wire
"""

from .models import AnnotatedAmount, EncodedAmount, ParsedStatement, PlainAmount
from .parser import CamtParser, decode_amount, extract_merchant

__all__ = [
    "AnnotatedAmount",
    "CamtParser",
    "EncodedAmount",
    "ParsedStatement",
    "PlainAmount",
    "decode_amount",
    "extract_merchant",
]
