"""
Intent matching for chat messages.

Intents are an ordered list of rules evaluated top-down on the lowercased
message; the first rule whose predicate matches wins. Classification is pure
and performs no I/O.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional


class Intent(str, Enum):
    GREETING = "greeting"
    GET_INVOICE = "get_invoice"
    SUMMARIZE_INVOICE = "summarize_invoice"
    LIST_INVOICES = "list_invoices"
    HELP = "help"


GREETING_PATTERN = re.compile(r"^(hi|hello|hey|greetings|good (morning|afternoon|evening))$", re.IGNORECASE)
GET_INVOICE_PATTERN = re.compile(r"(?:show|get)(?:\s+me)?(?:\s+invoice)?\s+#?(?:inv-)?(\d+)", re.IGNORECASE)
SUMMARIZE_INVOICE_PATTERN = re.compile(r"summarize(?:\s+invoice)?\s+#?(?:inv-)?(\d+)", re.IGNORECASE)


def _extract_with(pattern: re.Pattern) -> Callable[[str], Optional[str]]:
    def extract(message: str) -> Optional[str]:
        match = pattern.search(message)
        return match.group(1) if match else None
    return extract


@dataclass(frozen=True)
class IntentRule:
    """predicate decides the intent; extractor pulls the invoice number, if any."""
    intent: Intent
    predicate: Callable[[str], bool]
    extractor: Optional[Callable[[str], Optional[str]]] = None


@dataclass(frozen=True)
class IntentMatch:
    intent: Intent
    ref: Optional[str] = None


INTENT_RULES: List[IntentRule] = [
    IntentRule(
        intent=Intent.GREETING,
        predicate=lambda message: GREETING_PATTERN.match(message) is not None,
    ),
    IntentRule(
        intent=Intent.GET_INVOICE,
        predicate=lambda message: "show me invoice" in message or "get invoice" in message,
        extractor=_extract_with(GET_INVOICE_PATTERN),
    ),
    IntentRule(
        intent=Intent.SUMMARIZE_INVOICE,
        predicate=lambda message: "summarize invoice" in message,
        extractor=_extract_with(SUMMARIZE_INVOICE_PATTERN),
    ),
    IntentRule(
        intent=Intent.LIST_INVOICES,
        predicate=lambda message: "list all invoices" in message or "show all invoices" in message,
    ),
]


def classify_message(message: str, rules: Optional[List[IntentRule]] = None) -> IntentMatch:
    """
    Classify a chat message into an intent.

    Args:
        message: Raw user message
        rules: Ordered rules (defaults to INTENT_RULES)

    Returns:
        The first matching rule's intent with its extracted invoice number,
        or Intent.HELP when nothing matches.
    """
    normalized = message.lower().strip()
    for rule in INTENT_RULES if rules is None else rules:
        if rule.predicate(normalized):
            ref = rule.extractor(normalized) if rule.extractor else None
            return IntentMatch(intent=rule.intent, ref=ref)
    return IntentMatch(intent=Intent.HELP)
