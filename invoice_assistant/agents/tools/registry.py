"""
Invoice Tool Registry

A fixed catalog of named invoice operations. Each tool validates its
arguments against its parameter schema before the handler runs; a handler is
never called with arguments that failed validation.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Type

from pydantic import BaseModel, ValidationError

from invoice_assistant.agents.tools.schemas import (
    ANALYZE_INVOICES_PARAMETERS,
    GET_INVOICE_PARAMETERS,
    LIST_INVOICES_PARAMETERS,
    SUMMARIZE_INVOICE_PARAMETERS,
    AnalyzeInvoicesArgs,
    InvoiceIdArgs,
    NoArgs,
)
from invoice_assistant.agents.tools.types import AmountsData, AnalysisResult, InvoiceSummary
from invoice_assistant.schemas.invoices import Invoice
from invoice_assistant.services.errors import ToolValidationError, UnknownToolError
from invoice_assistant.services.invoice_repository import InvoiceRepository
from invoice_assistant.utils.formatting import format_currency, format_display_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-validated invoice operation."""
    name: str
    description: str
    parameters: Dict[str, Any]
    args_model: Type[BaseModel]
    handler: Callable[[Any], Awaitable[Any]]

    def validate(self, args: Any) -> BaseModel:
        """
        Validate raw arguments against the tool's parameter schema.

        Raises:
            ToolValidationError: if required parameters are missing or mistyped
        """
        try:
            return self.args_model.model_validate({} if args is None else args)
        except ValidationError as e:
            raise ToolValidationError(
                self.name,
                e.errors(include_url=False, include_context=False),
            ) from e

    async def run(self, args: Any) -> Any:
        validated = self.validate(args)
        return await self.handler(validated)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


def summarize(invoice: Invoice) -> InvoiceSummary:
    """Build the display summary of one invoice."""
    return {
        "summary": f"Invoice #{invoice.doc_number} for {invoice.customer_name}",
        "details": {
            "amount": format_currency(invoice.total_amount),
            "date": format_display_date(invoice.transaction_date),
            "dueDate": format_display_date(invoice.due_date),
            "balance": format_currency(invoice.balance),
            "memo": invoice.memo or "No memo",
        },
    }


def analyze(invoices: List[Invoice], analysis_type: str) -> AnalysisResult:
    """
    Aggregate invoice totals.

    trends   -> display transaction date -> summed total
    customer -> customer name -> summed total
    amounts  -> total, average and count (average is None with no invoices)
    """
    if analysis_type == "amounts":
        total = sum(invoice.total_amount for invoice in invoices)
        count = len(invoices)
        amounts: AmountsData = {
            "total": total,
            "average": total / count if count else None,
            "count": count,
        }
        return {"type": "amounts", "data": amounts}

    grouped: Dict[str, float] = defaultdict(float)
    for invoice in invoices:
        if analysis_type == "trends":
            key = format_display_date(invoice.transaction_date)
        else:
            key = invoice.customer_name
        grouped[key] += invoice.total_amount

    return {"type": analysis_type, "data": dict(grouped)}  # type: ignore[typeddict-item]


class ToolRegistry:
    """Name -> ToolDescriptor catalog."""

    def __init__(self, tools: List[ToolDescriptor]):
        self._tools: Dict[str, ToolDescriptor] = {tool.name: tool for tool in tools}

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def describe(self) -> List[Dict[str, Any]]:
        return [tool.describe() for tool in self._tools.values()]

    async def execute(self, name: str, args: Any = None) -> Any:
        """
        Validate arguments and run a tool.

        Raises:
            UnknownToolError: no tool named ``name``
            ToolValidationError: arguments failed validation (handler not called)
        """
        tool = self.get(name)
        logger.info(f"Executing tool {name}")
        return await tool.run(args)


def build_invoice_tools(repository: InvoiceRepository) -> ToolRegistry:
    """Build the four invoice tools bound to a repository."""

    async def get_invoice(args: InvoiceIdArgs) -> Invoice:
        return await repository.get_invoice(args.id)

    async def list_invoices(args: NoArgs) -> List[Invoice]:
        return await repository.list_invoices()

    async def summarize_invoice(args: InvoiceIdArgs) -> InvoiceSummary:
        invoice = await repository.get_invoice(args.id)
        return summarize(invoice)

    async def analyze_invoices(args: AnalyzeInvoicesArgs) -> AnalysisResult:
        invoices = await repository.list_invoices()
        return analyze(invoices, args.analysis_type)

    return ToolRegistry([
        ToolDescriptor(
            name="getInvoice",
            description="Get details of a specific invoice by ID",
            parameters=GET_INVOICE_PARAMETERS,
            args_model=InvoiceIdArgs,
            handler=get_invoice,
        ),
        ToolDescriptor(
            name="listInvoices",
            description="List all invoices",
            parameters=LIST_INVOICES_PARAMETERS,
            args_model=NoArgs,
            handler=list_invoices,
        ),
        ToolDescriptor(
            name="summarizeInvoice",
            description="Get a natural language summary of an invoice",
            parameters=SUMMARIZE_INVOICE_PARAMETERS,
            args_model=InvoiceIdArgs,
            handler=summarize_invoice,
        ),
        ToolDescriptor(
            name="analyzeInvoices",
            description="Perform analysis of invoices",
            parameters=ANALYZE_INVOICES_PARAMETERS,
            args_model=AnalyzeInvoicesArgs,
            handler=analyze_invoices,
        ),
    ])
