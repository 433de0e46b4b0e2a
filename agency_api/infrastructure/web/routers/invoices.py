"""
Invoice management router.
Handles invoice creation, status changes, payment reports and billing summaries.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoiceSummaryResponseDTO,
    ReportPaymentRequestDTO,
    UpdateInvoiceStatusRequestDTO,
)
from agency_api.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    GetInvoiceSummaryUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    ReportPaymentUseCase,
    UpdateInvoiceStatusUseCase,
)
from agency_api.domain.models.invoice import InvoiceStatus
from agency_api.infrastructure.auth import AdminUser, CurrentUser
from agency_api.infrastructure.web.dependencies import (
    Dispatcher,
    InvoiceRepo,
    NotificationRepo,
    ProjectRepo,
    UserRepo,
    parse_filter,
)


router = APIRouter()

STATUS_MESSAGES = {
    InvoiceStatus.SENT: "Invoice status updated and notification sent!",
    InvoiceStatus.PAID: "Invoice marked as paid and confirmation sent!",
}


@router.get("", response_model=ApiResponse[List[InvoiceResponseDTO]])
async def list_invoices(
    user: CurrentUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by invoice status"),
    search: Optional[str] = Query(None, description="Invoice number, project title or description"),
):
    """
    List invoices. Clients only see their own.

    - **status**: draft, sent, paid, overdue, cancelled or all
    - **search**: case-insensitive match on number, project title or description
    """
    use_case = ListInvoicesUseCase(invoices, projects, users)
    data = await use_case.execute(user, parse_filter(InvoiceStatus, status_filter, "status"), search)
    return ApiResponse(data=data)


@router.get("/summary", response_model=ApiResponse[InvoiceSummaryResponseDTO])
async def invoice_summary(user: CurrentUser, invoices: InvoiceRepo, projects: ProjectRepo, users: UserRepo):
    """Totals for paid, pending and overdue invoices visible to the user."""
    use_case = GetInvoiceSummaryUseCase(invoices, projects, users)
    return ApiResponse(data=await use_case.execute(user))


@router.get("/{invoice_id}", response_model=ApiResponse[InvoiceResponseDTO])
async def get_invoice(
    invoice_id: str,
    user: CurrentUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
):
    use_case = GetInvoiceUseCase(invoices, projects, users)
    return ApiResponse(data=await use_case.execute(user, invoice_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[InvoiceResponseDTO])
async def create_invoice(
    request: CreateInvoiceRequestDTO,
    user: AdminUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
    notifications: NotificationRepo,
    dispatcher: Dispatcher,
):
    """
    Create a new invoice for a project's client.

    - **project_id**: Project being invoiced (required)
    - **amount**: Invoice amount (required)
    - **due_date**: Payment due date (required)
    - **description**: What the invoice covers (required)
    - **items**: Line items (default: one item for the whole amount)
    - **tax_rate**: Tax percentage (default: 0)
    """
    use_case = CreateInvoiceUseCase(invoices, projects, users, notifications, dispatcher)
    invoice = await use_case.execute(user, request)
    return ApiResponse(message="Invoice created successfully and notification sent!", data=invoice)


@router.put("/{invoice_id}/status", response_model=ApiResponse[InvoiceResponseDTO])
async def update_invoice_status(
    invoice_id: str,
    request: UpdateInvoiceStatusRequestDTO,
    user: AdminUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
    dispatcher: Dispatcher,
):
    use_case = UpdateInvoiceStatusUseCase(invoices, projects, users, dispatcher)
    invoice = await use_case.execute(user, invoice_id, request)
    message = STATUS_MESSAGES.get(InvoiceStatus(invoice.status), "Invoice status updated successfully")
    return ApiResponse(message=message, data=invoice)


@router.post("/{invoice_id}/report-payment", response_model=ApiResponse[InvoiceResponseDTO])
async def report_payment(
    invoice_id: str,
    request: ReportPaymentRequestDTO,
    user: CurrentUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
    notifications: NotificationRepo,
    dispatcher: Dispatcher,
):
    """
    Report that a sent or overdue invoice has been paid.
    Only the invoiced client may report; the status stays unchanged until an admin verifies.
    """
    use_case = ReportPaymentUseCase(invoices, projects, users, notifications, dispatcher)
    invoice = await use_case.execute(user, invoice_id, request)
    return ApiResponse(
        message="Payment report submitted successfully! Admin has been notified and will verify the payment.",
        data=invoice,
    )


@router.delete("/{invoice_id}", response_model=ApiResponse[None])
async def delete_invoice(
    invoice_id: str,
    user: AdminUser,
    invoices: InvoiceRepo,
    projects: ProjectRepo,
    users: UserRepo,
):
    await DeleteInvoiceUseCase(invoices, projects, users).execute(user, invoice_id)
    return ApiResponse(message="Invoice deleted successfully")
