"""
Invoice use cases for the application layer.
Implements business logic for invoicing and billing operations.
"""

import logging
from typing import List, Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase
from agency_api.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceStatusRequestDTO,
    ReportPaymentRequestDTO,
    InvoiceResponseDTO,
    InvoiceSummaryResponseDTO,
)
from agency_api.domain.events.base import EventDispatcher
from agency_api.domain.events.invoice_events import (
    InvoiceCreated,
    InvoiceStatusChanged,
    PaymentReported,
)
from agency_api.domain.models.base import (
    AuthorizationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    Priority,
    UserRole,
    utcnow,
)
from agency_api.domain.models.invoice import Invoice, InvoiceStatus
from agency_api.domain.models.notification import NotificationPayload, NotificationType
from agency_api.domain.models.project import Project
from agency_api.domain.models.user import User
from agency_api.domain.repositories.invoice_repository import InvoiceRepository
from agency_api.domain.repositories.notification_repository import NotificationRepository
from agency_api.domain.repositories.project_repository import ProjectRepository
from agency_api.domain.repositories.user_repository import UserRepository
from agency_api.domain.services.billing_service import BillingService
from agency_api.domain.services.numbering_service import NumberingService


logger = logging.getLogger(__name__)


def _describe_payment_method(method: Optional[str]) -> str:
    if not method:
        return "Payment method not specified"
    return method.replace("_", " ").upper()


class _InvoiceUseCase(AuthorizedUseCase):
    """Shared lookups for invoice use cases."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        super().__init__(dispatcher)
        self.invoice_repository = invoice_repository
        self.project_repository = project_repository
        self.user_repository = user_repository

    def _get_invoice(self, invoice_id: str) -> Invoice:
        return self._require_found(
            self.invoice_repository.get_by_id(invoice_id), "Invoice", invoice_id
        )

    def _project_title(self, project_id: str) -> str:
        return self.project_repository.get_titles([project_id]).get(project_id, "")

    def _client(self, client_id: str) -> Optional[User]:
        return self.user_repository.get_by_id(client_id)

    def _to_response(self, invoice: Invoice) -> InvoiceResponseDTO:
        return InvoiceResponseDTO.from_domain(invoice, self._project_title(invoice.project_id))


class CreateInvoiceUseCase(_InvoiceUseCase):
    """Use case for creating a new invoice."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        dispatcher: Optional[EventDispatcher] = None,
        numbering_service: Optional[NumberingService] = None,
    ):
        super().__init__(invoice_repository, project_repository, user_repository, dispatcher)
        self.notification_repository = notification_repository
        self.numbering_service = numbering_service or NumberingService()

    async def execute(self, user: User, request: CreateInvoiceRequestDTO) -> InvoiceResponseDTO:
        self._require_admin(user)

        project: Project = self._require_found(
            self.project_repository.get_by_id(request.project_id), "Project", request.project_id
        )
        client = self._require_found(self._client(project.client_id), "Client", project.client_id)

        invoice = Invoice.create(
            client_id=client.id,
            project_id=project.id,
            amount=request.amount,
            due_date=request.due_date,
            description=request.description,
            items=[item.to_domain() for item in request.items or []],
            tax_rate=request.tax_rate,
            notes=request.notes,
        )
        number = self.numbering_service.next_invoice_number(self.invoice_repository.count())
        invoice.invoice_number = str(number)

        saved = self.invoice_repository.save(invoice)
        logger.info(f"Invoice {saved.invoice_number} created for client {client.id}")

        self._notify_client(user, client, project, saved)

        self._publish(InvoiceCreated(
            invoice=saved.to_dict(),
            client_name=client.name,
            client_email=client.email,
            project_title=project.title,
        ))

        return InvoiceResponseDTO.from_domain(saved, project.title)

    def _notify_client(self, admin: User, client: User, project: Project, invoice: Invoice) -> None:
        payload = NotificationPayload(
            title="New Invoice Created",
            message=(
                f"New invoice #{invoice.invoice_number} has been created for your project "
                f"\"{project.title}\" - Amount: ${invoice.total:,.2f}"
            ),
            type=NotificationType.PAYMENT,
            priority=Priority.MEDIUM,
            sender_id=admin.id,
            action_url="/billing",
            action_text="View Invoice",
            related_project_id=project.id,
            related_invoice_id=invoice.id,
            metadata={
                "invoiceNumber": invoice.invoice_number,
                "amount": invoice.total,
                "dueDate": invoice.due_date.isoformat(),
                "projectTitle": project.title,
            },
        )
        try:
            self.notification_repository.save_isolated([payload.for_recipient(client.id)])
        except Exception as e:
            logger.error(f"Error creating invoice notification for client {client.id}: {str(e)}")


class UpdateInvoiceStatusUseCase(_InvoiceUseCase):
    """
    Move an invoice to any status.
    Emails for `sent` and `paid` are sent by the event handlers.
    """

    async def execute(
        self,
        user: User,
        invoice_id: str,
        request: UpdateInvoiceStatusRequestDTO,
    ) -> InvoiceResponseDTO:
        self._require_admin(user)
        invoice = self._get_invoice(invoice_id)

        old_status = invoice.status
        invoice.change_status(InvoiceStatus(request.status), request.payment_method)
        saved = self.invoice_repository.save(invoice)
        logger.info(f"Invoice {saved.invoice_number} moved from {old_status.value} to {saved.status.value}")

        response = self._to_response(saved)
        client = self._client(saved.client_id)
        if client:
            self._publish(InvoiceStatusChanged(
                invoice=saved.to_dict(),
                old_status=old_status.value,
                new_status=saved.status.value,
                client_name=client.name,
                client_email=client.email,
                project_title=response.project_title or "",
            ))
        else:
            logger.warning(f"Client {saved.client_id} of invoice {saved.invoice_number} no longer exists")
        return response


class ReportPaymentUseCase(_InvoiceUseCase):
    """
    A client declares an invoice paid; admins verify it later.
    The invoice status is left unchanged.
    """

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        super().__init__(invoice_repository, project_repository, user_repository, dispatcher)
        self.notification_repository = notification_repository

    async def execute(
        self,
        user: User,
        invoice_id: str,
        request: ReportPaymentRequestDTO,
    ) -> InvoiceResponseDTO:
        invoice = self._get_invoice(invoice_id)
        self._require_invoice_client(user, invoice)

        if not invoice.can_report_payment():
            raise BusinessRuleViolation(
                "Payment can only be reported for sent or overdue invoices"
            )

        payment_date = request.payment_date or utcnow()
        payment = {
            "payment_method": request.payment_method,
            "transaction_id": request.transaction_id,
            "payment_date": payment_date.isoformat(),
            "reported_amount": invoice.total,
            "notes": request.notes,
        }

        response = self._to_response(invoice)
        project_title = response.project_title or ""

        self._publish(PaymentReported(
            invoice=invoice.to_dict(),
            client_name=user.name,
            client_email=user.email,
            project_title=project_title,
            payment=payment,
        ))
        self._notify_admins(user, invoice, payment)

        logger.info(f"Payment reported by {user.id} for invoice {invoice.invoice_number}")
        return response

    @staticmethod
    def _require_invoice_client(user: User, invoice: Invoice) -> None:
        # Admins record payments through the status update instead
        if user.id != invoice.client_id:
            raise AuthorizationError("Access denied")

    def _notify_admins(self, client: User, invoice: Invoice, payment: dict) -> None:
        payload = NotificationPayload(
            title="Payment Reported",
            message=(
                f"{client.name} has reported payment for invoice #{invoice.invoice_number} "
                f"({_describe_payment_method(payment['payment_method'])} - ${invoice.total:,.2f})"
            ),
            type=NotificationType.PAYMENT,
            priority=Priority.HIGH,
            sender_id=client.id,
            action_url="/admin-billing",
            action_text="Verify Payment",
            related_project_id=invoice.project_id,
            related_invoice_id=invoice.id,
            metadata={
                "paymentMethod": payment["payment_method"],
                "transactionId": payment["transaction_id"],
                "paymentDate": payment["payment_date"],
                "reportedAmount": payment["reported_amount"],
                "notes": payment["notes"],
            },
        )
        try:
            admins = self.user_repository.list_by_role(UserRole.ADMIN)
            self.notification_repository.save_isolated(
                [payload.for_recipient(admin.id) for admin in admins]
            )
        except Exception as e:
            logger.error(f"Error creating payment report notification: {str(e)}")


class DeleteInvoiceUseCase(_InvoiceUseCase):

    async def execute(self, user: User, invoice_id: str) -> None:
        self._require_admin(user)
        if not self.invoice_repository.delete(invoice_id):
            raise EntityNotFoundError("Invoice", invoice_id)
        logger.info(f"Invoice {invoice_id} deleted by {user.id}")


class GetInvoiceUseCase(_InvoiceUseCase):

    async def execute(self, user: User, invoice_id: str) -> InvoiceResponseDTO:
        invoice = self._get_invoice(invoice_id)
        self._require_owner_or_admin(user, invoice.client_id)
        return self._to_response(invoice)


class ListInvoicesUseCase(_InvoiceUseCase):
    """List invoices visible to the user, newest first."""

    async def execute(
        self,
        user: User,
        status: Optional[InvoiceStatus] = None,
        search: Optional[str] = None,
    ) -> List[InvoiceResponseDTO]:
        invoices = self.invoice_repository.list(
            client_id=self._scope_client_id(user),
            status=status,
            search=search.strip() if search and search.strip() else None,
        )
        titles = self.project_repository.get_titles(
            list({invoice.project_id for invoice in invoices})
        )
        return [
            InvoiceResponseDTO.from_domain(invoice, titles.get(invoice.project_id))
            for invoice in invoices
        ]


class GetInvoiceSummaryUseCase(_InvoiceUseCase):
    """Billing figures over the invoices visible to the user."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        billing_service: Optional[BillingService] = None,
    ):
        super().__init__(invoice_repository, project_repository, user_repository)
        self.billing_service = billing_service or BillingService()

    async def execute(self, user: User) -> InvoiceSummaryResponseDTO:
        invoices = self.invoice_repository.list(client_id=self._scope_client_id(user))
        return InvoiceSummaryResponseDTO(**self.billing_service.summarize(invoices))
