"""
Email service for sending workflow notifications.
Handles SMTP connections, template rendering, and delivery.
"""

import asyncio
import re
import smtplib
import logging
from typing import List, Dict, Any, Optional, Union
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from dataclasses import dataclass
from datetime import datetime

from agency_api.config import Settings
from .template_loader import EmailTemplateLoader


logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    """Email message data."""
    to: Union[str, List[str]]
    subject: str
    template: str
    context: Dict[str, Any]
    priority: str = "normal"  # high, normal, low


class EmailService:
    """
    Service for sending notification emails.

    When SMTP credentials are missing, messages are rendered, logged and
    kept in `sent_emails` instead of being delivered.
    """

    def __init__(self, settings: Settings, template_loader: Optional[EmailTemplateLoader] = None):
        """Initialize email service with SMTP configuration."""
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_name = settings.email_from_name
        self.from_address = settings.email_from_address
        self.admin_mailbox = settings.admin_mailbox
        self.frontend_url = (settings.frontend_url or "").rstrip("/")
        self.template_loader = template_loader or EmailTemplateLoader(app_name=self.from_name)
        self.sent_emails: List[Dict[str, Any]] = []

    async def send_email(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Send an email message.

        Returns:
            Result dictionary with success status and details
        """
        try:
            if not self._is_smtp_configured():
                logger.warning("SMTP not configured, email will be logged instead")
                return await self._log_email(message)

            html_content, text_content = await self._render_template(
                message.template,
                message.context
            )

            mime_message = self._create_mime_message(
                message=message,
                html_content=html_content,
                text_content=text_content
            )

            result = await asyncio.to_thread(self._send_via_smtp, mime_message, message)

            logger.info(f"Email sent successfully to {message.to}: {message.subject}")

            return result

        except Exception as e:
            logger.error(f"Failed to send email to {message.to}: {str(e)}")
            return {
                "success": False,
                "error": str(e),
                "timestamp": datetime.now().isoformat()
            }

    def _invoice_context(self, invoice: Dict[str, Any], **extra) -> Dict[str, Any]:
        return {
            "invoice": invoice,
            "company_name": self.from_name,
            "billing_url": f"{self.frontend_url}/billing",
            **extra,
        }

    async def send_invoice_created(
        self,
        client_email: str,
        client_name: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        """Tell the client a new invoice was raised."""
        return await self.send_email(EmailMessage(
            to=client_email,
            subject=f"New Invoice #{invoice['invoice_number']} - {self.from_name}",
            template="invoice_created",
            context=self._invoice_context(
                invoice, recipient_name=client_name, project_title=project_title
            ),
            priority="high",
        ))

    async def send_invoice_created_admin(
        self,
        client_name: str,
        client_email: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        return await self.send_email(EmailMessage(
            to=self.admin_mailbox,
            subject=f"New Invoice Created - #{invoice['invoice_number']}",
            template="invoice_admin",
            context=self._invoice_context(
                invoice,
                heading="New invoice created",
                client_name=client_name,
                client_email=client_email,
                project_title=project_title,
            ),
        ))

    async def send_invoice_sent(
        self,
        client_email: str,
        client_name: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        """Ask the client to pay an invoice that was just sent."""
        return await self.send_email(EmailMessage(
            to=client_email,
            subject=f"Invoice #{invoice['invoice_number']} Sent - Payment Required",
            template="invoice_sent",
            context=self._invoice_context(
                invoice, recipient_name=client_name, project_title=project_title
            ),
            priority="high",
        ))

    async def send_invoice_sent_admin(
        self,
        client_name: str,
        client_email: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        return await self.send_email(EmailMessage(
            to=self.admin_mailbox,
            subject=f"Invoice Sent - #{invoice['invoice_number']}",
            template="invoice_admin",
            context=self._invoice_context(
                invoice,
                heading="Invoice sent to client",
                client_name=client_name,
                client_email=client_email,
                project_title=project_title,
            ),
        ))

    async def send_payment_confirmed(
        self,
        client_email: str,
        client_name: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        """Confirm to the client that the invoice is paid."""
        return await self.send_email(EmailMessage(
            to=client_email,
            subject=f"Payment Confirmed - Invoice #{invoice['invoice_number']}",
            template="payment_confirmed",
            context=self._invoice_context(
                invoice, recipient_name=client_name, project_title=project_title
            ),
        ))

    async def send_payment_received_admin(
        self,
        client_name: str,
        client_email: str,
        invoice: Dict[str, Any],
        project_title: str,
    ) -> Dict[str, Any]:
        return await self.send_email(EmailMessage(
            to=self.admin_mailbox,
            subject=f"Payment Received - Invoice #{invoice['invoice_number']}",
            template="invoice_admin",
            context=self._invoice_context(
                invoice,
                heading="Payment received",
                client_name=client_name,
                client_email=client_email,
                project_title=project_title,
            ),
        ))

    async def send_payment_reported_admin(
        self,
        client_name: str,
        client_email: str,
        invoice: Dict[str, Any],
        project_title: str,
        payment: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Alert the admin mailbox that a client reported a payment."""
        return await self.send_email(EmailMessage(
            to=self.admin_mailbox,
            subject=f"Payment Reported by Client - Invoice #{invoice['invoice_number']}",
            template="payment_reported_admin",
            context=self._invoice_context(
                invoice,
                client_name=client_name,
                client_email=client_email,
                project_title=project_title,
                payment=payment,
            ),
            priority="high",
        ))

    async def send_notification_email(
        self,
        recipient_email: str,
        recipient_name: str,
        title: str,
        message: str,
        action_url: Optional[str] = None,
        announcement: bool = False,
    ) -> Dict[str, Any]:
        """Email copy of an in-app notification or broadcast."""
        prefix = "Announcement" if announcement else "Notification"
        link = action_url or "/notifications"
        if link.startswith("/"):
            link = f"{self.frontend_url}{link}"

        return await self.send_email(EmailMessage(
            to=recipient_email,
            subject=f"{prefix}: {title}",
            template="notification",
            context={
                "recipient_name": recipient_name,
                "title": title,
                "message": message,
                "action_url": link,
                "announcement": announcement,
            },
        ))

    async def send_meeting_confirmation(
        self,
        email: str,
        name: str,
        title: str,
        message: str,
    ) -> Dict[str, Any]:
        """Acknowledge a client's meeting request."""
        return await self.send_email(EmailMessage(
            to=email,
            subject=f"Meeting Request Confirmation - {self.from_name}",
            template="meeting_confirmation",
            context={
                "recipient_name": name,
                "title": title,
                "message": message,
                "company_name": self.from_name,
            },
        ))

    async def _render_template(
        self,
        template_name: str,
        context: Dict[str, Any]
    ) -> tuple:
        """Render email template with context."""
        html_content = await self.template_loader.render_template(
            f"{template_name}.html",
            context
        )

        if self.template_loader.template_exists(f"{template_name}.txt"):
            text_content = await self.template_loader.render_template(
                f"{template_name}.txt",
                context
            )
        else:
            text_content = re.sub(r'<[^>]+>', '', html_content)

        return html_content, text_content

    def _create_mime_message(
        self,
        message: EmailMessage,
        html_content: str,
        text_content: str
    ) -> MIMEMultipart:
        """Create MIME message from email data."""

        mime_msg = MIMEMultipart("alternative")

        mime_msg["Subject"] = message.subject
        mime_msg["From"] = f"{self.from_name} <{self.from_address}>"
        mime_msg["To"] = ", ".join(message.to) if isinstance(message.to, list) else message.to

        if message.priority == "high":
            mime_msg["X-Priority"] = "1"
        elif message.priority == "low":
            mime_msg["X-Priority"] = "5"

        mime_msg.attach(MIMEText(text_content, "plain", "utf-8"))
        mime_msg.attach(MIMEText(html_content, "html", "utf-8"))

        return mime_msg

    def _send_via_smtp(
        self,
        mime_message: MIMEMultipart,
        original_message: EmailMessage
    ) -> Dict[str, Any]:
        """Send email via SMTP server."""
        recipients = (
            list(original_message.to)
            if isinstance(original_message.to, list)
            else [original_message.to]
        )

        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.send_message(mime_message, to_addrs=recipients)

        return {
            "success": True,
            "message_id": mime_message["Message-ID"],
            "recipients": recipients,
            "timestamp": datetime.now().isoformat()
        }

    async def _log_email(self, message: EmailMessage) -> Dict[str, Any]:
        """Log email instead of sending (for development)."""

        html_content, _ = await self._render_template(
            message.template,
            message.context
        )

        email_log = {
            "timestamp": datetime.now().isoformat(),
            "to": message.to,
            "subject": message.subject,
            "template": message.template,
            "html_preview": html_content[:200] + "..." if len(html_content) > 200 else html_content,
            "priority": message.priority
        }

        self.sent_emails.append(email_log)

        logger.info(f"Email logged (SMTP not configured): {message.subject} to {message.to}")

        return {
            "success": True,
            "logged": True,
            "message": "Email logged successfully (SMTP not configured)",
            "timestamp": datetime.now().isoformat()
        }

    def _is_smtp_configured(self) -> bool:
        """Check if SMTP is properly configured."""
        return all([
            self.smtp_host,
            self.smtp_user,
            self.smtp_password
        ])

    def get_sent_emails(self) -> List[Dict[str, Any]]:
        """Get list of sent emails (for development/testing)."""
        return self.sent_emails.copy()

    def clear_sent_emails(self) -> None:
        """Clear sent emails log."""
        self.sent_emails.clear()
