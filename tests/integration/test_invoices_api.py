"""
API tests for invoicing.
"""

from agency_api.domain.models.project import ProjectStatus
from agency_api.infrastructure.mappers.notification_mapper import NotificationMapper


def create_invoice(client, headers, project_id, **overrides):
    body = {
        "project_id": project_id,
        "amount": 1000,
        "due_date": "2030-01-31T00:00:00",
        "description": "Website build",
    }
    body.update(overrides)
    return client.post("/api/invoices", json=body, headers=headers)


class TestCreateInvoice:

    def test_admin_creates_numbered_invoice(self, client, seed, admin, client_user, settle, sent_emails):
        project = seed.project(client_user)

        response = create_invoice(
            client, seed.headers(admin), project.id,
            items=[
                {"description": "Design", "quantity": 2, "rate": 250},
                {"description": "Build", "quantity": 1, "rate": 500},
            ],
            tax_rate=10,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Invoice created successfully and notification sent!"
        invoice = body["data"]
        assert invoice["invoice_number"] == "INV-0001"
        assert invoice["status"] == "draft"
        assert invoice["client_id"] == client_user.id
        assert invoice["project_title"] == "Company website"
        assert invoice["subtotal"] == 1000
        assert invoice["tax_amount"] == 100
        assert invoice["total"] == 1100

        second = create_invoice(client, seed.headers(admin), project.id).json()["data"]
        assert second["invoice_number"] == "INV-0002"
        assert second["items"] == [
            {"description": "Website build", "quantity": 1, "rate": 1000, "amount": 1000}
        ]

        settle()
        subjects = [email["subject"] for email in sent_emails]
        assert "New Invoice #INV-0001 - Agency Team" in subjects
        assert "New Invoice Created - #INV-0001" in subjects

    def test_client_is_notified_in_app(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        inbox = client.get("/api/notifications", headers=seed.headers(client_user)).json()["data"]

        assert inbox["unread_count"] == 1
        notification = inbox["notifications"][0]
        assert notification["title"] == "New Invoice Created"
        assert notification["type"] == "payment"
        assert notification["action_url"] == "/billing"
        assert notification["related_invoice_id"] == invoice["id"]
        assert notification["metadata"]["invoiceNumber"] == "INV-0001"
        assert "$1,000.00" in notification["message"]

    def test_client_cannot_create(self, client, seed, client_user):
        project = seed.project(client_user)

        response = create_invoice(client, seed.headers(client_user), project.id)

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Admin access required"}

    def test_unknown_project(self, client, seed, admin):
        response = create_invoice(client, seed.headers(admin), "missing")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_validation_errors(self, client, seed, admin, client_user):
        project = seed.project(client_user)

        response = create_invoice(client, seed.headers(admin), project.id, amount=-5)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation errors"
        assert body["errors"][0]["field"] == "amount"

    def test_requires_token(self, client):
        response = client.get("/api/invoices")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access token required"}


class TestInvoiceStatus:

    def test_sent_status_emails_client(self, client, seed, admin, client_user, settle, sent_emails):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]
        settle()
        sent_emails.clear()

        response = client.put(
            f"/api/invoices/{invoice['id']}/status", json={"status": "sent"}, headers=seed.headers(admin)
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Invoice status updated and notification sent!"
        settle()
        assert [email["subject"] for email in sent_emails] == [
            "Invoice #INV-0001 Sent - Payment Required",
            "Invoice Sent - #INV-0001",
        ]
        assert sent_emails[0]["to"] == "dana@example.com"
        assert sent_emails[1]["to"] == "owner@example.com"

    def test_paid_status_records_payment(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        response = client.put(
            f"/api/invoices/{invoice['id']}/status",
            json={"status": "paid", "payment_method": "bank_transfer"},
            headers=seed.headers(admin),
        )

        data = response.json()["data"]
        assert response.json()["message"] == "Invoice marked as paid and confirmation sent!"
        assert data["status"] == "paid"
        assert data["payment_method"] == "bank_transfer"
        assert data["payment_date"] is not None

    def test_status_change_creates_no_notification(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        client.put(f"/api/invoices/{invoice['id']}/status", json={"status": "sent"}, headers=seed.headers(admin))

        inbox = client.get("/api/notifications", headers=seed.headers(client_user)).json()["data"]
        assert inbox["pagination"]["total"] == 1

    def test_invalid_status(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        response = client.put(
            f"/api/invoices/{invoice['id']}/status", json={"status": "lost"}, headers=seed.headers(admin)
        )

        assert response.status_code == 400


class TestReportPayment:

    def sent_invoice(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]
        client.put(f"/api/invoices/{invoice['id']}/status", json={"status": "sent"}, headers=seed.headers(admin))
        return invoice

    def test_client_reports_payment(self, client, seed, admin, client_user, settle, sent_emails):
        invoice = self.sent_invoice(client, seed, admin, client_user)
        settle()
        sent_emails.clear()

        response = client.post(
            f"/api/invoices/{invoice['id']}/report-payment",
            json={"payment_method": "mobile_money", "transaction_id": "TX-42"},
            headers=seed.headers(client_user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "sent"

        inbox = client.get("/api/notifications", headers=seed.headers(admin)).json()["data"]
        alert = inbox["notifications"][0]
        assert alert["title"] == "Payment Reported"
        assert alert["priority"] == "high"
        assert alert["action_url"] == "/admin-billing"
        assert "MOBILE MONEY" in alert["message"]
        assert alert["metadata"]["transactionId"] == "TX-42"

        settle()
        assert [email["subject"] for email in sent_emails] == [
            "Payment Reported by Client - Invoice #INV-0001"
        ]

    def test_draft_invoice_cannot_be_reported(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        response = client.post(
            f"/api/invoices/{invoice['id']}/report-payment", json={}, headers=seed.headers(client_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Payment can only be reported for sent or overdue invoices"

    def test_only_invoiced_client_may_report(self, client, seed, admin, client_user, other_client):
        invoice = self.sent_invoice(client, seed, admin, client_user)
        before = client.get(f"/api/invoices/{invoice['id']}", headers=seed.headers(admin)).json()["data"]

        response = client.post(
            f"/api/invoices/{invoice['id']}/report-payment", json={}, headers=seed.headers(other_client)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied"
        after = client.get(f"/api/invoices/{invoice['id']}", headers=seed.headers(admin)).json()["data"]
        assert after == before
        assert after["status"] == "sent"
        assert after["payment_date"] is None
        inbox = client.get("/api/notifications", headers=seed.headers(admin)).json()["data"]
        assert inbox["pagination"]["total"] == 0


class TestInvoiceQueries:

    def test_clients_only_see_their_invoices(self, client, seed, admin, client_user, other_client):
        mine = seed.project(client_user)
        theirs = seed.project(other_client, title="Mobile app")
        own_invoice = create_invoice(client, seed.headers(admin), mine.id).json()["data"]
        other_invoice = create_invoice(client, seed.headers(admin), theirs.id, amount=300).json()["data"]

        listing = client.get("/api/invoices", headers=seed.headers(client_user)).json()["data"]
        assert [invoice["id"] for invoice in listing] == [own_invoice["id"]]

        assert len(client.get("/api/invoices", headers=seed.headers(admin)).json()["data"]) == 2

        response = client.get(f"/api/invoices/{other_invoice['id']}", headers=seed.headers(client_user))
        assert response.status_code == 403

    def test_filters(self, client, seed, admin, client_user):
        project = seed.project(client_user, title="Brand refresh")
        first = create_invoice(client, seed.headers(admin), project.id).json()["data"]
        create_invoice(client, seed.headers(admin), project.id, description="Logo work")
        client.put(f"/api/invoices/{first['id']}/status", json={"status": "paid"}, headers=seed.headers(admin))
        headers = seed.headers(admin)

        paid = client.get("/api/invoices?status=paid", headers=headers).json()["data"]
        assert [invoice["id"] for invoice in paid] == [first["id"]]
        assert len(client.get("/api/invoices?status=all", headers=headers).json()["data"]) == 2
        assert len(client.get("/api/invoices?search=logo", headers=headers).json()["data"]) == 1
        assert len(client.get("/api/invoices?search=brand", headers=headers).json()["data"]) == 2
        assert client.get("/api/invoices?status=bogus", headers=headers).status_code == 400

    def test_summary(self, client, seed, admin, client_user, other_client):
        mine = seed.project(client_user)
        theirs = seed.project(other_client, status=ProjectStatus.PLANNING)
        paid = create_invoice(client, seed.headers(admin), mine.id, amount=400).json()["data"]
        overdue = create_invoice(client, seed.headers(admin), mine.id, amount=250).json()["data"]
        create_invoice(client, seed.headers(admin), mine.id, amount=100)
        create_invoice(client, seed.headers(admin), theirs.id, amount=900)
        headers = seed.headers(admin)
        client.put(f"/api/invoices/{paid['id']}/status", json={"status": "paid"}, headers=headers)
        client.put(f"/api/invoices/{overdue['id']}/status", json={"status": "overdue"}, headers=headers)

        summary = client.get("/api/invoices/summary", headers=seed.headers(client_user)).json()["data"]

        assert summary == {
            "total_amount": 750.0,
            "paid_amount": 400.0,
            "pending_amount": 100.0,
            "overdue_amount": 250.0,
            "total_invoices": 3,
            "paid_invoices": 1,
            "pending_invoices": 1,
            "overdue_invoices": 1,
        }
        assert client.get("/api/invoices/summary", headers=headers).json()["data"]["total_invoices"] == 4

    def test_delete(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        invoice = create_invoice(client, seed.headers(admin), project.id).json()["data"]

        first = client.delete(f"/api/invoices/{invoice['id']}", headers=seed.headers(admin))
        second = client.delete(f"/api/invoices/{invoice['id']}", headers=seed.headers(admin))

        assert first.status_code == 200
        assert first.json()["message"] == "Invoice deleted successfully"
        assert second.status_code == 404

    def test_number_follows_invoice_count(self, client, seed, admin, client_user):
        project = seed.project(client_user)
        headers = seed.headers(admin)
        first = create_invoice(client, headers, project.id).json()["data"]
        create_invoice(client, headers, project.id)
        client.delete(f"/api/invoices/{first['id']}", headers=headers)

        response = create_invoice(client, headers, project.id)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "invoice_number"


def break_notification_inserts(monkeypatch):
    """Make every notification insert violate NOT NULL on recipient_id."""
    original = NotificationMapper.domain_to_model

    def without_recipient(mapper, notification):
        model = original(mapper, notification)
        model.recipient_id = None
        return model

    monkeypatch.setattr(NotificationMapper, "domain_to_model", without_recipient)


class TestNotificationFailures:

    def test_invoice_is_created_when_notification_insert_fails(
        self, client, seed, admin, client_user, monkeypatch, settle, sent_emails
    ):
        project = seed.project(client_user)
        break_notification_inserts(monkeypatch)

        response = create_invoice(client, seed.headers(admin), project.id)

        assert response.status_code == 201
        invoice = response.json()["data"]
        listing = client.get("/api/invoices", headers=seed.headers(admin)).json()["data"]
        assert [stored["id"] for stored in listing] == [invoice["id"]]
        inbox = client.get("/api/notifications", headers=seed.headers(client_user)).json()["data"]
        assert inbox["pagination"]["total"] == 0
        settle()
        assert "New Invoice #INV-0001 - Agency Team" in [email["subject"] for email in sent_emails]

    def test_payment_report_succeeds_when_notification_insert_fails(
        self, client, seed, admin, client_user, monkeypatch
    ):
        project = seed.project(client_user)
        headers = seed.headers(admin)
        invoice = create_invoice(client, headers, project.id).json()["data"]
        client.put(f"/api/invoices/{invoice['id']}/status", json={"status": "sent"}, headers=headers)
        break_notification_inserts(monkeypatch)

        response = client.post(
            f"/api/invoices/{invoice['id']}/report-payment",
            json={"payment_method": "bank_transfer"},
            headers=seed.headers(client_user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "sent"
        inbox = client.get("/api/notifications", headers=headers).json()["data"]
        assert inbox["pagination"]["total"] == 0
