"""
API tests for notification fan-out, inboxes and web push.
"""

import json
from datetime import timedelta

from agency_api.domain.models.base import UserRole, utcnow
from agency_api.domain.models.notification import Notification
from agency_api.infrastructure.repositories import SQLAlchemyNotificationRepository


def subscribe(client, headers, endpoint="https://push.example.com/sub/1"):
    return client.post(
        "/api/push/subscribe",
        json={"endpoint": endpoint, "expirationTime": None, "keys": {"p256dh": "p256", "auth": "secret"}},
        headers=headers,
    )


class TestSendNotification:

    def test_fan_out_to_selected_clients(self, client, seed, admin, client_user, other_client,
                                         settle, sent_emails, pushed):
        subscribe(client, seed.headers(client_user))

        response = client.post("/api/notifications", json={
            "recipients": [client_user.id, other_client.id, admin.id, "missing"],
            "title": "Design review",
            "message": "Mockups are ready",
            "type": "project_update",
            "priority": "high",
            "action_url": "/projects",
        }, headers=seed.headers(admin))

        assert response.status_code == 201
        assert response.json()["data"] == {"count": 2}
        assert response.json()["message"] == "Notification sent to 2 recipient(s)"

        for user in (client_user, other_client):
            inbox = client.get("/api/notifications", headers=seed.headers(user)).json()["data"]
            assert inbox["unread_count"] == 1
            assert inbox["notifications"][0]["sender_id"] == admin.id

        settle()
        assert len(pushed) == 1
        assert pushed[0]["subscription_info"]["endpoint"] == "https://push.example.com/sub/1"
        assert sorted(email["to"] for email in sent_emails) == ["dana@example.com", "lee@example.com"]
        assert {email["subject"] for email in sent_emails} == {"Notification: Design review"}

    def test_no_valid_recipients(self, client, seed, admin):
        response = client.post("/api/notifications", json={
            "recipients": ["missing"], "title": "Hi", "message": "There",
        }, headers=seed.headers(admin))

        assert response.status_code == 400
        assert response.json()["message"] == "No valid recipients found"

    def test_admin_cannot_send_callback_type(self, client, seed, admin, client_user):
        response = client.post("/api/notifications", json={
            "recipients": [client_user.id], "title": "Hi", "message": "There", "type": "callback",
        }, headers=seed.headers(admin))

        assert response.status_code == 400

    def test_client_cannot_send(self, client, seed, client_user, other_client):
        response = client.post("/api/notifications", json={
            "recipients": [other_client.id], "title": "Hi", "message": "There",
        }, headers=seed.headers(client_user))

        assert response.status_code == 403

    def test_broadcast_reaches_active_clients(self, client, seed, admin, client_user, settle, sent_emails):
        seed.user("Former Client", "former@example.com", is_active=False)

        response = client.post("/api/notifications/broadcast", json={
            "title": "Holiday hours", "message": "Closed on Friday",
        }, headers=seed.headers(admin))

        assert response.status_code == 201
        assert response.json()["data"]["count"] == 1
        settle()
        assert [email["subject"] for email in sent_emails] == ["Announcement: Holiday hours"]

    def test_broadcast_without_clients(self, client, seed, admin):
        response = client.post("/api/notifications/broadcast", json={
            "title": "Holiday hours", "message": "Closed on Friday",
        }, headers=seed.headers(admin))

        assert response.status_code == 400
        assert response.json()["message"] == "No active clients found"


class TestCallbackAndRequests:

    def test_public_callback_notifies_admins(self, client, seed, admin, settle, sent_emails, pushed):
        second_admin = seed.user("Bo Admin", "bo@example.com", UserRole.ADMIN)
        subscribe(client, seed.headers(admin), endpoint="https://push.example.com/admin")

        response = client.post("/api/notifications/callback", json={
            "title": "Callback request", "message": "Jane Doe, +1 555 0100",
        })

        assert response.status_code == 200
        assert response.json()["data"]["count"] == 2
        for user in (admin, second_admin):
            notification = client.get(
                "/api/notifications", headers=seed.headers(user)
            ).json()["data"]["notifications"][0]
            assert notification["type"] == "callback"
            assert notification["priority"] == "high"
            assert notification["sender_id"] is None
        settle()
        assert sent_emails == []
        assert len(pushed) == 1
        assert pushed[0]["subscription_info"]["endpoint"] == "https://push.example.com/admin"
        data = json.loads(pushed[0]["data"])
        assert data["data"]["url"] == "/notifications"
        assert data["data"]["type"] == "callback"

    def test_callback_without_admins(self, client, seed, session_factory, client_user, settle, pushed):
        subscribe(client, seed.headers(client_user))

        response = client.post("/api/notifications/callback", json={"title": "Call me", "message": "Please"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No active admins found."}
        assert SQLAlchemyNotificationRepository(session_factory()).stats()["total"] == 0
        settle()
        assert pushed == []

    def test_meeting_request_confirms_by_email(self, client, seed, admin, client_user, settle, sent_emails):
        response = client.post("/api/notifications/request", json={
            "title": "Kickoff meeting",
            "message": "Could we meet Tuesday?",
            "type": "meeting",
            "email": "dana@example.com",
        }, headers=seed.headers(client_user))

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Request sent to 1 admin(s) successfully. Confirmation email sent!"
        assert body["data"]["email_sent"] is True
        settle()
        assert [email["subject"] for email in sent_emails] == ["Meeting Request Confirmation - Agency Team"]


class TestInbox:

    def send(self, client, seed, admin, recipient, title="Hello"):
        client.post("/api/notifications", json={
            "recipients": [recipient.id], "title": title, "message": "World",
        }, headers=seed.headers(admin))

    def test_mark_read_is_idempotent(self, client, seed, admin, client_user):
        self.send(client, seed, admin, client_user)
        headers = seed.headers(client_user)
        notification_id = client.get("/api/notifications", headers=headers).json()["data"]["notifications"][0]["id"]

        first = client.put(f"/api/notifications/{notification_id}/read", headers=headers).json()["data"]
        second = client.put(f"/api/notifications/{notification_id}/read", headers=headers).json()["data"]

        assert first["is_read"] is True
        assert first["read_at"] == second["read_at"]
        assert client.get("/api/notifications", headers=headers).json()["data"]["unread_count"] == 0

    def test_other_users_notification_is_hidden(self, client, seed, admin, client_user, other_client):
        self.send(client, seed, admin, client_user)
        notification_id = client.get(
            "/api/notifications", headers=seed.headers(client_user)
        ).json()["data"]["notifications"][0]["id"]

        response = client.put(f"/api/notifications/{notification_id}/read", headers=seed.headers(other_client))

        assert response.status_code == 404

    def test_mark_all_read(self, client, seed, admin, client_user):
        for title in ("One", "Two", "Three"):
            self.send(client, seed, admin, client_user, title)
        headers = seed.headers(client_user)

        response = client.put("/api/notifications/read-all", headers=headers)

        assert response.json()["data"] == {"count": 3}
        assert client.put("/api/notifications/read-all", headers=headers).json()["data"] == {"count": 0}

    def test_pagination_and_filters(self, client, seed, admin, client_user):
        for title in ("One", "Two", "Three"):
            self.send(client, seed, admin, client_user, title)
        headers = seed.headers(client_user)

        page = client.get("/api/notifications?page=2&limit=2", headers=headers).json()["data"]

        assert page["pagination"] == {"current": 2, "pages": 2, "total": 3, "limit": 2}
        assert [n["title"] for n in page["notifications"]] == ["One"]
        assert client.get("/api/notifications?type=payment", headers=headers).json()["data"]["pagination"]["total"] == 0
        assert client.get("/api/notifications?type=nope", headers=headers).status_code == 400

    def test_expired_notifications_are_hidden(self, client, seed, session_factory, client_user):
        session = session_factory()
        repository = SQLAlchemyNotificationRepository(session)
        repository.save(Notification(
            recipient_id=client_user.id, title="Old", message="Gone",
            expires_at=utcnow() - timedelta(hours=1),
        ))
        repository.save(Notification(
            recipient_id=client_user.id, title="Current", message="Still here",
            expires_at=utcnow() + timedelta(days=1),
        ))
        session.commit()
        session.close()

        inbox = client.get("/api/notifications", headers=seed.headers(client_user)).json()["data"]

        assert [n["title"] for n in inbox["notifications"]] == ["Current"]
        assert inbox["unread_count"] == 1

    def test_delete(self, client, seed, admin, client_user, other_client):
        self.send(client, seed, admin, client_user)
        notification_id = client.get(
            "/api/notifications", headers=seed.headers(client_user)
        ).json()["data"]["notifications"][0]["id"]

        assert client.delete(f"/api/notifications/{notification_id}", headers=seed.headers(other_client)).status_code == 404
        assert client.delete(f"/api/notifications/{notification_id}", headers=seed.headers(admin)).status_code == 200
        assert client.delete(f"/api/notifications/{notification_id}", headers=seed.headers(client_user)).status_code == 404


class TestAdminViews:

    def test_sent_groups_and_stats(self, client, seed, admin, client_user, other_client):
        headers = seed.headers(admin)
        client.post("/api/notifications", json={
            "recipients": [client_user.id, other_client.id], "title": "Launch", "message": "We are live",
        }, headers=headers)
        client.post("/api/notifications", json={
            "recipients": [client_user.id], "title": "Invoice", "message": "Due soon", "type": "payment",
        }, headers=headers)
        launch_id = next(
            n["id"] for n in client.get("/api/notifications", headers=seed.headers(client_user)).json()["data"]["notifications"]
            if n["title"] == "Launch"
        )
        client.put(f"/api/notifications/{launch_id}/read", headers=seed.headers(client_user))

        sent = client.get("/api/notifications/sent", headers=headers).json()["data"]
        launch = next(group for group in sent if group["title"] == "Launch")
        assert len(sent) == 2
        assert launch["total_recipients"] == 2
        assert launch["read_count"] == 1
        assert launch["read_by"][0]["id"] == client_user.id

        payments = client.get("/api/notifications/sent?type=payment", headers=headers).json()["data"]
        assert [group["title"] for group in payments] == ["Invoice"]

        stats = client.get("/api/notifications/stats", headers=headers).json()["data"]
        assert stats == {
            "total": 3,
            "unread": 2,
            "by_type": {"info": 2, "payment": 1},
            "by_priority": {"medium": 3},
        }

    def test_admin_views_require_admin(self, client, seed, client_user):
        assert client.get("/api/notifications/sent", headers=seed.headers(client_user)).status_code == 403
        assert client.get("/api/notifications/stats", headers=seed.headers(client_user)).status_code == 403


class TestPushSubscriptions:

    def test_vapid_key_is_public(self, client):
        response = client.get("/api/push/vapid-public-key")

        assert response.json()["data"] == {"public_key": "test-public-key"}

    def test_endpoint_moves_to_latest_subscriber(self, client, seed, admin, client_user, other_client, pushed):
        first = subscribe(client, seed.headers(client_user)).json()["data"]["subscription_id"]
        second = subscribe(client, seed.headers(other_client)).json()["data"]["subscription_id"]

        assert first == second
        response = client.post("/api/push/send", json={
            "user_id": other_client.id, "title": "Hi", "body": "Direct push",
        }, headers=seed.headers(admin))
        assert response.json()["data"]["sent"] == 1

        response = client.post("/api/push/send", json={
            "user_id": client_user.id, "title": "Hi", "body": "Direct push",
        }, headers=seed.headers(admin))
        assert response.status_code == 404
        assert response.json()["message"] == "User has no active push subscriptions"

    def test_incomplete_subscription_rejected(self, client, seed, client_user):
        response = client.post("/api/push/subscribe", json={"endpoint": "https://push.example.com/x"},
                               headers=seed.headers(client_user))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid subscription data"

    def test_unsubscribe(self, client, seed, client_user, other_client):
        subscribe(client, seed.headers(client_user))
        body = {"endpoint": "https://push.example.com/sub/1"}

        foreign = client.request("DELETE", "/api/push/unsubscribe", json=body, headers=seed.headers(other_client))
        own = client.request("DELETE", "/api/push/unsubscribe", json=body, headers=seed.headers(client_user))
        again = client.request("DELETE", "/api/push/unsubscribe", json=body, headers=seed.headers(client_user))

        assert foreign.status_code == 404
        assert own.status_code == 200
        assert again.status_code == 404
        assert again.json()["message"] == "Subscription not found"
