"""
API tests for project notes, dashboard figures, admin stats and the public portfolio.
"""

from agency_api.domain.models.project import ProjectCategory, ProjectStatus


class TestProjectNotes:

    def test_client_and_admin_add_notes(self, client, seed, admin, client_user):
        project = seed.project(client_user)

        response = client.post(
            f"/api/projects/{project.id}/notes",
            json={"content": "  Please use our new logo  "},
            headers=seed.headers(client_user),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Note added successfully"
        [note] = body["data"]["notes"]
        assert note["content"] == "Please use our new logo"
        assert note["author_id"] == client_user.id
        assert note["is_private"] is False

        client.post(
            f"/api/projects/{project.id}/notes",
            json={"content": "Client pays late, invoice early", "is_private": True},
            headers=seed.headers(admin),
        )

        as_admin = client.get(f"/api/projects/{project.id}", headers=seed.headers(admin)).json()["data"]
        assert [n["is_private"] for n in as_admin["notes"]] == [False, True]

        as_client = client.get(f"/api/projects/{project.id}", headers=seed.headers(client_user)).json()["data"]
        assert [n["content"] for n in as_client["notes"]] == ["Please use our new logo"]

        listing = client.get("/api/projects", headers=seed.headers(client_user)).json()["data"]
        assert len(listing[0]["notes"]) == 1

    def test_other_client_cannot_add_notes(self, client, seed, client_user, other_client):
        project = seed.project(client_user)

        response = client.post(
            f"/api/projects/{project.id}/notes", json={"content": "Hello"}, headers=seed.headers(other_client)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied"
        stored = client.get(f"/api/projects/{project.id}", headers=seed.headers(client_user)).json()["data"]
        assert stored["notes"] == []

    def test_note_validation(self, client, seed, client_user):
        project = seed.project(client_user)
        headers = seed.headers(client_user)

        empty = client.post(f"/api/projects/{project.id}/notes", json={"content": ""}, headers=headers)
        missing = client.post("/api/projects/missing/notes", json={"content": "Hello"}, headers=headers)

        assert empty.status_code == 400
        assert empty.json()["errors"][0]["field"] == "content"
        assert missing.status_code == 404


class TestProjectDashboard:

    def seed_projects(self, seed, client_user, other_client):
        seed.project(client_user, budget=1000, progress=40)
        seed.project(client_user, title="Finished site", status=ProjectStatus.COMPLETED, budget=500, progress=100)
        seed.project(other_client, title="Mobile app", status=ProjectStatus.PLANNING, budget=200,
                     category=ProjectCategory.MOBILE_APP)

    def test_client_sees_own_figures(self, client, seed, client_user, other_client):
        self.seed_projects(seed, client_user, other_client)

        data = client.get("/api/projects/stats/dashboard", headers=seed.headers(client_user)).json()["data"]

        assert data["overview"] == {
            "total_projects": 2,
            "completed_projects": 1,
            "in_progress_projects": 1,
            "planning_projects": 0,
            "total_budget": 1500.0,
            "average_progress": 70.0,
        }
        assert data["status_breakdown"] == [
            {"status": "in-progress", "count": 1},
            {"status": "completed", "count": 1},
        ]
        assert data["category_breakdown"] == [{"category": "web-development", "count": 2}]

    def test_admin_sees_every_project(self, client, seed, admin, client_user, other_client):
        self.seed_projects(seed, client_user, other_client)

        data = client.get("/api/projects/stats/dashboard", headers=seed.headers(admin)).json()["data"]

        assert data["overview"]["total_projects"] == 3
        assert data["overview"]["planning_projects"] == 1
        assert data["overview"]["total_budget"] == 1700.0
        assert data["overview"]["average_progress"] == 46.67
        assert data["category_breakdown"] == [
            {"category": "web-development", "count": 2},
            {"category": "mobile-app", "count": 1},
        ]

    def test_no_projects(self, client, seed, client_user):
        data = client.get("/api/projects/stats/dashboard", headers=seed.headers(client_user)).json()["data"]

        assert data["overview"]["total_projects"] == 0
        assert data["overview"]["average_progress"] == 0
        assert data["status_breakdown"] == []
        assert data["category_breakdown"] == []


class TestAdminStats:

    def test_counts_across_the_agency(self, client, seed, admin, client_user, other_client):
        seed.project(client_user, progress=40)
        seed.project(client_user, title="Finished site", status=ProjectStatus.COMPLETED, progress=100)
        seed.project(other_client, title="Mobile app", status=ProjectStatus.PLANNING)
        seed.project(other_client, title="Paused", status=ProjectStatus.ON_HOLD)
        headers = seed.headers(client_user)
        client.post("/api/messages", json={"content": "When do we launch?"}, headers=headers)
        client.post("/api/feedback", json={
            "rating": 5,
            "title": "Great",
            "content": "Delivered ahead of schedule",
            "service_category": "web-development",
        }, headers=headers)

        response = client.get("/api/admin/stats", headers=seed.headers(admin))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_clients": 2,
            "active_projects": 2,
            "pending_messages": 1,
            "pending_feedback": 1,
            "completed_projects": 1,
            "total_projects": 4,
            "avg_progress": 35,
        }

    def test_empty_agency(self, client, seed, admin):
        data = client.get("/api/admin/stats", headers=seed.headers(admin)).json()["data"]

        assert data["total_projects"] == 0
        assert data["avg_progress"] == 0

    def test_requires_admin(self, client, seed, client_user):
        response = client.get("/api/admin/stats", headers=seed.headers(client_user))

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Admin access required"}


class TestPortfolio:

    SHOWCASE = {
        "title": "Bakery rebrand",
        "description": "Logo, packaging and signage",
        "category": "design",
        "technologies": ["Figma", "Illustrator"],
        "featured": True,
        "completion_year": "2024",
    }

    def publish(self, client, headers, **overrides):
        return client.post("/api/projects/portfolio", json={**self.SHOWCASE, **overrides}, headers=headers)

    def test_admin_publishes_completed_project(self, client, seed, admin):
        response = self.publish(client, seed.headers(admin))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Portfolio project created successfully"
        project = body["data"]
        assert project["status"] == "completed"
        assert project["progress"] == 100
        assert project["completed_date"] is not None
        assert project["client_id"] == admin.id
        assert project["featured"] is True
        assert project["technologies"] == ["Figma", "Illustrator"]

    def test_public_listing(self, client, seed, admin, client_user):
        headers = seed.headers(admin)
        featured = self.publish(client, headers).json()["data"]
        plain = self.publish(
            client, headers, title="Tutoring site", category="web-development", featured=False
        ).json()["data"]
        seed.project(client_user, title="Still building")

        public = client.get("/api/projects/public/portfolio").json()["data"]

        assert public["total"] == 2
        assert [p["id"] for p in public["projects"]] == [featured["id"], plain["id"]]
        first = public["projects"][0]
        assert first["stats"] == {"users": "10+", "rating": 4.8, "completion": "2024"}
        assert "client_id" not in first
        assert "budget" not in first

        featured_only = client.get("/api/projects/public/portfolio?featured=true").json()["data"]
        assert [p["id"] for p in featured_only["projects"]] == [featured["id"]]
        assert client.get("/api/projects/public/portfolio?category=All").json()["data"]["total"] == 2
        design = client.get("/api/projects/public/portfolio?category=design").json()["data"]
        assert [p["id"] for p in design["projects"]] == [featured["id"]]
        assert client.get("/api/projects/public/portfolio?category=bogus").status_code == 400
        assert client.get("/api/projects/public/portfolio?limit=1").json()["data"]["total"] == 1

    def test_update_and_delete(self, client, seed, admin):
        headers = seed.headers(admin)
        project = self.publish(client, headers).json()["data"]

        updated = client.put(
            f"/api/projects/portfolio/{project['id']}", json={"featured": False, "rating": 5}, headers=headers
        )
        assert updated.status_code == 200
        assert updated.json()["message"] == "Portfolio project updated successfully"
        assert updated.json()["data"]["featured"] is False
        item = client.get("/api/projects/public/portfolio").json()["data"]["projects"][0]
        assert item["stats"]["rating"] == 5

        first = client.delete(f"/api/projects/portfolio/{project['id']}", headers=headers)
        second = client.delete(f"/api/projects/portfolio/{project['id']}", headers=headers)
        assert first.json()["message"] == "Portfolio project deleted successfully"
        assert second.status_code == 404
        assert client.get("/api/projects/public/portfolio").json()["data"]["total"] == 0

    def test_only_admins_manage_portfolio(self, client, seed, admin, client_user):
        project = self.publish(client, seed.headers(admin)).json()["data"]
        headers = seed.headers(client_user)

        assert self.publish(client, headers).status_code == 403
        assert client.put(
            f"/api/projects/portfolio/{project['id']}", json={"featured": False}, headers=headers
        ).status_code == 403
        assert client.delete(f"/api/projects/portfolio/{project['id']}", headers=headers).status_code == 403

    def test_rating_is_bounded(self, client, seed, admin):
        response = self.publish(client, seed.headers(admin), rating=7)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "rating"
