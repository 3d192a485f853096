"""
Test suite for the /jobs endpoints.

Tests cover:
- Job creation (admin only)
- Listing and filtering
- Retrieval, partial update and deletion by title
"""

import pytest


JOBS = [
    {"title": "j1", "salary": 14, "equity": "0", "companyHandle": "c1"},
    {"title": "j2", "salary": 1000, "equity": "0.5", "companyHandle": "c2"},
    {"title": "j3", "salary": 405000, "equity": "0.2", "companyHandle": "c3"},
]


class TestJobCreation:
    """Tests for POST /jobs"""

    NEW_JOB = {"title": "j4", "salary": 3300, "equity": 0.2, "companyHandle": "c2"}

    def test_ok_for_admin(self, client, admin_headers):
        response = client.post("/jobs", json=self.NEW_JOB, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {
            "job": {"title": "j4", "salary": 3300, "equity": "0.2", "companyHandle": "c2"}
        }

    def test_equity_as_string(self, client, admin_headers):
        response = client.post("/jobs", json={**self.NEW_JOB, "equity": "0.25"}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["job"]["equity"] == "0.25"

    def test_unauth_for_non_admin(self, client, u1_headers):
        response = client.post("/jobs", json=self.NEW_JOB, headers=u1_headers)
        assert response.status_code == 401

    def test_unauth_for_anon(self, client):
        response = client.post("/jobs", json=self.NEW_JOB)
        assert response.status_code == 401

    def test_missing_data(self, client, admin_headers):
        response = client.post("/jobs", json={"salary": 100, "companyHandle": "c3"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["status"] == 400

    def test_invalid_data(self, client, admin_headers):
        response = client.post(
            "/jobs",
            json={"title": "j4", "salary": -1, "equity": "-1", "companyHandle": "c6"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_equity_above_one(self, client, admin_headers):
        response = client.post("/jobs", json={**self.NEW_JOB, "equity": 1.5}, headers=admin_headers)
        assert response.status_code == 400

    def test_duplicate_title(self, client, admin_headers):
        response = client.post("/jobs", json={**self.NEW_JOB, "title": "j1"}, headers=admin_headers)

        assert response.status_code == 400
        assert "Duplicate job" in response.json()["error"]["message"]

    def test_unknown_company(self, client, admin_headers):
        response = client.post("/jobs", json={**self.NEW_JOB, "companyHandle": "c6"}, headers=admin_headers)
        assert response.status_code == 400

    def test_snake_case_property_rejected(self, client, admin_headers):
        body = {"title": "j4", "salary": 3300, "company_handle": "c2"}
        assert client.post("/jobs", json=body, headers=admin_headers).status_code == 400


class TestJobListing:
    """Tests for GET /jobs"""

    def test_ok_for_anon(self, client):
        response = client.get("/jobs")

        assert response.status_code == 200
        assert response.json() == {"jobs": JOBS}

    def test_all_filters(self, client):
        response = client.get("/jobs", params={"titleLike": "j", "minSalary": 1, "hasEquity": "true"})
        assert response.json() == {"jobs": JOBS[1:]}

    def test_title_filter(self, client):
        response = client.get("/jobs", params={"titleLike": "J3"})
        assert response.json() == {"jobs": [JOBS[2]]}

    def test_has_equity_false(self, client):
        response = client.get("/jobs", params={"hasEquity": "false"})
        assert response.json() == {"jobs": JOBS}

    def test_negative_min_salary(self, client):
        response = client.get("/jobs", params={"minSalary": -1})
        assert response.status_code == 400

    def test_invalid_filter_value(self, client):
        response = client.get("/jobs", params={"minSalary": "lots"})
        assert response.status_code == 400


class TestJobRetrieval:
    """Tests for GET /jobs/{title}"""

    def test_works(self, client):
        response = client.get("/jobs/j1")
        assert response.json() == {"job": JOBS[0]}

    def test_not_found(self, client):
        response = client.get("/jobs/nope")

        assert response.status_code == 404
        assert response.json() == {"error": {"message": "No job: nope", "status": 404}}

    def test_title_is_case_sensitive(self, client):
        assert client.get("/jobs/J1").status_code == 404


class TestJobUpdate:
    """Tests for PATCH /jobs/{title}"""

    def test_works_for_admin(self, client, admin_headers):
        response = client.patch("/jobs/j1", json={"title": "j1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "job": {"title": "j1-new", "salary": 14, "equity": "0", "companyHandle": "c1"}
        }
        assert client.get("/jobs/j1").status_code == 404

    def test_unauth_for_non_admin(self, client, u1_headers):
        response = client.patch("/jobs/j1", json={"title": "j1-new"}, headers=u1_headers)
        assert response.status_code == 401

    def test_unauth_for_anon(self, client):
        response = client.patch("/jobs/j1", json={"title": "j1-new"})
        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        response = client.patch("/jobs/nope", json={"title": "still nope"}, headers=admin_headers)
        assert response.status_code == 404

    def test_company_handle_change_rejected(self, client, admin_headers):
        response = client.patch("/jobs/j1", json={"companyHandle": "c3"}, headers=admin_headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [{"salary": -100}, {"equity": "2"}, {}])
    def test_bad_request(self, client, admin_headers, body):
        response = client.patch("/jobs/j1", json=body, headers=admin_headers)
        assert response.status_code == 400


class TestJobDeletion:
    """Tests for DELETE /jobs/{title}"""

    def test_works_for_admin(self, client, admin_headers):
        response = client.delete("/jobs/j1", headers=admin_headers)

        assert response.json() == {"deleted": "j1"}
        assert client.get("/jobs/j1").status_code == 404

    def test_unauth_for_non_admin(self, client, u1_headers):
        assert client.delete("/jobs/j1", headers=u1_headers).status_code == 401

    def test_unauth_for_anon(self, client):
        assert client.delete("/jobs/j1").status_code == 401

    def test_not_found(self, client, admin_headers):
        assert client.delete("/jobs/nope", headers=admin_headers).status_code == 404
