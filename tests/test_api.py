"""Tests for the JSON web API."""

import yaml

from kouji.projects.ids import derive_id

ACME_ID = derive_id("2025-06-18_Acme_Nagoya")


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["name"] == "kouji"
    assert "/api/kouji-list" in data["endpoints"]


def test_unknown_route_is_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


class TestKoujiList:
    def test_list(self, client, project_tree):
        resp = client.get("/api/kouji-list", query_string={"path": str(project_tree)})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["count"] == 3
        assert [p["company_name"] for p in data["kouji_list"]] == ["Gamma", "Acme", "Beta"]
        assert data["total_size"] == sum(p["source_entry"]["size"] for p in data["kouji_list"])

    def test_list_missing_root(self, client, tmp_path):
        resp = client.get("/api/kouji-list", query_string={"path": str(tmp_path / "nope")})
        assert resp.status_code == 500
        assert resp.get_json()["error"] == "Failed to get kouji list"

    def test_save(self, client, project_tree):
        resp = client.post("/api/kouji-list/save", query_string={"path": str(project_tree)})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["count"] == 3
        assert data["output_path"] == str(project_tree / ".inside.yaml")
        assert (project_tree / ".inside.yaml").exists()

    def test_broken_store_is_500(self, client, project_tree):
        (project_tree / ".inside.yaml").write_text("projects: nope\n")
        resp = client.get("/api/kouji-list", query_string={"path": str(project_tree)})
        assert resp.status_code == 500

    def test_yaml_syntax_error_is_500(self, client, project_tree):
        (project_tree / ".inside.yaml").write_text("projects: [\n")
        resp = client.post("/api/kouji-list/save", query_string={"path": str(project_tree)})
        assert resp.status_code == 500
        assert resp.get_json()["error"] == "Failed to save kouji list"


class TestFolders:
    def test_lists_every_child(self, client, project_tree):
        resp = client.get("/api/folders", query_string={"path": str(project_tree)})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["count"] == 6
        assert data["path"] == str(project_tree)
        names = [f["name"] for f in data["folders"]]
        assert names == sorted(names)
        assert "misc" in names
        [loose] = [f for f in data["folders"] if f["name"] == "2025-0618 Loose File.txt"]
        assert loose["is_directory"] is False
        assert loose["modified_time"] == "2025-06-10T00:00:00.000000000+09:00"

    def test_missing_directory_is_500(self, client, tmp_path):
        resp = client.get("/api/folders", query_string={"path": str(tmp_path / "nope")})
        assert resp.status_code == 500
        assert resp.get_json()["error"] == "Failed to read directory"


class TestProjectDates:
    def _save(self, client, root):
        client.post("/api/kouji-list/save", query_string={"path": str(root)})

    def test_update(self, client, project_tree):
        self._save(client, project_tree)
        resp = client.put(
            f"/api/kouji-projects/{ACME_ID}/dates",
            query_string={"path": str(project_tree)},
            json={"start_date": "2025-07-01", "end_date": "2025-10-31T00:00:00+09:00"},
        )
        assert resp.status_code == 200
        project = resp.get_json()["project"]
        assert project["start_date"] == "2025-07-01T00:00:00.000000000+09:00"
        assert project["end_date"] == "2025-10-31T00:00:00.000000000+09:00"

        stored = yaml.safe_load((project_tree / ".inside.yaml").read_text(encoding="utf-8"))
        [acme] = [p for p in stored["projects"] if p["id"] == ACME_ID]
        assert acme["start_date"] == "2025-07-01T00:00:00.000000000+09:00"

    def test_bad_start_date(self, client, project_tree):
        resp = client.put(
            f"/api/kouji-projects/{ACME_ID}/dates",
            query_string={"path": str(project_tree)},
            json={"start_date": "soon", "end_date": ""},
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid start_date format"

    def test_bad_end_date(self, client, project_tree):
        resp = client.put(
            f"/api/kouji-projects/{ACME_ID}/dates",
            query_string={"path": str(project_tree)},
            json={"start_date": "2025-07-01", "end_date": "later"},
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid end_date format"

    def test_missing_body(self, client, project_tree):
        resp = client.put(f"/api/kouji-projects/{ACME_ID}/dates", data="x")
        assert resp.status_code == 400

    def test_unknown_project(self, client, project_tree):
        self._save(client, project_tree)
        resp = client.put(
            "/api/kouji-projects/ZZZZZ/dates",
            query_string={"path": str(project_tree)},
            json={"start_date": "2025-07-01"},
        )
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Project not found"


class TestCleanup:
    def test_cleanup_counts(self, client, tmp_path):
        (tmp_path / ".inside.yaml").write_text(
            "projects:\n"
            "  - id: GOOD1\n"
            "    company_name: Acme\n"
            "    source_entry:\n"
            "      name: a\n"
            "      modified_time: '2024-06-01T00:00:00+09:00'\n"
            "  - id: BAD11\n"
            "    source_entry:\n"
            "      name: b\n"
            "      modified_time: '0001-01-01T09:26:51+09:18'\n",
            encoding="utf-8",
        )
        resp = client.post("/api/kouji-projects/cleanup", query_string={"path": str(tmp_path)})
        assert resp.status_code == 200
        data = resp.get_json()
        assert (data["projects_before"], data["projects_after"], data["removed_count"]) == (2, 1, 1)


class TestTime:
    def test_parse(self, client):
        resp = client.post("/api/time/parse", json={"time_string": "2025-01-14 豊田築炉 名和工場"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["rfc3339"] == "2025-01-14T00:00:00.000000000+09:00"
        assert data["rest"] == "豊田築炉 名和工場"
        assert data["offset"] == "+09:00"
        assert data["unix"] == 1736780400

    def test_parse_failure(self, client):
        resp = client.post("/api/time/parse", json={"time_string": "not a date"})
        assert resp.status_code == 400
        assert "not a date" in resp.get_json()["message"]

    def test_parse_requires_time_string(self, client):
        resp = client.post("/api/time/parse", json={})
        assert resp.status_code == 400

    def test_formats(self, client):
        data = client.get("/api/time/formats").get_json()
        assert data["count"] == len(data["formats"])
        assert data["formats"][0]["name"] == "RFC3339Nano"
