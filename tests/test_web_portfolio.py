"""Tests for portfolio and resume endpoints."""

PROJECT = {
    "title": "Weather App",
    "description": "Shows forecasts for any city",
    "technologies": ["python", "fastapi"],
    "githubUrl": "https://github.com/ana/weather",
}


class TestProjects:
    """Tests for /api/portfolio/projects."""

    def test_requires_user(self, client):
        assert client.get("/api/portfolio/projects").status_code == 401

    def test_create(self, client, auth):
        response = client.post("/api/portfolio/projects", headers=auth, json=PROJECT)
        assert response.status_code == 201
        project = response.json()["project"]
        assert isinstance(project["id"], int)
        assert project["technologies"] == ["python", "fastapi"]
        assert project["githubUrl"] == "https://github.com/ana/weather"
        assert project["isPublic"] is True

    def test_missing_technologies(self, client, auth):
        body = {"title": "X", "description": "Y"}
        response = client.post("/api/portfolio/projects", headers=auth, json=body)
        assert response.status_code == 422

    def test_public_filter(self, client, auth):
        client.post("/api/portfolio/projects", headers=auth, json=PROJECT)
        client.post(
            "/api/portfolio/projects",
            headers=auth,
            json={**PROJECT, "title": "Diary", "isPublic": False},
        )

        everything = client.get("/api/portfolio/projects", headers=auth).json()["projects"]
        public = client.get("/api/portfolio/projects?public=true", headers=auth).json()["projects"]
        assert len(everything) == 2
        assert [p["title"] for p in public] == ["Weather App"]


class TestSkills:
    """Tests for /api/portfolio/skills."""

    def test_create_and_list(self, client, auth):
        client.post(
            "/api/portfolio/skills",
            headers=auth,
            json={"name": "Git", "category": "tool", "proficiency": 3},
        )
        response = client.post(
            "/api/portfolio/skills",
            headers=auth,
            json={"name": "Python", "category": "programming", "proficiency": 5,
                  "yearsOfExperience": 2.5},
        )
        assert response.status_code == 201
        assert response.json()["skill"]["yearsOfExperience"] == 2.5

        skills = client.get("/api/portfolio/skills", headers=auth).json()["skills"]
        assert [s["name"] for s in skills] == ["Python", "Git"]

    def test_proficiency_out_of_range(self, client, auth):
        response = client.post(
            "/api/portfolio/skills",
            headers=auth,
            json={"name": "Go", "category": "programming", "proficiency": 6},
        )
        assert response.status_code == 422


class TestResume:
    """Tests for POST /api/resume/generate."""

    def test_generate(self, client, auth):
        client.post("/api/portfolio/projects", headers=auth, json=PROJECT)
        client.post(
            "/api/portfolio/skills",
            headers=auth,
            json={"name": "Python", "category": "programming", "proficiency": 5},
        )

        response = client.post("/api/resume/generate", headers=auth, json={})
        assert response.status_code == 200
        body = response.json()
        data = body["resumeData"]
        assert data["personalInfo"]["name"] == "Ana Lopez"
        assert data["skills"] == [{"category": "Programming", "skills": ["Python"]}]
        assert data["projects"][0]["title"] == "Weather App"
        assert data["experience"][0]["company"] == "Personal Projects"
        assert "Weather App" in body["html"]

    def test_without_projects(self, client, auth):
        client.post("/api/portfolio/projects", headers=auth, json=PROJECT)
        body = client.post(
            "/api/resume/generate",
            headers=auth,
            json={"template": "classic", "includeProjects": False},
        ).json()
        assert body["resumeData"]["projects"] == []
        assert "#2c3e50" in body["html"]

    def test_requires_user(self, client):
        assert client.post("/api/resume/generate", json={}).status_code == 401
