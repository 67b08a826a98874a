from app.db.models import Tag


def test_tags_are_listed_alphabetically(client, db):
    db.add_all([Tag(name="Work", slug="work"), Tag(name="Health", slug="health"), Tag(name="Finance", slug="finance")])
    db.commit()

    response = client.get("/api/v1/tags")

    assert response.status_code == 200
    assert [tag["name"] for tag in response.json()] == ["Finance", "Health", "Work"]


def test_health_check(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok-api"
    assert "timestamp" in body
