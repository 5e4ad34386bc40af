from datetime import datetime


def create(client, title="Task", **extra):
    response = client.post("/api/tasks", json={"title": title, **extra})
    assert response.status_code == 201
    return response.json()["id"]


# ========== TEST CREATE TASK ==========
def test_create_task_success(client):
    """Tester la création réussie d'une tâche"""
    response = client.post(
        "/api/tasks",
        json={"title": "Ma première tâche", "description": "détails", "tags": ["travail", " urgent ", ""]}
    )
    assert response.status_code == 201
    task_id = response.json()["id"]

    data = client.get(f"/api/tasks/{task_id}").json()
    assert data["title"] == "Ma première tâche"
    assert data["description"] == "détails"
    assert data["status"] == "Planning"
    assert data["archived"] == False
    assert sorted(data["tags"]) == ["travail", "urgent"]


def test_create_task_timestamps_have_timezone(client):
    task_id = create(client)
    data = client.get(f"/api/tasks/{task_id}").json()
    created = datetime.fromisoformat(data["created_at"].replace("Z", "+00:00"))
    updated = datetime.fromisoformat(data["updated_at"].replace("Z", "+00:00"))
    assert created.tzinfo is not None
    assert updated >= created


def test_create_task_blank_title(client):
    """Titre vide -> 400 et rien en base"""
    response = client.post("/api/tasks", json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "title required"
    assert client.get("/api/tasks").json()["items"] == []


def test_create_task_invalid_json(client):
    response = client.post("/api/tasks", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_create_task_missing_title(client):
    response = client.post("/api/tasks", json={"description": "no title"})
    assert response.status_code == 400


# ========== TEST GET / LIST ==========
def test_get_task_not_found(client):
    response = client.get("/api/tasks/999")
    assert response.status_code == 404
    assert "error" in response.json()


def test_get_task_invalid_id(client):
    response = client.get("/api/tasks/abc")
    assert response.status_code == 400


def test_list_tasks_empty(client):
    response = client.get("/api/tasks")
    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_list_active_tasks(client):
    first = create(client, "Tâche 1")
    second = create(client, "Tâche 2", tags=["x"])
    archived = create(client, "Tâche 3")
    client.post(f"/api/tasks/{archived}/archive")

    data = client.get("/api/tasks").json()
    assert [t["id"] for t in data["items"]] == [second, first]
    assert data["items"][0]["tags"] == ["x"]


def test_list_archived_pagination(client):
    for i in range(45):
        task_id = create(client, f"Task {i}")
        client.post(f"/api/tasks/{task_id}/archive")

    page1 = client.get("/api/tasks?archived=1&page=1&page_size=20").json()
    assert len(page1["items"]) == 20
    assert page1["total"] == 45
    assert page1["page"] == 1
    assert page1["page_size"] == 20
    assert page1["has_more"] == True

    page3 = client.get("/api/tasks?archived=true&page=3&page_size=20").json()
    assert len(page3["items"]) == 5
    assert page3["has_more"] == False


def test_list_archived_bad_params_fall_back(client):
    task_id = create(client)
    client.post(f"/api/tasks/{task_id}/archive")

    data = client.get("/api/tasks?archived=1&page=abc&page_size=500").json()
    assert data["page"] == 1
    assert data["page_size"] == 20
    assert data["total"] == 1

    data = client.get("/api/tasks?archived=1&page=0&page_size=-3").json()
    assert data["page"] == 1
    assert data["page_size"] == 20


def test_list_archived_search(client):
    task_id = create(client, "Deploy service")
    client.post(f"/api/tasks/{task_id}/archive")

    found = client.get("/api/tasks?archived=1&q=deploy").json()
    assert [t["id"] for t in found["items"]] == [task_id]

    missing = client.get("/api/tasks?archived=1&q=xyz123").json()
    assert missing["items"] == []
    assert missing["total"] == 0
    assert missing["has_more"] == False


# ========== TEST UPDATE ==========
def test_update_task_status(client):
    task_id = create(client)
    response = client.patch(f"/api/tasks/{task_id}/status", json={"status": "InProgress"})
    assert response.status_code == 200
    assert response.json() == {"id": task_id, "status": "InProgress"}
    assert client.get(f"/api/tasks/{task_id}").json()["status"] == "InProgress"


def test_update_task_invalid_status(client):
    task_id = create(client)
    response = client.patch(f"/api/tasks/{task_id}/status", json={"status": "in_progress"})
    assert response.status_code == 400
    assert client.get(f"/api/tasks/{task_id}").json()["status"] == "Planning"


def test_update_status_not_found(client):
    response = client.patch("/api/tasks/999/status", json={"status": "Done"})
    assert response.status_code == 404


def test_update_task_partial(client):
    task_id = create(client, "Original", description="desc", tags=["a"])

    response = client.patch(f"/api/tasks/{task_id}/update", json={"title": "Modifiée"})
    assert response.status_code == 200
    assert response.json() == {"id": task_id, "updated": True}

    data = client.get(f"/api/tasks/{task_id}").json()
    assert data["title"] == "Modifiée"
    assert data["description"] == "desc"
    assert data["tags"] == ["a"]


def test_update_task_clear_tags(client):
    task_id = create(client, tags=["a", "b"])
    client.patch(f"/api/tasks/{task_id}/update", json={"tags": []})
    assert client.get(f"/api/tasks/{task_id}").json()["tags"] == []


def test_update_task_null_tags_keeps_them(client):
    task_id = create(client, tags=["a"])
    client.patch(f"/api/tasks/{task_id}/update", json={"description": "x", "tags": None})
    assert client.get(f"/api/tasks/{task_id}").json()["tags"] == ["a"]


def test_update_task_blank_title(client):
    task_id = create(client, "Keep")
    response = client.patch(f"/api/tasks/{task_id}/update", json={"title": ""})
    assert response.status_code == 400
    assert client.get(f"/api/tasks/{task_id}").json()["title"] == "Keep"


def test_update_task_not_found(client):
    response = client.patch("/api/tasks/999/update", json={"title": "x"})
    assert response.status_code == 404


# ========== TEST ARCHIVE / RESTORE ==========
def test_archive_and_restore(client):
    task_id = create(client)
    client.patch(f"/api/tasks/{task_id}/status", json={"status": "Done"})

    response = client.post(f"/api/tasks/{task_id}/archive")
    assert response.json() == {"id": task_id, "archived": True}
    assert client.get("/api/tasks").json()["items"] == []

    response = client.post(f"/api/tasks/{task_id}/restore")
    assert response.json() == {"id": task_id, "archived": False, "status": "Planning"}

    data = client.get(f"/api/tasks/{task_id}").json()
    assert data["archived"] == False
    assert data["status"] == "Planning"


# ========== TEST COPY ==========
def test_duplicate_task(client):
    task_id = create(client, "Source", description="body", tags=["one", "two"])
    client.post(f"/api/tasks/{task_id}/archive")

    response = client.post(f"/api/tasks/{task_id}/copy")
    assert response.status_code == 201
    copy_id = response.json()["id"]
    assert copy_id != task_id

    copy = client.get(f"/api/tasks/{copy_id}").json()
    assert copy["title"] == "Source"
    assert copy["description"] == "body"
    assert sorted(copy["tags"]) == ["one", "two"]
    assert copy["archived"] == False


def test_duplicate_not_found(client):
    assert client.post("/api/tasks/999/copy").status_code == 404


# ========== TEST DELETE ==========
def test_delete_task(client):
    task_id = create(client, "À supprimer", tags=["unique-tag"])

    response = client.delete(f"/api/tasks/{task_id}")
    assert response.status_code == 200
    assert response.json() == {"id": task_id, "deleted": True}

    assert client.get(f"/api/tasks/{task_id}").status_code == 404
    assert client.get("/api/tags").json()["items"] == []


def test_delete_missing_task(client):
    response = client.delete("/api/tasks/999")
    assert response.status_code == 200
    assert response.json()["deleted"] == True


# ========== TEST TAGS ==========
def test_list_tags(client):
    create(client, "A", tags=["work", "home"])
    create(client, "B", tags=["work", "homework"])

    assert client.get("/api/tags").json() == {"items": ["home", "homework", "work"]}
    assert client.get("/api/tags?q=home").json() == {"items": ["home", "homework"]}


def test_list_archived_odd_page_values_fall_back(client):
    task_id = create(client)
    client.post(f"/api/tasks/{task_id}/archive")

    for query in ("page=%C2%B3", "page=99999999999999999999", "page_size=%C2%B2"):
        response = client.get(f"/api/tasks?archived=1&{query}")
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["page_size"] == 20
        assert [t["id"] for t in data["items"]] == [task_id]


def test_task_id_out_of_range(client):
    huge = "99999999999999999999"
    responses = [
        client.get(f"/api/tasks/{huge}"),
        client.patch(f"/api/tasks/{huge}/status", json={"status": "Done"}),
        client.patch(f"/api/tasks/{huge}/update", json={"title": "x"}),
        client.post(f"/api/tasks/{huge}/archive"),
        client.post(f"/api/tasks/{huge}/restore"),
        client.post(f"/api/tasks/{huge}/copy"),
        client.delete(f"/api/tasks/{huge}"),
    ]
    for response in responses:
        assert response.status_code == 400
        assert "error" in response.json()
