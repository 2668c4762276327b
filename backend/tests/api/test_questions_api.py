"""Questions API — create, list, fetch and delete over HTTP.

Tests:
    - POST /questions → 201 with a server-assigned id; blank/missing text → 400
    - Malformed or non-object JSON → 400 "invalid json body"
    - GET /questions lists newest first with no answers key
    - GET /questions/{id} includes answers; missing → 404
    - Answers posted concurrently still come back in (created_at, id) order
    - DELETE /questions/{id} → 204 then 404 for question and its answers
"""

import asyncio
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from qa_api.api.dependencies import get_store
from qa_api.infrastructure.database import DatabaseSessionManager
from qa_api.main import app
from qa_api.services.qa_storage import QAStorage


async def _create_question(client, text="What is X?"):
    res = await client.post("/questions", json={"text": text})
    assert res.status_code == 201
    return res.json()


async def test_create_question_returns_201(client):
    res = await client.post("/questions", json={"text": "What is X?"})

    assert res.status_code == 201
    assert res.headers["content-type"].startswith("application/json")
    body = res.json()
    assert body["id"] > 0
    assert body["text"] == "What is X?"
    assert "created_at" in body
    assert "answers" not in body


async def test_create_question_ids_are_unique(client):
    first = await _create_question(client, "one")
    second = await _create_question(client, "two")
    assert first["id"] != second["id"]


async def test_create_question_strips_text(client):
    body = await _create_question(client, "  padded?  ")
    assert body["text"] == "padded?"


@pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "   "}, {"text": None}])
async def test_create_question_requires_text(client, payload):
    res = await client.post("/questions", json=payload)
    assert res.status_code == 400
    assert res.json() == {"error": "text is required"}


@pytest.mark.parametrize("content", [b"{not json", b"", b"[1, 2]", b'"text"'])
async def test_create_question_rejects_bad_json(client, content):
    res = await client.post(
        "/questions", content=content,
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "invalid json body"}


async def test_list_questions_newest_first_without_answers(client):
    older = await _create_question(client, "older")
    newer = await _create_question(client, "newer")
    await client.post(
        f"/questions/{older['id']}/answers",
        json={"user_id": "u1", "text": "answer"},
    )

    res = await client.get("/questions")

    assert res.status_code == 200
    listed = res.json()
    assert [q["id"] for q in listed] == [newer["id"], older["id"]]
    assert all("answers" not in q for q in listed)


async def test_list_questions_empty(client):
    res = await client.get("/questions")
    assert res.status_code == 200
    assert res.json() == []


async def test_get_question_includes_answers_in_creation_order(client):
    question = await _create_question(client)
    answer_ids = []
    for i in range(3):
        res = await client.post(
            f"/questions/{question['id']}/answers",
            json={"user_id": f"u{i}", "text": f"answer {i}"},
        )
        answer_ids.append(res.json()["id"])

    res = await client.get(f"/questions/{question['id']}")

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == question["id"]
    assert [a["id"] for a in body["answers"]] == answer_ids


async def test_get_question_without_answers_has_empty_list(client):
    question = await _create_question(client)
    res = await client.get(f"/questions/{question['id']}")
    assert res.json()["answers"] == []


async def test_get_missing_question_returns_404(client):
    res = await client.get("/questions/999")
    assert res.status_code == 404
    assert res.json() == {"error": "question not found"}


async def test_delete_question_cascades(client):
    question = await _create_question(client)
    answer = (await client.post(
        f"/questions/{question['id']}/answers",
        json={"user_id": "u1", "text": "X is Y"},
    )).json()

    res = await client.delete(f"/questions/{question['id']}")

    assert res.status_code == 204
    assert res.content == b""
    assert (await client.get(f"/questions/{question['id']}")).status_code == 404
    gone = await client.get(f"/answers/{answer['id']}")
    assert gone.status_code == 404
    assert gone.json() == {"error": "answer not found"}


async def test_delete_missing_question_returns_404(client):
    res = await client.delete("/questions/999")
    assert res.status_code == 404
    assert res.json() == {"error": "question not found"}


async def test_delete_question_twice(client):
    question = await _create_question(client)
    assert (await client.delete(f"/questions/{question['id']}")).status_code == 204
    assert (await client.delete(f"/questions/{question['id']}")).status_code == 404


# ─── Concurrency ────────────────────────────────────────────────

@pytest.fixture
async def pooled_client(tmp_path):
    """Client over a file database so concurrent requests get separate connections."""
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'qa.db'}")
    await manager.create_schema()
    app.dependency_overrides[get_store] = lambda: QAStorage(manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await manager.dispose()


async def test_concurrent_answers_come_back_in_creation_order(pooled_client):
    question = await _create_question(pooled_client)
    url = f"/questions/{question['id']}/answers"

    results = await asyncio.gather(*(
        pooled_client.post(url, json={"user_id": f"u{i}", "text": f"answer {i}"})
        for i in range(8)
    ))
    assert [r.status_code for r in results] == [201] * 8

    res = await pooled_client.get(f"/questions/{question['id']}")

    answers = res.json()["answers"]
    assert len(answers) == 8
    assert {a["id"] for a in answers} == {r.json()["id"] for r in results}
    keys = [(datetime.fromisoformat(a["created_at"]), a["id"]) for a in answers]
    assert keys == sorted(keys)
