"""
API endpoint tests.
"""

import json

import pytest
from httpx import AsyncClient

ANALYSIS_JSON = json.dumps({
    "tone": ["bold", "plainspoken", "optimistic"],
    "sentence_style": "short",
    "vocabulary": "conversational",
    "signature_phrases": ["Real talk:"],
    "topics": ["startups"],
    "avoid": ["jargon"],
    "raw_summary": "Short lines, lots of white space.",
})


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert data["endpoints"]["cascade"] == "/api/v1/cascade"


@pytest.mark.asyncio
async def test_analyze_voice_endpoint(client: AsyncClient, fake_llm):
    """Onboarding returns the new user id and camelCase profile."""
    fake_llm.reply = f"Sure:\n{ANALYSIS_JSON}"

    response = await client.post(
        "/api/v1/analyze-voice",
        json={
            "userInfo": {
                "name": "Sam Ortiz",
                "role": "Founder",
                "company": "Tiny Co",
                "industry": "SaaS",
            },
            "samples": ["post one", "post two"],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["userId"]
    profile = data["voiceProfile"]
    assert profile["userId"] == data["userId"]
    assert profile["sentenceStyle"] == "short"
    assert profile["signaturePhrases"] == ["Real talk:"]
    assert profile["samples"] == ["post one", "post two"]


@pytest.mark.asyncio
async def test_analyze_voice_too_few_samples(client: AsyncClient):
    response = await client.post(
        "/api/v1/analyze-voice",
        json={
            "userInfo": {"name": "Sam", "role": "Founder", "company": "Tiny", "industry": "SaaS"},
            "samples": ["only one"],
        },
    )
    assert response.status_code == 400
    assert response.json() == {"error": "At least 2 writing samples are required."}


@pytest.mark.asyncio
async def test_analyze_voice_parse_failure(client: AsyncClient, fake_llm):
    fake_llm.reply = "not json at all"

    response = await client.post(
        "/api/v1/analyze-voice",
        json={
            "userInfo": {"name": "Sam", "role": "Founder", "company": "Tiny", "industry": "SaaS"},
            "samples": ["one", "two"],
        },
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse voice analysis response."}


@pytest.mark.asyncio
async def test_cascade_endpoint(client: AsyncClient, fake_llm, make_user):
    """Mixed outcome: the request succeeds and each row reports its own result."""
    ann = await make_user("Ann", role="CTO", company="Initech")
    bob = await make_user("Bob")
    fake_llm.replies_by_name = {"Ann": "Hello world", "Bob": ConnectionError("reset")}

    response = await client.post(
        "/api/v1/cascade",
        json={
            "masterContent": "We hit 1M users",
            "userIds": [ann.id, bob.id],
            "createdById": "manager-1",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["cascadeJobId"]

    success, failure = data["results"]
    assert success == {
        "userId": ann.id,
        "draftId": success["draftId"],
        "content": "Hello world",
        "userName": "Ann",
        "userRole": "CTO",
        "userCompany": "Initech",
    }
    assert success["draftId"]
    assert failure["userId"] == bob.id
    assert failure["draftId"] == ""
    assert failure["content"] == ""
    assert failure["error"] == "Generation failed for this user."

    job = await client.get(f"/api/v1/cascade/{data['cascadeJobId']}")
    assert job.status_code == 200
    job_data = job.json()
    assert job_data["status"] == "complete"
    assert job_data["masterContent"] == "We hit 1M users"
    assert job_data["createdById"] == "manager-1"
    assert [d["id"] for d in job_data["drafts"]] == [success["draftId"]]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"userIds": ["x"], "createdById": "c"}, "masterContent is required."),
        ({"masterContent": "Hi", "userIds": [], "createdById": "c"}, "Select at least one team member."),
        ({"masterContent": "Hi", "userIds": ["x"]}, "createdById is required."),
        (
            {"masterContent": "Hi", "userIds": ["nobody"], "createdById": "c"},
            "None of the selected users have completed voice onboarding.",
        ),
    ],
)
async def test_cascade_rejects_bad_requests(client: AsyncClient, payload, message):
    response = await client.post("/api/v1/cascade", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_cascade_job_not_found(client: AsyncClient):
    response = await client.get("/api/v1/cascade/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Cascade job not found."}


@pytest.mark.asyncio
async def test_generate_and_edit_draft(client: AsyncClient, fake_llm, make_user):
    user = await make_user("Ann")
    fake_llm.reply = "My take on hiring."

    response = await client.post(
        "/api/v1/generate-draft",
        json={"userId": user.id, "topic": "Hiring", "rawNotes": "- juniors"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["content"] == "My take on hiring."
    draft_id = data["draftId"]

    response = await client.patch(
        f"/api/v1/drafts/{draft_id}",
        json={"content": "Edited", "status": "approved"},
    )
    assert response.status_code == 200
    draft = response.json()["draft"]
    assert draft["content"] == "Edited"
    assert draft["status"] == "approved"
    assert draft["cascadeJobId"] is None

    response = await client.get("/api/v1/drafts", params={"userId": user.id})
    assert [d["id"] for d in response.json()["drafts"]] == [draft_id]


@pytest.mark.asyncio
async def test_generate_draft_errors(client: AsyncClient, make_user):
    response = await client.post("/api/v1/generate-draft", json={"topic": "Hiring"})
    assert response.status_code == 400
    assert response.json() == {"error": "userId and topic are required."}

    response = await client.post("/api/v1/generate-draft", json={"userId": "missing", "topic": "Hiring"})
    assert response.status_code == 404
    assert response.json() == {"error": "User not found."}

    bare = await make_user("Bare", with_profile=False)
    response = await client.post("/api/v1/generate-draft", json={"userId": bare.id, "topic": "Hiring"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_draft_errors(client: AsyncClient, draft_service, make_user):
    user = await make_user("Ann")
    draft = await draft_service.create_draft(user.id, "v1", "Topic")

    response = await client.patch(f"/api/v1/drafts/{draft.id}", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No fields to update."}

    response = await client.patch(f"/api/v1/drafts/{draft.id}", json={"status": "posted"})
    assert response.status_code == 400

    response = await client.patch("/api/v1/drafts/missing", json={"content": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Draft not found."}


@pytest.mark.asyncio
async def test_users_endpoints(client: AsyncClient, make_user):
    ann = await make_user("Ann")
    bare = await make_user("Bare", with_profile=False)

    response = await client.get("/api/v1/users")
    assert response.status_code == 200
    users = {u["id"]: u for u in response.json()["users"]}
    assert users[ann.id]["voiceProfile"]["tone"] == ["direct", "warm", "curious"]
    assert users[bare.id]["voiceProfile"] is None

    response = await client.get(f"/api/v1/users/{ann.id}")
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Ann"

    response = await client.get("/api/v1/users/missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unexpected_error_is_generic(client: AsyncClient, draft_service, make_user, monkeypatch):
    user = await make_user("Ann")
    draft = await draft_service.create_draft(user.id, "v1", "Topic")

    async def broken(*args, **kwargs):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr("dispatch.services.draft_service.DraftService.get_draft", broken)

    response = await client.get(f"/api/v1/drafts/{draft.id}")
    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong. Please try again."}


@pytest.mark.asyncio
async def test_provider_error_text_is_not_returned(client: AsyncClient, make_user):
    from dispatch.api.deps import get_llm_client
    from dispatch.api.main import app
    from dispatch.core.llm_clients import BaseLLMClient, LLMClient, LLMProvider

    class RejectingProvider(BaseLLMClient):
        async def generate(self, messages, model=None, temperature=None, max_tokens=None):
            raise RuntimeError("401 invalid x-api-key sk-ant-SECRET")

        async def close(self) -> None:
            pass

    llm = LLMClient(default_provider=LLMProvider.ANTHROPIC)
    llm._anthropic = RejectingProvider()
    app.dependency_overrides[get_llm_client] = lambda: llm

    user = await make_user("Ann")
    response = await client.post(
        "/api/v1/generate-draft",
        json={"userId": user.id, "topic": "Hiring"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong. Please try again."}
    assert "sk-ant" not in response.text


@pytest.mark.asyncio
async def test_null_fields_are_reported_as_missing(client: AsyncClient):
    response = await client.post(
        "/api/v1/cascade",
        json={"masterContent": None, "userIds": ["x"], "createdById": "c"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "masterContent is required."}

    response = await client.post(
        "/api/v1/generate-draft",
        json={"userId": None, "topic": "Hiring"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "userId and topic are required."}


@pytest.mark.asyncio
async def test_wrongly_typed_field_is_a_400(client: AsyncClient):
    response = await client.post(
        "/api/v1/cascade",
        json={"masterContent": "Hi", "userIds": "x", "createdById": "c"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid value for userIds."}
