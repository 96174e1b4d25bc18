"""
Tests for insight generation: prompt contents, LLM request shape and
failure mapping. The provider is replaced by an in-process fetcher.
"""

import json
from types import SimpleNamespace

import httpx
import pytest

from app.services.analysis_service import build_insights_prompt, select_low_scoring
from app.services.llm_client import LLMClient, LLMError, LLMNotConfiguredError
from tests.conftest import FakeFetcher, login

INSIGHTS = {
    "executiveSummary": "Solid foundations with gaps in definition.",
    "keyStrengths": ["Clear ownership"],
    "criticalGaps": ["No process maps"],
    "actionItems": [
        {
            "priority": "High",
            "title": "Map core processes",
            "description": "Document the top five processes.",
            "criterion": "Define",
            "estimatedImpact": "Faster onboarding",
        }
    ],
    "implementationTimeline": {
        "immediate": ["Pick process owners"],
        "shortTerm": ["Draft maps"],
        "longTerm": ["Quarterly reviews"],
    },
}


def completion_payload(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.unit
def test_low_scoring_selection_is_capped_and_skips_unknown_questions():
    questions = [SimpleNamespace(id=i, question_text=f"Question {i}") for i in range(1, 16)]
    answers = [SimpleNamespace(question_id=999, score=1)]
    answers += [SimpleNamespace(question_id=i, score=1 if i % 2 else 2) for i in range(1, 14)]
    answers += [SimpleNamespace(question_id=14, score=3), SimpleNamespace(question_id=15, score=None)]

    lines = select_low_scoring(answers, questions)

    assert len(lines) == 10
    assert lines[0] == "- Question 1 (Score: 1/5)"
    assert all("Question 14" not in line and "Question 15" not in line for line in lines)


@pytest.mark.unit
def test_prompt_lists_criteria_and_low_scores():
    criterion_scores = [
        SimpleNamespace(criterion_number=1, criterion_name="Recognize", average_score=3.0,
                        answered_questions=2, total_questions=3),
    ]

    prompt = build_insights_prompt(
        assessment_type_name="Business Control",
        company_name="Acme Ltd",
        industry=None,
        criterion_scores=criterion_scores,
        low_scoring=["- Recognize question 1 (Score: 2/5)"],
    )

    assert "Assessment Type: Business Control" in prompt
    assert "Client: Acme Ltd" in prompt
    assert "Industry: Not specified" in prompt
    assert "- Criterion 1 (Recognize): 3.00/5 (2/3 questions answered)" in prompt
    assert "- Recognize question 1 (Score: 2/5)" in prompt
    assert '"executiveSummary"' in prompt


@pytest.mark.unit
@pytest.mark.asyncio
async def test_llm_client_requires_api_key():
    client = LLMClient(api_key="", fetcher=FakeFetcher())

    with pytest.raises(LLMNotConfiguredError):
        await client.complete_json("system", "user", "assessment_analysis", {})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_llm_client_sends_schema_constrained_request():
    fetcher = FakeFetcher(payload=completion_payload('{"ok": true}'))
    client = LLMClient(endpoint="https://llm.example/v1/chat", api_key="k", model="m", fetcher=fetcher)

    result = await client.complete_json("system", "user", "assessment_analysis", {"type": "object"})

    assert result == {"ok": True}
    call = fetcher.calls[0]
    assert call["url"] == "https://llm.example/v1/chat"
    assert call["headers"]["Authorization"] == "Bearer k"
    assert call["body"]["model"] == "m"
    assert [m["role"] for m in call["body"]["messages"]] == ["system", "user"]
    response_format = call["body"]["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "assessment_analysis"
    assert response_format["json_schema"]["strict"] is True


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,payload",
    [
        (500, {"error": "boom"}),
        (200, {"choices": []}),
        (200, completion_payload("not json")),
        (200, completion_payload(None)),
    ],
)
async def test_llm_client_failures_raise_llm_error(status_code, payload):
    client = LLMClient(api_key="k", fetcher=FakeFetcher(status_code=status_code, payload=payload))

    with pytest.raises(LLMError) as exc_info:
        await client.complete_json("system", "user", "assessment_analysis", {})

    assert exc_info.value.status_code == 502
    assert exc_info.value.code == "insight_generation_failed"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_llm_client_wraps_transport_errors():
    async def failing_fetcher(url, body, headers):
        raise httpx.ConnectError("connection refused")

    client = LLMClient(api_key="k", fetcher=failing_fetcher)

    with pytest.raises(LLMError):
        await client.complete_json("system", "user", "assessment_analysis", {})


async def completed_assessment(api_client, seeded_type):
    assessment_type, questions = seeded_type
    await login(api_client)
    client_id = (await api_client.post("/clients", json={"company_name": "Acme Ltd"})).json()["id"]
    assessment_id = (
        await api_client.post(
            "/assessments",
            json={"client_id": client_id, "assessment_type_id": assessment_type.id, "title": "Q3 review"},
        )
    ).json()["id"]
    await api_client.post(
        "/answers/batch",
        json={
            "assessment_id": assessment_id,
            "answers": [
                {"question_id": questions[0].id, "score": 1},
                {"question_id": questions[1].id, "score": 5},
                {"question_id": questions[3].id, "score": 2},
            ],
        },
    )
    await api_client.post(f"/assessments/{assessment_id}/complete")
    return assessment_id


@pytest.mark.asyncio
async def test_generate_insights_endpoint(api_client, seeded_type, fake_fetcher):
    fake_fetcher.payload = completion_payload(json.dumps(INSIGHTS))
    assessment_id = await completed_assessment(api_client, seeded_type)

    response = await api_client.post(f"/analysis/{assessment_id}/insights")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["executive_summary"] == INSIGHTS["executiveSummary"]
    assert body["action_items"][0]["estimated_impact"] == "Faster onboarding"
    assert body["implementation_timeline"]["short_term"] == ["Draft maps"]

    prompt = fake_fetcher.calls[0]["body"]["messages"][1]["content"]
    assert "Client: Acme Ltd" in prompt
    assert "- Recognize question 1 (Score: 1/5)" in prompt
    assert "- Define question 1 (Score: 2/5)" in prompt
    assert "Recognize question 2" not in prompt


@pytest.mark.asyncio
async def test_generate_insights_maps_provider_failure_to_502(api_client, seeded_type, fake_fetcher):
    fake_fetcher.status_code = 503
    fake_fetcher.payload = {"error": "overloaded"}
    assessment_id = await completed_assessment(api_client, seeded_type)

    response = await api_client.post(f"/analysis/{assessment_id}/insights")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "insight_generation_failed"


@pytest.mark.asyncio
async def test_generate_insights_rejects_off_schema_content(api_client, seeded_type, fake_fetcher):
    fake_fetcher.payload = completion_payload(json.dumps({"executiveSummary": "only this"}))
    assessment_id = await completed_assessment(api_client, seeded_type)

    response = await api_client.post(f"/analysis/{assessment_id}/insights")

    assert response.status_code == 502


@pytest.mark.asyncio
async def test_generate_insights_for_unknown_assessment_is_not_found(api_client, fake_fetcher):
    await login(api_client)

    response = await api_client.post("/analysis/4242/insights")

    assert response.status_code == 404
    assert fake_fetcher.calls == []
