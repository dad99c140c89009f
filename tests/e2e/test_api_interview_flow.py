from config.settings import settings


ANSWER = "I would split the monolith into services, add caching and measure latency before and after."


def _start(client, **body):
    resp = client.post("/api/interview/start", json=body or {"domainId": "web-development"})
    assert resp.status_code == 200
    return resp.json()


def test_start_without_llm_uses_fallback_question(client):
    body = _start(client)

    assert body["sessionId"]
    assert body["firstQ"]["id"] == "q1"
    assert body["firstQ"]["source"] == "fallback"
    assert "web-development" in body["firstQ"]["text"]
    assert body["progress"] == {"current": 0, "total": 6}


def test_start_accepts_domain_aliases(client):
    assert _start(client, domain="data-science")["firstQ"]["text"].endswith("data-science.")
    assert "devops" in _start(client, domain_id="devops")["firstQ"]["text"]


def test_start_requires_domain(client):
    resp = client.post("/api/interview/start", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "domainId (or domain) is required"}


def test_answer_validation_and_unknown_session(client):
    missing = client.post("/api/interview/answer", json={"sessionId": "abc"})
    assert missing.status_code == 400
    assert missing.json() == {"error": "sessionId and candidateText are required"}

    unknown = client.post("/api/interview/answer", json={"sessionId": "nope", "candidateText": ANSWER})
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "session not found"}


def test_full_interview_with_llm(client, fake_llm):
    session_id = _start(client)["sessionId"]
    assert fake_llm.count("technical interviewer") == 1

    last = None
    for index in range(1, 7):
        resp = client.post(
            "/api/interview/answer",
            json={"sessionId": session_id, "questionId": f"q{index}", "candidateText": ANSWER},
        )
        assert resp.status_code == 200
        last = resp.json()
        assert last["feedbackSource"] == "generated"
        assert last["progress"] == {"current": index, "total": 6}
        if index < 6:
            assert last["nextQuestion"]["id"] == f"q{index + 1}"
            assert last["nextQuestion"]["text"] == fake_llm.reply

    assert last["nextQuestion"] is None
    # no question is generated after the final answer
    assert fake_llm.count("technical interviewer") == 6
    assert fake_llm.count("constructive feedback") == 6

    finish = client.post("/api/interview/finish", json={"sessionId": session_id})
    assert finish.status_code == 200
    summary = finish.json()["summary"]
    assert summary["answered"] == 6
    assert summary["questionsAsked"] == 6
    assert summary["source"] == "generated"

    again = client.post("/api/interview/finish", json={"sessionId": session_id})
    assert again.status_code == 404
    assert again.json() == {"error": "session not found"}


def test_answer_fallback_feedback_reports_completeness(client):
    session_id = _start(client)["sessionId"]

    resp = client.post("/api/interview/answer", json={"sessionId": session_id, "candidateText": "Short answer."})

    assert resp.status_code == 200
    body = resp.json()
    assert body["feedbackSource"] == "fallback"
    assert body["feedback"].startswith("Good answer with 2% completeness.")
    assert "Discuss a project related to web-development" in body["nextQuestion"]["text"]


def test_finish_without_answers_uses_fallback_summary(client):
    session_id = _start(client)["sessionId"]

    resp = client.post("/api/interview/finish", json={"sessionId": session_id})

    assert resp.status_code == 200
    summary = resp.json()["summary"]
    assert summary["source"] == "fallback"
    assert summary["text"].startswith("You answered 0 of 6 questions on web-development.")


def test_finish_requires_session_id(client):
    resp = client.post("/api/interview/finish", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "sessionId is required"}


def test_uploaded_chunks_reach_the_question_prompt(client, fake_llm):
    upload = client.post(
        "/api/rag/upload",
        json={"domainId": "devops", "text": "Kubernetes schedules pods onto nodes using resource requests."},
    )
    assert upload.status_code == 200

    _start(client, domainId="devops")

    assert "Kubernetes schedules pods" in fake_llm.calls[0]["user"]


def test_upstream_questions_are_used_when_no_chunks(client, fake_llm):
    from config.registry import UPSTREAM_KEY, bind_model

    bind_model(UPSTREAM_KEY, lambda domain, limit: [f"What is a {domain} pipeline?"])

    _start(client, domainId="ml")

    assert "Sample question: What is a ml pipeline?" in fake_llm.calls[0]["user"]


def test_flow_on_sqlite_backend(client, monkeypatch, tmp_path):
    from storage import reset_stores

    monkeypatch.setattr(settings, "STORE_BACKEND", "sqlite")
    monkeypatch.setattr(settings, "DB_PATH", str(tmp_path / "flow.db"))
    reset_stores()

    session_id = _start(client)["sessionId"]
    resp = client.post("/api/interview/answer", json={"sessionId": session_id, "candidateText": ANSWER})
    assert resp.status_code == 200
    assert resp.json()["progress"]["current"] == 1

    assert client.post("/api/interview/finish", json={"sessionId": session_id}).status_code == 200


def test_overlong_domain_falls_back_without_orphaning_a_session(client):
    from storage import SESSIONS, get_store

    domain = "d" * 300

    resp = client.post("/api/interview/start", json={"domainId": domain})

    assert resp.status_code == 200
    body = resp.json()
    assert body["firstQ"]["source"] == "fallback"
    assert domain in body["firstQ"]["text"]
    assert get_store(SESSIONS).keys() == [body["sessionId"]]


def test_unreachable_ollama_host_yields_fallback(client, monkeypatch):
    from config.registry import GENERATE_KEY, unbind_model

    unbind_model(GENERATE_KEY)
    monkeypatch.setattr(settings, "OLLAMA_HOST", "http://127.0.0.1:9")
    monkeypatch.setattr(settings, "OLLAMA_TIMEOUT_S", 2.0)

    body = _start(client)

    assert body["firstQ"] == {
        "id": "q1",
        "text": "Introduce yourself and explain your experience in web-development.",
        "source": "fallback",
    }


def test_partial_session_summary_counts_asked_questions(client):
    session_id = _start(client)["sessionId"]
    client.post("/api/interview/answer", json={"sessionId": session_id, "candidateText": ANSWER})

    summary = client.post("/api/interview/finish", json={"sessionId": session_id}).json()["summary"]

    # q1 answered and q2 asked but unanswered
    assert summary["questionsAsked"] == 2
    assert summary["answered"] == 1


def test_answer_after_finish_is_not_found(client):
    session_id = _start(client)["sessionId"]
    client.post("/api/interview/finish", json={"sessionId": session_id})

    resp = client.post("/api/interview/answer", json={"sessionId": session_id, "candidateText": ANSWER})

    assert resp.status_code == 404
    assert resp.json() == {"error": "session not found"}
