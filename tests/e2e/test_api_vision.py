def test_reference_requires_fields(client):
    resp = client.post("/api/vision/reference", json={"sessionId": "s"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "sessionId and imageBase64 are required"}


def test_verify_depends_on_reference(client):
    before = client.post("/api/vision/verify", json={"sessionId": "s", "imageBase64": "frame"}).json()
    assert before["ok"] is False
    assert before["matchScore"] == 0.0
    assert before["facesCount"] == 1
    assert before["headPose"] == {"pitch": 2, "yaw": -1, "roll": 0}

    assert client.post("/api/vision/reference", json={"sessionId": "s", "imageBase64": "ref"}).json() == {"ok": True}

    after = client.post("/api/vision/verify", json={"sessionId": "s", "imageBase64": "frame"}).json()
    assert after["ok"] is True
    assert after["matchScore"] == 0.97
    assert after["multipleFaces"] is False
    assert after["lookingAway"] is False


def test_event_ingestion(client):
    assert client.post("/api/vision/event", json={"sessionId": "s"}).status_code == 400

    resp = client.post("/api/vision/event", json={"sessionId": "s", "type": "tab_switch", "severity": "medium"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_event_rejects_unknown_severity(client):
    resp = client.post("/api/vision/event", json={"sessionId": "s", "type": "x", "severity": "critical"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid request body"
