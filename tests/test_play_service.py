from fastapi.testclient import TestClient

from server.play_service import create_app
from whot.deck import build_deck
from whot.game import create_session
from whot.service import GameService


def make_client():
    return TestClient(create_app(GameService()))


def start(client, **payload):
    response = client.post("/session/start", json=payload)
    assert response.status_code == 200
    return response.json()


def test_start_practice_session():
    client = make_client()
    body = start(client, mode="practice", perspective="player1", seed=1)

    state = body["state"]
    assert body["session_id"] == state["session_id"]
    assert state["active_participant"] == "player1"
    assert len(state["hand"]) == 5
    assert [p["participant_id"] for p in state["participants"]] == ["player1", "ai"]


def test_unknown_session_is_404():
    client = make_client()
    response = client.get("/session/nope")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_wrong_turn_and_foreign_card():
    client = make_client()
    session_id = start(client, mode="practice", seed=2)["session_id"]

    response = client.post(f"/session/{session_id}/draw", json={"participant_id": "ai"})
    assert response.status_code == 409
    assert response.json()["code"] == "wrong_turn"

    response = client.post(
        f"/session/{session_id}/play",
        json={"participant_id": "player1", "card_uid": "not-a-card"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "card_not_owned"


def test_draw_then_ai_turn():
    client = make_client()
    session_id = start(client, mode="practice", seed=3)["session_id"]

    response = client.post(f"/session/{session_id}/draw", json={"participant_id": "player1"})
    assert response.status_code == 200
    assert response.json()["state"]["active_participant"] == "ai"

    response = client.post(f"/session/{session_id}/ai-turn", json={"perspective": "player1"})
    assert response.status_code == 200
    state = response.json()["state"]
    assert state["winner"] is not None or state["active_participant"] == "player1"


def test_bad_requests():
    client = make_client()
    assert client.post("/session/start", json={"mode": "ranked"}).status_code == 422
    response = client.post("/session/start", json={"mode": "free"})
    assert response.status_code == 400
    assert response.json()["code"] == "bad_request"


def test_play_whot_with_requested_shape():
    deck = build_deck()
    whot = next(card for card in deck if card.is_wild)
    deck.remove(whot)
    service = GameService()
    session_id = service.registry.add(create_session(["player1", "ai"], "practice", deck=[whot] + deck))
    client = TestClient(create_app(service))

    response = client.post(
        f"/session/{session_id}/play",
        json={"participant_id": "player1", "card_uid": whot.uid, "requested_shape": "star"},
    )

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["requested_shape"] == "star"
    assert state["active_participant"] == "player1"
    assert state["discard_top"]["uid"] == whot.uid
    assert len(state["hand"]) == 4

    response = client.post(
        f"/session/{session_id}/play",
        json={"participant_id": "player1", "card_uid": state["hand"][0]["uid"]},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "illegal_move"
