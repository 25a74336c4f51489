import os, sys

from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
from pinsheet.main import app

client = TestClient(app)

BASE = "/api/v0/stats"


def _strike_frames(game_id):
    full = list(range(1, 11))
    strike = {"ballNumber": 1, "pinsKnockedDown": 10, "pinsetBefore": full, "pinsetAfter": []}
    frames = [{"frameNumber": n, "gameId": game_id, "balls": [strike]} for n in range(1, 10)]
    frames.append(
        {
            "frameNumber": 10,
            "gameId": game_id,
            "balls": [dict(strike, ballNumber=n) for n in (1, 2, 3)],
        }
    )
    return frames


def _leave_frame(game_id, number, leave, converted):
    full = list(range(1, 11))
    return {
        "frameNumber": number,
        "gameId": game_id,
        "balls": [
            {
                "ballNumber": 1,
                "pinsKnockedDown": 10 - len(leave),
                "pinsetBefore": full,
                "pinsetAfter": leave,
            },
            {
                "ballNumber": 2,
                "pinsKnockedDown": len(leave) if converted else 0,
                "pinsetBefore": leave,
                "pinsetAfter": [] if converted else leave,
            },
        ],
    }


GAMES = [
    {"id": "g1", "playerId": "p1", "totalScore": 300, "mode": "league", "createdAt": "2024-03-02T18:00:00Z"},
    {"id": "g2", "playerId": "p1", "totalScore": 150, "createdAt": "2024-03-01T18:00:00Z"},
    {"id": "g3", "playerId": "p1", "totalScore": 60, "isComplete": False, "createdAt": "2024-03-03T18:00:00Z"},
]


def test_player_stats():
    frames = _strike_frames("g1") + [
        _leave_frame("g2", 1, [7, 10], False),
        _leave_frame("g2", 2, [7, 10], True),
        _leave_frame("g2", 3, [10], True),
    ]
    resp = client.post(f"{BASE}/player", json={"games": GAMES, "frames": frames})
    assert resp.status_code == 200
    data = resp.json()
    assert data["playerId"] == "p1"
    assert data["totalGames"] == 2
    assert data["averageScore"] == 225
    assert data["highGame"] == 300
    # 9 strikes, 2 spares and 1 open across 12 regular frames
    assert data["strikePercentage"] == 75
    assert data["sparePercentage"] == 16.7
    assert data["openFramesPercentage"] == 8.3
    assert data["commonLeaves"][0] == {"pinset": [7, 10], "count": 2, "conversionRate": 50.0}
    assert data["commonLeaves"][1] == {"pinset": [10], "count": 1, "conversionRate": 100.0}


def test_player_stats_respects_limit():
    body = {"games": GAMES, "frames": _strike_frames("g1"), "limit": 1}
    resp = client.post(f"{BASE}/player", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalGames"] == 1
    assert data["averageScore"] == 300
    assert data["strikePercentage"] == 100


def test_player_stats_without_games():
    resp = client.post(f"{BASE}/player", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalGames"] == 0
    assert data["commonLeaves"] == []


def test_player_stats_rejects_bad_limit():
    resp = client.post(f"{BASE}/player", json={"games": GAMES, "limit": 0})
    assert resp.status_code == 422


def test_team_stats():
    body = {
        "players": {
            "a": {"averageScore": 150, "highGame": 180, "strikePercentage": 20, "sparePercentage": 40},
            "b": {"averageScore": 101, "highGame": 210, "strikePercentage": 15, "sparePercentage": 35},
        }
    }
    resp = client.post(f"{BASE}/team", json=body)
    assert resp.status_code == 200
    assert resp.json() == {
        "averageScore": 125.5,
        "highGame": 210,
        "strikePercentage": 17.5,
        "sparePercentage": 37.5,
        "pooled": None,
    }


def test_team_stats_with_pooled_games():
    body = {
        "players": {"p1": {"averageScore": 225, "highGame": 300}},
        "games": {"p1": GAMES, "p2": [{"id": "g4", "playerId": "p2", "totalScore": 90}]},
    }
    resp = client.post(f"{BASE}/team", json=body)
    assert resp.status_code == 200
    # g3 is unfinished and left out
    assert resp.json()["pooled"] == {
        "players": 2,
        "totalGames": 3,
        "averageScore": 180.0,
        "highGame": 300,
    }


def test_session_stats():
    games = [dict(GAMES[0], sessionId="s1"), dict(GAMES[1], sessionId="s2")]
    frames = _strike_frames("g1") + [_leave_frame("g2", 1, [7, 10], False)]
    resp = client.post(
        f"{BASE}/session", json={"sessionId": "s1", "games": games, "frames": frames}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalGames"] == 1
    assert data["averageScore"] == 300
    assert data["commonLeaves"] == []


def test_mixed_naive_and_aware_dates():
    games = [
        {"id": "g1", "playerId": "p1", "totalScore": 200, "createdAt": "2024-03-01T00:00:00"},
        {"id": "g2", "playerId": "p1", "totalScore": 100, "createdAt": "2024-03-02T00:00:00Z"},
    ]
    resp = client.post(f"{BASE}/dashboard", json={"games": games})
    assert resp.status_code == 200
    data = resp.json()
    assert [g["id"] for g in data["games"]] == ["g2", "g1"]
    assert data["rollingAverage"] == [200, 150]


def test_player_stats_rejects_inconsistent_ball():
    frame = {
        "frameNumber": 1,
        "gameId": "g1",
        "balls": [
            {
                "ballNumber": 1,
                "pinsKnockedDown": 3,
                "pinsetBefore": list(range(1, 11)),
                "pinsetAfter": [],
            }
        ],
    }
    resp = client.post(f"{BASE}/player", json={"games": GAMES[:1], "frames": [frame]})
    assert resp.status_code == 422


def test_dashboard():
    resp = client.post(f"{BASE}/dashboard", json={"games": GAMES, "frames": _strike_frames("g1")})
    assert resp.status_code == 200
    data = resp.json()
    assert [g["id"] for g in data["games"]] == ["g1", "g2"]
    assert data["games"][0]["score"] == 300
    assert data["games"][0]["mode"] == "league"
    assert data["rollingAverage"] == [150, 225]
    assert data["stats"]["highGame"] == 300
    assert set(data["pinFrequency"]) == {str(p) for p in range(1, 11)}
