#!/usr/bin/env python3
"""
Call the API to assign a full board and resolve one game.
Run with the API already up: uvicorn squares.api:app --reload --port 8000

  python3 scripts/try_api.py
"""
from __future__ import annotations

import json
import sys

try:
    import httpx
except ImportError:
    print("Install httpx: pip install httpx", file=sys.stderr)
    sys.exit(1)

BASE = "http://127.0.0.1:8000"


def main() -> None:
    client = httpx.Client(timeout=30.0)
    try:
        r = client.get(f"{BASE}/rounds")
        r.raise_for_status()
        print("Rounds:", ", ".join(f"{x['name']} ({x['defaultPayout']:.0f})" for x in r.json()["rounds"]))

        # Assign a full board
        squares = [{"id": f"sq-{i}", "userId": f"user-{i % 8}", "claimOrder": i + 1} for i in range(100)]
        r = client.post(f"{BASE}/assignments", json={"boardId": "demo", "squares": squares, "seed": 42})
        r.raise_for_status()
        owners = {s["id"]: s["userId"] for s in squares}
        board = [{**a, "userId": owners[a["squareId"]]} for a in r.json()["assignments"]]
        print(f"Assigned {len(board)} squares")

        # Resolve one completed game
        r = client.post(
            f"{BASE}/resolutions",
            json={
                "gameId": "game-1",
                "round": "ROUND1",
                "team1Score": 78,
                "team2Score": 74,
                "status": "COMPLETED",
                "boardAssignments": board,
            },
        )
        if r.status_code != 200:
            print("Server error response:", r.text[:500])
        r.raise_for_status()
        print("--- Resolution (POST /resolutions) ---")
        print(json.dumps(r.json(), indent=2))
    finally:
        client.close()


if __name__ == "__main__":
    main()
