"""Lightweight REST client for the draftassist proxy."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the draftassist REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:3001")
    parser.add_argument("league_id", type=int, nargs="?", help="ESPN league id to connect to")
    parser.add_argument("season_id", type=int, nargs="?", help="Season year")
    parser.add_argument("--espn-s2", default=None, help="espn_s2 cookie for private leagues")
    parser.add_argument("--swid", default=None, help="SWID cookie for private leagues")
    parser.add_argument("--health", action="store_true", help="Print proxy health and exit")
    parser.add_argument("--top", type=int, default=10, help="Number of players to print")
    parser.add_argument("--teams", action="store_true", help="Print league teams")
    parser.add_argument("--draft", action="store_true", help="Print draft information")
    parser.add_argument("--quality", action="store_true", help="Print the data quality report")
    parser.add_argument("--export-path", type=Path, help="Download the ranked players CSV")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        if args.health:
            resp = client.get("/api/health")
            resp.raise_for_status()
            _print_json(resp.json())
            return

        if args.league_id is None or args.season_id is None:
            raise SystemExit("league_id and season_id are required unless using --health")

        resp = client.post(
            "/api/connect",
            json={
                "leagueId": args.league_id,
                "seasonId": args.season_id,
                "espnS2": args.espn_s2,
                "swid": args.swid,
            },
        )
        if resp.status_code != 200:
            raise SystemExit(resp.json().get("error", resp.text))
        league = resp.json()["league"]
        print(f"Connected to {league['name']} ({league['teams']} teams, {league['scoringType']})")

        season = args.season_id
        if args.teams:
            resp = client.get(f"/api/teams/{season}")
            resp.raise_for_status()
            _print_json(resp.json())
        if args.draft:
            resp = client.get(f"/api/draft/{season}")
            resp.raise_for_status()
            _print_json(resp.json())
        if args.quality:
            resp = client.get(f"/api/players/{season}/quality")
            resp.raise_for_status()
            _print_json(resp.json()["dataQuality"])
        if args.export_path:
            resp = client.get(f"/api/players/{season}/export.csv")
            resp.raise_for_status()
            args.export_path.write_text(resp.text, encoding="utf-8")
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.get(f"/api/players/{season}")
        resp.raise_for_status()
        players = resp.json()
        print(f"Received {len(players)} players")
        for player in players[: args.top]:
            print(f"{player['adp']:>6.1f}  {player['position']:<5} {player['team']:<4} {player['name']}")


if __name__ == "__main__":
    main()
