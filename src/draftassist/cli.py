"""Command-line interface for serving the proxy and dumping player pools."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from draftassist.config_loader import ProxySettings
from draftassist.errors import DraftAssistError
from draftassist.pool import PlayerPool, collect_player_pool, export_players_to_csv, pool_options, summarize_quality
from draftassist.session import Credential, LeagueContext
from draftassist.upstream import UpstreamClient


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--settings", type=Path, default=None, help="Load proxy settings JSON")
    common.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    parser = argparse.ArgumentParser(description="ESPN fantasy football draft assistant proxy")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=3001, help="Port to listen on")

    players = commands.add_parser(
        "players",
        parents=[common],
        help="Fetch, rank and write a league's player pool",
    )
    players.add_argument("league_id", type=int, help="ESPN league id")
    players.add_argument("season_id", type=int, help="Season year, e.g. 2025")
    players.add_argument("--espn-s2", default=None, help="espn_s2 cookie for private leagues")
    players.add_argument("--swid", default=None, help="SWID cookie for private leagues")
    players.add_argument("--output", type=Path, default=None, help="Output path (stdout if omitted)")
    players.add_argument("--format", choices=["csv", "json"], default="csv", help="Output format")
    players.add_argument("--strict", action="store_true", help="Use the strict relevance preset")
    players.add_argument("--limit", type=int, default=None, help="Keep only the top N players")
    return parser


def _load_settings(args: argparse.Namespace) -> ProxySettings:
    if args.settings:
        return ProxySettings.load(args.settings)
    return ProxySettings.from_env()


def _serve(args: argparse.Namespace, settings: ProxySettings) -> int:
    import uvicorn

    from draftassist.api import create_app

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


async def _collect(args: argparse.Namespace, settings: ProxySettings) -> PlayerPool:
    context = LeagueContext(
        league_id=args.league_id,
        season_id=args.season_id,
        credential=Credential.from_tokens(args.espn_s2, args.swid),
    )
    options = pool_options(settings)
    if args.limit is not None:
        options["criteria"] = replace(options["criteria"], limit=max(1, args.limit))
    return await collect_player_pool(UpstreamClient.from_settings(settings), context, args.season_id, **options)


def _players(args: argparse.Namespace, settings: ProxySettings) -> int:
    if args.strict:
        settings = settings.with_overrides(relevance_preset="strict")
    try:
        pool = asyncio.run(_collect(args, settings))
    except DraftAssistError as exc:
        print(f"Failed to fetch players: {exc.message}", file=sys.stderr)
        return 1

    if args.format == "json":
        payload = json.dumps([player.model_dump(by_alias=True) for player in pool.players], indent=2)
    else:
        payload = export_players_to_csv(pool.players)

    if args.output:
        args.output.write_text(payload, encoding="utf-8")
        print(f"Wrote {len(pool.players)} players to {args.output}")
    else:
        sys.stdout.write(payload)

    quality = summarize_quality(pool.players)
    print(
        f"{quality.players_with_real_adp}/{quality.total_players} players with ADP, "
        f"{quality.players_with_real_projections} with projections",
        file=sys.stderr,
    )
    for report in pool.sources:
        if report.status == "failed":
            print(f"Source {report.name} failed: {report.error}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = _load_settings(args)
    if args.command == "serve":
        return _serve(args, settings)
    return _players(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
