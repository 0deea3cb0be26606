#!/usr/bin/env python3
"""
Command-line front-end for the voice proxy.

Usage:
  voice-web generate 1234.56 [--format audio|json] [--out DIR]
  voice-web history
  voice-web download RECORD_ID [--out DIR]

Reads VOICE_PROXY_URL and VOICE_PROXY_API_KEY (and storage paths) from env.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from voice_web.audio_cache import AudioCache
from voice_web.config import WebConfig
from voice_web.controller import FormController
from voice_web.history_store import JsonFileHistoryStore


def build_controller(config: WebConfig) -> FormController:
    return FormController(
        store=JsonFileHistoryStore(config.history_path),
        audio_cache=AudioCache(config.audio_dir),
        config=config,
    )


def render_table(result: dict[str, Any]) -> str:
    width = max((len(str(k)) for k in result), default=0)
    return "\n".join(f"{str(k).ljust(width)}  {v}" for k, v in result.items())


def _cmd_generate(controller: FormController, args: argparse.Namespace) -> int:
    controller.update_amount(args.amount)
    if controller.formatted_amount:
        print(f"Amount: {controller.formatted_amount}")
    asyncio.run(controller.submit(fmt=args.format))
    if controller.error:
        print(controller.error, file=sys.stderr)
        return 1
    if controller.result is None:
        return 1
    if args.format == "json":
        print(render_table(controller.result))
        return 0
    print(f"Audio: {controller.result['audiourl']}")
    if args.out:
        print(f"Saved: {controller.download_current_result(Path(args.out))}")
    return 0


def _cmd_history(controller: FormController, args: argparse.Namespace) -> int:
    if not controller.history:
        print("No history yet.")
        return 0
    for record in controller.history:
        print(f"{record.id}  {record.amount}  {record.timestamp.isoformat()}  {record.audio_url}")
    return 0


def _cmd_download(controller: FormController, args: argparse.Namespace) -> int:
    record = controller.find_record(args.record_id)
    if record is None:
        print(f"No history record {args.record_id}", file=sys.stderr)
        return 1
    print(f"Saved: {controller.download_history_record(record, Path(args.out))}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="voice-web", description="Payment voice generator")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a payment voice clip")
    gen.add_argument("amount")
    gen.add_argument("--format", choices=["audio", "json"], default="audio")
    gen.add_argument("--out", help="Directory to save the audio file into")
    gen.set_defaults(func=_cmd_generate)

    hist = sub.add_parser("history", help="List recent generations (newest first)")
    hist.set_defaults(func=_cmd_history)

    dl = sub.add_parser("download", help="Save a history record's audio")
    dl.add_argument("record_id")
    dl.add_argument("--out", default=".")
    dl.set_defaults(func=_cmd_download)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="[%(asctime)s] %(levelname)s - %(message)s")
    args = build_parser().parse_args(argv)
    controller = build_controller(WebConfig.from_env())
    return args.func(controller, args)


if __name__ == "__main__":
    sys.exit(main())
