from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from imageclient.config import CLIENT_CONFIG, TRANSPORTS, ConfigError, load_config
from imageclient.core import ImageTransport, create_transport
from imagewire.protocol import ImageTransportError, ProtocolError
from imagewire.utils import looks_like_png, sha256_hex

logger = logging.getLogger(__name__)


def _emit(args: argparse.Namespace, payload: Dict[str, Any], text: str) -> None:
    print(json.dumps(payload) if args.json else text)


async def cmd_push(transport: ImageTransport, args: argparse.Namespace) -> int:
    data = Path(args.file).read_bytes()
    if not looks_like_png(data):
        logger.warning("%s does not start with a PNG signature; the server will likely refuse it", args.file)
    logger.debug("Uploading %s (%d bytes, sha256=%s)", args.file, len(data), sha256_hex(data))
    name = await transport.push_async(data)
    _emit(args, {"name": name}, name)
    return 0


async def cmd_pull(transport: ImageTransport, args: argparse.Namespace) -> int:
    data, is_jpg = await transport.pull_async(args.name, args.prefer_jpg)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    fmt = "jpg" if is_jpg else "png"
    _emit(args, {"name": args.name, "path": str(out), "format": fmt, "bytes": len(data)}, f"{out} ({fmt})")
    return 0


async def run_client(args: argparse.Namespace) -> int:
    transport = create_transport(CLIENT_CONFIG)
    try:
        return await args.func(transport, args)
    except ImageTransportError as exc:
        if args.json:
            if isinstance(exc, ProtocolError):
                payload = exc.to_payload()
            else:
                payload = {"error": type(exc).__name__, "message": exc.message}
            print(json.dumps(payload), file=sys.stderr)
        else:
            print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        if args.json:
            print(json.dumps({"error": type(exc).__name__, "message": str(exc)}), file=sys.stderr)
        else:
            print(f"error: {exc}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="imageclient", description="Push screenshots to, and pull them from, an image server.")
    p.add_argument("--env", default=".env", help="Path to a .env file with IMAGE_CLIENT_* settings")
    p.add_argument("--transport", choices=TRANSPORTS, help="Override the configured transport")
    p.add_argument("--json", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    push = sub.add_parser("push", help="Upload a PNG image and print its name")
    push.add_argument("file")
    push.set_defaults(func=cmd_push)

    pull = sub.add_parser("pull", help="Download an image by name")
    pull.add_argument("name")
    pull.add_argument("--out", required=True)
    pull.add_argument("--prefer-jpg", action="store_true")
    pull.set_defaults(func=cmd_pull)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        load_config(args.env)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    if args.transport:
        CLIENT_CONFIG["transport"] = args.transport
    logging.basicConfig(level=CLIENT_CONFIG["log_level"])
    return asyncio.run(run_client(args))


if __name__ == "__main__":
    raise SystemExit(main())
