"""CLI entrypoints for LifeCal: desktop preview, rendering, stats, share URLs, and the image server."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from lifecal_core import WizardState, build_share_url, load_config, render_query
from lifecal_core.config import CALENDAR_TYPES, config_path
from lifecal_core.logging_setup import configure_logging, get_logger
from lifecal_renderer import list_devices, list_themes, parse_date, to_png, to_svg


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _query_from_args(args: argparse.Namespace) -> dict[str, str]:
    mapping = {
        "type": args.type,
        "device": args.device,
        "width": args.width,
        "height": args.height,
        "accent": args.accent,
        "theme": args.theme,
        "birth": args.birth,
        "expectancy": args.expectancy,
        "target": args.target,
        "start": args.start,
        "title": args.title,
    }
    return {k: str(v) for k, v in mapping.items() if v is not None}


def _now(args: argparse.Namespace) -> datetime:
    return parse_date(args.now) if args.now else datetime.now()


def cmd_run(_args: argparse.Namespace) -> int:
    from .app import run_gui

    return run_gui()


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    result = render_query(_query_from_args(args), now=_now(args), defaults=cfg)
    fmt = args.format or (Path(args.out).suffix.lstrip(".").lower() if args.out else "svg")
    if fmt == "png":
        data = to_png(result)
    elif fmt == "svg":
        data = to_svg(result).encode("utf-8")
    else:
        raise ValueError(f"Unsupported output format: {fmt}")

    if args.out:
        out = Path(args.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
        _print_json({"success": True, "path": str(out), "format": fmt, "stats": result.stats})
    else:
        sys.stdout.buffer.write(data)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    result = render_query(_query_from_args(args), now=_now(args), defaults=load_config())
    _print_json({"type": result.kind, "stats": result.stats})
    return 0


def cmd_devices(_args: argparse.Namespace) -> int:
    _print_json({"devices": list_devices(), "themes": list_themes()})
    return 0


def cmd_url(args: argparse.Namespace) -> int:
    state = WizardState.from_config(load_config())
    if args.type:
        state.calendar_type = args.type
    if args.device:
        state.device = args.device
    if args.accent:
        state.accent = args.accent
    if args.birth:
        state.birth_date = args.birth
    if args.expectancy:
        state.expectancy = args.expectancy
    if args.target:
        state.target_date = args.target
    if args.start:
        state.start_date = args.start
    if args.title:
        state.title = args.title
    if args.theme:
        state.theme = args.theme
    print(build_share_url(args.base, state, now=_now(args), width=args.width, height=args.height))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .server import serve

    return serve(load_config(), host=args.host, port=args.port)


def cmd_config(_args: argparse.Namespace) -> int:
    cfg = load_config()
    _print_json({"path": str(config_path()), "config": asdict(cfg)})
    return 0


def _add_wallpaper_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--type", choices=CALENDAR_TYPES, default=None)
    cmd.add_argument("--device", default=None, help="Device preset id (see 'devices')")
    cmd.add_argument("--width", type=int, default=None, help="Explicit pixel width (needs --height)")
    cmd.add_argument("--height", type=int, default=None, help="Explicit pixel height (needs --width)")
    cmd.add_argument("--accent", default=None, help="Accent colour, hex with or without '#'")
    cmd.add_argument("--theme", default=None, help="Palette name (see 'devices')")
    cmd.add_argument("--birth", default=None, help="Birth date YYYY-MM-DD (life)")
    cmd.add_argument("--expectancy", type=int, default=None, help="Life expectancy in years (life)")
    cmd.add_argument("--target", default=None, help="Target date YYYY-MM-DD (goal)")
    cmd.add_argument("--start", default=None, help="Start date YYYY-MM-DD (goal)")
    cmd.add_argument("--title", default=None, help="Goal title (goal)")
    cmd.add_argument("--now", default=None, help="Render as of this ISO timestamp instead of the clock")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifecal", description="LifeCal wallpaper generator and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run the interactive preview app")
    run_cmd.set_defaults(func=cmd_run)

    render_cmd = sub.add_parser("render", help="Render a wallpaper to SVG or PNG")
    _add_wallpaper_options(render_cmd)
    render_cmd.add_argument("--format", choices=["svg", "png"], default=None)
    render_cmd.add_argument("--out", default=None, help="Output file; stdout when omitted")
    render_cmd.set_defaults(func=cmd_render)

    stats_cmd = sub.add_parser("stats", help="Print wallpaper statistics as JSON")
    _add_wallpaper_options(stats_cmd)
    stats_cmd.set_defaults(func=cmd_stats)

    devices_cmd = sub.add_parser("devices", help="List device presets and palettes")
    devices_cmd.set_defaults(func=cmd_devices)

    url_cmd = sub.add_parser("url", help="Build an image-endpoint URL for automation")
    _add_wallpaper_options(url_cmd)
    url_cmd.add_argument("--base", default="http://127.0.0.1:8787", help="Server base URL")
    url_cmd.set_defaults(func=cmd_url)

    serve_cmd = sub.add_parser("serve", help="Serve the SVG image endpoint over HTTP")
    serve_cmd.add_argument("--host", default=None)
    serve_cmd.add_argument("--port", type=int, default=None)
    serve_cmd.set_defaults(func=cmd_serve)

    config_cmd = sub.add_parser("config", help="Print effective settings")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.logging.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as exc:
        get_logger().error(f"{args.command} failed: {exc}", extra={"event": "cli_error"})
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
