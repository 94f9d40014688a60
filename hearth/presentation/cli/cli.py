"""
CLI Module

Architectural Intent:
- Command-line interface for Hearth
- Thin layer: builds the container from config and delegates to use cases
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import logging
import os
import sys
import traceback

from hearth.application.lifecycle.session_manager import SessionCreateError
from hearth.application.use_cases.start_server import ServerStartError, TransportError
from hearth.composition_root import create_container
from hearth.infrastructure.config import load_config
from hearth.infrastructure.logging import configure_logging, level_from_name


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hearth: run a game server in a remote tmux session"
    )
    parser.add_argument("--config", "-c", help="Path to JSON config (default: hearth.json)")
    parser.add_argument("--host", help="Override server.ssh_host")
    parser.add_argument("--session", "-s", help="Override server.tmux_session")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON lines")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("start", help="Start the server and wait until it is ready")

    stop_parser = subparsers.add_parser("stop", help="Gracefully stop the server")
    stop_parser.add_argument(
        "--warn", action="store_true", help="Broadcast a shutdown warning first"
    )

    subparsers.add_parser("status", help="Show players online")
    subparsers.add_parser("warn", help="Broadcast a shutdown warning and wait")

    say_parser = subparsers.add_parser("say", help="Broadcast a message to players")
    say_parser.add_argument("message", help="Message to broadcast")

    op_parser = subparsers.add_parser("op", help="Grant operator status to a player")
    op_parser.add_argument("player", help="Player name")

    deop_parser = subparsers.add_parser("deop", help="Revoke operator status from a player")
    deop_parser.add_argument("player", help="Player name")

    subparsers.add_parser("metrics", help="Collect player metrics on the host")
    subparsers.add_parser("attach", help="Attach to the server console over SSH")
    return parser


def _attach_argv(target) -> list[str]:
    return [
        "ssh", "-t", "-p", str(target.ssh_port),
        f"{target.ssh_user}@{target.ssh_host}",
        "tmux", "attach-session", "-t", target.tmux_session,
    ]


async def async_main():
    parser = _build_parser()
    args = parser.parse_args()

    config = load_config(args.config)
    overrides = {}
    if args.host:
        overrides["ssh_host"] = args.host
    if args.session:
        overrides["tmux_session"] = args.session
    if overrides:
        config = dataclasses.replace(
            config, server=dataclasses.replace(config.server, **overrides)
        )

    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=args.json_logs)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=args.json_logs)
    else:
        configure_logging(
            level=level_from_name(config.log_level),
            json_format=args.json_logs or config.json_logs,
        )

    verbose = args.verbose or args.debug
    target = config.server

    if args.command is None:
        parser.print_help()
        return

    if args.command == "attach":
        if target.node() is None:
            print("[-] No ssh_host configured.")
            sys.exit(1)
        argv = _attach_argv(target)
        print(f"[*] Attaching to {target.tmux_session} on {target.ssh_host}...")
        try:
            os.execvp(argv[0], argv)
        except FileNotFoundError:
            print("[-] Error: ssh not found.")
            sys.exit(1)
        return

    container = create_container(config)

    if args.command == "start":
        try:
            print(f"[*] Starting server '{target.server_name}' on {target.ssh_host}...")
            result = await container.start_server.execute(target)
            print(f"[+] Server ready on {result.ip} after {result.elapsed_seconds:.0f}s.")
        except TransportError as e:
            print(f"[-] {e}")
            sys.exit(1)
        except SessionCreateError as e:
            print(f"[-] {e}")
            if verbose:
                traceback.print_exc()
            sys.exit(1)
        except ServerStartError as e:
            print(f"[-] Start failed ({e.state.name}): {e}")
            sys.exit(1)
        return

    if args.command == "stop":
        if args.warn:
            await container.warn_shutdown.execute(target)
        result = await container.stop_server.execute(target)
        if result.already_stopped:
            print("[+] Server already stopped.")
        elif result.timed_out:
            print("[!] Server did not exit in time; session killed.")
        else:
            print("[+] Server stopped.")
        return

    if args.command == "status":
        status = (await container.query_status.execute(target)).status
        if not status.running:
            print("[-] Server not running.")
        elif not status.determined:
            print("[?] Server running, player count unknown.")
        else:
            names = ", ".join(status.players) or "(none)"
            print(f"[+] {status.online}/{status.max_players} players online: {names}")
        return

    if args.command == "warn":
        result = await container.warn_shutdown.execute(target)
        print("[*] Warning skipped." if result.skipped else "[+] Players warned.")
        return

    if args.command in ("say", "op", "deop"):
        try:
            if args.command == "say":
                result = await container.console.say(target, args.message)
            elif args.command == "op":
                result = await container.console.op(target, args.player)
            else:
                result = await container.console.deop(target, args.player)
        except ValueError as e:
            print(f"[-] {e}")
            sys.exit(2)
        if result.skipped:
            print("[*] Server not running - skipped.")
        elif result.success:
            print("[+] Sent.")
        else:
            print("[-] Failed to send command.")
            sys.exit(1)
        return

    if args.command == "metrics":
        result = await container.collect_metrics.execute(target)
        snap = result.snapshot
        print(
            f"[+] running={snap.running} online={snap.online} "
            f"max={snap.max_players if snap.max_players is not None else '?'}"
        )
        return

    parser.print_help()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
