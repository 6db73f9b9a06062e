#!/usr/bin/env python3
"""
Maintenance Log management CLI.

Usage:
    python manage.py start       Migrate the database and start the server
    python manage.py stop        Graceful shutdown
    python manage.py restart     Stop + start
    python manage.py status      Check if server is running
    python manage.py migrate     Apply pending database migrations
"""

import argparse
import asyncio
import os
import platform
import re
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".maintlog.pid"

IS_WINDOWS = platform.system() == "Windows"


def _read_pid() -> int | None:
    """Read PID from the PID file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/NH"],
                capture_output=True,
                text=True,
            )
            return str(pid) in result.stdout
        except OSError:
            return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _kill_pid(pid: int) -> bool:
    """Ask a process to terminate. Returns True if the signal was delivered."""
    try:
        if IS_WINDOWS:
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], capture_output=True)
        else:
            os.kill(pid, signal.SIGTERM)
        return True
    except OSError:
        return False


def _wait_for_exit(pid: int, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not _is_pid_alive(pid):
            return True
        time.sleep(0.1)
    return not _is_pid_alive(pid)


def _find_pid_on_port(port: int) -> int | None:
    """Find the PID of the process listening on the given port."""
    if IS_WINDOWS:
        try:
            result = subprocess.run(
                ["netstat", "-ano", "-p", "TCP"], capture_output=True, text=True
            )
        except OSError:
            return None
        for line in result.stdout.splitlines():
            if f":{port}" in line and "LISTENING" in line:
                try:
                    return int(line.split()[-1])
                except (ValueError, IndexError):
                    continue
        return None

    try:
        result = subprocess.run(
            ["lsof", "-ti", f"TCP:{port}", "-sTCP:LISTEN"],
            capture_output=True,
            text=True,
        )
        if result.returncode == 0 and result.stdout.strip():
            return int(result.stdout.strip().splitlines()[0])
    except (OSError, ValueError):
        pass
    try:
        result = subprocess.run(
            ["ss", "-tlnp", f"sport = :{port}"], capture_output=True, text=True
        )
        match = re.search(r"pid=(\d+)", result.stdout)
        if match:
            return int(match.group(1))
    except (OSError, ValueError):
        pass
    return None


def _is_port_free(port: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def _migrate() -> bool:
    """Apply pending migrations; returns False if any failed."""
    from src.infrastructure.storage.sqlite.migrations import run_migrations

    results = asyncio.run(run_migrations())
    if not results:
        print("Database is up to date.")
    for result in results:
        status = "OK" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"       {result.error}")
    return all(r.success for r in results)


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending database migrations."""
    if not _migrate():
        sys.exit(1)


def cmd_start(args: argparse.Namespace) -> None:
    """Migrate the database and start the server in the background."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        holder = _find_pid_on_port(args.port)
        print(f"Port {args.port} is in use" + (f" by PID {holder}." if holder else "."))
        sys.exit(1)

    if not args.skip_migrate and not _migrate():
        sys.exit(1)

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.workers and args.workers > 1:
        uvicorn_cmd += ["--workers", str(args.workers)]

    print(f"Starting server on {args.host}:{args.port}...")

    if IS_WINDOWS:
        proc = subprocess.Popen(
            uvicorn_cmd,
            cwd=str(ROOT_DIR),
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
        )
    else:
        proc = subprocess.Popen(uvicorn_cmd, cwd=str(ROOT_DIR))

    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}/api")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        pid = _find_pid_on_port(args.port)
        if pid is None:
            print("Server is not running.")
            return
        print(f"No PID file found. Detected server on port {args.port} (PID {pid}).")

    print(f"Stopping server (PID {pid})...")
    if _kill_pid(pid) and not _wait_for_exit(pid):
        print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    if _is_pid_alive(pid):
        print("Warning: Server may still be running.")
    else:
        print("Server stopped.")


def cmd_restart(args: argparse.Namespace) -> None:
    """Stop then start the server."""
    cmd_stop(args)
    if not _is_port_free(args.port):
        print(f"Port {args.port} is still occupied after stop.")
        sys.exit(1)
    cmd_start(args)


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
        return

    port_pid = _find_pid_on_port(args.port)
    if port_pid is not None:
        print(f"No PID file, but port {args.port} is held by PID {port_pid}.")
        print("  This may be a stale server. Use 'stop' to clean up.")
    elif not _is_port_free(args.port):
        print(f"No PID file. Port {args.port} is in use (process could not be identified).")
    else:
        print(f"Server is not running (port {args.port} is free).")


def _add_server_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    parser.add_argument("--skip-migrate", action="store_true", help="Do not migrate before starting")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Maintenance Log management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_start = sub.add_parser("start", help="Migrate and start server")
    _add_server_args(p_start)
    p_start.set_defaults(func=cmd_start)

    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.add_argument("--port", type=int, default=8000, help="Port to check if PID file is missing")
    p_stop.set_defaults(func=cmd_stop)

    p_restart = sub.add_parser("restart", help="Restart the server")
    _add_server_args(p_restart)
    p_restart.set_defaults(func=cmd_restart)

    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    p_migrate = sub.add_parser("migrate", help="Apply pending database migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
