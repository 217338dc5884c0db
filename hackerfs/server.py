# python
"""
hackerfs/server.py
Asyncio telnet front end using telnetlib3. Every connection gets its own
Session and therefore its own in-memory FileSystem.
"""
import asyncio
import datetime
import json
import uuid
import pathlib
import logging
from typing import Any, Dict, Optional
import telnetlib3
from telnetlib3.telopt import ECHO, WILL
from .session import Session
from .router import Router
from .env import load_env, log_level, seed_fs_path
from .filesystem import FileSystem
from .errors import SnapshotError
from .fs_snapshot import load_snapshot, validate_snapshot

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "server": {"host": "0.0.0.0", "port": 2323, "banner": "Welcome to hackerfs"},
    "paths": {
        "logs_dir": "logs",
        "tty_dir": "logs/tty",
        "events_file": "logs/events.jsonl",
    },
    "limits": {"max_output_bytes": 16384},
    "version": "0.1",
    "hostname": "hackerfs",
}

CONFIG = DEFAULT_CONFIG

SEED_FS: Optional[Dict[str, Any]] = None


def _ensure_dirs():
    pathlib.Path(CONFIG["paths"]["logs_dir"]).mkdir(parents=True, exist_ok=True)
    pathlib.Path(CONFIG["paths"]["tty_dir"]).mkdir(parents=True, exist_ok=True)


def _normalize_for_terminal(text: str) -> str:
    """
    Convert newline usage to CRLF sequences that telnet clients expect.
    """
    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.replace("\n", "\r\n")


def load_seed(path: Optional[pathlib.Path]) -> Optional[Dict[str, Any]]:
    """
    Read and validate the seed snapshot once; sessions build fresh trees from it.
    """
    if path is None:
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"seed file {path} is not valid JSON: {exc}") from exc
    validate_snapshot(data)
    logger.info("Seeding new sessions from %s", path)
    return data


def new_filesystem() -> FileSystem:
    if SEED_FS is None:
        return FileSystem()
    return load_snapshot(SEED_FS)


def make_prompt(session: Session) -> str:
    return f"{session.username or 'guest'}@{CONFIG['hostname']}:{session.cwd}$ "


async def shell(reader, writer) -> None:
    peer = writer.get_extra_info("peername") or ("0.0.0.0", 0)
    session_id = str(uuid.uuid4())
    tty_path = str(pathlib.Path(CONFIG["paths"]["tty_dir"]) / f"{session_id}.log")
    session = Session(
        session_id=session_id,
        remote_ip=peer[0],
        remote_port=peer[1],
        # use timezone-aware UTC ISO timestamps to avoid naive/aware datetime arithmetic
        started_ts=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        tty_path=tty_path,
        _events_file=CONFIG["paths"]["events_file"],
        version=CONFIG["version"],
        fs=new_filesystem(),
    )
    try:
        if hasattr(writer, "iac"):
            writer.iac(WILL, ECHO)
    except Exception:  # pragma: no cover
        pass
    await session.log("session.connect", "connect", banner=CONFIG["server"]["banner"])
    await session.write_tty("out", CONFIG["server"]["banner"])
    try:
        # allow a short window for clients to send initial telnet negotiation
        # frames so the banner doesn't get interleaved with IAC bytes
        await asyncio.sleep(0.2)

        writer.write(CONFIG["server"]["banner"] + "\r\n")
        await writer.drain()

        router = Router(max_output=CONFIG["limits"]["max_output_bytes"])

        while True:
            writer.write(make_prompt(session))
            await writer.drain()
            line = await reader.readline()
            if not line:
                break
            session.bytes_in += len(line.encode())
            line = line.rstrip("\r\n")
            if not line:
                continue
            session.record_command(line)
            await session.write_tty("in", line)
            argv = line.split()
            await session.log("command.input", "shell", raw=line, argv=argv)
            auto_echo = getattr(writer, "will_echo", False)
            if not auto_echo:
                normalized_input = _normalize_for_terminal(line)
                try:
                    writer.echo(normalized_input + "\r\n")
                except Exception:
                    writer.write(normalized_input + "\r\n")
            cmd = argv[0] if argv else ""
            exit_cmd = cmd in ("exit", "logout")
            if exit_cmd:
                out = ""
                truncated = False
            else:
                out, truncated = await router.dispatch(session, line)
            await session.write_tty("out", out)
            await session.log(
                "command.output",
                "shell",
                bytes=len(out.encode()),
                truncated=truncated,
                cwd=session.cwd,
            )
            normalized = _normalize_for_terminal(out)
            if normalized:
                writer.write(normalized + "\r\n")
                session.bytes_out += len(normalized.encode())
            await writer.drain()
            if exit_cmd:
                break
    except Exception:
        # avoid surfacing exceptions to clients; ensure we still close cleanly
        logger.exception("session %s aborted", session.session_id)
    finally:
        started = datetime.datetime.fromisoformat(session.started_ts)
        now = datetime.datetime.now(datetime.timezone.utc)
        duration_ms = int((now - started).total_seconds() * 1000)
        await session.log(
            "session.close",
            "close",
            duration_ms=duration_ms,
            tty_path=session.tty_path,
            bytes_in=session.bytes_in,
            bytes_out=session.bytes_out,
        )
        try:
            writer.close()
        except Exception:
            pass


async def start_server(config: Optional[dict] = None):
    global CONFIG, SEED_FS
    if config:
        # shallow merge; caller may pass full config
        CONFIG = {**DEFAULT_CONFIG, **config}
    _ensure_dirs()
    SEED_FS = load_seed(seed_fs_path())
    host = CONFIG["server"]["host"]
    port = CONFIG["server"]["port"]
    server = await telnetlib3.create_server(shell=shell, host=host, port=port)

    # Derive the actual bound address/port so callers can connect when port=0.
    actual_host = host
    actual_port = port
    socks = getattr(server, "sockets", None)
    if socks:
        sockname = socks[0].getsockname()
        # sockname can be (host, port) or (host, port, flowinfo, scopeid)
        actual_host = sockname[0]
        actual_port = sockname[1]
        if actual_host in ("0.0.0.0", "", None, "::"):
            actual_host = "127.0.0.1"

    print(f"Listening on {actual_host}:{actual_port}", flush=True)
    try:
        # block forever until cancelled (e.g., Ctrl+C)
        await asyncio.Event().wait()
    finally:
        server.close()
        await server.wait_closed()
    return server


def main(argv=None) -> None:
    import argparse

    load_env()
    parser = argparse.ArgumentParser(prog="hackerfs")
    parser.add_argument("--host", default=DEFAULT_CONFIG["server"]["host"])
    parser.add_argument("--port", type=int, default=DEFAULT_CONFIG["server"]["port"])
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    DEFAULT_CONFIG["server"]["host"] = args.host
    DEFAULT_CONFIG["server"]["port"] = args.port
    try:
        asyncio.run(start_server(DEFAULT_CONFIG))
    except KeyboardInterrupt:
        print("shutting down")


if __name__ == "__main__":
    main()
