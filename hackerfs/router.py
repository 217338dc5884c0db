# python
"""
hackerfs/router.py
Shell command router that maps command lines onto the session's FileSystem.
"""
import logging
import shlex
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .errors import FileSystemError, NoSuchFileOrDirectory
from .session import Session

logger = logging.getLogger(__name__)

HELP_TEXT = """\
pwd                      print the working directory
cd [name|..|/]           change the working directory
ls [-l] [name]           list entries recursively
find [term]              print full paths, optionally filtered by name
mkdir name...            create directories
touch name...            create empty files
cat name...              print file contents
write name text...       replace a file's content
echo text... > name      write text to a file, creating it if needed
rm name...               remove files or empty directories
history                  show previous commands"""

Handler = Callable[[Session, List[str]], str]


class Router:
    def __init__(self, max_output: int = 16_384):
        self.max_output = int(max_output)
        # per-operand failures collected by _for_each during one dispatch
        self._failures: List[FileSystemError] = []
        self._handlers: Dict[str, Handler] = {
            "pwd": self._handle_pwd,
            "cd": self._handle_cd,
            "ls": self._handle_ls,
            "find": self._handle_find,
            "mkdir": self._handle_mkdir,
            "touch": self._handle_touch,
            "cat": self._handle_cat,
            "write": self._handle_write,
            "echo": self._handle_echo,
            "rm": self._handle_rm,
            "history": self._handle_history,
            "help": self._handle_help,
        }

    async def dispatch(self, session: Session, line: str) -> Tuple[str, bool]:
        """
        Dispatch a single input line and return (output, truncated_flag).
        """
        line = (line or "").strip()

        if not line:
            return ("", False)

        try:
            argv: List[str] = shlex.split(line)
        except ValueError:
            # unbalanced quotes: fall back to a naive split
            argv = line.split()

        cmd = argv[0] if argv else ""
        handler = self._handlers.get(cmd)
        if handler is None:
            return (f"sh: {cmd}: command not found", False)

        self._failures = []
        try:
            out = handler(session, argv)
        except FileSystemError as exc:
            self._failures.append(exc)
            out = f"{cmd}: {exc}"
        failures, self._failures = self._failures, []
        for exc in failures:
            logger.debug("%s failed: %s", cmd, exc)
            await session.log("fs.error", "shell", command=line, error=str(exc))

        raw = out.encode()
        if len(raw) <= self.max_output:
            return (out, False)
        return (raw[: self.max_output].decode("utf-8", errors="ignore"), True)

    @contextmanager
    def _inside(self, session: Session, target: Optional[str]) -> Iterator[None]:
        """
        Temporarily make ``target`` the working directory.
        """
        fs = session.fs
        saved = fs.working_directory
        try:
            if target:
                self._change_directory(session, target)
            yield
        finally:
            fs.working_directory = saved

    def _change_directory(self, session: Session, target: str) -> None:
        fs = session.fs
        saved = fs.working_directory
        if target.startswith("/"):
            fs.enter_root()
        try:
            for part in target.split("/"):
                if not part or part == ".":
                    continue
                if part == "..":
                    fs.leave()
                    continue
                fs.enter(part)
        except NoSuchFileOrDirectory:
            fs.working_directory = saved
            raise NoSuchFileOrDirectory(target) from None

    def _for_each(self, cmd: str, names: List[str], op: Callable[[str], object]) -> str:
        if not names:
            return f"{cmd}: missing operand"
        lines: List[str] = []
        for name in names:
            try:
                out = op(name)
            except FileSystemError as exc:
                self._failures.append(exc)
                lines.append(f"{cmd}: {exc}")
                continue
            if isinstance(out, str) and out:
                lines.append(out)
        return "\n".join(lines)

    def _handle_pwd(self, session: Session, argv: List[str]) -> str:
        return session.cwd

    def _handle_cd(self, session: Session, argv: List[str]) -> str:
        dest = argv[1] if len(argv) > 1 else "/"
        self._change_directory(session, dest)
        return ""

    def _handle_ls(self, session: Session, argv: List[str]) -> str:
        flags = "".join(arg[1:] for arg in argv[1:] if arg.startswith("-"))
        args = [arg for arg in argv[1:] if arg and not arg.startswith("-")]
        with self._inside(session, args[0] if args else None):
            if "l" in flags:
                out = session.fs.list_long()
            else:
                out = session.fs.list()
        return out.rstrip("\n")

    def _handle_find(self, session: Session, argv: List[str]) -> str:
        term = argv[1] if len(argv) > 1 else None
        return session.fs.find(term).rstrip("\n")

    def _handle_mkdir(self, session: Session, argv: List[str]) -> str:
        return self._for_each("mkdir", argv[1:], session.fs.create_directory)

    def _handle_touch(self, session: Session, argv: List[str]) -> str:
        return self._for_each("touch", argv[1:], session.fs.create_file)

    def _handle_cat(self, session: Session, argv: List[str]) -> str:
        return self._for_each("cat", argv[1:], session.fs.read_file)

    def _handle_rm(self, session: Session, argv: List[str]) -> str:
        return self._for_each("rm", argv[1:], session.fs.remove)

    def _handle_write(self, session: Session, argv: List[str]) -> str:
        if len(argv) < 2:
            return "write: missing operand"
        session.fs.write_file(argv[1], " ".join(argv[2:]))
        return ""

    def _handle_echo(self, session: Session, argv: List[str]) -> str:
        words = argv[1:]
        if ">" not in words:
            return " ".join(words)
        idx = words.index(">")
        if idx + 1 >= len(words):
            return "sh: syntax error near unexpected token `newline'"
        name = words[idx + 1]
        fs = session.fs
        if fs.working_directory.lookup(name) is None:
            fs.create_file(name)
        fs.write_file(name, " ".join(words[:idx]))
        return ""

    def _handle_history(self, session: Session, argv: List[str]) -> str:
        return "\n".join(session.history)

    def _handle_help(self, session: Session, argv: List[str]) -> str:
        return HELP_TEXT
