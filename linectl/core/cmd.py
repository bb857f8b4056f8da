import cmd
from typing import IO

from linectl.core.client import LineClient


class ChatCmd(cmd.Cmd):
    """
    Line-by-line chat shell: every line read from the operator is sent to
    the server and the response line is printed.

    Lines are not interpreted as shell commands, so any text can be sent,
    including ``EOF``. Only ``exit`` and ``quit`` (alone on a line) and the
    real end of input leave the shell.
    """
    intro = "Connected. Type lines to send, 'exit' or 'quit' to leave."
    prompt = "linectl> "

    def __init__(
        self,
        client: LineClient,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        interactive: bool = True,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)

        self._client = client
        if not interactive:
            self.use_rawinput = False
            self.intro = None
            self.prompt = ""
        else:
            self.prompt = f"linectl({client.endpoint})> "

    def cmdloop(self, intro: str | None = None) -> None:
        # cmd.Cmd turns end of input into the text "EOF", which is a valid chat line.
        intro = intro if intro is not None else self.intro
        if intro:
            self.stdout.write(f"{intro}\n")

        while True:
            line = self._read_line()
            if line is None:
                if self.prompt:
                    self.stdout.write("\n")
                return
            if self.onecmd(line):
                return

    def onecmd(self, line: str) -> bool:
        if line.strip() in ("exit", "quit"):
            return True

        self.stdout.write(self._client.request(line) + "\n")
        return False

    def _read_line(self) -> str | None:
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")
