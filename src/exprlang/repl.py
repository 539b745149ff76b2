"""
Interactive read-evaluate-print loop.

One Program lives for the whole session, so variables bound with `set`
on one line are visible on the next.
"""

import logging
import sys
from typing import Optional, TextIO

from .config import ReplConfig
from .errors import ExprError, ProgramExit
from .runtime import Program, evaluate

logger = logging.getLogger(__name__)


class Repl:
    """
    Line-oriented host for the interpreter.

    Usage:
        repl = Repl()
        repl.loop()                     # reads stdin until EOF

        repl.run_line("1 + 2")          # -> "3"
    """

    def __init__(self, program: Optional[Program] = None,
                 config: Optional[ReplConfig] = None,
                 stdin: TextIO = None, stdout: TextIO = None):
        self.program = program if program is not None else Program.init()
        self.config = config if config is not None else ReplConfig()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def format_error(self, error: ExprError, line: str) -> str:
        """Render an error the way the REPL prints it."""
        text = f"ERROR: {error.message}"
        if self.config.show_position:
            text += f" at {error.position}"
        if self.config.show_source:
            excerpt = error.with_source(line).diagnostic.excerpt()
            if excerpt:
                text += "\n" + "\n".join(excerpt)
        return text

    def run_line(self, line: str) -> Optional[str]:
        """
        Evaluate one line.

        Returns the text to print, or None when there is nothing to show:
        a blank line, an expression with no value, or a call to `exit`.

        Raises:
            ProgramExit: Only when the config says exit ends the session
        """
        if not line.strip():
            return None
        try:
            value = evaluate(line, self.program)
        except ExprError as e:
            logger.debug("evaluation failed: %s", e.message)
            return self.format_error(e, line)
        except ProgramExit:
            if self.config.exit_ends_session:
                raise
            return None
        if value is None:
            return None
        return str(value)

    def loop(self) -> None:
        """Prompt, read and evaluate lines until end of input."""
        while True:
            self.stdout.write(self.config.prompt)
            self.stdout.flush()
            try:
                line = self.stdin.readline()
                if not line:
                    self.stdout.write("\n")
                    break
                output = self.run_line(line.rstrip("\r\n"))
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue
            except ProgramExit:
                logger.debug("session ended by exit()")
                break
            if output is not None:
                self.stdout.write(output + "\n")
        self.stdout.flush()
