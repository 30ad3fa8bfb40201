"""Line REPL for Mallet.

`repl` takes the two host functions it needs (read one line, write one line)
so it can be driven by anything; `main` wires them to the terminal with
readline history.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from mallet import config
from mallet.interpreter import Interpreter

logger = logging.getLogger(__name__)


def repl(
    read_line: Callable[[], Optional[str]],
    write_line: Callable[[str], None],
    interp: Interpreter | None = None,
) -> None:
    """Loop until `read_line` signals end of input by returning None."""
    interp = interp or Interpreter()
    while True:
        out = interp.rep(read_line())
        if out is None:
            break
        if out:
            write_line(out)


def _terminal_reader(prompt: str) -> Callable[[], Optional[str]]:
    def read_line() -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None
    return read_line


def _load_history(readline) -> None:
    path = config.get_history_file()
    if path is None:
        return
    try:
        readline.read_history_file(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("could not load history from %s: %s", path, exc)


def _save_history(readline) -> None:
    path = config.get_history_file()
    if path is None:
        return
    try:
        readline.write_history_file(path)
    except OSError as exc:
        logger.warning("could not save history to %s: %s", path, exc)


def main() -> int:
    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    import readline  # line editing for input()

    _load_history(readline)
    try:
        repl(_terminal_reader(config.get_prompt()), lambda line: sys.stdout.write(line + "\n"))
    except KeyboardInterrupt:
        pass
    finally:
        _save_history(readline)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
