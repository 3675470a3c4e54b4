import logging
import os
import sys
from typing import Optional, TextIO

from calculator.runtime import calculate, format_number
from calculator.utils import CalculatorError

LOG_LEVEL_ENV_VAR = "CALCULATOR_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING

logger = logging.getLogger(__name__)


def read_line(stream: TextIO) -> str:
    line = stream.readline()
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def resolve_log_level(name: Optional[str]) -> Optional[int]:
    """Level number for a name like "debug", None if logging does not know it"""
    if name is None:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def main(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    log_level_name = os.environ.get(LOG_LEVEL_ENV_VAR)
    log_level = resolve_log_level(log_level_name)
    logging.basicConfig(
        stream=stderr,
        level=log_level if log_level is not None else DEFAULT_LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if log_level is None:
        logger.warning("Unknown log level %s=%r, using WARNING", LOG_LEVEL_ENV_VAR, log_level_name)

    code = read_line(stdin)
    try:
        result = calculate(code)
    except CalculatorError as e:
        print(e, file=stderr)
        return 1

    print(format_number(result), file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
