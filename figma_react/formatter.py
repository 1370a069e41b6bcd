"""
原始碼格式化（best-effort）

  builtin  — 純 Python：去除行尾空白、合併連續空行、檢查括號是否成對
  prettier — 呼叫外部 prettier（需在 PATH 上）
  none     — 不處理

任何失敗都拋出 FormattingError，由產生器決定如何退回。
"""

import shutil
import subprocess

from .errors import FormattingError

FORMATTERS = ("builtin", "prettier", "none")

_PAIRS = {")": "(", "]": "[", "}": "{"}


def _check_balanced(code: str) -> None:
    stack = []
    quote = None
    line = 1
    i = 0
    while i < len(code):
        ch = code[i]
        if ch == "\n":
            line += 1
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif code.startswith("//", i):
            end = code.find("\n", i)
            i = len(code) if end < 0 else end
            continue
        elif code.startswith("/*", i):
            end = code.find("*/", i + 2)
            if end < 0:
                raise FormattingError(f"unterminated comment on line {line}")
            line += code.count("\n", i, end)
            i = end + 2
            continue
        elif ch in "\"'`":
            quote = ch
        elif ch in "([{":
            stack.append((ch, line))
        elif ch in _PAIRS:
            if not stack or stack[-1][0] != _PAIRS[ch]:
                raise FormattingError(f"unbalanced '{ch}' on line {line}")
            stack.pop()
        i += 1
    if quote:
        raise FormattingError(f"unterminated string literal ({quote})")
    if stack:
        ch, opened = stack[-1]
        raise FormattingError(f"unclosed '{ch}' opened on line {opened}")


def format_builtin(code: str) -> str:
    _check_balanced(code)
    lines = [line.rstrip() for line in code.strip("\n").splitlines()]
    out = []
    for line in lines:
        if not line and out and not out[-1]:
            continue
        out.append(line)
    return "\n".join(out).strip("\n") + "\n"


def format_prettier(code: str, timeout: float = 30.0) -> str:
    binary = shutil.which("prettier")
    if not binary:
        raise FormattingError("prettier not found on PATH")
    try:
        proc = subprocess.run(
            [binary, "--parser", "typescript", "--single-quote",
             "--trailing-comma", "es5", "--tab-width", "2"],
            input=code,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise FormattingError(f"prettier failed: {e}") from e
    if proc.returncode != 0:
        raise FormattingError(f"prettier exited with {proc.returncode}: {proc.stderr.strip()[:200]}")
    return proc.stdout


def format_source(code: str, formatter: str = "builtin") -> str:
    if formatter == "none":
        return code
    if formatter == "builtin":
        return format_builtin(code)
    if formatter == "prettier":
        return format_prettier(code)
    raise FormattingError(f"unknown formatter '{formatter}' (known: {', '.join(FORMATTERS)})")
