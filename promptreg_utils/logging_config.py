"""
统一日志配置模块。

==============
职责
==============
1. 为 promptreg 库与 CLI 提供统一的日志格式与级别。
2. 支持可选的文件日志输出（例如审计渲染记录的 prompts.log）。
3. 重复调用 setup_logging() 是幂等的（不会叠加 handler）。

==============
使用方式
==============
只在进程入口（promptreg/cli/runner.py 的 main()，或宿主服务的启动代码）调用一次：

    from promptreg_utils.logging_config import setup_logging
    setup_logging()                               # 仅 stderr
    setup_logging(log_file="logs/prompts.log")    # stderr + 文件

库内模块只使用标准 logging，不主动配置 handler：

    import logging
    logger = logging.getLogger(__name__)

==============
设计说明
==============
- 仅配置 root logger，各子模块通过 getLogger(__name__) 自动继承。
- 级别可以是 int 或 "DEBUG"/"INFO" 等字符串（来自 PROMPTREG_LOG_LEVEL）。
- 文件 handler 使用 UTF-8 编码，prompt 内容中常见非 ASCII 文本。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["setup_logging", "resolve_level", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# 防止重复调用时叠加 handler
_INITIALIZED = False


def resolve_level(level: int | str) -> int:
    """把 "debug" / "INFO" / 10 之类的输入统一为 logging 级别整数。"""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    level: int | str = logging.INFO,
    *,
    log_file: str | Path | None = None,
) -> None:
    """初始化全局日志配置（幂等）。

    Parameters
    ----------
    level : int | str
        全局日志级别，默认 INFO。
    log_file : str | Path | None
        可选的日志文件路径；传入后额外添加写入该文件的 handler。
    """
    global _INITIALIZED

    numeric_level = resolve_level(level)
    root = logging.getLogger()

    if not _INITIALIZED:
        # ── 首次初始化：设置级别 + stderr handler ────────────────────
        root.setLevel(numeric_level)

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(numeric_level)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)

        _INITIALIZED = True

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # 避免对同一文件重复添加 handler
        existing = [
            h for h in root.handlers
            if isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path.resolve()
        ]
        if not existing:
            fh = logging.FileHandler(str(log_path), encoding="utf-8")
            fh.setLevel(numeric_level)
            fh.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(fh)
