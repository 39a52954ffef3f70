"""注册表运行设置与配置文件读取。

设置文件与覆盖定义文件（YAML / JSON）共用同一套读取流程：
  1. 先应用文件同级的 .env，再应用工作目录的 .env（均不覆盖已存在的环境变量）
  2. 解析文档，根节点必须是映射
  3. 字符串中的 ${ENV_VAR} 按环境变量展开，未定义的引用原样保留

load_settings(path) 构建 RegistrySettings，优先级 环境变量 > 设置文件 > 默认值：
  PROMPTREG_ENVIRONMENT      运行环境（默认 development），参与版本选择
  PROMPTREG_WORKSPACE_KIND   默认工作区类型（可选）
  PROMPTREG_OVERRIDES_PATH   覆盖定义文件（YAML/JSON，可选）
  PROMPTREG_OVERRIDES_FIRST  覆盖 provider 是否排在静态目录之前（默认 true）
  PROMPTREG_LOG_LEVEL        日志级别（默认 INFO）
"""

from __future__ import annotations

__all__ = ["RegistrySettings", "load_yaml", "load_json", "load_settings"]

import json
import os
import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from promptreg.contracts.constants import DEFAULT_ENVIRONMENT

_ENV_REF = re.compile(r"\$\{(\w+)\}")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_QUOTES = ("'", '"')
_cwd_dotenv_applied = False


def _split_dotenv_line(line: str) -> tuple[str, str] | None:
    """KEY=VALUE / export KEY=VALUE → (KEY, VALUE)；注释、空行、无等号返回 None。"""
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    text = text.removeprefix("export ").strip()
    key, sep, value = text.partition("=")
    key, value = key.strip(), value.strip()
    if not sep or not key:
        return None
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def _iter_dotenv(path: Path) -> Iterator[tuple[str, str]]:
    if not path.is_file():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        pair = _split_dotenv_line(line)
        if pair is not None:
            yield pair


def _apply_dotenv(path: Path) -> None:
    for key, value in _iter_dotenv(path):
        os.environ.setdefault(key, value)


def _apply_cwd_dotenv() -> None:
    global _cwd_dotenv_applied
    if not _cwd_dotenv_applied:
        _apply_dotenv(Path.cwd() / ".env")
        _cwd_dotenv_applied = True


def _expand_env_refs(node: Any) -> Any:
    if isinstance(node, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), node)
    if isinstance(node, dict):
        return {key: _expand_env_refs(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand_env_refs(item) for item in node]
    return node


def _read_config_document(path: str | Path, parse: Callable[[str], Any]) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    _apply_dotenv(path.parent / ".env")
    _apply_cwd_dotenv()
    document = parse(path.read_text(encoding="utf-8"))
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return _expand_env_refs(document)


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """读取 YAML 配置文档（空文件视为空映射）。

    Raises
    ------
    FileNotFoundError
        文件不存在。
    ValueError
        根节点不是映射。
    yaml.YAMLError
        YAML 语法错误。
    """
    return _read_config_document(config_path, yaml.safe_load)


def load_json(config_path: str | Path) -> dict[str, Any]:
    """读取 JSON 配置文档；JSON 语法错误以 ValueError(JSONDecodeError) 抛出。"""
    return _read_config_document(config_path, json.loads)

def _parse_bool(raw: Any, *, name: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class RegistrySettings:
    """注册表运行设置快照（进程启动时解析一次）。"""

    environment: str = DEFAULT_ENVIRONMENT
    workspace_kind: str | None = None
    overrides_path: Path | None = None
    overrides_first: bool = True
    log_level: str = "INFO"


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> RegistrySettings:
    """从可选的 YAML 文件与环境变量构建 RegistrySettings。

    YAML 文件可以把设置放在根节点，也可以放在 `prompt_registry:` 节下。
    environ 默认为 os.environ，测试中可直接注入。
    """
    file_values: dict[str, Any] = {}
    if path is not None:
        raw = load_yaml(path)
        file_values = dict(raw.get("prompt_registry", raw) or {})
    if environ is None:
        _apply_cwd_dotenv()
        environ = os.environ

    def _pick(env_name: str, file_key: str, default: Any) -> Any:
        value = environ.get(env_name)
        if value not in (None, ""):
            return value
        value = file_values.get(file_key)
        return default if value in (None, "") else value

    overrides_raw = _pick("PROMPTREG_OVERRIDES_PATH", "overrides_path", None)
    workspace_kind = _pick("PROMPTREG_WORKSPACE_KIND", "workspace_kind", None)
    return RegistrySettings(
        environment=str(_pick("PROMPTREG_ENVIRONMENT", "environment", DEFAULT_ENVIRONMENT)),
        workspace_kind=str(workspace_kind) if workspace_kind is not None else None,
        overrides_path=Path(overrides_raw) if overrides_raw is not None else None,
        overrides_first=_parse_bool(
            _pick("PROMPTREG_OVERRIDES_FIRST", "overrides_first", True),
            name="overrides_first",
        ),
        log_level=str(_pick("PROMPTREG_LOG_LEVEL", "log_level", "INFO")).upper(),
    )
