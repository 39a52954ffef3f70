"""Prompt 注册表 CLI —— 列出、查看、离线渲染 prompt（不调用任何模型）。

使用方式：
  python -m promptreg.cli.runner list --env production
  python -m promptreg.cli.runner show copilot.chat_system --workspace-kind COMPANY
  python -m promptreg.cli.runner render inventory.extract_product_proposal \\
      --vars '{"SOURCE_TEXT": "New SKU: Demo"}'
  python -m promptreg.cli.runner render crm.extract_party --vars-file vars.json --json

公共参数：
  --config          设置文件（YAML），见 promptreg.config.load_settings
  --env / --workspace-kind / --tenant   覆盖运行上下文
  --overrides       覆盖定义文件（YAML/JSON），优先于设置中的 overrides_path
  --static-first    静态目录优先于覆盖定义

注册表异常以结构化字段输出到 stderr，退出码 2。
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from promptreg.catalog import create_default_registry
from promptreg.config import RegistrySettings, load_settings
from promptreg.context import build_prompt_context
from promptreg.contracts.error import describe_error
from promptreg.contracts.exceptions import PromptRegistryError
from promptreg.contracts.types import PromptContext
from promptreg.providers.loader import load_overrides
from promptreg.providers.overrides import OverridePromptProvider
from promptreg.registry import PromptRegistry

logger = logging.getLogger(__name__)

__all__ = ["build_registry", "main"]

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_REGISTRY_ERROR = 2


def build_registry(settings: RegistrySettings, overrides_path: str | Path | None = None) -> PromptRegistry:
    """按设置装配注册表；存在覆盖文件时挂载 OverridePromptProvider。"""
    path = overrides_path or settings.overrides_path
    if path is None:
        return create_default_registry()
    provider = OverridePromptProvider(load_overrides(path))
    return create_default_registry(provider, overrides_first=settings.overrides_first)


def _load_variables(args: argparse.Namespace) -> dict[str, Any]:
    if args.vars and args.vars_file:
        raise ValueError("use either --vars or --vars-file, not both")
    if args.vars_file:
        raw = json.loads(Path(args.vars_file).read_text(encoding="utf-8"))
    elif args.vars:
        raw = json.loads(args.vars)
    else:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("variables must be a JSON object")
    return raw


def _cmd_list(registry: PromptRegistry, context: PromptContext, args: argparse.Namespace) -> int:
    for definition in sorted(registry.list(context), key=lambda d: d.id):
        if args.tag and args.tag not in definition.tags:
            continue
        print(
            f"{definition.id}\tdefault={definition.default_version}\t"
            f"versions={','.join(definition.version_ids())}\ttags={','.join(definition.tags)}"
        )
    return EXIT_OK


def _cmd_show(registry: PromptRegistry, context: PromptContext, args: argparse.Namespace) -> int:
    resolved = registry.get(args.prompt_id, context)
    payload = {
        "prompt_id": resolved.definition.id,
        "description": resolved.definition.description,
        "prompt_version": resolved.version.version,
        "prompt_hash": resolved.prompt_hash,
        "variables": [
            {"key": d.key, "kind": d.kind, "description": d.description}
            for d in resolved.version.variables
        ],
        "template": resolved.version.template,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return EXIT_OK


def _cmd_render(registry: PromptRegistry, context: PromptContext, args: argparse.Namespace) -> int:
    variables = _load_variables(args)
    result = registry.render(args.prompt_id, context, variables)
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(result.content)
    return EXIT_OK


_COMMANDS = {
    "list": _cmd_list,
    "show": _cmd_show,
    "render": _cmd_render,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prompt registry inspection and offline rendering")
    parser.add_argument("--config", default=None, help="Settings YAML path")
    parser.add_argument("--env", default=None, help="Runtime environment, e.g. production")
    parser.add_argument("--workspace-kind", default=None, help="Workspace kind, e.g. COMPANY")
    parser.add_argument("--tenant", default=None, help="Tenant id used for override scoping")
    parser.add_argument("--overrides", default=None, help="Overrides YAML/JSON path")
    parser.add_argument("--static-first", action="store_true", help="Static catalog wins over overrides")
    parser.add_argument("--log-level", default=None, help="DEBUG / INFO / WARNING")

    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List prompts visible in the context")
    p_list.add_argument("--tag", default=None, help="Only prompts carrying this tag")

    p_show = sub.add_parser("show", help="Show the resolved version and its hash")
    p_show.add_argument("prompt_id")

    p_render = sub.add_parser("render", help="Render a prompt with JSON variables")
    p_render.add_argument("prompt_id")
    p_render.add_argument("--vars", default=None, help='JSON object, e.g. {"SOURCE_TEXT":"..."}')
    p_render.add_argument("--vars-file", default=None, help="Path to a JSON file with variables")
    p_render.add_argument("--json", action="store_true", help="Print the full render result as JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI 入口。"""
    from promptreg_utils.logging_config import setup_logging

    args = _build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
        setup_logging(args.log_level or settings.log_level)
    except (ValueError, OSError) as exc:
        # 日志尚未配置，直接写 stderr
        print(f"invalid settings: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.env is not None:
        settings = replace(settings, environment=args.env)
    if args.static_first:
        settings = replace(settings, overrides_first=False)
    context = build_prompt_context(settings, tenant_id=args.tenant, workspace_kind=args.workspace_kind)

    try:
        registry = build_registry(settings, args.overrides)
        return _COMMANDS[args.command](registry, context, args)
    except PromptRegistryError as exc:
        print(json.dumps(describe_error(exc), ensure_ascii=False, indent=2), file=sys.stderr)
        return EXIT_REGISTRY_ERROR
    except (ValueError, OSError) as exc:
        # JSON 解析错误、文件缺失等输入问题
        logger.error("invalid input: %s", exc)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
