"""租户/全局覆盖 provider。

条目为 (prompt_id, tenant_id | None, definition)：
- 查找时优先返回 tenant_id 与 context.tenant_id 相同的条目；
- 其次返回 tenant_id 为 None 的全局覆盖；
- 都没有则返回 None，交给链上后续 provider。

并发模型：条目集合被编译为不可变快照，replace_entries() 构建新快照后
一次性替换引用（单次属性赋值），读者要么看到旧集合、要么看到新集合，
不会观察到更新到一半的目录；读路径不加锁。
"""

from __future__ import annotations

__all__ = ["PromptOverride", "OverridePromptProvider"]

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType

from promptreg.contracts.exceptions import PromptConfigurationError
from promptreg.contracts.types import PromptContext, PromptDefinition
from promptreg.providers.base import PromptProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PromptOverride:
    """单条覆盖；tenant_id 为 None 表示对所有租户生效。"""

    prompt_id: str
    definition: PromptDefinition
    tenant_id: str | None = None


@dataclass(frozen=True, slots=True)
class _Snapshot:
    entries: tuple[PromptOverride, ...]
    index: MappingProxyType  # (prompt_id, tenant_id | None) -> PromptDefinition
    prompt_ids: tuple[str, ...]


def _build_snapshot(entries: Iterable[PromptOverride]) -> _Snapshot:
    frozen_entries = tuple(entries)
    index: dict[tuple[str, str | None], PromptDefinition] = {}
    prompt_ids: list[str] = []
    for entry in frozen_entries:
        if entry.definition.id != entry.prompt_id:
            raise PromptConfigurationError(
                f"override for '{entry.prompt_id}' carries definition '{entry.definition.id}'",
                prompt_id=entry.prompt_id,
            )
        key = (entry.prompt_id, entry.tenant_id)
        if key in index:
            scope = f"tenant '{entry.tenant_id}'" if entry.tenant_id else "global scope"
            raise PromptConfigurationError(
                f"duplicate override for '{entry.prompt_id}' in {scope}",
                prompt_id=entry.prompt_id,
            )
        index[key] = entry.definition
        if entry.prompt_id not in prompt_ids:
            prompt_ids.append(entry.prompt_id)
    return _Snapshot(entries=frozen_entries, index=MappingProxyType(index), prompt_ids=tuple(prompt_ids))


class OverridePromptProvider(PromptProvider):
    """按租户作用域提供覆盖定义。"""

    name = "overrides"
    supports_listing = True

    def __init__(self, entries: Iterable[PromptOverride] = ()):
        self._snapshot = _build_snapshot(entries)

    @property
    def entries(self) -> tuple[PromptOverride, ...]:
        return self._snapshot.entries

    def replace_entries(self, entries: Iterable[PromptOverride]) -> None:
        """以整体替换的方式发布新的覆盖集合；校验失败时保留旧集合。"""
        snapshot = _build_snapshot(entries)
        self._snapshot = snapshot
        logger.info("prompt overrides replaced: %d entries", len(snapshot.entries))

    @staticmethod
    def _lookup(snapshot: _Snapshot, prompt_id: str, tenant_id: str | None) -> PromptDefinition | None:
        if tenant_id is not None:
            scoped = snapshot.index.get((prompt_id, tenant_id))
            if scoped is not None:
                return scoped
        return snapshot.index.get((prompt_id, None))

    def get(self, prompt_id: str, context: PromptContext) -> PromptDefinition | None:
        # 单次读取引用，同一次查找内不会跨越两个快照
        snapshot = self._snapshot
        return self._lookup(snapshot, prompt_id, context.tenant_id)

    def list(self, context: PromptContext | None = None) -> list[PromptDefinition]:
        snapshot = self._snapshot
        tenant_id = context.tenant_id if context is not None else None
        visible: list[PromptDefinition] = []
        for prompt_id in snapshot.prompt_ids:
            definition = self._lookup(snapshot, prompt_id, tenant_id)
            if definition is not None:
                visible.append(definition)
        return visible
