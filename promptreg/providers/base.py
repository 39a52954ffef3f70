"""Prompt provider 抽象基类——注册表查询 prompt 定义的契约接口。

实现必须保证：
1. get()：按 prompt_id 返回定义，无法提供时返回 None（不抛 NotFound，由 Registry 统一处理）
2. list()：可选；只有声明 supports_listing=True 的 provider 参与 Registry.list()，
   只实现 get() 的 provider 默认不参与列举
3. 内部目录构造后只读，或以整体引用替换的方式发布更新，读路径不加锁
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from promptreg.contracts.types import PromptContext, PromptDefinition


class PromptProvider(ABC):
    """Prompt 定义来源：编译期静态目录、租户覆盖存储等。"""

    name: str = ""               # 用于日志定位命中来源
    supports_listing: bool = False  # 覆盖了 list() 的子类需显式置为 True

    @abstractmethod
    def get(self, prompt_id: str, context: PromptContext) -> PromptDefinition | None:
        """返回 prompt_id 对应的定义；不存在返回 None。"""

    def list(self, context: PromptContext | None = None) -> list[PromptDefinition]:
        """列出本 provider 在给定上下文下可见的全部定义；默认不提供任何条目。"""
        return []
