"""promptreg_utils — Prompt 注册表跨模块基础工具包。

提供：
- lazy_import : 包级 __getattr__ 惰性导入，避免 import promptreg 时加载全部子模块
- logging_config : 统一日志配置（格式、级别、可选文件输出）
"""
