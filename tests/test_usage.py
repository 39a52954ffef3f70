import json
import logging

from promptreg.usage import PromptUsageLogger

INVENTORY_ID = "inventory.extract_product_proposal"


def test_log_usage_record_and_log_line(default_registry, ctx, caplog) -> None:
    result = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "secret customer text"})
    with caplog.at_level(logging.INFO, logger="promptreg.usage"):
        record = PromptUsageLogger().log_usage(result, model_id="m-1", tenant_id="t1", run_id="r-9")

    assert record == {
        "prompt_id": INVENTORY_ID,
        "prompt_version": "v1",
        "prompt_hash": result.prompt_hash,
        "render_hash": result.render_hash,
        "render_engine_version": result.render_engine_version,
        "model_id": "m-1",
        "tenant_id": "t1",
        "run_id": "r-9",
        "purpose": INVENTORY_ID,
    }
    messages = [r.getMessage() for r in caplog.records if r.name == "promptreg.usage"]
    assert len(messages) == 1
    assert json.loads(messages[0].removeprefix("prompt usage ")) == record
    # 日志中不包含变量值与正文
    assert "secret customer text" not in messages[0]


def test_log_usage_custom_logger_and_level(default_registry, ctx, caplog) -> None:
    result = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "x"})
    audit = logging.getLogger("audit.prompts")
    with caplog.at_level(logging.DEBUG, logger="audit.prompts"):
        record = PromptUsageLogger(audit, level=logging.DEBUG).log_usage(result, purpose="nightly-eval")
    assert record["purpose"] == "nightly-eval"
    matched = [r for r in caplog.records if r.name == "audit.prompts"]
    assert matched and matched[0].levelno == logging.DEBUG
