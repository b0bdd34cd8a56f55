"""User-facing strings of the chat relay.

The persona and diagnostics are in Chinese. A diagnostic replaces the assistant reply
when the upstream call cannot produce one and is shown to the end user verbatim.
"""

from __future__ import annotations

from chat_relay.core.llm.results import (
    CompletionResult,
    EmptyContent,
    HttpError,
    MissingCredential,
    Success,
    Timeout,
    TransportError,
)

DEFAULT_SYSTEM_PROMPT = "你是一位中英双语的 DeFi 技术助教，帮助用户把想法转换成下一步行动。"

MISSING_API_KEY_MESSAGE = (
    "服务器缺少 DEEPSEEK_API_KEY，请先在环境变量或 Workers Secrets 中配置后再试。"
)
EMPTY_CONTENT_MESSAGE = "DeepSeek 没有返回内容，请稍后再试。"
UNKNOWN_REASON = "未知原因"


def timeout_message(*, seconds: int) -> str:
    return f"与 DeepSeek 的连接在 {seconds} 秒后超时，请再尝试一次。"


def failure_message(*, reason: str) -> str:
    return f"抱歉，调用 DeepSeek 出错：{reason}"


def render_reply(result: CompletionResult) -> str:
    """Map an upstream outcome to the text shown to the user (pure, no I/O)."""

    match result:
        case Success(text=text):
            return text
        case MissingCredential():
            return MISSING_API_KEY_MESSAGE
        case HttpError() as err:
            return failure_message(reason=err.message)
        case Timeout() as timeout:
            return timeout_message(seconds=timeout.whole_seconds)
        case TransportError(message=message):
            return failure_message(reason=message or UNKNOWN_REASON)
        case EmptyContent():
            return EMPTY_CONTENT_MESSAGE
    raise TypeError(f"Unsupported completion result: {type(result).__name__}")
