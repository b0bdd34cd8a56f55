"""Interactive terminal caller for the chat relay.

Keeps the conversation on screen only; every message is sent as a single turn.
Usage:
    CHAT_RELAY_URL=http://localhost:8000 python scripts/chat.py
"""

from __future__ import annotations

import os

import httpx

GREETING = "你好，我是你的 AI 伙伴。和我聊聊你在 DeFi 或 Cloudflare 课程里的收获吧！"
UNAVAILABLE_MESSAGE = "抱歉，暂时无法获取 AI 回应，请稍后再试或检查网络连接。"


def send_message(*, client: httpx.Client, text: str) -> str | None:
    """Send one message and return the reply text; None for blank input."""

    trimmed = text.strip()
    if not trimmed:
        return None

    try:
        res = client.post("/chat/messages", json={"message": trimmed}, follow_redirects=False)
        res.raise_for_status()
        return res.json()["message"]["content"]
    except (httpx.HTTPError, ValueError, KeyError, TypeError):
        # Relay unreachable or an unexpected response shape.
        return UNAVAILABLE_MESSAGE


def main() -> None:
    base_url = os.getenv("CHAT_RELAY_URL", "http://localhost:8000").rstrip("/")
    # The relay bounds the upstream call itself (25s by default); leave some headroom.
    timeout = float(os.getenv("CHAT_RELAY_TIMEOUT_SECONDS", "60"))

    print(f"AI: {GREETING}")
    with httpx.Client(base_url=base_url, timeout=timeout) as client:
        while True:
            try:
                text = input("> ")
            except (EOFError, KeyboardInterrupt):
                print()
                return
            reply = send_message(client=client, text=text)
            if reply is not None:
                print(f"AI: {reply}")


if __name__ == "__main__":
    main()
