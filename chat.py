"""
Interactive console for the support bot.

Usage:
    python chat.py

Type a customer query per line; 'quit' exits. Uses the same config sources as
the API server (see run.py) and keeps one conversation window for the session.
"""

import asyncio
import logging

from app.ai_core.conversation import ConversationWindow
from app.ai_core.exceptions import RoutingError
from app.config import get_settings
from app.services.config_loader import (
    load_context_catalog,
    load_customer_data_or_demo,
    load_knowledge,
)
from app.services.query_router import QueryRouter


async def main():
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    query_router = QueryRouter(
        knowledge=load_knowledge(settings.knowledge_path),
        catalog=load_context_catalog(settings.context_schemas_path),
        customer_data=load_customer_data_or_demo(settings),
    )
    window = ConversationWindow(max_messages=settings.max_history_messages)

    print("Support bot ready. Type customer query (or 'quit' to exit).")
    print()

    while True:
        try:
            query = input("Customer: ").strip()
        except EOFError:
            break
        if not query:
            continue
        if query.lower() == "quit":
            break

        try:
            reply = await query_router.answer(query, window)
            print(f"Bot: {reply}")
        except RoutingError as e:
            print(f"Error: {e}")
        print()

    print("Goodbye.")


if __name__ == "__main__":
    asyncio.run(main())
