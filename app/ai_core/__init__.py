# AI Core module

"""
AI Core Module - Routing and prompt assembly.

Key responsibilities:
- Knowledge index (categories, filtering, knowledge prompt section)
- Context catalog and per-context customer data
- Conversation window (bounded exchange history)
- Category and context classification via the completion service
- System prompt assembly
"""
