"""Minimal demonstration of a quick action against the configured backend."""

import asyncio

from session_core.api.service import list_models, restore_conversation, run_quick_action

if __name__ == "__main__":
    for m in list_models():
        print(("* " if m["selected"] else "  ") + m["label"])
    print("Conversation:", restore_conversation("demo-client"))
    result = asyncio.run(run_quick_action("analyze", "demo-document", client_id="demo-client"))
    print("Success:", result["success"])
    print(result.get("errorMessage") or result["analysisText"])
