#!/usr/bin/env python3
"""
Smoke check against a running Conversate server.
Exercises health, personas, chat over REST and WebSocket, and conversation history.
"""

import json
import os
import sys
import uuid

import requests
from websockets.sync.client import connect

# Configuration
BACKEND_URL = os.getenv("CONVERSATE_URL", "http://localhost:8000")
WS_URL = BACKEND_URL.replace("http", "ws", 1) + "/ws/chat"
USER_ID = f"smoke-{uuid.uuid4().hex[:8]}"

_state: dict = {}


def check_health():
    """Backend health endpoint"""
    print("🔍 Checking backend health...")
    try:
        response = requests.get(f"{BACKEND_URL}/health", timeout=5)
        assert response.status_code == 200
        assert response.text == "OK"
        print("✅ Backend health: OK")
        return True
    except Exception as e:
        print(f"❌ Backend health check failed: {e}")
        return False


def check_personas():
    """Persona list contains the three tutors"""
    print("\n🔍 Checking personas endpoint...")
    try:
        response = requests.get(f"{BACKEND_URL}/api/personas", timeout=5)
        assert response.status_code == 200
        ids = {p["id"] for p in response.json()}
        assert {"maya", "alex", "luna"} <= ids, f"Unexpected personas: {ids}"
        print(f"✅ Personas: {', '.join(sorted(ids))}")
        return True
    except Exception as e:
        print(f"❌ Personas check failed: {e}")
        return False


def check_chat():
    """REST chat round trip"""
    print("\n🔍 Checking chat endpoint...")
    try:
        response = requests.post(
            f"{BACKEND_URL}/api/chat",
            json={"message": "Bonjour, comment ça va ?", "user_id": USER_ID, "persona_id": "maya"},
            timeout=5,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["message"]
        _state["conversation_id"] = data["conversation_id"]
        print(f"✅ Chat reply: {data['message'][:60]}")
        return True
    except Exception as e:
        print(f"❌ Chat check failed: {e}")
        return False


def check_websocket():
    """WebSocket chat round trip"""
    print("\n🔍 Checking WebSocket chat...")
    try:
        with connect(WS_URL, open_timeout=5) as ws:
            ws.send(json.dumps({
                "type": "message",
                "content": "J'aime le tennis !",
                "user_id": USER_ID,
                "persona_id": "alex",
            }))
            frames = [json.loads(ws.recv(timeout=5)) for _ in range(2)]
            types = [f.get("type") for f in frames]
            assert types == ["status", "persona_response"], f"Unexpected frames: {types}"
            print(f"✅ WebSocket reply: {frames[1]['data']['message'][:60]}")
            return True
    except Exception as e:
        print(f"❌ WebSocket check failed: {e}")
        return False


def check_history():
    """Conversation from the chat check is listed and readable"""
    print("\n🔍 Checking conversation history...")
    try:
        response = requests.get(f"{BACKEND_URL}/api/conversations", params={"user_id": USER_ID}, timeout=5)
        assert response.status_code == 200
        conversations = response.json()["data"]["conversations"]
        assert conversations, "No conversations listed"

        conversation_id = _state.get("conversation_id") or conversations[0]["id"]
        response = requests.get(
            f"{BACKEND_URL}/api/conversations/{conversation_id}", params={"user_id": USER_ID}, timeout=5
        )
        assert response.status_code == 200
        messages = response.json()["data"]["conversation"]["messages"]
        print(f"✅ History: {len(conversations)} conversations, {len(messages)} messages in the first")
        return True
    except Exception as e:
        print(f"❌ History check failed: {e}")
        return False


def main():
    """Run all smoke checks"""
    print("=" * 60)
    print("CONVERSATE SMOKE CHECK")
    print(f"Target: {BACKEND_URL}")
    print("=" * 60)

    checks = [
        ("Backend Health", check_health),
        ("Personas", check_personas),
        ("REST Chat", check_chat),
        ("WebSocket Chat", check_websocket),
        ("Conversation History", check_history),
    ]

    results = []
    for name, check in checks:
        try:
            results.append((name, check()))
        except Exception as e:
            print(f"\n❌ Check '{name}' crashed: {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)

    passed = sum(1 for _, result in results if result)
    for name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"{status}: {name}")

    print(f"\nTotal: {passed}/{len(results)} checks passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
