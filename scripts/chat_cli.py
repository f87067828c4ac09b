#!/usr/bin/env python3
"""Interactive CLI to try text turns against a tutor.

Runs the same pipeline as the API (Groq for replies) without the browser
client - just type questions and watch sentiment and points add up.
"""

import asyncio
import uuid

from makia.config import get_settings
from makia.core.exceptions import TurnError
from makia.core.pipeline import ConversationPipeline
from makia.core.session import SessionStore
from makia.main import load_profiles
from makia.services.llm.groq import GroqService
from makia.services.llm.responder import Responder
from makia.services.stt.deepgram import DeepgramService
from makia.services.stt.transcriber import Transcriber
from makia.services.tts.edge import EdgeTTSService
from makia.services.tts.synthesizer import Synthesizer


async def print_session(store: SessionStore, session_id: str) -> None:
    """Print the running session totals."""
    session = await store.get(session_id)
    if session is None:
        print("\n  📊 No turns yet\n")
        return
    print(f"\n  📊 Turns: {len(session.turns)}, points: {session.total_points}\n")


async def main():
    settings = get_settings()
    profiles = load_profiles(settings)
    llm = GroqService(settings=settings)
    store = SessionStore()
    pipeline = ConversationPipeline(
        profiles=profiles,
        transcriber=Transcriber.from_settings(DeepgramService(settings=settings), settings),
        responder=Responder.from_settings(llm, settings),
        synthesizer=Synthesizer.from_settings(EdgeTTSService(), settings),
        store=store,
    )

    profile = profiles.get(None)
    session_id = f"cli_{uuid.uuid4().hex[:8]}"

    print("=" * 60)
    print("🎓 MAKIA Tutor - Test CLI")
    print("=" * 60)
    print(f"\nTutors: {', '.join(p.id for p in profiles.list())}")
    print("Commands: /tutor <id>, /points, /reset (new session), /quit (exit)\n")
    print(f"🤖 {profile.display_name} is listening.\n")

    try:
        while True:
            user_input = input("👤 You: ").strip()

            if not user_input:
                continue

            if user_input.lower() == "/quit":
                print("\n👋 Goodbye!")
                break

            if user_input.lower() == "/points":
                await print_session(store, session_id)
                continue

            if user_input.lower() == "/reset":
                session_id = f"cli_{uuid.uuid4().hex[:8]}"
                print("\n🔄 New session started!\n")
                continue

            if user_input.lower().startswith("/tutor"):
                try:
                    profile = profiles.get(user_input[len("/tutor"):].strip())
                    print(f"\n🤖 {profile.display_name} is listening.\n")
                except TurnError as e:
                    print(f"\n❌ {e}\n")
                continue

            try:
                result = await pipeline.handle_text_turn(user_input, profile.id, session_id)
                print(f"\n🤖 {result.profile_display_name}: {result.reply_text}")
                print(f"   💭 {result.sentiment.value}   ⭐ +{result.points_awarded}")
                await print_session(store, session_id)

            except TurnError as e:
                print(f"\n❌ Error: {e}\n")

    finally:
        await llm.close()


if __name__ == "__main__":
    asyncio.run(main())
