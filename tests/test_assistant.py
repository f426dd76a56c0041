"""
Tests for the scripted assistant.
"""
import random

from services.assistant import CANNED_RESPONSES, GREETING, AssistantService

def test_history_starts_with_greeting():
    assistant = AssistantService()
    assert [m.content for m in assistant.history] == [GREETING]

def test_reply_records_both_sides():
    assistant = AssistantService(rng=random.Random(1))

    answer = assistant.reply("How much water should I drink?")

    assert answer in CANNED_RESPONSES
    assert [m.role for m in assistant.history] == ["assistant", "user", "assistant"]
    assert assistant.history[1].content == "How much water should I drink?"

def test_blank_message_is_ignored():
    assistant = AssistantService()
    assert assistant.reply("   ") is None
    assert len(assistant.history) == 1

def test_reply_is_spoken_on_request(announcer):
    assistant = AssistantService(announcer=announcer)
    answer = assistant.reply("hi", speak=True)
    assistant.reply("again")
    assert announcer.spoken == [answer]

def test_reset():
    assistant = AssistantService()
    assistant.reply("hi")
    assistant.reset()
    assert len(assistant.history) == 1
