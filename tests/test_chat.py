"""Tests de l'assistant à réponses préenregistrées."""

import random
from datetime import datetime

import pytest

from newsdesk.chat import (
    APOLOGY,
    BOT,
    DEFAULT_RULES,
    FIND_RULES,
    GENERIC_REPLIES,
    GREETING,
    USER,
    CannedRule,
    ChatSession,
    extract_topic,
)

FIXED = datetime(2025, 8, 1, 12, 0)


def make_session(seed=0, **kwargs):
    return ChatSession(rng=random.Random(seed), clock=lambda: FIXED, **kwargs)


class TestRules:
    def test_greeting(self):
        assert make_session().generate("Hello there") == DEFAULT_RULES[0].reply

    def test_first_matching_rule_wins(self):
        # "trending" et "show me" correspondent tous deux : la tendance est testée avant.
        assert make_session().generate("show me trending stories") == DEFAULT_RULES[1].reply

    @pytest.mark.parametrize(
        ("text", "index"),
        [
            ("find tech news", 0),
            ("search politics", 1),
            ("cherche du sport", 2),
            ("search finance", 3),
            ("search xyz", 4),
        ],
    )
    def test_find_sub_rules(self, text, index):
        assert make_session().generate(text) == FIND_RULES[index].reply

    def test_date_specific_answer(self):
        assert "Katrina" in make_session().generate("August 2005")

    def test_explain_mentions_topic(self):
        answer = make_session().generate("explain quantum")
        assert "« quantum »" in answer

    def test_all_of_requires_every_word(self):
        rule = CannedRule("ok", any_of=("aug",), all_of=("2025",))
        assert rule.matches("aug 2025")
        assert not rule.matches("aug 2026")

    def test_unknown_input_uses_seeded_generic_reply(self):
        expected = random.Random(7).choice(GENERIC_REPLIES)
        assert make_session(seed=7).generate("zzz") == expected


def test_extract_topic_skips_stop_words():
    assert extract_topic("tell me about volcanoes") == "volcanoes"
    assert extract_topic("the a an") is None


class TestChatSession:
    def test_starts_with_greeting(self):
        session = make_session()
        assert [(m.id, m.sender, m.text) for m in session.messages] == [(1, BOT, GREETING)]

    def test_send_then_reply_appends_in_order(self):
        session = make_session()

        sent = session.send("hello")
        assert session.pending
        reply = session.reply("hello")

        assert sent.sender == USER
        assert reply.sender == BOT
        assert [m.id for m in session.messages] == [1, 2, 3]
        assert not session.pending
        assert reply.timestamp == FIXED

    def test_blank_input_is_ignored(self):
        session = make_session()
        assert session.send("   ") is None
        assert len(session.messages) == 1

    def test_input_is_ignored_while_reply_pending(self):
        session = make_session()
        session.send("hello")

        assert session.send("again") is None
        assert len(session.messages) == 2

    def test_failing_rule_yields_apology(self):
        def broken(text):
            raise RuntimeError("boom")

        session = make_session(rules=(CannedRule(broken),))
        session.send("anything")

        reply = session.reply("anything")

        assert reply.text == APOLOGY
        assert not session.pending
