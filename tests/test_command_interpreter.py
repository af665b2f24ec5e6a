from __future__ import annotations

import random

import pytest

from simsimi_tagalog.agent.factory import build_agent
from simsimi_tagalog.chat.handler import handle_query
from simsimi_tagalog.services.knowledge_store import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def agent(store):
    return build_agent(store, rng=random.Random(7))


def ask(agent, query):
    return handle_query(query, agent=agent)


@pytest.mark.parametrize("query", ["hello", "simsimi hi", "teach a | b", "sim", "   sim   "])
def test_non_sim_input_is_rejected_with_usage(agent, query):
    res = ask(agent, query)
    assert res["status"] == "error"
    assert res["message"].startswith("Maling command")
    assert res["usage"] == ["sim <message>", "sim teach <ask> | <answer>"]


@pytest.mark.parametrize("query", [None, "", 42, ["sim hi"], {"query": "sim hi"}])
def test_missing_or_non_text_query_is_invalid_request(agent, store, query):
    res = ask(agent, query)
    assert res == {"status": "error", "message": "Invalid request"}
    assert store.knowledge == {}


def test_teach_then_recall_matches_case_insensitively(agent):
    taught = ask(agent, "sim teach Foo | Bar")
    assert taught["status"] == "success"
    assert taught["message"] == "Natuto na ako! Salamat sa pagturo!"
    assert taught["data"] == {"ask": "foo", "answer": "Bar", "total_answers": 1}

    res = ask(agent, "sim foo")
    assert res["status"] == "success"
    assert res["message"] == "Bar"
    assert res["data"] == {"ask": "foo", "possible_answers": ["Bar"]}


def test_prefixes_are_case_insensitive_and_answer_case_is_kept(agent, store):
    res = ask(agent, "  SIM TEACH   Kumusta Ka?  |  Mabuti Naman  ")
    assert res["status"] == "success"
    assert store.knowledge == {"kumusta ka?": ["Mabuti Naman"]}

    assert ask(agent, "Sim KUMUSTA KA?")["message"] == "Mabuti Naman"


def test_teaching_same_pair_twice_does_not_duplicate(agent, store):
    ask(agent, "sim teach hi | hello")
    res = ask(agent, "sim teach HI | hello")

    assert res["status"] == "info"
    assert res["message"] == "Alam ko na yan!"
    assert res["data"] == {"ask": "hi", "answer": "hello"}
    assert store.knowledge == {"hi": ["hello"]}


def test_answers_are_matched_exactly(agent, store):
    ask(agent, "sim teach hi | hello")
    res = ask(agent, "sim teach hi | Hello")

    assert res["status"] == "success"
    assert res["data"]["total_answers"] == 2
    assert store.knowledge == {"hi": ["hello", "Hello"]}


def test_two_answers_are_both_kept_in_order_and_either_may_be_recalled(agent, store):
    ask(agent, "sim teach kain tayo | tara")
    ask(agent, "sim teach kain tayo | busog pa ako")
    assert store.knowledge["kain tayo"] == ["tara", "busog pa ako"]

    seen = set()
    for _ in range(50):
        res = ask(agent, "sim kain tayo")
        assert res["data"]["possible_answers"] == ["tara", "busog pa ako"]
        seen.add(res["message"])
    assert seen == {"tara", "busog pa ako"}


def test_recall_of_untaught_question_suggests_teaching(agent):
    res = ask(agent, "sim  Sino Ka?  ")

    assert res["status"] == "error"
    assert res["message"] == "Hindi ko alam sagot diyan! Turuan mo ako: sim teach sino ka? | <sagot mo>"
    assert res["data"] == {"ask": "sino ka?", "suggestion": "sim teach sino ka? | <iyong sagot>"}


def test_recall_of_question_with_empty_answer_list_is_unknown(store):
    store.knowledge = {"wala": []}
    agent = build_agent(store, rng=random.Random(1))

    res = ask(agent, "sim wala")
    assert res["status"] == "error"
    assert res["data"]["ask"] == "wala"


@pytest.mark.parametrize("query", ["sim teach onlyonepart", "sim teach a | b | c", "sim teach a, b"])
def test_malformed_teach_leaves_store_unchanged(agent, store, query):
    store.knowledge = {"a": ["x"]}
    res = ask(agent, query)

    assert res["status"] == "error"
    assert res["message"] == "Mali ang format. Gamitin: sim teach <tanong> | <sagot>"
    assert store.knowledge == {"a": ["x"]}


@pytest.mark.parametrize("query", ["sim teach  | answer", "sim teach question |   ", "sim teach | "])
def test_empty_question_or_answer_is_rejected(agent, store, query):
    res = ask(agent, query)

    assert res["status"] == "error"
    assert res["message"].startswith("Kailangan parehong may tanong at sagot")
    assert store.knowledge == {}


def test_sim_teach_without_body_is_a_recall():
    # "teach" with no trailing space is just a question.
    store = InMemoryStore(knowledge={"teach": ["turuan"]})
    res = ask(build_agent(store), "sim teach")
    assert res["message"] == "turuan"


def test_failed_save_reports_error_and_keeps_durable_state(store):
    store.knowledge = {"hi": ["hello"]}
    store.fail_writes = True
    agent = build_agent(store)

    res = ask(agent, "sim teach hi | kamusta")

    assert res == {"status": "error", "message": "Error sa pagsave ng database"}
    assert store.knowledge == {"hi": ["hello"]}


def test_debug_returns_trace(agent):
    res, dbg = handle_query("sim teach a | b", debug=True, agent=agent)

    assert res["status"] == "success"
    assert dbg["command"] == "TeachCommand"
    stages = [e["stage"] for e in dbg["trace"]]
    assert stages == ["input", "parse", "execute", "report", "output"]


def test_debug_trace_for_rejected_input_stops_at_guard(agent):
    _res, dbg = handle_query(None, debug=True, agent=agent)
    assert [e["stage"] for e in dbg["trace"]] == ["input", "guard"]
