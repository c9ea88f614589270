from __future__ import annotations

import json

import pytest

from newsquiz.application.services.quiz_parser import parse_questions
from newsquiz.domain.phases.exceptions import MalformedQuizError


def _canonical(count: int = 3) -> list[dict[str, object]]:
    return [
        {
            "prompt": f"Question {i}?",
            "options": {"A": f"a{i}", "B": f"b{i}", "C": f"c{i}", "D": f"d{i}"},
            "correct": "ABCD"[i % 4],
        }
        for i in range(count)
    ]


def test_parses_canonical_shape() -> None:
    questions = parse_questions(json.dumps(_canonical()))

    assert len(questions) == 3
    assert questions[0].prompt == "Question 0?"
    assert questions[1].options["B"] == "b1"
    assert [q.correct for q in questions] == ["A", "B", "C"]


def test_repairs_legacy_flat_shape() -> None:
    legacy = [
        {
            "q": f"Pergunta {i}?",
            "a": "um",
            "b": "dois",
            "c": "tres",
            "d": "quatro",
            "resposta": "c",
        }
        for i in range(3)
    ]

    questions = parse_questions(json.dumps(legacy))

    assert questions[2].prompt == "Pergunta 2?"
    assert questions[0].options == {"A": "um", "B": "dois", "C": "tres", "D": "quatro"}
    assert all(q.correct == "C" for q in questions)


def test_accepts_fenced_wrapped_payload_with_prose() -> None:
    body = json.dumps({"questions": _canonical()})
    text = f"Here you go:\n```json\n{body}\n```\nGood luck!"

    questions = parse_questions(text)

    assert len(questions) == 3


def test_maps_option_list_and_text_answer() -> None:
    items = [
        {
            "question": "Capital of Kenya?",
            "options": ["Lima", "Nairobi", "Oslo", "Rome"],
            "answer": "Nairobi",
        }
    ] * 3

    questions = parse_questions(json.dumps(items))

    assert questions[0].options["B"] == "Nairobi"
    assert questions[0].correct == "B"


def test_normalizes_decorated_labels() -> None:
    items = _canonical()
    items[0]["options"] = {"a)": "x", "(b)": "y", "C.": "z", "d": "w"}
    items[0]["correct"] = "b)"

    questions = parse_questions(json.dumps(items))

    assert questions[0].options == {"A": "x", "B": "y", "C": "z", "D": "w"}
    assert questions[0].correct == "B"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "I cannot help with that.",
        json.dumps(_canonical(2)),
        json.dumps(_canonical(4)),
        json.dumps({"quiz": _canonical()}),
        "[" * 100_000 + "]" * 100_000,
        "Here you go: " + '{"a": ' * 50_000 + "1" + "}" * 50_000,
    ],
)
def test_rejects_wrong_shape(text: str) -> None:
    with pytest.raises(MalformedQuizError):
        parse_questions(text)


def test_rejects_missing_option() -> None:
    items = _canonical()
    del items[1]["options"]["D"]

    with pytest.raises(MalformedQuizError):
        parse_questions(json.dumps(items))


def test_rejects_duplicate_options() -> None:
    items = _canonical()
    items[2]["options"] = {"A": "same", "B": "Same", "C": "x", "D": "y"}

    with pytest.raises(MalformedQuizError):
        parse_questions(json.dumps(items))


def test_rejects_unknown_correct_label() -> None:
    items = _canonical()
    items[0]["correct"] = "E"

    with pytest.raises(MalformedQuizError):
        parse_questions(json.dumps(items))


def test_rejects_empty_prompt() -> None:
    items = _canonical()
    items[0]["prompt"] = "   "

    with pytest.raises(MalformedQuizError):
        parse_questions(json.dumps(items))
