"""Tests for prompt construction."""

from chatagent.agents.prompts import build_augmented_prompt, format_initial_context


def test_format_initial_context():
    assert format_initial_context("Initial facts.") == (
        "**Initial Context Provided:**\n\n>Initial facts.\n\n---"
    )


def test_every_context_line_is_quoted():
    formatted = format_initial_context("line one\nline two\n\nline four")

    body = formatted.split("\n\n", 1)[1].rsplit("\n\n---", 1)[0]
    assert body.split("\n") == [">line one", ">line two", ">", ">line four"]


def test_empty_context_gives_empty_quote():
    assert format_initial_context("") == "**Initial Context Provided:**\n\n>\n\n---"


def test_format_is_deterministic():
    context = "Party A: Acme\nParty B: Globex"
    assert format_initial_context(context) == format_initial_context(context)


def test_augmented_prompt_includes_context_and_question():
    prompt = build_augmented_prompt("The lease ends in May.", "When does the lease end?")

    assert "CONTEXT:\nThe lease ends in May.\n---" in prompt
    assert prompt.rstrip().endswith("QUESTION:\nWhen does the lease end?")


def test_augmented_prompt_without_context():
    prompt = build_augmented_prompt("", "Hello?")

    assert "CONTEXT:\nNo relevant context found.\n---" in prompt
