from chartspeak.services.prompt_builder import (
    INITIAL_SECTIONS,
    build_initial_prompt,
    build_prompt,
    format_conversation,
)


def test_initial_prompt_lists_all_sections_in_order():
    prompt = build_initial_prompt()

    positions = [prompt.index(f"{idx}. **{title}**") for idx, (title, _) in enumerate(INITIAL_SECTIONS, 1)]
    assert positions == sorted(positions)
    assert "visually impaired" in prompt


def test_follow_up_selected_only_with_question_and_history():
    assert build_prompt("Why?", []).follow_up
    assert not build_prompt("Why?", None).follow_up
    assert not build_prompt(None, [{"role": "user", "content": "hi"}]).follow_up
    assert not build_prompt("", [{"role": "user", "content": "hi"}]).follow_up


def test_format_conversation_labels_speakers():
    rendered = format_conversation(
        [{"role": "user", "content": "Q1"}, {"role": "assistant", "content": "A1"}]
    )

    assert rendered == "User: Q1\n\nAssistant: A1"
