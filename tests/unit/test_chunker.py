import pytest

from rag.chunker import chunk_text


def _reassemble(chunks, overlap):
    text = chunks[0]
    for chunk in chunks[1:]:
        text += chunk[overlap:]
    return text


@pytest.mark.parametrize("length", [1, 899, 900, 901, 1650, 2000, 5003])
def test_chunks_cover_text_exactly_once(length):
    text = "".join(chr(ord("a") + (i % 26)) for i in range(length))
    chunks = chunk_text(text)

    assert _reassemble(chunks, 150) == text
    assert all(len(chunk) <= 900 for chunk in chunks)
    last_start = (len(chunks) - 1) * 750
    assert last_start + len(chunks[-1]) == len(text)


def test_empty_and_whitespace_input():
    assert chunk_text("") == []
    assert chunk_text("   ") == []
    assert chunk_text(None) == []


def test_two_thousand_characters_make_three_windows():
    chunks = chunk_text("A" * 2000)

    assert [len(chunk) for chunk in chunks] == [900, 900, 500]


def test_line_endings_are_normalized_and_trimmed():
    chunks = chunk_text("  one\r\ntwo\rthree  \n")

    assert chunks == ["one\ntwo\nthree"]


def test_custom_sizes_split_mid_word():
    assert chunk_text("abcdefghij", chunk_size=4, overlap=1) == ["abcd", "defg", "ghij"]


def test_overlap_must_be_smaller_than_chunk_size():
    with pytest.raises(ValueError):
        chunk_text("abc", chunk_size=10, overlap=10)
