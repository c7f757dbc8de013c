import pytest

from assessment.chunking import chunk_document, detect_section_type, join_chunks, select_relevant_chunks
from assessment.core.models import DocumentChunk, SectionType


def _chunk(index: int, section: SectionType, tokens: int) -> DocumentChunk:
    return DocumentChunk(
        text=f"chunk {index}",
        page_start=1,
        page_end=1,
        chunk_index=index,
        token_estimate=tokens,
        is_introduction=section in (SectionType.ABSTRACT, SectionType.INTRODUCTION),
        is_conclusion=section in (SectionType.CONCLUSION, SectionType.DISCUSSION),
        section_type=section,
    )


def _article(paragraphs: int = 60) -> str:
    return "\n\n".join(
        f"Paragraph {i} reports measurements taken during week {i} of the observation schedule."
        for i in range(paragraphs)
    )


def test_chunk_indices_are_gap_free_and_chunks_non_empty() -> None:
    chunks = chunk_document(_article(), max_chunk_tokens=100, overlap_tokens=20)

    assert len(chunks) > 1
    assert [chunk.chunk_index for chunk in chunks] == list(range(len(chunks)))
    assert all(chunk.text.strip() for chunk in chunks)
    assert all(chunk.token_estimate == -(-len(chunk.text) // 4) for chunk in chunks)


def test_every_paragraph_survives_chunking_in_order() -> None:
    text = _article(30)
    chunks = chunk_document(text, max_chunk_tokens=60, overlap_tokens=10)
    joined = join_chunks(chunks)

    positions = [joined.find(f"Paragraph {i} reports") for i in range(30)]
    assert all(position >= 0 for position in positions)
    assert positions == sorted(positions)


def test_next_chunk_is_seeded_with_tail_of_previous() -> None:
    text = "alpha beta gamma delta\n\nepsilon zeta eta theta"

    first, second = chunk_document(text, max_chunk_tokens=10, overlap_tokens=2)

    assert first.text == "alpha beta gamma delta"
    assert second.text == "delta\n\nepsilon zeta eta theta"


def test_zero_overlap_starts_fresh_chunk() -> None:
    text = "alpha beta gamma delta\n\nepsilon zeta eta theta"

    chunks = chunk_document(text, max_chunk_tokens=10, overlap_tokens=0)

    assert [chunk.text for chunk in chunks] == ["alpha beta gamma delta", "epsilon zeta eta theta"]


def test_overlap_seed_may_exceed_chunk_bound_by_at_most_the_overlap() -> None:
    paragraph = ("word " * 2400).strip()

    chunks = chunk_document("\n\n".join([paragraph] * 3), max_chunk_tokens=3000, overlap_tokens=500)

    assert [chunk.token_estimate for chunk in chunks] == [3000, 3500, 3500]
    assert all(chunk.token_estimate <= 3000 + 500 for chunk in chunks)


def test_oversized_paragraph_is_split_on_whitespace() -> None:
    words = [f"word{i}" for i in range(200)]

    chunks = chunk_document(" ".join(words), max_chunk_tokens=25, overlap_tokens=0)

    assert len(chunks) > 1
    assert all(len(chunk.text) <= 100 for chunk in chunks)
    assert " ".join(chunk.text for chunk in chunks).split() == words


def test_page_spans_follow_character_offsets() -> None:
    chunks = chunk_document(_article(400), max_chunk_tokens=1000, overlap_tokens=0)

    assert chunks[0].page_start == 1
    assert all(chunk.page_end >= chunk.page_start for chunk in chunks)
    assert [chunk.page_start for chunk in chunks] == sorted(chunk.page_start for chunk in chunks)
    assert chunks[-1].page_end > 1


def test_empty_text_produces_no_chunks() -> None:
    assert chunk_document("") == []
    assert chunk_document("\n\n  \n\n") == []


@pytest.mark.parametrize("max_tokens, overlap", [(0, 10), (-5, 0), (100, -1)])
def test_invalid_chunk_arguments_raise(max_tokens, overlap) -> None:
    with pytest.raises(ValueError):
        chunk_document("text", max_chunk_tokens=max_tokens, overlap_tokens=overlap)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Abstract. We study the methods of results.", SectionType.ABSTRACT),
        ("1. Introduction and background", SectionType.INTRODUCTION),
        ("Related   work on this topic", SectionType.INTRODUCTION),
        ("Our methodology relied on a survey design", SectionType.METHODOLOGY),
        ("The findings were robust", SectionType.RESULTS),
        ("Limitations and future work", SectionType.DISCUSSION),
        ("In summary, we", SectionType.CONCLUSION),
        ("Bibliography", SectionType.REFERENCES),
        ("Acknowledgements go here", SectionType.OTHER),
    ],
)
def test_detect_section_type_priority(text, expected) -> None:
    assert detect_section_type(text) is expected


def test_chunk_flags_follow_section_type() -> None:
    chunks = chunk_document("Introduction to the problem\n\n" + "x " * 400 + "\n\nLimitations of the study", 100, 0)

    assert chunks[0].is_introduction
    assert chunks[-1].section_type is SectionType.DISCUSSION
    assert chunks[-1].is_conclusion


def test_selection_prioritises_introduction_then_main_then_conclusion() -> None:
    chunks = [
        _chunk(0, SectionType.INTRODUCTION, 100),
        _chunk(1, SectionType.METHODOLOGY, 400),
        _chunk(2, SectionType.RESULTS, 400),
        _chunk(3, SectionType.OTHER, 400),
        _chunk(4, SectionType.REFERENCES, 50),
        _chunk(5, SectionType.CONCLUSION, 100),
    ]

    selected = select_relevant_chunks(chunks, max_tokens=1000)

    assert [chunk.chunk_index for chunk in selected] == [0, 1, 2, 5]
    assert sum(chunk.token_estimate for chunk in selected) <= 1000


def test_introduction_kept_even_beyond_budget() -> None:
    chunks = [_chunk(0, SectionType.ABSTRACT, 2000), _chunk(1, SectionType.RESULTS, 10)]

    selected = select_relevant_chunks(chunks, max_tokens=1000)

    assert [chunk.chunk_index for chunk in selected] == [0]


def test_selection_is_returned_in_document_order() -> None:
    chunks = [
        _chunk(0, SectionType.DISCUSSION, 10),
        _chunk(1, SectionType.RESULTS, 10),
        _chunk(2, SectionType.INTRODUCTION, 10),
    ]

    selected = select_relevant_chunks(chunks)

    assert [chunk.chunk_index for chunk in selected] == [0, 1, 2]
