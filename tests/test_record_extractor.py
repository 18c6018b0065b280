import pytest

from fair_project_ideator.core.state import Source
from fair_project_ideator.extraction import (
    dedupe_sources,
    extract_brainstorm,
    extract_project,
    parse_rankings,
    tokenize_block,
)

from conftest import SAMPLE_DOCUMENT


def test_extracts_sections_and_projects():
    document = extract_brainstorm(SAMPLE_DOCUMENT)

    assert "reshaping protein design" in document.field_analysis
    assert "- Protein folding" in document.subtopics
    assert [p.title for p in document.projects] == [
        "Folding Proteins with GANs",
        "Soil Microbes and Drought",
    ]

    first = document.projects[0]
    assert first.category == "Computational Biology and Bioinformatics (CO)"
    assert first.description.startswith("Use a [GAN]")
    assert first.description.endswith("It builds on recent work.")
    assert "| Data Availability | Good |" in first.analysis
    assert (first.impact, first.rigor, first.novelty, first.wow_factor) == (9, 7, 8, 10)
    assert first.resources == "- [Generative Adversarial Nets](https://arxiv.org/abs/1406.2661)"


def test_missing_ranking_rows_score_zero():
    second = extract_brainstorm(SAMPLE_DOCUMENT).projects[1]

    assert second.impact == 6
    assert second.novelty == 5
    assert second.rigor == 0
    assert second.wow_factor == 0


def test_document_without_separators_is_all_field_analysis():
    text = "Just some prose.\nNo structure here.\n"
    document = extract_brainstorm(text)

    assert document.field_analysis == text
    assert document.subtopics == ""
    assert document.projects == ()


def test_empty_document_degrades_to_defaults():
    document = extract_brainstorm("")
    assert document.field_analysis == ""
    assert document.subtopics == ""
    assert document.projects == ()

    assert extract_brainstorm(None).projects == ()


def test_block_without_title_is_dropped():
    text = "analysis\n---\nsubtopics\n---\n**Description:** orphan idea\n---\n**Title:** Kept\n"
    document = extract_brainstorm(text)

    assert [p.title for p in document.projects] == ["Kept"]
    assert extract_brainstorm(text) == document


def test_malformed_trailing_block_does_not_shift_preceding_projects():
    clean = extract_brainstorm(SAMPLE_DOCUMENT)
    noisy = extract_brainstorm(SAMPLE_DOCUMENT + "\n---\n\nHope these ideas help!\n")

    assert noisy.projects == clean.projects


def test_placeholders_for_missing_fields():
    project = extract_project("**Title:** Bare Idea")

    assert project.title == "Bare Idea"
    assert project.category == "N/A"
    assert project.description == "No description."
    assert project.analysis == "No analysis."
    assert project.resources == ""
    assert (project.impact, project.rigor, project.novelty, project.wow_factor) == (0, 0, 0, 0)


def test_labels_tolerate_whitespace_and_colon_placement():
    block = "   **Title**:   Spaced Out  \n  ** ISEF Category: **  Physics and Astronomy (PA)\n"
    values = tokenize_block(block)

    assert values["title"] == "Spaced Out"
    assert values["category"] == "Physics and Astronomy (PA)"


def test_labels_out_of_template_order_are_still_found():
    block = "**Key Resources:**\n- a link\n**Title:** Reordered\n**Description:** text"
    project = extract_project(block)

    assert project.title == "Reordered"
    assert project.resources == "- a link"
    assert project.description == "text"


def test_repeated_label_keeps_first_value():
    values = tokenize_block("**Title:** First\n**Title:** Second\nstray line")
    assert values["title"] == "First"


def test_parse_rankings_reads_first_one_or_two_digit_number():
    table = "\n".join(
        [
            "| Criteria | Score |",
            "| :--- | :--- |",
            "| Impact | 8/10 |",
            "| **Scientific Rigor** | 7 |",
            "| Novelty | 100 |",
            "| Wow Factor | 15 |",
        ]
    )
    scores = parse_rankings(table)

    assert scores == {"impact": 8, "rigor": 7, "novelty": 0, "wow_factor": 15}


def test_parse_rankings_ignores_unparsable_rows():
    assert parse_rankings("| Impact | high |\nnot a table") == {
        "impact": 0,
        "rigor": 0,
        "novelty": 0,
        "wow_factor": 0,
    }


def test_dedupe_sources_keeps_first_title_per_uri():
    sources = [Source("u1", "A"), Source("u1", "B"), Source("u2", "C"), Source("", "blank")]

    assert dedupe_sources(sources) == (Source("u1", "A"), Source("u2", "C"))


@pytest.mark.parametrize(
    "line",
    [
        "- **Title:** Light Traps",
        "* **Title:** Light Traps",
        "1. **Title:** Light Traps",
        "#### **Title:** Light Traps",
        "Idea 1 **Title:** Light Traps",
    ],
)
def test_labels_after_list_or_heading_prefix(line):
    project = extract_project(f"{line}\n- **ISEF Category:** Physics and Astronomy (PA)")

    assert project.title == "Light Traps"
    assert project.category == "Physics and Astronomy (PA)"


def test_leading_separator_line_does_not_shift_sections():
    document = extract_brainstorm("---\nAnalysis\n---\nSubs\n---\n**Title:** X")

    assert "Analysis" in document.field_analysis
    assert document.subtopics.strip() == "Subs"
    assert [p.title for p in document.projects] == ["X"]
