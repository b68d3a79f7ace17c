"""Tests for the tab-separated record writer."""

import pytest

from analyze_pred.core.writer import RecordWriter
from analyze_pred.exceptions import ConfigurationError, OutputFileError
from analyze_pred.models import ContextRecord, PredictionRecord


def make_context(label="seq1", score=0.2):
    record = PredictionRecord(
        target_id="seq1", query_id="miR1", score=score, start=4, end=8, label=label
    )
    return ContextRecord(
        identifier="seq1",
        core_sequence="ACGT",
        full_sequence="ACGTACGTACGTACGT",
        upstream_sequence="GT",
        downstream_sequence="AC",
        prediction=record,
    )


def test_one_line_per_record(tmp_path):
    writer = RecordWriter(["label", "core", "full", "upstream", "downstream"])
    output = tmp_path / "out.tsv"

    count = writer.write(output, [make_context("a"), make_context("b")])

    assert count == 2
    assert output.read_text() == (
        "a\tACGT\tACGTACGTACGTACGT\tGT\tAC\n"
        "b\tACGT\tACGTACGTACGTACGT\tGT\tAC\n"
    )


def test_every_record_ends_with_newline(tmp_path):
    writer = RecordWriter(["label", "core"])
    output = tmp_path / "out.tsv"
    writer.write(output, [make_context() for _ in range(3)])

    content = output.read_text()
    assert content.count("\n") == 3
    assert content.endswith("\n")


def test_score_column():
    writer = RecordWriter(["label", "score", "core"])

    assert writer.format_row(make_context(score=2.5)) == "seq1\t2.5\tACGT\n"


def test_truncates_existing_file(tmp_path):
    output = tmp_path / "out.tsv"
    output.write_text("old content\n" * 5)

    RecordWriter(["label"]).write(output, [make_context()])

    assert output.read_text() == "seq1\n"


def test_empty_record_set_creates_empty_file(tmp_path):
    output = tmp_path / "out.tsv"

    assert RecordWriter(["label"]).write(output, []) == 0
    assert output.exists()
    assert output.read_text() == ""


def test_unknown_column_rejected():
    with pytest.raises(ConfigurationError):
        RecordWriter(["label", "nope"])


def test_unwritable_path(tmp_path):
    with pytest.raises(OutputFileError):
        RecordWriter(["label"]).write(tmp_path / "missing" / "out.tsv", [make_context()])
