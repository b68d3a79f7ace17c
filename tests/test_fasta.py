"""Tests for the FASTA reference loader."""

import pytest

from analyze_pred.core.fasta import FastaIndex
from analyze_pred.exceptions import InputFileError
from analyze_pred.models import SequenceRecord


def test_load_keys_match_headers(fasta_file):
    index = FastaIndex.load(fasta_file)

    assert list(index) == ["seq1", "seq2"]
    assert index.get("seq1") == "ACGTACGTACGTACGT"
    assert index.get("seq2") == "TTTTAAAACCCCGGGG"
    assert len(index) == 2


def test_multiline_sequences_are_concatenated(write_file):
    path = write_file("multi.fa", [">chr1", "ACGT", "TTGG", "", ">chr2", "CC"])
    index = FastaIndex.load(path)

    assert index.get("chr1") == "ACGTTTGG"
    assert index.get("chr2") == "CC"


def test_identifier_keeps_everything_after_marker(write_file):
    path = write_file("desc.fa", [">AT1G01010.1 | NAC domain", "ACGT"])
    index = FastaIndex.load(path)

    assert "AT1G01010.1 | NAC domain" in index
    assert "AT1G01010.1" not in index


def test_duplicate_identifier_keeps_first(write_file):
    path = write_file("dup.fa", [">seq1", "AAAA", ">seq1", "CCCC"])
    index = FastaIndex.load(path)

    assert index.get("seq1") == "AAAA"
    assert index.duplicates == 1
    assert len(index) == 1


def test_lines_before_first_header_are_ignored(write_file):
    path = write_file("orphan.fa", ["GGGG", ">seq1", "ACGT"])
    index = FastaIndex.load(path)

    assert index.to_dict() == {"seq1": "ACGT"}


def test_crlf_line_endings(tmp_path):
    path = tmp_path / "crlf.fa"
    path.write_bytes(b">seq1\r\nACGT\r\n")
    index = FastaIndex.load(path)

    assert index.get("seq1") == "ACGT"


def test_missing_file_raises_ioerror(tmp_path):
    with pytest.raises(InputFileError) as exc_info:
        FastaIndex.load(tmp_path / "missing.fa")

    assert isinstance(exc_info.value, IOError)
    assert "missing.fa" in str(exc_info.value)


def test_undecodable_bytes_raise_ioerror(tmp_path):
    path = tmp_path / "binary.fa"
    path.write_bytes(b">seq1\nACGT\xff\xfeACGT\n")

    with pytest.raises(InputFileError) as exc_info:
        FastaIndex.load(path)

    assert isinstance(exc_info.value, IOError)
    assert "binary.fa" in str(exc_info.value)


def test_record_lookup():
    index = FastaIndex([SequenceRecord("a", "ACGT")])

    assert index.record("a") == SequenceRecord("a", "ACGT")
    assert index.record("b") is None
    assert index.get("b") is None
