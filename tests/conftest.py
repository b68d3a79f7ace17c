#!/usr/bin/env python3
"""
Shared fixtures for analyze-pred tests.
"""

import pytest
from pathlib import Path

SEQ1 = "ACGTACGTACGTACGT"
SEQ2 = "TTTTAAAACCCCGGGG"


def write_lines(path: Path, lines) -> Path:
    """Write lines to path, one per line."""
    with open(path, 'w') as f:
        for line in lines:
            f.write(f"{line}\n")
    return path


@pytest.fixture
def fasta_file(tmp_path):
    """Two-entry reference FASTA."""
    return write_lines(tmp_path / "targets.fa", [">seq1", SEQ1, ">seq2", SEQ2])


@pytest.fixture
def psrna_file(tmp_path):
    """psRNATarget result with one hit kept and one above the cutoff."""
    return write_lines(tmp_path / "psrna.txt", [
        "# psRNATarget result",
        "miR1 seq1 0.2 . . . 4 8 AAUU UUAA",
        "miR2 seq2 3.0 . . . 4 8 AAUU UUAA",
    ])


@pytest.fixture
def tapir_file(tmp_path):
    """TAPIR report with a single hit on seq2."""
    return write_lines(tmp_path / "tapir.txt", [
        "target          seq2",
        "miRNA           miR9",
        "score           1.5",
        "mfe_ratio       0.8",
        "mfe             -20",
        "start           2",
        "seed_gap        0",
        "target_5'       AAAACC",
        "                ||||||",
        "miRNA_3'        UUUUGG",
    ])


@pytest.fixture
def psrobot_file(tmp_path):
    """psRobot report with a single hit on seq1."""
    return write_lines(tmp_path / "psrobot.txt", [
        ">seq1\tScore: 2.5\tQurey start: 1\tQurey end: 6",
        "Query:\t\t1 UGACAG 6",
        "        ||||||",
        "Sbjct:\t\t4 ACTGTC 8",
    ])


@pytest.fixture
def targetfinder_line():
    """Build a 19-column TargetFinder line."""
    def build(mirna="miR1", sequence="seq1", start="4", end="8", mfe="-12.5"):
        return " ".join([mirna] + ["x"] * 10 + [sequence, "x", "x", "x", start, end, "x", mfe])
    return build


@pytest.fixture(autouse=True)
def setup_test_environment(tmp_path, monkeypatch):
    """Run each test inside its own temporary directory."""
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def write_file(tmp_path):
    """Write a list of lines to a file under tmp_path."""
    def write(name, lines):
        return write_lines(tmp_path / name, lines)
    return write
