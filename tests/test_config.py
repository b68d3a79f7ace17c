"""Tests for analyzer configuration."""

from pathlib import Path

import pytest

from analyze_pred.config import AnalyzerConfig
from analyze_pred.exceptions import ConfigurationError


def test_defaults(psrna_file, fasta_file):
    config = AnalyzerConfig(prediction_file=psrna_file, fasta_file=fasta_file)

    assert config.upstream == 10
    assert config.downstream == 10
    assert config.evalue == 0.5
    assert config.output_dir == Path(".")
    assert config.clamp_flanks is False
    assert config.legacy_upstream is False


def test_paths_converted(psrna_file, fasta_file):
    config = AnalyzerConfig(prediction_file=str(psrna_file), fasta_file=str(fasta_file))

    assert isinstance(config.prediction_file, Path)
    assert isinstance(config.fasta_file, Path)


def test_missing_input(tmp_path, fasta_file):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig(prediction_file=tmp_path / "missing.txt", fasta_file=fasta_file)


@pytest.mark.parametrize("field,value", [
    ("upstream", -1),
    ("downstream", -5),
    ("evalue", -0.1),
    ("log_level", "LOUD"),
])
def test_invalid_values(psrna_file, fasta_file, field, value):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig(prediction_file=psrna_file, fasta_file=fasta_file, **{field: value})


def test_from_yaml(tmp_path, psrna_file, fasta_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"prediction_file: {psrna_file}\n"
        f"fasta_file: {fasta_file}\n"
        "upstream: 3\n"
        "evalue: 1.5\n"
        "log_level: debug\n"
    )

    config = AnalyzerConfig.from_yaml(config_file, downstream=4)

    assert config.upstream == 3
    assert config.downstream == 4
    assert config.evalue == 1.5
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("field,value", [
    ("upstream", "2.5"),
    ("downstream", "'3'"),
    ("upstream", "true"),
    ("evalue", "'low'"),
])
def test_from_yaml_rejects_wrong_types(tmp_path, psrna_file, fasta_file, field, value):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"prediction_file: {psrna_file}\nfasta_file: {fasta_file}\n{field}: {value}\n"
    )

    with pytest.raises(ConfigurationError) as exc_info:
        AnalyzerConfig.from_yaml(config_file)

    assert exc_info.value.parameter == field


def test_from_yaml_unknown_key(tmp_path, psrna_file, fasta_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"prediction_file: {psrna_file}\nfasta_file: {fasta_file}\nthreads: 4\n"
    )

    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_yaml(config_file)


def test_from_yaml_invalid(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("upstream: [1, 2\n")

    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_yaml(config_file)


def test_from_args(psrna_file, fasta_file):
    args = {
        "prediction": psrna_file,
        "fasta": fasta_file,
        "upstream": 2,
        "downstream": None,
        "evalue": 0.3,
        "clamp_flanks": False,
        "log_level": None,
    }
    config = AnalyzerConfig.from_args(args)

    assert config.upstream == 2
    assert config.downstream == 10
    assert config.evalue == 0.3


def test_from_args_requires_inputs(fasta_file):
    with pytest.raises(ConfigurationError):
        AnalyzerConfig.from_args({"fasta": fasta_file})


def test_from_args_over_yaml(tmp_path, psrna_file, fasta_file):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"prediction_file: {psrna_file}\nfasta_file: {fasta_file}\n"
        "upstream: 3\nclamp_flanks: true\n"
    )

    config = AnalyzerConfig.from_args(
        {"upstream": 7, "clamp_flanks": False}, config_file=config_file
    )

    assert config.upstream == 7
    # unset store_true flags leave the file value alone
    assert config.clamp_flanks is True
