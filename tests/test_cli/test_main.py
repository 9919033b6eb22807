from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from exomiser_jobs.cli import main

SAMPLE = """
vcf: examples/Pfeiffer.vcf
proband: manuel
hpoIds:
  - "HP:0001156"
"""


def _write_config(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


def test_main_prints_jobs_as_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample_path = _write_config(tmp_path / "sample.yml", SAMPLE)

    exit_code = main.main(["--sample", str(sample_path), "--preset", "GENOME", "--format", "json"])

    assert exit_code == 0
    documents = json.loads(capsys.readouterr().out)
    assert documents == [
        {
            "preset": "GENOME",
            "outputOptions": {
                "outputPrefix": "",
                "outputFormats": ["HTML", "JSON"],
                "numGenes": 0,
                "outputContributingVariantsOnly": False,
            },
            "sample": {
                "genomeAssembly": "",
                "vcf": "examples/Pfeiffer.vcf",
                "ped": "",
                "proband": "manuel",
                "hpoIds": ["HP:0001156"],
                "sex": "",
            },
        }
    ]


def test_main_prints_batch_as_yaml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    first = _write_config(tmp_path / "first.yml", "sample:\n  vcf: first.vcf\n")
    second = _write_config(tmp_path / "second.yml", "phenopacket:\n  id: second\n")
    batch = _write_config(tmp_path / "batch.txt", f"{first}\n{second}\n")

    exit_code = main.main(["--analysis-batch", str(batch), "--format", "yaml"])

    assert exit_code == 0
    documents = yaml.safe_load(capsys.readouterr().out)
    assert [doc["sample"]["vcf"] if "sample" in doc else doc["phenopacket"]["id"] for doc in documents] == [
        "first.vcf",
        "second",
    ]


def test_main_prints_table_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    sample_path = _write_config(tmp_path / "sample.yml", SAMPLE)

    exit_code = main.main(["--sample", str(sample_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Resolved Jobs" in out
    assert "EXOME" in out


def test_main_reports_invalid_option_combination(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--preset", "genome"])

    assert excinfo.value.code == 2
    assert "No sample specified!" in capsys.readouterr().err


def test_main_returns_error_for_unparseable_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    job_path = _write_config(tmp_path / "job.yml", "unknownKey: 1\n")

    exit_code = main.main(["--job", str(job_path)])

    assert exit_code == 1
    assert "Unable to parse job from file" in caplog.text


def test_main_returns_error_for_missing_file(tmp_path: Path) -> None:
    assert main.main(["--sample", str(tmp_path / "missing.yml")]) == 1


def test_main_returns_error_for_unreadable_batch_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    exit_code = main.main(["--analysis-batch", str(tmp_path)])

    assert exit_code == 1
    assert "Failed to read batch file" in caplog.text


def test_main_passes_dashed_options_to_resolver(monkeypatch, tmp_path: Path) -> None:
    captured: dict[str, str | None] = {}

    def _fake_resolve(option_values):
        captured.update(option_values)
        return []

    monkeypatch.setattr("exomiser_jobs.cli.main.resolve_jobs", _fake_resolve)

    assert main.main(["--analysis-batch", "batch.txt", "--format", "json"]) == 0
    assert captured == {
        "analysis": None,
        "analysis-batch": "batch.txt",
        "job": None,
        "sample": None,
        "preset": None,
        "output": None,
    }
